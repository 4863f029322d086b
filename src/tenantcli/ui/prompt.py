"""Interactive selection among ambiguous lookup candidates."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tenantcli.domain.errors import AmbiguousMatchError

if TYPE_CHECKING:
    from collections.abc import Mapping


def prompt_for_candidate[T](message: str, candidates: Mapping[str, T]) -> T:
    """Ask the operator to pick one of ``candidates`` by its 1-based position.

    Everything is written to stderr so that stdout keeps only the command's result.
    Invalid answers are asked again; end of input or Ctrl+C abandons the choice.
    """

    keys = list(candidates)
    click.echo(message, err=True)
    for position, key in enumerate(keys, start=1):
        click.echo(f"  {position}. {key}", err=True)

    try:
        choice = click.prompt(
            "Please choose one",
            type=click.IntRange(1, len(keys)),
            err=True,
        )
    except click.Abort:
        found = ", ".join(keys)
        raise AmbiguousMatchError(f"{message} Found: {found}.", candidates=candidates) from None

    return candidates[keys[choice - 1]]
