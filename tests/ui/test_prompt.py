from __future__ import annotations

import click.termui
import pytest

from tenantcli.domain.errors import AmbiguousMatchError
from tenantcli.ui import prompt_for_candidate

CANDIDATES = {"id-a": "unit A", "id-b": "unit B", "id-c": "unit C"}
MESSAGE = "Multiple administrative units with name 'Sales' found."


@pytest.fixture
def answers(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Queue of replies read by ``click.prompt``; an empty queue is end of input."""

    queue: list[str] = []

    def read(_prompt: str) -> str:
        if not queue:
            raise EOFError
        return queue.pop(0)

    monkeypatch.setattr(click.termui, "visible_prompt_func", read)
    return queue


def test_returns_chosen_candidate(answers: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    answers.append("2")

    chosen = prompt_for_candidate(MESSAGE, CANDIDATES)

    assert chosen == "unit B"
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.splitlines()[:4] == [MESSAGE, "  1. id-a", "  2. id-b", "  3. id-c"]
    assert "Please choose one" in captured.err


def test_asks_again_after_invalid_answers(
    answers: list[str],
    capsys: pytest.CaptureFixture[str],
) -> None:
    answers.extend(["0", "four", "3"])

    assert prompt_for_candidate(MESSAGE, CANDIDATES) == "unit C"
    assert answers == []
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.count("Error:") == 2


def test_end_of_input_is_ambiguous(answers: list[str]) -> None:
    answers.extend(["9"])

    with pytest.raises(AmbiguousMatchError) as info:
        prompt_for_candidate(MESSAGE, CANDIDATES)

    assert str(info.value) == f"{MESSAGE} Found: id-a, id-b, id-c."
    assert list(info.value.candidates) == list(CANDIDATES)
