"""Logging setup for the tenantcli command line."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Route log records to stderr so that stdout carries only command output.

    The command line passes WARNING, or DEBUG under ``--debug`` to log every remote
    call. ``force`` replaces handlers installed earlier, as ``logging.basicConfig`` does.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
