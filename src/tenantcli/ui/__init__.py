"""Operator-facing interaction helpers."""

from __future__ import annotations

from .prompt import prompt_for_candidate

__all__ = ["prompt_for_candidate"]
