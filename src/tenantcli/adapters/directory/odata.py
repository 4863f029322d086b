"""OData query-language helpers."""

from __future__ import annotations


def quote_string(value: str) -> str:
    """Return ``value`` as an OData string literal.

    Single quotes are escaped by doubling them, so ``O'Brien`` becomes ``'O''Brien'``.
    Percent-encoding is left to the HTTP layer.
    """

    return "'" + value.replace("'", "''") + "'"


def eq_filter(field: str, value: str) -> str:
    return f"{field} eq {quote_string(value)}"
