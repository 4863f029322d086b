"""Failure taxonomy shared by the directory and object-path layers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class TenantCliError(RuntimeError):
    """Base class for failures surfaced to the invoking command."""


class InvalidArgumentError(TenantCliError, ValueError):
    """Raised before any network call when an argument is malformed or conflicting."""


class NotFoundError(TenantCliError):
    """Raised when a lookup yields no entity."""

    def __init__(self, message: str, *, key: str) -> None:
        super().__init__(message)
        self.key = key


class AmbiguousMatchError(TenantCliError):
    """Raised when a lookup yields several entities and none could be selected."""

    def __init__(self, message: str, *, candidates: Mapping[str, object]) -> None:
        super().__init__(message)
        self.candidates = dict(candidates)


class DigestUnavailableError(TenantCliError):
    """Raised when the anti-forgery request digest cannot be obtained."""


class MalformedResponseError(TenantCliError):
    """Raised when a batch response is not a JSON array of the expected shape."""


class RemoteOperationError(TenantCliError):
    """Raised when the object-path service reports an error element."""

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        type_name: str | None = None,
        correlation_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.type_name = type_name
        self.correlation_id = correlation_id


class ProtocolError(TenantCliError):
    """Raised on transport failures and non-2xx responses."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "AmbiguousMatchError",
    "DigestUnavailableError",
    "InvalidArgumentError",
    "MalformedResponseError",
    "NotFoundError",
    "ProtocolError",
    "RemoteOperationError",
    "TenantCliError",
]
