"""Correlate a decoded batch response array back to the caller's result."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from tenantcli.domain.errors import MalformedResponseError, RemoteOperationError

from .schema import ErrorInfo

if TYPE_CHECKING:
    from collections.abc import Sequence

log = getLogger(__name__)

ERROR_INFO_KEY = "ErrorInfo"


@dataclass(frozen=True, slots=True)
class ResponseSlots:
    """Positions of the error element and of the result element in a response array.

    Both graph shapes in ``queries`` put the response header first and the final
    query's materialised value last.
    """

    error: int = 0
    result: int = -1


def correlate(response: Sequence[object], slots: ResponseSlots | None = None) -> object:
    """Return the result element, or raise ``RemoteOperationError`` for an error element.

    Only a mapping with a non-null ``ErrorInfo`` at the error slot fails the batch;
    any other value there is a placeholder. When it fails, no other element is read.
    """

    slots = slots or ResponseSlots()
    header = _element(response, slots.error)
    if isinstance(header, Mapping):
        payload = header.get(ERROR_INFO_KEY)
        if payload is not None:
            raise _remote_error(payload)
    return _element(response, slots.result)


def _remote_error(payload: object) -> RemoteOperationError:
    try:
        info = ErrorInfo.model_validate(payload)
    except ValidationError:
        log.debug("Batch failed with unrecognised error payload: %r", payload)
        return RemoteOperationError(f"The batch request failed: {payload}")

    log.debug(
        "Batch failed: %s (%s, correlation %s)",
        info.error_message,
        info.error_type_name,
        info.trace_correlation_id,
    )
    return RemoteOperationError(
        info.describe(),
        code=info.error_code,
        type_name=info.error_type_name,
        correlation_id=info.trace_correlation_id,
    )


def _element(response: Sequence[object], index: int) -> object:
    try:
        return response[index]
    except IndexError:
        raise MalformedResponseError(
            f"Batch response has {len(response)} element(s), expected one at index {index}"
        ) from None
