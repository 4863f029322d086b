"""Ports implemented by the remote adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import datetime


@runtime_checkable
class EntityLookup[T](Protocol):
    """Point and name lookups against one remote collection."""

    async def fetch_by_id(self, entity_id: str) -> T: ...

    async def find_by_display_name(self, display_name: str) -> Sequence[T]:
        """Return every entity whose display name equals ``display_name``.

        Implementations drain all pages before returning.
        """
        ...


class CandidateSelector[T](Protocol):
    """Pick exactly one entity out of an ordered ``key -> entity`` index."""

    def __call__(self, message: str, candidates: Mapping[str, T]) -> T: ...


@dataclass(frozen=True, slots=True)
class RequestDigest:
    value: str
    expires_at: datetime


@runtime_checkable
class DigestProvider(Protocol):
    async def get_digest(self, endpoint: str) -> RequestDigest: ...


__all__ = ["CandidateSelector", "DigestProvider", "EntityLookup", "RequestDigest"]
