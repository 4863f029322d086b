"""Resolve an entity from either a stable identifier or a non-unique display name.

Cardinality policy for name lookups:
- no candidates -> ``NotFoundError``
- one candidate -> that entity
- multiple candidates -> an ordered ``id -> entity`` index handed to the injected
  ``CandidateSelector``; the resolver never picks one itself
"""

from __future__ import annotations

import re
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import AmbiguousMatchError, InvalidArgumentError, NotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .ports import CandidateSelector, EntityLookup

log = getLogger(__name__)

_GUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_valid_guid(value: str) -> bool:
    return bool(_GUID_RE.fullmatch(value))


def require_guid(value: str) -> str:
    if not is_valid_guid(value):
        raise InvalidArgumentError(f"{value} is not a valid GUID")
    return value


def index_candidates[T](candidates: Iterable[T], *, key: Callable[[T], str]) -> dict[str, T]:
    """Key candidates by identifier, keeping the first-seen order."""

    index: dict[str, T] = {}
    for candidate in candidates:
        index.setdefault(key(candidate), candidate)
    return index


def raise_on_ambiguity[T](message: str, candidates: Mapping[str, T]) -> T:
    found = ", ".join(candidates)
    raise AmbiguousMatchError(f"{message} Found: {found}.", candidates=candidates)


def _entity_id(entity: object) -> str:
    return str(entity.id)  # type: ignore[attr-defined]


class EntityResolver[T]:
    """Zero/one/many resolution over an ``EntityLookup``."""

    def __init__(
        self,
        lookup: EntityLookup[T],
        *,
        noun: str,
        plural: str | None = None,
        key: Callable[[T], str] = _entity_id,
        selector: CandidateSelector[T] | None = None,
    ) -> None:
        self._lookup = lookup
        self._noun = noun
        self._plural = plural or f"{noun}s"
        self._key = key
        self._selector: CandidateSelector[T] = selector or raise_on_ambiguity

    async def resolve(self, *, entity_id: str | None = None, display_name: str | None = None) -> T:
        if entity_id is not None and display_name is None:
            return await self.resolve_by_id(entity_id)
        if display_name is not None and entity_id is None:
            return await self.resolve_by_name(display_name)
        raise InvalidArgumentError("Specify either an id or a display name, but not both")

    async def resolve_by_id(self, entity_id: str) -> T:
        require_guid(entity_id)
        log.debug("Looking up %s by id %s", self._noun, entity_id)
        return await self._lookup.fetch_by_id(entity_id)

    async def resolve_by_name(self, display_name: str) -> T:
        log.debug("Looking up %s by display name %r", self._noun, display_name)
        matches = list(await self._lookup.find_by_display_name(display_name))

        if not matches:
            raise NotFoundError(
                f"The specified {self._noun} '{display_name}' does not exist.",
                key=display_name,
            )

        if len(matches) == 1:
            return matches[0]

        candidates = index_candidates(matches, key=self._key)
        if len(candidates) == 1:
            return next(iter(candidates.values()))
        log.debug("Found %d %s named %r", len(candidates), self._plural, display_name)
        return self._selector(
            f"Multiple {self._plural} with name '{display_name}' found.",
            candidates,
        )
