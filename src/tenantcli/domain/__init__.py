"""Pure policy shared by the remote adapters."""

from __future__ import annotations

from .errors import (
    AmbiguousMatchError,
    DigestUnavailableError,
    InvalidArgumentError,
    MalformedResponseError,
    NotFoundError,
    ProtocolError,
    RemoteOperationError,
    TenantCliError,
)
from .ports import CandidateSelector, DigestProvider, EntityLookup, RequestDigest
from .resolution import EntityResolver, index_candidates, is_valid_guid, raise_on_ambiguity

__all__ = [
    "AmbiguousMatchError",
    "CandidateSelector",
    "DigestProvider",
    "DigestUnavailableError",
    "EntityLookup",
    "EntityResolver",
    "InvalidArgumentError",
    "MalformedResponseError",
    "NotFoundError",
    "ProtocolError",
    "RemoteOperationError",
    "RequestDigest",
    "TenantCliError",
    "index_candidates",
    "is_valid_guid",
    "raise_on_ambiguity",
]
