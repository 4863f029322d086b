"""Public interface for the object-path adapter."""

from __future__ import annotations

from .actions import (
    Action,
    ActionGraph,
    ActionKind,
    BatchPayload,
    Parameter,
    Property,
    QueryProperty,
    QueryShape,
    Scalar,
    ValueType,
    escape_xml,
)
from .client import ObjectPathClient
from .correlation import ResponseSlots, correlate
from .digest import CachedDigestProvider, ContextInfoDigestProvider
from .queries import deleted_site_properties_query, site_properties_query
from .schema import SiteProperties, SitePropertiesEnumerable

__all__ = [
    "Action",
    "ActionGraph",
    "ActionKind",
    "BatchPayload",
    "CachedDigestProvider",
    "ContextInfoDigestProvider",
    "ObjectPathClient",
    "Parameter",
    "Property",
    "QueryProperty",
    "QueryShape",
    "ResponseSlots",
    "Scalar",
    "SiteProperties",
    "SitePropertiesEnumerable",
    "ValueType",
    "correlate",
    "deleted_site_properties_query",
    "escape_xml",
    "site_properties_query",
]
