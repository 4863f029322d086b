"""Public interface for the directory service adapter."""

from __future__ import annotations

from .client import DirectoryClient, DirectoryCollection
from .odata import eq_filter, quote_string
from .schema import AdministrativeUnit, CollectionPage, DirectoryObject

ADMINISTRATIVE_UNITS = "directory/administrativeUnits"

__all__ = [
    "ADMINISTRATIVE_UNITS",
    "AdministrativeUnit",
    "CollectionPage",
    "DirectoryClient",
    "DirectoryCollection",
    "DirectoryObject",
    "eq_filter",
    "quote_string",
]
