"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from tenantcli.adapters.directory import (
    ADMINISTRATIVE_UNITS,
    AdministrativeUnit,
    DirectoryClient,
    DirectoryCollection,
)
from tenantcli.adapters.objectpath import (
    CachedDigestProvider,
    ContextInfoDigestProvider,
    ObjectPathClient,
    SiteProperties,
    SitePropertiesEnumerable,
    deleted_site_properties_query,
    site_properties_query,
)
from tenantcli.config import get_directory_config, get_objectpath_config
from tenantcli.domain.errors import MalformedResponseError
from tenantcli.domain.resolution import EntityResolver

if TYPE_CHECKING:
    from collections.abc import Callable

    from tenantcli.adapters.http_resilience import ResilientClient
    from tenantcli.config import DirectoryConfig, ObjectPathConfig, ResilienceConfig
    from tenantcli.domain.ports import CandidateSelector

type ClientFactory = Callable[[ResilienceConfig], ResilientClient]

log = getLogger(__name__)


def get_administrative_unit(
    *,
    entity_id: str | None = None,
    display_name: str | None = None,
    selector: CandidateSelector[AdministrativeUnit] | None = None,
    config: DirectoryConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> AdministrativeUnit:
    """Resolve one administrative unit by id or by display name."""

    effective_config = config or get_directory_config()
    return asyncio.run(
        resolve_administrative_unit(
            entity_id=entity_id,
            display_name=display_name,
            selector=selector,
            config=effective_config,
            client_factory=client_factory,
        )
    )


async def resolve_administrative_unit(
    *,
    entity_id: str | None,
    display_name: str | None,
    config: DirectoryConfig,
    selector: CandidateSelector[AdministrativeUnit] | None = None,
    client_factory: ClientFactory | None = None,
) -> AdministrativeUnit:
    client = DirectoryClient(config=config, client_factory=client_factory)
    resolver = EntityResolver(
        DirectoryCollection(client, ADMINISTRATIVE_UNITS, AdministrativeUnit),
        noun="administrative unit",
        selector=selector,
    )
    unit = await resolver.resolve(entity_id=entity_id, display_name=display_name)
    log.info("Resolved administrative unit %s (%s)", unit.id, unit.display_name)
    return unit


def list_sites(
    *,
    web_template: str = "",
    filter: str = "",  # noqa: A002
    deleted: bool = False,
    include_onedrive_sites: bool = False,
    config: ObjectPathConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> list[SiteProperties]:
    """List site collections of the tenant through the object-path service."""

    effective_config = config or get_objectpath_config()
    return asyncio.run(
        collect_sites(
            web_template=web_template,
            filter=filter,
            deleted=deleted,
            include_onedrive_sites=include_onedrive_sites,
            config=effective_config,
            client_factory=client_factory,
        )
    )


async def collect_sites(
    *,
    config: ObjectPathConfig,
    web_template: str = "",
    filter: str = "",  # noqa: A002
    deleted: bool = False,
    include_onedrive_sites: bool = False,
    client_factory: ClientFactory | None = None,
) -> list[SiteProperties]:
    digests = CachedDigestProvider(
        ContextInfoDigestProvider(config.resilience, client_factory=client_factory)
    )
    client = ObjectPathClient(config=config, digest_provider=digests, client_factory=client_factory)

    if deleted:
        log.info("Retrieving list of deleted site collections...")
        payload = deleted_site_properties_query(application_name=config.application_name)
        return _as_enumerable(await client.run(payload)).child_items

    log.info("Retrieving list of site collections...")
    sites: list[SiteProperties] = []
    start_index = "0"
    while True:
        payload = site_properties_query(
            application_name=config.application_name,
            filter=filter,
            template=web_template,
            include_personal_sites=include_onedrive_sites,
            start_index=start_index,
        )
        enumerable = _as_enumerable(await client.run(payload))
        sites.extend(enumerable.child_items)
        next_index = enumerable.next_start_index
        if next_index is None or next_index == start_index:
            break
        log.debug("Continuing site listing from index %s", next_index)
        start_index = next_index

    log.info("Retrieved %d site collection(s)", len(sites))
    return sites


def _as_enumerable(result: object) -> SitePropertiesEnumerable:
    try:
        return SitePropertiesEnumerable.model_validate(result)
    except ValidationError as exc:
        raise MalformedResponseError(f"Unexpected site properties payload: {exc}") from exc
