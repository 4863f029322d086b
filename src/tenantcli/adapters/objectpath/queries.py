"""Canonical request graphs against the tenant administration object model."""

from __future__ import annotations

from .actions import (
    ActionGraph,
    BatchPayload,
    Parameter,
    Property,
    QueryProperty,
    QueryShape,
    Scalar,
)
from .correlation import ResponseSlots

TENANT_TYPE_ID = "{268004ae-ef6b-4e9b-8425-127220d84719}"
SITE_PROPERTIES_FILTER_TYPE_ID = "{b92aeee2-c92c-4b67-abcc-024e471bc140}"

GET_SITE_PROPERTIES = "GetSitePropertiesFromSharePointByFilters"
GET_DELETED_SITE_PROPERTIES = "GetDeletedSitePropertiesFromSharePoint"
NEXT_START_INDEX = "NextStartIndexFromSharePoint"

# Response header first, materialised enumerable last.
SITE_PROPERTIES_SLOTS = ResponseSlots(error=0, result=-1)


def site_properties_query(
    *,
    application_name: str,
    filter: str = "",  # noqa: A002
    template: str = "",
    include_personal_sites: bool = False,
    include_detail: bool = False,
    start_index: str = "0",
) -> BatchPayload:
    """Tenant -> GetSitePropertiesFromSharePointByFilters -> query with child items."""

    graph = ActionGraph(start_id=1)
    tenant = graph.construct(TENANT_TYPE_ID)
    filters = Parameter.typed(
        SITE_PROPERTIES_FILTER_TYPE_ID,
        (
            Property("Filter", Scalar.string(filter)),
            Property("IncludeDetail", Scalar.boolean(include_detail)),
            Property("IncludePersonalSite", Scalar.enum(1 if include_personal_sites else 0)),
            Property("StartIndex", Scalar.string(start_index)),
            Property("Template", Scalar.string(template)),
        ),
    )
    sites = graph.call(tenant, GET_SITE_PROPERTIES, (filters,))
    graph.query(sites, QueryShape(child_items=QueryShape()))
    return graph.build(application_name=application_name, slots=SITE_PROPERTIES_SLOTS)


def deleted_site_properties_query(*, application_name: str) -> BatchPayload:
    """Tenant -> GetDeletedSitePropertiesFromSharePoint -> query with child items.

    The enumerable's continuation index is requested as a scalar property.
    """

    graph = ActionGraph(start_id=3)
    tenant = graph.construct(TENANT_TYPE_ID)
    sites = graph.call(tenant, GET_DELETED_SITE_PROPERTIES, (Parameter.null(),))
    graph.query(
        sites,
        QueryShape(
            properties=(QueryProperty(NEXT_START_INDEX, scalar=True),),
            child_items=QueryShape(),
        ),
    )
    return graph.build(application_name=application_name, slots=SITE_PROPERTIES_SLOTS)
