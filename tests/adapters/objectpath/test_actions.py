from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from tenantcli.adapters.objectpath import (
    ActionGraph,
    ActionKind,
    BatchPayload,
    Parameter,
    Property,
    QueryShape,
    Scalar,
    deleted_site_properties_query,
    escape_xml,
    site_properties_query,
)
from tenantcli.adapters.objectpath.actions import CLIENT_QUERY_NAMESPACE

NS = {"q": CLIENT_QUERY_NAMESPACE}

QUERY_MODE_XML = (
    '<Request AddExpandoFieldTypeSuffix="true" SchemaVersion="15.0.0.0" '
    'LibraryVersion="16.0.0.0" ApplicationName="tenantcli" '
    'xmlns="http://schemas.microsoft.com/sharepoint/clientquery/2009">'
    '<Actions><ObjectPath Id="2" ObjectPathId="1" /><ObjectPath Id="4" ObjectPathId="3" />'
    '<Query Id="5" ObjectPathId="3"><Query SelectAllProperties="true"><Properties /></Query>'
    '<ChildItemQuery SelectAllProperties="true"><Properties /></ChildItemQuery></Query>'
    "</Actions><ObjectPaths>"
    '<Constructor Id="1" TypeId="{268004ae-ef6b-4e9b-8425-127220d84719}" />'
    '<Method Id="3" ParentId="1" Name="GetSitePropertiesFromSharePointByFilters"><Parameters>'
    '<Parameter TypeId="{b92aeee2-c92c-4b67-abcc-024e471bc140}">'
    '<Property Name="Filter" Type="String"></Property>'
    '<Property Name="IncludeDetail" Type="Boolean">false</Property>'
    '<Property Name="IncludePersonalSite" Type="Enum">0</Property>'
    '<Property Name="StartIndex" Type="String">0</Property>'
    '<Property Name="Template" Type="String">GROUP#0</Property>'
    "</Parameter></Parameters></Method></ObjectPaths></Request>"
)

CONTINUATION_MODE_XML = (
    '<Request AddExpandoFieldTypeSuffix="true" SchemaVersion="15.0.0.0" '
    'LibraryVersion="16.0.0.0" ApplicationName="tenantcli" '
    'xmlns="http://schemas.microsoft.com/sharepoint/clientquery/2009">'
    '<Actions><ObjectPath Id="4" ObjectPathId="3" /><ObjectPath Id="6" ObjectPathId="5" />'
    '<Query Id="7" ObjectPathId="5"><Query SelectAllProperties="true"><Properties>'
    '<Property Name="NextStartIndexFromSharePoint" ScalarProperty="true" /></Properties></Query>'
    '<ChildItemQuery SelectAllProperties="true"><Properties /></ChildItemQuery></Query>'
    "</Actions><ObjectPaths>"
    '<Constructor Id="3" TypeId="{268004ae-ef6b-4e9b-8425-127220d84719}" />'
    '<Method Id="5" ParentId="3" Name="GetDeletedSitePropertiesFromSharePoint">'
    '<Parameters><Parameter Type="Null" /></Parameters></Method></ObjectPaths></Request>'
)


def test_query_mode_matches_wire_format() -> None:
    payload = site_properties_query(application_name="tenantcli", template="GROUP#0")

    assert payload.serialize() == QUERY_MODE_XML


def test_continuation_mode_matches_wire_format() -> None:
    payload = deleted_site_properties_query(application_name="tenantcli")

    assert payload.serialize() == CONTINUATION_MODE_XML


def test_query_mode_ids() -> None:
    payload = site_properties_query(application_name="tenantcli")

    constructor, method, query = payload.actions
    assert (constructor.kind, constructor.object_path_id, constructor.id) == (
        ActionKind.CONSTRUCTOR,
        1,
        2,
    )
    assert (method.kind, method.object_path_id, method.id, method.parent_id) == (
        ActionKind.METHOD,
        3,
        4,
        1,
    )
    assert (query.kind, query.id, query.object_path_id) == (ActionKind.QUERY, 5, 3)
    assert [path.object_path_id for path in payload.object_paths] == [1, 3]


@pytest.mark.parametrize(
    "payload",
    [
        site_properties_query(application_name="tenantcli"),
        deleted_site_properties_query(application_name="tenantcli"),
    ],
)
def test_ids_increase_along_every_edge(payload: BatchPayload) -> None:
    actions = payload.actions
    ids = [action.id for action in actions]
    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)
    for action in actions:
        assert action.object_path_id <= action.id
        if action.parent_id is not None:
            assert action.parent_id < action.object_path_id


def test_include_personal_sites_is_enum_one() -> None:
    payload = site_properties_query(application_name="tenantcli", include_personal_sites=True)

    root = ET.fromstring(payload.serialize())
    prop = root.find(".//q:Property[@Name='IncludePersonalSite']", NS)
    assert prop is not None
    assert prop.get("Type") == "Enum"
    assert prop.text == "1"


@pytest.mark.parametrize(
    "value",
    [
        "Url -like 'project'",
        'Title -eq "R&D <internal>"',
        "</Property><Property Name=\"Injected\" Type=\"String\">x",
        "&amp; already escaped",
    ],
)
def test_string_values_are_escaped_and_round_trip(value: str) -> None:
    payload = site_properties_query(application_name="tenantcli", filter=value, template=value)

    root = ET.fromstring(payload.serialize())
    props = root.findall(".//q:Parameter/q:Property", NS)
    assert [p.get("Name") for p in props] == [
        "Filter",
        "IncludeDetail",
        "IncludePersonalSite",
        "StartIndex",
        "Template",
    ]
    assert props[0].text == value
    assert props[-1].text == value


def test_application_name_is_escaped_in_attribute() -> None:
    payload = site_properties_query(application_name='cli "beta" & <co>')

    root = ET.fromstring(payload.serialize())
    assert root.get("ApplicationName") == 'cli "beta" & <co>'


def test_escape_xml_replaces_reserved_characters() -> None:
    assert escape_xml("<a href='x'>\"&\"</a>") == (
        "&lt;a href=&apos;x&apos;&gt;&quot;&amp;&quot;&lt;/a&gt;"
    )


def test_scalar_parameters_carry_type_tags() -> None:
    graph = ActionGraph()
    web = graph.construct("{web}")
    graph.call(
        web,
        "SetValues",
        (
            Parameter.scalar(Scalar.string("a<b")),
            Parameter.scalar(Scalar.boolean(True)),
            Parameter.scalar(Scalar.enum(2)),
            Parameter.null(),
        ),
    )
    xml = graph.build(application_name="tenantcli").serialize()

    assert (
        "<Parameters><Parameter Type=\"String\">a&lt;b</Parameter>"
        '<Parameter Type="Boolean">true</Parameter>'
        '<Parameter Type="Enum">2</Parameter>'
        '<Parameter Type="Null" /></Parameters>'
    ) in xml


def test_method_without_parameters() -> None:
    graph = ActionGraph()
    graph.call(graph.construct("{tenant}"), "Update")

    xml = graph.build(application_name="tenantcli").serialize()

    assert '<Method Id="3" ParentId="1" Name="Update"><Parameters /></Method>' in xml


def test_null_property() -> None:
    assert Property("Owner", Scalar.null()).to_xml() == '<Property Name="Owner" Type="Null" />'


def test_graph_rejects_foreign_object_paths() -> None:
    other = ActionGraph().construct("{tenant}")
    graph = ActionGraph(start_id=10)

    with pytest.raises(ValueError, match="not part of this graph"):
        graph.call(other, "Update")
    with pytest.raises(ValueError, match="not part of this graph"):
        graph.query(other, QueryShape())


def test_graph_rejects_non_positive_start() -> None:
    with pytest.raises(ValueError, match="start at 1"):
        ActionGraph(start_id=0)
