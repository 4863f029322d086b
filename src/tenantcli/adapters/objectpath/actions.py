"""Object-path request graphs and their XML batch envelope.

A graph is built in emission order. Constructors and method calls each create an
object path (``<ObjectPaths>``) plus an action that materialises it (``<Actions>``);
queries read properties of an existing object path. Ids are handed out by the graph,
strictly increasing, so every action references object paths emitted before it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

from .correlation import ResponseSlots

if TYPE_CHECKING:
    from collections.abc import Iterable

SCHEMA_VERSION = "15.0.0.0"
LIBRARY_VERSION = "16.0.0.0"
CLIENT_QUERY_NAMESPACE = "http://schemas.microsoft.com/sharepoint/clientquery/2009"

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def escape_xml(value: str) -> str:
    """Escape ``&``, ``<``, ``>`` and both quote characters."""

    return escape(value, _XML_ENTITIES)


class ActionKind(StrEnum):
    CONSTRUCTOR = "Constructor"
    METHOD = "Method"
    QUERY = "Query"


class ValueType(StrEnum):
    STRING = "String"
    BOOLEAN = "Boolean"
    ENUM = "Enum"
    NULL = "Null"


@dataclass(frozen=True, slots=True)
class Scalar:
    type: ValueType
    value: str | bool | int | None = None

    @classmethod
    def string(cls, value: str) -> Scalar:
        return cls(ValueType.STRING, value)

    @classmethod
    def boolean(cls, value: bool) -> Scalar:  # noqa: FBT001
        return cls(ValueType.BOOLEAN, value)

    @classmethod
    def enum(cls, value: int) -> Scalar:
        return cls(ValueType.ENUM, value)

    @classmethod
    def null(cls) -> Scalar:
        return cls(ValueType.NULL)

    def render_value(self) -> str:
        match self.type:
            case ValueType.NULL:
                return ""
            case ValueType.BOOLEAN:
                return "true" if self.value else "false"
            case ValueType.ENUM:
                return str(int(self.value or 0))
            case _:
                return escape_xml(str(self.value if self.value is not None else ""))


@dataclass(frozen=True, slots=True)
class Property:
    name: str
    value: Scalar

    def to_xml(self) -> str:
        name = escape_xml(self.name)
        if self.value.type is ValueType.NULL:
            return f'<Property Name="{name}" Type="Null" />'
        return (
            f'<Property Name="{name}" Type="{self.value.type}">'
            f"{self.value.render_value()}</Property>"
        )


@dataclass(frozen=True, slots=True)
class Parameter:
    """A method argument: a bare scalar, or a typed object carrying properties."""

    value: Scalar | None = None
    type_id: str | None = None
    properties: tuple[Property, ...] = ()

    @classmethod
    def scalar(cls, value: Scalar) -> Parameter:
        return cls(value=value)

    @classmethod
    def null(cls) -> Parameter:
        return cls(value=Scalar.null())

    @classmethod
    def typed(cls, type_id: str, properties: Iterable[Property]) -> Parameter:
        return cls(type_id=type_id, properties=tuple(properties))

    def to_xml(self) -> str:
        if self.type_id is not None:
            inner = "".join(prop.to_xml() for prop in self.properties)
            return f'<Parameter TypeId="{escape_xml(self.type_id)}">{inner}</Parameter>'
        value = self.value or Scalar.null()
        if value.type is ValueType.NULL:
            return '<Parameter Type="Null" />'
        return f'<Parameter Type="{value.type}">{value.render_value()}</Parameter>'


@dataclass(frozen=True, slots=True)
class QueryProperty:
    name: str
    scalar: bool = False

    def to_xml(self) -> str:
        scalar = ' ScalarProperty="true"' if self.scalar else ""
        return f'<Property Name="{escape_xml(self.name)}"{scalar} />'


@dataclass(frozen=True, slots=True)
class QueryShape:
    select_all_properties: bool = True
    properties: tuple[QueryProperty, ...] = ()
    child_items: QueryShape | None = None

    def _select(self, tag: str) -> str:
        select_all = "true" if self.select_all_properties else "false"
        if self.properties:
            props = "".join(prop.to_xml() for prop in self.properties)
            body = f"<Properties>{props}</Properties>"
        else:
            body = "<Properties />"
        return f'<{tag} SelectAllProperties="{select_all}">{body}</{tag}>'

    def to_xml(self) -> str:
        xml = self._select("Query")
        if self.child_items is not None:
            xml += self.child_items._select("ChildItemQuery")  # noqa: SLF001
        return xml


@dataclass(frozen=True, slots=True, kw_only=True)
class Action:
    """One node of the request graph.

    ``id`` is the action id in ``<Actions>``. ``object_path_id`` is the object path the
    action materialises (constructor/method) or reads (query). ``parent_id`` is set for
    methods and names the object path they are invoked on.
    """

    id: int
    kind: ActionKind
    object_path_id: int
    parent_id: int | None = None
    type_id: str | None = None
    name: str | None = None
    parameters: tuple[Parameter, ...] = ()
    query: QueryShape | None = None

    def action_xml(self) -> str:
        if self.kind is ActionKind.QUERY:
            shape = self.query.to_xml() if self.query is not None else ""
            return f'<Query Id="{self.id}" ObjectPathId="{self.object_path_id}">{shape}</Query>'
        return f'<ObjectPath Id="{self.id}" ObjectPathId="{self.object_path_id}" />'

    def object_path_xml(self) -> str | None:
        match self.kind:
            case ActionKind.CONSTRUCTOR:
                return (
                    f'<Constructor Id="{self.object_path_id}" '
                    f'TypeId="{escape_xml(self.type_id or "")}" />'
                )
            case ActionKind.METHOD:
                if self.parameters:
                    params = "".join(param.to_xml() for param in self.parameters)
                    parameters = f"<Parameters>{params}</Parameters>"
                else:
                    parameters = "<Parameters />"
                return (
                    f'<Method Id="{self.object_path_id}" ParentId="{self.parent_id}" '
                    f'Name="{escape_xml(self.name or "")}">{parameters}</Method>'
                )
            case _:
                return None


@dataclass(frozen=True, slots=True)
class ObjectPathRef:
    """Handle to an object path already added to a graph."""

    id: int


@dataclass(frozen=True, slots=True)
class BatchPayload:
    application_name: str
    actions: tuple[Action, ...]
    slots: ResponseSlots = field(default_factory=ResponseSlots)

    @property
    def object_paths(self) -> tuple[Action, ...]:
        return tuple(action for action in self.actions if action.kind is not ActionKind.QUERY)

    def serialize(self) -> str:
        actions = "".join(action.action_xml() for action in self.actions)
        object_paths = "".join(
            xml for action in self.object_paths if (xml := action.object_path_xml()) is not None
        )
        return (
            f'<Request AddExpandoFieldTypeSuffix="true" SchemaVersion="{SCHEMA_VERSION}" '
            f'LibraryVersion="{LIBRARY_VERSION}" '
            f'ApplicationName="{escape_xml(self.application_name)}" '
            f'xmlns="{CLIENT_QUERY_NAMESPACE}">'
            f"<Actions>{actions}</Actions>"
            f"<ObjectPaths>{object_paths}</ObjectPaths>"
            "</Request>"
        )


class ActionGraph:
    """Builder assigning ids in emission order, starting at ``start_id``."""

    def __init__(self, *, start_id: int = 1) -> None:
        if start_id < 1:
            raise ValueError("Action ids start at 1")
        self._next_id = start_id
        self._actions: list[Action] = []
        self._object_paths: set[int] = set()

    def _take_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def _require(self, ref: ObjectPathRef) -> int:
        if ref.id not in self._object_paths:
            raise ValueError(f"Object path {ref.id} is not part of this graph")
        return ref.id

    def construct(self, type_id: str) -> ObjectPathRef:
        path_id = self._take_id()
        self._actions.append(
            Action(
                id=self._take_id(),
                kind=ActionKind.CONSTRUCTOR,
                object_path_id=path_id,
                type_id=type_id,
            )
        )
        self._object_paths.add(path_id)
        return ObjectPathRef(path_id)

    def call(
        self,
        target: ObjectPathRef,
        name: str,
        parameters: Iterable[Parameter] = (),
    ) -> ObjectPathRef:
        parent_id = self._require(target)
        path_id = self._take_id()
        self._actions.append(
            Action(
                id=self._take_id(),
                kind=ActionKind.METHOD,
                object_path_id=path_id,
                parent_id=parent_id,
                name=name,
                parameters=tuple(parameters),
            )
        )
        self._object_paths.add(path_id)
        return ObjectPathRef(path_id)

    def query(self, target: ObjectPathRef, shape: QueryShape) -> int:
        path_id = self._require(target)
        action_id = self._take_id()
        self._actions.append(
            Action(id=action_id, kind=ActionKind.QUERY, object_path_id=path_id, query=shape)
        )
        return action_id

    def build(self, *, application_name: str, slots: ResponseSlots | None = None) -> BatchPayload:
        return BatchPayload(
            application_name=application_name,
            actions=tuple(self._actions),
            slots=slots or ResponseSlots(),
        )
