"""Whole-document symbol table built before any field is compiled.

``AstData`` answers, for any type name met while compiling a field, which
kind of type it names. Names that are not declared as a scalar, enum, union
or interface are treated as object references, so forward references and
externally provided object types resolve without an error.

Example usage:
    from graphql import parse
    from gql_bindgen.core.ast_data import AstData

    data = AstData.build(parse(sdl))
    data.kind_of("User")          # TypeKind.OBJECT
    data.implementors("Node")     # ("User", "Post")
"""

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from graphql import (
    DocumentNode,
    EnumTypeDefinitionNode,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    OperationType,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    UnionTypeDefinitionNode,
)

from .directives import parse_scalar_directives
from .errors import ErrorSet
from .nullable_type import type_name
from .scalars import DATE_SCALAR_NAME, DATE_TIME_SCALAR_NAME, URL_SCALAR_NAME, UUID_SCALAR_NAME
from .type_model import TypeKind
from .visitor import SchemaVisitor, visit_document


class DateTimeScalarDefinition(enum.Enum):
    """How the ``DateTime`` scalar was declared."""
    WITH_TIME_ZONE = "with_time_zone"
    WITHOUT_TIME_ZONE = "without_time_zone"


@dataclass(frozen=True)
class InputFieldInfo:
    """One field of an input object as seen by the default-value translator."""
    name: str
    type_name: str
    nullable: bool


@dataclass(frozen=True)
class AstData:
    """Read-only index of every type declared in a schema document."""

    kinds: Mapping[str, TypeKind] = field(default_factory=dict)
    interface_implementors: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    input_objects: Mapping[str, tuple[InputFieldInfo, ...]] = field(default_factory=dict)
    object_names: tuple[str, ...] = ()
    query_type: Optional[str] = None
    mutation_type: Optional[str] = None
    subscription_type: Optional[str] = None
    date_scalar_defined: bool = False
    uuid_scalar_defined: bool = False
    url_scalar_defined: bool = False
    date_time_scalar_definition: Optional[DateTimeScalarDefinition] = None

    @classmethod
    def build(cls, document: DocumentNode) -> "AstData":
        """Index a parsed document in one pass."""
        builder = _AstDataBuilder()
        visit_document(builder, document)
        return builder.finish()

    # Classification

    def kind_of(self, name: str) -> TypeKind:
        return self.kinds.get(name, TypeKind.OBJECT)

    def is_scalar(self, name: str) -> bool:
        return self.kinds.get(name) is TypeKind.SCALAR

    def is_enum(self, name: str) -> bool:
        return self.kinds.get(name) is TypeKind.ENUM

    def is_union(self, name: str) -> bool:
        return self.kinds.get(name) is TypeKind.UNION

    def is_interface(self, name: str) -> bool:
        return self.kinds.get(name) is TypeKind.INTERFACE

    def is_object(self, name: str) -> bool:
        return name in self.object_names

    def is_input_object(self, name: str) -> bool:
        return name in self.input_objects

    def is_subscription_type(self, name: str) -> bool:
        return self.subscription_type is not None and name == self.subscription_type

    # Interfaces

    def implementors(self, interface: str) -> tuple[str, ...]:
        return self.interface_implementors.get(interface, ())

    # Input objects

    def input_object_field_names(self, input_object: str) -> tuple[str, ...]:
        return tuple(f.name for f in self.input_objects.get(input_object, ()))

    def input_object_field(self, input_object: str, field_name: str) -> Optional[InputFieldInfo]:
        for info in self.input_objects.get(input_object, ()):
            if info.name == field_name:
                return info
        return None

    def input_object_field_type_name(self, input_object: str, field_name: str) -> Optional[str]:
        info = self.input_object_field(input_object, field_name)
        return info.type_name if info else None

    def input_object_field_is_nullable(self, input_object: str, field_name: str) -> Optional[bool]:
        info = self.input_object_field(input_object, field_name)
        return info.nullable if info else None

    # Reserved scalars

    @property
    def date_time_scalar_defined(self) -> bool:
        return self.date_time_scalar_definition is not None


class _AstDataBuilder(SchemaVisitor):
    """Collects the raw tables that ``AstData`` freezes."""

    def __init__(self):
        self.kinds: dict[str, TypeKind] = {}
        self.implementors: dict[str, list[str]] = {}
        self.input_objects: dict[str, tuple[InputFieldInfo, ...]] = {}
        self.object_names: list[str] = []
        self.roots: dict[OperationType, str] = {}
        self.has_schema_definition = False
        self.declared_scalars: set[str] = set()
        self.date_time: Optional[DateTimeScalarDefinition] = None

    def visit_schema_definition(self, node: SchemaDefinitionNode) -> None:
        self.has_schema_definition = True
        for operation_type in node.operation_types:
            self.roots[operation_type.operation] = operation_type.type.name.value

    def visit_scalar_type(self, node: ScalarTypeDefinitionNode) -> None:
        name = node.name.value
        self.kinds[name] = TypeKind.SCALAR
        self.declared_scalars.add(name)
        if name == DATE_TIME_SCALAR_NAME:
            # Usage errors are reported by the compiler, not here
            directives = parse_scalar_directives(node.directives, ErrorSet())
            self.date_time = (
                DateTimeScalarDefinition.WITH_TIME_ZONE
                if directives.with_time_zone
                else DateTimeScalarDefinition.WITHOUT_TIME_ZONE
            )

    def visit_object_type(self, node: ObjectTypeDefinitionNode) -> None:
        name = node.name.value
        self.kinds[name] = TypeKind.OBJECT
        if name not in self.object_names:
            self.object_names.append(name)
        for interface in node.interfaces or ():
            members = self.implementors.setdefault(interface.name.value, [])
            if name not in members:
                members.append(name)

    def visit_interface_type(self, node: InterfaceTypeDefinitionNode) -> None:
        self.kinds[node.name.value] = TypeKind.INTERFACE

    def visit_union_type(self, node: UnionTypeDefinitionNode) -> None:
        self.kinds[node.name.value] = TypeKind.UNION

    def visit_enum_type(self, node: EnumTypeDefinitionNode) -> None:
        self.kinds[node.name.value] = TypeKind.ENUM

    def visit_input_object_type(self, node: InputObjectTypeDefinitionNode) -> None:
        self.input_objects[node.name.value] = tuple(
            InputFieldInfo(
                name=f.name.value,
                type_name=type_name(f.type),
                nullable=not isinstance(f.type, NonNullTypeNode),
            )
            for f in node.fields or ()
        )

    def _root(self, operation: OperationType, conventional: str) -> Optional[str]:
        if self.has_schema_definition:
            return self.roots.get(operation)
        if conventional in self.object_names:
            return conventional
        return None

    def finish(self) -> AstData:
        return AstData(
            kinds=MappingProxyType(dict(self.kinds)),
            interface_implementors=MappingProxyType(
                {name: tuple(members) for name, members in self.implementors.items()}
            ),
            input_objects=MappingProxyType(dict(self.input_objects)),
            object_names=tuple(self.object_names),
            query_type=self._root(OperationType.QUERY, "Query"),
            mutation_type=self._root(OperationType.MUTATION, "Mutation"),
            subscription_type=self._root(OperationType.SUBSCRIPTION, "Subscription"),
            date_scalar_defined=DATE_SCALAR_NAME in self.declared_scalars,
            uuid_scalar_defined=UUID_SCALAR_NAME in self.declared_scalars,
            url_scalar_defined=URL_SCALAR_NAME in self.declared_scalars,
            date_time_scalar_definition=self.date_time,
        )
