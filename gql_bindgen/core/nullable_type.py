"""Nullable-first view of GraphQL type references.

graphql-core marks *non-null* explicitly (``NonNullTypeNode``) and leaves
everything else nullable. The code generator wants the opposite polarity, so
``from_type_node`` wraps every reference that is not marked non-null in
``NullableOf``.
"""

from dataclasses import dataclass

from graphql import ListTypeNode, NamedTypeNode, NonNullTypeNode, TypeNode


class NullableType:
    """Base class of the nullable-first type algebra."""
    __slots__ = ()


@dataclass(frozen=True)
class Named(NullableType):
    name: str


@dataclass(frozen=True)
class ListOf(NullableType):
    inner: NullableType


@dataclass(frozen=True)
class NullableOf(NullableType):
    inner: NullableType


def from_type_node(node: TypeNode, nullable: bool = True) -> NullableType:
    """Convert a graphql-core type reference, inverting the non-null markers."""
    if isinstance(node, NonNullTypeNode):
        return from_type_node(node.type, nullable=False)

    if isinstance(node, NamedTypeNode):
        inner: NullableType = Named(node.name.value)
    elif isinstance(node, ListTypeNode):
        inner = ListOf(from_type_node(node.type))
    else:
        raise TypeError(f"Expected a GraphQL type reference, got {type(node).__name__}")

    return NullableOf(inner) if nullable else inner


def type_name(node: TypeNode) -> str:
    """Return the innermost named type of a type reference."""
    while not isinstance(node, NamedTypeNode):
        node = node.type
    return node.name.value
