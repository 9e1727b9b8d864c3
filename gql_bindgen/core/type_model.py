"""Internal type model shared by every emission target.

A ``Type`` is the resolved form of a GraphQL type reference: the innermost
named type has been classified through the symbol table and the wrappers are
nullable-first. ``Ref`` marks a borrowed value and only ever appears directly
inside the outermost ``List`` or ``Nullable`` produced by the as-ref transform.
"""

import enum
from dataclasses import dataclass
from typing import Optional


class TypeKind(enum.Enum):
    """Classification of a named schema type."""
    SCALAR = "scalar"
    ENUM = "enum"
    UNION = "union"
    INTERFACE = "interface"
    OBJECT = "object"


# Fields resolving to one of these kinds receive a query trail argument.
NODE_KINDS = frozenset({TypeKind.OBJECT, TypeKind.INTERFACE, TypeKind.UNION})


class Type:
    """Base class of the resolved type model."""

    def is_nullable(self) -> bool:
        return isinstance(self, Nullable)

    def supports_as_ref(self) -> bool:
        return isinstance(self, (List, Nullable))

    def innermost_type(self) -> "Type":
        ty = self
        while isinstance(ty, (Ref, List, Nullable)):
            ty = ty.inner
        return ty

    def kind(self) -> TypeKind:
        return self.innermost_type().leaf_kind

    def needs_trail(self) -> bool:
        """Whether resolvers of this type get a query trail argument."""
        return self.kind() in NODE_KINDS

    def remove_one_layer_of_nullability(self) -> "Type":
        if isinstance(self, Nullable):
            return self.inner
        return self


@dataclass(frozen=True)
class Scalar(Type):
    """A scalar; ``builtin`` is the Python type for built-in and reserved scalars."""
    name: str
    builtin: Optional[str] = None

    leaf_kind = TypeKind.SCALAR


@dataclass(frozen=True)
class Enum(Type):
    name: str

    leaf_kind = TypeKind.ENUM


@dataclass(frozen=True)
class Union(Type):
    name: str

    leaf_kind = TypeKind.UNION


@dataclass(frozen=True)
class Interface(Type):
    name: str

    leaf_kind = TypeKind.INTERFACE


@dataclass(frozen=True)
class Object(Type):
    name: str

    leaf_kind = TypeKind.OBJECT


@dataclass(frozen=True)
class Ref(Type):
    inner: Type


@dataclass(frozen=True)
class List(Type):
    inner: Type


@dataclass(frozen=True)
class Nullable(Type):
    inner: Type
