"""Emission models produced by the compiler and consumed by the generator.

Every model is a frozen dataclass holding tuples; the compiler builds them
once during its single visitation and the generator only reads them.
"""

from dataclasses import dataclass
from typing import Optional

from .ast_data import AstData
from .directives import Deprecation, FieldDirectives
from .type_model import Type


@dataclass(frozen=True)
class FieldArg:
    """An argument of a resolver field."""
    name: str
    python_name: str
    type: Type
    default: Optional[str] = None  # Python expression text
    description: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @property
    def signature_type(self) -> Type:
        """The type the resolver contract receives once the default is applied."""
        if self.has_default:
            return self.type.remove_one_layer_of_nullability()
        return self.type


@dataclass(frozen=True)
class Field:
    """A field of an object, interface or subscription type."""
    name: str
    python_name: str
    return_type: Type
    args: tuple[FieldArg, ...] = ()
    directives: FieldDirectives = FieldDirectives()
    description: Optional[str] = None

    @property
    def contract_name(self) -> str:
        return f"field_{self.python_name}"

    @property
    def glue_name(self) -> str:
        return f"resolve_{self.python_name}"

    @property
    def needs_trail(self) -> bool:
        return self.return_type.needs_trail()

    @property
    def trail_type(self) -> Type:
        return self.return_type.innermost_type()

    @property
    def is_async(self) -> bool:
        return self.directives.is_async

    @property
    def deprecated(self) -> Optional[Deprecation]:
        return self.directives.deprecated


@dataclass(frozen=True)
class Scalar:
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class Object:
    name: str
    fields: tuple[Field, ...]
    interfaces: tuple[str, ...] = ()
    description: Optional[str] = None


@dataclass(frozen=True)
class Subscription:
    """The subscription root; its fields resolve to streams."""
    name: str
    fields: tuple[Field, ...]
    description: Optional[str] = None


@dataclass(frozen=True)
class Interface:
    name: str
    fields: tuple[Field, ...]
    implementors: tuple[str, ...] = ()
    description: Optional[str] = None


@dataclass(frozen=True)
class UnionVariant:
    name: str
    python_name: str
    type: Type


@dataclass(frozen=True)
class Union:
    name: str
    variants: tuple[UnionVariant, ...]
    description: Optional[str] = None


@dataclass(frozen=True)
class EnumVariant:
    graphql_name: str
    python_name: str
    description: Optional[str] = None
    deprecated: Optional[Deprecation] = None


@dataclass(frozen=True)
class Enum:
    name: str
    python_name: str
    variants: tuple[EnumVariant, ...]
    description: Optional[str] = None


@dataclass(frozen=True)
class InputField:
    name: str
    python_name: str
    type: Type
    description: Optional[str] = None


@dataclass(frozen=True)
class InputObject:
    name: str
    fields: tuple[InputField, ...]
    description: Optional[str] = None


@dataclass(frozen=True)
class SchemaType:
    """Root type names; ``None`` means the empty root is used."""
    query: str
    mutation: Optional[str] = None
    subscription: Optional[str] = None


@dataclass(frozen=True)
class TrailAccessor:
    """One accessor of a generated query trail.

    ``child_trail`` is ``None`` for leaf fields, otherwise the class name of
    the trail returned for the nested selection.
    """
    name: str
    python_name: str
    child_trail: Optional[str] = None

    @property
    def is_leaf(self) -> bool:
        return self.child_trail is None


@dataclass(frozen=True)
class QueryTrailModel:
    object_name: str
    class_name: str
    accessors: tuple[TrailAccessor, ...]


@dataclass(frozen=True)
class CompiledSchema:
    """Everything the generator needs to render one module."""
    ast_data: AstData
    scalars: tuple[Scalar, ...] = ()
    objects: tuple[Object, ...] = ()
    subscription: Optional[Subscription] = None
    interfaces: tuple[Interface, ...] = ()
    unions: tuple[Union, ...] = ()
    enums: tuple[Enum, ...] = ()
    input_objects: tuple[InputObject, ...] = ()
    schema: Optional[SchemaType] = None
    query_trails: tuple[QueryTrailModel, ...] = ()

    def get_object(self, name: str) -> Optional[Object]:
        for obj in self.objects:
            if obj.name == name:
                return obj
        return None

    def get_interface(self, name: str) -> Optional[Interface]:
        for interface in self.interfaces:
            if interface.name == name:
                return interface
        return None
