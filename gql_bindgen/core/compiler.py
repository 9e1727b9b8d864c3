"""Schema compiler: turns a parsed SDL document into emission models.

The compiler runs the naming lints, checkpoints, builds the query-trail
models, then visits every definition once and checkpoints again. Problems
found along the way are collected in one ``ErrorSet`` so a single run
reports as many diagnostics as possible.

Example usage:
    from gql_bindgen.core.compiler import compile_schema

    compiled = compile_schema('''
        type Query { user(id: ID!): User }
        type User { id: ID! name: String! }
    ''')
    [obj.name for obj in compiled.objects]  # ["Query", "User"]
"""

import ast
import enum
import logging
from typing import Optional

from graphql import (
    DirectiveDefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    FieldDefinitionNode,
    InputObjectTypeDefinitionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    OperationType,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    TypeExtensionNode,
    TypeNode,
    UnionTypeDefinitionNode,
    parse,
)

from . import ir
from . import type_model as tm
from .ast_data import AstData, DateTimeScalarDefinition
from .directives import (
    JUNIPER_DIRECTIVE,
    FieldDirectives,
    Ownership,
    parse_deprecation,
    parse_field_directives,
    parse_scalar_directives,
    reject_directives,
    validate_directive_definition,
)
from .errors import UNKNOWN_POS, ErrorCode, ErrorSet, Pos, pos_of
from .literals import quote_value
from .naming import camel_case, safe_name, safe_param_name, snake_case
from .nullable_type import ListOf, Named, NullableOf, NullableType, from_type_node, type_name
from .query_trails import generate_query_trails
from .scalars import (
    BUILTIN_SCALARS,
    DATE_SCALAR_NAME,
    DATE_TIME_SCALAR_NAME,
    DEFAULT_REGISTRY,
    NAIVE_DATE_TIME,
    RESERVED_SCALAR_NAMES,
    URL_SCALAR_NAME,
    UUID_SCALAR_NAME,
    ScalarRegistry,
)
from .validations import validate_document
from .visitor import SchemaVisitor, visit_document

logger = logging.getLogger(__name__)


class FieldLocation(enum.Enum):
    """Where a field definition lives; decides which directives it accepts."""
    OBJECT = "object"
    INTERFACE = "interface"
    SUBSCRIPTION = "subscription"


# Reserved scalar name -> (error when undeclared, AstData flag)
_RESERVED_FLAGS = {
    DATE_SCALAR_NAME: (ErrorCode.DATE_SCALAR_NOT_DEFINED, "date_scalar_defined"),
    UUID_SCALAR_NAME: (ErrorCode.UUID_SCALAR_NOT_DEFINED, "uuid_scalar_defined"),
    URL_SCALAR_NAME: (ErrorCode.URL_SCALAR_NOT_DEFINED, "url_scalar_defined"),
}


class SchemaCompiler(SchemaVisitor):
    """Single-use compiler for one document.

    Entities are appended in document order while visiting; ``compile``
    freezes them into a ``CompiledSchema``.
    """

    def __init__(self, ast_data: AstData, registry: Optional[ScalarRegistry] = None):
        self.ast_data = ast_data
        self.registry = registry or DEFAULT_REGISTRY
        self.errors = ErrorSet()

        self.scalars: list[ir.Scalar] = []
        self.objects: list[ir.Object] = []
        self.subscription: Optional[ir.Subscription] = None
        self.interfaces: list[ir.Interface] = []
        self.unions: list[ir.Union] = []
        self.enums: list[ir.Enum] = []
        self.input_objects: list[ir.InputObject] = []
        self.schema_type: Optional[ir.SchemaType] = None
        self._saw_schema_definition = False
        self._field_positions: dict[tuple[str, str], Pos] = {}

    def compile(self, document: DocumentNode) -> ir.CompiledSchema:
        """Compile the document.

        Raises:
            SchemaCompilationError: At the first checkpoint that finds errors.
            DefaultValueOverflowError: If an integer default does not fit in 32 bits.
        """
        self.errors.extend(validate_document(document))
        self.errors.checkpoint()

        query_trails = generate_query_trails(document, self.ast_data)
        visit_document(self, document)
        if not self._saw_schema_definition:
            self._implicit_schema_type()

        compiled = ir.CompiledSchema(
            ast_data=self.ast_data,
            scalars=tuple(self.scalars),
            objects=tuple(self.objects),
            subscription=self.subscription,
            interfaces=tuple(self.interfaces),
            unions=tuple(self.unions),
            enums=tuple(self.enums),
            input_objects=tuple(self.input_objects),
            schema=self.schema_type,
            query_trails=query_trails,
        )
        self._check_interface_async(compiled)

        self.errors.checkpoint()
        logger.debug(
            "Compiled %d objects, %d interfaces, %d unions, %d enums, %d input objects, %d scalars",
            len(compiled.objects),
            len(compiled.interfaces),
            len(compiled.unions),
            len(compiled.enums),
            len(compiled.input_objects),
            len(compiled.scalars),
        )
        return compiled

    def _check_interface_async(self, compiled: ir.CompiledSchema) -> None:
        """Implementor fields must match the `async` setting of the interface field."""
        for obj in compiled.objects:
            for interface_name in obj.interfaces:
                interface = compiled.get_interface(interface_name)
                if interface is None:
                    continue
                expected = {field.name: field.is_async for field in interface.fields}
                for field in obj.fields:
                    if field.name in expected and field.is_async != expected[field.name]:
                        self.errors.emit(
                            self._field_positions.get((obj.name, field.name), UNKNOWN_POS),
                            ErrorCode.ASYNC_MISMATCH_WITH_INTERFACE,
                            f"`{obj.name}.{field.name}` and `{interface.name}.{field.name}`",
                        )

    # =========================================================================
    # Schema root
    # =========================================================================

    def visit_schema_definition(self, node: SchemaDefinitionNode) -> None:
        self._saw_schema_definition = True
        reject_directives(node.directives, self.errors)

        roots = {op.operation: op.type.name.value for op in node.operation_types}
        query = roots.get(OperationType.QUERY)
        if query is None:
            self.errors.emit(pos_of(node), ErrorCode.NO_QUERY_TYPE)
            return

        self.schema_type = ir.SchemaType(
            query=query,
            mutation=roots.get(OperationType.MUTATION),
            subscription=roots.get(OperationType.SUBSCRIPTION),
        )

    def _implicit_schema_type(self) -> None:
        if self.ast_data.query_type is None:
            self.errors.emit(UNKNOWN_POS, ErrorCode.NO_QUERY_TYPE)
            return
        self.schema_type = ir.SchemaType(
            query=self.ast_data.query_type,
            mutation=self.ast_data.mutation_type,
            subscription=self.ast_data.subscription_type,
        )

    def visit_directive_definition(self, node: DirectiveDefinitionNode) -> None:
        if node.name.value == JUNIPER_DIRECTIVE.name:
            validate_directive_definition(node, self.errors)

    def visit_extension(self, node: TypeExtensionNode | SchemaExtensionNode) -> None:
        name = getattr(node, "name", None)
        detail = f"`{name.value}`" if name is not None else "`schema`"
        self.errors.emit(pos_of(node), ErrorCode.TYPE_EXTENSION_NOT_SUPPORTED, detail)

    # =========================================================================
    # Entities
    # =========================================================================

    def visit_scalar_type(self, node: ScalarTypeDefinitionNode) -> None:
        name = node.name.value
        position = pos_of(node)

        if name == DATE_TIME_SCALAR_NAME:
            parse_scalar_directives(node.directives, self.errors)
        else:
            reject_directives(node.directives, self.errors)

        if name in RESERVED_SCALAR_NAMES:
            if node.description is not None:
                self.errors.emit(position, ErrorCode.SPECIAL_CASE_SCALAR_WITH_DESCRIPTION, f"`{name}`")
            return

        if name in BUILTIN_SCALARS:
            self.errors.emit(position, ErrorCode.CANNOT_DECLARE_BUILTIN_AS_SCALAR, f"`{name}`")
            return

        self.scalars.append(ir.Scalar(name=name, description=_description(node)))

    def visit_object_type(self, node: ObjectTypeDefinitionNode) -> None:
        name = node.name.value
        reject_directives(node.directives, self.errors)

        if self.ast_data.is_subscription_type(name):
            if node.interfaces:
                self.errors.emit(
                    pos_of(node),
                    ErrorCode.SUBSCRIPTIONS_CANNOT_IMPLEMENT_INTERFACES,
                    f"`{name}`",
                )
            self.subscription = ir.Subscription(
                name=name,
                fields=self._compile_fields(node.fields, FieldLocation.SUBSCRIPTION),
                description=_description(node),
            )
            return

        for field in node.fields or ():
            self._field_positions[(name, field.name.value)] = pos_of(field)
        self.objects.append(
            ir.Object(
                name=name,
                fields=self._compile_fields(node.fields, FieldLocation.OBJECT),
                interfaces=tuple(interface.name.value for interface in node.interfaces or ()),
                description=_description(node),
            )
        )

    def visit_interface_type(self, node: InterfaceTypeDefinitionNode) -> None:
        name = node.name.value
        reject_directives(node.directives, self.errors)
        self.interfaces.append(
            ir.Interface(
                name=name,
                fields=self._compile_fields(node.fields, FieldLocation.INTERFACE),
                implementors=self.ast_data.implementors(name),
                description=_description(node),
            )
        )

    def visit_union_type(self, node: UnionTypeDefinitionNode) -> None:
        position = pos_of(node)
        reject_directives(node.directives, self.errors)

        variants = []
        for member in node.types or ():
            member_type = self.map_type(member, as_ref=False, pos=position)
            variants.append(
                ir.UnionVariant(
                    name=member.name.value,
                    python_name=safe_name(snake_case(member.name.value)),
                    type=member_type.remove_one_layer_of_nullability(),
                )
            )

        self.unions.append(
            ir.Union(
                name=node.name.value,
                variants=tuple(variants),
                description=_description(node),
            )
        )

    def visit_enum_type(self, node: EnumTypeDefinitionNode) -> None:
        reject_directives(node.directives, self.errors)

        variants = tuple(
            ir.EnumVariant(
                graphql_name=value.name.value,
                python_name=safe_name(camel_case(value.name.value)),
                description=_description(value),
                deprecated=parse_deprecation(value.directives, self.errors),
            )
            for value in node.values or ()
        )

        self.enums.append(
            ir.Enum(
                name=node.name.value,
                python_name=camel_case(node.name.value),
                variants=variants,
                description=_description(node),
            )
        )

    def visit_input_object_type(self, node: InputObjectTypeDefinitionNode) -> None:
        reject_directives(node.directives, self.errors)

        fields = []
        for field in node.fields or ():
            position = pos_of(field)
            reject_directives(field.directives, self.errors)
            if field.default_value is not None:
                self.errors.emit(
                    position,
                    ErrorCode.INPUT_TYPE_FIELD_WITH_DEFAULT_VALUE,
                    f"`{node.name.value}.{field.name.value}`",
                )
            fields.append(
                ir.InputField(
                    name=field.name.value,
                    python_name=safe_name(snake_case(field.name.value)),
                    type=self.map_type(field.type, as_ref=False, pos=position),
                    description=_description(field),
                )
            )

        self.input_objects.append(
            ir.InputObject(
                name=node.name.value,
                fields=tuple(fields),
                description=_description(node),
            )
        )

    # =========================================================================
    # Fields
    # =========================================================================

    def _compile_fields(self, fields, location: FieldLocation) -> tuple[ir.Field, ...]:
        return tuple(self.compile_field(field, location) for field in fields or ())

    def compile_field(self, node: FieldDefinitionNode, location: FieldLocation) -> ir.Field:
        """Compile one field definition into its emission model."""
        position = pos_of(node)
        directives = parse_field_directives(node.directives, self.errors)
        self._validate_directives_for_field(directives, location, position)

        args = tuple(self._compile_arg(arg) for arg in node.arguments or ())

        as_ref = directives.ownership.is_as_ref()
        return_type = self.map_type(node.type, as_ref=as_ref, pos=position)
        if as_ref and not return_type.supports_as_ref():
            self.errors.emit(
                position,
                ErrorCode.AS_REF_OWNERSHIP_FOR_NAMED_TYPE,
                f"`{node.name.value}`",
            )

        return ir.Field(
            name=node.name.value,
            python_name=safe_name(snake_case(node.name.value)),
            return_type=return_type,
            args=args,
            directives=directives,
            description=_description(node),
        )

    def _compile_arg(self, node: InputValueDefinitionNode) -> ir.FieldArg:
        position = pos_of(node)
        reject_directives(node.directives, self.errors)

        default = None
        if node.default_value is not None:
            default = quote_value(
                node.default_value,
                type_name(node.type),
                position,
                self.ast_data,
                self.errors,
            )

        arg_type = self.map_type(node.type, as_ref=False, pos=position)
        if default is not None and not arg_type.is_nullable():
            self.errors.emit(
                position,
                ErrorCode.NONNULLABLE_FIELD_WITH_DEFAULT_VALUE,
                f"`{node.name.value}`",
            )

        return ir.FieldArg(
            name=node.name.value,
            python_name=safe_param_name(snake_case(node.name.value)),
            type=arg_type,
            default=default,
            description=_description(node),
        )

    def _validate_directives_for_field(
        self,
        directives: FieldDirectives,
        location: FieldLocation,
        pos: Pos,
    ) -> None:
        if location is not FieldLocation.SUBSCRIPTION:
            if directives.stream_type is not None:
                self.errors.emit(pos, ErrorCode.STREAM_TYPE_NOT_SUPPORTED_HERE)
            if directives.stream_item_infallible is not None:
                self.errors.emit(pos, ErrorCode.STREAM_ITEM_INFALLIBLE_NOT_SUPPORTED_HERE)
            return

        if directives.ownership is not Ownership.OWNED:
            self.errors.emit(
                pos,
                ErrorCode.SUBSCRIPTION_FIELD_MUST_BE_OWNED,
                f"got `{directives.ownership.value}`",
            )

        if directives.stream_type is not None:
            try:
                ast.parse(directives.stream_type, mode="eval")
            except SyntaxError as e:
                self.errors.emit(
                    pos,
                    ErrorCode.INVALID_STREAM_RETURN_TYPE,
                    f"`{directives.stream_type}`",
                    e.msg,
                )

    # =========================================================================
    # Type mapping
    # =========================================================================

    def map_type(self, node: TypeNode, as_ref: bool, pos: Pos) -> tm.Type:
        """Resolve a type reference against the symbol table."""
        return self._map_node(from_type_node(node), as_ref, pos)

    def _map_node(self, ty: NullableType, as_ref: bool, pos: Pos) -> tm.Type:
        # as_ref only applies to the outermost wrapper
        if isinstance(ty, ListOf):
            inner = self._map_node(ty.inner, False, pos)
            return tm.List(tm.Ref(inner) if as_ref else inner)
        if isinstance(ty, NullableOf):
            inner = self._map_node(ty.inner, False, pos)
            return tm.Nullable(tm.Ref(inner) if as_ref else inner)
        if isinstance(ty, Named):
            return self._map_named(ty.name, pos)
        raise TypeError(f"Unexpected type {ty!r}")

    def _map_named(self, name: str, pos: Pos) -> tm.Type:
        if name in _RESERVED_FLAGS:
            code, flag = _RESERVED_FLAGS[name]
            if not getattr(self.ast_data, flag):
                self.errors.emit(pos, code)
            return tm.Scalar(name, self.registry[name].python_type)

        if name == DATE_TIME_SCALAR_NAME:
            definition = self.ast_data.date_time_scalar_definition
            if definition is DateTimeScalarDefinition.WITHOUT_TIME_ZONE:
                return tm.Scalar(name, self.registry[NAIVE_DATE_TIME].python_type)
            if definition is None:
                self.errors.emit(pos, ErrorCode.DATE_TIME_SCALAR_NOT_DEFINED)
            return tm.Scalar(name, self.registry[DATE_TIME_SCALAR_NAME].python_type)

        if name in BUILTIN_SCALARS:
            return tm.Scalar(name, BUILTIN_SCALARS[name])

        kind = self.ast_data.kind_of(name)
        if kind is tm.TypeKind.SCALAR:
            return tm.Scalar(name)
        if kind is tm.TypeKind.ENUM:
            return tm.Enum(name)
        if kind is tm.TypeKind.UNION:
            return tm.Union(name)
        if kind is tm.TypeKind.INTERFACE:
            return tm.Interface(name)
        return tm.Object(name)


def _description(node) -> Optional[str]:
    return node.description.value if node.description else None


def parse_document(source: str | DocumentNode) -> DocumentNode:
    """Parse SDL text; documents are passed through unchanged."""
    if isinstance(source, DocumentNode):
        return source
    return parse(source)


def compile_schema(source: str | DocumentNode) -> ir.CompiledSchema:
    """Compile SDL text or a parsed document.

    Raises:
        GraphQLSyntaxError: If the SDL text does not parse.
        SchemaCompilationError: If the schema has errors.
    """
    document = parse_document(source)
    ast_data = AstData.build(document)
    return SchemaCompiler(ast_data).compile(document)
