"""Tests for the schema compiler."""

import pytest
from graphql import parse, parse_type

from gql_bindgen.core.ast_data import AstData
from gql_bindgen.core.compiler import SchemaCompiler, compile_schema
from gql_bindgen.core.directives import Deprecation, Ownership
from gql_bindgen.core.errors import (
    DefaultValueOverflowError,
    ErrorCode,
    Pos,
    SchemaCompilationError,
)
from gql_bindgen.core.type_model import (
    Enum,
    Interface,
    List,
    Nullable,
    Object,
    Ref,
    Scalar,
    Union,
)


# =============================================================================
# Helpers
# =============================================================================


def compile_errors(sdl):
    """Compile a schema that must fail and return its diagnostics."""
    with pytest.raises(SchemaCompilationError) as exc_info:
        compile_schema(sdl)
    return list(exc_info.value.errors)


def compile_codes(sdl):
    return [error.code for error in compile_errors(sdl)]


def field(compiled, type_name, field_name):
    obj = compiled.get_object(type_name)
    return next(f for f in obj.fields if f.name == field_name)


@pytest.fixture
def blog():
    """A schema exercising most entity kinds."""
    return compile_schema('''
        scalar Cursor
        scalar Date

        "A blog author"
        type User implements Node {
            id: ID!
            name: String!
            posts(first: Int = 10, after: Cursor): [Post!]!
            friends: [User!] @juniper(ownership: "as_ref")
            joined: Date
            legacyName: String @deprecated(reason: "Use `name`")
        }

        type Post implements Node {
            id: ID!
            title: String!
            author: User! @juniper(infallible: true, async: true)
        }

        interface Node { id: ID! }

        union SearchResult = User | Post

        enum Status {
            DRAFT
            "Visible to everyone"
            PUBLISHED
            ARCHIVED @deprecated
        }

        input PostFilter {
            status: Status
            authorId: ID!
        }

        type Query {
            node(id: ID!): Node
            search(text: String!, filter: PostFilter): [SearchResult!]!
            posts(status: Status = PUBLISHED): [Post!]!
        }
    ''')


class TestObjects:
    """Tests for object compilation."""

    def test_document_order(self, blog):
        assert [obj.name for obj in blog.objects] == ["User", "Post", "Query"]

    def test_description_and_interfaces(self, blog):
        user = blog.get_object("User")
        assert user.description == "A blog author"
        assert user.interfaces == ("Node",)

    def test_field_names(self, blog):
        legacy = field(blog, "User", "legacyName")
        assert legacy.python_name == "legacy_name"
        assert legacy.contract_name == "field_legacy_name"
        assert legacy.glue_name == "resolve_legacy_name"

    def test_return_types(self, blog):
        assert field(blog, "User", "id").return_type == Scalar("ID", "ID")
        assert field(blog, "User", "name").return_type == Scalar("String", "str")
        assert field(blog, "User", "posts").return_type == List(Object("Post"))
        assert field(blog, "User", "joined").return_type == Nullable(Scalar("Date", "date"))
        assert field(blog, "Query", "node").return_type == Nullable(Interface("Node"))
        assert field(blog, "Query", "search").return_type == List(Union("SearchResult"))

    def test_as_ref_wraps_outermost_layer(self, blog):
        friends = field(blog, "User", "friends")
        assert friends.directives.ownership is Ownership.AS_REF
        assert friends.return_type == Nullable(Ref(List(Object("User"))))

    def test_trail_needed_for_nodes(self, blog):
        assert field(blog, "User", "posts").needs_trail
        assert field(blog, "User", "posts").trail_type == Object("Post")
        assert not field(blog, "User", "name").needs_trail

    def test_directives(self, blog):
        author = field(blog, "Post", "author")
        assert author.directives.infallible
        assert author.is_async

    def test_deprecation(self, blog):
        assert field(blog, "User", "legacyName").deprecated == Deprecation("Use `name`")


class TestArguments:
    """Tests for field argument compilation."""

    def test_default_value(self, blog):
        first, after = field(blog, "User", "posts").args
        assert first.name == "first"
        assert first.default == "10"
        assert first.type == Nullable(Scalar("Int", "int"))
        assert first.signature_type == Scalar("Int", "int")
        assert after.default is None
        assert after.signature_type == Nullable(Scalar("Cursor"))

    def test_enum_default(self, blog):
        [status] = field(blog, "Query", "posts").args
        assert status.default == "Status.Published"
        assert status.type == Nullable(Enum("Status"))

    def test_input_object_argument(self, blog):
        _, filter_arg = field(blog, "Query", "search").args
        assert filter_arg.type == Nullable(Object("PostFilter"))

    def test_reserved_parameter_names(self):
        compiled = compile_schema("type Query { items(trail: String, class: Int): [Int] }")
        names = [arg.python_name for arg in field(compiled, "Query", "items").args]
        assert names == ["trail_", "class_"]

    def test_non_null_argument_with_default(self):
        assert compile_codes("type Query { users(first: Int! = 10): [Int] }") == [
            ErrorCode.NONNULLABLE_FIELD_WITH_DEFAULT_VALUE
        ]

    def test_default_overflow_raises(self):
        with pytest.raises(DefaultValueOverflowError):
            compile_schema("type Query { users(first: Int = 3000000000): [Int] }")

    def test_directives_on_arguments(self):
        assert compile_codes("type Query { users(first: Int @deprecated): [Int] }") == [
            ErrorCode.UNSUPPORTED_DIRECTIVE
        ]


class TestOtherEntities:
    """Tests for interfaces, unions, enums, input objects and scalars."""

    def test_interface(self, blog):
        [node] = blog.interfaces
        assert node.name == "Node"
        assert node.implementors == ("User", "Post")
        assert [f.name for f in node.fields] == ["id"]

    def test_union(self, blog):
        [union] = blog.unions
        assert [(v.name, v.python_name) for v in union.variants] == [("User", "user"), ("Post", "post")]
        assert union.variants[0].type == Object("User")

    def test_enum(self, blog):
        [status] = blog.enums
        assert status.python_name == "Status"
        assert [v.python_name for v in status.variants] == ["Draft", "Published", "Archived"]
        assert status.variants[1].description == "Visible to everyone"
        assert status.variants[2].deprecated == Deprecation(None)

    def test_input_object(self, blog):
        [post_filter] = blog.input_objects
        assert [(f.name, f.python_name) for f in post_filter.fields] == [
            ("status", "status"),
            ("authorId", "author_id"),
        ]
        assert post_filter.fields[1].type == Scalar("ID", "ID")

    def test_custom_scalars(self, blog):
        # Reserved scalars get no wrapper class
        assert [s.name for s in blog.scalars] == ["Cursor"]

    def test_schema_type(self, blog):
        assert blog.schema.query == "Query"
        assert blog.schema.mutation is None
        assert blog.schema.subscription is None

    def test_query_trails_for_every_object(self, blog):
        assert [t.class_name for t in blog.query_trails] == ["UserTrail", "PostTrail", "QueryTrail"]


class TestSubscriptions:
    """Tests for the subscription root."""

    def test_owned_subscription_compiles(self):
        compiled = compile_schema('''
            type Query { ping: Boolean }
            type Subscription {
                counter: [Int!] @juniper(ownership: "owned", stream_item_infallible: false)
            }
        ''')
        assert compiled.subscription.name == "Subscription"
        assert compiled.get_object("Subscription") is None
        assert compiled.schema.subscription == "Subscription"
        [counter] = compiled.subscription.fields
        assert not counter.directives.stream_items_are_infallible

    def test_subscription_field_must_be_owned(self):
        assert compile_codes('''
            type Query { ping: Boolean }
            type Subscription { counter: [Int!] @juniper(ownership: "as_ref") }
        ''') == [ErrorCode.SUBSCRIPTION_FIELD_MUST_BE_OWNED]

    def test_default_ownership_is_not_owned(self):
        assert compile_codes('''
            type Query { ping: Boolean }
            type Subscription { counter: Int! }
        ''') == [ErrorCode.SUBSCRIPTION_FIELD_MUST_BE_OWNED]

    def test_subscriptions_cannot_implement_interfaces(self):
        codes = compile_codes('''
            interface Node { id: ID! }
            type Query { ping: Boolean }
            type Subscription implements Node { id: ID! @juniper(ownership: "owned") }
        ''')
        assert codes == [ErrorCode.SUBSCRIPTIONS_CANNOT_IMPLEMENT_INTERFACES]

    def test_stream_type(self):
        compiled = compile_schema('''
            type Query { ping: Boolean }
            type Subscription {
                ticks: Int! @juniper(ownership: "owned", stream_type: "AsyncIterator[int]")
            }
        ''')
        assert compiled.subscription.fields[0].directives.stream_type == "AsyncIterator[int]"

    def test_invalid_stream_type(self):
        [error] = compile_errors('''
            type Query { ping: Boolean }
            type Subscription {
                ticks: Int! @juniper(ownership: "owned", stream_type: "AsyncIterator[")
            }
        ''')
        assert error.code is ErrorCode.INVALID_STREAM_RETURN_TYPE
        assert error.note

    def test_stream_arguments_only_on_subscriptions(self):
        codes = compile_codes('''
            type Query {
                a: Int @juniper(stream_type: "X")
                b: Int @juniper(stream_item_infallible: false)
            }
        ''')
        assert codes == [
            ErrorCode.STREAM_TYPE_NOT_SUPPORTED_HERE,
            ErrorCode.STREAM_ITEM_INFALLIBLE_NOT_SUPPORTED_HERE,
        ]


class TestDiagnostics:
    """Tests for compile diagnostics."""

    def test_single_word_field_is_fine(self):
        compiled = compile_schema("type Query { name: String }")
        assert compiled.objects[0].fields[0].name == "name"

    def test_snake_case_field_position(self):
        [error] = compile_errors("type Query { user_name: String }")
        assert error.code is ErrorCode.FIELD_NAME_IN_SNAKE_CASE
        assert error.pos == Pos(1, 14)

    def test_validation_checkpoint_stops_compilation(self):
        # The undeclared Uuid would be reported by the second pass only
        codes = compile_codes("type Query { user_id: Uuid }")
        assert codes == [ErrorCode.FIELD_NAME_IN_SNAKE_CASE]

    def test_uppercase_reserved_scalar(self):
        assert compile_codes("scalar UUID type Query { id: UUID }") == [
            ErrorCode.UPPERCASE_RESERVED_SCALAR
        ]

    def test_errors_accumulate_in_position_order(self):
        errors = compile_errors('''
            type Query {
                a: Date
                b: Url
            }
            input Filter { limit: Int = 5 }
        ''')
        assert [e.code for e in errors] == [
            ErrorCode.DATE_SCALAR_NOT_DEFINED,
            ErrorCode.URL_SCALAR_NOT_DEFINED,
            ErrorCode.INPUT_TYPE_FIELD_WITH_DEFAULT_VALUE,
        ]
        assert errors == sorted(errors)

    @pytest.mark.parametrize(
        "interface_async, object_async",
        [("true", "false"), ("false", "true")],
    )
    def test_async_must_match_interface(self, interface_async, object_async):
        [error] = compile_errors(f'''
            interface Named {{ name: String! @juniper(async: {interface_async}) }}
            type Pet implements Named {{
                name: String! @juniper(async: {object_async})
            }}
            type Query {{ pet: Pet }}
        ''')
        assert error.code is ErrorCode.ASYNC_MISMATCH_WITH_INTERFACE
        assert error.detail == "`Pet.name` and `Named.name`"
        assert error.pos == Pos(4, 17)

    def test_matching_async_is_accepted(self):
        compiled = compile_schema('''
            interface Named { name: String! @juniper(async: true) }
            type Pet implements Named { name: String! @juniper(async: true) }
            type Query { pet: Pet }
        ''')
        assert field(compiled, "Pet", "name").is_async

    @pytest.mark.parametrize("field_type", ["Int", "Int!"])
    def test_input_field_default(self, field_type):
        codes = compile_codes(f"type Query {{ a: Int }} input Filter {{ limit: {field_type} = 5 }}")
        assert codes == [ErrorCode.INPUT_TYPE_FIELD_WITH_DEFAULT_VALUE]

    def test_as_ref_on_named_type(self):
        codes = compile_codes('type Query { name: String! @juniper(ownership: "as_ref") }')
        assert codes == [ErrorCode.AS_REF_OWNERSHIP_FOR_NAMED_TYPE]

    def test_type_extensions(self):
        codes = compile_codes("type Query { a: Int } extend type Query { b: Int }")
        assert codes == [ErrorCode.TYPE_EXTENSION_NOT_SUPPORTED]

    def test_no_query_type(self):
        assert compile_codes("type Mutation { a: Int }") == [ErrorCode.NO_QUERY_TYPE]

    def test_schema_without_query(self):
        codes = compile_codes("schema { mutation: M } type M { a: Int }")
        assert codes == [ErrorCode.NO_QUERY_TYPE]

    def test_builtin_scalar_redeclared(self):
        codes = compile_codes("scalar String type Query { a: String }")
        assert codes == [ErrorCode.CANNOT_DECLARE_BUILTIN_AS_SCALAR]

    def test_reserved_scalar_with_description(self):
        codes = compile_codes('"A day" scalar Date type Query { a: Date }')
        assert codes == [ErrorCode.SPECIAL_CASE_SCALAR_WITH_DESCRIPTION]

    def test_directives_on_custom_scalar(self):
        codes = compile_codes("scalar Cursor @juniper(with_time_zone: false) type Query { a: Cursor }")
        assert codes == [ErrorCode.UNSUPPORTED_DIRECTIVE]

    def test_directives_on_types(self):
        codes = compile_codes("type Query @key { a: Int }")
        assert codes == [ErrorCode.UNSUPPORTED_DIRECTIVE]

    def test_invalid_juniper_definition(self):
        codes = compile_codes('''
            directive @juniper(ownership: String = "borrowed") on FIELD_DEFINITION
            type Query { a: Int }
        ''')
        assert set(codes) == {ErrorCode.INVALID_JUNIPER_DIRECTIVE}

    def test_other_directive_definitions_ignored(self):
        compile_schema("directive @key on OBJECT type Query { a: Int }")


class TestReservedScalars:
    """Tests for Date, DateTime, Uuid and Url."""

    def test_declared_uuid(self):
        compiled = compile_schema("scalar Uuid type Query { id: Uuid! }")
        assert field(compiled, "Query", "id").return_type == Scalar("Uuid", "UUID")

    def test_undeclared_uuid(self):
        sdl = "type Query { id: Uuid }"
        assert compile_codes(sdl) == [ErrorCode.UUID_SCALAR_NOT_DEFINED]

        document = parse(sdl)
        compiler = SchemaCompiler(AstData.build(document))
        ty = compiler.map_type(parse_type("Uuid"), as_ref=False, pos=Pos(1, 1))
        assert ty == Nullable(Scalar("Uuid", "UUID"))
        assert compiler.errors.codes() == [ErrorCode.UUID_SCALAR_NOT_DEFINED]

    def test_date_time_with_time_zone(self):
        compiled = compile_schema("scalar DateTime type Query { now: DateTime! }")
        assert field(compiled, "Query", "now").return_type == Scalar("DateTime", "AwareDatetime")

    def test_date_time_without_time_zone(self):
        compiled = compile_schema(
            "scalar DateTime @juniper(with_time_zone: false) type Query { now: DateTime! }"
        )
        assert field(compiled, "Query", "now").return_type == Scalar("DateTime", "NaiveDatetime")

    def test_undeclared_date_time(self):
        assert compile_codes("type Query { now: DateTime }") == [ErrorCode.DATE_TIME_SCALAR_NOT_DEFINED]

    def test_url(self):
        compiled = compile_schema("scalar Url type Query { home: Url }")
        assert field(compiled, "Query", "home").return_type == Nullable(Scalar("Url", "AnyUrl"))


class TestMapType:
    """Tests for SchemaCompiler.map_type."""

    @pytest.fixture
    def compiler(self):
        document = parse("""
            enum Color { RED }
            union U = A
            interface I { id: ID }
            type A { id: ID }
            type Query { a: A }
        """)
        return SchemaCompiler(AstData.build(document))

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Color!", Enum("Color")),
            ("U", Nullable(Union("U"))),
            ("[I!]!", List(Interface("I"))),
            ("[A]", Nullable(List(Nullable(Object("A"))))),
            ("Elsewhere!", Object("Elsewhere")),
        ],
    )
    def test_classification(self, compiler, text, expected):
        assert compiler.map_type(parse_type(text), as_ref=False, pos=Pos(1, 1)) == expected

    def test_deterministic(self, compiler):
        node = parse_type("[Color!]")
        first = compiler.map_type(node, as_ref=True, pos=Pos(1, 1))
        second = compiler.map_type(node, as_ref=True, pos=Pos(1, 1))
        assert first == second == Nullable(Ref(List(Enum("Color"))))
        assert not compiler.errors
