"""Tests for the resolved type model."""

import pytest

from gql_bindgen.core.type_model import (
    NODE_KINDS,
    Enum,
    Interface,
    List,
    Nullable,
    Object,
    Ref,
    Scalar,
    TypeKind,
    Union,
)


class TestKind:
    """Tests for Type.kind and needs_trail."""

    @pytest.mark.parametrize(
        "ty, kind",
        [
            (Scalar("String", "str"), TypeKind.SCALAR),
            (Enum("Color"), TypeKind.ENUM),
            (Union("SearchResult"), TypeKind.UNION),
            (Interface("Node"), TypeKind.INTERFACE),
            (Object("User"), TypeKind.OBJECT),
        ],
    )
    def test_named_kinds(self, ty, kind):
        assert ty.kind() is kind

    def test_wrappers_are_transparent(self):
        ty = Nullable(List(Ref(Nullable(Object("User")))))
        assert ty.kind() is TypeKind.OBJECT
        assert ty.innermost_type() == Object("User")

    def test_node_kinds(self):
        assert NODE_KINDS == {TypeKind.OBJECT, TypeKind.INTERFACE, TypeKind.UNION}

    def test_objects_need_trails(self):
        assert List(Object("User")).needs_trail()
        assert Nullable(Interface("Node")).needs_trail()
        assert Union("SearchResult").needs_trail()

    def test_leaves_do_not_need_trails(self):
        assert not List(Scalar("Int", "int")).needs_trail()
        assert not Nullable(Enum("Color")).needs_trail()


class TestNullability:
    """Tests for nullability helpers."""

    def test_is_nullable(self):
        assert Nullable(Scalar("Int", "int")).is_nullable()
        assert not List(Nullable(Scalar("Int", "int"))).is_nullable()

    def test_remove_one_layer(self):
        inner = List(Nullable(Scalar("Int", "int")))
        assert Nullable(inner).remove_one_layer_of_nullability() == inner

    def test_remove_is_noop_on_non_null(self):
        ty = Object("User")
        assert ty.remove_one_layer_of_nullability() is ty

    def test_remove_only_strips_one_layer(self):
        ty = Nullable(Nullable(Enum("Color")))
        assert ty.remove_one_layer_of_nullability() == Nullable(Enum("Color"))


class TestSupportsAsRef:
    """Tests for supports_as_ref."""

    def test_wrappers_support_as_ref(self):
        assert List(Object("User")).supports_as_ref()
        assert Nullable(Object("User")).supports_as_ref()

    def test_named_types_do_not(self):
        assert not Object("User").supports_as_ref()
        assert not Scalar("String", "str").supports_as_ref()
