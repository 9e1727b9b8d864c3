"""Tests for the nullable-first type algebra."""

import pytest
from graphql import parse_type

from gql_bindgen.core.nullable_type import ListOf, Named, NullableOf, from_type_node, type_name


class TestFromTypeNode:
    """Tests for from_type_node."""

    def test_plain_name_is_nullable(self):
        assert from_type_node(parse_type("String")) == NullableOf(Named("String"))

    def test_non_null_name(self):
        assert from_type_node(parse_type("String!")) == Named("String")

    def test_nullable_list_of_nullable(self):
        assert from_type_node(parse_type("[Int]")) == NullableOf(ListOf(NullableOf(Named("Int"))))

    def test_non_null_list_of_non_null(self):
        assert from_type_node(parse_type("[Int!]!")) == ListOf(Named("Int"))

    def test_nested_lists(self):
        result = from_type_node(parse_type("[[User!]]!"))
        assert result == ListOf(NullableOf(ListOf(Named("User"))))

    def test_rejects_other_nodes(self):
        with pytest.raises(TypeError):
            from_type_node("String")


class TestTypeName:
    """Tests for type_name."""

    @pytest.mark.parametrize("text", ["User", "User!", "[User]", "[[User!]!]"])
    def test_innermost_name(self, text):
        assert type_name(parse_type(text)) == "User"
