"""Tests for default-value literal translation."""

import pytest
from graphql import parse, parse_value

from gql_bindgen.core.ast_data import AstData
from gql_bindgen.core.errors import DefaultValueOverflowError, ErrorCode, ErrorSet, Pos
from gql_bindgen.core.literals import quote_value

POS = Pos(3, 7)


@pytest.fixture
def ast_data():
    return AstData.build(parse("""
        enum Color { RED DARK_BLUE }
        input Point { x: Int! y: Int! }
        input Shape {
            fillColor: Color
            points: [Point!]
            class: String
        }
    """))


@pytest.fixture
def errors():
    return ErrorSet()


def quote(text, type_name, ast_data, errors):
    return quote_value(parse_value(text), type_name, POS, ast_data, errors)


class TestScalars:
    """Tests for scalar literals."""

    def test_int(self, ast_data, errors):
        assert quote("42", "Int", ast_data, errors) == "42"

    def test_negative_int(self, ast_data, errors):
        assert quote("-7", "Int", ast_data, errors) == "-7"

    def test_int_for_float_argument(self, ast_data, errors):
        assert quote("1", "Float", ast_data, errors) == "1.0"

    def test_float(self, ast_data, errors):
        assert quote("2.5", "Float", ast_data, errors) == "2.5"

    @pytest.mark.parametrize("text", ["1e400", "-1e400"])
    def test_float_out_of_range(self, ast_data, errors, text):
        assert quote(text, "Float", ast_data, errors) == "None"
        assert errors.codes() == [ErrorCode.INVALID_DEFAULT_VALUE]
        [error] = errors
        assert error.detail == f"`{text}` is not a finite `Float`"
        assert error.pos == POS

    def test_string(self, ast_data, errors):
        assert quote('"it\'s"', "String", ast_data, errors) == repr("it's")

    def test_booleans(self, ast_data, errors):
        assert quote("true", "Boolean", ast_data, errors) == "True"
        assert quote("false", "Boolean", ast_data, errors) == "False"

    def test_null(self, ast_data, errors):
        assert quote("null", "String", ast_data, errors) == "None"
        assert not errors

    def test_int32_bounds(self, ast_data, errors):
        assert quote("2147483647", "Int", ast_data, errors) == "2147483647"
        assert quote("-2147483648", "Int", ast_data, errors) == "-2147483648"

    def test_overflow_raises(self, ast_data, errors):
        with pytest.raises(DefaultValueOverflowError) as exc_info:
            quote("2147483648", "Int", ast_data, errors)
        assert exc_info.value.pos == POS
        assert exc_info.value.literal == "2147483648"


class TestEnums:
    """Tests for enum literals."""

    def test_enum_value(self, ast_data, errors):
        assert quote("DARK_BLUE", "Color", ast_data, errors) == "Color.DarkBlue"
        assert not errors

    def test_enum_for_non_enum_type(self, ast_data, errors):
        quote("RED", "String", ast_data, errors)
        assert errors.codes() == [ErrorCode.INVALID_DEFAULT_VALUE]


class TestLists:
    """Tests for list literals."""

    def test_list_of_enums(self, ast_data, errors):
        assert quote("[RED, DARK_BLUE]", "Color", ast_data, errors) == "[Color.Red, Color.DarkBlue]"

    def test_empty_list(self, ast_data, errors):
        assert quote("[]", "Int", ast_data, errors) == "[]"


class TestObjects:
    """Tests for input object literals."""

    def test_missing_fields_are_none(self, ast_data, errors):
        result = quote("{fillColor: RED}", "Shape", ast_data, errors)
        assert result == "Shape(fill_color=Color.Red, points=None, class_=None)"
        assert not errors

    def test_nested_objects(self, ast_data, errors):
        result = quote("{points: [{x: 1, y: 2}]}", "Shape", ast_data, errors)
        assert result == "Shape(fill_color=None, points=[Point(x=1, y=2)], class_=None)"

    def test_declaration_order(self, ast_data, errors):
        assert quote("{y: 1, x: 2}", "Point", ast_data, errors) == "Point(x=2, y=1)"

    def test_unknown_field(self, ast_data, errors):
        quote("{x: 1, z: 3}", "Point", ast_data, errors)
        [error] = list(errors)
        assert error.code is ErrorCode.INVALID_DEFAULT_VALUE
        assert error.detail == "`Point` has no field `z`"

    def test_object_for_non_input_type(self, ast_data, errors):
        assert quote("{x: 1}", "Color", ast_data, errors) == "None"
        assert errors.codes() == [ErrorCode.INVALID_DEFAULT_VALUE]


class TestVariables:
    """Tests for variable literals."""

    def test_variable_is_reported(self, ast_data, errors):
        assert quote("$limit", "Int", ast_data, errors) == "None"
        [error] = list(errors)
        assert error.code is ErrorCode.VARIABLE_DEFAULT_VALUE
        assert error.pos == POS
