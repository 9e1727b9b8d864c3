"""Translate GraphQL default-value literals into Python expressions.

The result is source text that is spliced into generated resolver glue, so
``[RED, GREEN]`` for an argument of enum type ``Color`` becomes
``[Color.Red, Color.Green]``.
"""

import math

from graphql import (
    BooleanValueNode,
    EnumValueNode,
    FloatValueNode,
    IntValueNode,
    ListValueNode,
    NullValueNode,
    ObjectValueNode,
    StringValueNode,
    ValueNode,
    VariableNode,
)

from .ast_data import AstData
from .errors import DefaultValueOverflowError, ErrorCode, ErrorSet, Pos
from .naming import camel_case, safe_name, snake_case

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


def quote_value(
    value: ValueNode,
    type_name: str,
    pos: Pos,
    ast_data: AstData,
    errors: ErrorSet,
) -> str:
    """Return the Python expression for a literal of the named type.

    Raises:
        DefaultValueOverflowError: If an integer literal does not fit in a
            signed 32-bit integer.
    """
    if isinstance(value, FloatValueNode):
        number = float(value.value)
        if not math.isfinite(number):
            errors.emit(
                pos,
                ErrorCode.INVALID_DEFAULT_VALUE,
                f"`{value.value}` is not a finite `Float`",
            )
            return "None"
        return repr(number)

    if isinstance(value, IntValueNode):
        number = int(value.value)
        if not INT32_MIN <= number <= INT32_MAX:
            raise DefaultValueOverflowError(pos, value.value)
        if type_name == "Float":
            return repr(float(number))
        return repr(number)

    if isinstance(value, StringValueNode):
        return repr(value.value)

    if isinstance(value, BooleanValueNode):
        return "True" if value.value else "False"

    if isinstance(value, NullValueNode):
        return "None"

    if isinstance(value, EnumValueNode):
        if not ast_data.is_enum(type_name):
            errors.emit(
                pos,
                ErrorCode.INVALID_DEFAULT_VALUE,
                f"`{value.value}` is not a value of `{type_name}`",
            )
        return f"{camel_case(type_name)}.{safe_name(camel_case(value.value))}"

    if isinstance(value, ListValueNode):
        items = ", ".join(
            quote_value(item, type_name, pos, ast_data, errors) for item in value.values
        )
        return f"[{items}]"

    if isinstance(value, ObjectValueNode):
        return _quote_object_value(value, type_name, pos, ast_data, errors)

    if isinstance(value, VariableNode):
        errors.emit(pos, ErrorCode.VARIABLE_DEFAULT_VALUE, f"`${value.name.value}`")
        return "None"

    raise TypeError(f"Unexpected value node {type(value).__name__}")


def _quote_object_value(
    value: ObjectValueNode,
    type_name: str,
    pos: Pos,
    ast_data: AstData,
    errors: ErrorSet,
) -> str:
    if not ast_data.is_input_object(type_name):
        errors.emit(
            pos,
            ErrorCode.INVALID_DEFAULT_VALUE,
            f"`{type_name}` is not an input object",
        )
        return "None"

    given = {field.name.value: field.value for field in value.fields}
    for key in given:
        if ast_data.input_object_field(type_name, key) is None:
            errors.emit(
                pos,
                ErrorCode.INVALID_DEFAULT_VALUE,
                f"`{type_name}` has no field `{key}`",
            )

    # Fields missing from the literal are set to None
    assignments = []
    for info in ast_data.input_objects[type_name]:
        if info.name in given:
            quoted = quote_value(given[info.name], info.type_name, pos, ast_data, errors)
        else:
            quoted = "None"
        assignments.append(f"{safe_name(snake_case(info.name))}={quoted}")

    return f"{type_name}({', '.join(assignments)})"
