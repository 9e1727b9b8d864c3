"""Parsing and validation of the ``@juniper`` and ``@deprecated`` directives.

The ``@juniper`` directive has a fixed grammar::

    directive @juniper(
        ownership: String = "borrowed",
        infallible: Boolean = false,
        with_time_zone: Boolean = true,
        async: Boolean = false,
        stream_item_infallible: Boolean = true,
        stream_type: String = null
    ) on FIELD_DEFINITION | SCALAR

Schemas may declare it (it is then checked against the grammar) and use it on
field definitions and scalars. Parsing never stops at the first problem: bad
arguments are reported and their defaults are kept.
"""

import enum
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from graphql import (
    BooleanValueNode,
    DirectiveDefinitionNode,
    DirectiveNode,
    NamedTypeNode,
    NullValueNode,
    StringValueNode,
    ValueNode,
    print_ast,
)

from .errors import ErrorCode, ErrorSet, pos_of

FIELD_DEFINITION = "FIELD_DEFINITION"
SCALAR = "SCALAR"


class Ownership(enum.Enum):
    """How a resolver hands out the value it returns."""
    OWNED = "owned"
    BORROWED = "borrowed"
    AS_REF = "as_ref"

    def is_as_ref(self) -> bool:
        return self is Ownership.AS_REF


@dataclass(frozen=True)
class Deprecation:
    """A ``@deprecated`` marker; ``reason`` is optional."""
    reason: Optional[str] = None


@dataclass(frozen=True)
class FieldDirectives:
    """Behavioural annotations of a single field definition."""
    ownership: Ownership = Ownership.BORROWED
    infallible: bool = False
    is_async: bool = False
    stream_type: Optional[str] = None
    stream_item_infallible: Optional[bool] = None
    deprecated: Optional[Deprecation] = None

    @property
    def stream_items_are_infallible(self) -> bool:
        if self.stream_item_infallible is None:
            return True
        return self.stream_item_infallible


@dataclass(frozen=True)
class ScalarDirectives:
    with_time_zone: bool = True


@dataclass(frozen=True)
class DirectiveArgument:
    """One named argument of a directive grammar."""
    name: str
    type_name: str
    default: Any
    location: str


@dataclass(frozen=True)
class DirectiveGrammar:
    """Static declaration of a directive: name, locations and arguments."""
    name: str
    locations: tuple[str, ...]
    arguments: tuple[DirectiveArgument, ...]

    def argument(self, name: str) -> Optional[DirectiveArgument]:
        for argument in self.arguments:
            if argument.name == name:
                return argument
        return None

    def argument_names(self, location: Optional[str] = None) -> list[str]:
        return [
            argument.name
            for argument in self.arguments
            if location is None or argument.location == location
        ]


JUNIPER_DIRECTIVE = DirectiveGrammar(
    name="juniper",
    locations=(FIELD_DEFINITION, SCALAR),
    arguments=(
        DirectiveArgument("ownership", "String", "borrowed", FIELD_DEFINITION),
        DirectiveArgument("infallible", "Boolean", False, FIELD_DEFINITION),
        DirectiveArgument("with_time_zone", "Boolean", True, SCALAR),
        DirectiveArgument("async", "Boolean", False, FIELD_DEFINITION),
        DirectiveArgument("stream_item_infallible", "Boolean", True, FIELD_DEFINITION),
        DirectiveArgument("stream_type", "String", None, FIELD_DEFINITION),
    ),
)

DEPRECATED_DIRECTIVE = "deprecated"


def graphql_literal(value: Any) -> str:
    """Render a Python constant the way it is written in SDL."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def format_names(names: Iterable[str]) -> str:
    """Format names as "`a`, `b`, and `c`"."""
    quoted = [f"`{name}`" for name in names]
    if len(quoted) <= 1:
        return "".join(quoted)
    if len(quoted) == 2:
        return f"{quoted[0]} and {quoted[1]}"
    return ", ".join(quoted[:-1]) + f", and {quoted[-1]}"


def literal_matches(node: Optional[ValueNode], expected: Any) -> bool:
    """Check that a literal value node holds exactly ``expected``."""
    if expected is None:
        return isinstance(node, NullValueNode)
    if isinstance(expected, bool):
        return isinstance(node, BooleanValueNode) and node.value is expected
    if isinstance(expected, str):
        return isinstance(node, StringValueNode) and node.value == expected
    return False


# =============================================================================
# Directive definitions
# =============================================================================


def validate_directive_definition(
    node: DirectiveDefinitionNode,
    errors: ErrorSet,
    grammar: DirectiveGrammar = JUNIPER_DIRECTIVE,
) -> None:
    """Check a schema's declaration of a directive against its fixed grammar."""
    position = pos_of(node)
    location_note = "Location must be " + " | ".join(f"`{loc}`" for loc in grammar.locations)
    declared_locations = [location.value for location in node.locations]

    for location in declared_locations:
        if location not in grammar.locations:
            errors.emit(
                position,
                ErrorCode.INVALID_JUNIPER_DIRECTIVE,
                f"Invalid location for @{grammar.name} directive: `{location}`",
                location_note,
            )

    for location in grammar.locations:
        if location not in declared_locations:
            errors.emit(
                position,
                ErrorCode.INVALID_JUNIPER_DIRECTIVE,
                f"Missing `{location}` directive location for @{grammar.name} directive",
                location_note,
            )

    present = set()
    for arg in node.arguments or ():
        name = arg.name.value
        grammar_arg = grammar.argument(name)
        if grammar_arg is None:
            errors.emit(
                pos_of(arg),
                ErrorCode.INVALID_JUNIPER_DIRECTIVE,
                f"Invalid argument for @{grammar.name} directive: `{name}`",
                f"Supported arguments are {format_names(grammar.argument_names())}",
            )
            continue
        present.add(name)

        if not (isinstance(arg.type, NamedTypeNode) and arg.type.name.value == grammar_arg.type_name):
            errors.emit(
                pos_of(arg),
                ErrorCode.INVALID_JUNIPER_DIRECTIVE,
                f"`{name}` argument must have type `{grammar_arg.type_name}`",
                f"Got `{print_ast(arg.type)}`",
            )

        for directive in arg.directives or ():
            errors.emit(
                pos_of(directive),
                ErrorCode.INVALID_JUNIPER_DIRECTIVE,
                f"`{name}` argument doesn't support directives",
            )

        expected = graphql_literal(grammar_arg.default)
        if arg.default_value is None:
            errors.emit(
                pos_of(arg),
                ErrorCode.INVALID_JUNIPER_DIRECTIVE,
                f"Missing default value for `{name}` argument. Must be `{expected}`",
            )
        elif not literal_matches(arg.default_value, grammar_arg.default):
            errors.emit(
                pos_of(arg),
                ErrorCode.INVALID_JUNIPER_DIRECTIVE,
                f"Invalid default value for `{name}` argument. Must be `{expected}`",
                f"Got `{print_ast(arg.default_value)}`",
            )

    for grammar_arg in grammar.arguments:
        if grammar_arg.name not in present:
            errors.emit(
                position,
                ErrorCode.INVALID_JUNIPER_DIRECTIVE,
                f"Missing argument `{grammar_arg.name}`",
            )


# =============================================================================
# Directive usages
# =============================================================================


def _juniper_arguments(
    directive: DirectiveNode,
    location: str,
    errors: ErrorSet,
    grammar: DirectiveGrammar = JUNIPER_DIRECTIVE,
) -> dict[str, Any]:
    """Parse the arguments of one ``@juniper`` usage into Python values.

    Only arguments that parsed cleanly appear in the result.
    """
    values: dict[str, Any] = {}
    valid_here = grammar.argument_names(location)

    for arg in directive.arguments or ():
        name = arg.name.value
        position = pos_of(arg)
        grammar_arg = grammar.argument(name)

        if grammar_arg is None:
            errors.emit(
                position,
                ErrorCode.UNKNOWN_DIRECTIVE_ARGUMENT,
                f"`{name}`",
                f"Valid arguments are {format_names(valid_here)}",
            )
            continue

        if grammar_arg.location != location:
            where = "scalars" if grammar_arg.location == SCALAR else "field definitions"
            errors.emit(
                position,
                ErrorCode.INVALID_DIRECTIVE_ARGUMENT,
                f"`{name}` is only supported on {where}",
                f"Valid arguments are {format_names(valid_here)}",
            )
            continue

        value = arg.value
        if grammar_arg.type_name == "Boolean":
            if not isinstance(value, BooleanValueNode):
                errors.emit(
                    position,
                    ErrorCode.INVALID_DIRECTIVE_ARGUMENT,
                    f"`{name}` must be a Boolean",
                    f"Got `{print_ast(value)}`",
                )
                continue
            values[name] = value.value
        else:
            if isinstance(value, NullValueNode) and grammar_arg.default is None:
                values[name] = None
                continue
            if not isinstance(value, StringValueNode):
                errors.emit(
                    position,
                    ErrorCode.INVALID_DIRECTIVE_ARGUMENT,
                    f"`{name}` must be a String",
                    f"Got `{print_ast(value)}`",
                )
                continue
            values[name] = value.value

    if "ownership" in values:
        try:
            values["ownership"] = Ownership(values["ownership"])
        except ValueError:
            errors.emit(
                pos_of(directive),
                ErrorCode.INVALID_DIRECTIVE_ARGUMENT,
                f"Invalid ownership `{values['ownership']}`",
                f"Must be one of {format_names(o.value for o in Ownership)}",
            )
            del values["ownership"]

    return values


def _deprecation(directive: DirectiveNode, errors: ErrorSet) -> Deprecation:
    reason = None
    for arg in directive.arguments or ():
        name = arg.name.value
        if name != "reason":
            errors.emit(
                pos_of(arg),
                ErrorCode.UNKNOWN_DIRECTIVE_ARGUMENT,
                f"`{name}`",
                "Valid arguments are `reason`",
            )
        elif isinstance(arg.value, StringValueNode):
            reason = arg.value.value
        elif not isinstance(arg.value, NullValueNode):
            errors.emit(
                pos_of(arg),
                ErrorCode.INVALID_DIRECTIVE_ARGUMENT,
                "`reason` must be a String",
                f"Got `{print_ast(arg.value)}`",
            )
    return Deprecation(reason)


def _unsupported(directive: DirectiveNode, errors: ErrorSet) -> None:
    errors.emit(pos_of(directive), ErrorCode.UNSUPPORTED_DIRECTIVE, f"`@{directive.name.value}`")


def parse_field_directives(
    directives: Optional[Iterable[DirectiveNode]],
    errors: ErrorSet,
) -> FieldDirectives:
    """Parse the directives of a field definition."""
    values: dict[str, Any] = {}
    deprecated = None

    for directive in directives or ():
        name = directive.name.value
        if name == JUNIPER_DIRECTIVE.name:
            values.update(_juniper_arguments(directive, FIELD_DEFINITION, errors))
        elif name == DEPRECATED_DIRECTIVE:
            deprecated = _deprecation(directive, errors)
        else:
            _unsupported(directive, errors)

    return FieldDirectives(
        ownership=values.get("ownership", Ownership.BORROWED),
        infallible=values.get("infallible", False),
        is_async=values.get("async", False),
        stream_type=values.get("stream_type"),
        stream_item_infallible=values.get("stream_item_infallible"),
        deprecated=deprecated,
    )


def parse_scalar_directives(
    directives: Optional[Iterable[DirectiveNode]],
    errors: ErrorSet,
) -> ScalarDirectives:
    """Parse the directives of a scalar definition."""
    values: dict[str, Any] = {}
    for directive in directives or ():
        if directive.name.value == JUNIPER_DIRECTIVE.name:
            values.update(_juniper_arguments(directive, SCALAR, errors))
        else:
            _unsupported(directive, errors)
    return ScalarDirectives(with_time_zone=values.get("with_time_zone", True))


def parse_deprecation(
    directives: Optional[Iterable[DirectiveNode]],
    errors: ErrorSet,
) -> Optional[Deprecation]:
    """Parse the directives of an enum value; only ``@deprecated`` is allowed."""
    deprecated = None
    for directive in directives or ():
        if directive.name.value == DEPRECATED_DIRECTIVE:
            deprecated = _deprecation(directive, errors)
        else:
            _unsupported(directive, errors)
    return deprecated


def reject_directives(
    directives: Optional[Iterable[DirectiveNode]],
    errors: ErrorSet,
) -> None:
    """Report every directive used at a position that supports none."""
    for directive in directives or ():
        _unsupported(directive, errors)
