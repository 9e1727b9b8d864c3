"""Diagnostics and exceptions raised while compiling a schema.

Compile errors are values: every pass pushes ``CompileError`` instances into an
``ErrorSet`` and the compiler only turns the set into an exception at its two
checkpoints. Conditions that cannot be reported as a diagnostic are modelled as
exceptions deriving from ``BindgenError``.
"""

import enum
from dataclasses import dataclass
from typing import Iterable, Iterator, NamedTuple, Optional

from graphql.language import Node, get_location


class Pos(NamedTuple):
    """A 1-based line/column position in the SDL source."""
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


UNKNOWN_POS = Pos(0, 0)


def pos_of(node: Optional[Node]) -> Pos:
    """Return the source position of a graphql-core AST node."""
    if node is None or node.loc is None:
        return UNKNOWN_POS
    location = get_location(node.loc.source, node.loc.start)
    return Pos(location.line, location.column)


class ErrorCode(enum.IntEnum):
    """Kinds of diagnostics, in the order they sort at equal positions."""

    # Schema structure
    NO_QUERY_TYPE = enum.auto()
    TYPE_EXTENSION_NOT_SUPPORTED = enum.auto()
    CANNOT_DECLARE_BUILTIN_AS_SCALAR = enum.auto()
    SPECIAL_CASE_SCALAR_WITH_DESCRIPTION = enum.auto()
    SUBSCRIPTIONS_CANNOT_IMPLEMENT_INTERFACES = enum.auto()

    # Directive grammar
    INVALID_JUNIPER_DIRECTIVE = enum.auto()

    # Directive usage
    UNSUPPORTED_DIRECTIVE = enum.auto()
    UNKNOWN_DIRECTIVE_ARGUMENT = enum.auto()
    INVALID_DIRECTIVE_ARGUMENT = enum.auto()
    STREAM_TYPE_NOT_SUPPORTED_HERE = enum.auto()
    STREAM_ITEM_INFALLIBLE_NOT_SUPPORTED_HERE = enum.auto()
    INVALID_STREAM_RETURN_TYPE = enum.auto()
    AS_REF_OWNERSHIP_FOR_NAMED_TYPE = enum.auto()
    SUBSCRIPTION_FIELD_MUST_BE_OWNED = enum.auto()
    ASYNC_MISMATCH_WITH_INTERFACE = enum.auto()

    # Type resolution
    DATE_SCALAR_NOT_DEFINED = enum.auto()
    DATE_TIME_SCALAR_NOT_DEFINED = enum.auto()
    UUID_SCALAR_NOT_DEFINED = enum.auto()
    URL_SCALAR_NOT_DEFINED = enum.auto()
    VARIABLE_DEFAULT_VALUE = enum.auto()

    # Values
    NONNULLABLE_FIELD_WITH_DEFAULT_VALUE = enum.auto()
    INPUT_TYPE_FIELD_WITH_DEFAULT_VALUE = enum.auto()
    INVALID_DEFAULT_VALUE = enum.auto()

    # Naming conventions
    FIELD_NAME_IN_SNAKE_CASE = enum.auto()
    UPPERCASE_RESERVED_SCALAR = enum.auto()


_MESSAGES = {
    ErrorCode.NO_QUERY_TYPE: "Schema must have a query type",
    ErrorCode.TYPE_EXTENSION_NOT_SUPPORTED: "Type extensions are not supported",
    ErrorCode.CANNOT_DECLARE_BUILTIN_AS_SCALAR:
        "You cannot declare scalars with names that are built-in GraphQL scalars",
    ErrorCode.SPECIAL_CASE_SCALAR_WITH_DESCRIPTION:
        "Special case scalars don't support descriptions",
    ErrorCode.SUBSCRIPTIONS_CANNOT_IMPLEMENT_INTERFACES:
        "Subscription types cannot implement interfaces",
    ErrorCode.INVALID_JUNIPER_DIRECTIVE: "Invalid @juniper directive definition",
    ErrorCode.UNSUPPORTED_DIRECTIVE: "Unsupported directive",
    ErrorCode.UNKNOWN_DIRECTIVE_ARGUMENT: "Unknown directive argument",
    ErrorCode.INVALID_DIRECTIVE_ARGUMENT: "Invalid directive argument",
    ErrorCode.STREAM_TYPE_NOT_SUPPORTED_HERE:
        "`stream_type` is only supported on fields of the subscription type",
    ErrorCode.STREAM_ITEM_INFALLIBLE_NOT_SUPPORTED_HERE:
        "`stream_item_infallible` is only supported on fields of the subscription type",
    ErrorCode.INVALID_STREAM_RETURN_TYPE: "Invalid `stream_type`",
    ErrorCode.AS_REF_OWNERSHIP_FOR_NAMED_TYPE:
        "`ownership: \"as_ref\"` is only supported on list and nullable types",
    ErrorCode.SUBSCRIPTION_FIELD_MUST_BE_OWNED:
        "Fields of the subscription type must use `ownership: \"owned\"`",
    ErrorCode.ASYNC_MISMATCH_WITH_INTERFACE:
        "Fields implementing an interface field must use the same `async` setting",
    ErrorCode.DATE_SCALAR_NOT_DEFINED:
        "You have to define the `Date` scalar before using it",
    ErrorCode.DATE_TIME_SCALAR_NOT_DEFINED:
        "You have to define the `DateTime` scalar before using it",
    ErrorCode.UUID_SCALAR_NOT_DEFINED:
        "You have to define the `Uuid` scalar before using it",
    ErrorCode.URL_SCALAR_NOT_DEFINED:
        "You have to define the `Url` scalar before using it",
    ErrorCode.VARIABLE_DEFAULT_VALUE: "Default values cannot be variables",
    ErrorCode.NONNULLABLE_FIELD_WITH_DEFAULT_VALUE:
        "Fields with default arguments values must be nullable",
    ErrorCode.INPUT_TYPE_FIELD_WITH_DEFAULT_VALUE:
        "Input object fields cannot have default values",
    ErrorCode.INVALID_DEFAULT_VALUE: "Invalid default value",
    ErrorCode.FIELD_NAME_IN_SNAKE_CASE: "Field names must be camelCase, not snake_case",
    ErrorCode.UPPERCASE_RESERVED_SCALAR: "Reserved scalars must use their mixed-case name",
}


@dataclass(frozen=True, order=True)
class CompileError:
    """A diagnostic tied to a position in the schema."""
    pos: Pos
    code: ErrorCode
    detail: str = ""
    note: str = ""

    @property
    def message(self) -> str:
        base = _MESSAGES[self.code]
        return f"{base}: {self.detail}" if self.detail else base

    def __str__(self) -> str:
        text = f"{self.pos}: {self.message}"
        if self.note:
            text += f" ({self.note})"
        return text


class ErrorSet:
    """Deduplicating accumulator of compile errors.

    Iteration always yields errors sorted by position, then kind, so repeated
    runs over the same schema report identical diagnostics.
    """

    def __init__(self, errors: Iterable[CompileError] = ()):
        self._errors: set[CompileError] = set(errors)

    def emit(self, pos: Pos, code: ErrorCode, detail: str = "", note: str = "") -> None:
        self._errors.add(CompileError(pos, code, detail, note))

    def extend(self, errors: Iterable[CompileError]) -> None:
        self._errors.update(errors)

    def sorted(self) -> tuple[CompileError, ...]:
        return tuple(sorted(self._errors))

    def checkpoint(self) -> None:
        """Raise ``SchemaCompilationError`` if any error was emitted."""
        if self._errors:
            raise SchemaCompilationError(self.sorted())

    def codes(self) -> list[ErrorCode]:
        return [error.code for error in self.sorted()]

    def __iter__(self) -> Iterator[CompileError]:
        return iter(self.sorted())

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)


class BindgenError(Exception):
    """Base exception for all gql-bindgen errors."""
    pass


class SchemaCompilationError(BindgenError):
    """Raised at a checkpoint when diagnostics were accumulated."""

    def __init__(self, errors: tuple[CompileError, ...]):
        self.errors = errors
        lines = "\n".join(f"  {error}" for error in errors)
        super().__init__(f"Schema compilation failed with {len(errors)} error(s):\n{lines}")


class DefaultValueOverflowError(BindgenError):
    """Raised when an integer default value does not fit in 32 bits."""

    def __init__(self, pos: Pos, literal: str):
        self.pos = pos
        self.literal = literal
        super().__init__(f"{pos}: default number argument `{literal}` does not fit in a signed 32-bit integer")


class GeneratedCodeError(BindgenError, ValueError):
    """Raised when the emitter renders source that is not valid Python."""
    pass
