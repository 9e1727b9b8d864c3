"""Look-ahead selections: what the current request asked for below a field.

A ``Selection`` is built from graphql-core ``FieldNode``s (fragments and
inline fragments are merged in, ``@skip``/``@include`` are honoured) and
answers ``select_child(name)`` without resolving anything.

Example usage:
    from gql_bindgen.runtime import Selection

    root = Selection.from_query("{ user(id: 1) { name friends { id } } }")
    user = root.select_child("user")
    user.arguments()["id"].value        # 1
    user.select_child("email") is None  # True
"""

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Protocol, runtime_checkable

from graphql import (
    BooleanValueNode,
    EnumValueNode,
    FieldNode,
    FloatValueNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    IntValueNode,
    ListValueNode,
    NullValueNode,
    ObjectValueNode,
    OperationDefinitionNode,
    SelectionSetNode,
    StringValueNode,
    ValueNode,
    VariableNode,
    parse,
)


class LookAheadKind(enum.Enum):
    NULL = "null"
    ENUM = "enum"
    SCALAR = "scalar"
    LIST = "list"
    OBJECT = "object"


@dataclass(frozen=True)
class LookAheadValue:
    """An argument value as written in the request.

    ``value`` holds the enum name for ``ENUM``, the Python scalar for
    ``SCALAR``, a tuple of values for ``LIST`` and a tuple of
    ``(key, value)`` pairs for ``OBJECT``.
    """

    kind: LookAheadKind
    value: Any = None

    @classmethod
    def null(cls) -> "LookAheadValue":
        return cls(LookAheadKind.NULL)

    @classmethod
    def enum_value(cls, name: str) -> "LookAheadValue":
        return cls(LookAheadKind.ENUM, name)

    @classmethod
    def from_ast(
        cls,
        node: ValueNode,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> "LookAheadValue":
        """Convert a graphql-core value node, resolving variables."""
        if isinstance(node, NullValueNode):
            return cls.null()
        if isinstance(node, IntValueNode):
            return cls(LookAheadKind.SCALAR, int(node.value))
        if isinstance(node, FloatValueNode):
            return cls(LookAheadKind.SCALAR, float(node.value))
        if isinstance(node, StringValueNode):
            return cls(LookAheadKind.SCALAR, node.value)
        if isinstance(node, BooleanValueNode):
            return cls(LookAheadKind.SCALAR, node.value)
        if isinstance(node, EnumValueNode):
            return cls.enum_value(node.value)
        if isinstance(node, ListValueNode):
            return cls(
                LookAheadKind.LIST,
                tuple(cls.from_ast(item, variables) for item in node.values),
            )
        if isinstance(node, ObjectValueNode):
            return cls(
                LookAheadKind.OBJECT,
                tuple((f.name.value, cls.from_ast(f.value, variables)) for f in node.fields),
            )
        if isinstance(node, VariableNode):
            return cls.from_python((variables or {}).get(node.name.value))
        raise TypeError(f"Unexpected value node {type(node).__name__}")

    @classmethod
    def from_python(cls, value: Any) -> "LookAheadValue":
        """Convert an already coerced Python value (e.g. a variable)."""
        if value is None:
            return cls.null()
        if isinstance(value, enum.Enum):
            # Generated enums are valued by their GraphQL name
            name = value.value if isinstance(value.value, str) else value.name
            return cls.enum_value(name)
        if isinstance(value, (bool, int, float, str)):
            return cls(LookAheadKind.SCALAR, value)
        if isinstance(value, Mapping):
            return cls(
                LookAheadKind.OBJECT,
                tuple((key, cls.from_python(item)) for key, item in value.items()),
            )
        if isinstance(value, (list, tuple)):
            return cls(LookAheadKind.LIST, tuple(cls.from_python(item) for item in value))
        return cls(LookAheadKind.SCALAR, value)

    def to_python(self) -> Any:
        if self.kind is LookAheadKind.LIST:
            return [item.to_python() for item in self.value]
        if self.kind is LookAheadKind.OBJECT:
            return {key: item.to_python() for key, item in self.value}
        return self.value


@runtime_checkable
class LookAheadSelection(Protocol):
    """What query trails need from a look-ahead selection."""

    name: str

    def select_child(self, name: str) -> Optional["LookAheadSelection"]:
        ...

    def arguments(self) -> dict[str, LookAheadValue]:
        ...


@dataclass(frozen=True)
class Selection:
    """A selected field with its arguments and its own sub-selections."""

    name: str
    alias: Optional[str] = None
    args: tuple[tuple[str, LookAheadValue], ...] = ()
    children: tuple["Selection", ...] = field(default=())

    @property
    def response_key(self) -> str:
        return self.alias or self.name

    def select_child(self, name: str) -> Optional["Selection"]:
        for child in self.children:
            if child.name == name:
                return child
        return None

    def arguments(self) -> dict[str, LookAheadValue]:
        return dict(self.args)

    def child_names(self) -> list[str]:
        return [child.name for child in self.children]

    @classmethod
    def from_field_nodes(
        cls,
        field_nodes: Iterable[FieldNode],
        fragments: Optional[Mapping[str, FragmentDefinitionNode]] = None,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> "Selection":
        """Build the selection of one field from every node requesting it.

        This is the shape graphql-core hands resolvers in
        ``GraphQLResolveInfo.field_nodes``.
        """
        nodes = list(field_nodes)
        if not nodes:
            raise ValueError("At least one field node is required")
        first = nodes[0]
        children = _merge(
            child
            for node in nodes
            if node.selection_set is not None
            for child in _collect(node.selection_set, fragments or {}, variables or {})
        )
        return cls(
            name=first.name.value,
            alias=first.alias.value if first.alias else None,
            args=_arguments(first, variables or {}),
            children=children,
        )

    @classmethod
    def from_query(
        cls,
        query: str,
        variables: Optional[Mapping[str, Any]] = None,
        operation_name: Optional[str] = None,
    ) -> "Selection":
        """Build a root selection whose children are the operation's fields."""
        document = parse(query)
        fragments = {
            d.name.value: d for d in document.definitions if isinstance(d, FragmentDefinitionNode)
        }
        operations = [d for d in document.definitions if isinstance(d, OperationDefinitionNode)]
        if operation_name is not None:
            operations = [op for op in operations if op.name and op.name.value == operation_name]
        if not operations:
            raise ValueError(f"No operation named {operation_name!r} in query")
        operation = operations[0]

        return cls(
            name=operation.operation.value,
            children=_merge(_collect(operation.selection_set, fragments, variables or {})),
        )


def _arguments(node: FieldNode, variables: Mapping[str, Any]) -> tuple[tuple[str, LookAheadValue], ...]:
    return tuple(
        (arg.name.value, LookAheadValue.from_ast(arg.value, variables))
        for arg in node.arguments or ()
    )


def _is_included(node, variables: Mapping[str, Any]) -> bool:
    for directive in node.directives or ():
        name = directive.name.value
        if name not in ("skip", "include"):
            continue
        condition = False
        for arg in directive.arguments or ():
            if arg.name.value == "if":
                condition = bool(LookAheadValue.from_ast(arg.value, variables).value)
        if name == "skip" and condition:
            return False
        if name == "include" and not condition:
            return False
    return True


def _collect(
    selection_set: SelectionSetNode,
    fragments: Mapping[str, FragmentDefinitionNode],
    variables: Mapping[str, Any],
) -> list[Selection]:
    """Flatten fragments into a list of field selections."""
    collected: list[Selection] = []
    for node in selection_set.selections:
        if not _is_included(node, variables):
            continue
        if isinstance(node, FieldNode):
            collected.append(Selection.from_field_nodes([node], fragments, variables))
        elif isinstance(node, InlineFragmentNode):
            collected.extend(_collect(node.selection_set, fragments, variables))
        elif isinstance(node, FragmentSpreadNode):
            fragment = fragments.get(node.name.value)
            if fragment is None:
                raise ValueError(f"Unknown fragment `{node.name.value}`")
            collected.extend(_collect(fragment.selection_set, fragments, variables))
    return collected


def _merge(selections: Iterable[Selection]) -> tuple[Selection, ...]:
    """Merge selections sharing a response key, keeping first-seen order."""
    merged: dict[str, Selection] = {}
    for selection in selections:
        key = selection.response_key
        existing = merged.get(key)
        if existing is None:
            merged[key] = selection
        else:
            merged[key] = Selection(
                name=existing.name,
                alias=existing.alias,
                args=existing.args,
                children=_merge(existing.children + selection.children),
            )
    return tuple(merged.values())
