"""The executor handed to every resolver method of a generated module."""

from dataclasses import dataclass
from typing import Any, Generic, Mapping, TypeVar

from graphql import FragmentDefinitionNode, GraphQLResolveInfo

from .look_ahead import LookAheadSelection, Selection

ContextT = TypeVar("ContextT")


def variable_mapping(variable_values: Any) -> Mapping[str, Any]:
    """Coerced variables of a request as a plain mapping.

    graphql-core 3.2 hands out a dict; 3.3 wraps it in ``VariableValues``
    whose ``coerced`` attribute holds the dict.
    """
    if variable_values is None:
        return {}
    return getattr(variable_values, "coerced", variable_values)


def fragment_mapping(fragments: Any) -> Mapping[str, FragmentDefinitionNode]:
    """Fragment definitions by name; 3.3 wraps each one in ``FragmentDetails``."""
    return {
        name: getattr(fragment, "definition", fragment)
        for name, fragment in (fragments or {}).items()
    }


@dataclass(frozen=True)
class Executor(Generic[ContextT]):
    """Request context plus the look-ahead of the field being resolved.

    Example:
        def resolve_user(root, info, **args):
            executor = Executor.from_resolve_info(info)
            return QUERY.resolve_user(executor, **args)
    """

    context: ContextT
    look_ahead: LookAheadSelection

    @classmethod
    def from_resolve_info(cls, info: GraphQLResolveInfo) -> "Executor":
        """Build an executor inside a graphql-core resolver."""
        look_ahead = Selection.from_field_nodes(
            info.field_nodes,
            fragments=fragment_mapping(info.fragments),
            variables=variable_mapping(info.variable_values),
        )
        return cls(context=info.context, look_ahead=look_ahead)
