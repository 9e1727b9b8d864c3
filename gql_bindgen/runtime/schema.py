"""Schema roots and the ``ID`` scalar used by generated modules."""

from dataclasses import dataclass
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema


class ID(str):
    """The GraphQL ``ID`` scalar; a string with its own type."""

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler):
        return core_schema.no_info_after_validator_function(cls, core_schema.str_schema())

    def __repr__(self) -> str:
        return f"ID({str.__repr__(self)})"


class EmptyMutation:
    """Mutation root of a schema that declares no mutations."""
    pass


class EmptySubscription:
    """Subscription root of a schema that declares no subscriptions."""
    pass


@dataclass(frozen=True)
class SchemaRoots:
    """The resolver contracts bound to each operation type."""
    query: type
    mutation: type = EmptyMutation
    subscription: type = EmptySubscription

    @property
    def has_mutation(self) -> bool:
        return self.mutation is not EmptyMutation

    @property
    def has_subscription(self) -> bool:
        return self.subscription is not EmptySubscription
