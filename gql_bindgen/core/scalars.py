"""Built-in and reserved scalars.

GraphQL's built-in scalars map to fixed Python types. Four further names are
reserved for well-known concepts and map to richer Python types, provided the
schema declares them with ``scalar <Name>``:

    ==========  ==========================================================
    Date        ``datetime.date``
    DateTime    ``pydantic.AwareDatetime`` (``with_time_zone: true``) or
                ``pydantic.NaiveDatetime`` (``with_time_zone: false``)
    Uuid        ``uuid.UUID``
    Url         ``pydantic.AnyUrl``
    ==========  ==========================================================

Each reserved scalar has a handler describing the Python type, the import the
generated module needs and how raw look-ahead values are converted.

Example usage:
    from gql_bindgen.core.scalars import ScalarRegistry

    registry = ScalarRegistry()
    handler = registry.get("Uuid")
    handler.deserialize("12345678-1234-5678-1234-567812345678")
"""

from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Protocol, runtime_checkable
from uuid import UUID

from pydantic import AnyUrl

DATE_SCALAR_NAME = "Date"
DATE_TIME_SCALAR_NAME = "DateTime"
UUID_SCALAR_NAME = "Uuid"
URL_SCALAR_NAME = "Url"

RESERVED_SCALAR_NAMES = (
    DATE_SCALAR_NAME,
    DATE_TIME_SCALAR_NAME,
    UUID_SCALAR_NAME,
    URL_SCALAR_NAME,
)

# Registry key of the DateTime variant without a time zone.
NAIVE_DATE_TIME = "NaiveDateTime"

BUILTIN_SCALARS = {
    "String": "str",
    "Int": "int",
    "Float": "float",
    "Boolean": "bool",
    "ID": "ID",
}


@runtime_checkable
class ScalarHandler(Protocol):
    """Protocol for reserved scalar handlers.

    Attributes:
        python_type: The Python type name used in generated annotations
        import_statement: The import the generated module needs for that type
    """

    python_type: str
    import_statement: str

    def serialize(self, value: Any) -> Any:
        """Convert the Python value to its GraphQL wire form."""
        ...

    def deserialize(self, value: Any) -> Any:
        """Convert a raw GraphQL value to the Python type."""
        ...


class DateHandler:
    """Handler for the ``Date`` scalar using ISO 8601 dates."""

    python_type = "date"
    import_statement = "from datetime import date"

    def serialize(self, value: date) -> str:
        return value.isoformat()

    def deserialize(self, value: str) -> date:
        return date.fromisoformat(value)


class DateTimeHandler:
    """Handler for ``DateTime`` values that carry a time zone."""

    python_type = "AwareDatetime"
    import_statement = "from pydantic import AwareDatetime"

    def serialize(self, value: datetime) -> str:
        return value.isoformat()

    def deserialize(self, value: str) -> datetime:
        """Parse ISO 8601, accepting a trailing ``Z``."""
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            raise ValueError(f"Expected a date time with a time zone, got `{value}`")
        return parsed


class NaiveDateTimeHandler:
    """Handler for ``DateTime`` declared with ``with_time_zone: false``."""

    python_type = "NaiveDatetime"
    import_statement = "from pydantic import NaiveDatetime"

    def serialize(self, value: datetime) -> str:
        return value.isoformat()

    def deserialize(self, value: str) -> datetime:
        parsed = datetime.fromisoformat(value)
        if parsed.tzinfo is not None:
            raise ValueError(f"Expected a date time without a time zone, got `{value}`")
        return parsed


class UUIDHandler:
    """Handler for the ``Uuid`` scalar."""

    python_type = "UUID"
    import_statement = "from uuid import UUID"

    def serialize(self, value: UUID) -> str:
        return str(value)

    def deserialize(self, value: str) -> UUID:
        return UUID(value)


class UrlHandler:
    """Handler for the ``Url`` scalar."""

    python_type = "AnyUrl"
    import_statement = "from pydantic import AnyUrl"

    def serialize(self, value: AnyUrl) -> str:
        return str(value)

    def deserialize(self, value: str) -> AnyUrl:
        return AnyUrl(value)


class ScalarRegistry:
    """Reserved scalar name to handler lookup.

    The DateTime variant without a time zone is registered under
    ``NaiveDateTime``. Registering a name again replaces its handler.

    Example:
        registry = ScalarRegistry()
        registry["DateTime"].python_type  # "AwareDatetime"
    """

    def __init__(self, handlers: Optional[Mapping[str, ScalarHandler]] = None):
        self._handlers: dict[str, ScalarHandler] = {
            DATE_SCALAR_NAME: DateHandler(),
            DATE_TIME_SCALAR_NAME: DateTimeHandler(),
            NAIVE_DATE_TIME: NaiveDateTimeHandler(),
            UUID_SCALAR_NAME: UUIDHandler(),
            URL_SCALAR_NAME: UrlHandler(),
        }
        self._handlers.update(handlers or {})

    def register(self, scalar_name: str, handler: ScalarHandler):
        self._handlers[scalar_name] = handler

    def get(self, scalar_name: str) -> Optional[ScalarHandler]:
        return self._handlers.get(scalar_name)

    def __contains__(self, scalar_name: object) -> bool:
        return scalar_name in self._handlers

    def __getitem__(self, scalar_name: str) -> ScalarHandler:
        return self._handlers[scalar_name]

    def imports_for(self, python_types: Iterable[str]) -> list[str]:
        """Sorted import lines of the handlers whose Python type is used."""
        wanted = set(python_types)
        return sorted({
            handler.import_statement
            for handler in self._handlers.values()
            if handler.python_type in wanted
        })


DEFAULT_REGISTRY = ScalarRegistry()
