"""Decoders from look-ahead values into the Python types of a schema.

Generated modules compose these: ``nullable(list_of(decode_int))`` decodes
an argument of GraphQL type ``[Int!]``. Every decoder raises
``LookAheadDecodeError`` on a value of the wrong shape.
"""

import enum
from typing import Any, Callable, Mapping, Optional, TypeVar

from ..core.scalars import (
    DATE_SCALAR_NAME,
    DATE_TIME_SCALAR_NAME,
    DEFAULT_REGISTRY,
    NAIVE_DATE_TIME,
    URL_SCALAR_NAME,
    UUID_SCALAR_NAME,
    ScalarRegistry,
)
from .errors import LookAheadDecodeError
from .look_ahead import LookAheadKind, LookAheadValue
from .schema import ID

T = TypeVar("T")
EnumT = TypeVar("EnumT", bound=enum.Enum)

Decoder = Callable[[LookAheadValue], T]


def _scalar(value: LookAheadValue, expected: str) -> Any:
    if value.kind is not LookAheadKind.SCALAR:
        raise LookAheadDecodeError(f"Expected {expected}, got {value.kind.value} value")
    return value.value


def decode_string(value: LookAheadValue) -> str:
    raw = _scalar(value, "a String")
    if not isinstance(raw, str):
        raise LookAheadDecodeError(f"Expected a String, got {raw!r}")
    return raw


def decode_int(value: LookAheadValue) -> int:
    raw = _scalar(value, "an Int")
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise LookAheadDecodeError(f"Expected an Int, got {raw!r}")
    return raw


def decode_float(value: LookAheadValue) -> float:
    raw = _scalar(value, "a Float")
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise LookAheadDecodeError(f"Expected a Float, got {raw!r}")
    return float(raw)


def decode_bool(value: LookAheadValue) -> bool:
    raw = _scalar(value, "a Boolean")
    if not isinstance(raw, bool):
        raise LookAheadDecodeError(f"Expected a Boolean, got {raw!r}")
    return raw


def decode_id(value: LookAheadValue) -> ID:
    raw = _scalar(value, "an ID")
    if isinstance(raw, bool) or not isinstance(raw, (str, int)):
        raise LookAheadDecodeError(f"Expected an ID, got {raw!r}")
    return ID(str(raw))


def reserved_scalar_decoder(
    scalar_name: str,
    registry: ScalarRegistry = DEFAULT_REGISTRY,
) -> Decoder:
    """Build a decoder for a reserved scalar from its registered handler."""
    handler = registry.get(scalar_name)
    if handler is None:
        raise KeyError(f"No handler registered for scalar {scalar_name!r}")

    def decode(value: LookAheadValue) -> Any:
        raw = decode_string(value)
        try:
            return handler.deserialize(raw)
        except ValueError as e:
            raise LookAheadDecodeError(f"Invalid {scalar_name} `{raw}`: {e}") from e

    decode.__name__ = f"decode_{scalar_name.lower()}"
    return decode


decode_date = reserved_scalar_decoder(DATE_SCALAR_NAME)
decode_datetime = reserved_scalar_decoder(DATE_TIME_SCALAR_NAME)
decode_naive_datetime = reserved_scalar_decoder(NAIVE_DATE_TIME)
decode_uuid = reserved_scalar_decoder(UUID_SCALAR_NAME)
decode_url = reserved_scalar_decoder(URL_SCALAR_NAME)


def nullable(decoder: Decoder) -> Callable[[LookAheadValue], Optional[Any]]:
    def decode(value: LookAheadValue) -> Optional[Any]:
        if value.kind is LookAheadKind.NULL:
            return None
        return decoder(value)
    return decode


def list_of(decoder: Decoder) -> Callable[[LookAheadValue], list]:
    def decode(value: LookAheadValue) -> list:
        if value.kind is not LookAheadKind.LIST:
            raise LookAheadDecodeError(f"Expected a list, got {value.kind.value} value")
        return [decoder(item) for item in value.value]
    return decode


def decode_enum(enum_type: type[EnumT], value: LookAheadValue) -> EnumT:
    """Decode an enum by the GraphQL name of its value."""
    if value.kind is not LookAheadKind.ENUM:
        raise LookAheadDecodeError(
            f"Expected a {enum_type.__name__} value, got {value.kind.value} value"
        )
    try:
        return enum_type(value.value)
    except ValueError:
        raise LookAheadDecodeError(
            f"Unknown {enum_type.__name__} value `{value.value}`"
        ) from None


def decode_input_object(
    model: Callable[..., T],
    value: LookAheadValue,
    fields: Mapping[str, tuple[str, Decoder]],
) -> T:
    """Decode an input object.

    Args:
        model: The class to construct
        value: An ``OBJECT`` look-ahead value
        fields: GraphQL field name -> (Python field name, decoder)

    Every declared field must be present in the value.
    """
    if value.kind is not LookAheadKind.OBJECT:
        raise LookAheadDecodeError(f"Expected an object, got {value.kind.value} value")

    name = getattr(model, "__name__", "input object")
    slots: dict[str, Any] = {}
    for key, item in value.value:
        if key not in fields:
            raise LookAheadDecodeError(f"Unknown field `{key}` for {name}")
        python_name, decoder = fields[key]
        slots[python_name] = decoder(item)

    for key, (python_name, _) in fields.items():
        if python_name not in slots:
            raise LookAheadDecodeError(f"Missing field `{key}` for {name}")

    return model(**slots)
