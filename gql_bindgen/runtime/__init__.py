"""Runtime support imported by generated binding modules."""

from .decode import (
    decode_bool,
    decode_date,
    decode_datetime,
    decode_enum,
    decode_float,
    decode_id,
    decode_input_object,
    decode_int,
    decode_naive_datetime,
    decode_string,
    decode_url,
    decode_uuid,
    list_of,
    nullable,
    reserved_scalar_decoder,
)
from .errors import LookAheadDecodeError, TrailNotWalkedError
from .executor import Executor
from .look_ahead import LookAheadKind, LookAheadSelection, LookAheadValue, Selection
from .query_trail import Phase, QueryTrail
from .schema import ID, EmptyMutation, EmptySubscription, SchemaRoots

__all__ = [
    # Look-ahead
    "LookAheadKind",
    "LookAheadSelection",
    "LookAheadValue",
    "Selection",
    "Executor",
    # Query trails
    "Phase",
    "QueryTrail",
    # Decoders
    "decode_bool",
    "decode_date",
    "decode_datetime",
    "decode_enum",
    "decode_float",
    "decode_id",
    "decode_input_object",
    "decode_int",
    "decode_naive_datetime",
    "decode_string",
    "decode_url",
    "decode_uuid",
    "list_of",
    "nullable",
    "reserved_scalar_decoder",
    # Schema
    "ID",
    "EmptyMutation",
    "EmptySubscription",
    "SchemaRoots",
    # Errors
    "LookAheadDecodeError",
    "TrailNotWalkedError",
]
