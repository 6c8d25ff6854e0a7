"""
roundtrip - composable decoders and encoders with path-aware errors.

Usage:
    from roundtrip import array, integer, number_from_string, string, struct

    Order = struct({
        "id": string,
        "quantity": number_from_string,
        "lines": array(integer),
    })

    result = Order.decode({"id": "A1", "quantity": "3", "lines": [1, 2]})
    if result.is_success():
        Order.encode(result.value)
"""

from .codec import Codec, codec, compose
from .combinators import (
    array,
    lazy,
    literal,
    nullable,
    partial,
    record,
    refine,
    struct,
    tuple_,
    union,
)
from .context import decode_options, is_fail_fast
from .decoder import Decoder
from .encoder import Encoder
from .errors import DecodeError, ValidationError, failure
from .models import from_model
from .primitives import (
    boolean,
    from_guard,
    integer,
    null,
    number,
    number_from_string,
    parse_number,
    string,
    unknown,
    unknown_dict,
    unknown_list,
)
from .reporter import format_error, report
from .schema import decode, to_codec
from .types import Context, ContextEntry, Failure, Result, Success

__all__ = [
    # Result types
    "Success",
    "Failure",
    "Result",
    "Context",
    "ContextEntry",
    # Errors
    "ValidationError",
    "DecodeError",
    "failure",
    # Core
    "Decoder",
    "Encoder",
    "Codec",
    "codec",
    "compose",
    # Primitives
    "string",
    "number",
    "integer",
    "boolean",
    "null",
    "unknown",
    "unknown_dict",
    "unknown_list",
    "from_guard",
    "parse_number",
    "number_from_string",
    # Combinators
    "struct",
    "partial",
    "array",
    "tuple_",
    "record",
    "union",
    "nullable",
    "literal",
    "lazy",
    "refine",
    # Interop
    "from_model",
    # Schema
    "to_codec",
    "decode",
    # Reporting
    "format_error",
    "report",
    # Options
    "decode_options",
    "is_fail_fast",
]
