"""
Built-in leaf codecs.

Leaf codecs do no structural recursion: they either succeed immediately or
fail with a single error at the context they were called with.
"""

from __future__ import annotations

import math
import re
from typing import Any

from .codec import Codec, codec
from .decoder import Decoder
from .encoder import Encoder
from .errors import failure
from .types import Context, Result, Success


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _is_integer(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def from_guard(name: str, guard: Any) -> Codec[Any, Any, Any]:
    """
    Build an identity codec from a predicate.

    Usage:
        even = from_guard("even", lambda x: isinstance(x, int) and x % 2 == 0)
    """

    def run(value: Any, context: Context) -> Result[Any]:
        if guard(value):
            return Success(value)
        return failure(value, context, decoder)

    decoder: Decoder[Any, Any] = Decoder(name, run)
    return codec(decoder, Encoder.identity(name), guard)


string = from_guard("string", lambda x: isinstance(x, str))
number = from_guard("number", _is_number)
integer = from_guard("integer", _is_integer)
boolean = from_guard("boolean", lambda x: isinstance(x, bool))
null = from_guard("null", lambda x: x is None)
unknown = from_guard("unknown", lambda _: True)
unknown_dict = from_guard("dict", lambda x: isinstance(x, dict))
unknown_list = from_guard("list", lambda x: isinstance(x, list))


# ASCII decimal numerals only; rejects "nan", "inf", "1_000" and surrounding space
_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

# Below CPython's minimum int/str conversion limit (640 digits)
_CHUNK = 500
_CHUNK_BASE = 10**_CHUNK


def _digits_to_int(text: str) -> int:
    """int(text) for numerals of any length, one chunk of digits at a time."""
    sign = -1 if text[0] == "-" else 1
    digits = text.lstrip("+-")
    n = 0
    for i in range(0, len(digits), _CHUNK):
        chunk = digits[i : i + _CHUNK]
        n = n * 10 ** len(chunk) + int(chunk)
    return sign * n


def _int_to_digits(n: int) -> str:
    """str(n) for ints of any size."""
    if n < 0:
        return "-" + _int_to_digits(-n)
    parts = []
    while n >= _CHUNK_BASE:
        n, low = divmod(n, _CHUNK_BASE)
        parts.append(str(low).zfill(_CHUNK))
    parts.append(str(n))
    return "".join(reversed(parts))


def _parse_number(value: Any, context: Context) -> Result[Any]:
    if not isinstance(value, str):
        return failure(value, context, _parse_number_decoder)
    if _INT_RE.fullmatch(value):
        return Success(_digits_to_int(value))
    if _FLOAT_RE.fullmatch(value):
        parsed = float(value)
        if math.isfinite(parsed):
            return Success(parsed)
    return failure(value, context, _parse_number_decoder)


def _format_number(value: int | float) -> str:
    if isinstance(value, float):
        return _int_to_digits(int(value)) if value.is_integer() else str(value)
    return _int_to_digits(value)


_parse_number_decoder: Decoder[str, int | float] = Decoder(
    "number_from_string", _parse_number
)

# str -> number stage
parse_number: Codec[str, int | float, str] = codec(
    _parse_number_decoder,
    Encoder("string_from_number", _format_number),
    _is_number,
)

number_from_string = string >> parse_number
