"""
Schema coercion for roundtrip.

Provides to_codec() and decode() for plain Python schema shapes.
"""

from __future__ import annotations

from typing import Any

from .codec import Codec
from .combinators import array, struct, tuple_, union
from .models import from_model, is_pydantic_model
from .primitives import boolean, integer, null, number, string, unknown
from .types import Result

_PRIMITIVES: dict[Any, Codec[Any, Any, Any]] = {
    str: string,
    int: integer,
    float: number,
    bool: boolean,
    type(None): null,
    object: unknown,
}


def to_codec(schema: Any) -> Codec[Any, Any, Any]:
    """
    Coerce a schema shape to a codec.

    Conversion rules:
        Codec -> pass through
        str, int, float, bool, None type, object -> primitive codec
        pydantic model class -> from_model
        dict -> struct with recursive conversion
        [x] -> array of x
        [x, y, ...] -> array of union(x, y, ...)
        (x, y, ...) -> tuple_(x, y, ...)
    """
    if isinstance(schema, Codec):
        return schema

    if schema is None:
        return null

    if isinstance(schema, type):
        if schema in _PRIMITIVES:
            return _PRIMITIVES[schema]
        if is_pydantic_model(schema):
            return from_model(schema)
        raise TypeError(f"No codec for type {schema.__name__}")

    if isinstance(schema, dict):
        return struct({key: to_codec(value) for key, value in schema.items()})

    if isinstance(schema, list):
        if len(schema) == 0:
            raise ValueError("Empty list cannot be converted to codec")
        if len(schema) == 1:
            return array(to_codec(schema[0]))
        return array(union(*(to_codec(item) for item in schema)))

    if isinstance(schema, tuple):
        return tuple_(*(to_codec(item) for item in schema))

    raise TypeError(f"Cannot convert {type(schema).__name__} to codec")


def decode(data: Any, schema: Any) -> Result[Any]:
    """
    Decode data against a schema shape.

    Usage:
        schema = {
            "name": str,
            "tags": [str],
            "position": (float, float),
        }
        result = decode({"name": "a", "tags": [], "position": [0.0, 1.5]}, schema)
    """
    return to_codec(schema).decode(data)
