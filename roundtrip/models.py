"""
Pydantic interop: use a BaseModel class as a codec.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .codec import Codec, codec
from .decoder import Decoder
from .encoder import Encoder
from .errors import ValidationError
from .types import Context, ContextEntry, Failure, Result, Success, append_context

logger = logging.getLogger(__name__)

_Model = TypeVar("_Model", bound=BaseModel)


def is_pydantic_model(model_class: Any) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    try:
        return (
            isinstance(model_class, type)
            and issubclass(model_class, BaseModel)
            and hasattr(model_class, "model_fields")
        )
    except TypeError:
        return False


def _step(value: Any, key: str | int) -> Any:
    """Raw value under `key`, or None when the input has no such position."""
    if isinstance(value, Mapping):
        return value.get(key)
    if isinstance(value, (list, tuple)) and isinstance(key, int):
        return value[key] if -len(value) <= key < len(value) else None
    return getattr(value, key, None) if isinstance(key, str) else None


def from_model(model: Type[_Model]) -> Codec[Any, _Model, dict[str, Any]]:
    """
    Codec that decodes with `model.model_validate` and encodes with
    `model_dump(mode="json")`.

    Each pydantic error becomes a ValidationError whose context is the
    current context extended by the error's `loc`.

    Usage:
        class User(BaseModel):
            name: str

        UserC = from_model(User)
        UserC.decode({"name": "Alice"})  # Success(User(name='Alice'))
    """
    if not is_pydantic_model(model):
        raise TypeError(f"from_model() expects a pydantic model, got {model!r}")

    def run(value: Any, context: Context) -> Result[Any]:
        try:
            return Success(model.model_validate(value))
        except PydanticValidationError as e:
            logger.debug("%s rejected input: %d error(s)", model.__name__, e.error_count())
            return Failure(tuple(_convert(err, value, context) for err in e.errors()))

    def _convert(err: Any, value: Any, context: Context) -> ValidationError:
        path = context
        actual = value
        for key in err["loc"]:
            actual = _step(actual, key)
            path = append_context(path, ContextEntry(key, decoder, actual))
        return ValidationError(err.get("input"), path, err["msg"], model.__name__)

    def encode(value: _Model) -> dict[str, Any]:
        return value.model_dump(mode="json")

    decoder: Decoder[Any, Any] = Decoder(model.__name__, run)
    return codec(decoder, Encoder(model.__name__, encode), lambda x: isinstance(x, model))
