"""
Codec: a paired Decoder and Encoder sharing a decoded value type.

Provides the codec() constructor and the sequential compose() operator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

from .decoder import Decoder
from .encoder import Encoder
from .types import Context, Result

logger = logging.getLogger(__name__)

I = TypeVar("I")
M = TypeVar("M")
A = TypeVar("A")
O = TypeVar("O")

Guard = Callable[[Any], bool]


def _accept_all(value: Any) -> bool:
    return True


@dataclass(frozen=True, slots=True)
class Codec(Generic[I, A, O]):
    """
    Immutable decoder/encoder pair.

    `decoder` turns an input `I` into `A`; `encoder` turns `A` back into `O`.
    `is_` recognizes decoded values and is used by union() to pick the member
    that should encode a value.
    """

    decoder: Decoder[I, A]
    encoder: Encoder[A, O]
    is_: Guard = field(default=_accept_all)

    @property
    def name(self) -> str:
        return self.decoder.name

    def validate(self, value: I, context: Context) -> Result[A]:
        return self.decoder.validate(value, context)

    def decode(self, value: I) -> Result[A]:
        result = self.decoder.decode(value)
        if result.is_failure():
            logger.debug(
                "decode with %s failed: %d error(s)",
                self.name,
                len(result.errors),  # type: ignore[union-attr]
            )
        return result

    def encode(self, value: A) -> O:
        return self.encoder.encode(value)

    def pipe(self, next: Codec[A, Any, A]) -> Codec[I, Any, O]:
        """Method spelling of compose(next)(self)."""
        return compose(next)(self)

    def __rshift__(self, next: Codec[A, Any, A]) -> Codec[I, Any, O]:
        """
        Sequential composition with >> operator.

        Usage:
            number_from_string = string >> parse_number
        """
        if not isinstance(next, Codec):
            return NotImplemented
        return compose(next)(self)

    def __repr__(self) -> str:
        return f"Codec({self.name})"


def codec(
    decoder: Decoder[I, A],
    encoder: Encoder[A, O],
    is_: Guard | None = None,
) -> Codec[I, A, O]:
    """Pair a decoder with an encoder."""
    if not isinstance(decoder, Decoder):
        raise TypeError(f"Expected Decoder, got {type(decoder).__name__}")
    if not isinstance(encoder, Encoder):
        raise TypeError(f"Expected Encoder, got {type(encoder).__name__}")
    return Codec(decoder, encoder, is_ or _accept_all)


def compose(
    next: Codec[M, A, M],
) -> Callable[[Codec[I, M, O]], Codec[I, A, O]]:
    """
    Sequentially compose two codecs, curried over the previous codec.

    Decoding runs prev then next (I -> M -> A). Encoding runs in the mirrored
    order: next's encoder first, back to M, then prev's encoder down to O.

    Usage:
        number_from_string = compose(parse_number)(string)
    """
    if not isinstance(next, Codec):
        raise TypeError(f"compose() expects a Codec, got {type(next).__name__}")

    def apply(prev: Codec[I, M, O]) -> Codec[I, A, O]:
        if not isinstance(prev, Codec):
            raise TypeError(f"compose() expects a Codec, got {type(prev).__name__}")
        return Codec(
            prev.decoder.compose(next.decoder),
            next.encoder.compose(prev.encoder),
            next.is_,
        )

    return apply
