"""
Validation error model for roundtrip.

A ValidationError records the offending value, the path taken to reach it,
and an optional custom message. Errors are plain values carried by Failure;
DecodeError is only raised when a caller explicitly unwraps a Failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Sequence

from .reporter import format_error
from .types import Context, Failure

if TYPE_CHECKING:
    from .decoder import Decoder


@dataclass(frozen=True, slots=True)
class ValidationError:
    """
    A single validation failure.

    `causes` holds the errors of a failed alternative (one union member);
    it is empty for every other error.
    """

    value: Any
    context: Context
    message: str | None = None
    expected: str | None = None
    causes: tuple[ValidationError, ...] = ()

    @property
    def path(self) -> tuple[str | int, ...]:
        """Keys of the context, outermost first."""
        return tuple(entry.key for entry in self.context)

    def leaves(self) -> tuple[ValidationError, ...]:
        """The innermost errors under this one, in order; itself if it has no causes."""
        if not self.causes:
            return (self,)
        return tuple(leaf for cause in self.causes for leaf in cause.leaves())


ValidationErrors = tuple[ValidationError, ...]


class DecodeError(ValueError):
    """Raised by Failure.unwrap() with every collected validation error."""

    def __init__(self, errors: Sequence[ValidationError]):
        self.errors: ValidationErrors = tuple(errors)
        lines = "; ".join(format_error(e) for e in self.errors)
        super().__init__(f"{len(self.errors)} validation error(s): {lines}")


def failure(
    value: Any,
    context: Context,
    decoder: Decoder[Any, Any] | None = None,
    message: str | None = None,
) -> Failure:
    """
    Build a Failure holding exactly one ValidationError.

    The error's context is `context` unchanged; leaf decoders report at the
    position they were called with.
    """
    expected = decoder.name if decoder is not None else None
    return Failure((ValidationError(value, context, message, expected),))


def merge(failures: Sequence[Failure]) -> Failure:
    """Concatenate the errors of several failures, preserving order."""
    return Failure(tuple(e for f in failures for e in f.errors))
