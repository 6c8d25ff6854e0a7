"""
Type definitions for roundtrip.

Provides the Result type (Success/Failure) and the decode path (Context).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, Union

if TYPE_CHECKING:
    from .decoder import Decoder
    from .errors import ValidationError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class ContextEntry:
    """One step taken through a nested structure while decoding."""

    key: str | int
    decoder: Decoder[Any, Any]
    actual: Any = None


Context = tuple[ContextEntry, ...]


def append_context(context: Context, entry: ContextEntry) -> Context:
    """Return a new context extended by `entry`. Never mutates `context`."""
    return (*context, entry)


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Successful decode containing the value."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> Success[U]:
        return Success(fn(self.value))

    def flat_map(self, fn: Callable[[T], Result[U]]) -> Result[U]:
        return fn(self.value)

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Failure:
    """Failed decode containing one or more validation errors."""

    errors: tuple[ValidationError, ...]

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError("Failure requires at least one error")

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], Any]) -> Failure:
        return self

    def flat_map(self, fn: Callable[[Any], Any]) -> Failure:
        return self

    def unwrap(self) -> Any:
        """Raise DecodeError carrying the errors."""
        from .errors import DecodeError

        raise DecodeError(self.errors)

    def unwrap_or(self, default: T) -> T:
        return default


Result = Union[Success[T], Failure]
