"""
Decoder: a pure function from an input value to a Result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from .types import Context, Result

I = TypeVar("I")
A = TypeVar("A")
B = TypeVar("B")

ValidateFn = Callable[[Any, Context], "Result[Any]"]


@dataclass(frozen=True, slots=True)
class Decoder(Generic[I, A]):
    """
    Immutable decoder node.

    Wraps a validate function `(value, context) -> Result`. The context is the
    path taken to reach `value`; structural decoders extend it before
    delegating to their children, everything else passes it through.
    """

    name: str
    run: ValidateFn

    def validate(self, value: I, context: Context) -> Result[A]:
        return self.run(value, context)

    def decode(self, value: I) -> Result[A]:
        """Validate at the top level, with an empty context."""
        return self.run(value, ())

    def compose(self, next: Decoder[A, B], name: str | None = None) -> Decoder[I, B]:
        """
        Chain `next` after this decoder.

        Both stages see the same context. If this decoder fails, `next` is
        never invoked and the failure is returned unchanged.
        """
        first = self

        def run(value: Any, context: Context) -> Result[Any]:
            result = first.run(value, context)
            if result.is_failure():
                return result
            return next.run(result.value, context)  # type: ignore[union-attr]

        return Decoder(name or f"{self.name} >> {next.name}", run)

    def map(self, fn: Callable[[A], B], name: str | None = None) -> Decoder[I, B]:
        """Transform the decoded value with a total function."""
        inner = self

        def run(value: Any, context: Context) -> Result[Any]:
            return inner.run(value, context).map(fn)

        return Decoder(name or self.name, run)

    def __repr__(self) -> str:
        return f"Decoder({self.name})"
