"""
Encoder: a pure, total function from a decoded value to its output form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

A = TypeVar("A")
O = TypeVar("O")
P = TypeVar("P")


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True, slots=True)
class Encoder(Generic[A, O]):
    """Immutable encoder node. Encoding cannot fail."""

    name: str
    run: Callable[[A], O]

    def encode(self, value: A) -> O:
        return self.run(value)

    def compose(self, next: Encoder[O, P], name: str | None = None) -> Encoder[A, P]:
        """Run this encoder, then `next` on its output."""
        first = self

        def run(value: Any) -> Any:
            return next.run(first.run(value))

        return Encoder(name or f"{self.name} >> {next.name}", run)

    @classmethod
    def identity(cls, name: str = "identity") -> Encoder[Any, Any]:
        return cls(name, _identity)

    def __repr__(self) -> str:
        return f"Encoder({self.name})"
