"""
Human-readable rendering of validation errors.

Consumes only the public error data: value, path, message and the name of
the decoder that rejected the value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .errors import ValidationError
    from .types import Result

ROOT = "<root>"


def format_path(path: tuple[str | int, ...]) -> str:
    """Join path keys with dots, e.g. ("a", 0, "b") -> "a.0.b"."""
    if not path:
        return ROOT
    return ".".join(str(key) for key in path)


def format_error(error: ValidationError) -> str:
    """
    Render one error.

    Examples:
        Invalid value 42 at name: expected string, got int
        Invalid value -1 at age: must be positive
    """
    location = format_path(error.path)
    value = _short_repr(error.value)
    if error.message:
        return f"Invalid value {value} at {location}: {error.message}"
    expected = error.expected or "valid value"
    return (
        f"Invalid value {value} at {location}: "
        f"expected {expected}, got {type(error.value).__name__}"
    )


def report(result: Result[Any]) -> list[str]:
    """
    Render every error of a Failure; a Success renders as no lines.

    Union member errors are expanded to the errors that caused them.
    """
    if result.is_success():
        return []
    return [
        format_error(leaf)
        for error in result.errors  # type: ignore[union-attr]
        for leaf in error.leaves()
    ]


def _short_repr(value: Any, limit: int = 50) -> str:
    text = repr(value)
    return text if len(text) <= limit else text[: limit - 3] + "..."
