"""
Structural combinators: build codecs for nested data from other codecs.

Each combinator extends the context with one entry per child before
delegating, and collects the failures of independent children in definition
order (unless fail-fast mode is on).
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import cache
from typing import Any, Callable

from .codec import Codec, codec
from .context import is_fail_fast
from .decoder import Decoder
from .encoder import Encoder
from .errors import ValidationError, failure, merge
from .types import Context, ContextEntry, Failure, Result, Success, append_context


def _child(
    child: Codec[Any, Any, Any], value: Any, context: Context, key: str | int
) -> Result[Any]:
    entry = ContextEntry(key, child.decoder, value)
    return child.validate(value, append_context(context, entry))


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _fields_name(fields: Mapping[str, Codec[Any, Any, Any]]) -> str:
    inner = ", ".join(f"{key}: {c.name}" for key, c in fields.items())
    return "{ " + inner + " }"


def struct(
    fields: Mapping[str, Codec[Any, Any, Any]], name: str | None = None
) -> Codec[Any, dict[str, Any], dict[str, Any]]:
    """
    Codec for a dict with a fixed set of required fields.

    A missing key is validated as None, so it fails unless its codec accepts
    None (see nullable). Undeclared keys are dropped from the output.

    Usage:
        Person = struct({"name": string, "age": integer})
    """
    fields = dict(fields)

    def run(value: Any, context: Context) -> Result[Any]:
        if not isinstance(value, Mapping):
            return failure(value, context, decoder)

        out: dict[str, Any] = {}
        failures: list[Failure] = []

        for key, child in fields.items():
            result = _child(child, value.get(key), context, key)
            if isinstance(result, Failure):
                failures.append(result)
                if is_fail_fast():
                    break
            else:
                out[key] = result.value

        return merge(failures) if failures else Success(out)

    def encode(value: Mapping[str, Any]) -> dict[str, Any]:
        return {key: child.encode(value.get(key)) for key, child in fields.items()}

    def is_(value: Any) -> bool:
        return isinstance(value, Mapping) and all(
            child.is_(value.get(key)) for key, child in fields.items()
        )

    decoder: Decoder[Any, Any] = Decoder(name or _fields_name(fields), run)
    return codec(decoder, Encoder(decoder.name, encode), is_)


def partial(
    fields: Mapping[str, Codec[Any, Any, Any]], name: str | None = None
) -> Codec[Any, dict[str, Any], dict[str, Any]]:
    """Codec for a dict whose declared fields may all be absent."""
    fields = dict(fields)

    def run(value: Any, context: Context) -> Result[Any]:
        if not isinstance(value, Mapping):
            return failure(value, context, decoder)

        out: dict[str, Any] = {}
        failures: list[Failure] = []

        for key, child in fields.items():
            if key not in value:
                continue
            result = _child(child, value[key], context, key)
            if isinstance(result, Failure):
                failures.append(result)
                if is_fail_fast():
                    break
            else:
                out[key] = result.value

        return merge(failures) if failures else Success(out)

    def encode(value: Mapping[str, Any]) -> dict[str, Any]:
        return {
            key: child.encode(value[key])
            for key, child in fields.items()
            if key in value
        }

    def is_(value: Any) -> bool:
        return isinstance(value, Mapping) and all(
            child.is_(value[key]) for key, child in fields.items() if key in value
        )

    decoder: Decoder[Any, Any] = Decoder(
        name or f"Partial<{_fields_name(fields)}>", run
    )
    return codec(decoder, Encoder(decoder.name, encode), is_)


def array(
    item: Codec[Any, Any, Any], name: str | None = None
) -> Codec[Any, list[Any], list[Any]]:
    """
    Codec for a list (or tuple) whose items all match `item`.

    Decodes to a list; errors are keyed by item index.
    """

    def run(value: Any, context: Context) -> Result[Any]:
        if not _is_sequence(value):
            return failure(value, context, decoder)

        out: list[Any] = []
        failures: list[Failure] = []

        for i, element in enumerate(value):
            result = _child(item, element, context, i)
            if isinstance(result, Failure):
                failures.append(result)
                if is_fail_fast():
                    break
            else:
                out.append(result.value)

        return merge(failures) if failures else Success(out)

    def encode(value: list[Any]) -> list[Any]:
        return [item.encode(element) for element in value]

    def is_(value: Any) -> bool:
        return isinstance(value, list) and all(item.is_(e) for e in value)

    decoder: Decoder[Any, Any] = Decoder(name or f"list[{item.name}]", run)
    return codec(decoder, Encoder(decoder.name, encode), is_)


def tuple_(*items: Codec[Any, Any, Any]) -> Codec[Any, tuple[Any, ...], list[Any]]:
    """
    Codec for a fixed-length sequence, one codec per position.

    Decodes to a tuple and encodes to a list. A length mismatch is reported
    as a single error at the current position.
    """
    if not items:
        raise ValueError("tuple_() requires at least one codec")

    def run(value: Any, context: Context) -> Result[Any]:
        if not _is_sequence(value) or len(value) != len(items):
            return failure(value, context, decoder)

        out: list[Any] = []
        failures: list[Failure] = []

        for i, (child, element) in enumerate(zip(items, value)):
            result = _child(child, element, context, i)
            if isinstance(result, Failure):
                failures.append(result)
                if is_fail_fast():
                    break
            else:
                out.append(result.value)

        return merge(failures) if failures else Success(tuple(out))

    def encode(value: tuple[Any, ...]) -> list[Any]:
        return [child.encode(element) for child, element in zip(items, value)]

    def is_(value: Any) -> bool:
        return (
            isinstance(value, tuple)
            and len(value) == len(items)
            and all(child.is_(e) for child, e in zip(items, value))
        )

    inner = ", ".join(c.name for c in items)
    decoder: Decoder[Any, Any] = Decoder(f"tuple[{inner}]", run)
    return codec(decoder, Encoder(decoder.name, encode), is_)


def record(
    keys: Codec[Any, Any, Any], values: Codec[Any, Any, Any]
) -> Codec[Any, dict[Any, Any], dict[Any, Any]]:
    """
    Codec for a dict with arbitrary keys, validating every key and value.

    Usage:
        scores = record(string, integer)
    """

    def run(value: Any, context: Context) -> Result[Any]:
        if not isinstance(value, Mapping):
            return failure(value, context, decoder)

        out: dict[Any, Any] = {}
        failures: list[Failure] = []

        for raw_key, raw_value in value.items():
            key_result = _child(keys, raw_key, context, raw_key)
            value_result = _child(values, raw_value, context, raw_key)
            failed = [r for r in (key_result, value_result) if isinstance(r, Failure)]
            if failed:
                failures.extend(failed)
                if is_fail_fast():
                    break
            else:
                out[key_result.value] = value_result.value  # type: ignore[union-attr]

        return merge(failures) if failures else Success(out)

    def encode(value: Mapping[Any, Any]) -> dict[Any, Any]:
        return {keys.encode(k): values.encode(v) for k, v in value.items()}

    def is_(value: Any) -> bool:
        return isinstance(value, Mapping) and all(
            keys.is_(k) and values.is_(v) for k, v in value.items()
        )

    decoder: Decoder[Any, Any] = Decoder(f"dict[{keys.name}, {values.name}]", run)
    return codec(decoder, Encoder(decoder.name, encode), is_)


def union(*members: Codec[Any, Any, Any], name: str | None = None) -> Codec[Any, Any, Any]:
    """
    Codec accepting any of `members`, tried in declaration order.

    The first member to succeed wins. If every member fails, the result
    holds one error per member in declaration order, keyed by the member's
    index, with that member's own errors kept as `causes`. Encoding uses
    the first member whose guard accepts the value.

    Usage:
        id_ = union(integer, string)
    """
    if not members:
        raise ValueError("union() requires at least one codec")
    for member in members:
        if not isinstance(member, Codec):
            raise TypeError(f"union() expects Codecs, got {type(member).__name__}")

    def run(value: Any, context: Context) -> Result[Any]:
        errors: list[ValidationError] = []
        for i, member in enumerate(members):
            member_context = append_context(
                context, ContextEntry(i, member.decoder, value)
            )
            result = member.validate(value, member_context)
            if not isinstance(result, Failure):
                return result
            errors.append(
                ValidationError(
                    value, member_context, expected=member.name, causes=result.errors
                )
            )
        return Failure(tuple(errors))

    def encode(value: Any) -> Any:
        for member in members:
            if member.is_(value):
                return member.encode(value)
        return value

    def is_(value: Any) -> bool:
        return any(member.is_(value) for member in members)

    decoder: Decoder[Any, Any] = Decoder(
        name or " | ".join(m.name for m in members), run
    )
    return codec(decoder, Encoder(decoder.name, encode), is_)


def nullable(inner: Codec[Any, Any, Any]) -> Codec[Any, Any, Any]:
    """Codec accepting None in addition to whatever `inner` accepts."""

    def run(value: Any, context: Context) -> Result[Any]:
        if value is None:
            return Success(None)
        return inner.validate(value, context)

    def encode(value: Any) -> Any:
        return None if value is None else inner.encode(value)

    def is_(value: Any) -> bool:
        return value is None or inner.is_(value)

    decoder: Decoder[Any, Any] = Decoder(f"{inner.name} | None", run)
    return codec(decoder, Encoder(decoder.name, encode), is_)


def literal(*values: Any) -> Codec[Any, Any, Any]:
    """
    Codec accepting exactly one of `values`.

    Types must match as well, so literal(1) rejects True.
    """
    if not values:
        raise ValueError("literal() requires at least one value")

    def is_(value: Any) -> bool:
        return any(type(value) is type(v) and value == v for v in values)

    def run(value: Any, context: Context) -> Result[Any]:
        if is_(value):
            return Success(value)
        return failure(value, context, decoder)

    decoder: Decoder[Any, Any] = Decoder(" | ".join(repr(v) for v in values), run)
    return codec(decoder, Encoder.identity(decoder.name), is_)


def lazy(name: str, thunk: Callable[[], Codec[Any, Any, Any]]) -> Codec[Any, Any, Any]:
    """
    Codec for recursive structures.

    `thunk` is called once, on first use, so it may refer to the codec being
    defined.

    Usage:
        Category = lazy("Category", lambda: struct({
            "name": string,
            "children": array(Category),
        }))
    """
    resolve = cache(thunk)

    def run(value: Any, context: Context) -> Result[Any]:
        return resolve().validate(value, context)

    def encode(value: Any) -> Any:
        return resolve().encode(value)

    def is_(value: Any) -> bool:
        return resolve().is_(value)

    return codec(Decoder(name, run), Encoder(name, encode), is_)


def refine(
    inner: Codec[Any, Any, Any],
    predicate: Callable[[Any], bool],
    name: str,
    message: str | None = None,
) -> Codec[Any, Any, Any]:
    """
    Narrow `inner` with a predicate over the decoded value.

    A false predicate, or an exception raised by it, is a single error
    reporting the decoded value at the current context.

    Usage:
        positive = refine(integer, lambda n: n > 0, "positive", "Must be positive")
    """

    def check(value: Any) -> tuple[bool, str | None]:
        try:
            return bool(predicate(value)), message
        except Exception as e:
            return False, f"Refinement error: {e}"

    def run(value: Any, context: Context) -> Result[Any]:
        result = inner.validate(value, context)
        if isinstance(result, Failure):
            return result
        passed, msg = check(result.value)
        if passed:
            return result
        return failure(result.value, context, decoder, msg)

    def is_(value: Any) -> bool:
        return inner.is_(value) and check(value)[0]

    decoder: Decoder[Any, Any] = Decoder(name, run)
    return codec(decoder, inner.encoder, is_)
