"""
Decode options scoped with a context manager.

Options live in a ContextVar, so each thread and each asyncio task sees its
own value and nesting restores the outer value on exit.
"""

from contextlib import contextmanager
from contextvars import ContextVar

_fail_fast: ContextVar[bool] = ContextVar("roundtrip_fail_fast", default=False)


def is_fail_fast() -> bool:
    """True while inside decode_options(fail_fast=True)."""
    return _fail_fast.get()


@contextmanager
def decode_options(*, fail_fast: bool = False):
    """
    Set decode options for the enclosed block.

    `fail_fast` makes struct, partial, array, tuple_ and record return as
    soon as one child fails, reporting only that child. Unions are not
    affected: every member is still tried. Sequential composition always
    stops at the first failing stage regardless of this option.

    Usage:
        Point = struct({"x": integer, "y": integer})

        Point.decode({"x": "1", "y": "2"})       # 2 errors: x and y

        with decode_options(fail_fast=True):
            Point.decode({"x": "1", "y": "2"})   # 1 error: x
    """
    token = _fail_fast.set(fail_fast)
    try:
        yield
    finally:
        _fail_fast.reset(token)
