"""capture() and time_it(): return something other than the function's result."""

from __future__ import annotations

import contextlib
import io
import time
from collections.abc import Callable
from typing import Any, Literal

import aiologic
import wrapt

__all__ = ['capture', 'time_it']

# sys.stdout / sys.stderr are process-wide, so only one capture may redirect at a time
_redirect_lock = aiologic.RLock()

_REDIRECTS = {
    'stdout': contextlib.redirect_stdout,
    'stderr': contextlib.redirect_stderr,
}


def capture(
    func: Callable[..., Any] | None = None,
    *,
    stream: Literal['stdout', 'stderr'] = 'stdout',
) -> Any:
    """Return the text a function prints instead of its return value.

    The call runs with `sys.stdout` (or `sys.stderr`) redirected to a buffer;
    the buffer's contents are returned and the function's own return value is
    discarded. If the function raises, the exception propagates and the
    partial output is dropped.

    Args:
        func: The function to wrap (omit to get a decorator).
        stream: Which stream to capture, 'stdout' or 'stderr'.

    Returns:
        The wrapped function, or a decorator when `func` is omitted.

    Raises:
        ValueError: If `stream` is not 'stdout' or 'stderr'.

    Example:
        ```python
        text = capture(print)('hello')
        text
        # 'hello\\n'
        ```
    """
    if stream not in _REDIRECTS:
        msg = f"stream must be 'stdout' or 'stderr', got {stream!r}"
        raise ValueError(msg)
    redirect = _REDIRECTS[stream]

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> str:
        buffer = io.StringIO()
        with _redirect_lock, redirect(buffer):
            wrapped(*args, **kwargs)
        return buffer.getvalue()

    if func is not None:
        return wrapper(func)
    return wrapper


def time_it(
    func: Callable[..., Any] | None = None,
    *,
    clock: Callable[[], float] = time.perf_counter,
) -> Any:
    """Return how long a call took, in seconds, instead of its result.

    Example:
        ```python
        elapsed = time_it(sorted)(range(100_000))
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> float:
        started = clock()
        wrapped(*args, **kwargs)
        return clock() - started

    if func is not None:
        return wrapper(func)
    return wrapper
