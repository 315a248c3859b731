"""delay(): suspend the caller before every call."""

from __future__ import annotations

import inspect
import time
from collections.abc import Awaitable, Callable
from typing import Any, overload

import anyio
import wrapt

__all__ = ['delay']


@overload
def delay[**P, T](seconds: float, func: Callable[P, T], *, sleep: Callable[[float], Any] | None = None) -> Callable[P, T]: ...


@overload
def delay[**P, T](
    seconds: float, func: None = None, *, sleep: Callable[[float], Any] | None = None
) -> Callable[[Callable[P, T]], Callable[P, T]]: ...


def delay(
    seconds: float,
    func: Callable[..., Any] | None = None,
    *,
    sleep: Callable[[float], Any] | None = None,
) -> Any:
    """Wait `seconds` before each call of `func`.

    Useful to throttle calls against a rate-limited service. Coroutine
    functions are suspended with `anyio.sleep` instead of blocking the thread.

    Can be used directly or as a decorator factory:
        polite_get = delay(1.0, http_get)

        @delay(0.5)
        def poll(): ...

    Args:
        seconds: Delay before every call. Zero is allowed.
        func: The function to wrap (omit to get a decorator).
        sleep: Suspension function, `time.sleep` by default (an awaitable one,
            `anyio.sleep` by default, for coroutine functions).

    Returns:
        The wrapped function, or a decorator when `func` is omitted.

    Raises:
        ValueError: If `seconds` is negative.

    Example:
        ```python
        slow_add = delay(0.1, lambda a, b: a + b)
        slow_add(1, 2)  # returns 3 after ~0.1s
        ```
    """
    if seconds < 0:
        msg = f'delay must be non-negative, got {seconds!r}'
        raise ValueError(msg)

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(fn):
            async_sleep: Callable[[float], Awaitable[Any]] = sleep or anyio.sleep

            @wrapt.decorator
            async def async_wrapper(
                wrapped: Callable[..., Awaitable[Any]],
                instance: Any,
                args: tuple[Any, ...],
                kwargs: dict[str, Any],
            ) -> Any:
                await async_sleep(seconds)
                return await wrapped(*args, **kwargs)

            return async_wrapper(fn)

        sync_sleep = sleep or time.sleep

        @wrapt.decorator
        def sync_wrapper(
            wrapped: Callable[..., Any],
            instance: Any,
            args: tuple[Any, ...],
            kwargs: dict[str, Any],
        ) -> Any:
            sync_sleep(seconds)
            return wrapped(*args, **kwargs)

        return sync_wrapper(fn)

    if func is not None:
        return decorator(func)
    return decorator
