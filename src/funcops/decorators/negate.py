"""negate(): logical complement of a predicate's result."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

import wrapt

__all__ = ['negate']


def negate[**P](func: Callable[P, Any]) -> Callable[P, bool]:
    """Return a function computing `not func(...)`.

    Exceptions raised by `func` propagate unchanged. Coroutine functions are
    detected and awaited.

    Example:
        ```python
        is_odd = negate(lambda n: n % 2 == 0)
        list(filter(is_odd, range(5)))
        # [1, 3]
        ```
    """
    if inspect.iscoroutinefunction(func):

        @wrapt.decorator
        async def async_wrapper(
            wrapped: Callable[..., Awaitable[Any]],
            instance: Any,
            args: tuple[Any, ...],
            kwargs: dict[str, Any],
        ) -> bool:
            return not await wrapped(*args, **kwargs)

        return async_wrapper(func)  # type: ignore[return-value]

    @wrapt.decorator
    def sync_wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> bool:
        return not wrapped(*args, **kwargs)

    return sync_wrapper(func)  # type: ignore[return-value]
