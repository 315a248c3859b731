"""fallback(): substitute a default value when a call fails."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

import wrapt

from funcops._logging import get_logger

__all__ = ['fallback']

logger = get_logger(__name__)


def _log_intercepted(wrapped: Callable[..., Any], error: BaseException) -> None:
    name = getattr(wrapped, '__qualname__', None) or repr(wrapped)
    logger.debug('fallback.intercepted', function=name, error=repr(error))


def fallback(
    default: Any,
    func: Callable[..., Any] | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Return `default` instead of raising.

    This is the only operator that intercepts failures. It turns a batch where
    some calls fail into one where failures are tolerated and can be picked
    out afterwards by comparing results with the default, so choose a default
    that genuine results can never equal (a dedicated sentinel object works
    well). Intercepted exceptions are logged at debug level.

    Can be used directly or as a decorator factory:
        safe_parse = fallback(None, int)

        @fallback(-1, exceptions=(KeyError,))
        def lookup(key): ...

    Args:
        default: Value returned when the call raises.
        func: The function to wrap (omit to get a decorator).
        exceptions: Exception types to intercept. Defaults to (Exception,);
            other exceptions propagate.

    Returns:
        The wrapped function, or a decorator when `func` is omitted.

    Example:
        ```python
        to_int = fallback(-1, int)
        [to_int(s) for s in ['1', 'a', '3']]
        # [1, -1, 3]
        ```
    """
    catch = exceptions if exceptions is not None else (Exception,)

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(fn):

            @wrapt.decorator
            async def async_wrapper(
                wrapped: Callable[..., Awaitable[Any]],
                instance: Any,
                args: tuple[Any, ...],
                kwargs: dict[str, Any],
            ) -> Any:
                try:
                    return await wrapped(*args, **kwargs)
                except catch as e:
                    _log_intercepted(wrapped, e)
                    return default

            return async_wrapper(fn)

        @wrapt.decorator
        def sync_wrapper(
            wrapped: Callable[..., Any],
            instance: Any,
            args: tuple[Any, ...],
            kwargs: dict[str, Any],
        ) -> Any:
            try:
                return wrapped(*args, **kwargs)
            except catch as e:
                _log_intercepted(wrapped, e)
                return default

        return sync_wrapper(fn)

    if func is not None:
        return decorator(func)
    return decorator
