"""every(): count calls and notify on every n-th one."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Any

import aiologic
import wrapt

from funcops._config import get_config

__all__ = ['Every', 'every']


def _marker_writer(marker: str) -> Callable[[int], None]:
    """Notifier writing `marker` to the current sys.stdout."""

    def notify(count: int) -> None:
        sys.stdout.write(marker)
        sys.stdout.flush()

    return notify


class Every(wrapt.ObjectProxy):
    """Function wrapper owning an invocation counter.

    The counter starts at zero, is incremented under a lock on every call and
    is never reset by calling. Whenever it reaches a multiple of `n` the
    notifier is called with the new count; the wrapped function is then
    always called.

    Attributes:
        calls: Number of calls seen so far.
    """

    def __init__(self, wrapped: Callable[..., Any], n: int, notify: Callable[[int], Any]) -> None:
        super().__init__(wrapped)
        self._self_n = n
        self._self_notify = notify
        self._self_calls = 0
        self._self_lock = aiologic.Lock()

    @property
    def calls(self) -> int:
        return self._self_calls

    @property
    def n(self) -> int:
        return self._self_n

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        with self._self_lock:
            self._self_calls += 1
            count = self._self_calls
        if count % self._self_n == 0:
            self._self_notify(count)
        return self.__wrapped__(*args, **kwargs)

    def __repr__(self) -> str:
        return f'<every {self._self_n} calls of {self.__wrapped__!r}, {self._self_calls} so far>'


def every(
    n: int,
    func: Callable[..., Any] | None = None,
    *,
    notify: Callable[[int], Any] | None = None,
) -> Any:
    """Notify every `n` calls of `func`.

    Handy for progress reporting in long loops: by default a marker (`.`,
    configurable through `funcops.init(marker=...)`) is written to standard
    output on every n-th call.

    Args:
        n: Notification period, at least 1.
        func: The function to wrap (omit to get a decorator).
        notify: Called with the call count on every n-th call.

    Returns:
        An `Every` wrapper, or a decorator when `func` is omitted.

    Raises:
        ValueError: If `n` is less than 1.

    Example:
        ```python
        fetch = every(10, download)
        for url in urls:
            fetch(url)  # prints '.' after every 10 downloads
        fetch.calls
        ```
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        msg = f'every() needs a positive integer period, got {n!r}'
        raise ValueError(msg)

    notifier = notify if notify is not None else _marker_writer(get_config().marker)

    def decorator(fn: Callable[..., Any]) -> Every:
        return Every(fn, n, notifier)

    if func is not None:
        return decorator(func)
    return decorator
