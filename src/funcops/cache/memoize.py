"""memoize(): cache a function's results by argument value."""

from __future__ import annotations

import inspect
from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Any

import aiologic
import wrapt

from funcops._config import get_config
from funcops._logging import get_logger
from funcops.cache.keys import make_key, signature_of
from funcops.types import CacheInfo

__all__ = ['AsyncMemoized', 'Memoized', 'memoize']

logger = get_logger(__name__)

_DEFAULT: Any = object()


class _Slot:
    """In-flight computation of one key: a lock plus the number of callers using it."""

    __slots__ = ('lock', 'users')

    def __init__(self) -> None:
        self.lock = aiologic.RLock()
        self.users = 0


class Memoized(wrapt.ObjectProxy):
    """Function wrapper backed by a private result cache.

    For every distinct key the wrapped function runs at most once for the
    lifetime of the wrapper, also when several threads ask for the same key at
    once: the first caller computes while the others wait on that key's slot
    and then read the stored result. Calls for other keys proceed in parallel.

    A call that raises stores nothing, so the next call with the same key
    computes again. A stored result is never overwritten; with `maxsize` set
    the least recently used entries are evicted.

    Memoizing a function that is not pure (random numbers, I/O, reading
    mutable globals) returns stale results after the first call per key. The
    cache cannot detect this.
    """

    def __init__(
        self,
        wrapped: Callable[..., Any],
        *,
        maxsize: int | None = None,
        key: Callable[..., Hashable] | None = None,
    ) -> None:
        super().__init__(wrapped)
        self._self_maxsize = maxsize
        self._self_key_func = key
        self._self_signature = signature_of(wrapped) if key is None else None
        self._self_cache: OrderedDict[Hashable, Any] = OrderedDict()
        self._self_slots: dict[Hashable, _Slot] = {}
        self._self_lock = aiologic.Lock()
        self._self_hits = 0
        self._self_misses = 0

    def cache_key(self, *args: Any, **kwargs: Any) -> Hashable:
        """Return the key a call with these arguments is stored under."""
        if self._self_key_func is not None:
            return self._self_key_func(*args, **kwargs)
        return make_key(args, kwargs, self._self_signature)

    def _lookup(self, key: Hashable) -> tuple[bool, Any]:
        with self._self_lock:
            if key not in self._self_cache:
                return False, None
            self._self_hits += 1
            if self._self_maxsize is not None:
                self._self_cache.move_to_end(key)
            return True, self._self_cache[key]

    def _store(self, key: Hashable, value: Any) -> None:
        with self._self_lock:
            if key in self._self_cache:
                return
            self._self_cache[key] = value
            if self._self_maxsize is not None:
                while len(self._self_cache) > self._self_maxsize:
                    self._self_cache.popitem(last=False)
                    logger.debug('memoize.evict', function=self._describe(), maxsize=self._self_maxsize)

    def _acquire_slot(self, key: Hashable) -> _Slot:
        with self._self_lock:
            slot = self._self_slots.get(key)
            if slot is None:
                slot = self._self_slots[key] = _Slot()
            slot.users += 1
            return slot

    def _release_slot(self, key: Hashable, slot: _Slot) -> None:
        with self._self_lock:
            slot.users -= 1
            if slot.users == 0 and self._self_slots.get(key) is slot:
                del self._self_slots[key]

    def _describe(self) -> str:
        wrapped = self.__wrapped__
        return getattr(wrapped, '__qualname__', None) or repr(wrapped)

    def _count_miss(self) -> None:
        with self._self_lock:
            self._self_misses += 1
        logger.debug('memoize.miss', function=self._describe())

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        key = self.cache_key(*args, **kwargs)

        hit, value = self._lookup(key)
        if hit:
            return value

        slot = self._acquire_slot(key)
        try:
            with slot.lock:
                hit, value = self._lookup(key)
                if hit:
                    return value
                self._count_miss()
                result = self.__wrapped__(*args, **kwargs)
                self._store(key, result)
                return result
        finally:
            self._release_slot(key, slot)

    def cache_info(self) -> CacheInfo:
        """Return hit/miss statistics and the current size."""
        with self._self_lock:
            return CacheInfo(
                hits=self._self_hits,
                misses=self._self_misses,
                maxsize=self._self_maxsize,
                currsize=len(self._self_cache),
            )

    def cache_clear(self) -> None:
        """Drop every stored result and reset the statistics."""
        with self._self_lock:
            self._self_cache.clear()
            self._self_hits = 0
            self._self_misses = 0

    def __contains__(self, key: Hashable) -> bool:
        with self._self_lock:
            return key in self._self_cache

    def __repr__(self) -> str:
        return f'<memoized {self._describe()} ({len(self._self_cache)} entries)>'


class AsyncMemoized(Memoized):
    """`Memoized` for coroutine functions: the awaited result is stored, never the coroutine.

    The same guarantees hold across tasks: concurrent awaits of one key wait on
    that key's slot while the first computes, and a call that raises or is
    cancelled stores nothing.
    """

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        key = self.cache_key(*args, **kwargs)

        hit, value = self._lookup(key)
        if hit:
            return value

        slot = self._acquire_slot(key)
        try:
            async with slot.lock:
                hit, value = self._lookup(key)
                if hit:
                    return value
                self._count_miss()
                result = await self.__wrapped__(*args, **kwargs)
                self._store(key, result)
                return result
        finally:
            self._release_slot(key, slot)


def memoize(
    func: Callable[..., Any] | None = None,
    *,
    maxsize: int | None = _DEFAULT,
    key: Callable[..., Hashable] | None = None,
) -> Any:
    """Cache the results of `func` by the value of its arguments.

    Can be used with or without arguments:
        @memoize
        def fib(n): ...

        @memoize(maxsize=1024)
        def lookup(name): ...

    Coroutine functions get an `AsyncMemoized` wrapper, which stores the
    awaited result.

    Args:
        func: The function to wrap (when used without parentheses).
        maxsize: Maximum number of entries, evicting the least recently used.
            None means unbounded; defaults to the configured
            `memoize_maxsize` (unbounded unless configured).
        key: Custom key function called with the call's arguments. By default
            keys are derived with `make_key`.

    Returns:
        A `Memoized` wrapper, or a decorator when `func` is omitted.

    Raises:
        ValueError: If `maxsize` is not None and less than 1.

    Example:
        ```python
        @memoize
        def slow_square(x):
            time.sleep(1)
            return x * x

        slow_square(4)  # takes a second
        slow_square(4)  # instant
        slow_square.cache_info()
        # CacheInfo(hits=1, misses=1, maxsize=None, currsize=1)
        ```
    """
    if maxsize is _DEFAULT:
        maxsize = get_config().memoize_maxsize
    if maxsize is not None and (isinstance(maxsize, bool) or not isinstance(maxsize, int) or maxsize < 1):
        msg = f'maxsize must be a positive integer or None, got {maxsize!r}'
        raise ValueError(msg)

    def decorator(fn: Callable[..., Any]) -> Memoized:
        if inspect.iscoroutinefunction(fn):
            return AsyncMemoized(fn, maxsize=maxsize, key=key)
        return Memoized(fn, maxsize=maxsize, key=key)

    if func is not None:
        return decorator(func)
    return decorator
