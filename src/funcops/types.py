"""Immutable records produced by function operators.

Frozen msgspec structs; they encode with `msgspec.json.encode` when the
contained values do.
"""

from __future__ import annotations

from typing import Any

import msgspec

__all__ = ['CacheInfo', 'CallArgs', 'CallRecord']


class CallArgs(msgspec.Struct, frozen=True):
    """Snapshot of the arguments of one invocation.

    Attributes:
        args: Positional arguments, in call order.
        kwargs: Named arguments (a private copy of the caller's mapping).
    """

    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = msgspec.field(default_factory=dict)

    @classmethod
    def capture(cls, args: tuple[Any, ...], kwargs: dict[str, Any]) -> CallArgs:
        """Snapshot `args`/`kwargs` so later mutation by the caller is not observed."""
        return cls(tuple(args), dict(kwargs))

    @property
    def first(self) -> Any:
        """The first positional argument, or None for a call without one."""
        return self.args[0] if self.args else None


class CallRecord(msgspec.Struct, frozen=True):
    """One completed invocation observed by a `Recorder`.

    Attributes:
        index: Position of the record in its recorder's history.
        args: Positional arguments of the call.
        kwargs: Named arguments of the call.
        result: Returned value (None when the call failed).
        error: The exception raised by the call, if any.
        elapsed: Wall-clock duration of the call in seconds.
    """

    index: int
    args: tuple[Any, ...]
    kwargs: dict[str, Any]
    result: Any = None
    error: BaseException | None = None
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        """True when the call returned normally."""
        return self.error is None


class CacheInfo(msgspec.Struct, frozen=True, gc=False):
    """Statistics of a memoization cache.

    Attributes:
        hits: Calls answered from the cache.
        misses: Calls that ran the wrapped function.
        maxsize: Entry bound (None = unbounded).
        currsize: Number of stored entries.
    """

    hits: int
    misses: int
    maxsize: int | None
    currsize: int
