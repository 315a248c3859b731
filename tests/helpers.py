"""Test helpers shared across modules."""

from __future__ import annotations


class CallCounter:
    """A pure function that records every time it really runs."""

    def __init__(self, func=None) -> None:
        self.calls: list[tuple] = []
        self._func = func or (lambda x: x * 10)

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        return self._func(*args, **kwargs)

    @property
    def count(self) -> int:
        return len(self.calls)
