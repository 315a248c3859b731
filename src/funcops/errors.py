"""Error types raised by function operators.

Failures raised by wrapped callables are never translated: they propagate
through every operator unchanged unless a `fallback` explicitly intercepts
them. The types below only cover problems detected by funcops itself.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    'DuplicateCallableError',
    'FuncOpsError',
    'SinkNotWritableError',
    'UnknownCallableError',
]


class FuncOpsError(Exception):
    """Base exception class for funcops errors.

    Attributes:
        message (str): A human-readable description of the error.
        code (str | None): An optional error code for programmatic error handling.

    Example:
        ```python
        from funcops import FuncOpsError, log_to

        try:
            log_to('/no/such/dir/calls.log', print)
        except FuncOpsError as e:
            print(e.code)  # 'sink-not-writable'
        ```
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message: str = message
        self.code: str | None = code

    def __str__(self) -> str:
        if self.code:
            return f'[{self.code}] {self.message}'
        return self.message


class SinkNotWritableError(FuncOpsError):
    """A log sink cannot be appended to.

    Raised when the decorator is constructed, never on first call.
    """

    def __init__(self, sink: Any, reason: str) -> None:
        self.sink = sink
        self.reason = reason
        super().__init__(f'Log sink {sink!r} is not writable: {reason}', code='sink-not-writable')


class UnknownCallableError(FuncOpsError, KeyError):
    """No callable is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No callable registered as '{name}'", code='unknown-callable')

    # KeyError.__str__ would repr() the message
    __str__ = FuncOpsError.__str__


class DuplicateCallableError(FuncOpsError):
    """A registry name is already bound to a callable."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A callable is already registered as '{name}'", code='duplicate-callable')
