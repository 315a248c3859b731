"""tee() and remember(): observe calls without altering their results."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import aiologic
import wrapt

from funcops.types import CallArgs, CallRecord

__all__ = ['Recorder', 'remember', 'tee']


def _ignore(value: Any) -> None:
    return None


def tee(
    func: Callable[..., Any] | None = None,
    *,
    on_input: Callable[[CallArgs], Any] | None = None,
    on_output: Callable[[Any], Any] | None = None,
) -> Any:
    """Pass a call's input and output to observers.

    On each call a `CallArgs` snapshot of the arguments is handed to
    `on_input`, the wrapped function runs, its result is handed to
    `on_output`, and that same result object is returned. Observers are for
    side-channel introspection: whatever they return is discarded. If the
    wrapped function raises, `on_output` is not called and the exception
    propagates.

    Args:
        func: The function to wrap (omit to get a decorator).
        on_input: Called with the argument snapshot before the call.
        on_output: Called with the result after the call.

    Returns:
        The wrapped function, or a decorator when `func` is omitted.

    Example:
        ```python
        seen = []
        traced = tee(abs, on_input=seen.append, on_output=print)
        traced(-3)  # prints 3, returns 3
        seen[0].args
        # (-3,)
        ```
    """
    observe_input = on_input or _ignore
    observe_output = on_output or _ignore

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        observe_input(CallArgs.capture(args, kwargs))
        result = wrapped(*args, **kwargs)
        observe_output(result)
        return result

    if func is not None:
        return wrapper(func)
    return wrapper


class Recorder(wrapt.ObjectProxy):
    """Function wrapper keeping a history of its calls.

    Every completed call, successful or not, appends a `CallRecord`. The
    append happens under the recorder's lock, so with concurrent callers the
    history is ordered by completion. Failures are recorded and then
    re-raised unchanged.
    """

    def __init__(self, wrapped: Callable[..., Any], *, clock: Callable[[], float] = time.perf_counter) -> None:
        super().__init__(wrapped)
        self._self_clock = clock
        self._self_history: list[CallRecord] = []
        self._self_lock = aiologic.Lock()

    @property
    def history(self) -> tuple[CallRecord, ...]:
        """Snapshot of the recorded calls, oldest first."""
        with self._self_lock:
            return tuple(self._self_history)

    @property
    def results(self) -> tuple[Any, ...]:
        """Results of the successful calls, oldest first."""
        return tuple(record.result for record in self.history if record.ok)

    def clear(self) -> None:
        """Forget all recorded calls."""
        with self._self_lock:
            self._self_history.clear()

    def _append(self, snapshot: CallArgs, result: Any, error: BaseException | None, elapsed: float) -> None:
        with self._self_lock:
            self._self_history.append(
                CallRecord(
                    index=len(self._self_history),
                    args=snapshot.args,
                    kwargs=snapshot.kwargs,
                    result=result,
                    error=error,
                    elapsed=elapsed,
                )
            )

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        snapshot = CallArgs.capture(args, kwargs)
        started = self._self_clock()
        try:
            result = self.__wrapped__(*args, **kwargs)
        except Exception as e:
            self._append(snapshot, None, e, self._self_clock() - started)
            raise
        self._append(snapshot, result, None, self._self_clock() - started)
        return result

    def __repr__(self) -> str:
        return f'<recorder of {self.__wrapped__!r}, {len(self._self_history)} calls>'


def remember(func: Callable[..., Any]) -> Recorder:
    """Record every call of `func`.

    Example:
        ```python
        square = remember(lambda x: x * x)
        square(2), square(3)
        square.results
        # (4, 9)
        square.history[0].args
        # (2,)
        ```
    """
    return Recorder(func)
