"""log_to(): append a timestamped entry to a sink on every call."""

from __future__ import annotations

import functools
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any, TextIO

import aiologic
import structlog
import wrapt

from funcops.errors import SinkNotWritableError

__all__ = ['LogSink', 'log_to']


class LogSink:
    """Append-only destination for log entries: a file path or a text stream.

    Writability is checked on construction. Paths are reopened in append mode
    for every entry so the file may be rotated between calls; streams are kept
    and flushed after each entry. Entries are rendered through a structlog
    processor chain (ISO timestamp, then JSON or key=value).
    """

    def __init__(self, target: str | os.PathLike[str] | TextIO, *, json: bool = True) -> None:
        self._lock = aiologic.Lock()
        self._write: Callable[[str], None]

        if isinstance(target, (str, os.PathLike)):
            path = Path(target)
            self._check_path(path)
            self._write = functools.partial(self._write_path, path)
        else:
            self._check_stream(target)
            self._write = functools.partial(self._write_stream, target)

        self._processors: list[Any] = [
            structlog.processors.TimeStamper(fmt='iso', utc=True, key='timestamp'),
            structlog.processors.JSONRenderer()
            if json
            else structlog.processors.KeyValueRenderer(key_order=['timestamp', 'event']),
        ]
        self.target = target

    @staticmethod
    def _check_path(path: Path) -> None:
        if path.is_dir():
            raise SinkNotWritableError(path, 'is a directory')
        try:
            with path.open('a', encoding='utf-8'):
                pass
        except OSError as e:
            raise SinkNotWritableError(path, e.strerror or str(e)) from e

    @staticmethod
    def _check_stream(stream: Any) -> None:
        if not callable(getattr(stream, 'write', None)):
            raise SinkNotWritableError(stream, 'has no write() method')
        if getattr(stream, 'closed', False):
            raise SinkNotWritableError(stream, 'stream is closed')
        writable = getattr(stream, 'writable', None)
        if callable(writable) and not writable():
            raise SinkNotWritableError(stream, 'stream is not writable')

    @staticmethod
    def _write_path(path: Path, line: str) -> None:
        with path.open('a', encoding='utf-8') as fh:
            fh.write(line)

    @staticmethod
    def _write_stream(stream: TextIO, line: str) -> None:
        stream.write(line)
        flush = getattr(stream, 'flush', None)
        if callable(flush):
            flush()

    def render(self, event: str, **fields: Any) -> str:
        """Render one entry as a single line (without the newline)."""
        event_dict: Any = {'event': event, **fields}
        for processor in self._processors:
            event_dict = processor(None, 'info', event_dict)
        return event_dict

    def append(self, event: str, **fields: Any) -> None:
        """Render and append one entry."""
        line = self.render(event, **fields) + '\n'
        with self._lock:
            self._write(line)

    def __repr__(self) -> str:
        return f'LogSink({self.target!r})'


def _function_name(func: Callable[..., Any]) -> str:
    return getattr(func, '__qualname__', None) or getattr(func, '__name__', None) or repr(func)


def log_to(
    sink: str | os.PathLike[str] | TextIO | LogSink,
    func: Callable[..., Any] | None = None,
    *,
    message: str | None = None,
    json: bool = True,
) -> Any:
    """Log every call of `func` to `sink` before delegating.

    Each call appends one line holding an ISO-8601 UTC timestamp, the event
    message and the function name, e.g.
    `{"event": "download", "function": "download", "timestamp": "..."}`.

    The sink is validated immediately: a path whose directory does not exist
    or which cannot be opened for appending, or a closed / read-only stream,
    raises `SinkNotWritableError` here rather than on the first call.

    Args:
        sink: File path, writable text stream or an existing `LogSink`
            (to share one file lock between several wrapped functions).
        func: The function to wrap (omit to get a decorator).
        message: Event text (defaults to the function's qualified name).
        json: Render JSON lines (False = `key=value` lines).

    Returns:
        The wrapped function, or a decorator when `func` is omitted.

    Raises:
        SinkNotWritableError: If the sink cannot be appended to.

    Example:
        ```python
        fetch = log_to('calls.log', download)
        fetch('http://example.com')  # appends one line to calls.log
        ```
    """
    log_sink = sink if isinstance(sink, LogSink) else LogSink(sink, json=json)

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        name = _function_name(fn)
        event = message if message is not None else name

        @wrapt.decorator
        def wrapper(
            wrapped: Callable[..., Any],
            instance: Any,
            args: tuple[Any, ...],
            kwargs: dict[str, Any],
        ) -> Any:
            log_sink.append(event, function=name)
            return wrapped(*args, **kwargs)

        return wrapper(fn)

    if func is not None:
        return decorator(func)
    return decorator
