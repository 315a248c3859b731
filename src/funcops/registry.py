"""Registry: explicit name to callable mapping.

For the boundary cases where a function must be chosen by name (a config
file, a command line), resolve the name once against a registry and wrap
the returned callable. Wrappers never look functions up by name themselves.
funcops keeps no global registry; create one where it is needed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from funcops._logging import get_logger
from funcops.errors import DuplicateCallableError, UnknownCallableError

__all__ = ['Registry']

logger = get_logger(__name__)


class Registry:
    """A mapping from names to callables.

    Example:
        ```python
        transforms = Registry()

        @transforms.register()
        def strip(text):
            return text.strip()

        clean = memoize(transforms.resolve('strip'))
        ```
    """

    def __init__(self, entries: dict[str, Callable[..., Any]] | None = None) -> None:
        self._entries: dict[str, Callable[..., Any]] = {}
        for name, func in (entries or {}).items():
            self.add(name, func)

    def add(self, name: str, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register `func` under `name` and return it.

        Raises:
            TypeError: If `func` is not callable.
            DuplicateCallableError: If `name` is already taken.
        """
        if not callable(func):
            msg = f'cannot register non-callable {func!r} as {name!r}'
            raise TypeError(msg)
        if name in self._entries:
            raise DuplicateCallableError(name)
        self._entries[name] = func
        return func

    def register(self, name: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator registering a function under `name` (default: its `__name__`)."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            return self.add(name or func.__name__, func)

        return decorator

    def resolve(self, name: str) -> Callable[..., Any]:
        """Return the callable registered as `name`.

        Raises:
            UnknownCallableError: If nothing is registered under `name`.
        """
        try:
            func = self._entries[name]
        except KeyError:
            raise UnknownCallableError(name) from None
        logger.debug('registry.resolve', name=name)
        return func

    def remove(self, name: str) -> Callable[..., Any]:
        """Unregister `name` and return the callable it referred to."""
        try:
            return self._entries.pop(name)
        except KeyError:
            raise UnknownCallableError(name) from None

    def names(self) -> list[str]:
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f'<Registry with {len(self._entries)} callables>'
