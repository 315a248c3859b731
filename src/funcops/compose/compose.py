"""compose(), pipe() and juxt() for combining callables."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, overload

import wrapt

__all__ = ['Composed', 'Juxt', 'compose', 'identity', 'juxt', 'pipe']


def identity[T](value: T) -> T:
    """Return `value` unchanged."""
    return value


def _name(func: Callable[..., Any]) -> str:
    return getattr(func, '__qualname__', None) or getattr(func, '__name__', None) or repr(func)


def _check_callables(op: str, fns: tuple[Any, ...]) -> None:
    if not fns:
        msg = f'{op}() requires at least one callable'
        raise TypeError(msg)
    for position, fn in enumerate(fns):
        if not callable(fn):
            msg = f'{op}() argument {position} is not callable: {fn!r}'
            raise TypeError(msg)


class Composed(wrapt.ObjectProxy):
    """Two callables chained so that `outer` receives `inner`'s result.

    The proxy wraps `inner`, the callable that receives the caller's
    arguments, so its name, docstring and signature describe the input side
    of the composition.
    """

    def __init__(self, outer: Callable[[Any], Any], inner: Callable[..., Any]) -> None:
        super().__init__(inner)
        self._self_outer = outer

    @property
    def functions(self) -> tuple[Callable[..., Any], ...]:
        """All composed callables, outermost first (the last one runs first)."""
        inner = self.__wrapped__
        if isinstance(inner, Composed):
            return (self._self_outer, *inner.functions)
        return (self._self_outer, inner)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._self_outer(self.__wrapped__(*args, **kwargs))

    def __repr__(self) -> str:
        return f'compose({", ".join(_name(fn) for fn in self.functions)})'


@overload
def compose[T, R](f: Callable[[T], R], /) -> Callable[[T], R]: ...
@overload
def compose[T, T1, R](f: Callable[[T1], R], g: Callable[[T], T1], /) -> Callable[[T], R]: ...
@overload
def compose[T, T1, T2, R](
    f: Callable[[T2], R], g: Callable[[T1], T2], h: Callable[[T], T1], /
) -> Callable[[T], R]: ...
@overload
def compose(*fns: Callable[..., Any]) -> Callable[..., Any]: ...


def compose(*fns: Callable[..., Any]) -> Callable[..., Any]:
    """Compose callables right to left.

    `compose(f, g)(*args, **kwargs)` is `f(g(*args, **kwargs))`: the last
    callable runs first and receives the full input, every other callable
    receives the single result of the one to its right. Longer chains are
    built by repeated pairwise composition, `compose(f, g, h)` being
    `compose(f, compose(g, h))`.

    No error handling is added: if an inner callable raises, the outer ones
    are never called and the exception propagates unchanged.

    Args:
        *fns: One or more callables.

    Returns:
        The composed callable.

    Raises:
        TypeError: If no callables are given or one of them is not callable.

    Example:
        ```python
        inc_then_double = compose(lambda x: x * 2, lambda x: x + 1)
        inc_then_double(3)
        # 8
        ```
    """
    _check_callables('compose', fns)
    if len(fns) == 1:
        return Composed(identity, fns[0])
    return functools.reduce(lambda inner, outer: Composed(outer, inner), reversed(fns[:-1]), fns[-1])


def pipe(*fns: Callable[..., Any]) -> Callable[..., Any]:
    """Compose callables left to right.

    `pipe(f, g, h)` is `compose(h, g, f)`: the first callable receives the
    full input.

    Example:
        ```python
        pipe(str.strip, str.upper)('  hi ')
        # 'HI'
        ```
    """
    _check_callables('pipe', fns)
    return compose(*reversed(fns))


class Juxt(wrapt.ObjectProxy):
    """Calls several callables with the same arguments and collects their results."""

    def __init__(self, fns: tuple[Callable[..., Any], ...]) -> None:
        super().__init__(fns[0])
        self._self_functions = fns

    @property
    def functions(self) -> tuple[Callable[..., Any], ...]:
        return self._self_functions

    def __call__(self, *args: Any, **kwargs: Any) -> tuple[Any, ...]:
        return tuple(fn(*args, **kwargs) for fn in self._self_functions)

    def __repr__(self) -> str:
        return f'juxt({", ".join(_name(fn) for fn in self._self_functions)})'


def juxt(*fns: Callable[..., Any]) -> Callable[..., tuple[Any, ...]]:
    """Combine callables in parallel over one input.

    The returned callable invokes each function, left to right, with the
    arguments it was called with and returns their results as a tuple. A
    failure propagates immediately and the remaining functions are not called.

    Example:
        ```python
        stats = juxt(min, max, len)
        stats([3, 1, 2])
        # (1, 3, 3)
        ```
    """
    _check_callables('juxt', fns)
    return Juxt(fns)
