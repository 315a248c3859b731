"""Predicate algebra: and_(), or_(), not_() and the Predicate operators.

Combined predicates evaluate their operands left to right and stop as soon as
the outcome is known. A skipped operand is never called, so it has no
observable side effect. Exceptions raised by an evaluated operand propagate
unchanged.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import wrapt

__all__ = [
    'AllOf',
    'AnyOf',
    'Not',
    'Predicate',
    'always',
    'and_',
    'never',
    'not_',
    'or_',
    'predicate',
]


def _name(func: Callable[..., Any]) -> str:
    if isinstance(func, Predicate):
        return repr(func)
    return getattr(func, '__qualname__', None) or getattr(func, '__name__', None) or repr(func)


class Predicate(wrapt.ObjectProxy):
    """A callable returning bool, combinable with `&`, `|` and `~`.

    Example:
        ```python
        is_even = Predicate(lambda n: n % 2 == 0)
        is_small = Predicate(lambda n: n < 10)
        (is_even & ~is_small)(12)
        # True
        ```
    """

    def __init__(self, func: Callable[..., Any]) -> None:
        if not callable(func):
            msg = f'predicate must be callable, got {func!r}'
            raise TypeError(msg)
        super().__init__(func)

    def __call__(self, *args: Any, **kwargs: Any) -> bool:
        return bool(self.__wrapped__(*args, **kwargs))

    def __and__(self, other: Callable[..., Any]) -> AllOf:
        return and_(self, other)

    def __rand__(self, other: Callable[..., Any]) -> AllOf:
        return and_(other, self)

    def __or__(self, other: Callable[..., Any]) -> AnyOf:
        return or_(self, other)

    def __ror__(self, other: Callable[..., Any]) -> AnyOf:
        return or_(other, self)

    def __invert__(self) -> Not:
        return not_(self)

    def __repr__(self) -> str:
        return f'Predicate({_name(self.__wrapped__)})'


class AllOf(Predicate):
    """True when every operand is true; stops at the first false one."""

    def __init__(self, operands: tuple[Callable[..., Any], ...]) -> None:
        super().__init__(operands[0])
        self._self_operands = operands

    @property
    def operands(self) -> tuple[Callable[..., Any], ...]:
        return self._self_operands

    def __call__(self, *args: Any, **kwargs: Any) -> bool:
        for operand in self._self_operands:
            if not operand(*args, **kwargs):
                return False
        return True

    def __repr__(self) -> str:
        return f'and_({", ".join(_name(op) for op in self._self_operands)})'


class AnyOf(Predicate):
    """True when some operand is true; stops at the first true one."""

    def __init__(self, operands: tuple[Callable[..., Any], ...]) -> None:
        super().__init__(operands[0])
        self._self_operands = operands

    @property
    def operands(self) -> tuple[Callable[..., Any], ...]:
        return self._self_operands

    def __call__(self, *args: Any, **kwargs: Any) -> bool:
        for operand in self._self_operands:
            if operand(*args, **kwargs):
                return True
        return False

    def __repr__(self) -> str:
        return f'or_({", ".join(_name(op) for op in self._self_operands)})'


class Not(Predicate):
    """Logical complement of one operand."""

    @property
    def operand(self) -> Callable[..., Any]:
        return self.__wrapped__

    def __call__(self, *args: Any, **kwargs: Any) -> bool:
        return not self.__wrapped__(*args, **kwargs)

    def __repr__(self) -> str:
        return f'not_({_name(self.__wrapped__)})'


def _operands(op: str, kind: type[AllOf | AnyOf], predicates: tuple[Any, ...]) -> tuple[Callable[..., Any], ...]:
    flat: list[Callable[..., Any]] = []
    for position, pred in enumerate(predicates):
        if not callable(pred):
            msg = f'{op}() argument {position} is not callable: {pred!r}'
            raise TypeError(msg)
        # Same-kind nodes merge; evaluation order is unchanged
        if type(pred) is kind:
            flat.extend(pred.operands)
        else:
            flat.append(pred)
    return tuple(flat)


def and_(p: Callable[..., Any], q: Callable[..., Any], *more: Callable[..., Any]) -> AllOf:
    """Combine predicates with short-circuit AND.

    `p` is evaluated first; if it is false the result is False and `q` is
    never called.
    """
    return AllOf(_operands('and_', AllOf, (p, q, *more)))


def or_(p: Callable[..., Any], q: Callable[..., Any], *more: Callable[..., Any]) -> AnyOf:
    """Combine predicates with short-circuit OR.

    `p` is evaluated first; if it is true the result is True and `q` is never
    called.
    """
    return AnyOf(_operands('or_', AnyOf, (p, q, *more)))


def not_(p: Callable[..., Any]) -> Not:
    """Negate a predicate."""
    return Not(p)


def predicate(func: Callable[..., Any]) -> Predicate:
    """Decorator turning a function into a combinable `Predicate`."""
    return Predicate(func)


def _true(*args: Any, **kwargs: Any) -> bool:
    return True


def _false(*args: Any, **kwargs: Any) -> bool:
    return False


always = Predicate(_true)
never = Predicate(_false)
