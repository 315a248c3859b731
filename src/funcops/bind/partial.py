"""bind(): partial application with eagerly captured arguments."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

import wrapt

from funcops.cache.keys import signature_of

__all__ = ['Bound', 'bind']

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _snapshot(value: Any) -> Any:
    """Copy mutable builtin containers so later mutation by the caller is not seen."""
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return dict(value)
    if isinstance(value, set):
        return set(value)
    if isinstance(value, bytearray):
        return bytearray(value)
    return value


def _name(func: Callable[..., Any]) -> str:
    return getattr(func, '__qualname__', None) or getattr(func, '__name__', None) or repr(func)


class Bound(wrapt.ObjectProxy):
    """A function with some arguments fixed.

    Attributes mirror `functools.partial`: `func`, `args` and `keywords`.
    """

    def __init__(self, func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        super().__init__(func)
        self._self_args = tuple(_snapshot(value) for value in args)
        self._self_kwargs = {name: _snapshot(value) for name, value in kwargs.items()}
        self._self_signature = signature_of(func)
        if self._self_signature is not None:
            self._check_bindable(self._self_signature)

    @property
    def func(self) -> Callable[..., Any]:
        return self.__wrapped__

    @property
    def args(self) -> tuple[Any, ...]:
        return self._self_args

    @property
    def keywords(self) -> dict[str, Any]:
        return dict(self._self_kwargs)

    def _check_bindable(self, sig: inspect.Signature) -> None:
        params = list(sig.parameters.values())
        positional = [p for p in params if p.kind in _POSITIONAL]
        accepts_varargs = any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params)
        accepts_varkw = any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params)

        if len(self._self_args) > len(positional) and not accepts_varargs:
            msg = (
                f'{_name(self.__wrapped__)}() takes {len(positional)} positional arguments, '
                f'cannot bind {len(self._self_args)}'
            )
            raise TypeError(msg)

        consumed = {p.name for p in positional[: len(self._self_args)]}
        for name in self._self_kwargs:
            param = sig.parameters.get(name)
            if param is None or param.kind in _VARIADIC:
                if not accepts_varkw:
                    msg = f'{_name(self.__wrapped__)}() got an unexpected keyword argument {name!r}'
                    raise TypeError(msg)
            elif name in consumed:
                msg = f'{_name(self.__wrapped__)}() got multiple values for argument {name!r}'
                raise TypeError(msg)

    def _resolve(
        self, sig: inspect.Signature, rest: tuple[Any, ...], rest_kwargs: dict[str, Any]
    ) -> inspect.BoundArguments:
        """Merge bound and call-time arguments by parameter name."""
        params = sig.parameters
        positional = [p for p in params.values() if p.kind in _POSITIONAL]
        varargs = next((p for p in params.values() if p.kind is inspect.Parameter.VAR_POSITIONAL), None)
        varkw = next((p for p in params.values() if p.kind is inspect.Parameter.VAR_KEYWORD), None)

        arguments: dict[str, Any] = {}
        extra_positional = list(self._self_args[len(positional) :])
        extra_keywords: dict[str, Any] = {}

        for param, value in zip(positional, self._self_args, strict=False):
            arguments[param.name] = value
        for name, value in self._self_kwargs.items():
            param = params.get(name)
            if param is not None and param.kind not in _VARIADIC:
                arguments[name] = value
            else:
                extra_keywords[name] = value

        for name in rest_kwargs:
            if name in self._self_kwargs:
                msg = f'{_name(self.__wrapped__)}() argument {name!r} is already bound'
                raise TypeError(msg)

        # Named bound arguments keep their parameters; the rest fill what is left, in order
        remaining = list(rest)
        for param in positional:
            if not remaining:
                break
            if param.name in arguments or param.name in rest_kwargs:
                continue
            arguments[param.name] = remaining.pop(0)
        extra_positional.extend(remaining)

        for name, value in rest_kwargs.items():
            param = params.get(name)
            if param is not None and param.kind not in (*_VARIADIC, inspect.Parameter.POSITIONAL_ONLY):
                if name in arguments:
                    msg = f'{_name(self.__wrapped__)}() got multiple values for argument {name!r}'
                    raise TypeError(msg)
                arguments[name] = value
            else:
                extra_keywords[name] = value

        if extra_positional:
            if varargs is None:
                msg = f'{_name(self.__wrapped__)}() got {len(extra_positional)} unexpected positional arguments'
                raise TypeError(msg)
            arguments[varargs.name] = tuple(extra_positional)
        if extra_keywords:
            if varkw is None:
                msg = f'{_name(self.__wrapped__)}() got unexpected keyword arguments {sorted(extra_keywords)!r}'
                raise TypeError(msg)
            arguments[varkw.name] = extra_keywords

        ordered = {name: arguments[name] for name in params if name in arguments}
        return inspect.BoundArguments(sig, ordered)  # type: ignore[arg-type]

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        sig = self._self_signature
        if sig is None:
            clash = set(kwargs) & set(self._self_kwargs)
            if clash:
                msg = f'{_name(self.__wrapped__)}() arguments {sorted(clash)!r} are already bound'
                raise TypeError(msg)
            return self.__wrapped__(*self._self_args, *args, **self._self_kwargs, **kwargs)

        bound = self._resolve(sig, args, kwargs)
        return self.__wrapped__(*bound.args, **bound.kwargs)

    @property
    def __signature__(self) -> inspect.Signature | None:
        sig = self._self_signature
        if sig is None:
            return None
        positional = [p for p in sig.parameters.values() if p.kind in _POSITIONAL]
        taken = {p.name for p in positional[: len(self._self_args)]} | set(self._self_kwargs)
        return sig.replace(parameters=[p for p in sig.parameters.values() if p.name not in taken])

    def __repr__(self) -> str:
        parts = [_name(self.__wrapped__)]
        parts.extend(repr(value) for value in self._self_args)
        parts.extend(f'{name}={value!r}' for name, value in self._self_kwargs.items())
        return f'bind({", ".join(parts)})'


def bind(func: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Bound:
    """Fix some arguments of `func`.

    `bind(f, *bound, **named)(*rest, **more)` calls `f` with:

    - the bound positional values in the first positional parameters;
    - the named bound values in their parameters, which always win: when
      distributing `rest`, parameters bound by name are skipped;
    - `rest` filling the remaining positional parameters left to right
      (surplus values go to `*args` if `f` accepts them);
    - `more` as named arguments. Naming an already bound argument again
      raises `TypeError`.

    Bound values are captured when `bind` is called, not when the result is
    called: lists, dicts, sets and bytearrays are shallow-copied, so binders
    created in a loop each keep the value current at their creation and
    later mutation of a bound container is not observed.

    Args:
        func: The function to bind arguments of.
        *args: Leading positional arguments.
        **kwargs: Named arguments.

    Returns:
        A `Bound` callable over the remaining arguments.

    Raises:
        TypeError: If `func` cannot accept the bound arguments.

    Example:
        ```python
        def volume(length, width, height):
            return length * width * height

        flat = bind(volume, height=1)
        flat(2, 3)
        # 6

        adders = [bind(operator.add, n) for n in range(3)]
        [add(10) for add in adders]
        # [10, 11, 12]
        ```
    """
    if not callable(func):
        msg = f'bind() argument must be callable, got {func!r}'
        raise TypeError(msg)
    return Bound(func, args, kwargs)
