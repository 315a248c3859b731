"""Cache key derivation.

A key must identify "the same call" by value, never by object identity:
`f([1, 2])` twice with two distinct but equal lists is one call. Arguments
are first normalised against the function's signature (so positional, named
and defaulted spellings coincide) and then frozen into hashable structures.
"""

from __future__ import annotations

import dataclasses
import inspect
import math
import pickle
import types
from collections.abc import Callable, Hashable, Mapping, Set
from typing import Any

import msgspec

__all__ = ['freeze', 'make_key', 'signature_of']

_SCALARS = (bool, int, float, complex, str, bytes, type(None))


def signature_of(func: Callable[..., Any]) -> inspect.Signature | None:
    """Return the signature of `func`, or None when it cannot be introspected."""
    try:
        return inspect.signature(func)
    except (TypeError, ValueError):
        return None


def _defined_in_python(cls: type) -> bool:
    """True when `cls` comes from a class statement: its own constructors, if any, are Python functions."""
    for name in ('__new__', '__init__'):
        attr = cls.__dict__.get(name)
        if attr is not None and not isinstance(getattr(attr, '__func__', attr), types.FunctionType):
            return False
    return '__module__' in cls.__dict__ and cls.__module__ != 'builtins'


def _is_plain_instance(value: Any) -> bool:
    """True for instances of user classes whose whole state lives in `__dict__`.

    Identity-compared objects backed by C-level state (streams, files,
    `random.Random`) keep most of it outside `__dict__` and are keyed by
    identity instead.
    """
    kind = type(value)
    if kind.__eq__ is not object.__eq__ or callable(value) or not hasattr(value, '__dict__'):
        return False
    return all(_defined_in_python(cls) for cls in kind.__mro__[:-1])


def freeze(value: Any, _active: frozenset[int] = frozenset()) -> Hashable:
    """Convert `value` into a hashable structure equal for structurally equal values.

    Every frozen value is tagged with its type, so `1`, `1.0` and `True`
    produce distinct keys, as do a list and a tuple with the same items.

    Example:
        ```python
        freeze([1, {'a': 2}]) == freeze([1, {'a': 2}])
        # True
        ```
    """
    kind = type(value)

    if isinstance(value, _SCALARS):
        if isinstance(value, float) and math.isnan(value):
            return (kind, 'nan')
        return (kind, value)

    marker = id(value)
    if marker in _active:
        return (kind, '<cycle>')
    active = _active | {marker}

    if isinstance(value, (tuple, list)):
        return (kind, tuple(freeze(item, active) for item in value))
    if isinstance(value, Mapping):
        return (kind, frozenset((freeze(k, active), freeze(v, active)) for k, v in value.items()))
    if isinstance(value, Set):
        return (kind, frozenset(freeze(item, active) for item in value))
    if isinstance(value, msgspec.Struct):
        return (kind, freeze(msgspec.structs.astuple(value), active))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = tuple(getattr(value, field.name) for field in dataclasses.fields(value))
        return (kind, freeze(fields, active))
    if _is_plain_instance(value):
        return (kind, freeze(vars(value), active))
    if isinstance(value, Hashable):
        try:
            hash(value)
        except TypeError:
            pass
        else:
            return (kind, value)
    try:
        return (kind, pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL))
    except Exception:  # noqa: BLE001
        return (kind, repr(value))


def make_key(
    args: tuple[Any, ...],
    kwargs: Mapping[str, Any],
    signature: inspect.Signature | None = None,
) -> Hashable:
    """Derive the cache key of one call.

    Args:
        args: Positional arguments of the call.
        kwargs: Named arguments of the call.
        signature: Signature of the called function, used to normalise the
            arguments. Without it, positional and named spellings differ.

    Returns:
        A hashable key, equal for equal calls.
    """
    if signature is not None:
        try:
            bound = signature.bind(*args, **kwargs)
        except TypeError:
            # The call itself will fail; any stable key will do
            pass
        else:
            bound.apply_defaults()
            return tuple((name, freeze(value)) for name, value in bound.arguments.items())
    return (freeze(tuple(args)), freeze(dict(kwargs)))
