"""splat(): call a function with the items of a single argument."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

import wrapt

__all__ = ['splat']


def splat(func: Callable[..., Any]) -> Callable[[Iterable[Any] | Mapping[str, Any]], Any]:
    """Turn a function of many arguments into a function of one collection.

    A mapping is spread as named arguments, any other iterable as positional
    arguments. Useful with `map()` over rows of arguments.

    Example:
        ```python
        rows = [(1, 2), (3, 4)]
        list(map(splat(operator.add), rows))
        # [3, 7]
        splat(dict)({'a': 1})
        # {'a': 1}
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        if len(args) != 1 or kwargs:
            msg = f'splat() wrapper takes exactly one positional argument, got {len(args)} and {len(kwargs)} named'
            raise TypeError(msg)
        (collection,) = args
        if isinstance(collection, Mapping):
            return wrapped(**collection)
        return wrapped(*collection)

    return wrapper(func)
