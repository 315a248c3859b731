"""funcops: function operators for Python.

Higher-order functions that take callables and return callables with added
behaviour (delays, progress markers, logging, memoization, fallbacks,
argument binding, predicate logic, call recording) while keeping the
original call signature. Stateful wrappers own their state and guard it with
locks, so a wrapped function can be shared between threads.

Flat imports (preferred):
    from funcops import compose, memoize, bind, fallback, every, delay
    from funcops import and_, or_, not_, Predicate

Submodule imports (for organization):
    from funcops.compose import compose, pipe, juxt
    from funcops.decorators import delay, every, log_to, tee, remember
    from funcops.cache import memoize, make_key
    from funcops.bind import bind, splat
    from funcops.predicates import and_, or_, not_

Example:
    ```python
    from funcops import delay, every, memoize

    download = every(10, memoize(delay(1.0, fetch_url)))
    pages = [download(url) for url in urls]
    ```
"""

from funcops._config import FuncOpsConfig, get_config, init
from funcops._logging import configure_logging, get_logger

# Argument binding
from funcops.bind import Bound, bind, splat

# Memoization
from funcops.cache import AsyncMemoized, Memoized, make_key, memoize

# Composition
from funcops.compose import compose, identity, juxt, pipe

# Decorators
from funcops.decorators import (
    Every,
    LogSink,
    Recorder,
    capture,
    delay,
    every,
    fallback,
    log_to,
    negate,
    remember,
    tee,
    time_it,
)
from funcops.errors import (
    DuplicateCallableError,
    FuncOpsError,
    SinkNotWritableError,
    UnknownCallableError,
)

# Predicates
from funcops.predicates import Predicate, always, and_, never, not_, or_, predicate
from funcops.registry import Registry
from funcops.types import CacheInfo, CallArgs, CallRecord

__version__ = '0.1.0'

__all__ = [
    'AsyncMemoized',
    'Bound',
    'CacheInfo',
    'CallArgs',
    'CallRecord',
    'DuplicateCallableError',
    'Every',
    'FuncOpsConfig',
    'FuncOpsError',
    'LogSink',
    'Memoized',
    'Predicate',
    'Recorder',
    'Registry',
    'SinkNotWritableError',
    'UnknownCallableError',
    'always',
    'and_',
    'bind',
    'capture',
    'compose',
    'configure_logging',
    'delay',
    'every',
    'fallback',
    'get_config',
    'get_logger',
    'identity',
    'init',
    'juxt',
    'log_to',
    'make_key',
    'memoize',
    'negate',
    'never',
    'not_',
    'or_',
    'pipe',
    'predicate',
    'remember',
    'splat',
    'tee',
    'time_it',
]
