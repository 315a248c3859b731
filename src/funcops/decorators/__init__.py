"""Decorators: stateful (delay, every, log_to, tee, remember) and result-transforming
(negate, fallback, capture, time_it)."""

from funcops.decorators.capture import capture, time_it
from funcops.decorators.delay import delay
from funcops.decorators.every import Every, every
from funcops.decorators.fallback import fallback
from funcops.decorators.log import LogSink, log_to
from funcops.decorators.negate import negate
from funcops.decorators.tee import Recorder, remember, tee

__all__ = [
    'Every',
    'LogSink',
    'Recorder',
    'capture',
    'delay',
    'every',
    'fallback',
    'log_to',
    'negate',
    'remember',
    'tee',
    'time_it',
]
