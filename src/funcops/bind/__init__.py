"""Argument binding: bind() (partial application) and splat()."""

from funcops.bind.partial import Bound, bind
from funcops.bind.splat import splat

__all__ = ['Bound', 'bind', 'splat']
