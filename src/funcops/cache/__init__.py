"""Memoization: memoize() and the key derivation it relies on."""

from funcops.cache.keys import freeze, make_key, signature_of
from funcops.cache.memoize import AsyncMemoized, Memoized, memoize

__all__ = ['AsyncMemoized', 'Memoized', 'freeze', 'make_key', 'memoize', 'signature_of']
