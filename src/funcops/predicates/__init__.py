"""Predicate algebra with short-circuit evaluation."""

from funcops.predicates.core import (
    AllOf,
    AnyOf,
    Not,
    Predicate,
    always,
    and_,
    never,
    not_,
    or_,
    predicate,
)

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
