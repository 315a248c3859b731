"""Composition: compose() (right to left), pipe() (left to right) and juxt() (parallel)."""

from funcops.compose.compose import Composed, Juxt, compose, identity, juxt, pipe

__all__ = ['Composed', 'Juxt', 'compose', 'identity', 'juxt', 'pipe']
