"""Shared fixtures: every test starts from a fresh configuration and no log hooks."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from funcops._config import reset_config
from funcops._logging import clear_log_hooks
from helpers import CallCounter


@pytest.fixture(autouse=True)
def clean_state() -> Iterator[None]:
    """Reset global configuration, log hooks and root handlers around each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    reset_config()
    clear_log_hooks()
    yield
    reset_config()
    clear_log_hooks()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def counter() -> CallCounter:
    return CallCounter()
