"""Process configuration: FuncOpsConfig, init() and get_config()."""

from __future__ import annotations

import os
from dataclasses import dataclass

from funcops._logging import configure_logging, get_logger

__all__ = [
    'FuncOpsConfig',
    'get_config',
    'init',
    'reset_config',
]

logger = get_logger(__name__)


@dataclass(frozen=True)
class FuncOpsConfig:
    """Configuration for funcops.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
        json_output: Render log output as JSON when logging is configured.
        marker: Text written by the default `every()` notifier.
        memoize_maxsize: Default cache bound for `memoize()`. None = unbounded.
    """

    log_level: str | None = None
    json_output: bool = True
    marker: str = '.'
    memoize_maxsize: int | None = None


# Global configuration (set by init(), or built lazily from the environment)
_config: FuncOpsConfig | None = None


def _from_env() -> FuncOpsConfig:
    """Build a configuration from environment variables.

    Reads FUNCOPS_LOG_LEVEL, FUNCOPS_MARKER and FUNCOPS_MEMOIZE_MAXSIZE.
    Invalid values are reported and ignored.
    """
    log_level = os.environ.get('FUNCOPS_LOG_LEVEL') or None
    marker = os.environ.get('FUNCOPS_MARKER', '.')

    maxsize: int | None = None
    raw_maxsize = os.environ.get('FUNCOPS_MEMOIZE_MAXSIZE', '').strip()
    if raw_maxsize:
        try:
            maxsize = int(raw_maxsize)
        except ValueError:
            maxsize = None
        if maxsize is None or maxsize < 1:
            logger.warning('config.invalid_env', variable='FUNCOPS_MEMOIZE_MAXSIZE', value=raw_maxsize)
            maxsize = None

    return FuncOpsConfig(log_level=log_level, marker=marker, memoize_maxsize=maxsize)


def init(
    log_level: str | None = None,
    *,
    json_output: bool = True,
    marker: str = '.',
    memoize_maxsize: int | None = None,
) -> FuncOpsConfig:
    """Initialize funcops with the given configuration.

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.
        json_output: Emit JSON logs (False = console renderer).
        marker: Text emitted by the default `every()` notifier.
        memoize_maxsize: Default LRU bound for `memoize()`. None = unbounded.

    Returns:
        The FuncOpsConfig that was set.

    Example:
        ```python
        import funcops

        funcops.init(log_level='DEBUG', marker='#')
        ```
    """
    global _config  # noqa: PLW0603

    if memoize_maxsize is not None and memoize_maxsize < 1:
        msg = f'memoize_maxsize must be a positive integer or None, got {memoize_maxsize!r}'
        raise ValueError(msg)

    _config = FuncOpsConfig(
        log_level=log_level,
        json_output=json_output,
        marker=marker,
        memoize_maxsize=memoize_maxsize,
    )

    if log_level is not None:
        configure_logging(log_level, json_output=json_output)

    return _config


def get_config() -> FuncOpsConfig:
    """Get the current configuration.

    When `init()` has not been called, a configuration is built once from
    the environment and kept.
    """
    global _config  # noqa: PLW0603

    if _config is None:
        _config = _from_env()
        if _config.log_level is not None:
            configure_logging(_config.log_level, json_output=_config.json_output)
    return _config


def reset_config() -> None:
    """Forget the current configuration (the next get_config() re-reads the environment)."""
    global _config  # noqa: PLW0603
    _config = None
