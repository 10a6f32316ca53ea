"""
Debug mode for Sparse Conduit.

When debug mode is on, every container published by a bulk operation is
checked for consistency (``nvals`` against its bitmap) before control
returns to the caller. The initial state comes from the ``SPCONDUIT_DEBUG``
environment variable.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Any, Iterator

from ..logging import get_logger
from .core import assert_consistent

_DEBUG_ENV_VAR = "SPCONDUIT_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})

logger = get_logger("diagnostics")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").strip().lower() in _TRUTHY


_debug_enabled: bool = _env_flag(_DEBUG_ENV_VAR)


def is_debug_enabled() -> bool:
    """Return whether published containers are being consistency-checked."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """
    Globally enable or disable debug mode.

    Parameters
    ----------
    enabled:
        Whether to check containers after each publish.
    """
    global _debug_enabled
    _debug_enabled = bool(enabled)


def refresh_from_env() -> bool:
    """Re-read ``SPCONDUIT_DEBUG`` and return the resulting state."""
    set_debug_enabled(_env_flag(_DEBUG_ENV_VAR))
    return _debug_enabled


def check_published(container: Any) -> None:
    """
    Validate a freshly published container when debug mode is on.

    Raises
    ------
    ValueError
        If the container's bookkeeping disagrees with its storage.
    """
    if not _debug_enabled:
        return
    assert_consistent(container)
    logger.debug("published %r", container)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily enable or disable debug mode.

    Example
    -------
    >>> with debug_context(True):
    ...     sssp(graph, path)   # every intermediate publish is checked
    """
    global _debug_enabled
    prev = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = prev
