"""Diagnostics and debugging utilities for Sparse Conduit."""

from .core import assert_consistent, count_present, is_nonnegative
from .debug_mode import (
    check_published,
    debug_context,
    is_debug_enabled,
    refresh_from_env,
    set_debug_enabled,
)

__all__ = [
    "count_present",
    "assert_consistent",
    "is_nonnegative",
    "check_published",
    "is_debug_enabled",
    "set_debug_enabled",
    "refresh_from_env",
    "debug_context",
]
