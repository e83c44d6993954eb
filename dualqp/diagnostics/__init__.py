"""Diagnostics and debugging utilities for dualqp."""

from .core import assert_consistent, assert_in_box, box_violation
from .debug_mode import (
    debug_context,
    get_debug_tolerance,
    is_debug_enabled,
    set_debug_enabled,
    set_debug_tolerance,
)

__all__ = [
    "box_violation",
    "assert_in_box",
    "assert_consistent",
    "is_debug_enabled",
    "set_debug_enabled",
    "get_debug_tolerance",
    "set_debug_tolerance",
    "debug_context",
]
