"""Debug mode management for dualqp.

While debug mode is on, the coordinate sweeps re-check box feasibility and
the consistency of the incrementally maintained ``beta`` after every single
coordinate update. Rank-1 updates accumulate rounding error, so the
consistency check compares against the closed-form reconstruction with a
tolerance that can be widened for long or badly scaled runs.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Optional

_DEBUG_ENV_VAR = "DUALQP_DEBUG"
_DEBUG_TOL_ENV_VAR = "DUALQP_DEBUG_TOL"
_DEFAULT_TOLERANCE = 1e-9

_debug_enabled: bool = os.getenv(_DEBUG_ENV_VAR, "0").lower() in (
    "1",
    "true",
    "yes",
    "on",
)


def _validated_tolerance(tolerance: float) -> float:
    tolerance = float(tolerance)
    if not tolerance > 0.0:
        raise ValueError(f"debug tolerance must be positive, got {tolerance}")
    return tolerance


_debug_tolerance: float = _validated_tolerance(
    os.getenv(_DEBUG_TOL_ENV_VAR, str(_DEFAULT_TOLERANCE))
)


def is_debug_enabled() -> bool:
    """
    Return whether dualqp debug mode is currently enabled.

    Debug mode can be toggled via set_debug_enabled(...) or the
    DUALQP_DEBUG environment variable.

    Returns
    -------
    bool
        True if debug mode is enabled, False otherwise.
    """
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """
    Globally enable or disable dualqp debug mode.

    Parameters
    ----------
    enabled:
        Whether to enable debug mode.
    """
    global _debug_enabled
    _debug_enabled = bool(enabled)


def get_debug_tolerance() -> float:
    """
    Return the relative and absolute tolerance of the per-update primal check.

    Initialized from the DUALQP_DEBUG_TOL environment variable (default 1e-9).
    """
    return _debug_tolerance


def set_debug_tolerance(tolerance: float) -> None:
    """
    Set the tolerance of the per-update primal consistency check.

    Raises
    ------
    ValueError
        If ``tolerance`` is not strictly positive.
    """
    global _debug_tolerance
    _debug_tolerance = _validated_tolerance(tolerance)


@contextmanager
def debug_context(enabled: bool = True, tolerance: Optional[float] = None) -> Iterator[None]:
    """
    Context manager to temporarily enable or disable debug mode.

    Parameters
    ----------
    enabled:
        Whether to enable debug mode within the context.
    tolerance:
        Optional consistency tolerance to use within the context. The
        previous tolerance is restored on exit.

    Example
    -------
    >>> with debug_context(True, tolerance=1e-7):
    ...     # every coordinate update is checked inside this block
    ...     pass
    """
    global _debug_enabled, _debug_tolerance
    prev_enabled = _debug_enabled
    prev_tolerance = _debug_tolerance
    new_tolerance = prev_tolerance if tolerance is None else _validated_tolerance(tolerance)
    _debug_enabled = bool(enabled)
    _debug_tolerance = new_tolerance
    try:
        yield
    finally:
        _debug_enabled = prev_enabled
        _debug_tolerance = prev_tolerance
