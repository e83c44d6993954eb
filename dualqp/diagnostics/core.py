"""Invariant checks for dual iterates and the incrementally maintained primal."""

from __future__ import annotations

from typing import Optional

import numpy as np


def box_violation(
    values: np.ndarray,
    lower: Optional[np.ndarray | float] = None,
    upper: Optional[np.ndarray | float] = None,
) -> float:
    """
    Return the largest amount by which ``values`` leaves ``[lower, upper]``.

    ``None`` bounds are treated as unbounded. Infinite upper bounds never
    contribute. Empty arrays have zero violation.
    """
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return 0.0
    worst = 0.0
    if lower is not None:
        worst = max(worst, float(np.max(lower - values)))
    if upper is not None:
        worst = max(worst, float(np.max(values - upper)))
    return worst


def assert_in_box(
    values: np.ndarray,
    lower: Optional[np.ndarray | float] = None,
    upper: Optional[np.ndarray | float] = None,
    name: str = "values",
) -> None:
    """
    Raise if any entry of ``values`` lies outside ``[lower, upper]``.

    Box constraints on dual variables are enforced by clamping, so the check
    is exact: no tolerance is applied.

    Raises
    ------
    RuntimeError
        If a bound is violated or the array contains NaN.
    """
    values = np.asarray(values, dtype=float)
    if np.any(np.isnan(values)):
        raise RuntimeError(f"{name} contains NaN entries.")
    violation = box_violation(values, lower, upper)
    if violation > 0.0:
        raise RuntimeError(f"{name} violates its box constraint by {violation:.3e}.")


def assert_consistent(
    beta: np.ndarray,
    reference: np.ndarray,
    rtol: float = 1e-9,
    atol: float = 1e-9,
) -> None:
    """
    Raise if the incrementally updated ``beta`` drifted from ``reference``.

    Parameters
    ----------
    beta:
        Primal vector maintained by rank-1 updates.
    reference:
        Closed-form reconstruction from the current dual state.
    rtol, atol:
        Tolerances passed to ``np.allclose``.

    Raises
    ------
    RuntimeError
        If the two vectors differ beyond the tolerance.
    """
    if not np.allclose(beta, reference, rtol=rtol, atol=atol):
        drift = float(np.max(np.abs(beta - reference))) if beta.size else 0.0
        raise RuntimeError(
            f"Primal vector is inconsistent with the dual state (max drift {drift:.3e})."
        )


__all__ = ["box_violation", "assert_in_box", "assert_consistent"]
