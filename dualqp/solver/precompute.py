"""Per-row scaling constants used as coordinate step denominators."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .core import DegenerateRowError, DualQPProblem
from .utils import squared_row_norms


def compute_r(x_mat: np.ndarray) -> np.ndarray:
    """Squared row norms of ``X``, shape ``(n,)``."""

    return squared_row_norms(x_mat)


def compute_p(a_mat: np.ndarray) -> np.ndarray:
    """Squared row norms of ``A``, shape ``(K,)``; empty when ``K = 0``."""

    return squared_row_norms(a_mat)


def check_degenerate_rows(problem: DualQPProblem, r: np.ndarray, p: np.ndarray) -> None:
    """
    Reject zero-norm rows that a coordinate update would divide by.

    Every row of ``A`` is a divisor of the ``xi`` update. A row ``i`` of
    ``X`` is a divisor only for the ``Lambda`` update at coordinates with
    ``U[l, i] != 0``; the ``Gamma`` denominator ``S^2 r + 1`` never vanishes.
    """

    zero_a = np.flatnonzero(p == 0.0)
    if zero_a.size:
        raise DegenerateRowError(f"A has zero-norm row(s) {zero_a.tolist()}")

    if problem.L:
        used = np.any(problem.U != 0.0, axis=0)
        zero_x = np.flatnonzero(used & (r == 0.0))
        if zero_x.size:
            raise DegenerateRowError(
                f"X has zero-norm row(s) {zero_x.tolist()} with non-zero entries in U"
            )


def precompute(problem: DualQPProblem) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute ``(r, p)`` for ``problem`` and validate them.

    Raises:
        DegenerateRowError: See :func:`check_degenerate_rows`.
    """

    r = compute_r(problem.X)
    p = compute_p(problem.A)
    check_degenerate_rows(problem, r, p)
    return r, p


__all__ = ["compute_r", "compute_p", "check_degenerate_rows", "precompute"]
