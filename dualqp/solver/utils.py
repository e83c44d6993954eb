"""
Numerical helper routines for the coordinate ascent solver.

Upper bounds ``Tau`` may be ``+inf``. The helpers below make every product
involving such a bound explicit so that ``0 * inf`` is never evaluated.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

_FLOAT_MAX = np.finfo(float).max


def squared_row_norms(matrix: np.ndarray) -> np.ndarray:
    """Return ``||matrix[i]||^2`` for every row; empty for a matrix with no rows."""

    matrix = np.asarray(matrix, dtype=float)
    if matrix.shape[0] == 0:
        return np.zeros(0)
    return np.einsum("ij,ij->i", matrix, matrix)


def project_box(x: np.ndarray, lb: Optional[np.ndarray], ub: Optional[np.ndarray]) -> np.ndarray:
    """
    Project ``x`` onto the box defined by ``lb`` and ``ub``.

    Parameters may be ``None`` (interpreted as ``-inf``/``+inf``), in which
    case the projection leaves the corresponding coordinates unchanged.
    """

    projected = np.array(x, dtype=float, copy=True)
    if lb is not None:
        projected = np.maximum(projected, lb)
    if ub is not None:
        projected = np.minimum(projected, ub)
    return projected


def split_bounds(tau: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split ``tau`` into finite values and a mask of bounded entries.

    Returns:
        ``(finite, bounded)`` where ``finite`` equals ``tau`` on bounded
        entries and ``0`` elsewhere, and ``bounded`` is ``np.isfinite(tau)``.
    """

    tau = np.asarray(tau, dtype=float)
    bounded = np.isfinite(tau)
    finite = np.where(bounded, tau, 0.0)
    return finite, bounded


def bound_product(weights: np.ndarray, tau: np.ndarray) -> np.ndarray:
    """
    Elementwise ``weights * tau`` with the product defined as ``0`` where
    ``tau`` is unbounded.

    Callers only pass weights that are exactly zero on unbounded entries
    (the slack ``Omega``); the bound is clipped to the largest finite float
    before multiplying and the unbounded entries are masked out afterwards.
    """

    weights = np.asarray(weights, dtype=float)
    tau = np.asarray(tau, dtype=float)
    clipped = np.minimum(tau, _FLOAT_MAX)
    return np.where(np.isfinite(tau), weights * clipped, 0.0)


def slack_for(gamma: float, tau: float) -> float:
    """Complementary slack ``max(0, gamma - tau)``; exactly ``0`` for ``tau = inf``."""

    if tau == np.inf:
        return 0.0
    return max(0.0, gamma - tau)


def initial_gamma(tau: np.ndarray) -> np.ndarray:
    """Return ``min(0.5 * tau, 1)`` elementwise without forming ``0 * inf``."""

    tau = np.asarray(tau, dtype=float)
    return 0.5 * np.minimum(tau, 2.0)


__all__ = [
    "squared_row_norms",
    "project_box",
    "split_bounds",
    "bound_product",
    "slack_for",
    "initial_gamma",
]
