"""
Diagnostic objective values.

The dual objective

    G = -( 0.5 ||A^T xi - X^T w||^2 + xi . b - <Lambda, V>
           + 0.5 ||Gamma - Omega||^2 - <Gamma, T> + <Omega, Tau> ),

with ``w = colSums(U * Lambda) + colSums(S * Gamma)``, is the quantity the
coordinate sweeps ascend: each update is the exact box-constrained maximizer
of ``G`` along one coordinate. The primal objective is the function whose
Lagrangian dual is ``G``; the difference of the two is the duality gap.

None of these functions mutate their arguments.
"""

from __future__ import annotations

import numpy as np

from .core import DualQPProblem, DualState
from .initialize import sample_weights
from .utils import bound_product, split_bounds


def dual_objective(problem: DualQPProblem, state: DualState) -> float:
    """Evaluate the dual objective ``G`` at ``state``."""

    atxi = problem.A.T @ state.xi if problem.K else np.zeros(problem.d)
    if problem.L or problem.H:
        lh_term = problem.X.T @ sample_weights(problem, state)
    else:
        lh_term = np.zeros(problem.d)

    value = 0.5 * float(np.dot(atxi, atxi))
    value += 0.5 * float(np.dot(lh_term, lh_term))
    if problem.K:
        value -= float(np.dot(atxi, lh_term))
        value += float(np.dot(state.xi, problem.b))
    if problem.L:
        value -= float(np.sum(state.lam * problem.V))
    if problem.H:
        diff = state.gamma - state.omega
        value += 0.5 * float(np.sum(diff * diff))
        value -= float(np.sum(state.gamma * problem.T))
        # Omega is exactly zero wherever Tau is unbounded
        value += float(np.sum(bound_product(state.omega, problem.Tau)))
    return -value


def rehu(z: np.ndarray, tau: np.ndarray) -> np.ndarray:
    """
    Rectified Huber function, elementwise.

    ``0`` for ``z <= 0``, ``z^2 / 2`` for ``0 < z <= tau`` and
    ``tau * (z - tau / 2)`` for ``z > tau``. Unbounded ``tau`` gives the
    squared hinge ``max(z, 0)^2 / 2``.
    """

    z = np.asarray(z, dtype=float)
    finite, bounded = split_bounds(tau)
    pos = np.maximum(z, 0.0)
    linear = bounded & (z > finite)
    return np.where(linear, finite * (z - 0.5 * finite), 0.5 * pos * pos)


def primal_objective(problem: DualQPProblem, beta: np.ndarray) -> float:
    """
    Evaluate ``0.5 ||beta||^2 + sum relu(U * z + V) + sum rehu(S * z + T)``
    with ``z = X beta`` broadcast over the block rows.

    The linear constraints ``A beta + b >= 0`` are not part of the value;
    see :func:`dualqp.solver.kkt.kkt_residuals` for their violation.
    """

    beta = np.asarray(beta, dtype=float)
    value = 0.5 * float(np.dot(beta, beta))
    if problem.L or problem.H:
        z = problem.X @ beta
        if problem.L:
            value += float(np.sum(np.maximum(problem.U * z + problem.V, 0.0)))
        if problem.H:
            value += float(np.sum(rehu(problem.S * z + problem.T, problem.Tau)))
    return value


def duality_gap(problem: DualQPProblem, state: DualState, beta: np.ndarray) -> float:
    """Return ``primal_objective(beta) - dual_objective(state)``."""

    return primal_objective(problem, beta) - dual_objective(problem, state)


__all__ = ["dual_objective", "rehu", "primal_objective", "duality_gap"]
