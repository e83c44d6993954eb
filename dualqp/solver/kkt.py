"""
Karush-Kuhn-Tucker style diagnostics for the dual coordinate ascent solver.
"""

from __future__ import annotations

from typing import Dict

import numpy as np

from ..diagnostics.core import box_violation
from .core import DualQPProblem, DualState
from .initialize import reconstruct_beta
from .utils import split_bounds


def kkt_residuals(
    problem: DualQPProblem,
    state: DualState,
    beta: np.ndarray,
) -> Dict[str, float]:
    """
    Compute infinity-norm residuals of the optimality conditions.

    Keys:
        primal_ineq: Violation of ``A beta + b >= 0``.
        box: Worst violation of any dual box constraint.
        slack: Deviation of ``Omega`` from ``max(0, Gamma - Tau)``. Between
            sweeps Omega holds the overshoot of the last step into a finite
            bound, so this vanishes only at a fixed point.
        consistency: Distance of ``beta`` from the closed-form reconstruction.
        complementary: Largest ``|xi_k * (A_k beta + b_k)|``.
    """

    beta = np.asarray(beta, dtype=float).reshape(-1)

    if problem.K:
        margin = problem.A @ beta + problem.b
        primal_ineq = float(np.linalg.norm(np.minimum(margin, 0.0), ord=np.inf))
        complementary = float(np.linalg.norm(state.xi * margin, ord=np.inf))
    else:
        primal_ineq = 0.0
        complementary = 0.0

    box = max(
        box_violation(state.xi, 0.0, None),
        box_violation(state.lam, 0.0, 1.0),
        box_violation(state.gamma, 0.0, problem.Tau),
        box_violation(state.omega, 0.0, None),
    )

    if state.omega.size:
        finite, bounded = split_bounds(problem.Tau)
        expected = np.where(bounded, np.maximum(state.gamma - finite, 0.0), 0.0)
        slack = float(np.max(np.abs(state.omega - expected)))
    else:
        slack = 0.0

    reference = reconstruct_beta(problem, state)
    consistency = float(np.linalg.norm(beta - reference, ord=np.inf)) if beta.size else 0.0

    return {
        "primal_ineq": primal_ineq,
        "box": box,
        "slack": slack,
        "consistency": consistency,
        "complementary": complementary,
    }


def is_kkt_optimal(
    problem: DualQPProblem,
    state: DualState,
    beta: np.ndarray,
    tol: float = 1e-6,
) -> bool:
    """
    Return True if all KKT residuals are below ``tol``.
    """

    residuals = kkt_residuals(problem, state, beta)
    return all(value <= tol for value in residuals.values())


__all__ = ["kkt_residuals", "is_kkt_optimal"]
