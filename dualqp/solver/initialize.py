"""
Dual state initialization and the closed-form primal reconstruction.

The primal vector is tied to the dual blocks by

    beta = A^T xi - X^T (colSums(U * Lambda) + colSums(S * Gamma)),

where ``*`` is the elementwise product and ``colSums`` sums over the block
index. Sweeps maintain this relation incrementally; the functions here
establish it from scratch.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from .core import DualQPProblem, DualState, ShapeError
from .utils import initial_gamma, project_box, split_bounds


def sample_weights(problem: DualQPProblem, state: DualState) -> np.ndarray:
    """Return ``colSums(U * Lambda) + colSums(S * Gamma)``, shape ``(n,)``."""

    weights = np.zeros(problem.n)
    if problem.L:
        weights += np.sum(problem.U * state.lam, axis=0)
    if problem.H:
        weights += np.sum(problem.S * state.gamma, axis=0)
    return weights


def reconstruct_beta(problem: DualQPProblem, state: DualState) -> np.ndarray:
    """Closed-form primal vector for the given dual state."""

    beta = np.zeros(problem.d)
    if problem.K:
        beta += problem.A.T @ state.xi
    if problem.L or problem.H:
        beta -= problem.X.T @ sample_weights(problem, state)
    return beta


def default_dual_state(problem: DualQPProblem) -> DualState:
    """``xi = 1``, ``Lambda = 0.5``, ``Gamma = min(0.5 * Tau, 1)``, ``Omega = 0``."""

    n = problem.n
    return DualState(
        xi=np.ones(problem.K),
        lam=np.full((problem.L, n), 0.5),
        gamma=initial_gamma(problem.Tau) if problem.H else np.zeros((0, n)),
        omega=np.zeros((problem.H, n)),
    )


def _checked(arr: np.ndarray, shape: tuple, name: str) -> np.ndarray:
    out = np.array(arr, dtype=float, copy=True)
    if out.size == 0 and int(np.prod(shape)) == 0:
        return np.zeros(shape)
    if out.shape != shape:
        raise ShapeError(f"warm start {name} must have shape {shape}, got {out.shape}")
    return out


def project_dual_state(problem: DualQPProblem, state: DualState) -> DualState:
    """
    Copy ``state`` after checking its shapes and clamping it onto its boxes.

    ``Omega`` is carried over so that a solve resumed from a previous result
    continues the same iteration; it is clamped to ``>= 0`` and forced to
    ``0`` wherever ``Tau`` is unbounded.

    Raises:
        ShapeError: If a block does not match the problem dimensions.
    """

    n = problem.n
    xi = _checked(state.xi, (problem.K,), "xi")
    lam = _checked(state.lam, (problem.L, n), "lam")
    gamma = _checked(state.gamma, (problem.H, n), "gamma")
    omega = _checked(state.omega, (problem.H, n), "omega")

    _, bounded = split_bounds(problem.Tau)
    return DualState(
        xi=project_box(xi, 0.0, None),
        lam=project_box(lam, 0.0, 1.0),
        gamma=project_box(gamma, 0.0, problem.Tau),
        omega=np.where(bounded, project_box(omega, 0.0, None), 0.0),
    )


def init_dual_state(
    problem: DualQPProblem,
    warm_start: Optional[DualState] = None,
) -> Tuple[DualState, np.ndarray]:
    """
    Create the dual state of a fresh solve and the matching primal vector.

    Args:
        problem: Validated problem.
        warm_start: Optional caller-supplied dual state. It is copied and
            projected onto the feasible boxes; the caller's arrays are never
            mutated.

    Returns:
        ``(state, beta)`` with ``beta`` equal to :func:`reconstruct_beta`.
    """

    if warm_start is None:
        state = default_dual_state(problem)
    else:
        state = project_dual_state(problem, warm_start)
    return state, reconstruct_beta(problem, state)


__all__ = [
    "sample_weights",
    "reconstruct_beta",
    "default_dual_state",
    "project_dual_state",
    "init_dual_state",
]
