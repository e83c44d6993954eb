"""
Gauss-Seidel coordinate sweeps over the three dual blocks.

Each sweep visits the coordinates of one block in a fixed order and moves
every coordinate to the exact maximizer of the dual objective along it,
clamped onto the coordinate's box. The primal vector ``beta`` is a single
buffer updated in place with a rank-1 correction after every coordinate, so
later coordinates always see the effect of earlier ones.
"""

from __future__ import annotations

import numpy as np

from ..diagnostics.core import assert_consistent, assert_in_box
from ..diagnostics.debug_mode import get_debug_tolerance, is_debug_enabled
from .core import DualQPProblem, DualState
from .initialize import reconstruct_beta
from .utils import slack_for


def check_invariants(problem: DualQPProblem, state: DualState, beta: np.ndarray) -> None:
    """
    Verify every box constraint and the closed-form primal relation.

    The primal check uses the debug tolerance from
    :func:`dualqp.diagnostics.get_debug_tolerance`; the box checks are exact.

    Raises:
        RuntimeError: On the first violated invariant.
    """

    assert_in_box(state.xi, 0.0, None, name="xi")
    assert_in_box(state.lam, 0.0, 1.0, name="Lambda")
    assert_in_box(state.gamma, 0.0, problem.Tau, name="Gamma")
    assert_in_box(state.omega, 0.0, None, name="Omega")
    tol = get_debug_tolerance()
    assert_consistent(beta, reconstruct_beta(problem, state), rtol=tol, atol=tol)


def update_xi(
    problem: DualQPProblem,
    p: np.ndarray,
    state: DualState,
    beta: np.ndarray,
) -> None:
    """One sweep over ``xi``; ``xi >= 0`` is the only bound."""

    a_mat, b_vec, xi = problem.A, problem.b, state.xi
    debug = is_debug_enabled()
    for k in range(problem.K):
        a_row = a_mat[k]
        xi_k = xi[k]
        new = max(xi_k - (a_row @ beta + b_vec[k]) / p[k], 0.0)
        eps = new - xi_k
        xi[k] = new
        beta += eps * a_row
        if debug:
            check_invariants(problem, state, beta)


def update_lambda(
    problem: DualQPProblem,
    r: np.ndarray,
    state: DualState,
    beta: np.ndarray,
) -> None:
    """
    One sweep over ``Lambda`` in row-major order, keeping ``0 <= Lambda <= 1``.

    Coordinates with ``U[l, i] == 0`` carry no constraint and are left as is.
    """

    x_mat, u_mat, v_mat, lam = problem.X, problem.U, problem.V, state.lam
    debug = is_debug_enabled()
    for l in range(problem.L):
        for i in range(problem.n):
            u_li = u_mat[l, i]
            if u_li == 0.0:
                continue
            x_row = x_mat[i]
            lam_li = lam[l, i]
            step = (v_mat[l, i] + u_li * (x_row @ beta)) / (r[i] * u_li * u_li)
            # clamp the new value rather than the step so the box holds exactly
            new = min(max(lam_li + step, 0.0), 1.0)
            eps = new - lam_li
            lam[l, i] = new
            beta -= (eps * u_li) * x_row
            if debug:
                check_invariants(problem, state, beta)


def update_gamma(
    problem: DualQPProblem,
    r: np.ndarray,
    state: DualState,
    beta: np.ndarray,
) -> None:
    """
    One sweep over ``Gamma`` in row-major order, keeping ``0 <= Gamma <= Tau``,
    followed at each coordinate by the complementary slack ``Omega``.

    ``Omega[h, i]`` becomes ``max(0, Gamma[h, i] + eps - Tau[h, i])`` with the
    already updated ``Gamma``: it is positive only when a step runs into the
    upper bound, and it enters the next sweep's step for the same coordinate.
    """

    x_mat, s_mat, t_mat, tau_mat = problem.X, problem.S, problem.T, problem.Tau
    gamma, omega = state.gamma, state.omega
    debug = is_debug_enabled()
    for h in range(problem.H):
        for i in range(problem.n):
            s_hi = s_mat[h, i]
            tau_hi = tau_mat[h, i]
            x_row = x_mat[i]
            gamma_hi = gamma[h, i]
            step = (t_mat[h, i] + omega[h, i] + s_hi * (x_row @ beta) - gamma_hi) / (
                s_hi * s_hi * r[i] + 1.0
            )
            # min with an infinite tau is a no-op
            new = max(min(gamma_hi + step, tau_hi), 0.0)
            eps = new - gamma_hi
            gamma[h, i] = new
            beta -= (eps * s_hi) * x_row
            # slack is how far the step overshoots the bound from the updated Gamma
            omega[h, i] = slack_for(new + eps, tau_hi)
            if debug:
                check_invariants(problem, state, beta)


def sweep(
    problem: DualQPProblem,
    r: np.ndarray,
    p: np.ndarray,
    state: DualState,
    beta: np.ndarray,
) -> None:
    """Run the three block sweeps in their fixed order: xi, Lambda, Gamma."""

    update_xi(problem, p, state, beta)
    update_lambda(problem, r, state, beta)
    update_gamma(problem, r, state, beta)


__all__ = ["check_invariants", "update_xi", "update_lambda", "update_gamma", "sweep"]
