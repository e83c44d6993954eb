"""
Iteration driver for the dual coordinate ascent QP solver.

The driver validates the inputs, initializes the dual state, and repeats full
Gauss-Seidel sweeps (``xi``, then ``Lambda``, then ``Gamma``/``Omega``) until
both ``||xi - xi_old||`` and ``||beta - beta_old||`` drop below the
tolerance or the iteration cap is reached. Reaching the cap is a normal
outcome, reported through :class:`~dualqp.solver.core.Status`.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

import numpy as np

from ..logging import get_logger
from .config import SolverConfig
from .core import DualQPProblem, DualState, ProgressRecord, SolveResult, Status
from .initialize import init_dual_state
from .objective import dual_objective, primal_objective
from .precompute import precompute
from .problem import assemble_problem, validate_problem
from .updates import sweep

logger = get_logger(__name__)


class ProgressCallback(Protocol):
    """
    Protocol for progress sinks.

    A sink is a callable that receives a :class:`ProgressRecord` at the
    reporting cadence. It must not mutate solver state.
    """

    def __call__(self, record: ProgressRecord) -> None:
        ...


def log_progress(record: ProgressRecord) -> None:
    """Default sink used when ``verbose`` is set and no callback is supplied."""

    logger.info(
        "iter %d: dual=%.8g primal=%.8g gap=%.3e xi_diff=%.3e beta_diff=%.3e",
        record.iteration,
        record.dual_objective,
        record.primal_objective,
        record.duality_gap,
        record.xi_diff,
        record.beta_diff,
    )


def _progress_record(
    problem: DualQPProblem,
    state: DualState,
    beta: np.ndarray,
    iteration: int,
    xi_diff: float,
    beta_diff: float,
) -> ProgressRecord:
    dual = dual_objective(problem, state)
    primal = primal_objective(problem, beta)
    return ProgressRecord(
        iteration=iteration,
        dual_objective=dual,
        primal_objective=primal,
        duality_gap=primal - dual,
        xi_diff=xi_diff,
        beta_diff=beta_diff,
    )


def solve_problem(
    problem: DualQPProblem,
    config: Optional[SolverConfig] = None,
    callback: Optional[ProgressCallback] = None,
    warm_start: Optional[DualState] = None,
) -> SolveResult:
    """
    Solve ``problem`` by block coordinate ascent on its Lagrangian dual.

    Args:
        problem: Input data; validated (and normalized) before anything else.
        config: Driver configuration. Defaults to ``SolverConfig()``.
        callback: Optional progress sink. Progress records are evaluated when
            ``config.verbose`` is set or a callback is given; with neither,
            no objective value is ever computed.
        warm_start: Optional initial dual state (copied, projected onto its
            boxes; the caller's arrays are not mutated).

    Returns:
        SolveResult with the final primal/dual state.

    Raises:
        ShapeError: On mismatched input or warm-start dimensions.
        DegenerateRowError: On a zero-norm row used as a step divisor.
        ValueError: On non-finite input data or negative ``Tau``.
    """

    if config is None:
        config = SolverConfig()

    status = Status.INITIALIZING
    problem = validate_problem(problem)
    r, p = precompute(problem)
    state, beta = init_dual_state(problem, warm_start)
    logger.debug(
        "%s: n=%d d=%d K=%d L=%d H=%d",
        status.value,
        problem.n,
        problem.d,
        problem.K,
        problem.L,
        problem.H,
    )

    reporting = config.verbose or callback is not None
    sink = callback if callback is not None else log_progress
    history: List[ProgressRecord] = []

    status = Status.SWEEPING
    xi_diff = beta_diff = float("inf")
    nit = 0
    for it in range(config.max_iter):
        xi_old = state.xi.copy()
        beta_old = beta.copy()

        sweep(problem, r, p, state, beta)
        nit = it + 1

        xi_diff = float(np.linalg.norm(state.xi - xi_old)) if problem.K else 0.0
        beta_diff = float(np.linalg.norm(beta - beta_old))

        if reporting and it % config.report_every == 0:
            record = _progress_record(problem, state, beta, it, xi_diff, beta_diff)
            history.append(record)
            sink(record)

        if xi_diff < config.tol and beta_diff < config.tol:
            status = Status.CONVERGED
            break
    else:
        status = Status.MAX_ITER

    if status is Status.CONVERGED:
        message = f"Converged after {nit} iteration(s)"
    else:
        message = "Maximum iterations reached"
    logger.info("%s (xi_diff=%.3e, beta_diff=%.3e)", message, xi_diff, beta_diff)

    return SolveResult(
        beta=beta,
        xi=state.xi,
        lam=state.lam,
        gamma=state.gamma,
        omega=state.omega,
        nit=nit,
        status=status,
        message=message,
        xi_diff=xi_diff,
        beta_diff=beta_diff,
        dual_objectives=[record.dual_objective for record in history],
        history=history,
    )


def coordinate_ascent_qp(
    x_mat: np.ndarray,
    a_mat: Optional[np.ndarray] = None,
    b_vec: Optional[np.ndarray] = None,
    u_mat: Optional[np.ndarray] = None,
    v_mat: Optional[np.ndarray] = None,
    s_mat: Optional[np.ndarray] = None,
    t_mat: Optional[np.ndarray] = None,
    tau_mat: Optional[np.ndarray] = None,
    max_iter: int = 1000,
    tol: float = 1e-5,
    verbose: bool = False,
    report_every: int = 10,
    callback: Optional[ProgressCallback] = None,
    warm_start: Optional[DualState] = None,
) -> SolveResult:
    """
    Minimize ``0.5 ||beta||^2`` under the ``(A, b)``, ``(U, V)`` and
    ``(S, T, Tau)`` constraint families by dual coordinate ascent.

    Any family may be omitted (``None``) or have zero rows. See
    :func:`solve_problem` for the meaning of the remaining arguments and the
    exceptions raised.

    Example:
        >>> import numpy as np
        >>> res = coordinate_ascent_qp(np.eye(2), a_mat=np.array([[1.0, 0.0]]),
        ...                            b_vec=np.array([-1.0]))
        >>> res.beta
        array([1., 0.])
    """

    config = SolverConfig(
        max_iter=max_iter,
        tol=tol,
        verbose=verbose,
        report_every=report_every,
    )
    problem = assemble_problem(x_mat, a_mat, b_vec, u_mat, v_mat, s_mat, t_mat, tau_mat)
    return solve_problem(problem, config=config, callback=callback, warm_start=warm_start)


__all__ = ["ProgressCallback", "log_progress", "solve_problem", "coordinate_ascent_qp"]
