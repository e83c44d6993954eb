"""
Problem, state, and result dataclasses for the dual coordinate ascent solver.

The solver minimizes ``0.5 * ||beta||^2`` subject to three families of linear
constraints by maximizing the Lagrangian dual with block coordinate updates.
The families are described by

* ``(A, b)``: ``K`` linear constraints with multipliers ``xi >= 0``,
* ``(U, V)``: an ``L x n`` block with multipliers ``0 <= Lambda <= 1``,
* ``(S, T, Tau)``: an ``H x n`` block with multipliers ``0 <= Gamma <= Tau``
  and the complementary slack ``Omega >= 0``,

all coupled to the primal through the rows of the ``n x d`` matrix ``X``.
``None`` denotes an absent family; entries of ``Tau`` may be ``np.inf``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import numpy as np


class Status(Enum):
    """Driver state. ``CONVERGED`` and ``MAX_ITER`` are terminal."""

    INITIALIZING = "initializing"
    SWEEPING = "sweeping"
    CONVERGED = "converged"
    MAX_ITER = "max_iter"


class ShapeError(ValueError):
    """Raised when input matrices or vectors have mismatched dimensions."""


class DegenerateRowError(ValueError):
    """Raised when a zero-norm row of ``X`` or ``A`` would be used as a divisor."""


@dataclass
class DualQPProblem:
    """
    Input data of one solve.

    Shapes are ``X (n, d)``, ``A (K, d)``, ``b (K,)``, ``U, V (L, n)`` and
    ``S, T, Tau (H, n)``. Optional companions default to ``b = 0``, ``T = 0``
    and ``Tau = +inf``; see :func:`dualqp.solver.problem.assemble_problem`.
    """

    X: np.ndarray
    A: Optional[np.ndarray] = None
    b: Optional[np.ndarray] = None
    U: Optional[np.ndarray] = None
    V: Optional[np.ndarray] = None
    S: Optional[np.ndarray] = None
    T: Optional[np.ndarray] = None
    Tau: Optional[np.ndarray] = None

    @property
    def n(self) -> int:
        return int(self.X.shape[0])

    @property
    def d(self) -> int:
        return int(self.X.shape[1])

    @property
    def K(self) -> int:
        return 0 if self.A is None else int(self.A.shape[0])

    @property
    def L(self) -> int:
        return 0 if self.U is None else int(self.U.shape[0])

    @property
    def H(self) -> int:
        return 0 if self.S is None else int(self.S.shape[0])


@dataclass
class DualState:
    """
    Dual iterates, mutated in place by the coordinate sweeps.

    Attributes:
        xi: Multipliers of ``A beta + b >= 0``, shape ``(K,)``.
        lam: ``Lambda`` block in ``[0, 1]``, shape ``(L, n)``.
        gamma: ``Gamma`` block in ``[0, Tau]``, shape ``(H, n)``.
        omega: Complementary slack of ``gamma``, shape ``(H, n)``.
    """

    xi: np.ndarray
    lam: np.ndarray
    gamma: np.ndarray
    omega: np.ndarray

    def copy(self) -> "DualState":
        return DualState(
            xi=self.xi.copy(),
            lam=self.lam.copy(),
            gamma=self.gamma.copy(),
            omega=self.omega.copy(),
        )


@dataclass(frozen=True)
class ProgressRecord:
    """
    Diagnostics sampled by the driver at the reporting cadence.

    Attributes:
        iteration: Zero-based sweep index the record was taken after.
        dual_objective: Lagrangian dual value (non-decreasing over sweeps).
        primal_objective: Primal value at the current ``beta``.
        duality_gap: ``primal_objective - dual_objective``.
        xi_diff: Norm of the change in ``xi`` over the sweep.
        beta_diff: Norm of the change in ``beta`` over the sweep.
    """

    iteration: int
    dual_objective: float
    primal_objective: float
    duality_gap: float
    xi_diff: float
    beta_diff: float


@dataclass
class SolveResult:
    """
    Final primal and dual state returned by the driver.

    Attributes:
        beta: Primal solution, shape ``(d,)``.
        xi, lam, gamma, omega: Final dual blocks.
        nit: Number of sweeps performed.
        status: ``Status.CONVERGED`` or ``Status.MAX_ITER``.
        message: Human-readable string explaining the status.
        xi_diff: Change in ``xi`` over the last sweep.
        beta_diff: Change in ``beta`` over the last sweep.
        dual_objectives: Sampled dual objective values (empty unless verbose).
        history: Sampled progress records (empty unless verbose).
    """

    beta: np.ndarray
    xi: np.ndarray
    lam: np.ndarray
    gamma: np.ndarray
    omega: np.ndarray
    nit: int
    status: Status
    message: str
    xi_diff: float = 0.0
    beta_diff: float = 0.0
    dual_objectives: List[float] = field(default_factory=list)
    history: List[ProgressRecord] = field(default_factory=list)

    @property
    def converged(self) -> bool:
        return self.status is Status.CONVERGED

    def dual_state(self) -> DualState:
        """Return a copy of the final dual blocks, usable as a warm start."""
        return DualState(
            xi=self.xi.copy(),
            lam=self.lam.copy(),
            gamma=self.gamma.copy(),
            omega=self.omega.copy(),
        )


__all__ = [
    "Status",
    "ShapeError",
    "DegenerateRowError",
    "DualQPProblem",
    "DualState",
    "ProgressRecord",
    "SolveResult",
]
