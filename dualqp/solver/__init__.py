"""
Dual block coordinate ascent for a box-constrained quadratic program.

The solver computes the minimizer of ``0.5 * ||beta||^2`` subject to three
families of linear constraints by maximizing the Lagrangian dual one
coordinate at a time (Gauss-Seidel order), keeping the primal vector in sync
with rank-1 updates. Modules are NumPy-only.
"""

from . import config, core, driver, initialize, kkt, objective, precompute, problem, updates, utils
from .config import SolverConfig
from .core import (
    DegenerateRowError,
    DualQPProblem,
    DualState,
    ProgressRecord,
    ShapeError,
    SolveResult,
    Status,
)
from .driver import ProgressCallback, coordinate_ascent_qp, log_progress, solve_problem
from .initialize import init_dual_state, reconstruct_beta
from .kkt import is_kkt_optimal, kkt_residuals
from .objective import dual_objective, duality_gap, primal_objective
from .precompute import compute_p, compute_r, precompute as precompute_constants
from .problem import assemble_problem
from .updates import sweep, update_gamma, update_lambda, update_xi

__all__ = [
    "config",
    "core",
    "driver",
    "initialize",
    "kkt",
    "objective",
    "precompute",
    "problem",
    "updates",
    "utils",
    # Core types
    "Status",
    "ShapeError",
    "DegenerateRowError",
    "DualQPProblem",
    "DualState",
    "ProgressRecord",
    "SolveResult",
    "SolverConfig",
    # Building blocks
    "assemble_problem",
    "compute_r",
    "compute_p",
    "precompute_constants",
    "init_dual_state",
    "reconstruct_beta",
    "update_xi",
    "update_lambda",
    "update_gamma",
    "sweep",
    # Diagnostics
    "dual_objective",
    "primal_objective",
    "duality_gap",
    "kkt_residuals",
    "is_kkt_optimal",
    # Driver
    "ProgressCallback",
    "log_progress",
    "solve_problem",
    "coordinate_ascent_qp",
]
