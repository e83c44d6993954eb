"""dualqp - dual block coordinate ascent for box-constrained quadratic programs."""

__version__ = "0.1.0"

from .diagnostics import (
    assert_consistent,
    assert_in_box,
    box_violation,
    debug_context,
    get_debug_tolerance,
    is_debug_enabled,
    set_debug_enabled,
    set_debug_tolerance,
)
from .logging import configure_logging, get_logger, set_log_level
from .solver import (
    DegenerateRowError,
    DualQPProblem,
    DualState,
    ProgressCallback,
    ProgressRecord,
    ShapeError,
    SolveResult,
    SolverConfig,
    Status,
    assemble_problem,
    coordinate_ascent_qp,
    dual_objective,
    duality_gap,
    is_kkt_optimal,
    kkt_residuals,
    primal_objective,
    reconstruct_beta,
    solve_problem,
)

__all__ = [
    "__version__",
    # Solver
    "Status",
    "ShapeError",
    "DegenerateRowError",
    "DualQPProblem",
    "DualState",
    "ProgressRecord",
    "ProgressCallback",
    "SolveResult",
    "SolverConfig",
    "assemble_problem",
    "coordinate_ascent_qp",
    "solve_problem",
    "reconstruct_beta",
    "dual_objective",
    "primal_objective",
    "duality_gap",
    "kkt_residuals",
    "is_kkt_optimal",
    # Diagnostics
    "box_violation",
    "assert_in_box",
    "assert_consistent",
    "is_debug_enabled",
    "set_debug_enabled",
    "get_debug_tolerance",
    "set_debug_tolerance",
    "debug_context",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
