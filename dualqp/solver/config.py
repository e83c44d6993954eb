"""Solver configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SolverConfig:
    """
    Configuration of the iteration driver.

    Args:
        max_iter: Maximum number of full sweeps. Must be positive.
        tol: Convergence tolerance on both ``||xi - xi_old||`` and
            ``||beta - beta_old||``. Must be non-negative.
        verbose: Whether to evaluate and emit diagnostic objective values.
        report_every: Reporting cadence in sweeps; records are taken after
            zero-based iterations ``0, report_every, 2 * report_every, ...``.
    """

    max_iter: int = 1000
    tol: float = 1e-5
    verbose: bool = False
    report_every: int = 10

    def __post_init__(self) -> None:
        """Validate SolverConfig invariants."""
        if self.max_iter <= 0:
            raise ValueError(f"max_iter must be positive, got {self.max_iter}.")

        if not self.tol >= 0.0:
            raise ValueError(f"tol must be non-negative, got {self.tol}.")

        if self.report_every <= 0:
            raise ValueError(f"report_every must be positive, got {self.report_every}.")


__all__ = ["SolverConfig"]
