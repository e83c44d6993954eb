"""
Input assembly and validation.

Every solve starts by normalizing the caller's arrays into a
:class:`~dualqp.solver.core.DualQPProblem` whose families are always present,
possibly with zero rows. Shape mismatches are rejected here, before any
computation begins.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .core import DualQPProblem, ShapeError


def _matrix(mat: Optional[np.ndarray], name: str, cols: int) -> np.ndarray:
    if mat is None:
        return np.zeros((0, cols))
    arr = np.asarray(mat, dtype=float)
    if arr.ndim == 1 and arr.size == 0:
        return np.zeros((0, cols))
    if arr.ndim != 2 or arr.shape[1] != cols:
        raise ShapeError(f"{name} must have shape (rows, {cols}), got {arr.shape}")
    return arr


def _companion(
    mat: Optional[np.ndarray],
    name: str,
    shape: tuple[int, int],
    fill: float,
) -> np.ndarray:
    if mat is None:
        return np.full(shape, fill)
    arr = np.asarray(mat, dtype=float)
    if arr.size == 0 and shape[0] == 0:
        return np.full(shape, fill)
    if arr.shape != shape:
        raise ShapeError(f"{name} must have shape {shape}, got {arr.shape}")
    return arr


def _require_finite(arr: np.ndarray, name: str) -> None:
    if arr.size and not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must contain only finite values")


def assemble_problem(
    x_mat: np.ndarray,
    a_mat: Optional[np.ndarray] = None,
    b_vec: Optional[np.ndarray] = None,
    u_mat: Optional[np.ndarray] = None,
    v_mat: Optional[np.ndarray] = None,
    s_mat: Optional[np.ndarray] = None,
    t_mat: Optional[np.ndarray] = None,
    tau_mat: Optional[np.ndarray] = None,
) -> DualQPProblem:
    """
    Build a validated problem from raw arrays.

    ``None`` (or an empty array) marks an absent family. Missing companions
    default to ``b = 0``, ``T = 0`` and ``Tau = +inf``; ``V`` is required
    whenever ``U`` has rows, and ``U``/``S`` are required whenever their
    companions have rows.

    Raises:
        ShapeError: If any dimension disagrees with ``X`` or with its family.
        ValueError: If the data contain NaN/inf (``Tau`` may be ``+inf``) or
            ``Tau`` has negative entries.
    """

    x = np.asarray(x_mat, dtype=float)
    if x.ndim != 2:
        raise ShapeError(f"X must be a 2D array, got {x.ndim} dimension(s)")
    n, d = x.shape

    a = _matrix(a_mat, "A", d)
    k = a.shape[0]
    if b_vec is None:
        b = np.zeros(k)
    else:
        b = np.asarray(b_vec, dtype=float).reshape(-1)
        if b.shape[0] != k:
            raise ShapeError(f"b must have length {k} to match A, got {b.shape[0]}")

    if u_mat is None and v_mat is not None and np.asarray(v_mat).size:
        raise ShapeError("V was given without U")
    u = _matrix(u_mat, "U", n)
    l_rows = u.shape[0]
    if l_rows and v_mat is None:
        raise ShapeError("U was given without V")
    v = _companion(v_mat, "V", (l_rows, n), 0.0)

    if s_mat is None:
        for other, label in ((t_mat, "T"), (tau_mat, "Tau")):
            if other is not None and np.asarray(other).size:
                raise ShapeError(f"{label} was given without S")
    s = _matrix(s_mat, "S", n)
    h_rows = s.shape[0]
    t = _companion(t_mat, "T", (h_rows, n), 0.0)
    tau = _companion(tau_mat, "Tau", (h_rows, n), np.inf)

    for arr, label in ((x, "X"), (a, "A"), (b, "b"), (u, "U"), (v, "V"), (s, "S"), (t, "T")):
        _require_finite(arr, label)
    if tau.size:
        if np.any(np.isnan(tau)):
            raise ValueError("Tau must not contain NaN")
        if np.any(tau < 0.0):
            raise ValueError("Tau must be non-negative")

    return DualQPProblem(X=x, A=a, b=b, U=u, V=v, S=s, T=t, Tau=tau)


def validate_problem(problem: DualQPProblem) -> DualQPProblem:
    """Re-run :func:`assemble_problem` on the fields of an existing problem."""

    return assemble_problem(
        problem.X,
        problem.A,
        problem.b,
        problem.U,
        problem.V,
        problem.S,
        problem.T,
        problem.Tau,
    )


__all__ = ["assemble_problem", "validate_problem"]
