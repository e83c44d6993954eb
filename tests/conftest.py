"""Pytest configuration and shared fixtures for dualqp tests.

This module provides:
- A deterministic numpy RNG fixture
- A small random instance touching all three constraint families
- Debug-mode isolation so a failing test cannot leak global state
"""

import os

import numpy as np
import pytest

from dualqp.diagnostics import (
    get_debug_tolerance,
    is_debug_enabled,
    set_debug_enabled,
    set_debug_tolerance,
)
from dualqp.solver import DualQPProblem, assemble_problem


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set the legacy numpy global seed."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))


@pytest.fixture(scope="function", autouse=True)
def restore_debug_mode():
    """Restore the global debug flag and tolerance after every test."""
    original = is_debug_enabled()
    tolerance = get_debug_tolerance()
    yield
    set_debug_enabled(original)
    set_debug_tolerance(tolerance)


@pytest.fixture(scope="function")
def mixed_problem(rng: np.random.Generator) -> DualQPProblem:
    """Random instance with K=2, L=2, H=2 and some unbounded Tau entries."""
    n, d = 12, 4
    X = rng.normal(size=(n, d))
    A = rng.normal(size=(2, d))
    b = rng.normal(size=2)
    U = rng.normal(size=(2, n))
    V = rng.normal(size=(2, n))
    S = rng.normal(size=(2, n))
    T = rng.normal(size=(2, n))
    Tau = np.where(rng.random(size=(2, n)) < 0.5, np.inf, rng.uniform(0.1, 2.0, size=(2, n)))
    return assemble_problem(X, A, b, U, V, S, T, Tau)


@pytest.fixture(scope="function")
def smooth_problem(rng: np.random.Generator) -> DualQPProblem:
    """Random instance with K=2, H=2 and no Lambda block.

    The Gamma block adds an identity term to the dual Hessian, so coordinate
    ascent converges linearly at a fast rate.
    """
    n, d = 10, 4
    X = rng.normal(size=(n, d))
    A = rng.normal(size=(2, d))
    b = rng.normal(size=2)
    S = rng.normal(size=(2, n))
    T = rng.normal(size=(2, n))
    Tau = np.where(rng.random(size=(2, n)) < 0.5, np.inf, rng.uniform(0.1, 2.0, size=(2, n)))
    return assemble_problem(X, A, b, s_mat=S, t_mat=T, tau_mat=Tau)
