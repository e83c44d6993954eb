"""
Example: dual coordinate ascent with dualqp

Walks through the three constraint families one at a time and then combines
them, printing the solution, the iteration count, and the sampled dual
objective values.
"""

import numpy as np

from dualqp import (
    Status,
    coordinate_ascent_qp,
    duality_gap,
    is_kkt_optimal,
    kkt_residuals,
)
from dualqp.solver import assemble_problem


def example_linear_constraint():
    """Example: minimum-norm point on the half-space beta_0 >= 1."""
    print("=" * 60)
    print("Example 1: Single linear constraint")
    print("=" * 60)

    X = np.eye(2)
    A = np.array([[1.0, 0.0]])
    b = np.array([-1.0])

    result = coordinate_ascent_qp(X, a_mat=A, b_vec=b, max_iter=50, tol=1e-10)
    print(f"Status: {result.status}")
    print(f"beta: {result.beta}")
    print(f"xi: {result.xi}")
    print(f"Iterations: {result.nit}")
    print()


def example_relu_block():
    """Example: a Lambda block with box [0, 1]."""
    print("=" * 60)
    print("Example 2: Lambda block")
    print("=" * 60)

    rng = np.random.default_rng(0)
    n, d = 20, 3
    X = rng.normal(size=(n, d))
    y = np.sign(rng.normal(size=n))
    U = -0.5 * y[None, :]
    V = 0.5 * np.ones((1, n))

    result = coordinate_ascent_qp(X, u_mat=U, v_mat=V, max_iter=500, tol=1e-8, verbose=True)
    print(f"Status: {result.status}")
    print(f"beta: {result.beta}")
    print(f"Iterations: {result.nit}")
    print(f"Sampled dual objectives: {np.round(result.dual_objectives, 6)}")
    print()


def example_all_families():
    """Example: all three families together, with unbounded entries in Tau."""
    print("=" * 60)
    print("Example 3: All constraint families")
    print("=" * 60)

    rng = np.random.default_rng(1)
    n, d = 15, 4
    X = rng.normal(size=(n, d))
    A = rng.normal(size=(2, d))
    b = np.array([-0.5, 0.2])
    U = rng.normal(size=(2, n))
    V = rng.normal(size=(2, n))
    S = rng.normal(size=(1, n))
    T = rng.normal(size=(1, n))
    Tau = np.where(rng.random(size=(1, n)) < 0.5, np.inf, 1.0)

    result = coordinate_ascent_qp(
        X,
        a_mat=A,
        b_vec=b,
        u_mat=U,
        v_mat=V,
        s_mat=S,
        t_mat=T,
        tau_mat=Tau,
        max_iter=2000,
        tol=1e-9,
    )
    problem = assemble_problem(X, A, b, U, V, S, T, Tau)
    state = result.dual_state()
    print(f"Status: {result.status}")
    if result.status == Status.CONVERGED:
        print(f"beta: {result.beta}")
        print(f"Iterations: {result.nit}")
        print(f"Duality gap: {duality_gap(problem, state, result.beta):.3e}")
        print(f"KKT residuals: {kkt_residuals(problem, state, result.beta)}")
        print(f"KKT optimal: {is_kkt_optimal(problem, state, result.beta, tol=1e-6)}")
    print()


def main():
    """Run all examples."""
    print("\n" + "=" * 60)
    print("dualqp: dual coordinate ascent examples")
    print("=" * 60 + "\n")

    example_linear_constraint()
    example_relu_block()
    example_all_families()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
