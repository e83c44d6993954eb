import numpy as np

from dualqp.solver import (
    DualState,
    assemble_problem,
    coordinate_ascent_qp,
    init_dual_state,
    is_kkt_optimal,
    kkt_residuals,
)


def test_kkt_residuals_at_optimum():
    problem = assemble_problem(np.eye(2), a_mat=np.array([[1.0, 0.0]]), b_vec=np.array([-1.0]))
    state = DualState(xi=np.array([1.0]), lam=np.zeros((0, 2)), gamma=np.zeros((0, 2)), omega=np.zeros((0, 2)))
    beta = np.array([1.0, 0.0])
    residuals = kkt_residuals(problem, state, beta)
    assert residuals["primal_ineq"] <= 1e-12
    assert residuals["consistency"] <= 1e-12
    assert residuals["complementary"] <= 1e-12
    assert is_kkt_optimal(problem, state, beta)


def test_kkt_detects_infeasible_beta():
    problem = assemble_problem(np.eye(2), a_mat=np.array([[1.0, 0.0]]), b_vec=np.array([-1.0]))
    state = DualState(xi=np.array([0.0]), lam=np.zeros((0, 2)), gamma=np.zeros((0, 2)), omega=np.zeros((0, 2)))
    beta = np.zeros(2)
    residuals = kkt_residuals(problem, state, beta)
    assert residuals["primal_ineq"] == 1.0
    assert not is_kkt_optimal(problem, state, beta)


def test_kkt_detects_box_and_slack_violations():
    problem = assemble_problem(
        np.eye(2),
        u_mat=np.ones((1, 2)),
        v_mat=np.zeros((1, 2)),
        s_mat=np.ones((1, 2)),
        tau_mat=np.array([[1.0, np.inf]]),
    )
    state, beta = init_dual_state(problem)
    state.lam[0, 1] = 1.25
    state.omega[0, 1] = 0.5
    residuals = kkt_residuals(problem, state, beta)
    assert residuals["box"] == 0.25
    assert residuals["slack"] == 0.5
    assert residuals["consistency"] > 0.0


def test_solver_output_satisfies_kkt(smooth_problem):
    p = smooth_problem
    result = coordinate_ascent_qp(
        p.X, p.A, p.b, p.U, p.V, p.S, p.T, p.Tau, max_iter=5000, tol=1e-10
    )
    residuals = kkt_residuals(p, result.dual_state(), result.beta)
    assert residuals["box"] == 0.0
    # Omega only keeps the size of the last step into a bound, which vanishes at convergence
    assert residuals["slack"] <= 1e-6
    assert residuals["consistency"] <= 1e-8
    assert residuals["primal_ineq"] <= 1e-6
