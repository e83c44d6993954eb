import numpy as np
import pytest

from dualqp.diagnostics import debug_context
from dualqp.solver import (
    DualState,
    assemble_problem,
    init_dual_state,
    precompute_constants,
    reconstruct_beta,
    sweep,
    update_gamma,
    update_lambda,
    update_xi,
)
from dualqp.solver.updates import check_invariants


def _setup(problem):
    r, p = precompute_constants(problem)
    state, beta = init_dual_state(problem)
    return r, p, state, beta


def test_update_xi_single_constraint():
    problem = assemble_problem(np.eye(2), a_mat=np.array([[1.0, 0.0]]), b_vec=np.array([-3.0]))
    r, p, state, beta = _setup(problem)
    # beta = A^T xi = [1, 0]; eps = -(1 - 3) / 1 = 2
    update_xi(problem, p, state, beta)
    assert np.allclose(state.xi, [3.0])
    assert np.allclose(beta, [3.0, 0.0])


def test_update_xi_clips_at_zero():
    problem = assemble_problem(np.eye(2), a_mat=np.array([[1.0, 0.0]]), b_vec=np.array([5.0]))
    r, p, state, beta = _setup(problem)
    update_xi(problem, p, state, beta)
    assert state.xi[0] == 0.0
    assert np.allclose(beta, [0.0, 0.0])


def test_update_lambda_clips_to_unit_box():
    X = np.eye(2)
    U = np.array([[1.0, -1.0]])
    V = np.array([[10.0, -10.0]])
    problem = assemble_problem(X, u_mat=U, v_mat=V)
    r, p, state, beta = _setup(problem)
    update_lambda(problem, r, state, beta)
    assert np.array_equal(state.lam, [[1.0, 0.0]])
    assert np.allclose(beta, reconstruct_beta(problem, state))


def test_update_lambda_skips_zero_u_entries():
    X = np.array([[1.0, 0.0], [0.0, 0.0]])
    U = np.array([[1.0, 0.0]])
    problem = assemble_problem(X, u_mat=U, v_mat=np.zeros((1, 2)))
    r, p, state, beta = _setup(problem)
    update_lambda(problem, r, state, beta)
    assert state.lam[0, 1] == 0.5
    assert np.all(np.isfinite(beta))


def test_update_gamma_respects_finite_and_infinite_bounds():
    X = np.eye(2)
    S = np.array([[-1.0, -1.0]])
    T = np.array([[10.0, 10.0]])
    Tau = np.array([[0.7, np.inf]])
    problem = assemble_problem(X, s_mat=S, t_mat=T, tau_mat=Tau)
    r, p, state, beta = _setup(problem)
    update_gamma(problem, r, state, beta)
    assert state.gamma[0, 0] == 0.7
    assert state.gamma[0, 1] > 1.0
    # gamma 0.35 -> 0.7 hits the bound: Omega = 0.7 + 0.35 - 0.7
    assert state.omega[0, 0] == pytest.approx(0.35)
    assert state.omega[0, 1] == 0.0
    assert np.allclose(beta, reconstruct_beta(problem, state))


def test_update_gamma_slack_feeds_next_step():
    X = np.array([[1.0]])
    S = np.array([[1.0]])
    problem = assemble_problem(X, s_mat=S, tau_mat=np.array([[5.0]]))
    r, _ = precompute_constants(problem)
    state = DualState(
        xi=np.zeros(0),
        lam=np.zeros((0, 1)),
        gamma=np.array([[1.0]]),
        omega=np.array([[0.5]]),
    )
    beta = reconstruct_beta(problem, state)
    # eps = (0 + 0.5 + 1 * -1 - 1) / (1 + 1) = -0.75; without Omega it would be -1
    update_gamma(problem, r, state, beta)
    assert state.gamma[0, 0] == pytest.approx(0.25)
    assert beta[0] == pytest.approx(-0.25)
    assert state.omega[0, 0] == 0.0


def test_slack_from_one_sweep_enters_the_next():
    X = np.array([[1.0]])
    S = np.array([[-1.0]])
    T = np.array([[10.0]])
    problem = assemble_problem(X, s_mat=S, t_mat=T, tau_mat=np.array([[0.7]]))
    r, p, state, beta = _setup(problem)
    sweep(problem, r, p, state, beta)
    assert state.gamma[0, 0] == 0.7
    assert state.omega[0, 0] == pytest.approx(0.35)
    assert beta[0] == pytest.approx(0.7)

    # eps = (10 + 0.35 - 0.7 - 0.7) / 2 > 0 is clamped to 0, which clears Omega
    sweep(problem, r, p, state, beta)
    assert state.gamma[0, 0] == 0.7
    assert state.omega[0, 0] == 0.0
    assert beta[0] == pytest.approx(0.7)


def test_slack_stays_zero_when_steps_stay_inside_the_box():
    X = np.array([[2.0]])
    S = np.array([[1.0]])
    T = np.array([[3.0]])
    problem = assemble_problem(X, s_mat=S, t_mat=T, tau_mat=np.array([[4.0]]))
    r, p, state, beta = _setup(problem)
    # gamma 1 -> 0.6; 0.6 - 0.4 stays below 4
    update_gamma(problem, r, state, beta)
    assert state.gamma[0, 0] == pytest.approx(0.6)
    assert state.omega[0, 0] == 0.0


def test_check_invariants_uses_debug_tolerance(mixed_problem):
    r, p, state, beta = _setup(mixed_problem)
    beta += 1e-6
    with debug_context(True, tolerance=1e-4):
        check_invariants(mixed_problem, state, beta)
    with debug_context(True, tolerance=1e-9):
        with pytest.raises(RuntimeError, match="inconsistent"):
            check_invariants(mixed_problem, state, beta)


def test_update_gamma_exact_step():
    X = np.array([[2.0]])
    S = np.array([[1.0]])
    T = np.array([[3.0]])
    problem = assemble_problem(X, s_mat=S, t_mat=T)
    r, p, state, beta = _setup(problem)
    # gamma0 = 1, beta0 = -2; eps = (3 + 0 + 1 * (2 * -2) - 1) / (1 * 4 + 1) = -0.4
    update_gamma(problem, r, state, beta)
    assert state.gamma[0, 0] == pytest.approx(0.6)
    assert beta[0] == pytest.approx(-1.2)


def test_empty_families_leave_beta_untouched():
    problem = assemble_problem(np.eye(3))
    r, p, state, beta = _setup(problem)
    before = beta.copy()
    update_xi(problem, p, state, beta)
    update_lambda(problem, r, state, beta)
    update_gamma(problem, r, state, beta)
    assert np.array_equal(beta, before)


def test_invariants_hold_after_every_update(mixed_problem):
    r, p, state, beta = _setup(mixed_problem)
    with debug_context(True):
        for _ in range(5):
            sweep(mixed_problem, r, p, state, beta)
    check_invariants(mixed_problem, state, beta)


def test_check_invariants_detects_drift(mixed_problem):
    r, p, state, beta = _setup(mixed_problem)
    beta += 1e-3
    with pytest.raises(RuntimeError, match="inconsistent"):
        check_invariants(mixed_problem, state, beta)


def test_check_invariants_detects_box_violation(mixed_problem):
    r, p, state, beta = _setup(mixed_problem)
    state.lam[0, 0] = 1.5
    with pytest.raises(RuntimeError, match="Lambda"):
        check_invariants(mixed_problem, state, beta)


def test_sweep_is_deterministic(mixed_problem):
    r, p, state_a, beta_a = _setup(mixed_problem)
    _, _, state_b, beta_b = _setup(mixed_problem)
    for _ in range(3):
        sweep(mixed_problem, r, p, state_a, beta_a)
        sweep(mixed_problem, r, p, state_b, beta_b)
    assert np.array_equal(beta_a, beta_b)
    assert np.array_equal(state_a.gamma, state_b.gamma)


def test_sweep_order_matters():
    X = np.eye(2)
    A = np.array([[1.0, 1.0]])
    b = np.array([-2.0])
    U = np.array([[1.0, 1.0]])
    V = np.array([[0.5, 0.5]])
    problem = assemble_problem(X, a_mat=A, b_vec=b, u_mat=U, v_mat=V)
    r, p, state, beta = _setup(problem)
    sweep(problem, r, p, state, beta)

    r2, p2, other, other_beta = _setup(problem)
    update_lambda(problem, r2, other, other_beta)
    update_xi(problem, p2, other, other_beta)
    assert not np.allclose(beta, other_beta)


def test_update_xi_does_not_touch_other_blocks():
    problem = assemble_problem(
        np.eye(2),
        a_mat=np.array([[1.0, 2.0]]),
        b_vec=np.array([-1.0]),
        u_mat=np.ones((1, 2)),
        v_mat=np.zeros((1, 2)),
    )
    r, p, state, beta = _setup(problem)
    lam_before = state.lam.copy()
    update_xi(problem, p, state, beta)
    assert np.array_equal(state.lam, lam_before)
    assert isinstance(state, DualState)
