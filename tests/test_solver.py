"""
Tests for the integration strategies.
"""
import numpy as np
import pytest

from wingsim.core.solver import (
    AdaptiveNonStiff,
    AdaptiveStiff,
    FixedStepExplicit,
    IntegrationError,
    SolverType,
    UnsupportedSolverError,
    check_solver_type,
)


def decay(t, y):
    return -y


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, t, y):
        self.calls.append((t, np.array(y)))


# =============================================================================
# Fixed step
# =============================================================================

def test_single_step_matches_explicit_euler():
    """f(t, y) = y, dt = 0.1, y0 = 1 -> y1 = 1.1"""
    solver = FixedStepExplicit(dt=0.1)
    y1 = solver.step(lambda t, y: y, 0.0, np.array([1.0]))
    assert y1[0] == pytest.approx(1.1)


def test_loop_boundary_ten_iterations():
    out = Recorder()
    solver = FixedStepExplicit(dt=0.1, t_eps=1e-6)
    ts, ys = solver.integrate(decay, out, 0.0, 1.0, np.array([1.0]))

    assert solver.num_steps == 10
    assert len(out.calls) == 10
    assert len(ts) == 11
    assert out.calls[0][0] == 0.0
    assert ts[-1] == pytest.approx(1.0)


def test_loop_values_are_euler_iterates():
    solver = FixedStepExplicit(dt=0.1)
    ts, ys = solver.integrate(decay, lambda t, y: None, 0.0, 1.0, np.array([1.0]))
    np.testing.assert_allclose(ys[:, 0], 0.9 ** np.arange(11))


def test_step_hook_and_on_finish():
    hook = Recorder()
    finish = Recorder()
    solver = FixedStepExplicit(dt=0.25, step_hook=hook, on_finish=finish)
    solver.integrate(decay, lambda t, y: None, 0.0, 1.0, np.array([1.0]))

    assert len(hook.calls) == 4
    # Hook sees the updated state with the pre-step time
    assert hook.calls[0][0] == 0.0
    assert hook.calls[0][1][0] == pytest.approx(0.75)
    assert len(finish.calls) == 1
    assert finish.calls[0][0] == pytest.approx(1.0)


def test_fixed_step_empty_interval():
    out = Recorder()
    finish = Recorder()
    solver = FixedStepExplicit(dt=0.1, on_finish=finish)
    ts, _ = solver.integrate(decay, out, 1.0, 1.0, np.array([1.0]))
    assert out.calls == []
    assert len(finish.calls) == 1
    assert len(ts) == 1


def test_fixed_step_rejects_bad_timestep():
    with pytest.raises(ValueError, match="Timestep must be positive"):
        FixedStepExplicit(dt=0.0)
    with pytest.raises(ValueError, match="t_eps"):
        FixedStepExplicit(dt=0.1, t_eps=-1.0)


def test_fixed_step_warns_on_large_timestep():
    with pytest.warns(RuntimeWarning, match="Large timestep"):
        FixedStepExplicit(dt=2.0)


# =============================================================================
# Adaptive
# =============================================================================

@pytest.mark.parametrize("strategy", [
    AdaptiveNonStiff(rtol=1e-8, atol=1e-10),
    AdaptiveStiff(rtol=1e-8, atol=1e-10),
    AdaptiveStiff(method="Radau", rtol=1e-8, atol=1e-10),
])
def test_adaptive_accuracy(strategy):
    ts, ys = strategy.integrate(decay, lambda t, y: None, 0.0, 2.0, np.array([1.0]))
    assert ts[-1] == pytest.approx(2.0)
    assert ys[-1, 0] == pytest.approx(np.exp(-2.0), rel=1e-5)


def test_adaptive_output_once_per_accepted_step():
    out = Recorder()
    evaluations = []

    def f(t, y):
        evaluations.append(t)
        return -y

    solver = AdaptiveNonStiff()
    ts, _ = solver.integrate(f, out, 0.0, 5.0, np.array([1.0]))

    times = [t for t, _ in out.calls]
    assert len(times) == solver.num_steps + 1
    assert times[0] == 0.0
    assert times[-1] == pytest.approx(5.0)
    assert all(b > a for a, b in zip(times, times[1:]))
    # Derivative runs more often than the output callback
    assert len(evaluations) > len(times)
    np.testing.assert_array_equal(ts, times)


def test_stiff_problem_takes_few_steps():
    lam = -1e4

    def stiff(t, y):
        return lam * (y - np.cos(t))

    implicit = AdaptiveStiff()
    implicit.integrate(stiff, lambda t, y: None, 0.0, 1.0, np.array([0.0]))
    explicit = AdaptiveNonStiff()
    explicit.integrate(stiff, lambda t, y: None, 0.0, 1.0, np.array([0.0]))
    assert implicit.num_steps < explicit.num_steps


def test_adaptive_failure_raises_integration_error():
    """y' = y², y(0) = 1 has a singularity at t = 1."""
    def blow_up(t, y):
        return y**2

    solver = AdaptiveNonStiff()
    with pytest.raises(IntegrationError, match="RK45 failed"):
        solver.integrate(blow_up, lambda t, y: None, 0.0, 2.0, np.array([1.0]))


def test_unknown_stiff_method():
    with pytest.raises(ValueError, match="Method"):
        AdaptiveStiff(method="Euler")


# =============================================================================
# Solver selection
# =============================================================================

def test_check_solver_type_known_values():
    assert check_solver_type(0) is SolverType.FIXED_STEP
    assert check_solver_type(1) is SolverType.ADAPTIVE_NONSTIFF
    assert check_solver_type(2) is SolverType.ADAPTIVE_STIFF


def test_check_solver_type_unknown_value():
    with pytest.raises(UnsupportedSolverError, match="Unsupported solver_type=99 specified"):
        check_solver_type(99)
