"""
Tests for gravity, propulsion and the atmosphere model.
"""
import numpy as np
import pytest

from wingsim.dynamics.forces import STANDARD_GRAVITY, ForceTorquePair, Gravity
from wingsim.dynamics.state import VehicleState
from wingsim.models.environment import RHO_SL, Environment, isa_density
from wingsim.models.propulsion import Propulsion


def test_force_torque_pair_addition_and_unpacking():
    a = ForceTorquePair([1, 2, 3], [0, 0, 1])
    b = ForceTorquePair([1, 0, 0], [1, 1, 1])
    force, torque = a + b
    np.testing.assert_array_equal(force, [2, 2, 3])
    np.testing.assert_array_equal(torque, [1, 1, 2])


def test_gravity_level_points_down_body_z(make_vehicle):
    vehicle = make_vehicle(VehicleState())
    force, torque = Gravity().evaluate(vehicle)
    np.testing.assert_allclose(force, [0.0, 0.0, 13.5 * STANDARD_GRAVITY])
    np.testing.assert_array_equal(torque, np.zeros(3))


def test_gravity_pitched_up_has_backward_component(make_vehicle):
    theta = 0.2
    vehicle = make_vehicle(VehicleState(vec_euler=[0.0, theta, 0.0]))
    force, _ = Gravity().evaluate(vehicle)
    W = 13.5 * STANDARD_GRAVITY
    np.testing.assert_allclose(force, [-W * np.sin(theta), 0.0, W * np.cos(theta)])
    assert np.linalg.norm(force) == pytest.approx(W)


def test_gravity_rejects_negative_magnitude():
    with pytest.raises(ValueError):
        Gravity(-1.0)


def test_propulsion_static_thrust(make_vehicle, sea_level_env):
    vehicle = make_vehicle(VehicleState())
    force, torque = Propulsion().evaluate(vehicle, sea_level_env, np.array([0, 0, 0.5, 0]))
    expected = 0.5 * 1.2682 * 0.2027 * 1.0 * (80.0 * 0.5)**2
    assert force[0] == pytest.approx(expected)
    assert force[1] == 0.0 and force[2] == 0.0
    np.testing.assert_array_equal(torque, np.zeros(3))


def test_propulsion_zero_throttle_is_drag(make_vehicle, sea_level_env):
    vehicle = make_vehicle(VehicleState(vec_vel_linear_body=[20.0, 0, 0]))
    force, _ = Propulsion().evaluate(vehicle, sea_level_env, np.zeros(4))
    assert force[0] < 0


def test_isa_density_sea_level():
    assert isa_density(0.0) == pytest.approx(RHO_SL)


def test_isa_density_decreases_with_altitude():
    rhos = [isa_density(h) for h in (0, 1000, 5000, 11000, 15000)]
    assert all(a > b for a, b in zip(rhos, rhos[1:]))
    assert isa_density(11000.0) == pytest.approx(0.3639, rel=1e-3)


def test_isa_density_clamped_below_sea_level():
    assert isa_density(-50.0) == isa_density(0.0)


def test_environment_fixed_density_overrides_isa():
    env = Environment(rho=1.0)
    assert env.rho(0.0) == 1.0
    assert env.rho(8000.0) == 1.0


def test_environment_rejects_non_positive_density():
    with pytest.raises(ValueError):
        Environment(rho=0.0)
