"""
Tests for the 12-element vehicle state.
"""
import numpy as np
import pytest

from wingsim.dynamics.state import STATE_SIZE, VehicleState


def test_serialize_layout():
    s = VehicleState(
        vec_pos=[1, 2, 3],
        vec_euler=[0.1, 0.2, 0.3],
        vec_vel_linear_body=[4, 5, 6],
        vec_vel_angular_body=[0.4, 0.5, 0.6],
    )
    y = s.serialize()
    assert y.shape == (STATE_SIZE,)
    np.testing.assert_array_equal(y, [1, 2, 3, 0.1, 0.2, 0.3, 4, 5, 6, 0.4, 0.5, 0.6])


def test_round_trip_is_exact():
    rng = np.random.default_rng(42)
    for _ in range(20):
        y = rng.normal(scale=1e3, size=STATE_SIZE)
        s = VehicleState.deserialize(y)
        assert VehicleState.deserialize(s.serialize()) == s
        np.testing.assert_array_equal(s.serialize(), y)


def test_deserialize_rejects_wrong_shape():
    with pytest.raises(ValueError, match="shape"):
        VehicleState.deserialize(np.zeros(11))


def test_deserialize_copies_input():
    y = np.zeros(STATE_SIZE)
    s = VehicleState.deserialize(y)
    y[0] = 5.0
    assert s.vec_pos[0] == 0.0


def test_altitude_is_negative_down():
    s = VehicleState(vec_pos=[0, 0, -250.0])
    assert s.altitude == 250.0


def test_accessors_return_copies():
    s = VehicleState(vec_euler=[0.1, 0.0, 0.0])
    e = s.get_vec_euler()
    e[0] = 1.0
    assert s.vec_euler[0] == 0.1
