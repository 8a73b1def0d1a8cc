import numpy as np
import pytest

from wingsim.control import Controller


def test_static_output_without_schedule():
    ctrl = Controller([0.0, -0.3, 0.2, 0.0])
    np.testing.assert_array_equal(ctrl.output(0.0), [0.0, -0.3, 0.2, 0.0])
    np.testing.assert_array_equal(ctrl.output(1e6), [0.0, -0.3, 0.2, 0.0])


def test_schedule_zero_order_hold():
    ctrl = Controller(
        [0.0, 0.0, 0.5, 0.0],
        schedule=[(2.0, [0.0, 0.0, 1.0, 0.0]), (1.0, [0.1, 0.0, 0.5, 0.0])],
    )
    assert ctrl.output(0.5)[0] == 0.0
    assert ctrl.output(1.0)[0] == 0.1
    assert ctrl.output(1.9)[2] == 0.5
    assert ctrl.output(2.0)[2] == 1.0
    assert ctrl.output(10.0)[2] == 1.0


def test_output_is_a_copy():
    ctrl = Controller([0.0, 0.0, 0.5, 0.0])
    u = ctrl.output(0.0)
    u[2] = 99.0
    assert ctrl.output(0.0)[2] == 0.5


def test_invalid_control_vector():
    with pytest.raises(ValueError, match="shape"):
        Controller([0.0, 0.0, 0.5])
    with pytest.raises(ValueError, match="finite"):
        Controller([0.0, np.nan, 0.5, 0.0])
