"""
Tests for simulation options and their JSON persistence.
"""
import json

import numpy as np
import pytest

from wingsim.config import SimulationOptions, simulation_options
from wingsim.utils.io import load_simulation_config, save_simulation_config


def test_defaults():
    opts = simulation_options()
    assert opts.controller.type == 0
    assert opts.solver.solver_type == 0
    assert opts.record_states and opts.record_inputs
    assert opts.vehicle.aerodynamics.model_type == 1


def test_copy_is_deep():
    opts = simulation_options()
    dup = opts.copy()
    dup.init.vec_euler[1] = 0.5
    assert opts.init.vec_euler[1] == 0.0


def test_json_round_trip(tmp_path):
    opts = simulation_options()
    opts.solver.solver_type = 2
    opts.solver.t_f = 42.0
    opts.init.vec_pos = np.array([1.0, 2.0, -300.0])
    opts.controller.schedule = [[1.0, [0.0, -0.2, 0.7, 0.0]]]
    opts.environment.rho = 1.1

    path = save_simulation_config(opts, tmp_path / "opts.json")
    loaded = load_simulation_config(path)

    assert loaded.solver.solver_type == 2
    assert loaded.solver.t_f == 42.0
    assert loaded.solver.max_step == np.inf
    np.testing.assert_array_equal(loaded.init.vec_pos, [1.0, 2.0, -300.0])
    assert loaded.controller.schedule == [[1.0, [0.0, -0.2, 0.7, 0.0]]]
    assert loaded.environment.rho == 1.1
    assert loaded.vehicle.aerodynamics == opts.vehicle.aerodynamics


def test_partial_config_keeps_defaults(tmp_path):
    path = tmp_path / "partial.json"
    path.write_text(json.dumps({"solver": {"dt": 0.005}, "vehicle": {"aerodynamics": {"c_lift_0": 0.3}}}))
    opts = load_simulation_config(path)
    assert opts.solver.dt == 0.005
    assert opts.solver.t_f == 10.0
    assert opts.vehicle.aerodynamics.c_lift_0 == 0.3
    assert opts.vehicle.aerodynamics.c_lift_a == 3.45


def test_unknown_key_rejected():
    with pytest.raises(ValueError, match="Unknown keys in options.solver"):
        SimulationOptions.from_dict({"solver": {"dtt": 0.1}})


def test_invalid_coefficient_rejected():
    with pytest.raises(ValueError, match="must be positive"):
        SimulationOptions.from_dict({"vehicle": {"aerodynamics": {"s": -1.0}}})
