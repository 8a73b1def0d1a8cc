import os
import sys

import numpy as np
import pytest

# Get the path to the project root (one level up from 'tests')
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(project_root, 'src')

# Add 'src' to sys.path
sys.path.insert(0, src_path)

from wingsim.config import simulation_options  # noqa: E402
from wingsim.dynamics.state import VehicleState  # noqa: E402
from wingsim.dynamics.vehicle import Vehicle  # noqa: E402
from wingsim.models.aerodynamics import AerodynamicCoefficients  # noqa: E402
from wingsim.models.environment import Environment  # noqa: E402
from wingsim.models.propulsion import PropulsionParameters  # noqa: E402


@pytest.fixture
def coefficients():
    """Default Aerosonde-class coefficient table."""
    return AerodynamicCoefficients()


@pytest.fixture
def make_vehicle(coefficients):
    """Factory for a default vehicle in a given state."""
    def _make(state=None):
        return Vehicle(
            mass=13.5,
            inertia=np.array([
                [0.8244, 0.0, -0.1204],
                [0.0, 1.135, 0.0],
                [-0.1204, 0.0, 1.759],
            ]),
            aerodynamics=coefficients,
            propulsion=PropulsionParameters(),
            state=state,
        )
    return _make


@pytest.fixture
def level_state():
    """Wings-level flight at 15 m/s, 100 m altitude."""
    return VehicleState(vec_pos=[0.0, 0.0, -100.0], vec_vel_linear_body=[15.0, 0.0, 0.0])


@pytest.fixture
def sea_level_env():
    """Calm air with fixed density 1.2682 kg/m³."""
    return Environment(rho=1.2682)


@pytest.fixture
def short_options():
    """Default options shortened to a 1 s fixed-step run without progress output."""
    opts = simulation_options()
    opts.solver.t_f = 1.0
    opts.solver.dt = 0.1
    opts.output.progress_interval = 0.0
    return opts
