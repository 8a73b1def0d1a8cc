"""
wingsim - 6-DOF fixed-wing aircraft flight simulator.

Core Components
---------------
simulate : Run one flight from a SimulationOptions object
SimulationOptions : Nested run configuration
Supervisor : Composes forces, kinematics and recording
FixedStepExplicit, AdaptiveNonStiff, AdaptiveStiff : Integration strategies

Models
------
ClassicAerodynamics : Stall-blended lift, parabolic drag, linear moments
Propulsion : Propeller thrust and motor torque
Gravity : Uniform gravity in the body frame
Trimmer : Straight-flight trim solver

Examples
--------
>>> from wingsim import simulate, simulation_options
>>> opts = simulation_options()
>>> opts.solver.t_f = 5.0
>>> out = simulate(opts)
"""

__version__ = "0.1.0"

from wingsim.config import SimulationOptions, simulation_options
from wingsim.control.controller import Controller
from wingsim.control.trim import Trimmer, TrimResult
from wingsim.core.simulation import SimulationOutput, simulate
from wingsim.core.solver import (
    AdaptiveNonStiff,
    AdaptiveStiff,
    FixedStepExplicit,
    IntegrationError,
    SolverType,
    UnsupportedSolverError,
)
from wingsim.core.supervisor import Supervisor
from wingsim.dynamics.forces import ForceTorquePair, Gravity
from wingsim.dynamics.state import VehicleState
from wingsim.dynamics.vehicle import Vehicle
from wingsim.logger import CSVLogger
from wingsim.models.aerodynamics import (
    AerodynamicCoefficients,
    AerodynamicsModelType,
    ClassicAerodynamics,
    create_aerodynamics,
)
from wingsim.models.environment import Environment
from wingsim.models.propulsion import Propulsion, PropulsionParameters

__all__ = [
    # Version
    "__version__",
    # Core
    "simulate",
    "SimulationOutput",
    "SimulationOptions",
    "simulation_options",
    "Supervisor",
    "SolverType",
    "FixedStepExplicit",
    "AdaptiveNonStiff",
    "AdaptiveStiff",
    "IntegrationError",
    "UnsupportedSolverError",
    # State and vehicle
    "VehicleState",
    "Vehicle",
    # Forces and models
    "ForceTorquePair",
    "Gravity",
    "AerodynamicCoefficients",
    "AerodynamicsModelType",
    "ClassicAerodynamics",
    "create_aerodynamics",
    "Environment",
    "Propulsion",
    "PropulsionParameters",
    # Control
    "Controller",
    "Trimmer",
    "TrimResult",
    # Logging
    "CSVLogger",
]
