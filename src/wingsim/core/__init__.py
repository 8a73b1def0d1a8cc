from .simulation import ProgressReporter, SimulationOutput, simulate
from .solver import (
    AdaptiveNonStiff,
    AdaptiveStiff,
    FixedStepExplicit,
    IntegrationError,
    IntegrationStrategy,
    SolverType,
    UnsupportedSolverError,
    check_solver_type,
)
from .supervisor import Supervisor

__all__ = [
    "simulate",
    "SimulationOutput",
    "ProgressReporter",
    "Supervisor",
    "SolverType",
    "IntegrationStrategy",
    "FixedStepExplicit",
    "AdaptiveNonStiff",
    "AdaptiveStiff",
    "IntegrationError",
    "UnsupportedSolverError",
    "check_solver_type",
]
