"""
Simulation options.

All settings of a run live in one nested ``SimulationOptions`` object built
before the run and read-only afterwards. ``simulation_options()`` returns
the defaults; edit the fields you need:

>>> opts = simulation_options()
>>> opts.solver.solver_type = 1
>>> opts.solver.t_f = 30.0
>>> out = simulate(opts)
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields, is_dataclass, replace
from typing import Any

import numpy as np

from wingsim.models.aerodynamics import AerodynamicCoefficients
from wingsim.models.propulsion import PropulsionParameters


def _vec(*values: float):
    return field(default_factory=lambda: np.array(values, dtype=np.float64))


@dataclass
class ControllerOptions:
    """
    type : int
        0 = fixed predefined control sequence, 1 = trim-seeking
    static_output : array (4,)
        [aileron, elevator, throttle, rudder] held when no schedule applies
    schedule : list of (t_start, control) | None
        Piecewise-constant control sequence, sorted by start time
    """

    type: int = 0
    static_output: np.ndarray = _vec(0.0, -0.3, 0.2, 0.0)
    schedule: list | None = None


@dataclass
class SolverOptions:
    """
    solver_type : int
        0 = fixed-step explicit, 1 = adaptive non-stiff, 2 = adaptive stiff
    """

    solver_type: int = 0
    t_0: float = 0.0
    t_f: float = 10.0
    dt: float = 0.01
    t_eps: float = 1e-6
    rtol: float = 1e-6
    atol: float = 1e-8
    max_step: float = np.inf
    stiff_method: str = "BDF"


@dataclass
class VisualizationOptions:
    draw_graphics: bool = False
    draw_forces: bool = False
    draw_states: bool = False


@dataclass
class InitOptions:
    vec_pos: np.ndarray = _vec(0.0, 0.0, -100.0)
    vec_euler: np.ndarray = _vec(0.0, 0.0, 0.0)
    vec_vel_linear_body: np.ndarray = _vec(25.0, 0.0, 0.0)
    vec_vel_angular_body: np.ndarray = _vec(0.0, 0.0, 0.0)


@dataclass
class TrimOptions:
    """Target of the trim solver: airspeed [m/s] and flight path angle [rad]."""

    airspeed: float = 25.0
    gamma: float = 0.0


@dataclass
class VehicleOptions:
    mass: float = 13.5
    inertia: np.ndarray = field(default_factory=lambda: np.array([
        [0.8244, 0.0, -0.1204],
        [0.0, 1.135, 0.0],
        [-0.1204, 0.0, 1.759],
    ]))
    aerodynamics: AerodynamicCoefficients = field(default_factory=AerodynamicCoefficients)
    propulsion: PropulsionParameters = field(default_factory=PropulsionParameters)


@dataclass
class EnvironmentOptions:
    wind_ned: np.ndarray = _vec(0.0, 0.0, 0.0)
    rho: float | None = None


@dataclass
class OutputOptions:
    """
    csv_path : str | None
        Write recorded trajectories here after the run
    progress_interval : float
        Simulated seconds between progress lines. <= 0 disables them.
    """

    csv_path: str | None = None
    progress_interval: float = 1.0


@dataclass
class SimulationOptions:
    controller: ControllerOptions = field(default_factory=ControllerOptions)
    solver: SolverOptions = field(default_factory=SolverOptions)
    visualization: VisualizationOptions = field(default_factory=VisualizationOptions)
    init: InitOptions = field(default_factory=InitOptions)
    trim: TrimOptions = field(default_factory=TrimOptions)
    vehicle: VehicleOptions = field(default_factory=VehicleOptions)
    environment: EnvironmentOptions = field(default_factory=EnvironmentOptions)
    output: OutputOptions = field(default_factory=OutputOptions)
    record_states: bool = True
    record_inputs: bool = True

    def copy(self) -> SimulationOptions:
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """Nested plain-Python representation (JSON serializable)."""
        return _to_plain(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimulationOptions:
        """
        Build options from a nested dict, starting from the defaults.

        Missing keys keep their default value.

        Raises
        ------
        ValueError
            On unknown keys
        """
        return _merge(cls(), data, "options")


def simulation_options() -> SimulationOptions:
    """Default simulation settings."""
    return SimulationOptions()


def _to_plain(obj: Any) -> Any:
    if is_dataclass(obj):
        return {f.name: _to_plain(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, (list, tuple)):
        return [_to_plain(v) for v in obj]
    if isinstance(obj, float) and not np.isfinite(obj):
        return None if np.isnan(obj) else ("inf" if obj > 0 else "-inf")
    return obj


def _merge(base: Any, data: dict[str, Any], path: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"{path} must be a mapping, got {type(data).__name__}")

    known = {f.name: f for f in fields(base)}
    unknown = set(data) - set(known)
    if unknown:
        raise ValueError(f"Unknown keys in {path}: {sorted(unknown)}")

    updates = {}
    for name, value in data.items():
        current = getattr(base, name)
        if is_dataclass(current):
            updates[name] = _merge(current, value, f"{path}.{name}")
        elif isinstance(current, np.ndarray):
            updates[name] = np.array(value, dtype=np.float64)
        elif isinstance(current, float) and isinstance(value, str):
            updates[name] = float(value)
        else:
            updates[name] = value
    return replace(base, **updates)
