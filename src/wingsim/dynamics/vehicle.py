"""
Fixed-wing vehicle: mass properties, model tables and current state.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from wingsim.dynamics.kinematics import rotation_body_to_ned
from wingsim.dynamics.state import VehicleState

if TYPE_CHECKING:
    from wingsim.models.aerodynamics import AerodynamicCoefficients
    from wingsim.models.environment import Environment
    from wingsim.models.propulsion import PropulsionParameters


class Vehicle:
    """
    Aircraft parameters together with one state.

    Parameters
    ----------
    mass : float
        Mass [kg]
    inertia : NDArray[np.float64]
        Body-frame inertia tensor [kg·m²] (3, 3)
    aerodynamics : AerodynamicCoefficients
        Aerodynamic table
    propulsion : PropulsionParameters
        Propeller constants
    state : VehicleState | None
        Current state. Defaults to the zero state.

    Notes
    -----
    Models read the state through ``vehicle.state`` and never write it.
    ``with_state`` builds a view for a trial state without touching this one.
    """

    def __init__(
        self,
        mass: float,
        inertia: NDArray[np.float64],
        aerodynamics: AerodynamicCoefficients,
        propulsion: PropulsionParameters,
        state: VehicleState | None = None,
    ) -> None:
        self.mass = float(mass)
        self.inertia = np.asarray(inertia, dtype=np.float64)
        self.aerodynamics = aerodynamics
        self.propulsion = propulsion
        self.state = state if state is not None else VehicleState()

    def with_state(self, state: VehicleState) -> Vehicle:
        """Return a vehicle sharing these parameters with a different state."""
        return Vehicle(self.mass, self.inertia, self.aerodynamics, self.propulsion, state)

    def get_state(self) -> VehicleState:
        return self.state

    def airdata(self, environment: Environment) -> tuple[float, float, float]:
        """
        Airspeed [m/s], angle of attack [rad] and sideslip [rad].

        Computed from the body-frame velocity relative to the wind. At zero
        airspeed both angles are reported as zero.
        """
        wind_body = rotation_body_to_ned(self.state.vec_euler).T @ environment.wind_ned
        u, v, w = self.state.vec_vel_linear_body - wind_body
        airspeed = float(np.sqrt(u * u + v * v + w * w))
        if airspeed == 0:
            return 0.0, 0.0, 0.0
        alpha = float(np.arctan2(w, u))
        beta = float(np.arcsin(np.clip(v / airspeed, -1.0, 1.0)))
        return airspeed, alpha, beta

    def get_airdata(self, environment: Environment) -> tuple[float, float, float]:
        return self.airdata(environment)
