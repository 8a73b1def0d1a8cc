"""
Propeller propulsion model for small electric fixed-wing aircraft.

Thrust follows the momentum-theory approximation of Beard & McLain:

    T = ½ ρ S_prop C_prop [(k_motor δt)² − V²]

and the propeller reaction torque about body x is

    Q = −k_T_p (k_Omega δt)²
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from wingsim.dynamics.forces import ForceTorquePair

if TYPE_CHECKING:
    from wingsim.dynamics.vehicle import Vehicle
    from wingsim.models.environment import Environment


@dataclass(frozen=True)
class PropulsionParameters:
    """
    Propeller constants.

    Attributes
    ----------
    s_prop : float
        Propeller disc area [m²]
    c_prop : float
        Propeller efficiency coefficient [-]
    k_motor : float
        Motor constant, exit velocity at full throttle [m/s]
    k_t_p : float
        Reaction torque constant [N·m·s²]
    k_omega : float
        Propeller speed constant [rad/s]
    """

    s_prop: float = 0.2027
    c_prop: float = 1.0
    k_motor: float = 80.0
    k_t_p: float = 0.0
    k_omega: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> PropulsionParameters:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown propulsion parameters: {sorted(unknown)}")
        return cls(**data)


class Propulsion:
    """Thrust along body x from throttle and airspeed."""

    def evaluate(
        self,
        vehicle: Vehicle,
        environment: Environment,
        ctrl_input: NDArray[np.float64],
    ) -> ForceTorquePair:
        prop = vehicle.propulsion
        throttle = ctrl_input[2]
        airspeed, _, _ = vehicle.airdata(environment)
        rho = environment.rho(vehicle.state.altitude)

        thrust = 0.5 * rho * prop.s_prop * prop.c_prop * ((prop.k_motor * throttle)**2 - airspeed**2)
        reaction = -prop.k_t_p * (prop.k_omega * throttle)**2
        return ForceTorquePair(np.array([thrust, 0.0, 0.0]), np.array([reaction, 0.0, 0.0]))
