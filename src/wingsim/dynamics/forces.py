"""
Force contributions for fixed-wing rigid body dynamics.

Every contribution is returned as a ForceTorquePair expressed in the body
frame. Contributions never accumulate into the vehicle: the caller sums the
pairs it receives, so evaluation can be repeated freely.

Physical units:
- Forces: Newtons [N]
- Torques: Newton-meters [N·m]
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from wingsim.dynamics.vehicle import Vehicle
    from wingsim.models.environment import Environment

STANDARD_GRAVITY = 9.80665  # [m/s²]


class ForceTorquePair:
    """
    Body-frame force [N] and torque [N·m] produced by one model evaluation.

    Supports addition so several contributions can be combined:

    >>> total = gravity_pair + propulsion_pair + aero_pair
    """

    __slots__ = ("force", "torque")

    def __init__(self, force=None, torque=None) -> None:
        self.force = np.zeros(3) if force is None else np.asarray(force, dtype=np.float64).reshape(3)
        self.torque = np.zeros(3) if torque is None else np.asarray(torque, dtype=np.float64).reshape(3)

    @classmethod
    def zero(cls) -> ForceTorquePair:
        return cls(np.zeros(3), np.zeros(3))

    def __add__(self, other: ForceTorquePair) -> ForceTorquePair:
        if not isinstance(other, ForceTorquePair):
            return NotImplemented
        return ForceTorquePair(self.force + other.force, self.torque + other.torque)

    def __iter__(self):
        # Allows ``force, torque = pair``
        yield self.force
        yield self.torque

    def __repr__(self) -> str:
        return f"ForceTorquePair(force={self.force}, torque={self.torque})"


class ForceModel(Protocol):
    """Protocol for body-frame force models."""

    def evaluate(
        self,
        vehicle: Vehicle,
        environment: Environment,
        ctrl_input: NDArray[np.float64],
    ) -> ForceTorquePair:
        ...


class Gravity:
    """
    Uniform gravitational force expressed in the body frame.

    Uses the NED convention (gravity along +z down), rotated into the body
    frame with the roll and pitch angles:

        F = m g [-sin θ, sin φ cos θ, cos φ cos θ]

    Parameters
    ----------
    g : float
        Gravitational acceleration magnitude [m/s²]. Default 9.80665.
    """

    def __init__(self, g: float = STANDARD_GRAVITY) -> None:
        if g < 0:
            raise ValueError(f"Gravity magnitude must be non-negative, got {g}")
        self.g = float(g)

    def evaluate(
        self,
        vehicle: Vehicle,
        environment: Environment | None = None,
        ctrl_input: NDArray[np.float64] | None = None,
    ) -> ForceTorquePair:
        phi, theta, _ = vehicle.state.vec_euler
        weight = vehicle.mass * self.g
        force = weight * np.array([
            -np.sin(theta),
            np.sin(phi) * np.cos(theta),
            np.cos(phi) * np.cos(theta),
        ])
        return ForceTorquePair(force, np.zeros(3))
