"""
Aircraft state vector with Euler-angle attitude.

All physical quantities use SI units:
- Position: meters [m], NED frame (z positive down)
- Attitude: radians [rad], roll/pitch/yaw (3-2-1 sequence)
- Velocity: meters per second [m/s], body frame
- Angular velocity: radians per second [rad/s], body frame
"""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

STATE_SIZE = 12

# Slices into the serialized state vector
POS = slice(0, 3)
EULER = slice(3, 6)
VEL_LINEAR = slice(6, 9)
VEL_ANGULAR = slice(9, 12)


def _as_vec3(value, name: str) -> NDArray[np.float64]:
    arr = np.array(value, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"{name} must have shape (3,), got {arr.shape}")
    return arr


class VehicleState:
    """
    12-element rigid-body state of a fixed-wing aircraft.

    Parameters
    ----------
    vec_pos : array-like
        Position in NED frame [m] (3,)
    vec_euler : array-like
        Roll, pitch, yaw [rad] (3,)
    vec_vel_linear_body : array-like
        Body-frame velocity u, v, w [m/s] (3,)
    vec_vel_angular_body : array-like
        Body-frame angular rates p, q, r [rad/s] (3,)

    Notes
    -----
    The serialized layout is ``[pos(3), euler(3), vel_linear(3), vel_angular(3)]``.
    ``VehicleState.deserialize(s.serialize())`` reproduces ``s`` bit for bit.

    Examples
    --------
    >>> s = VehicleState(vec_pos=[0, 0, -100], vec_vel_linear_body=[15, 0, 0])
    >>> y = s.serialize()
    >>> VehicleState.deserialize(y) == s
    True
    """

    def __init__(
        self,
        vec_pos=(0.0, 0.0, 0.0),
        vec_euler=(0.0, 0.0, 0.0),
        vec_vel_linear_body=(0.0, 0.0, 0.0),
        vec_vel_angular_body=(0.0, 0.0, 0.0),
    ) -> None:
        self.vec_pos = _as_vec3(vec_pos, "vec_pos")
        self.vec_euler = _as_vec3(vec_euler, "vec_euler")
        self.vec_vel_linear_body = _as_vec3(vec_vel_linear_body, "vec_vel_linear_body")
        self.vec_vel_angular_body = _as_vec3(vec_vel_angular_body, "vec_vel_angular_body")

    # --- Serialization ---

    def serialize(self) -> NDArray[np.float64]:
        """Return the flat (12,) state array."""
        return np.concatenate([
            self.vec_pos,
            self.vec_euler,
            self.vec_vel_linear_body,
            self.vec_vel_angular_body,
        ])

    @classmethod
    def deserialize(cls, y: NDArray[np.float64]) -> VehicleState:
        """Build a state from a flat (12,) array."""
        y = np.asarray(y, dtype=np.float64)
        if y.shape != (STATE_SIZE,):
            raise ValueError(f"Serialized state must have shape ({STATE_SIZE},), got {y.shape}")
        return cls(y[POS], y[EULER], y[VEL_LINEAR], y[VEL_ANGULAR])

    def copy(self) -> VehicleState:
        return VehicleState.deserialize(self.serialize())

    # --- Accessors ---

    def get_vec_pos(self) -> NDArray[np.float64]:
        return self.vec_pos.copy()

    def get_vec_euler(self) -> NDArray[np.float64]:
        return self.vec_euler.copy()

    def get_vec_vel_linear_body(self) -> NDArray[np.float64]:
        return self.vec_vel_linear_body.copy()

    def get_vec_vel_angular_body(self) -> NDArray[np.float64]:
        return self.vec_vel_angular_body.copy()

    @property
    def altitude(self) -> float:
        """Altitude above the reference plane [m] (positive up)."""
        return float(-self.vec_pos[2])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VehicleState):
            return NotImplemented
        return bool(np.array_equal(self.serialize(), other.serialize()))

    def __repr__(self) -> str:
        return (
            f"VehicleState(pos={self.vec_pos}, euler={self.vec_euler}, "
            f"v={self.vec_vel_linear_body}, w={self.vec_vel_angular_body})"
        )
