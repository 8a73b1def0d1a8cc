"""
Rigid-body equations of motion for the 12-state Euler-angle model.

Frames:
- NED inertial frame (x north, y east, z down)
- Body frame (x forward, y right, z down)

The attitude uses the aerospace 3-2-1 (yaw, pitch, roll) sequence.
"""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.transform import Rotation as ScR

from wingsim.dynamics.forces import ForceTorquePair
from wingsim.dynamics.state import EULER, POS, STATE_SIZE, VEL_ANGULAR, VEL_LINEAR, VehicleState
from wingsim.utils.validation import validate_inertia_tensor, validate_positive

# Pitch angles closer than this to ±90° are treated as gimbal lock
GIMBAL_EPSILON = 1e-9


def rotation_body_to_ned(vec_euler: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Direction cosine matrix from body to NED frame (3, 3).

    Parameters
    ----------
    vec_euler : NDArray[np.float64]
        Roll, pitch, yaw [rad] (3,)
    """
    phi, theta, psi = vec_euler
    return ScR.from_euler("ZYX", [psi, theta, phi]).as_matrix()


def euler_rates_matrix(phi: float, theta: float) -> NDArray[np.float64]:
    """
    Matrix mapping body rates (p, q, r) to Euler angle rates.

    Raises
    ------
    ValueError
        At gimbal lock (cos θ = 0)
    """
    c_theta = np.cos(theta)
    if abs(c_theta) < GIMBAL_EPSILON:
        raise ValueError(f"Euler kinematics singular at pitch {theta:.6f} rad")
    s_phi, c_phi = np.sin(phi), np.cos(phi)
    t_theta = np.tan(theta)
    return np.array([
        [1.0, s_phi * t_theta, c_phi * t_theta],
        [0.0, c_phi, -s_phi],
        [0.0, s_phi / c_theta, c_phi / c_theta],
    ])


class Kinematics:
    """
    Newton-Euler rigid-body dynamics.

    Parameters
    ----------
    mass : float
        Vehicle mass [kg]
    inertia : NDArray[np.float64]
        Body-frame inertia tensor [kg·m²] (3, 3)

    Notes
    -----
    State derivative:
        ṗ_NED = R_b→n v
        Θ̇     = E(φ, θ) ω
        v̇     = F/m − ω × v
        ω̇     = J⁻¹ (τ − ω × Jω)
    """

    def __init__(self, mass: float, inertia: NDArray[np.float64]) -> None:
        validate_positive(mass, "Mass")
        self.mass = float(mass)
        self.inertia = np.asarray(inertia, dtype=np.float64)
        validate_inertia_tensor(self.inertia)
        self.inertia_inv = np.linalg.inv(self.inertia)

    def state_derivative(self, state: VehicleState, total: ForceTorquePair) -> NDArray[np.float64]:
        """Return d(state)/dt as a flat (12,) array."""
        phi, theta, _ = state.vec_euler
        v = state.vec_vel_linear_body
        w = state.vec_vel_angular_body

        y_dot = np.zeros(STATE_SIZE)
        y_dot[POS] = rotation_body_to_ned(state.vec_euler) @ v
        y_dot[EULER] = euler_rates_matrix(phi, theta) @ w
        y_dot[VEL_LINEAR] = total.force / self.mass - np.cross(w, v)
        y_dot[VEL_ANGULAR] = self.inertia_inv @ (total.torque - np.cross(w, self.inertia @ w))
        return y_dot
