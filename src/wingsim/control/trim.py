"""
Trim calculation.

Finds the state and control inputs that result in steady, wings-level flight
(zero linear and angular body accelerations) at a requested airspeed and
flight path angle.
"""
from __future__ import annotations

import warnings
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy.optimize import least_squares

from wingsim.config import SimulationOptions
from wingsim.core.supervisor import Supervisor
from wingsim.dynamics.state import VEL_ANGULAR, VEL_LINEAR, VehicleState

# Unknowns: alpha, beta, aileron, elevator, throttle, rudder
LOWER_BOUNDS = np.array([-0.5, -0.5, -1.0, -1.0, 0.0, -1.0])
UPPER_BOUNDS = np.array([0.5, 0.5, 1.0, 1.0, 1.0, 1.0])
INITIAL_GUESS = np.array([0.05, 0.0, 0.0, 0.0, 0.5, 0.0])
RESIDUAL_TOLERANCE = 1e-6  # [m/s², rad/s²]


@dataclass
class TrimResult:
    state: VehicleState
    controls: NDArray[np.float64]
    residual: float
    success: bool
    message: str


class Trimmer:
    """
    Trim solver for straight flight.

    Parameters
    ----------
    sim_options : SimulationOptions
        Supplies the vehicle, environment, initial position/heading and the
        trim target (``sim_options.trim``)

    Examples
    --------
    >>> trimmer = Trimmer(opts)
    >>> trimmer.calc_trim()
    >>> state = trimmer.trim_state
    >>> u = trimmer.trim_controls
    """

    def __init__(self, sim_options: SimulationOptions) -> None:
        self.airspeed = float(sim_options.trim.airspeed)
        self.gamma = float(sim_options.trim.gamma)
        if self.airspeed <= 0:
            raise ValueError(f"Trim airspeed must be positive, got {self.airspeed}")

        self.vec_pos = np.array(sim_options.init.vec_pos, dtype=np.float64)
        self.psi = float(sim_options.init.vec_euler[2])
        self.supervisor = Supervisor(sim_options)
        self.result: TrimResult | None = None

    def _state_from(self, x: NDArray[np.float64]) -> VehicleState:
        alpha, beta = x[0], x[1]
        V = self.airspeed
        return VehicleState(
            vec_pos=self.vec_pos,
            vec_euler=[0.0, alpha + self.gamma, self.psi],
            vec_vel_linear_body=[
                V * np.cos(alpha) * np.cos(beta),
                V * np.sin(beta),
                V * np.sin(alpha) * np.cos(beta),
            ],
            vec_vel_angular_body=[0.0, 0.0, 0.0],
        )

    def _residual(self, x: NDArray[np.float64]) -> NDArray[np.float64]:
        y_dot = self.supervisor.compute_derivative(self._state_from(x), x[2:6])
        return np.concatenate([y_dot[VEL_LINEAR], y_dot[VEL_ANGULAR]])

    def calc_trim(self) -> TrimResult:
        """
        Solve for the trim point.

        Returns
        -------
        TrimResult
            Best point found. If the residual stays above tolerance a
            RuntimeWarning is issued and the best point is still returned.
        """
        print(f"[Trimmer] Trimming for V={self.airspeed:.2f}m/s, gamma={np.degrees(self.gamma):.2f}deg")

        sol = least_squares(
            self._residual,
            INITIAL_GUESS,
            bounds=(LOWER_BOUNDS, UPPER_BOUNDS),
            xtol=1e-12,
            ftol=1e-12,
            gtol=1e-12,
        )
        residual = float(np.linalg.norm(sol.fun))
        success = bool(sol.success) and residual < RESIDUAL_TOLERANCE

        if not success:
            warnings.warn(
                f"Trim did not converge (residual {residual:.3e}): {sol.message}",
                RuntimeWarning,
                stacklevel=2,
            )

        self.result = TrimResult(
            state=self._state_from(sol.x),
            controls=np.array(sol.x[2:6], dtype=np.float64),
            residual=residual,
            success=success,
            message=str(sol.message),
        )
        print(
            f"[Trimmer] alpha={np.degrees(sol.x[0]):.3f}deg, "
            f"controls={np.array2string(self.result.controls, precision=4)}, "
            f"residual={residual:.2e}"
        )
        return self.result

    @property
    def trim_state(self) -> VehicleState:
        if self.result is None:
            raise RuntimeError("Trim not computed. Call calc_trim() first.")
        return self.result.state.copy()

    @property
    def trim_controls(self) -> NDArray[np.float64]:
        if self.result is None:
            raise RuntimeError("Trim not computed. Call calc_trim() first.")
        return self.result.controls.copy()

    def get_trim_state(self) -> VehicleState:
        return self.trim_state

    def get_trim_controls(self) -> NDArray[np.float64]:
        return self.trim_controls
