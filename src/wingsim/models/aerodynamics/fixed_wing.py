"""
Fixed-wing aerodynamic force and torque models.

The classic model is linear in its stability and control derivatives, with
one nonlinearity: the lift curve blends the pre-stall linear lift with
post-stall flat-plate lift through a smooth sigmoid in angle of attack.

Models implemented:
- CLASSIC: linear-in-parameters derivatives with stall blending

Coefficients are given in the stability axes and rotated into the body
frame (x forward, y right, z down). Angular rates are nondimensionalized
with b/(2V) laterally and c/(2V) longitudinally.

References:
- Beard, R.W. and McLain, T.W.: "Small Unmanned Aircraft: Theory and
  Practice", Princeton University Press (2012), ch. 4
- Stevens, B.L. and Lewis, F.L.: "Aircraft Control and Simulation" (2003)
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from wingsim.dynamics.forces import ForceTorquePair

if TYPE_CHECKING:
    from wingsim.dynamics.vehicle import Vehicle
    from wingsim.models.environment import Environment

# exp() saturates beyond this argument; the blend is already 0 or 1 there
MAX_EXP_ARG = 700.0


class AerodynamicsModelType(Enum):
    """Available aerodynamic model variants."""

    CLASSIC = 1


@dataclass(frozen=True)
class AerodynamicCoefficients:
    """
    Vehicle-specific aerodynamic table.

    Geometry
    --------
    s : wing area [m²]
    b : wing span [m]
    c : mean aerodynamic chord [m]
    deltaa_max, deltae_max, deltar_max : maximum surface deflections [rad]
    alpha_stall : stall angle of attack α0 [rad]
    mcoeff : stall transition steepness M [-]
    oswald : Oswald efficiency factor e [-]

    Derivatives (dimensionless)
    ---------------------------
    Lift/drag in stability axes (``c_lift_*``, ``c_drag_*``), side force
    (``c_y_*``), roll (``c_l_*``), pitch (``c_m_*``) and yaw (``c_n_*``).
    Suffixes: ``0`` bias, ``a`` alpha, ``b`` beta, ``p/q/r`` body rates,
    ``deltaa/deltae/deltar`` control surfaces.

    Defaults describe an Aerosonde-class small UAV.
    """

    model_type: int = AerodynamicsModelType.CLASSIC.value

    # Geometry
    s: float = 0.55
    b: float = 2.90
    c: float = 0.19
    deltaa_max: float = 0.3491
    deltae_max: float = 0.3491
    deltar_max: float = 0.3491
    alpha_stall: float = 0.4712
    mcoeff: float = 50.0
    oswald: float = 0.9

    # Lift
    c_lift_0: float = 0.28
    c_lift_a: float = 3.45
    c_lift_q: float = 0.0
    c_lift_deltae: float = -0.36

    # Drag
    c_drag_p: float = 0.03
    c_drag_q: float = 0.0
    c_drag_deltae: float = 0.0

    # Side force
    c_y_0: float = 0.0
    c_y_b: float = -0.98
    c_y_p: float = 0.0
    c_y_r: float = 0.0
    c_y_deltaa: float = 0.0
    c_y_deltar: float = -0.17

    # Roll moment
    c_l_0: float = 0.0
    c_l_b: float = -0.12
    c_l_p: float = -0.26
    c_l_r: float = 0.14
    c_l_deltaa: float = 0.08
    c_l_deltar: float = 0.105

    # Pitch moment
    c_m_0: float = -0.02338
    c_m_a: float = -0.38
    c_m_q: float = -3.6
    c_m_deltae: float = -0.5

    # Yaw moment
    c_n_0: float = 0.0
    c_n_b: float = 0.25
    c_n_p: float = 0.022
    c_n_r: float = -0.35
    c_n_deltaa: float = 0.06
    c_n_deltar: float = -0.032

    def __post_init__(self):
        for name in ("s", "b", "c", "oswald"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

    @property
    def aspect_ratio(self) -> float:
        """Wing aspect ratio AR = b²/S [-]."""
        return self.b**2 / self.s

    @classmethod
    def from_dict(cls, data: dict) -> AerodynamicCoefficients:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown aerodynamic coefficients: {sorted(unknown)}")
        return cls(**data)


# =============================================================================
# Coefficient functions
# =============================================================================

def stall_blend(alpha: float, mcoeff: float, alpha_stall: float) -> float:
    """
    Blending weight between linear and flat-plate lift.

        σ(α) = [1 + e^{-M(α-α0)} + e^{M(α+α0)}] / [(1 + e^{-M(α-α0)}) (1 + e^{M(α+α0)})]

    σ → 0 well inside the stall angles and σ → 1 beyond them, smoothly on
    both sides of zero.

    Parameters
    ----------
    alpha : float
        Angle of attack [rad]
    mcoeff : float
        Transition steepness M [-]
    alpha_stall : float
        Stall angle α0 [rad]
    """
    e_neg = np.exp(min(-mcoeff * (alpha - alpha_stall), MAX_EXP_ARG))
    e_pos = np.exp(min(mcoeff * (alpha + alpha_stall), MAX_EXP_ARG))
    return float((1.0 + e_neg + e_pos) / (1.0 + e_neg) / (1.0 + e_pos))


def lift_coeff(coeffs: AerodynamicCoefficients, alpha: float) -> float:
    """Angle-of-attack lift coefficient in the stability frame [-]."""
    sigma = stall_blend(alpha, coeffs.mcoeff, coeffs.alpha_stall)
    linear = (1.0 - sigma) * (coeffs.c_lift_0 + coeffs.c_lift_a * alpha)
    flat_plate = sigma * (2.0 * np.sign(alpha) * np.sin(alpha)**2 * np.cos(alpha))
    return float(linear + flat_plate)


def drag_coeff(coeffs: AerodynamicCoefficients, alpha: float) -> float:
    """Angle-of-attack drag coefficient (parabolic polar) in the stability frame [-]."""
    c_lift_linear = coeffs.c_lift_0 + coeffs.c_lift_a * alpha
    return float(coeffs.c_drag_p + c_lift_linear**2 / (np.pi * coeffs.oswald * coeffs.aspect_ratio))


# =============================================================================
# Models
# =============================================================================

class AerodynamicsModel:
    """
    Base class for aerodynamic models.

    Subclasses implement ``evaluate`` and must not keep state between calls:
    adaptive integrators evaluate trial states that are later discarded.
    """

    model_type: AerodynamicsModelType

    def evaluate(
        self,
        vehicle: Vehicle,
        environment: Environment,
        ctrl_input: NDArray[np.float64],
    ) -> ForceTorquePair:
        """
        Compute body-frame aerodynamic force and torque.

        Parameters
        ----------
        vehicle : Vehicle
            Vehicle parameters and current state
        environment : Environment
            Atmosphere and wind
        ctrl_input : NDArray[np.float64]
            [aileron, elevator, throttle, rudder], normalized (4,)
        """
        raise NotImplementedError


class ClassicAerodynamics(AerodynamicsModel):
    """
    Classic aerodynamics model, linear in the parameters, with stall blending.

    Throttle is part of the control vector but does not enter this model.
    At zero airspeed the force and torque are exactly zero.
    """

    model_type = AerodynamicsModelType.CLASSIC

    def evaluate(
        self,
        vehicle: Vehicle,
        environment: Environment,
        ctrl_input: NDArray[np.float64],
    ) -> ForceTorquePair:
        k = vehicle.aerodynamics
        s, b, c = k.s, k.b, k.c

        # Physical deflections [rad]
        aileron = ctrl_input[0] * k.deltaa_max
        elevator = ctrl_input[1] * k.deltae_max
        rudder = ctrl_input[3] * k.deltar_max

        p, q, r = vehicle.state.vec_vel_angular_body

        rho = environment.rho(vehicle.state.altitude)
        airspeed, alpha, beta = vehicle.airdata(environment)

        if airspeed == 0:
            return ForceTorquePair.zero()

        c_lift_a = lift_coeff(k, alpha)
        c_drag_a = drag_coeff(k, alpha)

        # Stability axes -> body frame
        ca, sa = np.cos(alpha), np.sin(alpha)
        c_x_a = -c_drag_a * ca + c_lift_a * sa
        c_x_q = -k.c_drag_q * ca + k.c_lift_q * sa
        c_z_a = -c_drag_a * sa - c_lift_a * ca
        c_z_q = -k.c_drag_q * sa - k.c_lift_q * ca

        q_bar = 0.5 * rho * airspeed**2 * s

        # Nondimensional rates
        p_hat = b * p / (2.0 * airspeed)
        q_hat = c * q / (2.0 * airspeed)
        r_hat = b * r / (2.0 * airspeed)

        force = q_bar * np.array([
            c_x_a + c_x_q * q_hat
            - k.c_drag_deltae * ca * abs(elevator) + k.c_lift_deltae * sa * elevator,
            k.c_y_0 + k.c_y_b * beta + k.c_y_p * p_hat + k.c_y_r * r_hat
            + k.c_y_deltaa * aileron + k.c_y_deltar * rudder,
            c_z_a + c_z_q * q_hat
            - k.c_drag_deltae * sa * abs(elevator) - k.c_lift_deltae * ca * elevator,
        ])

        torque = q_bar * np.array([
            b * (k.c_l_0 + k.c_l_b * beta + k.c_l_p * p_hat + k.c_l_r * r_hat
                 + k.c_l_deltaa * aileron + k.c_l_deltar * rudder),
            c * (k.c_m_0 + k.c_m_a * alpha + k.c_m_q * q_hat + k.c_m_deltae * elevator),
            b * (k.c_n_0 + k.c_n_b * beta + k.c_n_p * p_hat + k.c_n_r * r_hat
                 + k.c_n_deltaa * aileron + k.c_n_deltar * rudder),
        ])

        return ForceTorquePair(force, torque)


_MODEL_REGISTRY: dict[AerodynamicsModelType, type[AerodynamicsModel]] = {
    AerodynamicsModelType.CLASSIC: ClassicAerodynamics,
}


def register_model(model_type: AerodynamicsModelType, cls: type[AerodynamicsModel]) -> None:
    """Register an additional model variant."""
    _MODEL_REGISTRY[model_type] = cls


def create_aerodynamics(model_type: int | AerodynamicsModelType = 1) -> AerodynamicsModel:
    """
    Factory function selecting an aerodynamic model variant.

    Parameters
    ----------
    model_type : int | AerodynamicsModelType
        Model identifier, e.g. ``1`` or ``AerodynamicsModelType.CLASSIC``

    Raises
    ------
    ValueError
        If the model type is unknown

    Examples
    --------
    >>> aero = create_aerodynamics(vehicle.aerodynamics.model_type)
    >>> force, torque = aero.evaluate(vehicle, environment, u)
    """
    try:
        model_type = AerodynamicsModelType(model_type)
    except ValueError:
        raise ValueError(f"unknown model type {model_type!r}") from None

    if model_type not in _MODEL_REGISTRY:
        raise ValueError(f"unknown model type {model_type!r}")
    return _MODEL_REGISTRY[model_type]()
