"""
Aerodynamics models module.

Contains physical models for:
- Fixed-wing lift, drag, side force and moments (ClassicAerodynamics)
"""

from .fixed_wing import (
    AerodynamicCoefficients,
    AerodynamicsModel,
    AerodynamicsModelType,
    ClassicAerodynamics,
    create_aerodynamics,
    drag_coeff,
    lift_coeff,
    register_model,
    stall_blend,
)

__all__ = [
    "AerodynamicCoefficients",
    "AerodynamicsModel",
    "AerodynamicsModelType",
    "ClassicAerodynamics",
    "create_aerodynamics",
    "register_model",
    "stall_blend",
    "lift_coeff",
    "drag_coeff",
]
