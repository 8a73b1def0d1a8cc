"""
wingsim physics models.

Models encapsulate the physics and mathematics of one force contribution or
of the surrounding atmosphere:
- aerodynamics: lift/drag/side force and moments with stall blending
- propulsion: propeller thrust from throttle and airspeed
- environment: standard-atmosphere density and constant wind

Forces are combined by the Supervisor; models never touch the vehicle state.
"""

from .aerodynamics import AerodynamicCoefficients, AerodynamicsModelType, create_aerodynamics
from .environment import Environment
from .propulsion import Propulsion, PropulsionParameters

__all__ = [
    "AerodynamicCoefficients",
    "AerodynamicsModelType",
    "create_aerodynamics",
    "Environment",
    "Propulsion",
    "PropulsionParameters",
]
