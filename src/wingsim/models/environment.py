"""
Atmosphere and wind model.

International Standard Atmosphere density up to 20 km with a constant
wind field expressed in the NED frame.
"""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

# ISA sea-level constants
RHO_SL = 1.225           # [kg/m³]
T_SL = 288.15            # [K]
LAPSE_RATE = 0.0065      # [K/m]
R_AIR = 287.05287        # [J/(kg·K)]
G0 = 9.80665             # [m/s²]
H_TROPOPAUSE = 11000.0   # [m]


def isa_density(altitude: float) -> float:
    """
    ISA air density at geometric altitude [kg/m³].

    Troposphere uses the lapse-rate law, the lower stratosphere is
    isothermal. Negative altitudes are clamped to sea level.
    """
    h = max(float(altitude), 0.0)
    exponent = G0 / (R_AIR * LAPSE_RATE) - 1.0
    if h <= H_TROPOPAUSE:
        return RHO_SL * (1.0 - LAPSE_RATE * h / T_SL) ** exponent

    rho_tp = RHO_SL * (1.0 - LAPSE_RATE * H_TROPOPAUSE / T_SL) ** exponent
    t_tp = T_SL - LAPSE_RATE * H_TROPOPAUSE
    return rho_tp * np.exp(-G0 * (h - H_TROPOPAUSE) / (R_AIR * t_tp))


class Environment:
    """
    Atmosphere and wind seen by the vehicle.

    Parameters
    ----------
    wind_ned : array-like
        Constant wind velocity in NED frame [m/s] (3,)
    rho : float | None
        Fixed air density [kg/m³]. If None, ISA density at the vehicle
        altitude is used.
    """

    def __init__(self, wind_ned=(0.0, 0.0, 0.0), rho: float | None = None) -> None:
        self.wind_ned: NDArray[np.float64] = np.array(wind_ned, dtype=np.float64).reshape(3)
        if rho is not None and rho <= 0:
            raise ValueError(f"Air density must be positive, got {rho}")
        self._rho = None if rho is None else float(rho)

    def rho(self, altitude: float = 0.0) -> float:
        """Air density at the given altitude [kg/m³]."""
        if self._rho is not None:
            return self._rho
        return isa_density(altitude)

    def get_rho(self, altitude: float = 0.0) -> float:
        return self.rho(altitude)
