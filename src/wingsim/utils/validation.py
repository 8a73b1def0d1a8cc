"""
Validation utilities for physical parameters and control inputs.

Provides functions to validate inputs for flight simulations,
ensuring physical consistency and numerical stability.
"""
from __future__ import annotations

import warnings

import numpy as np
from numpy.typing import NDArray


def validate_positive(value: float, name: str, strict: bool = True) -> None:
    """
    Validate that a scalar value is positive.

    Parameters
    ----------
    value : float
        Value to validate
    name : str
        Parameter name for error messages
    strict : bool
        If True, raise ValueError. If False, issue warning.

    Raises
    ------
    ValueError
        If strict=True and value <= 0
    """
    if value <= 0:
        msg = f"{name} must be positive, got {value}"
        if strict:
            raise ValueError(msg)
        warnings.warn(msg, RuntimeWarning, stacklevel=2)


def validate_non_negative(value: float, name: str) -> None:
    """Validate that a value is non-negative."""
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_inertia_tensor(inertia: NDArray[np.float64]) -> None:
    """
    Validate inertia tensor is 3x3 and positive definite.

    Raises
    ------
    ValueError
        If shape is wrong or matrix is not positive definite
    """
    if inertia.shape != (3, 3):
        raise ValueError(f"Inertia tensor must be 3x3, got shape {inertia.shape}")

    if not np.allclose(inertia, inertia.T):
        warnings.warn(
            "Inertia tensor is not symmetric.",
            RuntimeWarning,
            stacklevel=2,
        )

    eigenvalues = np.linalg.eigvals(inertia)
    if np.any(np.real(eigenvalues) <= 0):
        raise ValueError(
            f"Inertia tensor must be positive definite. "
            f"Got eigenvalues: {eigenvalues}"
        )


def validate_timestep(dt: float, max_dt: float = 1.0) -> None:
    """
    Validate timestep is positive and reasonable.

    Parameters
    ----------
    dt : float
        Time step [s]
    max_dt : float
        Maximum reasonable timestep [s]

    Raises
    ------
    ValueError
        If timestep is invalid
    """
    if dt <= 0:
        raise ValueError(f"Timestep must be positive, got {dt}")
    if dt > max_dt:
        warnings.warn(
            f"Large timestep {dt}s may cause instability. "
            f"Consider using dt < {max_dt}s.",
            RuntimeWarning,
            stacklevel=2,
        )


def validate_control_input(u: NDArray[np.float64], size: int = 4) -> None:
    """
    Validate a control vector [aileron, elevator, throttle, rudder].

    Raises
    ------
    ValueError
        On wrong shape or non-finite entries
    """
    if u.shape != (size,):
        raise ValueError(f"Control input must have shape ({size},), got {u.shape}")
    if not np.all(np.isfinite(u)):
        raise ValueError(f"Control input must be finite, got {u}")
