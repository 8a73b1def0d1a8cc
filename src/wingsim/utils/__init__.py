"""Utility functions for wingsim simulations."""

from .io import (
    history_frame,
    load_simulation_config,
    load_simulation_history,
    save_simulation_config,
    save_simulation_history,
)
from .validation import (
    validate_control_input,
    validate_inertia_tensor,
    validate_non_negative,
    validate_positive,
    validate_timestep,
)

__all__ = [
    "history_frame",
    "save_simulation_history",
    "load_simulation_history",
    "load_simulation_config",
    "save_simulation_config",
    "validate_positive",
    "validate_non_negative",
    "validate_inertia_tensor",
    "validate_timestep",
    "validate_control_input",
]
