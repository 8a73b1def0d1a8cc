"""
Supervisor: builds the simulation components and composes the state derivative.

The derivative is a pure function of (t, state). Recording happens only in
``record``, which the integration strategies call once per accepted step.
"""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from wingsim.config import SimulationOptions
from wingsim.control.controller import Controller
from wingsim.dynamics.forces import ForceTorquePair, Gravity
from wingsim.dynamics.kinematics import Kinematics
from wingsim.dynamics.state import VehicleState
from wingsim.dynamics.vehicle import Vehicle
from wingsim.models.aerodynamics import create_aerodynamics
from wingsim.models.environment import Environment
from wingsim.models.propulsion import Propulsion


class Supervisor:
    """
    Owner of vehicle, environment, force models, controller and recordings.

    Parameters
    ----------
    sim_options : SimulationOptions
        Run configuration. Read only.

    Attributes
    ----------
    vehicle : Vehicle
        Vehicle holding the current accepted state
    last_forces : dict[str, ForceTorquePair]
        Force breakdown at the most recent accepted step (for plotting)
    array_time_states, array_states, array_time_inputs, array_inputs : list
        Recorded trajectories, in simulation order
    """

    def __init__(self, sim_options: SimulationOptions) -> None:
        veh = sim_options.vehicle
        self.vehicle = Vehicle(veh.mass, veh.inertia, veh.aerodynamics, veh.propulsion)
        self.environment = Environment(
            wind_ned=sim_options.environment.wind_ned,
            rho=sim_options.environment.rho,
        )
        self.aerodynamics = create_aerodynamics(veh.aerodynamics.model_type)
        self.propulsion = Propulsion()
        self.gravity = Gravity()
        self.kinematics = Kinematics(veh.mass, veh.inertia)
        self.controller: Controller | None = None

        self.record_states = bool(sim_options.record_states)
        self.record_inputs = bool(sim_options.record_inputs)
        self.array_time_states: list[float] = []
        self.array_states: list[NDArray[np.float64]] = []
        self.array_time_inputs: list[float] = []
        self.array_inputs: list[NDArray[np.float64]] = []

        self.last_forces: dict[str, ForceTorquePair] = {}
        self._last_input: NDArray[np.float64] | None = None

    # --- Initialization ---

    def initialize_sim_state(self, sim_options: SimulationOptions) -> None:
        init = sim_options.init
        self.vehicle.state = VehicleState(
            vec_pos=init.vec_pos,
            vec_euler=init.vec_euler,
            vec_vel_linear_body=init.vec_vel_linear_body,
            vec_vel_angular_body=init.vec_vel_angular_body,
        )

    def initialize_controller(self, sim_options: SimulationOptions) -> None:
        ctrl = sim_options.controller
        self.controller = Controller(ctrl.static_output, ctrl.schedule)

    # --- Derivative composition ---

    def compute_forces(self, vehicle: Vehicle, ctrl_input: NDArray[np.float64]) -> dict[str, ForceTorquePair]:
        """Force/torque of each contribution for one vehicle state."""
        return {
            "gravity": self.gravity.evaluate(vehicle, self.environment, ctrl_input),
            "propulsion": self.propulsion.evaluate(vehicle, self.environment, ctrl_input),
            "aerodynamics": self.aerodynamics.evaluate(vehicle, self.environment, ctrl_input),
        }

    def compute_derivative(self, state: VehicleState, ctrl_input: NDArray[np.float64]) -> NDArray[np.float64]:
        """d(state)/dt for a given state and control, without side effects."""
        vehicle = self.vehicle.with_state(state)
        breakdown = self.compute_forces(vehicle, ctrl_input)
        total = ForceTorquePair.zero()
        for pair in breakdown.values():
            total = total + pair
        return self.kinematics.state_derivative(state, total)

    def control_input(self, t: float, state: VehicleState) -> NDArray[np.float64]:
        if self.controller is None:
            raise RuntimeError("Controller not initialized. Call initialize_controller() first.")
        return self.controller.output(t, state)

    def derivative(self, t: float, y: NDArray[np.float64]) -> NDArray[np.float64]:
        """Pure state derivative f(t, y) of the serialized state."""
        state = VehicleState.deserialize(y)
        return self.compute_derivative(state, self.control_input(t, state))

    def ode_eval(self, t: float, y: NDArray[np.float64]) -> NDArray[np.float64]:
        """
        Derivative callback for adaptive solvers.

        Also keeps the control of this evaluation as the side channel read by
        ``record``. The cached value never feeds back into the derivative.
        """
        state = VehicleState.deserialize(y)
        ctrl_input = self.control_input(t, state)
        self._last_input = ctrl_input
        return self.compute_derivative(state, ctrl_input)

    # --- Recording ---

    def record(self, t: float, y: NDArray[np.float64], ctrl_input: NDArray[np.float64] | None = None) -> None:
        """
        Accept (t, y) as the current state and append it to the recordings.

        Parameters
        ----------
        ctrl_input : NDArray[np.float64] | None
            Control applied from this frame. If None, the last control seen
            by ``ode_eval`` is recorded (adaptive solvers), or nothing when no
            evaluation happened yet.
        """
        state = VehicleState.deserialize(y)
        self.vehicle.state = state

        if ctrl_input is None:
            ctrl_input = self._last_input
        snapshot = ctrl_input if ctrl_input is not None else self.control_input(t, state)
        self.last_forces = self.compute_forces(self.vehicle, snapshot)

        if self.record_states:
            self.array_time_states.append(float(t))
            self.array_states.append(state.serialize())
        if self.record_inputs and ctrl_input is not None:
            self.array_time_inputs.append(float(t))
            self.array_inputs.append(np.array(ctrl_input, dtype=np.float64))

    def record_terminal(self, t: float, y: NDArray[np.float64]) -> None:
        """Record the final state of a fixed-step run (no input frame)."""
        state = VehicleState.deserialize(y)
        self.vehicle.state = state
        if self.record_states:
            self.array_time_states.append(float(t))
            self.array_states.append(state.serialize())
