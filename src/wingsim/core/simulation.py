"""
Simulation driver.

``simulate`` runs one flight from a SimulationOptions object: optional trim
pre-roll, integration with the configured strategy, per-step recording and
optional CSV export.
"""
from __future__ import annotations

import time
import warnings
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from wingsim.config import SimulationOptions
from wingsim.core.solver import (
    AdaptiveNonStiff,
    AdaptiveStiff,
    FixedStepExplicit,
    IntegrationStrategy,
    SolverType,
    check_solver_type,
)
from wingsim.core.supervisor import Supervisor
from wingsim.dynamics.state import VehicleState
from wingsim.logger import CSVLogger


@dataclass
class SimulationOutput:
    """
    Recorded trajectories of one run.

    Arrays are None when the matching record flag was off.
    """

    array_time_states: NDArray[np.float64] | None = None
    array_states: NDArray[np.float64] | None = None
    array_time_inputs: NDArray[np.float64] | None = None
    array_inputs: NDArray[np.float64] | None = None

    @classmethod
    def from_supervisor(cls, supervisor: Supervisor) -> SimulationOutput:
        out = cls()
        if supervisor.record_states:
            out.array_time_states = np.array(supervisor.array_time_states, dtype=np.float64)
            out.array_states = np.array(supervisor.array_states, dtype=np.float64).reshape(-1, 12)
        if supervisor.record_inputs:
            out.array_time_inputs = np.array(supervisor.array_time_inputs, dtype=np.float64)
            out.array_inputs = np.array(supervisor.array_inputs, dtype=np.float64).reshape(-1, 4)
        return out


class ProgressReporter:
    """Prints a status line every ``interval`` simulated seconds."""

    def __init__(self, interval: float, t0: float = 0.0) -> None:
        self.interval = float(interval)
        self.t0 = float(t0)
        self.next_report = self.t0 + self.interval
        self.t_last = self.t0
        self.wall_start = time.perf_counter()

    def update(self, t: float, state: VehicleState) -> None:
        self.t_last = float(t)
        if self.interval <= 0 or t + 1e-12 < self.next_report:
            return
        V = float(np.linalg.norm(state.vec_vel_linear_body))
        print(f"[Simulation] t={t:6.2f}s | altitude={state.altitude:8.2f}m, V={V:6.2f}m/s")
        while self.next_report <= t + 1e-12:
            self.next_report += self.interval

    def close(self) -> None:
        wall = time.perf_counter() - self.wall_start
        duration = self.t_last - self.t0
        speedup = duration / wall if wall > 0 else float("inf")
        print(
            f"[Simulation] Finished {duration:.2f}s simulated in {wall:.2f}s wall time "
            f"({speedup:.1f}x real time)"
        )


def _apply_trim(options: SimulationOptions) -> None:
    # Imported here: trim depends on the Supervisor, which this module also uses
    from wingsim.control.trim import Trimmer

    trimmer = Trimmer(options)
    trimmer.calc_trim()
    state = trimmer.trim_state

    options.init.vec_euler = np.array(options.init.vec_euler, dtype=np.float64)
    options.init.vec_euler[0:2] = state.vec_euler[0:2]
    options.init.vec_vel_linear_body = state.vec_vel_linear_body.copy()
    options.init.vec_vel_angular_body = state.vec_vel_angular_body.copy()
    options.controller.static_output = trimmer.trim_controls
    options.controller.schedule = None


def _make_plotters(options: SimulationOptions) -> list:
    viz = options.visualization
    if not (viz.draw_graphics or viz.draw_states or viz.draw_forces):
        return []

    from wingsim.visualization.plotting import AircraftPlotter, ForcePlotter, StatePlotter

    plotters = []
    if viz.draw_graphics:
        plotters.append(("state", AircraftPlotter()))
    if viz.draw_states:
        plotters.append(("state", StatePlotter()))
    if viz.draw_forces:
        plotters.append(("forces", ForcePlotter()))
    return plotters


def _make_strategy(solver_type: SolverType, options: SimulationOptions, **hooks) -> IntegrationStrategy:
    so = options.solver
    if solver_type == SolverType.FIXED_STEP:
        return FixedStepExplicit(so.dt, so.t_eps, **hooks)
    if solver_type == SolverType.ADAPTIVE_NONSTIFF:
        return AdaptiveNonStiff(rtol=so.rtol, atol=so.atol, max_step=so.max_step)
    return AdaptiveStiff(method=so.stiff_method, rtol=so.rtol, atol=so.atol, max_step=so.max_step)


def simulate(options: SimulationOptions) -> SimulationOutput:
    """
    Run one simulation.

    Parameters
    ----------
    options : SimulationOptions
        Run configuration. Not modified; trim results are written into a copy.

    Returns
    -------
    SimulationOutput
        Recorded state and input trajectories

    Raises
    ------
    UnsupportedSolverError
        For an unknown solver_type, before any trim or integration work
    IntegrationError
        If an adaptive integrator fails to take a step

    Notes
    -----
    Fixed-step runs record one state and one input frame before each step,
    plus the terminal state without an input. Adaptive runs record every
    accepted step; their inputs come from the last derivative evaluation.
    """
    solver_type = check_solver_type(options.solver.solver_type)
    if options.solver.t_f < options.solver.t_0:
        raise ValueError(
            f"t_f must not be before t_0, got t_0={options.solver.t_0}, t_f={options.solver.t_f}"
        )
    options = options.copy()

    with warnings.catch_warnings():
        warnings.simplefilter("always")

        if options.controller.type == 1:
            _apply_trim(options)

        supervisor = Supervisor(options)
        supervisor.initialize_sim_state(options)
        supervisor.initialize_controller(options)

        so = options.solver
        progress = ProgressReporter(options.output.progress_interval, so.t_0)
        plotters = _make_plotters(options)

        def refresh(t: float, y: NDArray[np.float64]) -> None:
            state = VehicleState.deserialize(y)
            progress.update(t, state)
            for kind, plotter in plotters:
                if kind == "forces":
                    plotter.update(t, supervisor.last_forces)
                else:
                    plotter.update(t, state)

        y0 = supervisor.vehicle.state.serialize()
        print(
            f"[Simulation] Starting {solver_type.name.lower()} simulation: "
            f"t={so.t_0}s to t={so.t_f}s"
        )

        if solver_type == SolverType.FIXED_STEP:
            def output_fn(t, y):
                state = VehicleState.deserialize(y)
                supervisor.record(t, y, supervisor.control_input(t, state))

            def step_hook(t, y):
                refresh(t + so.dt, y)

            strategy = _make_strategy(
                solver_type,
                options,
                step_hook=step_hook,
                on_finish=supervisor.record_terminal,
            )
            strategy.integrate(supervisor.derivative, output_fn, so.t_0, so.t_f, y0)
        else:
            if options.record_inputs:
                warnings.warn(
                    "Recorded inputs of an adaptive run are taken from the last "
                    "derivative evaluation of each step and may not match the "
                    "accepted step time exactly",
                    RuntimeWarning,
                    stacklevel=2,
                )

            def output_fn(t, y):
                supervisor.record(t, y)
                refresh(t, y)

            strategy = _make_strategy(solver_type, options)
            strategy.integrate(supervisor.ode_eval, output_fn, so.t_0, so.t_f, y0)

        progress.close()
        print(f"[Simulation] {strategy.num_steps} steps taken")

        output = SimulationOutput.from_supervisor(supervisor)

        if options.output.csv_path:
            with CSVLogger(options.output.csv_path) as logger:
                logger.write_output(output)
            print(f"[Simulation] Trajectory written to: {options.output.csv_path}")

    return output
