from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401  (registers 3D projection)

from wingsim.dynamics.kinematics import rotation_body_to_ned
from wingsim.dynamics.state import VehicleState

if TYPE_CHECKING:
    from wingsim.core.simulation import SimulationOutput
    from wingsim.dynamics.forces import ForceTorquePair

STATE_LABELS = [
    ("Position [m]", ["n", "e", "d"]),
    ("Euler angles [deg]", ["phi", "theta", "psi"]),
    ("Body velocity [m/s]", ["u", "v", "w"]),
    ("Body rates [deg/s]", ["p", "q", "r"]),
]
# Groups shown in degrees
_DEGREE_GROUPS = {1, 3}


def _refresh(fig: Figure) -> None:
    fig.canvas.draw_idle()
    if plt.isinteractive():
        plt.pause(1e-3)


def _state_groups(y: np.ndarray) -> list[np.ndarray]:
    groups = [y[..., 3 * k:3 * k + 3] for k in range(4)]
    return [np.degrees(g) if k in _DEGREE_GROUPS else g for k, g in enumerate(groups)]


class StatePlotter:
    """
    Live time-history of the 12 states, updated once per frame.

    Examples
    --------
    >>> plotter = StatePlotter()
    >>> plotter.update(t, vehicle.state)
    """

    def __init__(self) -> None:
        self.fig, axes = plt.subplots(4, 1, figsize=(9, 9), sharex=True)
        self.axes = list(axes)
        self._t: list[float] = []
        self._y: list[np.ndarray] = []
        self.lines = []
        for ax, (title, names) in zip(self.axes, STATE_LABELS):
            lines = [ax.plot([], [], label=n)[0] for n in names]
            ax.set_ylabel(title)
            ax.grid(True, alpha=0.3)
            ax.legend(loc="upper right", fontsize=8)
            self.lines.append(lines)
        self.axes[-1].set_xlabel("t [s]")
        self.fig.tight_layout()

    def update(self, t: float, state: VehicleState) -> None:
        self._t.append(float(t))
        self._y.append(state.serialize())
        data = _state_groups(np.array(self._y))
        for ax, lines, group in zip(self.axes, self.lines, data):
            for k, line in enumerate(lines):
                line.set_data(self._t, group[:, k])
            ax.relim()
            ax.autoscale_view()
        _refresh(self.fig)


class ForcePlotter:
    """Live time-history of each force contribution (body frame)."""

    def __init__(self) -> None:
        self.fig, axes = plt.subplots(3, 2, figsize=(11, 8), sharex=True)
        self.axes = axes
        self._t: list[float] = []
        self._data: dict[str, list[np.ndarray]] = {}
        self._lines: dict[str, list] = {}
        for i, comp in enumerate("xyz"):
            axes[i, 0].set_ylabel(f"F{comp} [N]")
            axes[i, 1].set_ylabel(f"M{comp} [N·m]")
            for ax in axes[i]:
                ax.grid(True, alpha=0.3)
        axes[-1, 0].set_xlabel("t [s]")
        axes[-1, 1].set_xlabel("t [s]")
        self.fig.tight_layout()

    def update(self, t: float, forces: dict[str, ForceTorquePair]) -> None:
        self._t.append(float(t))
        for name, pair in forces.items():
            if name not in self._data:
                self._data[name] = []
                self._lines[name] = [
                    self.axes[i, j].plot([], [], label=name)[0]
                    for j in range(2) for i in range(3)
                ]
                self.axes[0, 0].legend(loc="upper right", fontsize=8)
            self._data[name].append(np.concatenate([pair.force, pair.torque]))

        for name, rows in self._data.items():
            # A contribution first seen late is drawn from its first frame on
            arr = np.array(rows)
            t = self._t[-len(rows):]
            for k, line in enumerate(self._lines[name]):
                line.set_data(t, arr[:, k])
        for ax in self.axes.flat:
            ax.relim()
            ax.autoscale_view()
        _refresh(self.fig)


class AircraftPlotter:
    """
    3D view of the flight path with the current body axes.

    Drawn in a north-east-up view so altitude points up on screen.
    """

    def __init__(self, axis_length: float = 5.0) -> None:
        self.axis_length = float(axis_length)
        self.fig = plt.figure(figsize=(8, 7))
        self.ax = self.fig.add_subplot(111, projection="3d")
        self.ax.set_xlabel("North [m]")
        self.ax.set_ylabel("East [m]")
        self.ax.set_zlabel("Altitude [m]")
        self._path: list[np.ndarray] = []
        (self.path_line,) = self.ax.plot([], [], [], "k-", lw=1)
        self.axis_lines = [
            self.ax.plot([], [], [], color=c, lw=2)[0] for c in ("r", "g", "b")
        ]

    def update(self, t: float, state: VehicleState) -> None:
        pos = state.vec_pos * np.array([1.0, 1.0, -1.0])
        self._path.append(pos)
        path = np.array(self._path)
        self.path_line.set_data(path[:, 0], path[:, 1])
        self.path_line.set_3d_properties(path[:, 2])

        dcm = rotation_body_to_ned(state.vec_euler)
        for k, line in enumerate(self.axis_lines):
            tip = pos + self.axis_length * dcm[:, k] * np.array([1.0, 1.0, -1.0])
            line.set_data([pos[0], tip[0]], [pos[1], tip[1]])
            line.set_3d_properties([pos[2], tip[2]])

        span = max(np.ptp(path, axis=0).max(), 2 * self.axis_length)
        center = path.mean(axis=0)
        self.ax.set_xlim(center[0] - span, center[0] + span)
        self.ax.set_ylim(center[1] - span, center[1] + span)
        self.ax.set_zlim(center[2] - span, center[2] + span)
        self.ax.set_title(f"t = {t:.2f} s")
        _refresh(self.fig)


def plot_trajectory(
    output: SimulationOutput,
    save_path: str | None = None,
    show: bool = True,
) -> Figure:
    """
    Plot recorded states and (if present) control inputs of a finished run.

    Parameters
    ----------
    output : SimulationOutput
        Result of ``simulate()`` with states recorded
    save_path : str | None
        If given, save the figure to this path (png/svg).
    show : bool
        Whether to call plt.show().
    """
    if output.array_states is None:
        raise ValueError("No recorded states to plot. Enable record_states.")

    has_inputs = output.array_inputs is not None and len(output.array_inputs) > 0
    nrows = 5 if has_inputs else 4
    fig, axes = plt.subplots(nrows, 1, figsize=(10, 2.2 * nrows), sharex=True)

    t = output.array_time_states
    for ax, (title, names), group in zip(axes, STATE_LABELS, _state_groups(output.array_states)):
        for k, name in enumerate(names):
            ax.plot(t, group[:, k], label=name)
        ax.set_ylabel(title)
        ax.grid(True, alpha=0.3)
        ax.legend(loc="upper right", fontsize=8)

    if has_inputs:
        ax = axes[-1]
        for k, name in enumerate(["aileron", "elevator", "throttle", "rudder"]):
            ax.step(output.array_time_inputs, output.array_inputs[:, k], where="post", label=name)
        ax.set_ylabel("Inputs [-]")
        ax.grid(True, alpha=0.3)
        ax.legend(loc="upper right", fontsize=8)

    axes[-1].set_xlabel("t [s]")
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150)
    if show:
        plt.show()
    return fig
