"""
Tests for the visualization module.

Covers:
- Per-frame plotters
- Post-run trajectory plot
- Error handling
"""
import matplotlib

matplotlib.use('Agg')  # Non-interactive backend for testing
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pytest  # noqa: E402

from wingsim.core.simulation import SimulationOutput, simulate  # noqa: E402
from wingsim.dynamics.forces import ForceTorquePair  # noqa: E402
from wingsim.dynamics.state import VehicleState  # noqa: E402
from wingsim.visualization import (  # noqa: E402
    AircraftPlotter,
    ForcePlotter,
    StatePlotter,
    plot_trajectory,
)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def states():
    return [
        VehicleState(
            vec_pos=[25.0 * k, 0.0, -100.0 - k],
            vec_euler=[0.0, 0.05 * k, 0.0],
            vec_vel_linear_body=[25.0, 0.0, 1.0],
        )
        for k in range(5)
    ]


def test_state_plotter_updates_lines(states):
    plotter = StatePlotter()
    for k, s in enumerate(states):
        plotter.update(0.1 * k, s)
    xdata, ydata = plotter.lines[0][0].get_data()
    assert len(xdata) == 5
    assert ydata[-1] == pytest.approx(100.0)
    # Pitch shown in degrees
    _, theta = plotter.lines[1][1].get_data()
    assert theta[-1] == pytest.approx(np.degrees(0.2))


def test_force_plotter_tracks_each_contribution():
    plotter = ForcePlotter()
    for k in range(3):
        plotter.update(0.1 * k, {
            "gravity": ForceTorquePair([0, 0, 132.0], np.zeros(3)),
            "aerodynamics": ForceTorquePair([-2.5, 0, -20.0 - k], [0, -0.3, 0]),
        })
    assert set(plotter._lines) == {"gravity", "aerodynamics"}
    _, fz = plotter._lines["aerodynamics"][2].get_data()
    np.testing.assert_allclose(fz, [-20.0, -21.0, -22.0])


def test_aircraft_plotter_draws_path(states):
    plotter = AircraftPlotter(axis_length=2.0)
    for k, s in enumerate(states):
        plotter.update(0.1 * k, s)
    x, y = plotter.path_line.get_data()
    assert len(x) == 5
    assert "t = 0.40" in plotter.ax.get_title()


def test_plot_trajectory_from_simulation(short_options, tmp_path):
    out = simulate(short_options)
    path = tmp_path / "trajectory.png"
    fig = plot_trajectory(out, save_path=str(path), show=False)
    assert path.exists()
    assert len(fig.axes) == 5


def test_plot_trajectory_without_inputs(short_options):
    short_options.record_inputs = False
    fig = plot_trajectory(simulate(short_options), show=False)
    assert len(fig.axes) == 4


def test_plot_trajectory_requires_states():
    with pytest.raises(ValueError, match="No recorded states"):
        plot_trajectory(SimulationOutput(), show=False)


def test_simulation_drives_plotters(short_options):
    short_options.visualization.draw_states = True
    short_options.visualization.draw_forces = True
    short_options.visualization.draw_graphics = True
    simulate(short_options)
    assert len(plt.get_fignums()) == 3
