"""
Trimmed level flight followed by an aileron doublet.

Demonstrates:
- Trim pre-roll (controller type 1)
- Fixed-step integration
- CSV export and trajectory plot
"""
import sys
import time
from pathlib import Path

import numpy as np

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wingsim import Trimmer, simulate, simulation_options
from wingsim.visualization import plot_trajectory


def main():
    """Run trimmed flight simulation."""
    print("=" * 60)
    print("Trimmed Level Flight")
    print("=" * 60)

    opts = simulation_options()
    opts.trim.airspeed = 25.0
    opts.solver.t_f = 20.0
    opts.solver.dt = 0.01
    opts.output.csv_path = "output/trimmed_flight.csv"

    # Trim once up front so the doublet can be built around the trim controls
    trimmer = Trimmer(opts)
    trimmer.calc_trim()
    u_trim = trimmer.trim_controls
    state = trimmer.trim_state

    opts.init.vec_euler = state.vec_euler
    opts.init.vec_vel_linear_body = state.vec_vel_linear_body
    opts.controller.static_output = u_trim
    doublet = u_trim + np.array([0.2, 0.0, 0.0, 0.0])
    opts.controller.schedule = [
        (5.0, doublet),
        (6.0, u_trim - np.array([0.2, 0.0, 0.0, 0.0])),
        (7.0, u_trim),
    ]

    print("\nRunning simulation...")
    start = time.time()
    out = simulate(opts)
    elapsed = time.time() - start

    final = out.array_states[-1]
    print("\nResults:")
    print(f"  Wall clock time: {elapsed:.3f} s")
    print(f"  Final altitude: {-final[2]:.1f} m")
    print(f"  Final bank angle: {np.degrees(final[3]):.1f} deg")

    plot_trajectory(out, save_path="output/trimmed_flight.png", show=False)


if __name__ == "__main__":
    main()
