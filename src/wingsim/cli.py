"""Command-line entry point: run one simulation from a JSON config."""
from __future__ import annotations

import argparse
import sys

from wingsim.config import simulation_options
from wingsim.core.simulation import simulate
from wingsim.core.solver import UnsupportedSolverError
from wingsim.utils.io import load_simulation_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wingsim",
        description="Run a 6-DOF fixed-wing flight simulation",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON file with simulation options (missing keys keep defaults)",
    )
    parser.add_argument(
        "--solver",
        type=int,
        default=None,
        help="Solver type: 0 fixed-step, 1 adaptive non-stiff, 2 adaptive stiff",
    )
    parser.add_argument(
        "--t-final",
        type=float,
        default=None,
        help="Final simulation time [s]",
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Write recorded trajectories to this CSV file",
    )
    parser.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Save a trajectory plot to this image file",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    opts = load_simulation_config(args.config) if args.config else simulation_options()
    if args.solver is not None:
        opts.solver.solver_type = args.solver
    if args.t_final is not None:
        opts.solver.t_f = args.t_final
    if args.csv is not None:
        opts.output.csv_path = args.csv

    try:
        output = simulate(opts)
    except UnsupportedSolverError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.plot:
        import matplotlib

        matplotlib.use("Agg")
        from wingsim.visualization.plotting import plot_trajectory

        plot_trajectory(output, save_path=args.plot, show=False)
        print(f"[Simulation] Plot saved to: {args.plot}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
