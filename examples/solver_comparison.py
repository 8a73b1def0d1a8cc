"""
Compare the three integration strategies on the same open-loop flight.
"""
import sys
import time
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wingsim import SolverType, simulate, simulation_options


def main():
    results = {}
    for solver_type in SolverType:
        opts = simulation_options()
        opts.solver.solver_type = int(solver_type)
        opts.solver.t_f = 10.0
        opts.solver.dt = 0.005
        opts.record_inputs = False
        opts.output.progress_interval = 0.0

        start = time.time()
        out = simulate(opts)
        results[solver_type.name] = (out, time.time() - start)

    reference = results[SolverType.ADAPTIVE_NONSTIFF.name][0].array_states[-1]
    print(f"\n{'solver':<20} {'frames':>8} {'wall [s]':>10} {'|dy| vs RK45':>14}")
    for name, (out, wall) in results.items():
        err = np.linalg.norm(out.array_states[-1] - reference)
        print(f"{name:<20} {len(out.array_states):>8} {wall:>10.3f} {err:>14.3e}")


if __name__ == "__main__":
    main()
