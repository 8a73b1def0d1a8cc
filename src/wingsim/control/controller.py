"""
Open-loop control input generator.
"""
from __future__ import annotations

import bisect

import numpy as np
from numpy.typing import NDArray

from wingsim.utils.validation import validate_control_input

CONTROL_SIZE = 4  # aileron, elevator, throttle, rudder


def _as_control(value) -> NDArray[np.float64]:
    arr = np.array(value, dtype=np.float64).reshape(-1)
    validate_control_input(arr, CONTROL_SIZE)
    return arr


class Controller:
    """
    Predefined control sequence.

    Parameters
    ----------
    static_output : array-like
        [aileron, elevator, throttle, rudder] used before the first schedule
        row, or always when no schedule is given (4,)
    schedule : list of (t_start, control) | None
        Piecewise-constant sequence. Each control is held from its start time
        until the next row (zero-order hold).

    Examples
    --------
    >>> ctrl = Controller([0, -0.3, 0.2, 0], schedule=[(5.0, [0.1, -0.3, 0.2, 0])])
    >>> ctrl.output(6.0)
    array([ 0.1, -0.3,  0.2,  0. ])
    """

    def __init__(self, static_output, schedule=None) -> None:
        self.static_output = _as_control(static_output)
        self._times: list[float] = []
        self._controls: list[NDArray[np.float64]] = []
        for t_start, u in sorted(schedule or [], key=lambda row: float(row[0])):
            self._times.append(float(t_start))
            self._controls.append(_as_control(u))

    def output(self, t: float, state=None) -> NDArray[np.float64]:
        """Control input at time t. Pure: the state is accepted but unused."""
        idx = bisect.bisect_right(self._times, t) - 1
        if idx < 0:
            return self.static_output.copy()
        return self._controls[idx].copy()
