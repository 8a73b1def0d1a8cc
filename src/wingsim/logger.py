"""
CSV logging for recorded trajectories.

Buffers rows in memory and writes in batches to minimize I/O overhead.
Implements context manager protocol for safe resource handling.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

import numpy as np

if TYPE_CHECKING:
    from wingsim.core.simulation import SimulationOutput

FIELD_COLUMNS = {
    "pos": ["pos_n", "pos_e", "pos_d"],
    "euler": ["phi", "theta", "psi"],
    "vel": ["u", "v", "w"],
    "rates": ["p", "q", "r"],
    "inputs": ["aileron", "elevator", "throttle", "rudder"],
}
STATE_FIELDS = ["pos", "euler", "vel", "rates"]


class CSVLogger:
    """
    Buffered CSV writer for state and control trajectories.

    Parameters
    ----------
    filepath : str | Path
        Output CSV file path
    buffer_size : int
        Number of rows to buffer before writing.
    fields : list[str] | None
        Column groups to write. Default: all of
        "pos", "euler", "vel", "rates", "inputs".

    Notes
    -----
    Rows without a control input (e.g. the terminal frame of a fixed-step
    run) leave the input columns empty.

    Examples
    --------
    >>> with CSVLogger("run.csv") as logger:
    ...     logger.write_output(sim_output)

    >>> logger = CSVLogger("states_only.csv", fields=["pos", "euler"])
    """

    def __init__(
        self,
        filepath: str | Path,
        buffer_size: int = 1000,
        fields: list[str] | None = None,
    ) -> None:
        self.filepath = Path(filepath)
        self.buffer_size = buffer_size
        self.fields = fields if fields is not None else list(FIELD_COLUMNS)

        invalid = set(self.fields) - set(FIELD_COLUMNS)
        if invalid:
            raise ValueError(
                f"Invalid fields: {invalid}. Valid options: {set(FIELD_COLUMNS)}"
            )

        self._buffer: list[list[str]] = []
        self._file: TextIO | None = None
        self._writer: Any = None
        self._header_written = False
        self.rows_written = 0

        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def __enter__(self) -> CSVLogger:
        self._file = open(self.filepath, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def header(self) -> list[str]:
        hdr = ["t"]
        for field in self.fields:
            hdr.extend(FIELD_COLUMNS[field])
        return hdr

    def _write_header(self) -> None:
        if self._writer:
            self._writer.writerow(self.header())
            if self._file:
                self._file.flush()
        self._header_written = True

    def log(self, t: float, state_row=None, input_row=None) -> None:
        """
        Buffer one frame.

        Parameters
        ----------
        t : float
            Frame time [s]
        state_row : array-like | None
            Serialized state (12,)
        input_row : array-like | None
            Control input (4,)
        """
        if self._file is None:
            self.__enter__()
        if not self._header_written:
            self._write_header()

        row = [f"{t:.10f}"]
        for field in self.fields:
            if field == "inputs":
                values = input_row
                width = 4
            else:
                idx = STATE_FIELDS.index(field)
                values = None if state_row is None else np.asarray(state_row)[3 * idx:3 * idx + 3]
                width = 3
            if values is None:
                row.extend([""] * width)
            else:
                row.extend(f"{v:.10e}" for v in values)

        self._buffer.append(row)
        if len(self._buffer) >= self.buffer_size:
            self.flush()

    def write_output(self, output: SimulationOutput) -> None:
        """
        Log every recorded frame of a simulation output.

        Input frames are matched to state frames by exact timestamp.
        """
        inputs: dict[float, Any] = {}
        if output.array_time_inputs is not None:
            inputs = {float(t): u for t, u in zip(output.array_time_inputs, output.array_inputs)}

        if output.array_time_states is not None:
            for t, y in zip(output.array_time_states, output.array_states):
                self.log(float(t), y, inputs.get(float(t)))
        else:
            for t, u in inputs.items():
                self.log(t, None, u)

    def flush(self) -> None:
        """Write buffered data to disk and clear buffer."""
        if self._writer and self._buffer:
            self._writer.writerows(self._buffer)
            self.rows_written += len(self._buffer)
            if self._file:
                self._file.flush()
            self._buffer.clear()

    def close(self) -> None:
        """Flush remaining data and close file."""
        self.flush()
        if self._file:
            self._file.close()
            self._file = None
            self._writer = None
