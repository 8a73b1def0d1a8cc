from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from wingsim.logger import FIELD_COLUMNS, STATE_FIELDS

if TYPE_CHECKING:
    from wingsim.config import SimulationOptions
    from wingsim.core.simulation import SimulationOutput


def history_frame(output: SimulationOutput) -> pd.DataFrame:
    """
    Recorded trajectories as one DataFrame indexed by time.

    Input columns are NaN where a state frame has no matching input frame.
    """
    state_cols = [c for f in STATE_FIELDS for c in FIELD_COLUMNS[f]]
    input_cols = FIELD_COLUMNS["inputs"]

    frames = []
    if output.array_states is not None:
        frames.append(pd.DataFrame(output.array_states, index=output.array_time_states, columns=state_cols))
    if output.array_inputs is not None:
        inputs = pd.DataFrame(output.array_inputs, index=output.array_time_inputs, columns=input_cols)
        # Adaptive runs may repeat a time; keep the last accepted input
        frames.append(inputs[~inputs.index.duplicated(keep="last")])
    if not frames:
        return pd.DataFrame(columns=["t"])

    df = pd.concat(frames, axis=1) if len(frames) > 1 else frames[0]
    df.index.name = "t"
    return df.sort_index()


def save_simulation_history(output: SimulationOutput, filepath: str | Path) -> Path:
    """
    Saves the recorded trajectories to a CSV file.

    Args:
        output: Result of ``simulate()``
        filepath: Destination path (e.g., 'results/run1.csv')
    """
    df = history_frame(output)
    if df.empty:
        raise ValueError("Simulation history is empty. Nothing to save.")

    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path)
    print(f"Simulation results saved to {path.absolute()}")
    return path


def load_simulation_history(filepath: str | Path) -> pd.DataFrame:
    """Read a CSV written by ``save_simulation_history`` or ``CSVLogger``."""
    return pd.read_csv(filepath, index_col="t")


def load_simulation_config(filepath: str | Path) -> SimulationOptions:
    """
    Load simulation settings from JSON.

    Keys missing from the file keep their default value. Unknown keys raise
    ValueError.
    """
    # config pulls in the model packages, which import this package
    from wingsim.config import SimulationOptions

    with open(filepath, encoding="utf-8") as f:
        data: dict[str, Any] = json.load(f)
    return SimulationOptions.from_dict(data)


def save_simulation_config(options: SimulationOptions, filepath: str | Path) -> Path:
    """Write simulation settings as JSON."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(options.to_dict(), f, indent=2, default=_json_default)
    return path


def _json_default(obj: Any) -> Any:
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.generic):
        return obj.item()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
