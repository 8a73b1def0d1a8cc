from .plotting import AircraftPlotter, ForcePlotter, StatePlotter, plot_trajectory

__all__ = ["AircraftPlotter", "ForcePlotter", "StatePlotter", "plot_trajectory"]
