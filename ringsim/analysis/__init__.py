"""Analytics helpers for queue trace artefacts."""

from .plots import ensure_matplotlib_backend, plot_occupancy

__all__ = ["ensure_matplotlib_backend", "plot_occupancy"]
