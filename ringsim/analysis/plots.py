"""Standard plotting helpers for queue trace artefacts."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import numpy as np

if TYPE_CHECKING:  # pragma: no cover
    from ringsim.ringqueue.reports import TraceRun


def ensure_matplotlib_backend(cache_dir: Path | None = None) -> None:
    """Configure Matplotlib for headless environments with deterministic caches."""
    if "MPLCONFIGDIR" not in os.environ:
        cache_path = cache_dir or (Path.cwd() / ".matplotlib_cache")
        cache_path.mkdir(parents=True, exist_ok=True)
        os.environ["MPLCONFIGDIR"] = str(cache_path)
    import matplotlib

    matplotlib.use("Agg", force=True)


ensure_matplotlib_backend()

import matplotlib.pyplot as plt  # noqa: E402  # import after backend configuration


def _cursor_series(run: "TraceRun", attr: str) -> np.ndarray:
    return np.array([getattr(record, attr) for record in run.operations], dtype=float)


def plot_occupancy(
    run: "TraceRun",
    output: Path,
    *,
    title: str = "Ring queue occupancy",
    summary_lines: Sequence[str] = (),
) -> Path:
    """Heatmap of occupied slots per step with front/rear cursors overlaid."""
    matrix = run.occupancy_matrix()
    if matrix.size == 0:
        raise ValueError("trace contains no queue operations to plot")
    steps, capacity = matrix.shape
    fig_height = max(3.0, min(12.0, 0.25 * steps + 1.5))
    fig, ax = plt.subplots(figsize=(max(6.0, 0.35 * capacity + 2.0), fig_height))
    ax.imshow(
        matrix,
        aspect="auto",
        interpolation="nearest",
        cmap="Blues",
        vmin=0,
        vmax=1,
        extent=(-0.5, capacity - 0.5, steps + 0.5, 0.5),
    )
    step_axis = np.arange(1, steps + 1)
    ax.plot(_cursor_series(run, "front"), step_axis, "o", color="#f94144", markersize=4, label="front")
    ax.plot(_cursor_series(run, "rear"), step_axis, "s", color="#43aa8b", markersize=4, label="rear")
    failed = [record.step for record in run.operations if not record.ok]
    for step in failed:
        ax.axhline(step, color="#f8961e", linewidth=0.8, linestyle="--")
    ax.set_xlabel("Slot index")
    ax.set_ylabel("Operation step")
    ax.set_xticks(np.arange(capacity))
    ax.set_title(title)
    ax.legend(loc="upper right", fontsize=8)
    if summary_lines:
        fig.text(
            0.02,
            0.01,
            "\n".join(summary_lines),
            fontsize=8,
            ha="left",
            va="bottom",
            family="monospace",
        )
        fig.tight_layout(rect=(0, 0.04 + 0.02 * len(summary_lines), 1, 1))
    else:
        fig.tight_layout()

    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output, dpi=150)
    plt.close(fig)
    return output


__all__ = ["ensure_matplotlib_backend", "plot_occupancy"]
