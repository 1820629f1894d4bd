"""Plot slot occupancy from a JSONL queue trace."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable

REPO_ROOT = Path(__file__).resolve().parents[2]

if __package__ in (None, ""):
    sys.path.insert(0, str(REPO_ROOT))

from ringsim.analysis import plot_occupancy
from ringsim.ringqueue.reports import format_summary_lines, load_trace, summarise


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plot slot occupancy for a queue trace")
    parser.add_argument("trace", type=Path, help="Path to the JSONL operation trace")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to save the figure (defaults next to the trace)",
    )
    parser.add_argument("--title", default="Ring queue occupancy", help="Figure title")
    return parser.parse_args(list(argv) if argv is not None else None)


def main(argv: Iterable[str] | None = None) -> Path:
    args = parse_args(argv)
    run = load_trace(args.trace)
    if run.summary is None:
        print("Warning: no run_summary event found; recomputing from operations")
    summary = run.summary or summarise(args.trace)
    lines = format_summary_lines(summary)
    output = args.output or args.trace.with_suffix(".png")
    saved = plot_occupancy(run, output, title=args.title, summary_lines=lines)
    print(f"Saved visualisation to {saved}")
    print("Run summary:")
    for line in lines:
        print(f"  - {line}")
    return saved


if __name__ == "__main__":
    main()
