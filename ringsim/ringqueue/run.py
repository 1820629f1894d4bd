"""Command-line entry point for the ring queue simulator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Iterable, Optional, TextIO

from .demo import DEFAULT_CAPACITY, run_auto_demo
from .logging import OperationLogger
from .menu import run_menu
from .queues import RingQueue
from ..analysis import plot_occupancy
from .reports import format_summary_lines, load_trace, summarise

log = logging.getLogger(__name__)


@dataclass(slots=True)
class RunConfig:
    capacity: int = DEFAULT_CAPACITY
    log_jsonl: Optional[str] = None
    log_sqlite: Optional[str] = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if int(self.capacity) <= 0:
            raise ValueError("capacity must be positive")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"unknown log level: {self.log_level!r}")


def load_config(path: str | Path) -> RunConfig:
    payload = json.loads(Path(path).read_text())
    known = {f.name for f in fields(RunConfig)}
    unknown = sorted(set(payload) - known)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")
    return RunConfig(**payload)


def _resolve_config(args: argparse.Namespace) -> RunConfig:
    config = load_config(args.config) if args.config else RunConfig()
    overrides = {
        "capacity": getattr(args, "capacity", None),
        "log_jsonl": args.log_jsonl,
        "log_sqlite": args.log_sqlite,
        "log_level": args.log_level,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(config, key, value)
    config.__post_init__()
    return config


def _open_trace(config: RunConfig) -> Optional[OperationLogger]:
    if not config.log_jsonl and not config.log_sqlite:
        return None
    return OperationLogger(json_path=config.log_jsonl, sqlite_path=config.log_sqlite)


def run(
    command: str,
    config: RunConfig,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> None:
    out = stdout if stdout is not None else sys.stdout
    trace = _open_trace(config)
    try:
        if command == "menu":
            out.write("Circular Queue Simulation\n")
            queue = RingQueue(config.capacity, trace=trace)
            run_menu(queue, stdin=stdin, stdout=out)
        elif command == "demo":
            run_auto_demo(config.capacity, stdout=out, trace=trace)
        else:
            raise ValueError(f"unknown command: {command!r}")
        if trace is not None:
            summary = trace.log_run_summary()
            log.info("Trace summary: %s", summary)
    finally:
        if trace is not None:
            trace.close()


def report(trace_path: Path, plot: Optional[Path] = None, stdout: Optional[TextIO] = None) -> None:
    out = stdout if stdout is not None else sys.stdout
    run_data = load_trace(trace_path)
    summary = run_data.summary or summarise(trace_path)
    out.write("Run summary:\n")
    for line in format_summary_lines(summary):
        out.write(f"  - {line}\n")
    if plot is not None:
        saved = plot_occupancy(run_data, plot, summary_lines=format_summary_lines(summary))
        out.write(f"Saved occupancy plot to {saved}\n")


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ringsim", description="Circular queue simulator")
    parser.add_argument("--config", default=None, help="Path to JSON run configuration")
    parser.add_argument("--log-jsonl", default=None, help="Write an operation trace as JSONL")
    parser.add_argument("--log-sqlite", default=None, help="Write an operation trace to SQLite")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level for diagnostics (default WARNING)",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    pm = sub.add_parser("menu", help="Interactive queue menu")
    pm.add_argument("--capacity", type=int, default=None, help="Queue capacity")

    pdemo = sub.add_parser("demo", help="Automatic wrap-around demonstration")
    pdemo.add_argument("--capacity", type=int, default=None, help="Queue capacity")

    pr = sub.add_parser("report", help="Summarise a JSONL operation trace")
    pr.add_argument("--trace", type=Path, required=True, help="Path to the JSONL trace")
    pr.add_argument("--plot", type=Path, default=None, help="Optional PNG path for an occupancy heatmap")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = make_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    try:
        config = _resolve_config(args)
    except ValueError as exc:
        parser.error(str(exc))
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.cmd == "report":
        report(args.trace, args.plot)
    else:
        run(args.cmd, config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
