"""Utility functions to turn queue traces into human-readable diagnostics."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import List, Optional

import numpy as np
import pandas as pd

from .logging import OPERATIONS, TraceSummary, is_wrap


@dataclass(slots=True)
class OperationRecord:
    step: int
    timestamp_ns: int
    operation: str
    value: Optional[int]
    ok: bool
    capacity: int
    front: int
    rear: int
    count: int
    occupied: List[bool]


@dataclass(slots=True)
class TraceRun:
    operations: List[OperationRecord]
    summary: Optional[TraceSummary]

    def occupancy_matrix(self) -> np.ndarray:
        """Steps × slots boolean matrix, one row per recorded operation."""
        if not self.operations:
            return np.zeros((0, 0), dtype=bool)
        return np.array([record.occupied for record in self.operations], dtype=bool)


def load_trace(jsonl_path: str | Path) -> TraceRun:
    path = Path(jsonl_path)
    operations: List[OperationRecord] = []
    summary: Optional[TraceSummary] = None

    with path.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            blob = json.loads(line)
            event_type = blob.get("event_type")
            payload = blob.get("payload", {})
            if event_type in OPERATIONS:
                operations.append(
                    OperationRecord(
                        step=int(blob.get("step", len(operations) + 1)),
                        timestamp_ns=int(blob.get("timestamp_ns", 0)),
                        operation=event_type,
                        value=payload.get("value"),
                        ok=bool(payload.get("ok")),
                        capacity=int(payload["capacity"]),
                        front=int(payload["front"]),
                        rear=int(payload["rear"]),
                        count=int(payload["count"]),
                        occupied=[bool(flag) for flag in payload.get("occupied", [])],
                    )
                )
            elif event_type == "run_summary":
                summary = TraceSummary(**payload)
            else:
                raise ValueError(f"unknown trace event type: {event_type!r}")

    return TraceRun(operations=operations, summary=summary)


def trace_frame(jsonl_path: str | Path) -> pd.DataFrame:
    run = load_trace(jsonl_path)
    columns = [
        "step",
        "timestamp_ns",
        "operation",
        "value",
        "ok",
        "capacity",
        "front",
        "rear",
        "count",
    ]
    rows = []
    for record in run.operations:
        row = asdict(record)
        row.pop("occupied")
        rows.append(row)
    frame = pd.DataFrame(rows, columns=columns)
    return frame.set_index("step")


def summarise(jsonl_path: str | Path) -> TraceSummary:
    """Recompute the run summary from the operation records alone."""
    run = load_trace(jsonl_path)
    ops = run.operations
    counts = {name: sum(1 for rec in ops if rec.operation == name) for name in OPERATIONS}
    return TraceSummary(
        capacity=ops[-1].capacity if ops else None,
        operation_count=len(ops),
        enqueue_count=counts["enqueue"],
        dequeue_count=counts["dequeue"],
        peek_count=counts["peek"],
        overflow_count=sum(1 for rec in ops if rec.operation == "enqueue" and not rec.ok),
        underflow_count=sum(1 for rec in ops if rec.operation != "enqueue" and not rec.ok),
        peak_count=max((rec.count for rec in ops), default=0),
        wrap_count=sum(1 for rec in ops if is_wrap(rec.operation, rec.ok, rec.front, rec.rear)),
        final_count=ops[-1].count if ops else None,
    )


def format_summary_lines(summary: Optional[TraceSummary]) -> List[str]:
    if summary is None:
        return ["No run_summary event found"]
    return [
        f"Capacity: {summary.capacity if summary.capacity is not None else 'n/a'}",
        f"Operations: {summary.operation_count} "
        f"(enqueue {summary.enqueue_count}, dequeue {summary.dequeue_count}, peek {summary.peek_count})",
        f"Overflows: {summary.overflow_count}, underflows: {summary.underflow_count}",
        f"Peak count: {summary.peak_count}, wraps: {summary.wrap_count}",
        f"Final count: {summary.final_count if summary.final_count is not None else 'n/a'}",
    ]


__all__ = [
    "format_summary_lines",
    "OperationRecord",
    "TraceRun",
    "load_trace",
    "trace_frame",
    "summarise",
]
