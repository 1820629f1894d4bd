"""Structured operation traces for ring queues with JSONL and SQLite sinks."""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Optional

from typing import TYPE_CHECKING

from .render import occupancy_mask

if TYPE_CHECKING:  # pragma: no cover
    from .queues import QueueSnapshot

log = logging.getLogger(__name__)

OPERATIONS = ("enqueue", "dequeue", "peek")


@dataclass(slots=True)
class TraceSummary:
    capacity: Optional[int]
    operation_count: int
    enqueue_count: int
    dequeue_count: int
    peek_count: int
    overflow_count: int
    underflow_count: int
    peak_count: int
    wrap_count: int
    final_count: Optional[int]


@dataclass(slots=True)
class LogRecord:
    step: int
    timestamp_ns: int
    event_type: str
    payload: Dict[str, object]


def is_wrap(operation: str, ok: bool, front: int, rear: int) -> bool:
    """True when a successful move carried a cursor from ``capacity - 1`` to 0."""
    if not ok:
        return False
    if operation == "enqueue":
        return rear == 0
    if operation == "dequeue":
        return front == 0
    return False


class OperationLogger:
    def __init__(
        self,
        json_path: Optional[str | Path] = None,
        sqlite_path: Optional[str | Path] = None,
    ) -> None:
        self.json_path = Path(json_path) if json_path else None
        self.sqlite_path = Path(sqlite_path) if sqlite_path else None
        self._conn = None
        if self.sqlite_path:
            self.sqlite_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.sqlite_path)
            try:
                self._initialise_sqlite()
            except sqlite3.Error:
                self._conn.close()
                raise
            log.info("Writing queue trace to SQLite database %s", self.sqlite_path)
        self._json_handle = None
        if self.json_path:
            self.json_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                self._json_handle = self.json_path.open("w", encoding="utf-8")
            except OSError:
                self.close()
                raise
            log.info("Writing queue trace to %s", self.json_path)
        self._step = 0
        self._capacity: Optional[int] = None
        self._counts = {name: 0 for name in OPERATIONS}
        self._overflow_count = 0
        self._underflow_count = 0
        self._peak_count = 0
        self._wrap_count = 0
        self._final_count: Optional[int] = None

    def __enter__(self) -> "OperationLogger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _initialise_sqlite(self) -> None:
        assert self._conn is not None
        cur = self._conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS trace (
                step INTEGER,
                timestamp_ns INTEGER,
                event_type TEXT,
                payload TEXT
            )
            """
        )
        self._conn.commit()

    def close(self) -> None:
        if self._json_handle:
            self._json_handle.close()
            self._json_handle = None
        if self._conn:
            self._conn.close()
            self._conn = None

    def log_operation(
        self,
        operation: str,
        value: Optional[int],
        ok: bool,
        snapshot: "QueueSnapshot",
    ) -> None:
        if operation not in OPERATIONS:
            raise ValueError(f"unknown queue operation: {operation!r}")
        self._step += 1
        self._capacity = snapshot.capacity
        self._counts[operation] += 1
        if not ok:
            if operation == "enqueue":
                self._overflow_count += 1
            else:
                self._underflow_count += 1
        if is_wrap(operation, ok, snapshot.front, snapshot.rear):
            self._wrap_count += 1
        self._peak_count = max(self._peak_count, snapshot.count)
        self._final_count = snapshot.count
        payload = {
            "value": value,
            "ok": ok,
            "capacity": snapshot.capacity,
            "front": snapshot.front,
            "rear": snapshot.rear,
            "count": snapshot.count,
            "occupied": [bool(flag) for flag in occupancy_mask(snapshot)],
        }
        self._write(LogRecord(self._step, time.time_ns(), operation, payload))

    def log_run_summary(self) -> TraceSummary:
        summary = self.summary()
        self._write(LogRecord(self._step, time.time_ns(), "run_summary", asdict(summary)))
        return summary

    def summary(self) -> TraceSummary:
        return TraceSummary(
            capacity=self._capacity,
            operation_count=self._step,
            enqueue_count=self._counts["enqueue"],
            dequeue_count=self._counts["dequeue"],
            peek_count=self._counts["peek"],
            overflow_count=self._overflow_count,
            underflow_count=self._underflow_count,
            peak_count=self._peak_count,
            wrap_count=self._wrap_count,
            final_count=self._final_count,
        )

    def _write(self, record: LogRecord) -> None:
        payload = {
            "step": record.step,
            "timestamp_ns": record.timestamp_ns,
            "event_type": record.event_type,
            "payload": record.payload,
        }
        if self._json_handle:
            self._json_handle.write(json.dumps(payload) + "\n")
            self._json_handle.flush()
        if self._conn:
            self._conn.execute(
                "INSERT INTO trace(step, timestamp_ns, event_type, payload) VALUES(?, ?, ?, ?)",
                (record.step, record.timestamp_ns, record.event_type, json.dumps(record.payload)),
            )
            self._conn.commit()


__all__ = ["LogRecord", "OperationLogger", "TraceSummary", "is_wrap", "OPERATIONS"]
