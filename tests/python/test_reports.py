from __future__ import annotations

import io
import json
from dataclasses import asdict
from pathlib import Path

import pytest

from ringsim.ringqueue import (
    OperationLogger,
    format_summary_lines,
    load_trace,
    run_auto_demo,
    summarise,
    trace_frame,
)


@pytest.fixture()
def small_demo_trace(tmp_path: Path) -> Path:
    path = tmp_path / "small.jsonl"
    with OperationLogger(json_path=path) as trace:
        run_auto_demo(5, stdout=io.StringIO(), trace=trace)
        trace.log_run_summary()
    return path


def test_load_trace_round_trips_summary(small_demo_trace: Path) -> None:
    run = load_trace(small_demo_trace)
    assert len(run.operations) == 13
    assert run.summary is not None
    assert run.summary.overflow_count == 2
    assert run.summary.wrap_count == 1
    assert asdict(summarise(small_demo_trace)) == asdict(run.summary)


def test_small_capacity_demo_final_state(small_demo_trace: Path) -> None:
    run = load_trace(small_demo_trace)
    last = run.operations[-1]
    assert last.operation == "enqueue"
    assert last.value == 10
    assert last.ok is False
    assert (last.front, last.rear, last.count) == (3, 3, 5)
    assert last.occupied == [True] * 5


def test_occupancy_matrix_shape(small_demo_trace: Path) -> None:
    matrix = load_trace(small_demo_trace).occupancy_matrix()
    assert matrix.shape == (13, 5)
    assert matrix[0].tolist() == [True, False, False, False, False]
    assert matrix.sum(axis=1).tolist()[:6] == [1, 2, 3, 4, 5, 5]


def test_trace_frame(small_demo_trace: Path) -> None:
    frame = trace_frame(small_demo_trace)
    assert list(frame.columns) == [
        "timestamp_ns",
        "operation",
        "value",
        "ok",
        "capacity",
        "front",
        "rear",
        "count",
    ]
    assert frame.index.name == "step"
    assert len(frame) == 13
    assert int(frame["ok"].sum()) == 11
    assert frame["count"].max() == 5
    assert frame.loc[frame["operation"] == "dequeue", "value"].tolist() == [1, 2, 3]


def test_summarise_without_summary_record(tmp_path: Path) -> None:
    path = tmp_path / "partial.jsonl"
    with OperationLogger(json_path=path) as trace:
        run_auto_demo(20, stdout=io.StringIO(), trace=trace)
    run = load_trace(path)
    assert run.summary is None
    summary = summarise(path)
    assert summary.operation_count == 13
    assert summary.final_count == 7
    assert format_summary_lines(None) == ["No run_summary event found"]
    assert "Overflows: 0, underflows: 0" in format_summary_lines(summary)


def test_unknown_event_type_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bad.jsonl"
    path.write_text(json.dumps({"step": 1, "event_type": "resize", "payload": {}}) + "\n")
    with pytest.raises(ValueError):
        load_trace(path)
