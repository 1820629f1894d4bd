from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from ringsim.ringqueue import load_trace
from ringsim.ringqueue.run import RunConfig, load_config, main, report, run


def test_demo_command_exits_cleanly(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["demo"]) == 0
    out = capsys.readouterr().out
    assert "Auto demo finished." in out
    assert "front index = 3, rear index = 10" in out


def test_demo_with_trace_and_capacity_override(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    trace_path = tmp_path / "demo.jsonl"
    assert main(["--log-jsonl", str(trace_path), "demo", "--capacity", "5"]) == 0
    out = capsys.readouterr().out
    assert "Attempt to enqueue 6 -> overflow" in out
    assert "Attempt to enqueue 10 -> overflow" in out

    trace = load_trace(trace_path)
    assert trace.summary is not None
    assert trace.summary.capacity == 5
    assert trace.summary.operation_count == 13
    assert trace.summary.overflow_count == 2


def test_config_file_sets_capacity(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "run.json"
    config_path.write_text(json.dumps({"capacity": 7}))
    assert main(["--config", str(config_path), "demo"]) == 0
    assert "capacity = 7, count = 1" in capsys.readouterr().out


def test_load_config_validation(tmp_path: Path) -> None:
    bad_key = tmp_path / "bad_key.json"
    bad_key.write_text(json.dumps({"capacity": 4, "growth": 2}))
    with pytest.raises(ValueError):
        load_config(bad_key)

    bad_capacity = tmp_path / "bad_capacity.json"
    bad_capacity.write_text(json.dumps({"capacity": 0}))
    with pytest.raises(ValueError):
        load_config(bad_capacity)

    with pytest.raises(ValueError):
        RunConfig(log_level="chatty")


def test_menu_command_with_sqlite_trace(tmp_path: Path) -> None:
    config = RunConfig(capacity=3, log_sqlite=str(tmp_path / "menu.db"))
    out = io.StringIO()
    run("menu", config, stdin=io.StringIO("1\n8\n2\n6\n"), stdout=out)
    text = out.getvalue()
    assert text.startswith("Circular Queue Simulation\n")
    assert "Dequeued 8" in text
    assert (tmp_path / "menu.db").exists()


def test_unknown_command_rejected() -> None:
    with pytest.raises(ValueError):
        run("resize", RunConfig(), stdout=io.StringIO())


def test_report_writes_summary_and_plot(tmp_path: Path) -> None:
    trace_path = tmp_path / "demo.jsonl"
    run("demo", RunConfig(capacity=5, log_jsonl=str(trace_path)), stdout=io.StringIO())

    out = io.StringIO()
    plot_path = tmp_path / "plots" / "occupancy.png"
    report(trace_path, plot=plot_path, stdout=out)

    text = out.getvalue()
    assert "Overflows: 2, underflows: 0" in text
    assert "Peak count: 5, wraps: 1" in text
    assert plot_path.exists()
    assert plot_path.stat().st_size > 0


@pytest.mark.parametrize(
    "argv",
    [
        ["demo", "--capacity", "0"],
        ["--log-level", "chatty", "demo"],
    ],
)
def test_invalid_settings_exit_with_usage_error(
    argv: list[str], capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
    captured = capsys.readouterr()
    assert "usage: ringsim" in captured.err
    assert "Auto demo finished." not in captured.out
