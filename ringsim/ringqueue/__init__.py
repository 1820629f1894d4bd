"""Fixed-capacity ring queue with occupancy rendering and operation traces."""

from .queues import PopResult, QueueSnapshot, RingQueue
from .render import SlotView, describe_slots, occupancy_mask, render_state
from .logging import LogRecord, OperationLogger, TraceSummary
from .demo import DEFAULT_CAPACITY, run_auto_demo
from .menu import MenuSession, run_menu
from .reports import (
    OperationRecord,
    TraceRun,
    format_summary_lines,
    load_trace,
    summarise,
    trace_frame,
)

__all__ = [
    "PopResult",
    "QueueSnapshot",
    "RingQueue",
    "SlotView",
    "describe_slots",
    "occupancy_mask",
    "render_state",
    "LogRecord",
    "OperationLogger",
    "TraceSummary",
    "DEFAULT_CAPACITY",
    "run_auto_demo",
    "MenuSession",
    "run_menu",
    "OperationRecord",
    "TraceRun",
    "format_summary_lines",
    "load_trace",
    "summarise",
    "trace_frame",
]
