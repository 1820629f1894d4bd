"""Scripted walkthrough that pushes a ring queue through a wrap-around."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from .logging import OperationLogger
from .queues import RingQueue

DEFAULT_CAPACITY = 20


def run_auto_demo(
    capacity: int = DEFAULT_CAPACITY,
    stdout: Optional[TextIO] = None,
    trace: Optional[OperationLogger] = None,
) -> RingQueue:
    """Enqueue 1..6, dequeue three times, then enqueue 7..10.

    The state is rendered after every step. With a small capacity the final
    phase overflows, which is reported rather than raised.
    """
    out = stdout if stdout is not None else sys.stdout
    queue = RingQueue(capacity, trace=trace)

    def emit(text: str) -> None:
        out.write(text + "\n")

    emit("\nAuto Demo: enqueue 1..6, dequeue 3, enqueue 7..10 (shows wrap-around)")
    for value in range(1, 7):
        if queue.enqueue(value):
            emit(f"\nEnqueued {value}")
        else:
            emit(f"\nAttempt to enqueue {value} -> overflow")
        emit(queue.render_state())
    for _ in range(3):
        value, ok = queue.dequeue()
        if ok:
            emit(f"\nDequeued {value}")
        else:
            emit("\nAttempt to dequeue -> underflow")
        emit(queue.render_state())
    for value in range(7, 11):
        if queue.enqueue(value):
            emit(f"\nEnqueued {value}")
        else:
            emit(f"\nAttempt to enqueue {value} -> overflow")
        emit(queue.render_state())
    emit("\nAuto demo finished.")
    return queue


__all__ = ["DEFAULT_CAPACITY", "run_auto_demo"]
