"""Interactive console menu driving a caller-owned ring queue."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

import numpy as np

from .demo import run_auto_demo
from .queues import RingQueue

log = logging.getLogger(__name__)

MENU = (
    "\n--- Circular Queue Menu ---\n"
    "1. Enqueue (push to rear)\n"
    "2. Dequeue (pop from front)\n"
    "3. Peek (front element)\n"
    "4. Display internal state\n"
    "5. Auto Demo (wrap-around)\n"
    "6. Exit\n"
)

_INT64 = np.iinfo(np.int64)


class _EndOfInput(Exception):
    pass


def _parse_int(line: str) -> Optional[int]:
    try:
        return int(line.strip())
    except ValueError:
        return None


class MenuSession:
    """One interactive session; the queue is passed in and never replaced."""

    def __init__(self, queue: RingQueue, stdin: TextIO, stdout: TextIO) -> None:
        self.queue = queue
        self.stdin = stdin
        self.stdout = stdout

    def _emit(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def _prompt(self, text: str) -> str:
        self.stdout.write(text)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise _EndOfInput
        return line

    def run(self) -> None:
        while True:
            self.stdout.write(MENU)
            try:
                line = self._prompt("Enter choice: ")
            except _EndOfInput:
                self._emit("\nExiting.")
                return
            choice = _parse_int(line)
            if choice is None:
                log.debug("Discarding non-integer menu input %r", line)
                continue
            try:
                if not self.dispatch(choice):
                    return
            except _EndOfInput:
                self._emit("\nExiting.")
                return

    def dispatch(self, choice: int) -> bool:
        """Handle one menu choice; returns False when the session should end."""
        queue = self.queue
        if choice == 1:
            value = _parse_int(self._prompt("Enter value to enqueue: "))
            if value is None or not _INT64.min <= value <= _INT64.max:
                self._emit("Invalid value.")
                return True
            if not queue.enqueue(value):
                self._emit(f"Enqueue failed: queue overflow (capacity {queue.capacity})")
            else:
                self._emit(f"Enqueued {value}")
                self._emit(queue.render_state())
        elif choice == 2:
            value, ok = queue.dequeue()
            if not ok:
                self._emit("Dequeue failed: queue underflow (empty)")
            else:
                self._emit(f"Dequeued {value}")
                self._emit(queue.render_state())
        elif choice == 3:
            value, ok = queue.peek()
            if not ok:
                self._emit("Peek failed: queue empty")
            else:
                self._emit(f"Front element = {value}")
        elif choice == 4:
            self._emit(queue.render_state())
        elif choice == 5:
            run_auto_demo(queue.capacity, stdout=self.stdout)
        elif choice == 6:
            self._emit("Exiting.")
            return False
        else:
            self._emit("Invalid choice.")
        return True


def run_menu(
    queue: RingQueue,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> None:
    MenuSession(
        queue,
        stdin if stdin is not None else sys.stdin,
        stdout if stdout is not None else sys.stdout,
    ).run()


__all__ = ["MENU", "MenuSession", "run_menu"]
