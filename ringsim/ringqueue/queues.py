"""Fixed-capacity integer ring queue with explicit overflow/underflow results."""

from __future__ import annotations

import logging
import operator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, NamedTuple, Optional, Tuple

import numpy as np

from .render import render_state

if TYPE_CHECKING:  # pragma: no cover
    from .logging import OperationLogger

log = logging.getLogger(__name__)

_INT64 = np.iinfo(np.int64)


class PopResult(NamedTuple):
    """Outcome of ``dequeue``/``peek``; ``value`` is ``None`` when ``ok`` is false."""

    value: Optional[int]
    ok: bool


@dataclass(slots=True, frozen=True)
class QueueSnapshot:
    capacity: int
    front: int
    rear: int
    count: int
    buffer: Tuple[int, ...]

    @property
    def last_index(self) -> int:
        return (self.rear - 1) % self.capacity


class RingQueue:
    """Bounded FIFO over a fixed-length ``int64`` buffer.

    Insertion writes at ``rear`` and removal reads at ``front``; both cursors
    advance modulo ``capacity`` so no element is ever shifted. ``front == rear``
    holds for both the empty and the full queue, which is why emptiness and
    fullness are decided by ``count`` alone.
    """

    def __init__(self, capacity: int, trace: "OperationLogger | None" = None) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = int(capacity)
        self._buffer = np.zeros(self._capacity, dtype=np.int64)
        self._front = 0
        self._rear = 0
        self._count = 0
        self.trace = trace

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def front(self) -> int:
        return self._front

    @property
    def rear(self) -> int:
        return self._rear

    @property
    def count(self) -> int:
        return self._count

    @property
    def last_index(self) -> int:
        return (self._rear - 1) % self._capacity

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[int]:
        for offset in range(self._count):
            yield int(self._buffer[(self._front + offset) % self._capacity])

    def __repr__(self) -> str:
        return (
            f"RingQueue(capacity={self._capacity}, front={self._front}, "
            f"rear={self._rear}, count={self._count})"
        )

    def is_empty(self) -> bool:
        return self._count == 0

    def is_full(self) -> bool:
        return self._count == self._capacity

    def enqueue(self, value: int) -> bool:
        value = operator.index(value)
        if value < _INT64.min or value > _INT64.max:
            raise ValueError(f"value {value} does not fit in a 64-bit slot")
        if self.is_full():
            log.debug("Enqueue of %d rejected: queue full (capacity %d)", value, self._capacity)
            self._record("enqueue", value, False)
            return False
        self._buffer[self._rear] = value
        self._rear = (self._rear + 1) % self._capacity
        self._count += 1
        log.debug("Enqueued %d (front=%d rear=%d count=%d)", value, self._front, self._rear, self._count)
        self._record("enqueue", value, True)
        return True

    def dequeue(self) -> PopResult:
        if self.is_empty():
            log.debug("Dequeue rejected: queue empty")
            self._record("dequeue", None, False)
            return PopResult(None, False)
        value = int(self._buffer[self._front])
        self._front = (self._front + 1) % self._capacity
        self._count -= 1
        log.debug("Dequeued %d (front=%d rear=%d count=%d)", value, self._front, self._rear, self._count)
        self._record("dequeue", value, True)
        return PopResult(value, True)

    def peek(self) -> PopResult:
        if self.is_empty():
            self._record("peek", None, False)
            return PopResult(None, False)
        value = int(self._buffer[self._front])
        self._record("peek", value, True)
        return PopResult(value, True)

    def snapshot(self) -> QueueSnapshot:
        return QueueSnapshot(
            capacity=self._capacity,
            front=self._front,
            rear=self._rear,
            count=self._count,
            buffer=tuple(int(v) for v in self._buffer),
        )

    def render_state(self) -> str:
        return render_state(self.snapshot())

    def _record(self, operation: str, value: Optional[int], ok: bool) -> None:
        if self.trace is not None:
            self.trace.log_operation(operation, value, ok, self.snapshot())


__all__ = ["PopResult", "QueueSnapshot", "RingQueue"]
