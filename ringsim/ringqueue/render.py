"""Text rendering of a ring queue's index-by-index occupancy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

import numpy as np

if TYPE_CHECKING:  # pragma: no cover
    from .queues import QueueSnapshot

HEADER = "--- Circular Queue Internal State ---"
FOOTER = "-------------------------------------"

FRONT_LABEL = "  <-- front"
LAST_LABEL = "  <-- last in queue (rear-1)"
ONLY_LABEL = "  <-- only element"


@dataclass(slots=True)
class SlotView:
    index: int
    occupied: bool
    value: Optional[int]
    is_front: bool
    is_last: bool


def occupancy_mask(snapshot: "QueueSnapshot") -> np.ndarray:
    """Boolean mask of slots holding logical elements.

    ``front == rear`` with a non-zero count only happens for a full queue.
    """
    mask = np.zeros(snapshot.capacity, dtype=bool)
    front, rear = snapshot.front, snapshot.rear
    if snapshot.count == 0:
        return mask
    if front < rear:
        mask[front:rear] = True
    elif front > rear:
        mask[front:] = True
        mask[:rear] = True
    elif snapshot.count == snapshot.capacity:
        mask[:] = True
    return mask


def describe_slots(snapshot: "QueueSnapshot") -> List[SlotView]:
    mask = occupancy_mask(snapshot)
    last = snapshot.last_index
    slots: List[SlotView] = []
    for index in range(snapshot.capacity):
        occupied = bool(mask[index])
        slots.append(
            SlotView(
                index=index,
                occupied=occupied,
                value=snapshot.buffer[index] if occupied else None,
                is_front=occupied and index == snapshot.front,
                is_last=occupied and index == last,
            )
        )
    return slots


def _format_slot(slot: SlotView) -> str:
    if not slot.occupied:
        return f" [{slot.index:2d}] : --"
    line = f" [{slot.index:2d}] : {slot.value}"
    if slot.is_front and slot.is_last:
        line += ONLY_LABEL
    elif slot.is_front:
        line += FRONT_LABEL
    elif slot.is_last:
        line += LAST_LABEL
    return line


def render_state(snapshot: "QueueSnapshot") -> str:
    lines = [
        HEADER,
        f"capacity = {snapshot.capacity}, count = {snapshot.count}",
        f"front index = {snapshot.front}, rear index = {snapshot.rear}",
        "buffer (index:value):",
    ]
    lines.extend(_format_slot(slot) for slot in describe_slots(snapshot))
    lines.append(FOOTER)
    return "\n".join(lines)


__all__ = ["SlotView", "occupancy_mask", "describe_slots", "render_state"]
