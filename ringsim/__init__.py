"""Circular queue simulator: ring buffer core, console front-ends and trace analytics."""

from .ringqueue import RingQueue, render_state

__all__ = ["RingQueue", "render_state"]
