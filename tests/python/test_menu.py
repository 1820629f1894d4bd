from __future__ import annotations

import io

from ringsim.ringqueue import RingQueue, run_menu


def _session(script: str, capacity: int = 20) -> tuple[RingQueue, str]:
    queue = RingQueue(capacity)
    out = io.StringIO()
    run_menu(queue, stdin=io.StringIO(script), stdout=out)
    return queue, out.getvalue()


def test_enqueue_peek_dequeue_round() -> None:
    queue, output = _session("1\n42\n3\n2\n6\n")
    assert "Enqueued 42" in output
    assert "Front element = 42" in output
    assert "Dequeued 42" in output
    assert output.rstrip().endswith("Exiting.")
    assert queue.is_empty()


def test_underflow_is_reported_and_menu_continues() -> None:
    queue, output = _session("2\n3\n1\n7\n6\n")
    assert "Dequeue failed: queue underflow (empty)" in output
    assert "Peek failed: queue empty" in output
    assert "Enqueued 7" in output
    assert list(queue) == [7]


def test_overflow_is_reported() -> None:
    queue, output = _session("1\n5\n1\n6\n6\n", capacity=1)
    assert "Enqueue failed: queue overflow (capacity 1)" in output
    assert list(queue) == [5]


def test_non_integer_choice_is_discarded() -> None:
    queue, output = _session("abc\n\n4\n6\n")
    assert output.count("--- Circular Queue Menu ---") == 4
    assert "--- Circular Queue Internal State ---" in output
    assert "Invalid" not in output
    assert queue.is_empty()


def test_invalid_choice_and_value() -> None:
    queue, output = _session("9\n1\nxyz\n1\n99999999999999999999\n6\n")
    assert "Invalid choice." in output
    assert output.count("Invalid value.") == 2
    assert queue.is_empty()


def test_end_of_input_exits() -> None:
    queue, output = _session("1\n")
    assert output.rstrip().endswith("Exiting.")
    assert queue.is_empty()


def test_auto_demo_uses_its_own_queue() -> None:
    queue, output = _session("1\n100\n5\n6\n")
    assert "Auto demo finished." in output
    assert "Dequeued 3" in output
    assert list(queue) == [100]
