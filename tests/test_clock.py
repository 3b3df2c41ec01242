"""Tests for the frame clock."""

from notefall.clock import FrameClock


def test_next_frame_runs_once():
    clock = FrameClock()
    calls = []
    clock.next_frame(calls.append)
    clock.advance(16)
    clock.advance(32)
    assert calls == [16]


def test_cancelled_task_never_runs():
    clock = FrameClock()
    calls = []
    handle = clock.next_frame(calls.append)
    handle.cancel()
    clock.advance(16)
    assert calls == []
    assert handle.cancelled
    assert clock.pending_count == 0


def test_rearming_waits_for_the_next_frame():
    clock = FrameClock()
    calls = []

    def tick(now):
        calls.append(now)
        clock.next_frame(tick)

    clock.next_frame(tick)
    clock.advance(10)
    clock.advance(20)
    assert calls == [10, 20]


def test_delayed_callbacks_run_in_due_order():
    clock = FrameClock(now_ms=1000)
    order = []
    clock.call_later(300, lambda now: order.append("b"))
    clock.call_later(100, lambda now: order.append("a"))
    clock.call_later(300, lambda now: order.append("c"))
    clock.advance(1200)
    assert order == ["a"]
    clock.advance(1300)
    assert order == ["a", "b", "c"]


def test_clock_never_goes_backwards():
    clock = FrameClock(now_ms=500)
    clock.advance(100)
    assert clock.now_ms == 500


def test_cancel_after_run_is_a_no_op():
    clock = FrameClock()
    handle = clock.call_later(0, lambda now: None)
    clock.advance(0)
    handle.cancel()
    assert handle.done
    assert not handle.cancelled
