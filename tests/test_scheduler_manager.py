#!/usr/bin/env python3
"""Unit tests for SchedulerManager.

Tests the single-slot timer: one pending entry at a time, replacement on
every new schedule, cancellation, multi-step sequences timed from each
step's deadline, and the async polling loop.
"""

import asyncio

import pytest

from managers.scheduler_manager import SchedulerManager
from test_helpers import FakeClock


def _recorder():
    calls = []

    def make(name):
        return lambda: calls.append(name)

    return calls, make


def test_single_delay_fires_once():
    clock = FakeClock()
    sched = SchedulerManager(clock=clock)
    calls, make = _recorder()

    sched.schedule(1.0, make("a"))
    assert sched.pending

    clock.advance(0.999)
    assert sched.update() == 0
    assert calls == []

    clock.advance(0.001)
    assert sched.update() == 1
    assert calls == ["a"]
    assert not sched.pending

    clock.advance(10)
    assert sched.update() == 0
    assert calls == ["a"]


def test_new_schedule_replaces_pending():
    clock = FakeClock()
    sched = SchedulerManager(clock=clock)
    calls, make = _recorder()

    sched.schedule(1.0, make("first"))
    clock.advance(0.5)
    sched.schedule(2.0, make("second"))

    clock.advance(1.0)
    sched.update()
    assert calls == []

    clock.advance(1.0)
    sched.update()
    assert calls == ["second"]


def test_cancel_prevents_firing():
    clock = FakeClock()
    sched = SchedulerManager(clock=clock)
    calls, make = _recorder()

    sched.schedule(0.2, make("a"))
    sched.cancel()
    assert not sched.pending
    assert sched.due is None

    clock.advance(5)
    assert sched.update() == 0
    assert calls == []


def test_cancel_when_idle_is_harmless():
    sched = SchedulerManager(clock=FakeClock())
    sched.cancel()
    assert not sched.pending


def test_sequence_steps_timed_from_previous_deadline():
    clock = FakeClock()
    sched = SchedulerManager(clock=clock)
    calls, make = _recorder()

    sched.schedule_sequence([(1.0, make("a")), (0.5, make("b")), (1.0, make("c"))])

    clock.advance(1.0)
    sched.update()
    assert calls == ["a"]

    clock.advance(0.49)
    sched.update()
    assert calls == ["a"]

    clock.advance(0.01)
    sched.update()
    assert calls == ["a", "b"]

    clock.advance(1.0)
    sched.update()
    assert calls == ["a", "b", "c"]
    assert not sched.pending


def test_late_update_fires_every_due_step_in_order():
    clock = FakeClock()
    sched = SchedulerManager(clock=clock)
    calls, make = _recorder()

    sched.schedule_sequence([(1.0, make("a")), (1.0, make("b")), (1.0, make("c"))])
    clock.advance(2.5)
    assert sched.update() == 2
    assert calls == ["a", "b"]

    # "c" is due at 3.0 from the start, not 1.0 after the late update
    clock.advance(0.5)
    assert sched.update() == 1
    assert calls == ["a", "b", "c"]


def test_action_may_schedule_replacement():
    clock = FakeClock()
    sched = SchedulerManager(clock=clock)
    calls = []

    def first():
        calls.append("first")
        sched.schedule(1.0, lambda: calls.append("second"))

    sched.schedule(1.0, first)
    clock.advance(1.0)
    sched.update()
    assert calls == ["first"]
    assert sched.pending

    clock.advance(1.0)
    sched.update()
    assert calls == ["first", "second"]


def test_action_may_cancel_rest_of_sequence():
    clock = FakeClock()
    sched = SchedulerManager(clock=clock)
    calls = []

    def stop():
        calls.append("stop")
        sched.cancel()

    sched.schedule_sequence([(1.0, stop), (1.0, lambda: calls.append("never"))])
    clock.advance(5)
    sched.update()
    assert calls == ["stop"]
    assert not sched.pending


def test_zero_delay_fires_on_next_update():
    clock = FakeClock()
    sched = SchedulerManager(clock=clock)
    calls, make = _recorder()
    sched.schedule(0, make("now"))
    assert sched.update() == 1
    assert calls == ["now"]


def test_explicit_now_argument():
    clock = FakeClock(start=0)
    sched = SchedulerManager(clock=clock)
    calls, make = _recorder()
    sched.schedule(2.0, make("a"))
    assert sched.update(now=1999) == 0
    assert sched.update(now=2000) == 1


def test_deadline_survives_tick_wraparound():
    # adafruit_ticks counts in a 2**29 ms ring
    clock = FakeClock(start=(1 << 29) - 500)
    sched = SchedulerManager(clock=clock)
    calls, make = _recorder()

    sched.schedule(1.0, make("a"))
    clock.ms = 400  # wrapped, 900 ms later
    assert sched.update() == 0
    clock.ms = 500
    assert sched.update() == 1
    assert calls == ["a"]


@pytest.mark.asyncio
async def test_run_loop_fires_due_steps():
    clock = FakeClock()
    sched = SchedulerManager(clock=clock)
    fired = asyncio.Event()

    sched.schedule(1.0, fired.set)
    task = asyncio.create_task(sched.run(poll_interval=0))
    await asyncio.sleep(0)
    assert not fired.is_set()

    clock.advance(1.0)
    await asyncio.wait_for(fired.wait(), timeout=1.0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_run_loop_stops_when_condition_met():
    clock = FakeClock()
    sched = SchedulerManager(clock=clock)
    done = []

    sched.schedule(1.0, lambda: done.append(True))
    clock.advance(1.0)
    await asyncio.wait_for(sched.run(poll_interval=0, until=lambda: bool(done)), timeout=1.0)
    assert done == [True]
    assert not sched.pending
