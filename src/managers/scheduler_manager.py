# File: src/managers/scheduler_manager.py
"""
SchedulerManager - a single-slot timer for one puzzle unit.

A unit has at most one pending timed transition. Scheduling anything new
throws away whatever was pending, so a superseded timer can never fire.
A pending entry is a short list of (delay, action) steps; each step falls due
relative to the deadline of the step before it, which keeps multi-step
sequences (the error flash) at a fixed total length however late the
polling loop runs.
"""
import asyncio

from adafruit_ticks import ticks_ms, ticks_add, ticks_diff

from utilities.logger import ModuleLogger


class SchedulerManager:
    """Single pending timer driven by polling ``update()``."""

    DEFAULT_POLL_INTERVAL = 0.05

    def __init__(self, clock=None, unit=None):
        self._clock = clock or ticks_ms
        self._unit = unit
        self._steps = []
        self._due = None

    @staticmethod
    def _to_ms(seconds):
        return max(0, int(round(seconds * 1000)))

    @property
    def pending(self):
        """True while a timed step is waiting to fire."""
        return bool(self._steps)

    @property
    def due(self):
        """Tick deadline of the next step, or None."""
        return self._due

    def schedule(self, delay, action):
        """Run ``action`` after ``delay`` seconds, replacing anything pending."""
        self.schedule_sequence([(delay, action)])

    def schedule_sequence(self, steps):
        """Run each (delay, action) in turn, replacing anything pending."""
        self.cancel()
        self._steps = [(self._to_ms(delay), action) for delay, action in steps]
        if self._steps:
            self._arm(self._clock())
            ModuleLogger.debug("SCHD", f"Scheduled {len(self._steps)} step(s)", unit=self._unit)

    def cancel(self):
        """Drop the pending entry, if any."""
        if self._steps:
            ModuleLogger.debug("SCHD", f"Cancelled {len(self._steps)} pending step(s)", unit=self._unit)
        self._steps = []
        self._due = None

    def _arm(self, start):
        self._due = ticks_add(start, self._steps[0][0])

    def update(self, now=None):
        """
        Fire every step that has fallen due. Returns the number fired.

        The step is removed before its action runs, so an action is free to
        cancel or schedule a replacement.
        """
        fired = 0
        while self._steps:
            current = self._clock() if now is None else now
            if ticks_diff(current, self._due) < 0:
                break

            deadline = self._due
            _, action = self._steps.pop(0)
            if self._steps:
                self._arm(deadline)
            else:
                self._due = None

            action()
            fired += 1
        return fired

    async def run(self, poll_interval=DEFAULT_POLL_INTERVAL, until=None):
        """Cooperative driving loop. Stops once ``until()`` is true, if given."""
        while until is None or not until():
            self.update()
            await asyncio.sleep(poll_interval)
