"""Recurring one-second ticks for the timed round.

A `TickSource` schedules a callback and returns a handle that must be
cancelled to stop it. `ManualClock` is the headless source used by tests and
the gymnasium environments; the pygame host provides one backed by
`pygame.time.set_timer`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TickSource(Protocol):
    def schedule(self, interval: float, callback: Callable[[], None]) -> TimerHandle: ...


@dataclass
class ManualTimer:
    interval: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualClock:
    """Tick source advanced explicitly, one interval per `advance` step"""

    def __init__(self) -> None:
        self._timers: List[ManualTimer] = []

    def schedule(self, interval: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(interval, callback)
        self._timers.append(timer)
        return timer

    @property
    def active(self) -> int:
        return sum(1 for timer in self._timers if not timer.cancelled)

    def advance(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            for timer in list(self._timers):
                # a callback may cancel timers later in this pass
                if not timer.cancelled:
                    timer.callback()
            self._timers = [timer for timer in self._timers if not timer.cancelled]


class Countdown:
    """Whole-second countdown that calls `on_expire` when it reaches zero.

    Stopping cancels the scheduled timer. Ticks that still arrive from a
    cancelled schedule are dropped by a generation check.
    """

    def __init__(self, seconds: int, source: TickSource, on_expire: Callable[[], None]) -> None:
        self.seconds = int(seconds)
        self.remaining = self.seconds
        self._source = source
        self._on_expire = on_expire
        self._handle: Optional[TimerHandle] = None
        self._generation = 0

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        self.stop()
        generation = self._generation
        self._handle = self._source.schedule(1.0, lambda: self._tick(generation))

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._generation += 1

    def rewind(self) -> None:
        self.stop()
        self.remaining = self.seconds

    def _tick(self, generation: int) -> None:
        if generation != self._generation:
            logger.debug("Dropping tick from a cancelled countdown")
            return
        self.remaining = max(0, self.remaining - 1)
        if self.remaining == 0:
            self.stop()
            self._on_expire()
