from __future__ import annotations

import logging
from typing import Callable, Dict, List

import pygame

logger = logging.getLogger(__name__)


class PygameTimer:
    def __init__(self, source: "PygameTickSource", event_type: int) -> None:
        self._source = source
        self.event_type = event_type
        self.cancelled = False

    def cancel(self) -> None:
        # the event type may already serve a newer timer
        if self.cancelled:
            return
        self.cancelled = True
        self._source.cancel(self.event_type)


class PygameTickSource:
    """Tick source backed by `pygame.time.set_timer`.

    Each live schedule owns a custom event type. Cancelling stops the timer,
    drops its queued events and returns the type to a free list for reuse.
    """

    def __init__(self) -> None:
        self._callbacks: Dict[int, Callable[[], None]] = {}
        self._free: List[int] = []

    def schedule(self, interval: float, callback: Callable[[], None]) -> PygameTimer:
        event_type = self._free.pop() if self._free else pygame.event.custom_type()
        self._callbacks[event_type] = callback
        pygame.time.set_timer(event_type, int(interval * 1000))
        return PygameTimer(self, event_type)

    def cancel(self, event_type: int) -> None:
        if self._callbacks.pop(event_type, None) is None:
            return
        pygame.time.set_timer(event_type, 0)
        pygame.event.clear(event_type)
        self._free.append(event_type)

    def dispatch(self, event: pygame.event.Event) -> bool:
        callback = self._callbacks.get(event.type)
        if callback is None:
            return False
        callback()
        return True

    def close(self) -> None:
        for event_type in list(self._callbacks):
            self.cancel(event_type)
