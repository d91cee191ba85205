"""Side effects the engines hand off to the host.

The engines never draw or talk to the OS themselves; they call into an
`Effects` implementation. `LoggingEffects` is the headless default and
`RecordingEffects` keeps every request for inspection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Protocol, Tuple

logger = logging.getLogger(__name__)

PALETTE: Tuple[str, str, str] = ("#BFA15F", "#2C2C2C", "#F0EFE9")


@dataclass(frozen=True)
class Celebration:
    particle_count: int
    spread: int
    colors: Tuple[str, ...] = PALETTE
    origin_y: float = 0.5


SLIDING_CELEBRATION = Celebration(particle_count=150, spread=70, origin_y=0.6)
GENIUS_CELEBRATION = Celebration(particle_count=200, spread=100)


class Effects(Protocol):
    def celebrate(self, burst: Celebration) -> None: ...

    def copy_to_clipboard(self, text: str) -> None: ...

    def reload(self) -> None: ...


class LoggingEffects:
    def celebrate(self, burst: Celebration) -> None:
        logger.info(f"Celebration: {burst.particle_count} particles, spread {burst.spread}")

    def copy_to_clipboard(self, text: str) -> None:
        logger.info(f"Clipboard requested: {text!r}")

    def reload(self) -> None:
        logger.info("Reload requested")


@dataclass
class RecordingEffects:
    celebrations: List[Celebration] = field(default_factory=list)
    clipboard: List[str] = field(default_factory=list)
    reloads: int = 0

    def celebrate(self, burst: Celebration) -> None:
        self.celebrations.append(burst)

    def copy_to_clipboard(self, text: str) -> None:
        self.clipboard.append(text)

    def reload(self) -> None:
        self.reloads += 1
