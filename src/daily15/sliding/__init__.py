"""Sliding-tile puzzle engine.

- SlidingBoard: flat tile array with walk-based shuffling
- SlidingPuzzleGame: daily and timed state machine
- RankingTiers / rank: move-count performance tiers
- Countdown / ManualClock: the cancellable one-second tick
"""

from .board import EMPTY, SlidingBoard
from .rules import DEFAULT_TIERS, RankingTiers, rank
from .timer import Countdown, ManualClock, TickSource, TimerHandle
from .core import MODES, Phase, SlidingConfig, SlidingPuzzleGame

__all__ = [
    "EMPTY",
    "SlidingBoard",
    "DEFAULT_TIERS",
    "RankingTiers",
    "rank",
    "Countdown",
    "ManualClock",
    "TickSource",
    "TimerHandle",
    "MODES",
    "Phase",
    "SlidingConfig",
    "SlidingPuzzleGame",
]
