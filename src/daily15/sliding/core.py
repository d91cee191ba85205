from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

from daily15.daily import DEFAULT_EPOCH, SeededRandom, daily_seed, puzzle_number, share_text
from daily15.effects import SLIDING_CELEBRATION, Effects, LoggingEffects

from .board import SlidingBoard
from .rules import RankingTiers
from .timer import Countdown, ManualClock, TickSource

logger = logging.getLogger(__name__)


class Phase(IntEnum):
    SHUFFLING = 0
    WAITING = 1
    PLAYING = 2
    SOLVED = 3
    TIMED_OUT = 4


@dataclass(frozen=True)
class SlidingConfig:
    grid_size: int
    shuffle_moves: int
    time_limit: Optional[int] = None
    seeded_daily: bool = False


MODES: Dict[str, SlidingConfig] = {
    "daily15": SlidingConfig(grid_size=4, shuffle_moves=1500, seeded_daily=True),
    "quickplay": SlidingConfig(grid_size=3, shuffle_moves=100, time_limit=60),
}


class SlidingPuzzleGame:
    """Sliding-tile engine for the daily 4x4 and the timed 3x3 round.

    Every command is a plain method call that either applies fully or returns
    False and leaves the state untouched.
    """

    def __init__(
        self,
        mode: str = "daily15",
        effects: Optional[Effects] = None,
        ticks: Optional[TickSource] = None,
        rules: Optional[RankingTiers] = None,
        today: Optional[date] = None,
        epoch: str = DEFAULT_EPOCH,
        clock: Callable[[], float] = time.monotonic,
        board: Optional[SlidingBoard] = None,
    ) -> None:
        if mode not in MODES:
            raise ValueError(f"Unknown sliding mode {mode!r}; expected one of {sorted(MODES)}")
        self.mode = mode
        self.config = MODES[mode]
        self.effects = effects or LoggingEffects()
        self.ticks = ticks or ManualClock()
        self.rules = rules or RankingTiers()
        self.today = today
        self.epoch = epoch
        self._clock = clock

        self.board = SlidingBoard(self.config.grid_size)
        self.phase = Phase.SHUFFLING
        self.countdown = Countdown(self.config.time_limit or 0, self.ticks, self._on_timeout)
        self.seed: Optional[int] = None
        self.shuffle_path: List[int] = []
        self.started_at: Optional[float] = None
        self.completed_at: Optional[float] = None
        if board is None:
            self.reset()
        else:
            self._adopt(board)

    @classmethod
    def from_tiles(cls, tiles: Sequence[Optional[int]], mode: Optional[str] = None, **kwargs: Any) -> "SlidingPuzzleGame":
        """Start from a given layout instead of a shuffle.

        An unsolved timed layout begins its round straight away.
        """
        board = SlidingBoard.from_tiles(tiles)
        if mode is None:
            mode = next(name for name, cfg in MODES.items() if cfg.grid_size == board.size)
        return cls(mode, board=board, **kwargs)

    # ---------- Queries ----------
    @property
    def is_timed(self) -> bool:
        return self.config.time_limit is not None

    @property
    def solved(self) -> bool:
        return self.phase == Phase.SOLVED

    @property
    def tiles(self) -> List[Optional[int]]:
        return self.board.tiles

    @property
    def move_count(self) -> int:
        return self.board.move_count

    @property
    def time_left(self) -> Optional[int]:
        return self.countdown.remaining if self.is_timed else None

    @property
    def puzzle_number(self) -> int:
        return puzzle_number(self.epoch, self.today)

    @property
    def rank(self) -> str:
        return self.rules.rank(self.board.move_count)

    @property
    def elapsed(self) -> Optional[float]:
        if self.started_at is None:
            return None
        end = self.completed_at if self.completed_at is not None else self._clock()
        return end - self.started_at

    # ---------- Commands ----------
    def reset(self, seed: Optional[int] = None) -> None:
        """Rebuild the board from the solved layout and shuffle it"""
        self.countdown.rewind()
        self.phase = Phase.SHUFFLING
        if seed is None:
            seed = daily_seed(self.today) if self.config.seeded_daily else int(time.time() * 1000)
        board = SlidingBoard(self.config.grid_size)
        self.shuffle_path = board.shuffle(SeededRandom(seed), self.config.shuffle_moves)
        self.board = board
        self.seed = seed
        self.completed_at = None
        if self.is_timed:
            self.started_at = None
            self.phase = Phase.WAITING
        else:
            self.started_at = self._clock()
            self.phase = Phase.PLAYING
        logger.info(f"{self.mode}: new board from seed {seed}, phase {self.phase.name}")

    def start_round(self, seed: Optional[int] = None) -> bool:
        """Reshuffle and start the clock for a timed round"""
        if not self.is_timed:
            return False
        self.reset(seed)
        self._begin_round()
        return True

    def move(self, index: int) -> bool:
        if self.phase != Phase.PLAYING:
            logger.debug(f"Move {index} rejected in phase {self.phase.name}")
            return False
        if not self.board.is_adjacent_to_empty(index):
            logger.debug(f"Move {index} rejected: not next to the empty slot")
            return False
        self.board.swap_into_empty(index)
        self.board.move_count += 1
        if self.board.is_identity():
            self._complete()
        return True

    def move_tile(self, row: int, col: int) -> bool:
        size = self.board.size
        if not (0 <= row < size and 0 <= col < size):
            return False
        return self.move(row * size + col)

    def share(self) -> Optional[str]:
        """Copy the daily result line; only available once the daily board is solved"""
        if self.is_timed or not self.solved:
            return None
        text = share_text(self.board.move_count, self.puzzle_number)
        self.effects.copy_to_clipboard(text)
        return text

    def close(self) -> None:
        self.countdown.stop()

    # ---------- State ----------
    def valid_moves(self) -> List[int]:
        if self.phase != Phase.PLAYING:
            return []
        return self.board.neighbours(self.board.empty_index)

    def get_state(self) -> np.ndarray:
        return self.board.grid()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "size": self.board.size,
            "tiles": self.board.tiles,
            "moves": self.board.move_count,
            "solved": self.solved,
            "phase": self.phase.name.lower(),
            "time_left": self.time_left,
            "puzzle_number": None if self.is_timed else self.puzzle_number,
            "rank": self.rank if self.solved and not self.is_timed else None,
            "elapsed": self.elapsed,
        }

    # ---------- Internals ----------
    def _adopt(self, board: SlidingBoard) -> None:
        size = self.config.grid_size
        if board.size != size:
            raise ValueError(f"Mode {self.mode!r} plays on {size}x{size}, got {board.size}x{board.size}")
        self.board = board
        if board.is_identity():
            self.phase = Phase.SOLVED
        elif self.is_timed:
            self._begin_round()
        else:
            self.started_at = self._clock()
            self.phase = Phase.PLAYING
        logger.info(f"{self.mode}: board set directly, phase {self.phase.name}")

    def _begin_round(self) -> None:
        self.countdown.rewind()
        self.started_at = self._clock()
        self.phase = Phase.PLAYING
        self.countdown.start()
        logger.info(f"{self.mode}: round started with {self.countdown.remaining}s on the clock")

    def _complete(self) -> None:
        self.phase = Phase.SOLVED
        self.countdown.stop()
        self.completed_at = self._clock()
        logger.info(f"{self.mode}: solved in {self.board.move_count} moves")
        self.effects.celebrate(SLIDING_CELEBRATION)

    def _on_timeout(self) -> None:
        if self.phase != Phase.PLAYING:
            return
        self.phase = Phase.TIMED_OUT
        logger.info(f"{self.mode}: time expired after {self.board.move_count} moves")
