from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]

EMPTY = 0
BLOCKER = -1

# right, left, down, up, then the diagonals; the first valid anchor wins
SNAP_OFFSETS: Tuple[Coordinate, ...] = (
    (0, 1), (0, -1), (1, 0), (-1, 0),
    (1, 1), (1, -1), (-1, 1), (-1, -1),
)


class GeniusGrid:
    """Square packing grid.

    0 is an empty cell, -1 a blocker and positive values are piece codes.
    """

    def __init__(self, size: int = 6, blockers: Iterable[Coordinate] = ()) -> None:
        self.size = int(size)
        self.grid = np.zeros((self.size, self.size), dtype=np.int8)
        self.blockers = tuple((int(r), int(c)) for r, c in blockers)
        for r, c in self.blockers:
            if not self.is_inside(r, c):
                raise ValueError(f"Blocker ({r}, {c}) lies outside the {self.size}x{self.size} grid")
            self.grid[r, c] = BLOCKER

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def is_valid_placement(self, shape: np.ndarray, row: int, col: int) -> bool:
        """Check that every occupied cell of `shape` anchored at (row, col) lands on an empty cell"""
        shape = np.asarray(shape)
        h, w = shape.shape
        for i in range(h):
            for j in range(w):
                if not shape[i, j]:
                    continue
                r, c = row + i, col + j
                if not self.is_inside(r, c):
                    return False
                if self.grid[r, c] != EMPTY:
                    return False
        return True

    def snap(self, shape: np.ndarray, row: int, col: int) -> Optional[Coordinate]:
        """Nearest valid anchor for a shape centred on the cursor cell (row, col)"""
        shape = np.asarray(shape)
        h, w = shape.shape
        base_r = row - h // 2
        base_c = col - w // 2
        if self.is_valid_placement(shape, base_r, base_c):
            return base_r, base_c
        for dr, dc in SNAP_OFFSETS:
            if self.is_valid_placement(shape, base_r + dr, base_c + dc):
                logger.debug(f"Snapped ({base_r}, {base_c}) by ({dr}, {dc})")
                return base_r + dr, base_c + dc
        return None

    @staticmethod
    def cells_at(shape: np.ndarray, row: int, col: int) -> List[Coordinate]:
        h, w = shape.shape
        return [(row + i, col + j) for i in range(h) for j in range(w) if shape[i, j]]

    def fill(self, cells: Iterable[Coordinate], value: int) -> int:
        """Write `value` into cells. Assumes the placement was validated."""
        count = 0
        for r, c in cells:
            self.grid[r, c] = value
            count += 1
        return count

    def clear(self, value: int) -> int:
        mask = self.grid == value
        self.grid[mask] = EMPTY
        return int(mask.sum())

    def is_full(self) -> bool:
        return bool(np.all(self.grid != EMPTY))

    def get_filled_ratio(self) -> float:
        return float(np.count_nonzero(self.grid)) / float(self.size * self.size)
