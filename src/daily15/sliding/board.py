from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from daily15.daily import SeededRandom


EMPTY = 0
SUPPORTED_SIZES = (3, 4)


class SlidingBoard:
    """Square N-puzzle board.

    Tiles are stored row-major in a flat int8 array. Labels run 1..size*size-1
    and 0 marks the single empty slot.
    """

    def __init__(self, size: int) -> None:
        if size not in SUPPORTED_SIZES:
            raise ValueError(f"Unsupported board size {size}; expected one of {SUPPORTED_SIZES}")
        self.size = int(size)
        self.cells = self.identity(self.size)
        self.empty_index = self.size * self.size - 1
        self.move_count = 0

    @staticmethod
    def identity(size: int) -> np.ndarray:
        cells = np.arange(1, size * size + 1, dtype=np.int8)
        cells[-1] = EMPTY
        return cells

    @classmethod
    def from_tiles(cls, tiles: Sequence[Optional[int]]) -> "SlidingBoard":
        """Build a board from a row-major tile list, `None` being the empty slot"""
        count = len(tiles)
        size = int(round(count ** 0.5))
        if size * size != count:
            raise ValueError(f"Expected a square number of tiles, got {count}")
        values = [EMPTY if tile is None else int(tile) for tile in tiles]
        if sorted(values) != list(range(count)):
            raise ValueError("Tiles must hold each label 1..n-1 exactly once plus one empty slot")
        board = cls(size)
        board.cells = np.array(values, dtype=np.int8)
        board.empty_index = values.index(EMPTY)
        return board

    @property
    def tiles(self) -> List[Optional[int]]:
        return [None if value == EMPTY else int(value) for value in self.cells]

    def is_identity(self) -> bool:
        return bool(np.array_equal(self.cells, self.identity(self.size)))

    def position(self, index: int) -> Tuple[int, int]:
        return divmod(int(index), self.size)

    def neighbours(self, index: int) -> List[int]:
        """Slots sharing an edge with `index`, in up, down, left, right order"""
        row, col = self.position(index)
        options: List[int] = []
        if row > 0:
            options.append(index - self.size)
        if row < self.size - 1:
            options.append(index + self.size)
        if col > 0:
            options.append(index - 1)
        if col < self.size - 1:
            options.append(index + 1)
        return options

    def is_adjacent_to_empty(self, index: int) -> bool:
        if not 0 <= index < self.cells.size:
            return False
        row, col = self.position(index)
        empty_row, empty_col = self.position(self.empty_index)
        return abs(row - empty_row) + abs(col - empty_col) == 1

    def swap_into_empty(self, index: int) -> None:
        """Slide the tile at `index` into the empty slot. Assumes adjacency was checked."""
        self.cells[self.empty_index] = self.cells[index]
        self.cells[index] = EMPTY
        self.empty_index = int(index)

    def shuffle(self, rng: SeededRandom, steps: int) -> List[int]:
        """Walk the empty slot `steps` times; returns each slot it moved into.

        Every board reached this way is solvable, unlike a random permutation.
        """
        path: List[int] = []
        for _ in range(steps):
            target = rng.choice(self.neighbours(self.empty_index))
            self.swap_into_empty(target)
            path.append(target)
        return path

    def grid(self) -> np.ndarray:
        return self.cells.reshape(self.size, self.size).copy()
