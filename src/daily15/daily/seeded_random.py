from __future__ import annotations

from typing import Sequence, TypeVar


T = TypeVar("T")

MODULUS = 2147483647
MULTIPLIER = 16807


class SeededRandom:
    """Park-Miller linear congruential generator.

    Two instances built from the same seed yield the same sequence, which is
    what keeps the daily board identical for every player on a given date.
    """

    def __init__(self, seed: int) -> None:
        seed = int(seed)
        # truncated remainder: the sign follows the seed
        state = seed % MODULUS if seed >= 0 else -(-seed % MODULUS)
        # state 0 is absorbing
        if state <= 0:
            state += MODULUS - 1
        if state == 0:
            state = MODULUS - 1
        self._state = state

    def next(self) -> float:
        """Return the next value in [0, 1)"""
        self._state = (self._state * MULTIPLIER) % MODULUS
        return (self._state - 1) / (MODULUS - 1)

    def choice(self, options: Sequence[T]) -> T:
        if not options:
            raise ValueError("Cannot choose from an empty sequence")
        return options[int(self.next() * len(options))]
