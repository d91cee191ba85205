"""Daily seeding helpers.

- SeededRandom: reproducible [0, 1) sequence from an integer seed
- daily_seed / puzzle_number: derive the day's seed and sequential number
- share_text: the result line handed to the clipboard
"""

from .seeded_random import SeededRandom
from .epoch import DEFAULT_EPOCH, daily_seed, puzzle_number, share_text

__all__ = [
    "SeededRandom",
    "DEFAULT_EPOCH",
    "daily_seed",
    "puzzle_number",
    "share_text",
]
