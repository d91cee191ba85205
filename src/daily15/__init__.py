"""Daily15 puzzle engines.

- daily: seeded random source and date-derived puzzle numbering
- sliding: the daily 4x4 and timed 3x3 sliding-tile engine
- genius: the 6x6 Genius Grid packing engine
- effects: side-effect interface the engines report completions through
"""

from .effects import Celebration, Effects, LoggingEffects, RecordingEffects
from .sliding import SlidingPuzzleGame
from .genius import GeniusGridGame

__all__ = [
    "Celebration",
    "Effects",
    "LoggingEffects",
    "RecordingEffects",
    "SlidingPuzzleGame",
    "GeniusGridGame",
]

__version__ = "0.1.0"
