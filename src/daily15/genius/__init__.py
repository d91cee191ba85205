"""Genius Grid packing puzzle.

- rotate_shape: 90 degree clockwise rotation of a binary matrix
- GeniusGrid: occupancy grid with placement checks and snapping
- GeniusPiece / PieceSpec: tray pieces and their fixed definitions
- GeniusGridGame: selection, placement, removal and undo
"""

from .pieces import DAILY_BLOCKERS, PIECES_CONFIG, GeniusPiece, PieceSpec, rotate_shape, rotated
from .grid import BLOCKER, EMPTY, SNAP_OFFSETS, GeniusGrid
from .logic import BLOCKER_ID, BoardSnapshot, GeniusConfig, GeniusGridGame, Placement, Preview

__all__ = [
    "DAILY_BLOCKERS",
    "PIECES_CONFIG",
    "GeniusPiece",
    "PieceSpec",
    "rotate_shape",
    "rotated",
    "BLOCKER",
    "EMPTY",
    "SNAP_OFFSETS",
    "GeniusGrid",
    "BLOCKER_ID",
    "BoardSnapshot",
    "GeniusConfig",
    "GeniusGridGame",
    "Placement",
    "Preview",
]
