"""Genius Grid game logic.

The player selects a piece from the tray, rotates it and clicks the 6x6 grid
to place it. Placement snaps to the nearest valid anchor around the clicked
cell. The puzzle is complete when no empty cell is left.

Placements are the source of truth: each placed piece has one
`Placement(piece_id, row, col, rotation)` record and the cell grid is derived
from the blockers plus those records. Undo history holds immutable
`BoardSnapshot` tuples which share unchanged piece records with the live
state, so saving one never copies the grid.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

from daily15.effects import GENIUS_CELEBRATION, Effects, LoggingEffects

from .grid import BLOCKER, EMPTY, Coordinate, GeniusGrid
from .pieces import DAILY_BLOCKERS, PIECES_CONFIG, GeniusPiece, PieceSpec, rotated

logger = logging.getLogger(__name__)

BLOCKER_ID = "blocker"
ROTATE_KEYS = ("space", " ", "r")


@dataclass
class GeniusConfig:
    """Configuration for the packing puzzle"""
    grid_size: int = 6
    blockers: Tuple[Coordinate, ...] = DAILY_BLOCKERS
    pieces: Mapping[str, PieceSpec] = field(default_factory=lambda: dict(PIECES_CONFIG))


@dataclass(frozen=True)
class Placement:
    piece_id: str
    row: int
    col: int
    rotation: int


@dataclass(frozen=True)
class BoardSnapshot:
    pieces: Tuple[GeniusPiece, ...]
    placements: Tuple[Placement, ...]


@dataclass(frozen=True)
class Preview:
    valid: bool
    cells: Tuple[Coordinate, ...] = ()


class GeniusGridGame:
    """Main game engine for the packing puzzle"""

    def __init__(self, config: GeniusConfig | None = None, effects: Optional[Effects] = None):
        self.config = config or GeniusConfig()
        if self.config.grid_size != 6:
            raise ValueError(f"Genius Grid is played on a 6x6 grid, got {self.config.grid_size}")
        self.effects = effects or LoggingEffects()

        self.pieces: Tuple[GeniusPiece, ...] = ()
        self.placements: Tuple[Placement, ...] = ()
        self.history: List[BoardSnapshot] = []
        self.selected_id: Optional[str] = None
        self.hover_pos: Optional[Coordinate] = None
        self.complete = False
        self._seed()

    def _seed(self) -> None:
        self.pieces = tuple(GeniusPiece(piece_id, spec) for piece_id, spec in self.config.pieces.items())
        self._index: Dict[str, int] = {piece.id: idx for idx, piece in enumerate(self.pieces)}
        self.placements = ()
        self.history = []
        self.selected_id = None
        self.hover_pos = None
        self.grid = GeniusGrid(self.config.grid_size, self.config.blockers)
        self.complete = self.grid.is_full()

    # ---------- Queries ----------
    def piece(self, piece_id: str) -> Optional[GeniusPiece]:
        idx = self._index.get(piece_id)
        return None if idx is None else self.pieces[idx]

    def code_for(self, piece_id: str) -> int:
        return self._index[piece_id] + 1

    def is_placed(self, piece_id: str) -> bool:
        return any(p.piece_id == piece_id for p in self.placements)

    def placement_for(self, piece_id: str) -> Optional[Placement]:
        return next((p for p in self.placements if p.piece_id == piece_id), None)

    def owner_at(self, row: int, col: int) -> Optional[str]:
        """Piece id occupying the cell, or None for empty and blocker cells"""
        if not self.grid.is_inside(row, col):
            return None
        value = int(self.grid.grid[row, col])
        if value in (EMPTY, BLOCKER):
            return None
        return self.pieces[value - 1].id

    @property
    def selected(self) -> Optional[GeniusPiece]:
        return None if self.selected_id is None else self.piece(self.selected_id)

    @property
    def remaining(self) -> int:
        return len(self.pieces) - len(self.placements)

    @property
    def cells(self) -> List[List[Optional[str]]]:
        rows: List[List[Optional[str]]] = []
        for row in self.grid.grid:
            cells: List[Optional[str]] = []
            for value in row:
                if value == EMPTY:
                    cells.append(None)
                elif value == BLOCKER:
                    cells.append(BLOCKER_ID)
                else:
                    cells.append(self.pieces[int(value) - 1].id)
            rows.append(cells)
        return rows

    def is_valid_placement(self, shape: np.ndarray, row: int, col: int) -> bool:
        return self.grid.is_valid_placement(shape, row, col)

    def snap(self, shape: np.ndarray, row: int, col: int) -> Optional[Coordinate]:
        return self.grid.snap(shape, row, col)

    # ---------- Commands ----------
    def select_or_deselect(self, piece_id: str) -> bool:
        if piece_id == self.selected_id:
            self.selected_id = None
            return True
        if piece_id not in self._index or self.is_placed(piece_id):
            logger.debug(f"Cannot select {piece_id!r}")
            return False
        self.selected_id = piece_id
        return True

    def rotate_selected(self) -> bool:
        piece = self.selected
        if piece is None or self.is_placed(piece.id):
            return False
        self._replace_piece(piece.rotated(1))
        return True

    def handle_key(self, key: str) -> bool:
        """Keyboard shortcut: Space or R rotates the selection"""
        if key.lower() in ROTATE_KEYS:
            return self.rotate_selected()
        return False

    def place_selected(self, row: int, col: int) -> bool:
        piece = self.selected
        if piece is None:
            return False
        if self.is_placed(piece.id):
            # undo can put the selected piece back on the board
            return False
        shape = piece.shape()
        anchor = self.grid.snap(shape, row, col)
        if anchor is None:
            logger.debug(f"No anchor for {piece.id} near ({row}, {col})")
            return False

        self._push_history()
        self.grid.fill(self.grid.cells_at(shape, *anchor), self.code_for(piece.id))
        self.placements = self.placements + (Placement(piece.id, anchor[0], anchor[1], piece.rotation),)
        self.selected_id = None
        self.hover_pos = None
        logger.info(f"Placed {piece.id} at {anchor} rotation {piece.rotation}")

        if self.grid.is_full() and not self.complete:
            self.complete = True
            logger.info("Grid complete")
            self.effects.celebrate(GENIUS_CELEBRATION)
        return True

    def remove_from_cell(self, row: int, col: int) -> bool:
        piece_id = self.owner_at(row, col)
        if piece_id is None:
            return False
        self._push_history()
        self.grid.clear(self.code_for(piece_id))
        self.placements = tuple(p for p in self.placements if p.piece_id != piece_id)
        self.selected_id = piece_id
        self.complete = False
        logger.info(f"Removed {piece_id}")
        return True

    def click_cell(self, row: int, col: int) -> bool:
        """Grid click: lift a placed piece, otherwise drop the selection here"""
        if self.owner_at(row, col) is not None:
            return self.remove_from_cell(row, col)
        return self.place_selected(row, col)

    def undo(self) -> bool:
        if not self.history:
            return False
        snapshot = self.history.pop()
        self.pieces = snapshot.pieces
        self.placements = snapshot.placements
        self.grid = self._render(snapshot.placements)
        self.complete = self.grid.is_full()
        logger.info(f"Undo, {len(self.history)} step(s) left")
        return True

    def reset(self) -> None:
        self.effects.reload()
        self._seed()
        logger.info("Genius grid reset")

    def hover(self, row: int, col: int) -> None:
        self.hover_pos = (row, col)

    def clear_hover(self) -> None:
        self.hover_pos = None

    def preview(self) -> Optional[Preview]:
        piece = self.selected
        if piece is None or self.hover_pos is None or self.is_placed(piece.id):
            return None
        shape = piece.shape()
        anchor = self.grid.snap(shape, *self.hover_pos)
        if anchor is None:
            return Preview(valid=False)
        return Preview(valid=True, cells=tuple(self.grid.cells_at(shape, *anchor)))

    # ---------- State ----------
    def get_valid_actions(self) -> List[Tuple[int, int, int, int]]:
        """List of (piece_idx, rotation, row, col) cursor actions that would place a piece"""
        actions: List[Tuple[int, int, int, int]] = []
        placed = {p.piece_id for p in self.placements}
        for piece_idx, piece in enumerate(self.pieces):
            if piece.id in placed:
                continue
            for rotation in range(4):
                shape = piece.shape(rotation)
                for row in range(self.grid.size):
                    for col in range(self.grid.size):
                        if self.grid.snap(shape, row, col) is not None:
                            actions.append((piece_idx, rotation, row, col))
        return actions

    def get_state(self) -> np.ndarray:
        return self.grid.grid.copy()

    def snapshot(self) -> Dict[str, Any]:
        preview = self.preview()
        return {
            "cells": self.cells,
            "pieces": [self._piece_entry(piece) for piece in self.pieces],
            "selected": self.selected_id,
            "remaining": self.remaining,
            "history": len(self.history),
            "complete": self.complete,
            "preview": None if preview is None else {"valid": preview.valid, "cells": list(preview.cells)},
        }

    # ---------- Internals ----------
    def _piece_entry(self, piece: GeniusPiece) -> Dict[str, Any]:
        placement = self.placement_for(piece.id)
        return {
            "id": piece.id,
            "name": piece.name,
            "color": piece.color,
            "rotation": piece.rotation,
            "placed": placement is not None,
            "anchor": None if placement is None else (placement.row, placement.col),
            "shape": piece.shape().tolist(),
        }

    def _replace_piece(self, piece: GeniusPiece) -> None:
        pieces = list(self.pieces)
        pieces[self._index[piece.id]] = piece
        self.pieces = tuple(pieces)

    def _push_history(self) -> None:
        self.history.append(BoardSnapshot(self.pieces, self.placements))

    def _render(self, placements: Tuple[Placement, ...]) -> GeniusGrid:
        grid = GeniusGrid(self.config.grid_size, self.config.blockers)
        for placement in placements:
            spec = self.config.pieces[placement.piece_id]
            shape = rotated(spec.shape, placement.rotation)
            grid.fill(grid.cells_at(shape, placement.row, placement.col), self.code_for(placement.piece_id))
        return grid
