from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

import numpy as np


Shape = np.ndarray


def rotate_shape(shape: Sequence[Sequence[int]] | Shape) -> Shape:
    """Rotate a binary matrix 90 degrees clockwise: out[j][rows-1-i] = in[i][j]"""
    return np.rot90(np.asarray(shape, dtype=np.int8), 1, axes=(1, 0))


def rotated(shape: Sequence[Sequence[int]] | Shape, rotation: int) -> Shape:
    result = np.asarray(shape, dtype=np.int8)
    for _ in range(rotation % 4):
        result = rotate_shape(result)
    return result


@dataclass(frozen=True)
class PieceSpec:
    shape: Tuple[Tuple[int, ...], ...]
    color: str
    name: str

    @property
    def area(self) -> int:
        return sum(sum(row) for row in self.shape)


PIECES_CONFIG: Dict[str, PieceSpec] = {
    "I1": PieceSpec(((1,),), "#8B4513", "Oak"),
    "I2": PieceSpec(((1, 1),), "#A0522D", "Sienna"),
    "I3": PieceSpec(((1, 1, 1),), "#CD853F", "Peru"),
    "I4": PieceSpec(((1, 1, 1, 1),), "#556B2F", "Olive"),
    "I5": PieceSpec(((1, 1, 1, 1, 1),), "#2E8B57", "Sea"),
    "L3": PieceSpec(((1, 1), (1, 0)), "#4682B4", "Steel"),
    "L4": PieceSpec(((1, 1, 1), (1, 0, 0)), "#191970", "Midnight"),
    "T4": PieceSpec(((1, 1, 1), (0, 1, 0)), "#483D8B", "Slate"),
    "Z4": PieceSpec(((1, 1, 0), (0, 1, 1)), "#800000", "Maroon"),
}

DAILY_BLOCKERS: Tuple[Tuple[int, int], ...] = ((0, 4), (1, 1), (2, 5), (3, 2), (4, 0), (5, 3))


@dataclass(frozen=True)
class GeniusPiece:
    """A tray piece. Instances are immutable and replaced on rotation."""

    id: str
    spec: PieceSpec
    rotation: int = 0  # 0..3

    @property
    def color(self) -> str:
        return self.spec.color

    @property
    def name(self) -> str:
        return self.spec.name

    def shape(self, rotation: int | None = None) -> Shape:
        if rotation is None:
            rotation = self.rotation
        return rotated(self.spec.shape, rotation)

    def rotated(self, delta: int = 1) -> "GeniusPiece":
        return GeniusPiece(self.id, self.spec, (self.rotation + delta) % 4)
