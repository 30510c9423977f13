"""Tetromino definitions and basic behaviour.

Every piece is described by a 4x4 occupancy template in its spawn orientation.
Rotated orientations are never stored; they are derived on demand by mapping a
queried ``(row, col)`` back onto the spawn template, one quarter turn at a
time.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

BLOCK_SIZE = 4

Template = Tuple[Tuple[int, ...], ...]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes.

    The value doubles as the display symbol of the piece.
    """

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


# Spawn orientation of each tetromino inside its 4x4 box.
TEMPLATES: Dict[TetrominoType, Template] = {
    TetrominoType.I: ((0, 1, 0, 0), (0, 1, 0, 0), (0, 1, 0, 0), (0, 1, 0, 0)),
    TetrominoType.O: ((0, 0, 0, 0), (0, 1, 1, 0), (0, 1, 1, 0), (0, 0, 0, 0)),
    TetrominoType.T: ((0, 0, 0, 0), (0, 1, 0, 0), (1, 1, 1, 0), (0, 0, 0, 0)),
    TetrominoType.S: ((0, 0, 0, 0), (0, 1, 1, 0), (1, 1, 0, 0), (0, 0, 0, 0)),
    TetrominoType.Z: ((0, 0, 0, 0), (1, 1, 0, 0), (0, 1, 1, 0), (0, 0, 0, 0)),
    TetrominoType.J: ((0, 0, 0, 0), (1, 0, 0, 0), (1, 1, 1, 0), (0, 0, 0, 0)),
    TetrominoType.L: ((0, 0, 0, 0), (0, 0, 1, 0), (1, 1, 1, 0), (0, 0, 0, 0)),
}


def rotate_coords(row: int, col: int, rotation: int) -> Tuple[int, int]:
    """Map ``(row, col)`` of a rotated box back onto the spawn template.

    Each quarter turn applies ``(r, c) -> (3 - c, r)``; four turns are the
    identity.
    """

    for _ in range(rotation % 4):
        row, col = BLOCK_SIZE - 1 - col, row
    return row, col


def cell_at(shape: TetrominoType, rotation: int, row: int, col: int) -> Optional[str]:
    """Return the symbol at ``(row, col)`` of ``shape`` or ``None`` if empty.

    ``rotation`` is wrapped so any integer is accepted.

    Raises:
        IndexError: If ``row`` or ``col`` lies outside the 4x4 template.
    """

    if not (0 <= row < BLOCK_SIZE and 0 <= col < BLOCK_SIZE):
        raise IndexError("Template cell out of bounds")
    r, c = rotate_coords(row, col, rotation)
    return shape.value if TEMPLATES[shape][r][c] else None


@lru_cache(maxsize=None)
def shape_blocks(shape: TetrominoType, rotation: int) -> Tuple[Tuple[int, int], ...]:
    """Return the filled ``(row, col)`` offsets of ``shape`` at ``rotation``."""

    return tuple(
        (row, col)
        for row in range(BLOCK_SIZE)
        for col in range(BLOCK_SIZE)
        if cell_at(shape, rotation, row, col) is not None
    )


@dataclass
class Tetromino:
    """Active falling piece in the game.

    ``x``/``y`` locate the top-left corner of the 4x4 template on the board.
    ``y`` may be negative while the piece is still partly above the board.
    """

    shape: TetrominoType
    rotation: int = 0
    x: int = 0
    y: int = 0

    def rotate(self, direction: int = 1) -> None:
        """Rotate the piece by ``direction`` quarter turns (clockwise if positive)."""

        self.rotation = (self.rotation + direction) % 4

    def move(self, dx: int, dy: int) -> None:
        """Move the piece by the given column and row offsets."""

        self.x += dx
        self.y += dy

    def blocks(self, rotation: Optional[int] = None) -> List[Tuple[int, int]]:
        """Return the global ``(row, col)`` coordinates of the filled cells."""

        if rotation is None:
            rotation = self.rotation
        return [(self.y + dr, self.x + dc) for dr, dc in shape_blocks(self.shape, rotation % 4)]

    def copy(self) -> "Tetromino":
        return replace(self)
