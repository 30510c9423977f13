"""Board representation for the playfield."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Tuple

import numpy as np
from numpy.typing import NDArray

from .tetromino import BLOCK_SIZE, TetrominoType


# Outer dimensions, borders included: a 20x10 playing area framed by a ceiling
# row, a floor row and two side walls.
WIDTH = 12
HEIGHT = 22

Grid = NDArray[np.uint8]

EMPTY = 0
# Mapping from ``TetrominoType`` to the integer stored in the grid.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(TetrominoType)}
VALUE_PIECES = {v: t for t, v in PIECE_VALUES.items()}
WALL = len(PIECE_VALUES) + 1
GHOST = WALL + 1

# New pieces enter through an opening in the ceiling row.
SPAWN_COL = WIDTH // 2 - BLOCK_SIZE // 2
CEILING_GAP = range(SPAWN_COL, SPAWN_COL + BLOCK_SIZE + 1)


def create_empty_grid() -> Grid:
    """Return a new grid with the border walls in place and the ceiling gap open."""

    grid = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
    grid[0, :] = WALL
    grid[-1, :] = WALL
    grid[:, 0] = WALL
    grid[:, -1] = WALL
    grid[0, CEILING_GAP.start:CEILING_GAP.stop] = EMPTY
    return grid


class Board:
    """Playfield holding the walls and the locked cells."""

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()
        self.ghost_positions: List[Tuple[int, int]] = []

    def reset(self) -> None:
        """Return the board to its initial, wall-only state."""

        self.grid = create_empty_grid()
        self.ghost_positions = []

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` holds nothing at all.

        Coordinates outside the board are treated as occupied.
        """

        if self.in_bounds(row, col):
            return bool(self.grid[row, col] == EMPTY)
        return False

    def is_blocked(self, row: int, col: int) -> bool:
        """Return ``True`` if ``(row, col)`` holds a locked cell or a wall.

        Ghost markers are purely visual and never block.  Coordinates outside
        the board are blocked.
        """

        if self.in_bounds(row, col):
            return int(self.grid[row, col]) not in (EMPTY, GHOST)
        return True

    def in_play_columns(self, col: int) -> bool:
        """Return ``True`` if ``col`` lies between the side walls."""

        return 1 <= col < self.width - 1

    def clear_lines(self) -> int:
        """Clear completed rows of the playing area and return how many were removed.

        Rows above a cleared row move down preserving their order and the
        vacated rows at the top of the playing area become empty.  The ceiling
        row, the floor and the side walls are never touched.
        """

        play = self.grid[1:-1, 1:-1]
        full_rows = np.all((play != EMPTY) & (play != GHOST), axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = play[~full_rows]
            new_rows = np.zeros((cleared, self.width - 2), dtype=self.grid.dtype)
            self.grid[1:-1, 1:-1] = np.vstack((new_rows, remaining))
        return cleared

    def place_ghost(self, cells: Iterable[Tuple[int, int]]) -> None:
        """Mark ``cells`` with the ghost marker where they are empty."""

        for row, col in cells:
            if self.in_bounds(row, col) and self.grid[row, col] == EMPTY:
                self.grid[row, col] = GHOST
                self.ghost_positions.append((row, col))

    def clear_ghost(self) -> None:
        """Erase the ghost markers written by the last :meth:`place_ghost`."""

        for row, col in self.ghost_positions:
            if self.grid[row, col] == GHOST:
                self.grid[row, col] = EMPTY
        self.ghost_positions = []

    def sweep_rows(self) -> Iterator[int]:
        """Fill the playing area with wall cells from the bottom up.

        Yields the index of each row right after it is filled so the caller
        can draw the intermediate frames.
        """

        for row in range(self.height - 2, 0, -1):
            self.grid[row, 1:-1] = WALL
            yield row
