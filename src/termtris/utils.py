"""Collision and placement helpers for the game engine."""

from __future__ import annotations

from typing import Optional

from .board import EMPTY, PIECE_VALUES, Board
from .tetromino import Tetromino, TetrominoType, shape_blocks


def fits(board: Board, shape: TetrominoType, rotation: int, x: int, y: int) -> bool:
    """Return ``True`` if ``shape`` at ``rotation`` may occupy anchor ``(x, y)``.

    Every filled cell must lie between the side walls and above the floor.
    Cells on visible rows must not overlap a locked cell.  Cells above the
    board (negative rows) have nothing to collide with and are always legal.
    """

    for dr, dc in shape_blocks(shape, rotation % 4):
        row = y + dr
        col = x + dc
        if not board.in_play_columns(col):
            return False
        if row >= board.height - 1:
            return False
        if row >= 0 and board.is_blocked(row, col):
            return False
    return True


def can_spawn(board: Board, tetromino: Tetromino) -> bool:
    """Return ``True`` if ``tetromino`` may appear at its current position.

    A freshly generated piece failing this check ends the game.
    """

    return fits(board, tetromino.shape, tetromino.rotation, tetromino.x, tetromino.y)


def can_move(
    board: Board,
    tetromino: Tetromino,
    dx: int,
    dy: int,
    rotation: Optional[int] = None,
) -> bool:
    """Return ``True`` if ``tetromino`` can move by ``dx``/``dy`` on ``board``.

    ``rotation`` is the orientation to test at the destination and defaults to
    the current one, so the same check validates moves, drops and rotation
    attempts before they are applied.
    """

    if rotation is None:
        rotation = tetromino.rotation
    return fits(board, tetromino.shape, rotation, tetromino.x + dx, tetromino.y + dy)


def place_piece(board: Board, tetromino: Tetromino, write: bool = True) -> None:
    """Stamp ``tetromino`` into the grid, or erase it when ``write`` is false.

    Cells outside the board are skipped.
    """

    value = PIECE_VALUES[tetromino.shape] if write else EMPTY
    for row, col in tetromino.blocks():
        if board.in_bounds(row, col):
            board.grid[row, col] = value


def place_piece_safe(board: Board, tetromino: Tetromino) -> None:
    """Stamp ``tetromino`` without overwriting any occupied cell."""

    value = PIECE_VALUES[tetromino.shape]
    for row, col in tetromino.blocks():
        if board.is_empty(row, col):
            board.grid[row, col] = value


def ghost_piece(board: Board, tetromino: Tetromino) -> Tetromino:
    """Return a copy of ``tetromino`` moved down to where a hard drop would land."""

    ghost = tetromino.copy()
    while can_move(board, ghost, 0, 1):
        ghost.move(0, 1)
    return ghost
