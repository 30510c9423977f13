from __future__ import annotations

import numpy as np

from termtris.board import (
    CEILING_GAP,
    EMPTY,
    GHOST,
    HEIGHT,
    PIECE_VALUES,
    WALL,
    WIDTH,
    Board,
)
from termtris.tetromino import TetrominoType


I_VALUE = PIECE_VALUES[TetrominoType.I]
T_VALUE = PIECE_VALUES[TetrominoType.T]


def _fill_row(board: Board, row: int, value: int = I_VALUE) -> None:
    board.grid[row, 1:-1] = value


def test_new_board_has_walls_and_open_ceiling_gap() -> None:
    board = Board()
    assert board.grid.shape == (HEIGHT, WIDTH)
    assert np.all(board.grid[-1] == WALL)
    assert np.all(board.grid[:, 0] == WALL)
    assert np.all(board.grid[:, -1] == WALL)
    for col in range(WIDTH):
        expected = EMPTY if col in CEILING_GAP else WALL
        assert board.grid[0, col] == expected
    assert np.all(board.grid[1:-1, 1:-1] == EMPTY)


def test_clear_lines_without_full_rows_is_noop() -> None:
    board = Board()
    board.grid[HEIGHT - 2, 1:5] = T_VALUE
    before = board.grid.copy()
    assert board.clear_lines() == 0
    assert np.array_equal(board.grid, before)
    assert board.clear_lines() == 0


def test_clear_lines_removes_full_rows_and_keeps_order() -> None:
    board = Board()
    bottom = HEIGHT - 2
    _fill_row(board, bottom)
    board.grid[bottom - 1, 1] = T_VALUE  # partial row A
    _fill_row(board, bottom - 2)
    board.grid[bottom - 3, 2] = T_VALUE  # partial row B
    board.grid[bottom - 3, 3] = I_VALUE

    assert board.clear_lines() == 2

    # Partial rows compacted to the bottom, in their original order.
    assert board.grid[bottom, 1] == T_VALUE
    assert np.count_nonzero(board.grid[bottom, 1:-1]) == 1
    assert board.grid[bottom - 1, 2] == T_VALUE
    assert board.grid[bottom - 1, 3] == I_VALUE
    assert np.count_nonzero(board.grid[bottom - 1, 1:-1]) == 2
    assert np.all(board.grid[1:bottom - 1, 1:-1] == EMPTY)
    # Walls survive.
    assert np.all(board.grid[-1] == WALL)
    assert np.all(board.grid[:, 0] == WALL)
    assert np.all(board.grid[:, -1] == WALL)


def test_clear_four_lines_at_once() -> None:
    board = Board()
    for row in range(HEIGHT - 5, HEIGHT - 1):
        _fill_row(board, row)
    board.grid[HEIGHT - 6, 4] = T_VALUE
    assert board.clear_lines() == 4
    assert board.grid[HEIGHT - 2, 4] == T_VALUE
    assert np.count_nonzero(board.grid[1:-1, 1:-1]) == 1


def test_ghost_markers_do_not_block_or_fill_rows() -> None:
    board = Board()
    row = HEIGHT - 2
    board.grid[row, 1:-2] = I_VALUE
    board.place_ghost([(row, WIDTH - 2), (row, 1)])
    # Only the empty cell received a marker.
    assert board.ghost_positions == [(row, WIDTH - 2)]
    assert not board.is_blocked(row, WIDTH - 2)
    assert board.clear_lines() == 0

    board.clear_ghost()
    assert board.grid[row, WIDTH - 2] == EMPTY
    assert board.ghost_positions == []
    assert board.grid[row, 1] == I_VALUE


def test_clear_ghost_leaves_overwritten_cells_alone() -> None:
    board = Board()
    board.place_ghost([(5, 5)])
    board.grid[5, 5] = T_VALUE
    board.clear_ghost()
    assert board.grid[5, 5] == T_VALUE
    assert GHOST not in board.grid


def test_out_of_board_cells_are_blocked() -> None:
    board = Board()
    assert board.is_blocked(-1, 5)
    assert board.is_blocked(5, WIDTH)
    assert not board.is_empty(HEIGHT, 1)


def test_sweep_fills_rows_bottom_up() -> None:
    board = Board()
    rows = []
    for row in board.sweep_rows():
        rows.append(row)
        assert np.all(board.grid[row, 1:-1] == WALL)
        if row > 1:
            assert np.all(board.grid[row - 1, 1:-1] == EMPTY)
    assert rows == list(range(HEIGHT - 2, 0, -1))
    # Ceiling gap is not part of the sweep.
    assert board.grid[0, CEILING_GAP.start] == EMPTY
