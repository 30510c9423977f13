from __future__ import annotations

import pytest

from termtris.tetromino import (
    BLOCK_SIZE,
    Tetromino,
    TetrominoType,
    cell_at,
    rotate_coords,
    shape_blocks,
)


def _mask(shape: TetrominoType, rotation: int) -> list[list[bool]]:
    return [
        [cell_at(shape, rotation, r, c) is not None for c in range(BLOCK_SIZE)]
        for r in range(BLOCK_SIZE)
    ]


@pytest.mark.parametrize("shape", list(TetrominoType))
def test_four_quarter_turns_restore_every_mask(shape: TetrominoType) -> None:
    for rotation in range(4):
        assert _mask(shape, rotation + 4) == _mask(shape, rotation)
        # Each step is a genuine quarter turn of the previous orientation.
        before = _mask(shape, rotation)
        after = _mask(shape, rotation + 1)
        for r in range(BLOCK_SIZE):
            for c in range(BLOCK_SIZE):
                assert after[r][c] == before[BLOCK_SIZE - 1 - c][r]


def test_rotate_coords_has_order_four() -> None:
    for r in range(BLOCK_SIZE):
        for c in range(BLOCK_SIZE):
            assert rotate_coords(r, c, 4) == (r, c)
            assert rotate_coords(r, c, 1) == (BLOCK_SIZE - 1 - c, r)


def test_every_piece_has_four_cells_in_every_rotation() -> None:
    for shape in TetrominoType:
        for rotation in range(4):
            assert len(shape_blocks(shape, rotation)) == 4


def test_cell_at_returns_symbol() -> None:
    assert cell_at(TetrominoType.I, 0, 0, 1) == "I"
    assert cell_at(TetrominoType.I, 0, 0, 0) is None
    assert cell_at(TetrominoType.T, 0, 2, 0) == "T"


def test_i_piece_turns_horizontal_after_one_rotation() -> None:
    assert shape_blocks(TetrominoType.I, 0) == ((0, 1), (1, 1), (2, 1), (3, 1))
    assert shape_blocks(TetrominoType.I, 1) == ((1, 0), (1, 1), (1, 2), (1, 3))


def test_rotation_is_taken_modulo_four() -> None:
    assert cell_at(TetrominoType.L, 5, 1, 2) == cell_at(TetrominoType.L, 1, 1, 2)
    assert cell_at(TetrominoType.L, -1, 1, 2) == cell_at(TetrominoType.L, 3, 1, 2)


def test_cell_at_rejects_out_of_range_cells() -> None:
    with pytest.raises(IndexError):
        cell_at(TetrominoType.O, 0, 4, 0)
    with pytest.raises(IndexError):
        cell_at(TetrominoType.O, 0, 0, -1)


def test_tetromino_move_rotate_and_blocks() -> None:
    piece = Tetromino(TetrominoType.O, x=3, y=-1)
    assert piece.blocks() == [(0, 4), (0, 5), (1, 4), (1, 5)]
    piece.move(1, 2)
    assert (piece.x, piece.y) == (4, 1)
    piece.rotate()
    piece.rotate(-2)
    assert piece.rotation == 3
    clone = piece.copy()
    clone.move(0, 1)
    assert piece.y == 1
