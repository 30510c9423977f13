from __future__ import annotations

from termtris.board import EMPTY, GHOST, WALL, WIDTH, Board, PIECE_VALUES
from termtris.game_state import GameState
from termtris.render import (
    BLANK,
    BLOCK,
    CONTROLS,
    GHOST_GLYPH,
    PANEL_WIDTH,
    cell_glyph,
    next_piece_preview,
    ordinal,
    render_frame,
    render_game_over_screen,
    render_pause_screen,
    render_start_screen,
)
from termtris.tetromino import TetrominoType


def test_cell_glyphs() -> None:
    assert cell_glyph(EMPTY) == BLANK
    assert cell_glyph(WALL, colors=False) == BLOCK
    assert cell_glyph(GHOST, colors=False) == GHOST_GLYPH
    assert cell_glyph(PIECE_VALUES[TetrominoType.T]).startswith("\033[")


def test_next_piece_preview() -> None:
    rows = next_piece_preview(TetrominoType.O, False)
    assert rows == (BLANK * 4, BLANK + BLOCK * 2 + BLANK, BLANK + BLOCK * 2 + BLANK, BLANK * 4)
    assert next_piece_preview(None, False) == (BLANK * 4,) * 4


def test_ordinal_suffixes() -> None:
    assert [ordinal(n) for n in (1, 2, 3, 4, 11, 12, 13, 21, 22, 101, 111)] == [
        "1st", "2nd", "3rd", "4th", "11th", "12th", "13th", "21st", "22nd", "101st", "111th",
    ]


def test_frame_shows_board_and_stats() -> None:
    state = GameState(score=1500, level=3, lines_cleared=24, ghost_enabled=False)
    board = Board()
    preview = next_piece_preview(TetrominoType.I, False)
    text = render_frame(board.grid, preview, state, colors=False)
    lines = text.rstrip("\n").split("\n")

    assert lines[-1] == CONTROLS
    assert len(lines) == board.height + 3
    # Without colours every framed line has the same width.
    widths = {len(line) for line in lines[:-1]}
    assert widths == {WIDTH * 2 + PANEL_WIDTH + 2}
    assert " 1500" in text
    assert " 24" in text
    assert "GHOST off" in text
    assert "NEXT" in lines[1]


def test_start_and_pause_screens() -> None:
    assert "Press any key to start..." in render_start_screen(WIDTH)
    state = GameState(score=120, level=2, lines_cleared=11)
    text = render_pause_screen(state, WIDTH)
    assert "GAME PAUSED" in text
    assert "Score: 120" in text
    assert "Lines: 11" in text
    assert "P - Resume" in text


def test_game_over_marks_the_new_score() -> None:
    state = GameState(score=500, level=2, lines_cleared=12, high_scores=[900, 500, 300])
    text = render_game_over_screen(state, 2, WIDTH)
    assert "GAME OVER" in text
    assert "Your Rank: 2nd" in text
    assert "500 NEW!" in text
    assert "900 NEW!" not in text
    assert "Press R to Restart or Q to Quit" in text


def test_zero_score_is_never_new() -> None:
    state = GameState(score=0, high_scores=[0])
    assert "NEW!" not in render_game_over_screen(state, 1, WIDTH)
