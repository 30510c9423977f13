"""Text rendering of the playfield and the menu screens.

Every function returns a string ready for :meth:`termtris.terminal.Terminal.draw`.
Cells are two characters wide so the board keeps a roughly square aspect in
a terminal.  Colours are plain ANSI escapes and can be turned off.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from .board import EMPTY, GHOST, VALUE_PIECES, WALL, Grid
from .game_state import GameState
from .tetromino import BLOCK_SIZE, TetrominoType, cell_at

RESET = "\033[0m"
BLOCK = "██"
GHOST_GLYPH = "░░"
BLANK = "  "

PIECE_COLORS = {
    TetrominoType.I: "\033[96m",
    TetrominoType.O: "\033[93m",
    TetrominoType.T: "\033[95m",
    TetrominoType.S: "\033[92m",
    TetrominoType.Z: "\033[91m",
    TetrominoType.J: "\033[94m",
    TetrominoType.L: "\033[38;5;208m",
}
WALL_COLOR = "\033[90m"
GHOST_COLOR = "\033[37m"

# Width of the side panel next to the board, in characters.
PANEL_WIDTH = 13

CONTROLS = "A/D move  W rotate  S soft  SPACE hard  P pause  G ghost  Q quit"


def _paint(glyph: str, color: str, colors: bool) -> str:
    return f"{color}{glyph}{RESET}" if colors else glyph


def cell_glyph(value: int, colors: bool = True) -> str:
    """Return the two-character drawing of a grid cell value."""

    if value == EMPTY:
        return BLANK
    if value == WALL:
        return _paint(BLOCK, WALL_COLOR, colors)
    if value == GHOST:
        return _paint(GHOST_GLYPH, GHOST_COLOR, colors)
    shape = VALUE_PIECES[value]
    return _paint(BLOCK, PIECE_COLORS[shape], colors)


@lru_cache(maxsize=None)
def next_piece_preview(shape: Optional[TetrominoType], colors: bool = True) -> Tuple[str, ...]:
    """Return the four text rows showing ``shape`` in its spawn orientation."""

    if shape is None:
        return tuple(BLANK * BLOCK_SIZE for _ in range(BLOCK_SIZE))
    rows = []
    for row in range(BLOCK_SIZE):
        line = "".join(
            _paint(BLOCK, PIECE_COLORS[shape], colors)
            if cell_at(shape, 0, row, col) is not None
            else BLANK
            for col in range(BLOCK_SIZE)
        )
        rows.append(line)
    return tuple(rows)


def ordinal(n: int) -> str:
    """Return ``n`` with its English ordinal suffix (1st, 2nd, 11th, ...)."""

    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _frame_width(grid_width: int) -> int:
    return grid_width * 2 + PANEL_WIDTH


def _panel(preview: Sequence[str], state: GameState) -> List[str]:
    # Preview rows carry colour escapes, so they are padded by their visible width.
    pad = " " * (PANEL_WIDTH - 1 - 2 * BLOCK_SIZE)
    stats = [
        "",
        " SCORE",
        f" {state.score}",
        "",
        " LEVEL",
        f" {state.level}",
        "",
        " LINES",
        f" {state.lines_cleared}",
        "",
        f" GHOST {'on' if state.ghost_enabled else 'off'}",
    ]
    return [
        " NEXT".ljust(PANEL_WIDTH),
        *(" " + row + pad for row in preview),
        *(line.ljust(PANEL_WIDTH) for line in stats),
    ]


def render_frame(grid: Grid, preview: Sequence[str], state: GameState, *, colors: bool = True) -> str:
    """Draw the board with the side panel (next piece, score, level, lines)."""

    height, width = grid.shape
    inner = _frame_width(width)
    panel = _panel(preview, state)
    lines = ["╔" + "═" * inner + "╗"]
    for row in range(height):
        cells = "".join(cell_glyph(int(value), colors) for value in grid[row])
        side = panel[row] if row < len(panel) else " " * PANEL_WIDTH
        lines.append("║" + cells + side + "║")
    lines.append("╚" + "═" * inner + "╝")
    lines.append(CONTROLS)
    return "\n".join(lines) + "\n"


def _box(rows: Sequence[str], width: int) -> str:
    lines = ["╔" + "═" * width + "╗"]
    lines.extend("║" + row + "║" for row in rows)
    lines.append("╚" + "═" * width + "╝")
    return "\n".join(lines) + "\n"


def _centered(text: str, width: int) -> str:
    return text.center(width)


def _label_value(label: str, value: str, width: int) -> str:
    gap = max(1, width - len(label) - len(value) - 2)
    return " " + label + " " * gap + value + " "


def render_start_screen(grid_width: int) -> str:
    width = _frame_width(grid_width)
    blank = " " * width
    return _box(
        [blank, _centered("TETRIS", width), blank, _centered("Press any key to start...", width), blank],
        width,
    )


def render_pause_screen(state: GameState, grid_width: int) -> str:
    width = _frame_width(grid_width)
    blank = " " * width
    rows = [blank] * 3
    rows += [
        _centered("GAME PAUSED", width),
        blank,
        _centered(f"Score: {state.score}", width),
        _centered(f"Level: {state.level}", width),
        _centered(f"Lines: {state.lines_cleared}", width),
        blank,
        _centered("P - Resume", width),
        _centered("Q - Quit", width),
    ]
    rows += [blank] * 3
    return _box(rows, width)


def render_game_over_screen(state: GameState, rank: int, grid_width: int) -> str:
    """Draw the final statistics, the player's rank and the high score list."""

    width = _frame_width(grid_width)
    blank = " " * width
    rows = [
        blank,
        _centered("GAME OVER", width),
        blank,
        _label_value("Final Score:", str(state.score), width),
        _label_value("Level:", str(state.level), width),
        _label_value("Lines Cleared:", str(state.lines_cleared), width),
        blank,
        _centered(f"Your Rank: {ordinal(rank)}", width),
        blank,
    ]
    for position, value in enumerate(state.high_scores, start=1):
        shown = str(value)
        if state.score > 0 and value == state.score:
            shown += " NEW!"
        rows.append(_label_value(ordinal(position), shown, width))
    rows += [blank, _centered("Press R to Restart or Q to Quit", width), blank]
    return _box(rows, width)
