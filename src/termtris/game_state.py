"""High level game state container."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .board import SPAWN_COL, Board
from .scoring import BASE_DROP_INTERVAL_MS, LineClear, drop_interval_ms, score_line_clear
from .tetromino import Tetromino, TetrominoType
from .utils import can_spawn

LOGGER = logging.getLogger(__name__)

# Row of the template anchor for a new piece; one row above the board.
SPAWN_ROW = -1


@dataclass
class GameState:
    """Mutable state for one game session.

    ``ghost_enabled`` and ``high_scores`` belong to the session rather than to
    a single run and survive :meth:`reset_game`.
    """

    board: Board = field(default_factory=Board)
    active: Optional[Tetromino] = None
    upcoming: Optional[TetrominoType] = None
    score: int = 0
    level: int = 1
    lines_cleared: int = 0
    pieces: int = 0
    drop_counter: int = 0
    drop_interval_ms: int = BASE_DROP_INTERVAL_MS
    running: bool = True
    paused: bool = False
    quit_by_user: bool = False
    ghost_enabled: bool = True
    high_scores: List[int] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def _random_type(self) -> TetrominoType:
        """Return a random tetromino type."""

        return self.rng.choice(list(TetrominoType))

    def spawn_tetromino(self) -> Tetromino:
        """Spawn and return a new active tetromino.

        The piece in ``upcoming`` becomes active above the ceiling gap and a
        new upcoming piece is randomly selected.  If the new piece overlaps
        the stack the run ends.
        """

        shape = self.upcoming or self._random_type()
        self.active = Tetromino(shape, x=SPAWN_COL, y=SPAWN_ROW)
        self.upcoming = self._random_type()
        if not can_spawn(self.board, self.active):
            LOGGER.debug("Spawn blocked for %s", shape.value)
            self.running = False
        return self.active

    def update_difficulty(self) -> None:
        self.drop_interval_ms = drop_interval_ms(self.level)

    def piece_locked(self, lines: int) -> LineClear:
        """Record a lock that removed ``lines`` rows and update the totals."""

        outcome = score_line_clear(lines, self.level, self.lines_cleared)
        self.pieces += 1
        self.score += outcome.points
        self.lines_cleared = outcome.total_lines
        self.level = outcome.level
        self.update_difficulty()
        return outcome

    def reset_game(self) -> None:
        """Reset the entire run state and spawn the first piece."""

        self.board = Board()
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
        self.pieces = 0
        self.drop_counter = 0
        self.update_difficulty()
        self.running = True
        self.paused = False
        self.quit_by_user = False
        self.active = None
        self.upcoming = self._random_type()
        self.spawn_tetromino()
