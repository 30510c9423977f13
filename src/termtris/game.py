"""Game state machine driving one run after another.

:class:`Game` owns a :class:`~termtris.game_state.GameState` and advances it
one discrete step at a time: gravity sub-ticks, player actions, locking, line
clears and the transitions between the start screen, play, pause, game over
and termination.  It never sleeps, draws or plays sounds itself; the loop
driver in :mod:`termtris.run_terminal` does that at the iteration boundary,
using :meth:`Game.compose_frame` and the events returned by
:meth:`Game.drain_events`.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Iterator, List, Optional

from .board import Grid
from .game_state import GameState
from .keys import Key
from .scoring import SUBTICKS_PER_DROP, subtick_seconds
from .utils import can_move, ghost_piece, place_piece, place_piece_safe

LOGGER = logging.getLogger(__name__)

# Horizontal offsets tried, in order, when a rotation does not fit in place.
WALL_KICKS = (0, -1, 1, -2, 2, -3, 3)


class Phase(Enum):
    START = "start"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    TERMINATED = "terminated"


class GameEvent(Enum):
    """Notifications for the sound collaborator."""

    LINE_CLEAR = "line_clear"
    TETRIS = "tetris"
    LEVEL_UP = "level_up"
    LOCK = "lock"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    GAME_OVER = "game_over"
    BACKGROUND_START = "background_start"
    BACKGROUND_STOP = "background_stop"


class Game:
    """Single-player game session."""

    def __init__(
        self,
        *,
        seed: Optional[int] = None,
        ghost_enabled: bool = True,
        state: Optional[GameState] = None,
    ) -> None:
        self.state = state or GameState(rng=random.Random(seed))
        self.state.ghost_enabled = ghost_enabled
        self._started = False
        self._terminated = False
        self._events: List[GameEvent] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def phase(self) -> Phase:
        if self._terminated:
            return Phase.TERMINATED
        if not self._started:
            return Phase.START
        if not self.state.running:
            return Phase.GAME_OVER
        if self.state.paused:
            return Phase.PAUSED
        return Phase.PLAYING

    @property
    def tick_interval(self) -> float:
        """Seconds between two logic sub-ticks at the current speed."""

        return subtick_seconds(self.state.level)

    def start(self) -> None:
        """Leave the start screen and begin the first run."""

        if self.phase is not Phase.START:
            return
        self._started = True
        self._new_run()
        LOGGER.info("Game started")

    def restart(self) -> None:
        """Begin a fresh run after a game over.

        Everything belonging to the run is reinitialised: the grid, the pieces,
        the drop counter, score, level, line count and speed.
        """

        if self.phase is not Phase.GAME_OVER:
            return
        self._new_run()
        LOGGER.info("Game restarted")

    def terminate(self) -> None:
        self._terminated = True
        LOGGER.info("Game terminated")

    def quit(self) -> None:
        """End the current run at the user's request."""

        if self.phase not in (Phase.PLAYING, Phase.PAUSED):
            return
        self.state.quit_by_user = True
        self._end_run()

    def _new_run(self) -> None:
        self.state.reset_game()
        self._emit(GameEvent.BACKGROUND_START)
        if not self.state.running:
            self._end_run()

    def _end_run(self) -> None:
        self.state.running = False
        self.state.paused = False
        self._emit(GameEvent.BACKGROUND_STOP)
        self._emit(GameEvent.GAME_OVER)
        LOGGER.info(
            "Game over (%s). Score: %d, level: %d, lines: %d",
            "quit" if self.state.quit_by_user else "topped out",
            self.state.score,
            self.state.level,
            self.state.lines_cleared,
        )

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------
    def tick(self) -> None:
        """Advance gravity by one sub-tick."""

        if self.phase is not Phase.PLAYING:
            return
        state = self.state
        state.drop_counter += 1
        if state.drop_counter < SUBTICKS_PER_DROP:
            return
        state.drop_counter = 0
        self._step_down(mute_lock=False)

    def move(self, dx: int) -> bool:
        """Shift the active piece horizontally if the destination is free."""

        active = self.state.active
        if self.phase is not Phase.PLAYING or active is None:
            return False
        if not can_move(self.state.board, active, dx, 0):
            return False
        active.move(dx, 0)
        return True

    def rotate(self) -> bool:
        """Rotate the active piece clockwise, trying each wall kick in turn.

        Returns ``False`` and leaves the piece untouched when no kick fits.
        """

        active = self.state.active
        if self.phase is not Phase.PLAYING or active is None:
            return False
        new_rotation = (active.rotation + 1) % 4
        for dx in WALL_KICKS:
            if can_move(self.state.board, active, dx, 0, new_rotation):
                active.move(dx, 0)
                active.rotation = new_rotation
                return True
        return False

    def soft_drop(self) -> None:
        if self.phase is not Phase.PLAYING:
            return
        self._emit(GameEvent.SOFT_DROP)
        self._step_down(mute_lock=True)

    def hard_drop(self) -> None:
        """Drop the active piece as far as it goes and lock it."""

        active = self.state.active
        if self.phase is not Phase.PLAYING or active is None:
            return
        self._emit(GameEvent.HARD_DROP)
        while can_move(self.state.board, active, 0, 1):
            active.move(0, 1)
        if active.y < 0:
            self._end_run()
            return
        self._lock(mute_lock=True)

    def toggle_pause(self) -> None:
        if self.phase not in (Phase.PLAYING, Phase.PAUSED):
            return
        self.state.paused = not self.state.paused
        LOGGER.info("Paused" if self.state.paused else "Resumed")

    def toggle_ghost(self) -> None:
        self.state.ghost_enabled = not self.state.ghost_enabled

    def handle_key(self, key: Key) -> None:
        """Apply a decoded key while a run is in progress.

        While paused only pause, ghost and quit are honoured.
        """

        if self.phase not in (Phase.PLAYING, Phase.PAUSED):
            return
        if key is Key.PAUSE:
            self.toggle_pause()
        elif key is Key.GHOST:
            self.toggle_ghost()
        elif key is Key.QUIT:
            self.quit()
        elif self.state.paused:
            return
        elif key is Key.LEFT:
            self.move(-1)
        elif key is Key.RIGHT:
            self.move(1)
        elif key is Key.ROTATE:
            self.rotate()
        elif key is Key.SOFT_DROP:
            self.soft_drop()
        elif key is Key.HARD_DROP:
            self.hard_drop()

    def _step_down(self, *, mute_lock: bool) -> None:
        active = self.state.active
        if active is None:
            return
        if can_move(self.state.board, active, 0, 1):
            active.move(0, 1)
            return
        # A piece resting with its anchor above the board can never lock.
        if active.y < 0:
            self._end_run()
            return
        self._lock(mute_lock=mute_lock)

    def _lock(self, *, mute_lock: bool) -> None:
        state = self.state
        assert state.active is not None
        board = state.board
        board.clear_ghost()
        place_piece(board, state.active, True)
        lines = board.clear_lines()
        outcome = state.piece_locked(lines)
        state.drop_counter = 0

        if lines:
            self._emit(GameEvent.TETRIS if outcome.tetris else GameEvent.LINE_CLEAR)
            if outcome.level_up:
                self._emit(GameEvent.LEVEL_UP)
                LOGGER.info("Level up: %d", state.level)
            LOGGER.info("Cleared %d row(s). Score: %d", lines, state.score)
        elif not mute_lock:
            self._emit(GameEvent.LOCK)
        LOGGER.debug("Locked %s at (%d, %d)", state.active.shape.value, state.active.x, state.active.y)

        state.spawn_tetromino()
        if not state.running:
            self._end_run()

    # ------------------------------------------------------------------
    # Presentation support
    # ------------------------------------------------------------------
    def compose_frame(self) -> Grid:
        """Return a copy of the grid with the ghost and the live piece drawn in.

        The board itself is left as it was: the live piece is erased again
        and the ghost markers are removed by replaying their recorded
        positions.
        """

        state = self.state
        board = state.board
        active = state.active
        if not state.running or active is None:
            return board.grid.copy()

        board.clear_ghost()
        if state.ghost_enabled:
            ghost = ghost_piece(board, active)
            if ghost.y != active.y:
                board.place_ghost(ghost.blocks())
        place_piece(board, active, True)
        frame = board.grid.copy()
        place_piece(board, active, False)
        board.clear_ghost()
        return frame

    def show_final_piece(self) -> None:
        """Make the last piece visible without overwriting the stack."""

        if self.state.active is not None:
            place_piece_safe(self.state.board, self.state.active)

    def game_over_sweep(self) -> Iterator[int]:
        """Run the cosmetic bottom-to-top fill over the frozen board."""

        if self.phase is not Phase.GAME_OVER:
            return iter(())
        return self.state.board.sweep_rows()

    def _emit(self, event: GameEvent) -> None:
        self._events.append(event)

    def drain_events(self) -> List[GameEvent]:
        """Return and forget the events raised since the last call."""

        events, self._events = self._events, []
        return events
