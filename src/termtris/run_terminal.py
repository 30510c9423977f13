"""Terminal front-end for the game engine.

:class:`GameRunner` glues a :class:`~termtris.game.Game` to the terminal,
the sound cues and the high score file.  Each loop iteration polls at most
one key, advances gravity by one sub-tick, draws a frame and sleeps for the
rest of the sub-tick.  Sound and persistence are only touched here, between
simulation steps.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .board import Board
from .config import GameConfig
from .game import Game, Phase
from .highscores import HighScoreStore, merge_score
from .keys import Key
from .render import (
    next_piece_preview,
    render_frame,
    render_game_over_screen,
    render_pause_screen,
    render_start_screen,
)
from .sound import SoundManager
from .terminal import Terminal

LOGGER = logging.getLogger(__name__)

PAUSE_POLL_SECONDS = 0.1
# Pause on the final board before the sweep starts.
GAME_OVER_HOLD_SECONDS = 0.8
SWEEP_DELAY_SECONDS = 0.05


class GameRunner:
    """Run the start screen, the game loop and the game over prompt."""

    def __init__(
        self,
        game: Game,
        terminal: Terminal,
        *,
        sound: Optional[SoundManager] = None,
        scores: Optional[HighScoreStore] = None,
        colors: bool = True,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.game = game
        self.terminal = terminal
        self.sound = sound
        self.scores = scores
        self.colors = colors
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: GameConfig) -> "GameRunner":
        game = Game(seed=config.seed, ghost_enabled=config.ghost_enabled)
        sound = SoundManager(config.sound_dir, enabled=config.sound_enabled)
        scores = HighScoreStore(config.highscore_path, limit=config.max_high_scores)
        return cls(game, Terminal(), sound=sound, scores=scores, colors=config.colors)

    def run(self) -> None:
        """Play until the user declines to restart."""

        if self.scores is not None:
            self.game.state.high_scores = self.scores.load()
        try:
            with self.terminal:
                self.terminal.draw(render_start_screen(Board.width))
                self.terminal.wait_for_key()
                self.game.start()
                self._dispatch_events()
                while self.game.phase is not Phase.TERMINATED:
                    self._play()
                    self._finish()
        finally:
            if self.sound is not None:
                self.sound.shutdown()

    def _play(self) -> None:
        pause_drawn = False
        while self.game.phase in (Phase.PLAYING, Phase.PAUSED):
            key = self.terminal.poll()
            if key is not Key.NONE:
                self.game.handle_key(key)
                if key in (Key.HARD_DROP, Key.PAUSE):
                    self.terminal.flush()
            self._dispatch_events()

            if self.game.phase is Phase.PAUSED:
                if not pause_drawn:
                    self.terminal.draw(render_pause_screen(self.game.state, Board.width))
                    pause_drawn = True
                self._sleep(PAUSE_POLL_SECONDS)
                continue
            pause_drawn = False
            if self.game.phase is not Phase.PLAYING:
                break

            self.game.tick()
            self._dispatch_events()
            self._draw_frame()
            self._sleep(self.game.tick_interval)

    def _finish(self) -> None:
        """Show the end of the run and wait for the restart/quit decision."""

        state = self.game.state
        if not state.quit_by_user:
            self.game.show_final_piece()
            self._draw_frame()
            self.terminal.flush()
            self._sleep(GAME_OVER_HOLD_SECONDS)
            self.terminal.flush()
            for _ in self.game.game_over_sweep():
                self._draw_frame()
                self._sleep(SWEEP_DELAY_SECONDS)
            self.terminal.flush()

        rank = self._record_score()
        self.terminal.draw(render_game_over_screen(state, rank, Board.width))
        if self.terminal.wait_for_key() is Key.RESTART:
            self.game.restart()
        else:
            self.game.terminate()
        self._dispatch_events()

    def _record_score(self) -> int:
        state = self.game.state
        if self.scores is not None:
            state.high_scores, rank = self.scores.save(state.score)
        else:
            state.high_scores, rank = merge_score(state.high_scores, state.score)
        LOGGER.info("Final score %d ranked %d", state.score, rank)
        return rank

    def _draw_frame(self) -> None:
        state = self.game.state
        grid = self.game.compose_frame()
        preview = next_piece_preview(state.upcoming, self.colors)
        self.terminal.draw(render_frame(grid, preview, state, colors=self.colors))

    def _dispatch_events(self) -> None:
        for event in self.game.drain_events():
            LOGGER.debug("Event %s", event.value)
            if self.sound is not None:
                self.sound.play(event)


__all__ = ["GameRunner"]
