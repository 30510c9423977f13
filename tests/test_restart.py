from __future__ import annotations

import numpy as np

from termtris.board import create_empty_grid
from termtris.game import Game, GameEvent, Phase
from termtris.keys import Key
from termtris.scoring import BASE_DROP_INTERVAL_MS


def _played_out_game() -> Game:
    game = Game(seed=7)
    game.start()
    state = game.state
    state.score = 4200
    state.level = 8
    state.lines_cleared = 71
    state.drop_interval_ms = 150
    state.drop_counter = 3
    state.pieces = 90
    state.high_scores = [9000, 4200]
    state.board.grid[10:20, 1:5] = 3
    game.handle_key(Key.GHOST)
    game.handle_key(Key.QUIT)
    game.drain_events()
    return game


def test_restart_resets_the_whole_run() -> None:
    game = _played_out_game()
    assert game.phase is Phase.GAME_OVER
    game.restart()

    state = game.state
    assert game.phase is Phase.PLAYING
    assert (state.score, state.level, state.lines_cleared, state.pieces) == (0, 1, 0, 0)
    assert state.drop_interval_ms == BASE_DROP_INTERVAL_MS
    assert state.drop_counter == 0
    assert not state.quit_by_user
    assert np.array_equal(state.board.grid, create_empty_grid())
    assert state.active is not None and state.active.y == -1
    assert state.upcoming is not None
    assert game.drain_events() == [GameEvent.BACKGROUND_START]


def test_restart_keeps_session_settings() -> None:
    game = _played_out_game()
    game.restart()
    assert not game.state.ghost_enabled
    assert game.state.high_scores == [9000, 4200]


def test_restart_only_from_game_over() -> None:
    game = Game(seed=7)
    game.restart()
    assert game.phase is Phase.START
    game.start()
    game.state.score = 300
    game.restart()
    assert game.state.score == 300


def test_terminate_is_final() -> None:
    game = _played_out_game()
    game.terminate()
    assert game.phase is Phase.TERMINATED
    game.restart()
    assert game.phase is Phase.TERMINATED
