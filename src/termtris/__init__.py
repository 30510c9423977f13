"""Terminal falling-block puzzle game: playfield engine and game state machine."""

from .board import Board
from .tetromino import Tetromino, TetrominoType, cell_at, shape_blocks
from .game_state import GameState
from .game import Game, GameEvent, Phase
from .keys import Key, decode_key, decode_keys, split_keys
from .scoring import LineClear, drop_interval_ms, level_for_lines, line_clear_score
from .utils import can_move, can_spawn, ghost_piece, place_piece, place_piece_safe
from .highscores import HighScoreStore, merge_score
from .config import GameConfig

__all__ = [
    "Board",
    "Tetromino",
    "TetrominoType",
    "GameState",
    "Game",
    "GameEvent",
    "Phase",
    "Key",
    "LineClear",
    "HighScoreStore",
    "GameConfig",
    "can_move",
    "can_spawn",
    "cell_at",
    "decode_key",
    "decode_keys",
    "drop_interval_ms",
    "ghost_piece",
    "level_for_lines",
    "line_clear_score",
    "merge_score",
    "place_piece",
    "place_piece_safe",
    "shape_blocks",
    "split_keys",
]
