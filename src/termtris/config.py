"""User-tunable settings for a game session."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .highscores import DEFAULT_LIMIT

HIGHSCORE_ENV = "TERMTRIS_HIGHSCORES"
DEFAULT_HIGHSCORE_FILE = "highscores.txt"


def default_highscore_path() -> Path:
    """Return the high score file, honouring ``TERMTRIS_HIGHSCORES``."""

    return Path(os.environ.get(HIGHSCORE_ENV, DEFAULT_HIGHSCORE_FILE))


@dataclass
class GameConfig:
    seed: Optional[int] = None
    ghost_enabled: bool = True
    sound_enabled: bool = True
    sound_dir: Optional[Path] = None
    highscore_path: Path = field(default_factory=default_highscore_path)
    max_high_scores: int = DEFAULT_LIMIT
    colors: bool = True

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "GameConfig":
        """Build a config from the options parsed by :mod:`termtris.__main__`."""

        if args.max_scores < 1:
            raise ValueError("--max-scores must be at least 1")
        return cls(
            seed=args.seed,
            ghost_enabled=args.ghost,
            sound_enabled=args.sound,
            sound_dir=Path(args.sound_dir) if args.sound_dir else None,
            highscore_path=Path(args.highscores) if args.highscores else default_highscore_path(),
            max_high_scores=args.max_scores,
            colors=args.color,
        )
