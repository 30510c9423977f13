from __future__ import annotations

from pathlib import Path

import pytest

from termtris.__main__ import parse_args
from termtris.config import HIGHSCORE_ENV, GameConfig, default_highscore_path
from termtris.highscores import DEFAULT_LIMIT


def test_defaults(monkeypatch) -> None:
    monkeypatch.delenv(HIGHSCORE_ENV, raising=False)
    config = GameConfig.from_args(parse_args([]))
    assert config.seed is None
    assert config.ghost_enabled and config.sound_enabled and config.colors
    assert config.sound_dir is None
    assert config.highscore_path == Path("highscores.txt")
    assert config.max_high_scores == DEFAULT_LIMIT


def test_options_are_applied(tmp_path: Path) -> None:
    args = parse_args([
        "--seed", "5",
        "--no-ghost",
        "--no-sound",
        "--no-color",
        "--sound-dir", str(tmp_path),
        "--highscores", str(tmp_path / "hs.txt"),
        "--max-scores", "3",
    ])
    config = GameConfig.from_args(args)
    assert config.seed == 5
    assert not config.ghost_enabled
    assert not config.sound_enabled
    assert not config.colors
    assert config.sound_dir == tmp_path
    assert config.highscore_path == tmp_path / "hs.txt"
    assert config.max_high_scores == 3


def test_highscore_path_from_environment(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv(HIGHSCORE_ENV, str(tmp_path / "env.txt"))
    assert default_highscore_path() == tmp_path / "env.txt"


def test_max_scores_must_be_positive() -> None:
    with pytest.raises(ValueError):
        GameConfig.from_args(parse_args(["--max-scores", "0"]))
