"""Sound cues played through ``pygame.mixer``.

Sounds are optional.  Each cue is loaded from ``sound_dir`` when the file
exists; a missing file silences that cue and a missing audio device silences
them all.  The game never waits for or depends on audio.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

from .game import GameEvent

LOGGER = logging.getLogger(__name__)

DEFAULT_SOUND_DIR = Path(__file__).resolve().parent / "sounds"

SOUND_FILES: Dict[GameEvent, str] = {
    GameEvent.LINE_CLEAR: "line.wav",
    GameEvent.TETRIS: "4_lines.wav",
    GameEvent.LEVEL_UP: "level_up.wav",
    GameEvent.LOCK: "piece_landed.wav",
    GameEvent.SOFT_DROP: "soft_drop.wav",
    GameEvent.HARD_DROP: "hard_drop.wav",
    GameEvent.GAME_OVER: "game_over.wav",
}
MUSIC_FILE = "background.wav"


class SoundManager:
    """Fire-and-forget player for :class:`~termtris.game.GameEvent` cues."""

    def __init__(self, sound_dir: Union[str, Path, None] = None, *, enabled: bool = True) -> None:
        self.sound_dir = Path(sound_dir) if sound_dir is not None else DEFAULT_SOUND_DIR
        self.enabled = enabled
        self._sounds: Dict[GameEvent, "pygame.mixer.Sound"] = {}
        self._music_loaded = False
        if self.enabled:
            self._init_mixer()

    def _init_mixer(self) -> None:
        names = [*SOUND_FILES.values(), MUSIC_FILE]
        if not any((self.sound_dir / name).exists() for name in names):
            LOGGER.info("No sound files in %s, continuing without sound", self.sound_dir)
            self.enabled = False
            return
        try:
            # Small buffer keeps the cue latency low.
            pygame.mixer.pre_init(44100, -16, 2, 512)
            pygame.mixer.init()
        except pygame.error as exc:
            LOGGER.warning("Audio unavailable, continuing without sound: %s", exc)
            self.enabled = False
            return

        for event, name in SOUND_FILES.items():
            sound = self._load(self.sound_dir / name)
            if sound is not None:
                self._sounds[event] = sound

        music = self.sound_dir / MUSIC_FILE
        if music.exists():
            try:
                pygame.mixer.music.load(str(music))
                self._music_loaded = True
            except pygame.error as exc:
                LOGGER.warning("Could not load music %s: %s", music, exc)

    def _load(self, path: Path) -> Optional["pygame.mixer.Sound"]:
        if not path.exists():
            LOGGER.debug("No sound file at %s", path)
            return None
        try:
            return pygame.mixer.Sound(str(path))
        except pygame.error as exc:
            LOGGER.warning("Could not load sound %s: %s", path, exc)
            return None

    @property
    def loaded_events(self) -> frozenset:
        return frozenset(self._sounds)

    def play(self, event: GameEvent) -> None:
        """Trigger the cue for ``event`` if one is available."""

        if not self.enabled:
            return
        if event is GameEvent.BACKGROUND_START:
            if self._music_loaded:
                pygame.mixer.music.play(-1)
        elif event is GameEvent.BACKGROUND_STOP:
            if self._music_loaded:
                pygame.mixer.music.stop()
        else:
            sound = self._sounds.get(event)
            if sound is not None:
                sound.play()

    def shutdown(self) -> None:
        if not self.enabled:
            return
        pygame.mixer.quit()
        self.enabled = False
