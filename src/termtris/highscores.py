"""Plain-text high score list.

The file holds one integer per line, highest first.  Nothing else is stored.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Tuple, Union

LOGGER = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


def merge_score(scores: Sequence[int], score: int, limit: int = DEFAULT_LIMIT) -> Tuple[List[int], int]:
    """Insert ``score`` into ``scores`` and return ``(top_scores, rank)``.

    ``top_scores`` is sorted in descending order and truncated to ``limit``
    entries.  ``rank`` is the 1-based position of the first entry equal to
    ``score``, or ``len(top_scores) + 1`` when the score did not make the list.
    """

    merged = sorted([*scores, score], reverse=True)[:limit]
    for index, value in enumerate(merged):
        if value == score:
            return merged, index + 1
    return merged, len(merged) + 1


class HighScoreStore:
    """Load and save the sorted top-N list at ``path``."""

    def __init__(self, path: Union[str, Path], *, limit: int = DEFAULT_LIMIT) -> None:
        self.path = Path(path)
        self.limit = limit

    def load(self) -> List[int]:
        """Return the stored scores, highest first.

        A missing or unreadable file yields an empty list; malformed lines are
        skipped.
        """

        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            LOGGER.warning("Could not read high scores from %s: %s", self.path, exc)
            return []

        scores: List[int] = []
        for number, line in enumerate(text.splitlines(), start=1):
            line = line.strip()
            if not line:
                continue
            try:
                scores.append(int(line))
            except ValueError:
                LOGGER.warning("Ignoring malformed high score on line %d of %s", number, self.path)
        scores.sort(reverse=True)
        return scores[: self.limit]

    def save(self, score: int) -> Tuple[List[int], int]:
        """Add ``score`` to the stored list and return ``(top_scores, rank)``."""

        scores, rank = merge_score(self.load(), score, self.limit)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("".join(f"{value}\n" for value in scores), encoding="utf-8")
        except OSError as exc:
            LOGGER.warning("Could not save high scores to %s: %s", self.path, exc)
        return scores, rank
