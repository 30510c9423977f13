"""Line-clear scoring and the level/speed curve."""

from __future__ import annotations

from dataclasses import dataclass

# Base points for the rows removed by a single lock, multiplied by the level.
LINE_SCORES = {1: 100, 2: 300, 3: 500, 4: 800}
LINES_PER_LEVEL = 10

# Logic sub-ticks per gravity step.  Input is polled once per sub-tick so the
# piece stays responsive even when gravity is slow.
SUBTICKS_PER_DROP = 5
BASE_DROP_INTERVAL_MS = 500


@dataclass(frozen=True)
class LineClear:
    """Outcome of locking a piece that removed ``lines`` rows."""

    lines: int
    points: int
    total_lines: int
    level: int
    level_up: bool

    @property
    def tetris(self) -> bool:
        return self.lines == 4


def line_clear_score(lines: int, level: int) -> int:
    """Return the points for clearing ``lines`` rows at ``level``.

    Raises:
        ValueError: If ``lines`` is not between 0 and 4.
    """

    if lines == 0:
        return 0
    try:
        base = LINE_SCORES[lines]
    except KeyError:
        raise ValueError(f"Cannot clear {lines} lines with one piece") from None
    return base * level


def level_for_lines(total_lines: int) -> int:
    """Return the level reached after ``total_lines`` cleared rows."""

    return 1 + total_lines // LINES_PER_LEVEL


def drop_interval_ms(level: int) -> int:
    """Return the gravity interval in milliseconds for ``level``."""

    if level <= 3:
        return BASE_DROP_INTERVAL_MS
    if level <= 6:
        return 300
    if level <= 9:
        return 150
    return 80


def subtick_seconds(level: int) -> float:
    """Return the sleep between two logic sub-ticks at ``level``."""

    return drop_interval_ms(level) / SUBTICKS_PER_DROP / 1000.0


def score_line_clear(lines: int, level: int, total_lines: int) -> LineClear:
    """Apply one lock's line clear to the running totals.

    Points are awarded at the level in effect before the clear; the new level
    is derived from the updated line total.
    """

    points = line_clear_score(lines, level)
    total = total_lines + lines
    new_level = level_for_lines(total)
    return LineClear(
        lines=lines,
        points=points,
        total_lines=total,
        level=new_level,
        level_up=new_level > level,
    )
