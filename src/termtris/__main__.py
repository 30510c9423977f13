"""Play in the terminal.

Run with: `python -m termtris` (or the `termtris` console script).

Controls: A/D or Left/Right move, W or Up rotates, S/X or Down soft-drops,
Space hard-drops, P pauses, G toggles the ghost piece and Q quits.
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .config import GameConfig
from .highscores import DEFAULT_LIMIT
from .run_terminal import GameRunner

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="termtris", description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece generator.")
    parser.add_argument("--no-ghost", dest="ghost", action="store_false", help="Start with the ghost piece hidden.")
    parser.add_argument("--no-sound", dest="sound", action="store_false", help="Disable sound cues and music.")
    parser.add_argument("--sound-dir", default=None, help="Directory holding the .wav sound files.")
    parser.add_argument(
        "--highscores",
        default=None,
        help="High score file (default: $TERMTRIS_HIGHSCORES or ./highscores.txt).",
    )
    parser.add_argument(
        "--max-scores",
        type=int,
        default=DEFAULT_LIMIT,
        help="Number of high scores to keep.",
    )
    parser.add_argument("--no-color", dest="color", action="store_false", help="Draw without ANSI colours.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write log messages to this file instead of stderr.",
    )
    parser.set_defaults(ghost=True, sound=True, color=True)
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        filename=args.log_file,
    )
    try:
        config = GameConfig.from_args(args)
    except ValueError as exc:
        raise SystemExit(f"termtris: {exc}") from None

    try:
        GameRunner.from_config(config).run()
    except KeyboardInterrupt:
        LOGGER.info("Interrupted")


if __name__ == "__main__":
    main()
