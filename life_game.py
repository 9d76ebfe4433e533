#!/usr/bin/env python3
"""
Terminal Conway's Game of Life
──────────────────────────────
Runs a board until it repeats a state seen within the last --history
generations, or until --max-epochs is reached.

Options
-------
--torus      : Wrap the board edges around.
--pattern    : Start from a built-in pattern instead of a random board.
--file       : Start from a plaintext (.cells) pattern file.
--quiet      : Do not render; print the number of epochs until death.

Press Ctrl-C to quit at any time.
"""

import argparse
import logging
import random
import shutil
import sys
import time
from typing import List, Optional

from colorama import init as colorama_init

from core import PREVS_MAX_LENGTH, Game
from rendering import VALID_HEADER_KEYWORDS, render, render_results
from utils import PATTERN_LIBRARY, count_alive, load_plaintext, place_pattern

logger = logging.getLogger(__name__)


def build_game(args: argparse.Namespace) -> Game:
    """Create the game described by the parsed command-line arguments."""
    if args.file:
        grid = load_plaintext(args.file)
        return Game(grid, is_torus=args.torus, history_size=args.history)

    if args.pattern:
        grid = place_pattern(args.rows, args.cols, PATTERN_LIBRARY[args.pattern])
        return Game(grid, is_torus=args.torus, history_size=args.history)

    rng = random.Random(args.seed)
    return Game.new_random(
        args.cols,
        args.rows,
        is_torus=args.torus,
        rng=rng,
        density=args.density,
        history_size=args.history,
    )


def run(
    game: Game,
    interval: float,
    max_epochs: Optional[int],
    live_cell: str,
    dead_cell: str,
    header_items: str,
) -> str:
    """
    Render and step the game until it dies or reaches max_epochs.

    Returns the reason the run stopped.
    """
    while True:
        board = game.board
        render(
            board,
            game.epochs,
            count_alive(board),
            live_cell,
            dead_cell,
            torus=game.is_torus,
            history=game.history_length,
            header_items=header_items,
        )

        if game.is_dead():
            return "Board repeated a previous state."
        if max_epochs is not None and game.epochs >= max_epochs:
            return "Epoch limit reached."

        game.remember()
        time.sleep(interval)
        game.step()


def run_quiet(game: Game, max_epochs: Optional[int]) -> str:
    """Step without rendering. Returns the reason the run stopped."""
    if max_epochs is None:
        game.step_until_dead()
        return "Board repeated a previous state."

    while not game.is_dead():
        if game.epochs >= max_epochs:
            return "Epoch limit reached."
        game.remember()
        game.step()
    return "Board repeated a previous state."


class ArgmentHelpFormatter_(argparse.ArgumentDefaultsHelpFormatter, argparse.RawTextHelpFormatter): pass

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Console version of Conway's Game of Life with repeat detection.",
        formatter_class=ArgmentHelpFormatter_
    )
    parser.add_argument(
        "-r",
        "--rows",
        type=int,
        default=20,
        help="Number of rows for a random or pattern board.\n"
    )
    parser.add_argument(
        "-c",
        "--cols",
        type=int,
        default=40,
        help="Number of columns for a random or pattern board.\n"
    )
    parser.add_argument(
        "-d",
        "--density",
        type=float,
        default=0.5,
        help="Initial live-cell probability (0–1) for a random board.\n"
    )
    parser.add_argument(
        "-i", "--interval",
        type=float,
        default=0.2,
        help="Delay between generations (seconds).\n"
    )
    parser.add_argument(
        "--max",
        action="store_true",
        help="Fit the board to the current terminal size (overrides rows and columns).\n",
    )
    parser.add_argument(
        "--torus",
        action="store_true",
        help="Enable torus mode (wraparound edges).\n",
    )
    parser.add_argument(
        "--pattern",
        choices=sorted(PATTERN_LIBRARY),
        default=None,
        help="Start from a built-in pattern centered on an empty board.\n",
    )
    parser.add_argument(
        "--file",
        type=str,
        default=None,
        metavar="PATH",
        help="Start from a plaintext (.cells) pattern file.\n",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random board (random if omitted).\n",
    )
    parser.add_argument(
        "--history",
        type=int,
        default=PREVS_MAX_LENGTH,
        metavar="N",
        help=(
            "Number of previous boards kept for repeat detection.\n"
            "Cycles longer than N generations are never detected.\n"
        ),
    )
    parser.add_argument(
        "--max-epochs",
        type=int,
        default=0,
        metavar="N",
        help="Stop after N generations (0 for no limit).\n",
    )
    parser.add_argument(
        "--live-cell",
        type=str,
        default="■",
        help="Character for a live cell. Must be a single character.\n"
    )
    parser.add_argument(
        "--dead-cell",
        type=str,
        default=" ",
        help="Character for a dead cell. Must be a single character.\n"
    )
    parser.add_argument(
        "--header-items",
        type=str,
        default="gen",
        help=(
            "Comma-separated list of items to display in the header.\n"
            "Keywords: mode, size, gen, alive, history.\n"
            "Example: --header-items gen,alive\n"
        ),
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not render; print the number of epochs once the board repeats.\n",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log engine debug messages to stderr.\n",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if len(args.live_cell) != 1:
        sys.exit("Error: --live-cell must be a single character.")
    if len(args.dead_cell) != 1:
        sys.exit("Error: --dead-cell must be a single character.")
    if args.file and args.pattern:
        sys.exit("Error: --file and --pattern cannot be used together.")
    if args.max_epochs < 0:
        sys.exit("Error: --max-epochs must not be negative.")

    if args.max:
        term_size = shutil.get_terminal_size(fallback=(80, 24))
        args.rows = max(1, term_size.lines - 4)
        args.cols = max(1, term_size.columns)

    if args.rows < 1 or args.cols < 1:
        sys.exit("Error: --rows and --cols must be at least 1.")

    if args.header_items:
        user_keywords = {item.strip().lower() for item in args.header_items.split(',') if item.strip()}
        invalid_keywords = user_keywords - VALID_HEADER_KEYWORDS
        if invalid_keywords:
            sorted_invalid = ", ".join(sorted(invalid_keywords))
            sys.exit(f"Error: Invalid keyword(s) in --header-items: {sorted_invalid}")

    if args.history < 100 and not args.quiet:
        print(
            f"Warning: --history value of {args.history} only detects cycles up to that length.",
            file=sys.stderr
        )

    try:
        game = build_game(args)
    except OSError as e:
        sys.exit(f"Error: Could not read {args.file}: {e}")
    except ValueError as e:
        sys.exit(f"Error: {e}")

    max_epochs = args.max_epochs if args.max_epochs > 0 else None
    logger.debug("Starting %dx%d game, max_epochs=%s", game.width, game.height, max_epochs)

    if args.quiet:
        try:
            reason = run_quiet(game, max_epochs)
        except KeyboardInterrupt:
            print("\nInterrupted. Exiting.", file=sys.stderr)
            return 0
        print(f"{reason} Epochs: {game.epochs}")
        return 0

    colorama_init()
    try:
        reason = run(
            game,
            interval=args.interval,
            max_epochs=max_epochs,
            live_cell=args.live_cell,
            dead_cell=args.dead_cell,
            header_items=args.header_items,
        )
    except KeyboardInterrupt:
        print("\nInterrupted by user. Goodbye!")
        reason = "Interrupted by user."
    render_results(game.epochs, reason)
    return 0


if __name__ == "__main__":
    sys.exit(main())
