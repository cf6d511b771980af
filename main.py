"""Main entry point for the TwixT game."""

import argparse
import logging

from controller import TwixtGameController
from game.constants import (
    DEFAULT_BOARD_SIZE,
    DEFAULT_DISCOUNT,
    MAX_BOARD_SIZE,
    MIN_BOARD_SIZE,
)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="TwixT",
        epilog="""
Move notation:
  A move is the peg letter of the player followed by the position label,
  e.g. xc3 (red, column c, row 3) or oe4 (blue). Row 1 is the top row.
  Red (x) moves first and connects top and bottom; blue (o) connects left
  and right. Blue may answer red's first move by repeating it (swap).

  Examples:
    --games 10 --seed 42 --notation-file logs
    --replay logs/twixtlog_42_notation.txt --board-screen
    --replay partial_game.txt --partial --notation-screen
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--board-size",
        type=int,
        default=DEFAULT_BOARD_SIZE,
        help=f"Length of a side of the board, {MIN_BOARD_SIZE}..{MAX_BOARD_SIZE} (default: {DEFAULT_BOARD_SIZE})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible games",
    )
    parser.add_argument(
        "--games", type=int, help="Number of games to play (default: play indefinitely)"
    )
    parser.add_argument(
        "--replay", type=str, help="Path to notation file (board size auto-detected)"
    )
    parser.add_argument(
        "--partial",
        action="store_true",
        help="Continue with random play after replay ends (only with --replay)",
    )
    parser.add_argument(
        "--notation-file",
        nargs="?",
        const=".",
        default=None,
        metavar="DIR",
        help="Log game moves to twixtlog_<seed>_notation.txt in DIR (default: current directory, ignored if --replay is used)",
    )
    parser.add_argument(
        "--notation-screen",
        action="store_true",
        help="Output move notation to screen",
    )
    parser.add_argument(
        "--board-screen",
        action="store_true",
        help="Draw the board on screen after every move",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Draw the board without ANSI colors",
    )
    parser.add_argument(
        "--discount",
        type=float,
        default=DEFAULT_DISCOUNT,
        help=f"Discount of the winner's return per move, 0 < discount <= 1 (default: {DEFAULT_DISCOUNT})",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Report win/loss/draw statistics after all games",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.partial and args.replay is None:
        parser.error("--partial requires --replay")
    if args.games is not None and args.games < 1:
        parser.error("--games must be at least 1")

    try:
        controller = TwixtGameController(
            board_size=args.board_size,
            replay_file=args.replay,
            seed=args.seed,
            log_notation_to_file=args.notation_file,
            log_notation_to_screen=args.notation_screen,
            log_board_to_screen=args.board_screen,
            partial_replay=args.partial,
            max_games=args.games,
            discount=args.discount,
            ansi_color_output=not args.no_color,
        )
    except ValueError as e:
        parser.error(str(e))
        return

    controller.run()

    if args.stats:
        controller.print_statistics()


if __name__ == "__main__":
    main()
