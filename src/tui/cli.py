"""
Command line for the terminal game.

Usage:
    python main.py [-w WIDTH] [-H HEIGHT] [-m MINES]
    python main.py --max-width --max-height -s expert
    python main.py -d intermediate
"""
import argparse
import logging
import shutil
from typing import List, Optional, Tuple

from engine import (
    BoardConfig,
    DIFFICULTIES,
    InvalidConfigError,
    mines_for_density,
)

from .app import run
from .render import SPACING, render_text

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 22
DEFAULT_HEIGHT = 12
DEFAULT_MINES = 41

# Columns and rows the frame needs around the board
FRAME_COLUMNS = 2
FRAME_ROWS = 5


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="minesweeper",
        description="Minesweeper in the terminal",
    )
    difficulties = list(DIFFICULTIES)

    width_group = parser.add_mutually_exclusive_group()
    width_group.add_argument(
        "-w", "--width", type=int, metavar="WIDTH",
        help=f"Width of the board. The minimum is {SPACING}, and the "
             "maximum is 2 less than your terminal width",
    )
    width_group.add_argument(
        "--max-width", action="store_true",
        help="Set the width to its maximum",
    )

    height_group = parser.add_mutually_exclusive_group()
    height_group.add_argument(
        "-H", "--height", type=int, metavar="HEIGHT",
        help="Height of the board. The minimum is 1, and the maximum is "
             "5 less than your terminal height",
    )
    height_group.add_argument(
        "--max-height", action="store_true",
        help="Set the height to its maximum",
    )

    parser.add_argument(
        "-m", "--mines", type=int, metavar="MINES",
        help="Number of mines. Must be less than the number of tiles",
    )
    parser.add_argument(
        "-d", "--difficulty", type=str.lower, choices=difficulties,
        help="Create a beginner, intermediate or expert board",
    )
    parser.add_argument(
        "-s", "--smart-difficulty", type=str.lower, choices=difficulties,
        help="Set the number of mines from a difficulty's mine density",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for the mine layout",
    )
    parser.add_argument(
        "--log-file", default=None,
        help="Write logs to this file (the game owns the terminal)",
    )
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for --log-file",
    )
    return parser


def _check_conflicts(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> None:
    """Reject option combinations argparse groups cannot express."""
    if args.difficulty:
        sized = [
            flag for flag, given in (
                ("-w/--width", args.width is not None),
                ("-H/--height", args.height is not None),
                ("--max-width", args.max_width),
                ("--max-height", args.max_height),
            ) if given
        ]
        if sized:
            parser.error(
                f"argument -d/--difficulty: not allowed with argument {sized[0]}"
            )
    if args.smart_difficulty:
        if args.mines is not None:
            parser.error("argument -s/--smart-difficulty: not allowed with "
                         "argument -m/--mines")
        if args.difficulty:
            parser.error("argument -s/--smart-difficulty: not allowed with "
                         "argument -d/--difficulty")


def resolve_config(
    args: argparse.Namespace, terminal_size: Tuple[int, int]
) -> BoardConfig:
    """
    Work out the board to play from parsed options.

    Args:
        args: Parsed command line.
        terminal_size: (columns, lines) of the terminal.

    Returns:
        Validated board configuration.

    Raises:
        InvalidConfigError: The board does not fit the terminal or has
            too many mines.
    """
    max_width = terminal_size[0] - FRAME_COLUMNS
    max_height = terminal_size[1] - FRAME_ROWS

    if args.difficulty:
        preset = DIFFICULTIES[args.difficulty]
        width, height, mines = preset.width, preset.height, preset.mine_count
    else:
        width = DEFAULT_WIDTH if args.width is None else args.width
        height = DEFAULT_HEIGHT if args.height is None else args.height
        mines = DEFAULT_MINES if args.mines is None else args.mines
        if args.max_width:
            width = max_width
        if args.max_height:
            height = max_height

    if args.smart_difficulty:
        mines = mines_for_density(width, height, args.smart_difficulty)

    if width < SPACING:
        raise InvalidConfigError(f"width cannot be smaller than {SPACING}")
    if width > max_width:
        raise InvalidConfigError(
            "width cannot be larger than the terminal width - 2"
        )
    if height > max_height:
        raise InvalidConfigError(
            "height cannot be larger than the terminal height - 5"
        )
    return BoardConfig(width, height, mines)


def configure_logging(log_file: Optional[str], level: str) -> None:
    """Send logs to a file when one is given."""
    if log_file is None:
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the game."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _check_conflicts(parser, args)
    configure_logging(args.log_file, args.log_level)

    try:
        config = resolve_config(args, tuple(shutil.get_terminal_size()))
    except InvalidConfigError as exc:
        parser.error(str(exc))

    logger.info(
        "Starting %dx%d game with %d mines",
        config.width, config.height, config.mine_count,
    )
    session = run(config, seed=args.seed)
    print(render_text(session.board, session.elapsed))
    return 0
