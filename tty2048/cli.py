import argparse
import curses
import logging
import sys
from typing import Optional, Sequence

from .config import load_config, to_yaml
from .errors import InvalidConfiguration
from .game import Game
from .ui.terminal import play_loop

logger = logging.getLogger(__name__)

USAGE_ERROR = 2

EPILOG = """\
config:
  three numbers: grid rows, grid columns, number of filled in tiles
  default value: 4 4 2

controls:
  WASD or arrow keys  move up/left/down/right
  R                   reset / new game
  Q or Esc            quit
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tty2048",
        description="Play 2048 in the terminal.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "config",
        nargs="*",
        type=int,
        default=[],
        metavar="NUMBER",
        help="Optional 'rows columns initial_tiles'; all three or none",
    )
    parser.add_argument("--seed", type=int, default=None, help="Optional seed for tile spawning")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Config override, e.g. game.target=4096 (repeatable)",
    )
    parser.add_argument("--log-file", type=str, default=None, help="Write debug logs to this file")
    return parser


def config_overrides(args: argparse.Namespace) -> list[str]:
    overrides = []
    if args.config:
        rows, columns, initial_tiles = args.config
        overrides += [f"game.rows={rows}", f"game.columns={columns}", f"game.initial_tiles={initial_tiles}"]
    if args.seed is not None:
        overrides.append(f"seed={args.seed}")
    return overrides + list(args.overrides)


def setup_logging(log_file: Optional[str]) -> None:
    # curses owns the terminal, so logs only go to a file
    if log_file is None:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if len(args.config) not in (0, 3):
        parser.error(f"expected 0 or 3 numbers (rows columns initial_tiles), got {len(args.config)}")

    setup_logging(args.log_file)

    try:
        config = load_config(config_overrides(args))
    except InvalidConfiguration as e:
        print(f"error: {e}", file=sys.stderr)
        return USAGE_ERROR

    logger.info("Starting game with config:\n%s", to_yaml(config))
    game = Game(config)
    state = curses.wrapper(play_loop, game=game)
    print(f"Final score: {state.score}, max tile: {state.max_tile}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
