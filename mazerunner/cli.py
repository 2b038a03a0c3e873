"""Command-line entry point: seed the dice, load a layout and play until someone wins."""

from __future__ import annotations

import argparse
import random
import re
import sys
from collections.abc import Sequence
from pathlib import Path

from .board import Board
from .game import Game
from .geometry import starting_position
from .layout import LayoutError, load_layout
from .model import INITIAL_MOVEMENT_POINTS, Direction, Player, PlayerID

_SEED = re.compile(r"\s*([+-]?\d+)")

_START_DIRECTIONS: dict[PlayerID, Direction] = {
    PlayerID.A: Direction.NORTH,
    PlayerID.B: Direction.WEST,
    PlayerID.C: Direction.EAST,
}


def read_seed(path: str | Path) -> int:
    """Read the integer seed at the start of a file.

    Raises OSError if the file cannot be read and ValueError if it holds no integer.
    """
    text = Path(path).read_text()
    match = _SEED.match(text)
    if match is None:
        raise ValueError(f"no seed found in {path}")
    return int(match.group(1))


def create_players(board: Board) -> list[Player]:
    """The three players in their starting cells, facing their initial directions."""
    return [
        Player(
            id=player_id,
            block=board.block(*starting_position(player_id)),
            direction=_START_DIRECTIONS[player_id],
            points=INITIAL_MOVEMENT_POINTS,
        )
        for player_id in PlayerID
    ]


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mazerunner",
        description="Play the three-player maze game on a layout read from text files.",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="directory holding walls.txt, stairs.txt, poles.txt and flag.txt",
    )
    parser.add_argument(
        "--seed-file",
        default=None,
        help="file holding the random seed (default: seed.txt in the directory)",
    )
    return parser.parse_args(argv)


def _make_rng(seed_file: Path) -> random.Random:
    try:
        seed = read_seed(seed_file)
    except OSError:
        print("Error opening seed.txt")
        return random.Random()
    except ValueError:
        print("Error reading seed from seed.txt")
        return random.Random()
    print(f"Seed initialized to {seed}")
    return random.Random(seed)


def main(argv: Sequence[str] | None = None) -> int:
    """Run a whole game and return the exit status."""
    args = _parse_args(argv)
    directory = Path(args.directory)
    seed_file = Path(args.seed_file) if args.seed_file else directory / "seed.txt"

    rng = _make_rng(seed_file)
    try:
        layout = load_layout(directory)
    except LayoutError as exc:
        print(exc)
        return 1
    print(layout.describe(), end="")

    board = Board(layout, rng)
    game = Game(board, create_players(board), rng=rng, output=sys.stdout)
    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())