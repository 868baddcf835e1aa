"""Simple ASCII demo for the Falldown simulation.

Run with: `python -m falldown`

The demo starts a game, advances it for a number of frames and prints the
resulting grid.  Pass ``--window`` to play in a pygame window instead.
"""

from __future__ import annotations

import argparse
import logging
import random

from .config import FPS
from .render import grid_to_text
from .simulation import FalldownSimulation


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--width", type=int, default=9, help="Grid width in cells.")
    parser.add_argument("--height", type=int, default=14, help="Grid height in cells.")
    parser.add_argument("--columns", type=int, default=3, help="Number of column bands.")
    parser.add_argument(
        "--frames", type=int, default=FPS * 3, help="Frames to simulate before printing."
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random source.")
    parser.add_argument(
        "--window",
        action="store_true",
        help="Open an interactive pygame window instead of printing a frame.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s"
    )

    simulation = FalldownSimulation(
        args.width, args.height, args.columns, rng=random.Random(args.seed)
    )
    if args.window:
        from .run_pygame import main as run_window

        run_window(simulation)
        return

    simulation.reset_and_purge()
    for frame in range(args.frames):
        simulation.update(frame)
    for line in grid_to_text(simulation.get_grid()):
        print(line)
    print(f"Level {simulation.level + 1}, {simulation.state.value}")


if __name__ == "__main__":
    main()
