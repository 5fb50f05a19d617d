"""
main.py — Entry point.

Run with:
    python main.py [--grid-size 15] [--cell-size 18] [--scores PATH]

Requires:
    pip install pygame
"""

import argparse
import logging
import random

from snakewidget.config import CELL_SIZE, GRID_SIZE, SCORES_FILE
from snakewidget.controller import GameController
from snakewidget.store import JsonScoreStore


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Snake, on a square grid.")
    ap.add_argument("--grid-size", type=int, default=GRID_SIZE, help="cells per side")
    ap.add_argument("--cell-size", type=int, default=CELL_SIZE, help="pixels per cell")
    ap.add_argument("--scores", default=SCORES_FILE, help="JSON file holding the high score")
    ap.add_argument("--seed", type=int, default=None, help="seed food placement")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    GameController(
        grid_size=args.grid_size,
        cell_size=args.cell_size,
        store=JsonScoreStore(args.scores),
        rng=random.Random(args.seed),
    ).run()


if __name__ == "__main__":
    main()
