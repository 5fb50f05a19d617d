"""
grid.py — Coordinate space of the board.

Classes:
    Direction   — immutable (dx, dy) unit vector with an opposite
    Grid        — fixed square of cells with a bounds check
"""

import random

from .errors import ConfigurationError

Cell = tuple[int, int]


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction."""
    UP    = None  # filled below after class definition
    DOWN  = None
    LEFT  = None
    RIGHT = None

    __slots__ = ("name", "x", "y")

    def __init__(self, name: str, x: int, y: int):
        self.name = name
        self.x = x
        self.y = y

    @property
    def vector(self) -> Cell:
        return self.x, self.y

    def opposite(self) -> "Direction":
        return _OPPOSITES[self.name]

    def step(self, cell: Cell) -> Cell:
        """The neighbour of `cell` one unit along this direction."""
        return cell[0] + self.x, cell[1] + self.y

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction.{self.name.upper()}"


Direction.UP    = Direction("up",     0, -1)
Direction.DOWN  = Direction("down",   0,  1)
Direction.LEFT  = Direction("left",  -1,  0)
Direction.RIGHT = Direction("right",  1,  0)
ALL_DIRS = [Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT]

_OPPOSITES = {
    "up":    Direction.DOWN,
    "down":  Direction.UP,
    "left":  Direction.RIGHT,
    "right": Direction.LEFT,
}


# ───────────────────────────── Grid ──────────────────────────────
class Grid:
    """Square board of `size` x `size` cells, origin top-left."""

    def __init__(self, size: int):
        if size <= 0:
            raise ConfigurationError(f"grid size must be positive, got {size}")
        self.size = size

    @property
    def area(self) -> int:
        return self.size * self.size

    def contains(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def random_cell(self, rng: random.Random) -> Cell:
        return rng.randrange(self.size), rng.randrange(self.size)
