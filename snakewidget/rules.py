"""
rules.py — Pure game rules.

No state, no rendering. GameSession consults these once per tick.

    check_collision   — classify a proposed head as safe, wall or self
    DifficultyPolicy  — map the post-increment score to a tick interval
"""

import enum
from dataclasses import dataclass
from typing import Sequence

from .config import BASE_SPEED_MS, MIN_SPEED_MS, SPEED_STEP_MS, SPEEDUP_EVERY
from .errors import ConfigurationError
from .grid import Cell, Grid


# ─────────────────────────── Collisions ──────────────────────────
class Collision(enum.Enum):
    SAFE = "safe"
    WALL = "wall"
    SELF = "self"


def check_collision(
    head: Cell,
    body: Sequence[Cell],
    grid: Grid,
    will_grow: bool = False,
) -> Collision:
    """
    Classify a move whose new head would land on `head`.

    `body` is the snake before the move, tail included: the tail cell
    still counts as occupied on the tick it is about to vacate, so
    `will_grow` does not change the result.
    """
    if not grid.contains(head):
        return Collision.WALL
    if head in body:
        return Collision.SELF
    return Collision.SAFE


# ─────────────────────────── Difficulty ──────────────────────────
@dataclass(frozen=True)
class DifficultyPolicy:
    """Step function from score to tick interval, in milliseconds."""
    base_ms: int = BASE_SPEED_MS
    step_ms: int = SPEED_STEP_MS
    floor_ms: int = MIN_SPEED_MS
    threshold: int = SPEEDUP_EVERY

    def __post_init__(self):
        if self.base_ms <= 0 or self.floor_ms <= 0:
            raise ConfigurationError("base_ms and floor_ms must be positive")
        if self.step_ms < 0:
            raise ConfigurationError(f"step_ms must not be negative, got {self.step_ms}")
        if self.threshold <= 0:
            raise ConfigurationError(f"threshold must be positive, got {self.threshold}")
        if self.floor_ms > self.base_ms:
            raise ConfigurationError(
                f"floor_ms ({self.floor_ms}) exceeds base_ms ({self.base_ms})"
            )

    def next_interval(self, score: int, current_ms: int) -> int:
        """
        Interval to use after the score has just changed to `score`.

        Must be called once per score change; calling it twice with the
        same score would speed the game up twice.
        """
        if score > 0 and score % self.threshold == 0:
            return max(self.floor_ms, current_ms - self.step_ms)
        return current_ms
