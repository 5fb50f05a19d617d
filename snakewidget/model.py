"""
model.py — Model layer.

Owns ALL game state and rules. Zero rendering, zero input handling.
Exposes a clean API for the Controller to read/write.

Classes:
    Status           — IDLE, RUNNING, GAME_OVER
    Snapshot         — immutable copy of the session handed to renderers
    SessionObserver  — no-op callbacks the session notifies
    GameSession      — snake, food, score, speed; the single advance() step
"""

import enum
import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .clock import GameClock
from .config import CELL_SIZE, GRID_SIZE, HIGH_SCORE_KEY, INITIAL_LENGTH, POINTS_PER_FOOD
from .errors import ConfigurationError
from .grid import Cell, Direction, Grid
from .rules import Collision, DifficultyPolicy, check_collision
from .store import MemoryScoreStore, ScoreStore

logger = logging.getLogger(__name__)


class Status(enum.Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    GAME_OVER = "game_over"


# ─────────────────────────── Snapshot ────────────────────────────
@dataclass(frozen=True)
class Snapshot:
    grid_size: int
    snake: tuple[Cell, ...]
    food: Optional[Cell]
    direction: Direction
    score: int
    high_score: int
    speed_ms: int
    status: Status
    won: bool = False
    new_high_score: bool = False

    @property
    def head(self) -> Optional[Cell]:
        return self.snake[0] if self.snake else None


class SessionObserver:
    """Override the callbacks you care about."""

    def on_score_changed(self, score: int) -> None:
        pass

    def on_game_over(self, final_score: int, is_new_high_score: bool) -> None:
        pass

    def on_tick(self, snapshot: Snapshot) -> None:
        pass


# ────────────────────────── GameSession ──────────────────────────
class GameSession:
    """
    One game of snake on a square grid.

    The session is created IDLE with the stored high score loaded.
    start() seeds the board and arms the clock, every tick calls
    advance(), and a collision (or a board with no room left for food)
    moves it to GAME_OVER, which disarms the clock. restart() goes back
    to RUNNING from any state.
    """

    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        cell_size: int = CELL_SIZE,
        store: Optional[ScoreStore] = None,
        clock: Optional[GameClock] = None,
        policy: Optional[DifficultyPolicy] = None,
        rng: Optional[random.Random] = None,
        score_key: str = HIGH_SCORE_KEY,
    ):
        if cell_size <= 0:
            raise ConfigurationError(f"cell size must be positive, got {cell_size}")
        self.grid = Grid(grid_size)
        self.cell_size = cell_size
        self.store = store if store is not None else MemoryScoreStore()
        self.clock = clock if clock is not None else GameClock()
        self.policy = policy if policy is not None else DifficultyPolicy()
        self.rng = rng if rng is not None else random.Random()
        self.score_key = score_key

        self.snake: deque[Cell] = deque()
        self.food: Optional[Cell] = None
        self.direction: Direction = Direction.RIGHT
        self.next_direction: Direction = Direction.RIGHT
        self.score: int = 0
        self.high_score: int = self.store.read(score_key)
        self.speed_ms: int = self.policy.base_ms
        self.status: Status = Status.IDLE
        self.won: bool = False
        self.new_high_score: bool = False
        self._observers: List[SessionObserver] = []

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> Optional[Cell]:
        return self.snake[0] if self.snake else None

    def snapshot(self) -> Snapshot:
        return Snapshot(
            grid_size=self.grid.size,
            snake=tuple(self.snake),
            food=self.food,
            direction=self.direction,
            score=self.score,
            high_score=self.high_score,
            speed_ms=self.speed_ms,
            status=self.status,
            won=self.won,
            new_high_score=self.new_high_score,
        )

    def add_observer(self, observer: SessionObserver) -> None:
        self._observers.append(observer)

    # ── Commands ─────────────────────────────────────────────────
    def start(
        self,
        body: Optional[Iterable[Cell]] = None,
        direction: Direction = Direction.RIGHT,
        food: Optional[Cell] = None,
    ) -> Snapshot:
        """
        Seed a fresh snake and food, reset score and speed, arm the clock.

        `body` (head first) and `food` default to the centre-row snake and
        a randomly placed food.
        """
        self.clock.stop()
        cells = self._initial_body() if body is None else self._validate_body(body)
        if food is not None and (not self.grid.contains(food) or food in cells):
            raise ConfigurationError(f"food {food} must be a free cell on the grid")

        self.snake = deque(cells)
        self.direction = direction
        self.next_direction = direction
        self.score = 0
        self.speed_ms = self.policy.base_ms
        self.won = False
        self.new_high_score = False
        self.status = Status.RUNNING
        self.food = food if food is not None else self._spawn_food()
        logger.info("session started: snake %d cells, food at %s", len(cells), self.food)

        if self.food is None:
            self._finish(won=True)
        else:
            self.clock.start(self.speed_ms, self.advance)
        return self.snapshot()

    def restart(self) -> Snapshot:
        logger.info("session restarted after score %d", self.score)
        return self.start()

    def stop(self) -> None:
        """Release the clock without touching game state (widget teardown)."""
        self.clock.stop()

    def set_direction(self, requested: Direction) -> None:
        """Buffer a turn for the next tick; reversals are ignored."""
        if self.status is not Status.RUNNING:
            return
        if requested == self.direction.opposite():
            logger.debug("ignored reversal %r while moving %r", requested, self.direction)
            return
        self.next_direction = requested

    def advance(self) -> Snapshot:
        """Run one tick. A no-op unless the session is RUNNING."""
        if self.status is not Status.RUNNING:
            return self.snapshot()

        self.direction = self.next_direction
        new_head = self.direction.step(self.snake[0])
        will_grow = new_head == self.food

        # Checked against the whole body before the tail is popped.
        collision = check_collision(new_head, self.snake, self.grid, will_grow)
        if collision is not Collision.SAFE:
            logger.info("%s collision at %s", collision.value, new_head)
            self._finish(won=False)
            return self._emit_tick()

        self.snake.appendleft(new_head)
        if will_grow:
            self.score += POINTS_PER_FOOD
            self._notify("on_score_changed", self.score)
            self.food = self._spawn_food()
            if self.food is None:
                self._finish(won=True)
            else:
                self._apply_difficulty()
        else:
            self.snake.pop()
        return self._emit_tick()

    # ── Private helpers ──────────────────────────────────────────
    def _initial_body(self) -> List[Cell]:
        centre = self.grid.size // 2
        length = min(INITIAL_LENGTH, centre + 1)
        return [(centre - i, centre) for i in range(length)]

    def _validate_body(self, body: Iterable[Cell]) -> List[Cell]:
        cells = [(int(x), int(y)) for x, y in body]
        if not cells:
            raise ConfigurationError("snake needs at least one cell")
        outside = [c for c in cells if not self.grid.contains(c)]
        if outside:
            raise ConfigurationError(f"snake cells off the grid: {outside}")
        if len(set(cells)) != len(cells):
            raise ConfigurationError("snake cells must be distinct")
        return cells

    def _spawn_food(self) -> Optional[Cell]:
        """Uniform rejection sampling; None when the snake fills the board."""
        if len(self.snake) >= self.grid.area:
            logger.info("no free cell left for food")
            return None
        occupied = set(self.snake)
        while True:
            pos = self.grid.random_cell(self.rng)
            if pos not in occupied:
                return pos

    def _apply_difficulty(self) -> None:
        speed = self.policy.next_interval(self.score, self.speed_ms)
        if speed == self.speed_ms:
            return
        logger.info("score %d: tick interval %d -> %d ms", self.score, self.speed_ms, speed)
        self.speed_ms = speed
        self.clock.reschedule(speed)

    def _finish(self, won: bool) -> None:
        self.status = Status.GAME_OVER
        self.won = won
        self.clock.stop()
        self.new_high_score = self.score > self.high_score
        if self.new_high_score:
            self.high_score = self.score
            self.store.write(self.score_key, self.high_score)
        logger.info(
            "game over (%s): score %d, best %d",
            "board full" if won else "collision", self.score, self.high_score,
        )
        self._notify("on_game_over", self.score, self.new_high_score)

    def _emit_tick(self) -> Snapshot:
        snap = self.snapshot()
        self._notify("on_tick", snap)
        return snap

    def _notify(self, name: str, *args) -> None:
        for observer in self._observers:
            getattr(observer, name)(*args)
