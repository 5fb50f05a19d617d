"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop.
  - Translate keyboard events and clicks on the direction pad into
    session commands.
  - Feed timer events to the game clock, which calls GameSession.advance.
  - Ask the view to redraw whenever the session reports a change.
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the Model's job).

The controller is the only layer that reads pygame events.
"""

import logging
import random
from typing import Optional

import pygame

from .clock import PygameTimerClock
from .config import CELL_SIZE, FPS, GRID_SIZE
from .grid import Direction
from .model import GameSession, SessionObserver, Status
from .store import ScoreStore
from .view import GameView, window_size

logger = logging.getLogger(__name__)

DIRECTION_KEYS = {
    pygame.K_UP:    Direction.UP,
    pygame.K_w:     Direction.UP,
    pygame.K_DOWN:  Direction.DOWN,
    pygame.K_s:     Direction.DOWN,
    pygame.K_LEFT:  Direction.LEFT,
    pygame.K_a:     Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d:     Direction.RIGHT,
}
START_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE)
QUIT_KEYS = (pygame.K_q, pygame.K_ESCAPE)


class GameController(SessionObserver):
    """
    Owns the main loop.
    Glues Model <-> View without them knowing about each other.
    """

    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        cell_size: int = CELL_SIZE,
        store: Optional[ScoreStore] = None,
        rng: Optional[random.Random] = None,
    ):
        # Validated before any window opens.
        self.clock   = PygameTimerClock()
        self.session = GameSession(grid_size, cell_size, store=store, clock=self.clock, rng=rng)
        self.session.add_observer(self)

        pygame.init()
        size = (self.session.grid.size, self.session.cell_size)
        self.screen  = pygame.display.set_mode(window_size(*size))
        pygame.display.set_caption("Snake")
        self.frames  = pygame.time.Clock()
        self.view    = GameView(self.screen, *size)
        self.running = False
        self._dirty  = True

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Run the loop until the window is closed."""
        self.running = True
        try:
            while self.running:
                self.frames.tick(FPS)
                self._handle_events()
                self.redraw()
        finally:
            self.session.stop()
            pygame.quit()

    def redraw(self) -> None:
        if not self._dirty:
            return
        self.view.render(self.session.snapshot())
        pygame.display.flip()
        self._dirty = False

    def quit(self) -> None:
        self.running = False

    # ── Session callbacks ─────────────────────────────────────────
    def on_tick(self, snapshot) -> None:
        self._dirty = True

    def on_score_changed(self, score: int) -> None:
        pygame.display.set_caption(f"Snake — {score}")

    def on_game_over(self, final_score: int, is_new_high_score: bool) -> None:
        if is_new_high_score:
            logger.info("new high score: %d", final_score)
        pygame.display.set_caption("Snake — game over")
        self._dirty = True

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if self.clock.dispatch(event):
                continue
            if event.type == pygame.QUIT:
                self.quit()
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(event.pos)

    def _handle_keydown(self, key: int) -> None:
        if key in QUIT_KEYS:
            self.quit()
            return

        status = self.session.status
        if status is Status.IDLE:
            if key in START_KEYS:
                self._begin()
        elif status is Status.RUNNING:
            if key in DIRECTION_KEYS:
                self.session.set_direction(DIRECTION_KEYS[key])
            elif key == pygame.K_r:
                self._begin()
        elif status is Status.GAME_OVER:
            if key in START_KEYS or key == pygame.K_r:
                self._begin()

    def _handle_click(self, pos: tuple[int, int]) -> None:
        if self.session.status is not Status.RUNNING:
            if self.view.overlay_button_at(pos):
                self._begin()
            return
        direction = self.view.pad_direction_at(pos)
        if direction is not None:
            self.session.set_direction(direction)

    def _begin(self) -> None:
        if self.session.status is Status.IDLE:
            self.session.start()
        else:
            self.session.restart()
        pygame.display.set_caption("Snake")
        self._dirty = True
