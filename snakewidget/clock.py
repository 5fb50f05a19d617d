"""
clock.py — Cancellable periodic tick source.

GameClock is driven by hand: the host calls fire() whenever it wants a
tick. PygameTimerClock arms pygame's timer so the event loop delivers
ticks; because they arrive as queued events, a tick is never handled
while the previous one is still running.

At most one callback is armed per clock.
"""

import logging
from typing import Callable, Optional

import pygame

logger = logging.getLogger(__name__)

TickCallback = Callable[[], object]

TICK_EVENT = pygame.event.custom_type()


class GameClock:
    """Manually driven clock. Subclasses hook _arm/_disarm to a real timer."""

    def __init__(self):
        self._on_tick: Optional[TickCallback] = None
        self._interval_ms: Optional[int] = None

    # ── Accessors ────────────────────────────────────────────────
    @property
    def is_armed(self) -> bool:
        return self._on_tick is not None

    @property
    def interval_ms(self) -> Optional[int]:
        return self._interval_ms

    # ── Commands ─────────────────────────────────────────────────
    def start(self, interval_ms: int, on_tick: TickCallback) -> None:
        """Arm the periodic callback, replacing any armed one."""
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        self.stop()
        self._on_tick = on_tick
        self._interval_ms = interval_ms
        self._arm(interval_ms)
        logger.debug("clock armed at %d ms", interval_ms)

    def stop(self) -> None:
        """Cancel the callback. Safe to call any number of times."""
        if self._on_tick is None:
            return
        self._disarm()
        self._on_tick = None
        self._interval_ms = None
        logger.debug("clock stopped")

    def reschedule(self, interval_ms: int) -> None:
        """Re-arm the current callback with a new interval."""
        on_tick = self._on_tick
        if on_tick is None:
            return
        self.start(interval_ms, on_tick)

    def fire(self) -> bool:
        """Deliver one tick. Returns False when nothing is armed."""
        if self._on_tick is None:
            return False
        self._on_tick()
        return True

    # ── Timer hooks ──────────────────────────────────────────────
    def _arm(self, interval_ms: int) -> None:
        pass

    def _disarm(self) -> None:
        pass


class PygameTimerClock(GameClock):
    """
    Ticks delivered through the pygame event queue.

    Every arm posts events tagged with a fresh generation number, so a tick
    already pulled off the queue before a stop or restart is recognised as
    stale and dropped instead of advancing the new game.
    """

    def __init__(self, event_type: int = TICK_EVENT):
        super().__init__()
        self.event_type = event_type
        self._generation = 0

    def tick_event(self) -> pygame.event.Event:
        """The event the timer currently posts."""
        return pygame.event.Event(self.event_type, generation=self._generation)

    def dispatch(self, event: pygame.event.Event) -> bool:
        """Fire if `event` is one of ours. Returns True when it was consumed."""
        if event.type != self.event_type:
            return False
        if getattr(event, "generation", None) != self._generation:
            logger.debug("dropping stale tick")
            return True
        self.fire()
        return True

    def _arm(self, interval_ms: int) -> None:
        self._generation += 1
        pygame.time.set_timer(self.tick_event(), interval_ms)

    def _disarm(self) -> None:
        pygame.time.set_timer(self.event_type, 0)
        # Drop a tick that was queued before the timer was cancelled.
        pygame.event.clear(self.event_type)
