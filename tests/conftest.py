import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import random

import pygame
import pytest

from snakewidget.clock import GameClock
from snakewidget.model import GameSession
from snakewidget.store import MemoryScoreStore


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def store():
    return MemoryScoreStore()


@pytest.fixture
def clock():
    return GameClock()


@pytest.fixture
def session(store, clock, rng):
    return GameSession(grid_size=15, cell_size=18, store=store, clock=clock, rng=rng)


@pytest.fixture
def display():
    """Headless pygame with a tiny window, torn down after the test."""
    pygame.init()
    pygame.display.set_mode((1, 1))
    yield
    pygame.quit()
