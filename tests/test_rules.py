"""Tests for collision classification and the difficulty step function."""

import pytest

from snakewidget.errors import ConfigurationError
from snakewidget.grid import Grid
from snakewidget.rules import Collision, DifficultyPolicy, check_collision

BODY = [(7, 7), (6, 7), (5, 7)]


class TestCheckCollision:
    def test_safe_move(self):
        assert check_collision((8, 7), BODY, Grid(15)) is Collision.SAFE

    def test_wall_on_each_side(self):
        grid = Grid(15)
        for head in [(15, 7), (-1, 7), (7, 15), (7, -1)]:
            assert check_collision(head, BODY, grid) is Collision.WALL

    def test_self_collision(self):
        assert check_collision((6, 7), BODY, Grid(15)) is Collision.SELF

    def test_tail_counts_as_occupied(self):
        body = [(1, 1), (2, 1), (2, 2), (1, 2)]
        assert check_collision((1, 2), body, Grid(15), will_grow=False) is Collision.SELF
        assert check_collision((1, 2), body, Grid(15), will_grow=True) is Collision.SELF

    def test_wall_checked_before_body(self):
        # A body cell outside the grid can only happen in a hand-built case.
        assert check_collision((15, 7), [(15, 7)], Grid(15)) is Collision.WALL


class TestDifficultyPolicy:
    def test_defaults(self):
        policy = DifficultyPolicy()
        assert (policy.base_ms, policy.step_ms, policy.floor_ms, policy.threshold) == (150, 10, 80, 50)

    def test_speeds_up_on_threshold(self):
        assert DifficultyPolicy().next_interval(50, 150) == 140
        assert DifficultyPolicy().next_interval(100, 140) == 130

    def test_no_change_between_thresholds(self):
        policy = DifficultyPolicy()
        for score in (10, 20, 30, 40, 60, 90):
            assert policy.next_interval(score, 150) == 150

    def test_zero_score_never_triggers(self):
        assert DifficultyPolicy().next_interval(0, 150) == 150

    def test_floor(self):
        policy = DifficultyPolicy()
        assert policy.next_interval(500, 85) == 80
        assert policy.next_interval(550, 80) == 80

    def test_full_progression(self):
        policy = DifficultyPolicy()
        speed = policy.base_ms
        seen = []
        for score in range(10, 1010, 10):
            speed = policy.next_interval(score, speed)
            seen.append(speed)
        assert seen[4] == 140  # score 50
        assert min(seen) == 80
        assert seen.index(80) == 34  # score 350, seventh threshold

    @pytest.mark.parametrize("kwargs", [
        {"threshold": 0},
        {"threshold": -50},
        {"base_ms": 0},
        {"floor_ms": 0},
        {"step_ms": -10},
        {"base_ms": 70},
    ])
    def test_rejects_bad_parameters(self, kwargs):
        with pytest.raises(ConfigurationError):
            DifficultyPolicy(**kwargs)

    def test_zero_step_keeps_speed(self):
        assert DifficultyPolicy(step_ms=0).next_interval(50, 150) == 150
