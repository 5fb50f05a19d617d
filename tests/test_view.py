"""Tests for the board renderer and the window view."""

import pygame
import pytest

from snakewidget.config import BG, EYE_COL, FOOD_COL, HEAD_COL, HEADER_H, MARGIN
from snakewidget.errors import RenderSurfaceUnavailable
from snakewidget.grid import Direction
from snakewidget.model import Snapshot, Status
from snakewidget.view import (
    GameView, PygameSurface, Surface, draw, eye_positions, segment_color, window_size,
)


def make_snapshot(**overrides):
    fields = dict(
        grid_size=15,
        snake=((7, 7), (6, 7), (5, 7)),
        food=(10, 3),
        direction=Direction.RIGHT,
        score=0,
        high_score=0,
        speed_ms=150,
        status=Status.RUNNING,
    )
    fields.update(overrides)
    return Snapshot(**fields)


class RecordingSurface(Surface):
    def __init__(self):
        self.calls = []

    def clear_rect(self, rect, color):
        self.calls.append(("clear_rect", rect, color))

    def stroke_line(self, start, end, color, width=1):
        self.calls.append(("stroke_line", start, end, color))

    def fill_circle(self, center, radius, color):
        self.calls.append(("fill_circle", center, radius, color))

    def fill_rounded_rect(self, rect, radius, color):
        self.calls.append(("fill_rounded_rect", rect, radius, color))

    def of(self, kind):
        return [c for c in self.calls if c[0] == kind]


class DeadSurface(Surface):
    def clear_rect(self, rect, color):
        raise RenderSurfaceUnavailable("display Surface quit")


class TestDraw:
    def test_primitive_order(self):
        surface = RecordingSurface()
        draw(surface, make_snapshot(), 18)
        kinds = [c[0] for c in surface.calls]
        assert kinds[0] == "clear_rect"
        assert surface.calls[0][1:] == ((0, 0, 270, 270), BG)
        assert kinds.count("stroke_line") == 2 * 16
        # Food: body + highlight; head: two eyes.
        assert kinds.count("fill_circle") == 4
        assert kinds.count("fill_rounded_rect") == 3

    def test_food_marker(self):
        surface = RecordingSurface()
        draw(surface, make_snapshot(food=(0, 0)), 18)
        body, shine = surface.of("fill_circle")[:2]
        assert body[1:] == ((9.0, 9.0), 7.0, FOOD_COL)
        assert shine[1] == (7.0, 7.0)

    def test_head_is_distinct(self):
        surface = RecordingSurface()
        draw(surface, make_snapshot(), 18)
        segments = surface.of("fill_rounded_rect")
        assert segments[0][1] == (127, 127, 16, 16)
        assert segments[0][3] == HEAD_COL
        assert all(s[3] != HEAD_COL for s in segments[1:])

    def test_eyes_follow_direction(self):
        surface = RecordingSurface()
        draw(surface, make_snapshot(direction=Direction.UP), 18)
        eyes = surface.of("fill_circle")[-2:]
        assert [e[1] for e in eyes] == [(131, 131), (136, 131)]
        assert all(e[3] == EYE_COL for e in eyes)

    def test_idle_snapshot_draws_board_only(self):
        surface = RecordingSurface()
        draw(surface, make_snapshot(snake=(), food=None, status=Status.IDLE), 18)
        assert surface.of("fill_circle") == []
        assert surface.of("fill_rounded_rect") == []

    def test_does_not_mutate_snapshot(self):
        snap = make_snapshot()
        before = (snap.snake, snap.food, snap.direction, snap.score)
        draw(RecordingSurface(), snap, 18)
        assert (snap.snake, snap.food, snap.direction, snap.score) == before

    def test_missing_surface_is_a_noop(self):
        draw(None, make_snapshot(), 18)

    def test_dead_surface_skips_frame(self):
        draw(DeadSurface(), make_snapshot(), 18)


class TestHelpers:
    def test_segment_colors_fade_and_floor(self):
        assert segment_color(0) == HEAD_COL
        assert segment_color(1) == (34, 195, 94)
        assert segment_color(40) == (34, 100, 94)

    @pytest.mark.parametrize("direction, expected", [
        (Direction.UP,    [(4, 4), (9, 4)]),
        (Direction.DOWN,  [(4, 9), (9, 9)]),
        (Direction.LEFT,  [(4, 4), (4, 9)]),
        (Direction.RIGHT, [(9, 4), (9, 9)]),
    ])
    def test_eye_positions(self, direction, expected):
        assert eye_positions(0, 0, 16, direction) == expected

    def test_window_size(self):
        assert window_size(15, 18) == (270 + 2 * MARGIN, HEADER_H + 270 + 96)


class TestPygameSurface:
    def test_draws_with_offset(self):
        target = pygame.Surface((60, 60))
        surface = PygameSurface(target, offset=(10, 20))
        surface.clear_rect((0, 0, 5, 5), (255, 0, 0))
        assert tuple(target.get_at((10, 20)))[:3] == (255, 0, 0)
        assert tuple(target.get_at((9, 20)))[:3] == (0, 0, 0)

    def test_full_board_frame(self):
        target = pygame.Surface((270, 270))
        draw(PygameSurface(target), make_snapshot(), 18)
        assert tuple(target.get_at((7 * 18 + 2, 7 * 18 + 9)))[:3] == HEAD_COL

    def test_pygame_error_becomes_skipped_frame(self):
        class Broken:
            def fill(self, *args):
                raise pygame.error("display Surface quit")

        draw(PygameSurface(Broken()), make_snapshot(), 18)


class TestGameView:
    @pytest.fixture
    def view(self, display):
        screen = pygame.display.set_mode(window_size(15, 18))
        return GameView(screen, 15, 18)

    @pytest.mark.parametrize("status", list(Status))
    def test_renders_every_status(self, view, status):
        view.render(make_snapshot(status=status, new_high_score=True, score=30))

    def test_pad_hit_testing(self, view):
        for direction, rect in view.pad_buttons.items():
            assert view.pad_direction_at(rect.center) == direction
        assert view.pad_direction_at((0, 0)) is None

    def test_overlay_button_inside_board(self, view):
        board = pygame.Rect(MARGIN, HEADER_H, 270, 270)
        assert board.contains(view.overlay_button)
        assert view.overlay_button_at(view.overlay_button.center)
        assert not view.overlay_button_at((0, 0))
