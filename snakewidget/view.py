"""
view.py — View layer.

The board is drawn by draw(surface, snapshot, cell_size), a pure function
over a small Surface port (clear_rect, stroke_line, fill_circle,
fill_rounded_rect). PygameSurface adapts a pygame.Surface to it; tests use
a recording fake.

GameView lays the window out around the board: a score header on top and
a direction pad below, plus the start and game-over overlays.

Public API:
    window_size(grid_size, cell_size)  — pixel size of the whole window
    draw(surface, snapshot, cell_size) — draw one board frame
    GameView(screen, grid_size, cell_size)
    view.render(snapshot)              — draw the complete window
    view.pad_direction_at(pos)         — Direction under a click, or None
    view.overlay_button_at(pos)        — True if the click hit the overlay button
"""

import logging
from typing import Optional

import pygame

from .config import (
    BG, GRID_COL, FOOD_COL, FOOD_SHINE, HEAD_COL, BODY_BLUE, EYE_COL,
    TEXT_COL, DIM_COL, RECORD_COL, PANEL_BG, OVERLAY_COL, BUTTON_COL,
    HEADER_H, PAD_H, MARGIN, PAD_BUTTON,
)
from .errors import RenderSurfaceUnavailable
from .grid import Direction
from .model import Snapshot, Status

logger = logging.getLogger(__name__)

Color = tuple
Point = tuple[float, float]
RectT = tuple[float, float, float, float]


# ─────────────────────────── Surface port ────────────────────────
class Surface:
    """The four primitives the board renderer needs."""

    def clear_rect(self, rect: RectT, color: Color) -> None:
        raise NotImplementedError

    def stroke_line(self, start: Point, end: Point, color: Color, width: int = 1) -> None:
        raise NotImplementedError

    def fill_circle(self, center: Point, radius: float, color: Color) -> None:
        raise NotImplementedError

    def fill_rounded_rect(self, rect: RectT, radius: int, color: Color) -> None:
        raise NotImplementedError


class PygameSurface(Surface):
    """Draws onto a pygame.Surface, shifted by `offset`."""

    def __init__(self, target: pygame.Surface, offset: tuple[int, int] = (0, 0)):
        self.target = target
        self.ox, self.oy = offset

    def _rect(self, rect: RectT) -> pygame.Rect:
        x, y, w, h = rect
        return pygame.Rect(int(self.ox + x), int(self.oy + y), int(w), int(h))

    def _point(self, p: Point) -> tuple[int, int]:
        return int(self.ox + p[0]), int(self.oy + p[1])

    def clear_rect(self, rect, color):
        try:
            self.target.fill(color, self._rect(rect))
        except pygame.error as exc:
            raise RenderSurfaceUnavailable(str(exc)) from exc

    def stroke_line(self, start, end, color, width=1):
        try:
            pygame.draw.line(self.target, color, self._point(start), self._point(end), width)
        except pygame.error as exc:
            raise RenderSurfaceUnavailable(str(exc)) from exc

    def fill_circle(self, center, radius, color):
        try:
            pygame.draw.circle(self.target, color, self._point(center), max(1, int(radius)))
        except pygame.error as exc:
            raise RenderSurfaceUnavailable(str(exc)) from exc

    def fill_rounded_rect(self, rect, radius, color):
        try:
            pygame.draw.rect(self.target, color, self._rect(rect), border_radius=radius)
        except pygame.error as exc:
            raise RenderSurfaceUnavailable(str(exc)) from exc


# ─────────────────────────── Board renderer ──────────────────────
def draw(surface: Optional[Surface], snapshot: Snapshot, cell_size: int) -> None:
    """Draw one frame of the board. Skips the frame if the surface is gone."""
    if surface is None:
        logger.debug("no render surface, frame skipped")
        return
    try:
        _draw_board(surface, snapshot, cell_size)
    except RenderSurfaceUnavailable as exc:
        logger.debug("render surface unavailable, frame skipped: %s", exc)


def segment_color(index: int) -> Color:
    """Head is bright green; body fades towards a darker green."""
    if index == 0:
        return HEAD_COL
    return (34, max(100, 200 - index * 5), BODY_BLUE)


def eye_positions(x: float, y: float, size: float, direction: Direction) -> list[Point]:
    """Two eye centres inside the head square, on the side it is facing."""
    near = max(1, size // 4)
    far = size - near - 3
    if direction.x:
        col = x + (far if direction.x > 0 else near)
        return [(col, y + near), (col, y + far)]
    row = y + (far if direction.y > 0 else near)
    return [(x + near, row), (x + far, row)]


def _draw_board(surface: Surface, snap: Snapshot, cell: int) -> None:
    extent = snap.grid_size * cell
    surface.clear_rect((0, 0, extent, extent), BG)

    for i in range(snap.grid_size + 1):
        surface.stroke_line((i * cell, 0), (i * cell, extent), GRID_COL)
        surface.stroke_line((0, i * cell), (extent, i * cell), GRID_COL)

    if snap.food is not None:
        fx, fy = snap.food
        cx = fx * cell + cell / 2
        cy = fy * cell + cell / 2
        surface.fill_circle((cx, cy), max(1, cell / 2 - 2), FOOD_COL)
        surface.fill_circle((cx - 2, cy - 2), max(1, cell // 6), FOOD_SHINE)

    padding = 1
    size = cell - padding * 2
    radius = max(1, cell // 4 - 1)
    for index, (sx, sy) in enumerate(snap.snake):
        x = sx * cell + padding
        y = sy * cell + padding
        surface.fill_rounded_rect((x, y, size, size), radius, segment_color(index))

    if snap.snake:
        hx, hy = snap.snake[0]
        x = hx * cell + padding
        y = hy * cell + padding
        eye_r = max(1, size // 5)
        for eye in eye_positions(x, y, size, snap.direction):
            surface.fill_circle(eye, eye_r, EYE_COL)


def window_size(grid_size: int, cell_size: int) -> tuple[int, int]:
    board = grid_size * cell_size
    return board + 2 * MARGIN, HEADER_H + board + PAD_H


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders the complete window from a session Snapshot."""

    def __init__(self, screen: pygame.Surface, grid_size: int, cell_size: int):
        self.screen = screen
        self.cell_size = cell_size
        self.board_px = grid_size * cell_size
        self.width, self.height = window_size(grid_size, cell_size)
        self.board = PygameSurface(screen, (MARGIN, HEADER_H))
        self._init_fonts()
        self._layout()

    # ── Main entry ───────────────────────────────────────────────
    def render(self, snapshot: Snapshot) -> None:
        self.screen.fill(PANEL_BG)
        self._draw_header(snapshot)
        draw(self.board, snapshot, self.cell_size)
        self._draw_pad(snapshot.status is Status.RUNNING)

        if snapshot.status is Status.IDLE:
            self._draw_start_overlay()
        elif snapshot.status is Status.GAME_OVER:
            self._draw_game_over_overlay(snapshot)

    # ── Hit testing ──────────────────────────────────────────────
    def pad_direction_at(self, pos: tuple[int, int]) -> Optional[Direction]:
        for direction, rect in self.pad_buttons.items():
            if rect.collidepoint(pos):
                return direction
        return None

    def overlay_button_at(self, pos: tuple[int, int]) -> bool:
        return bool(self.overlay_button.collidepoint(pos))

    # ── Layout ───────────────────────────────────────────────────
    def _layout(self) -> None:
        cx = self.width // 2
        top = HEADER_H + self.board_px + (PAD_H - 2 * PAD_BUTTON - 6) // 2
        b, gap = PAD_BUTTON, 6
        self.pad_buttons = {
            Direction.UP:    pygame.Rect(cx - b // 2,           top,           b, b),
            Direction.LEFT:  pygame.Rect(cx - b // 2 - b - gap, top + b + gap, b, b),
            Direction.DOWN:  pygame.Rect(cx - b // 2,           top + b + gap, b, b),
            Direction.RIGHT: pygame.Rect(cx + b // 2 + gap,     top + b + gap, b, b),
        }
        bw = min(self.board_px - 20, 160)
        by = HEADER_H + self.board_px // 2 + 34
        self.overlay_button = pygame.Rect(cx - bw // 2, by, bw, 30)

    # ── Header ───────────────────────────────────────────────────
    def _draw_header(self, snap: Snapshot) -> None:
        best = max(snap.high_score, snap.score)
        score = self.font_med.render(f"Score: {snap.score}", True, TEXT_COL)
        record = self.font_med.render(f"Best: {best}", True, DIM_COL)
        self.screen.blit(score, score.get_rect(midleft=(MARGIN, HEADER_H // 2)))
        self.screen.blit(record, record.get_rect(midright=(self.width - MARGIN, HEADER_H // 2)))

    # ── Direction pad ────────────────────────────────────────────
    def _draw_pad(self, active: bool) -> None:
        arrow_col = TEXT_COL if active else DIM_COL
        for direction, rect in self.pad_buttons.items():
            pygame.draw.rect(self.screen, BUTTON_COL, rect, border_radius=6)
            cx, cy = rect.center
            r = rect.width // 4
            dx, dy = direction.vector
            px, py = -dy, dx  # perpendicular
            tip = (cx + dx * r, cy + dy * r)
            left = (cx - dx * r + px * r, cy - dy * r + py * r)
            right = (cx - dx * r - px * r, cy - dy * r - py * r)
            pygame.draw.polygon(self.screen, arrow_col, [tip, left, right])

    # ── Overlays ─────────────────────────────────────────────────
    def _draw_overlay_base(self) -> None:
        shade = pygame.Surface((self.board_px, self.board_px), pygame.SRCALPHA)
        shade.fill(OVERLAY_COL)
        self.screen.blit(shade, (MARGIN, HEADER_H))

    def _draw_text_line(self, text: str, color: tuple, cy: int, font: pygame.font.Font) -> int:
        surf = font.render(text, True, color)
        self.screen.blit(surf, surf.get_rect(center=(self.width // 2, cy)))
        return cy + surf.get_height() + 6

    def _draw_button(self, label: str) -> None:
        pygame.draw.rect(self.screen, HEAD_COL, self.overlay_button, border_radius=6)
        txt = self.font_med.render(label, True, PANEL_BG)
        self.screen.blit(txt, txt.get_rect(center=self.overlay_button.center))

    def _draw_start_overlay(self) -> None:
        self._draw_overlay_base()
        cy = HEADER_H + self.board_px // 2 - 30
        cy = self._draw_text_line("SNAKE", HEAD_COL, cy, self.font_big)
        self._draw_text_line("WASD or arrow keys", DIM_COL, cy, self.font_small)
        self._draw_button("Start game")

    def _draw_game_over_overlay(self, snap: Snapshot) -> None:
        self._draw_overlay_base()
        title = "Board cleared!" if snap.won else "Game over!"
        cy = HEADER_H + self.board_px // 2 - 44
        cy = self._draw_text_line(title, TEXT_COL, cy, self.font_big)
        cy = self._draw_text_line(f"Score: {snap.score}", TEXT_COL, cy, self.font_med)
        if snap.new_high_score and snap.score > 0:
            self._draw_text_line("New record!", RECORD_COL, cy, self.font_small)
        self._draw_button("Play again")

    # ── Font init ────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        specs = [
            ("font_big",   "dejavusans", 22, True),
            ("font_med",   "dejavusans", 15, False),
            ("font_small", "dejavusans", 12, False),
        ]
        for attr, name, size, bold in specs:
            try:
                setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
            except (pygame.error, OSError):
                setattr(self, attr, pygame.font.Font(None, size))
