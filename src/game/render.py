# src/game/render.py
from __future__ import annotations
from typing import Dict, Tuple
import pygame
from .config import (
    PIXEL_RATIO, ACTOR_W, ACTOR_H, OBSTACLE_WIDTH, OBSTACLE_HEIGHT,
    PAUSE_TEXT_SIZE, SCORE_TEXT_SIZE, SCORE_POS_PAD_X, SCORE_POS_PAD_Y,
    COLOR_BG, COLOR_PAUSE_TEXT, COLOR_SCORE_TEXT, COLOR_ACTOR, COLOR_ACTOR_EYE,
    COLOR_PIPE, COLOR_PIPE_RIM, COLOR_DIM
)
from .simulation import RenderSnapshot, score_text

PIPE_W = int(OBSTACLE_WIDTH * PIXEL_RATIO)
PIPE_H = int(OBSTACLE_HEIGHT * PIXEL_RATIO)
RIM_H = int(6 * PIXEL_RATIO)


def to_screen(x: float, y: float, size: Tuple[int, int]) -> Tuple[int, int]:
    """World (origin centred, y up) -> screen pixels (origin top-left, y down)."""
    w, h = size
    return int(w / 2 + x), int(h / 2 - y)


class Renderer:
    """Draws a RenderSnapshot. Holds the fonts and the actor sprite."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self._fonts: Dict[int, pygame.font.Font] = {}
        self.actor_sprite = self._make_actor_sprite()

    def font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.SysFont("jetbrainsmono", size)
        return self._fonts[size]

    @staticmethod
    def _make_actor_sprite() -> pygame.Surface:
        w, h = int(ACTOR_W * PIXEL_RATIO), int(ACTOR_H * PIXEL_RATIO)
        surf = pygame.Surface((w, h), pygame.SRCALPHA)
        pygame.draw.ellipse(surf, COLOR_ACTOR, surf.get_rect())
        eye_r = max(2, h // 8)
        pygame.draw.circle(surf, COLOR_ACTOR_EYE, (int(w * 0.72), int(h * 0.35)), eye_r)
        return surf

    def draw_obstacle(self, x: float, y: float, direction: int):
        size = self.screen.get_size()
        cx, cy = to_screen(x, y, size)
        body = pygame.Rect(0, 0, PIPE_W, PIPE_H)
        body.center = (cx, cy)
        pygame.draw.rect(self.screen, COLOR_PIPE, body)
        # rim on the side facing the opening
        rim = pygame.Rect(body.left - 4, 0, PIPE_W + 8, RIM_H)
        if direction > 0:
            rim.bottom = body.bottom
        else:
            rim.top = body.top
        pygame.draw.rect(self.screen, COLOR_PIPE_RIM, rim)

    def draw_actor(self, x: float, y: float, tilt: float):
        rotated = pygame.transform.rotate(self.actor_sprite, tilt)
        r = rotated.get_rect(center=to_screen(x, y, self.screen.get_size()))
        self.screen.blit(rotated, r)

    def draw_overlay(self, snap: RenderSnapshot):
        w, h = self.screen.get_size()
        dim = pygame.Surface((w, h), pygame.SRCALPHA)
        dim.fill(COLOR_DIM)
        self.screen.blit(dim, (0, 0))

        title, prompt, score = snap.overlay
        lines = (
            (title, PAUSE_TEXT_SIZE, h / 6),
            (score, PAUSE_TEXT_SIZE / 1.5, 0.0),
            (prompt, PAUSE_TEXT_SIZE / 3, -h / 6),
        )
        for msg, size, wy in lines:
            txt = self.font(int(size * PIXEL_RATIO)).render(msg, True, COLOR_PAUSE_TEXT)
            self.screen.blit(txt, txt.get_rect(center=to_screen(0.0, wy, (w, h))))

    def draw(self, snap: RenderSnapshot):
        self.screen.fill(COLOR_BG)
        for x, y, direction in snap.obstacles:
            self.draw_obstacle(x, y, direction)
        if snap.actor is not None:
            self.draw_actor(snap.actor.x, snap.actor.y, snap.actor.tilt)

        hud = self.font(int(SCORE_TEXT_SIZE * PIXEL_RATIO)).render(
            score_text(snap.score), True, COLOR_SCORE_TEXT)
        # padded from the top-left corner, text centred on the pad point
        pad = (int(SCORE_POS_PAD_X * PIXEL_RATIO), int(SCORE_POS_PAD_Y * PIXEL_RATIO))
        self.screen.blit(hud, hud.get_rect(center=pad))

        if snap.paused:
            self.draw_overlay(snap)
