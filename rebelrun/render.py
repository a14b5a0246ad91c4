from __future__ import annotations

import math
from typing import Optional

import pygame

from .constants import (
    BG,
    CANVAS_WIDTH,
    DEATH_STAR,
    DEATH_STAR_EDGE,
    PLACEHOLDER_SIZE,
    SPRITE_COLORS,
)

# Death star dish dots along the top edge, (cx, cy) in canvas px.
_DISH_DOTS = ((252.5, 80), (312.5, 70), (192.5, 70), (252.5, 30), (292.5, 25), (212.5, 25))


class PygameRenderer:
    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface

    def clear(self) -> None:
        self.surface.fill(BG)
        self._draw_background()

    def draw_image(self, handle: Optional[pygame.Surface], x: float, y: float, *, sprite_id: str = "") -> None:
        if handle is not None:
            self.surface.blit(handle, (int(x), int(y)))
            return

        w, h = PLACEHOLDER_SIZE
        color = SPRITE_COLORS.get(sprite_id, (200, 200, 200))
        rect = pygame.Rect(int(x) + (100 - w) // 2, int(y) + 40, w, h)
        pygame.draw.rect(self.surface, color, rect, border_radius=10)
        pygame.draw.rect(self.surface, DEATH_STAR_EDGE, rect, width=2, border_radius=10)

    def _draw_background(self) -> None:
        cx = CANVAS_WIDTH / 2
        # Lower half of the death star peeks in from above the canvas.
        pygame.draw.circle(self.surface, DEATH_STAR, (int(cx), -150), int(cx))

        wedge = [(cx, -150)]
        r = 275
        for i in range(13):
            a = math.pi * (0.30 + 0.40 * i / 12)
            wedge.append((cx + r * math.cos(a), -150 + r * math.sin(a)))
        pygame.draw.polygon(self.surface, DEATH_STAR, wedge)
        pygame.draw.lines(self.surface, DEATH_STAR_EDGE, True, wedge, 8)

        for dx, dy in _DISH_DOTS:
            pygame.draw.circle(self.surface, DEATH_STAR_EDGE, (int(dx), int(dy)), 10)


__all__ = ["PygameRenderer"]
