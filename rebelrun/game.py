from __future__ import annotations

import logging
import random
from typing import Optional

import pygame

from .canvas import Canvas
from .constants import CANVAS_HEIGHT, CANVAS_WIDTH, FPS
from .events import EventBus
from .image_store import ImageStore
from .input_queue import InputQueue
from .level_config import apply_levels_from_cfg
from .loop import SimulationLoop
from .models import Direction, sprite_ids
from .music import SoundBoard
from .render import PygameRenderer
from .session import SessionStateMachine
from .ui_components import Dialog, Hud

logger = logging.getLogger(__name__)


class Game:

    # ---- Core lifecycle wiring ----

    def __init__(self, screen: pygame.Surface, cfg: dict, *, rng: Optional[random.Random] = None) -> None:
        self.screen = screen
        self.cfg = cfg
        self.clock = pygame.time.Clock()
        self.fps = int(cfg.get("display", {}).get("fps", FPS))
        self.running = False

        # Catalog is validated here; a bad config stops us before anything is drawn.
        levels = apply_levels_from_cfg(cfg)
        gameplay = cfg.get("gameplay", {})

        self.events = EventBus()
        self.session = SessionStateMachine(
            levels,
            events=self.events,
            rng=rng,
            lives=int(cfg.get("lives", 3)),
            hit_width=float(gameplay.get("hit_width", 75)),
            collisions=bool(gameplay.get("hazard_collisions", True)),
        )

        self.images = ImageStore(cfg.get("images", {}))
        audio = cfg.get("audio", {})
        self.sounds = SoundBoard(
            cfg.get("sounds", {}),
            music_volume=audio.get("music_volume", 0.5),
            sfx_volume=audio.get("sfx_volume", 0.8),
        )
        self.sounds.bind(self.events)

        self.dialog = Dialog()
        self.dialog.bind(self.events)
        self.hud = Hud()

        self.iq = InputQueue()
        self.canvas = Canvas(PygameRenderer(self.screen), self.images)
        self.loop = SimulationLoop(self.session, self.canvas, self.iq)

        self.key_to_dir = {
            pygame.K_UP: Direction.UP, pygame.K_RIGHT: Direction.RIGHT,
            pygame.K_LEFT: Direction.LEFT, pygame.K_DOWN: Direction.DOWN,
            pygame.K_w: Direction.UP, pygame.K_d: Direction.RIGHT,
            pygame.K_a: Direction.LEFT, pygame.K_s: Direction.DOWN,
        }

    def run(self) -> None:
        self.images.load(sprite_ids())
        self.images.on_ready(self.loop.start)
        self.running = True
        while self.running:
            for event in pygame.event.get():
                self.handle_event(event)
            self.loop.tick()
            self.draw_overlay()
            pygame.display.flip()
            self.clock.tick(self.fps)
        self.loop.stop()

    # ---- Input ----

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
            return

        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_ESCAPE, pygame.K_q):
                self.running = False
                return
            if event.key in (pygame.K_RETURN, pygame.K_SPACE, pygame.K_KP_ENTER):
                self.dialog.confirm(self.session)
                return
            direction = self.key_to_dir.get(event.key)
            if direction is not None:
                self.iq.push(direction)

        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._click_select(event.pos)

    def _click_select(self, pos: tuple[int, int]) -> None:
        index = self.dialog.icon_at(pos)
        if index is not None:
            self.session.select_actor(index)

    # ---- Rendering ----

    def draw_overlay(self) -> None:
        self.hud.draw(self.screen, self.session)
        self.dialog.draw(self.screen, self.session, self.images)


def open_window(cfg: dict) -> pygame.Surface:
    flags = pygame.FULLSCREEN | pygame.SCALED if cfg.get("display", {}).get("fullscreen") else 0
    return pygame.display.set_mode((CANVAS_WIDTH, CANVAS_HEIGHT), flags)


__all__ = ["Game", "open_window"]
