from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import pygame

from .constants import *  # noqa: F401,F403
from .events import EventBus, GameLost, GameWon, LevelCleared, LevelStarted, NewGame

if TYPE_CHECKING:
    from .canvas import ResourceProvider
    from .session import SessionStateMachine

logger = logging.getLogger(__name__)


class Hud:
    def __init__(self) -> None:
        self.font = pygame.font.Font(None, HUD_FONT_SIZE)

    def draw(self, surface: pygame.Surface, session: "SessionStateMachine") -> None:
        actor = session.actor
        lives = actor.lives if actor else session.lives
        score = actor.score if actor else 0
        items = (
            f"LEVEL {session.level}",
            f"LIVES {lives}",
            f"SCORE {score}",
            f"BEST {session.best_score}",
        )
        slot = CANVAS_WIDTH // len(items)
        y = CANVAS_HEIGHT - self.font.get_height() - 8
        for i, text in enumerate(items):
            surf = self.font.render(text, True, INK)
            surface.blit(surf, (i * slot + (slot - surf.get_width()) // 2, y))


class Dialog:
    """Modal prompt shown between levels; its one button drives ``session.confirm()``."""

    def __init__(self) -> None:
        self.title_font = pygame.font.Font(None, DIALOG_TITLE_FONT_SIZE)
        self.text_font = pygame.font.Font(None, DIALOG_TEXT_FONT_SIZE)
        self.open = False
        self.title = ""
        self.subtitle = ""
        self.button = ""
        self.show_selection = False
        self.end_game = False
        self.icon_rects: list[pygame.Rect] = []
        self.on_new_game(NewGame())

    def bind(self, events: EventBus) -> None:
        events.subscribe(NewGame, self.on_new_game)
        events.subscribe(LevelStarted, self.on_level_started)
        events.subscribe(LevelCleared, self.on_level_cleared)
        events.subscribe(GameWon, self.on_game_won)
        events.subscribe(GameLost, self.on_game_lost)

    # ---- Transition handlers ----

    def _show(self, title: str, subtitle: str, button: str, *, selection: bool, end_game: bool) -> None:
        self.title = title
        self.subtitle = subtitle
        self.button = button
        self.show_selection = selection
        self.end_game = end_game
        self.open = True

    def on_new_game(self, _event: NewGame) -> None:
        self._show("Choose a Player", "", "Start Game", selection=True, end_game=False)

    def on_level_started(self, _event: LevelStarted) -> None:
        self.open = False

    def on_level_cleared(self, event: LevelCleared) -> None:
        self._show(
            "You made it!",
            "Prepare yourself... the next mission will be harder than the last",
            f"Start Level {event.next_level}",
            selection=False,
            end_game=False,
        )

    def on_game_won(self, event: GameWon) -> None:
        sub = "Perfect score!" if event.is_perfect else "Plan again and beat your best score"
        self._show("Mission complete!", sub, "Play Again", selection=False, end_game=True)

    def on_game_lost(self, _event: GameLost) -> None:
        self._show(
            "Game over!",
            "You failed to complete your mission",
            "Try Again",
            selection=False,
            end_game=True,
        )

    # ---- Input ----

    def confirm(self, session: "SessionStateMachine") -> bool:
        if not self.open:
            return False
        return session.confirm()

    def icon_at(self, pos: tuple[int, int]) -> Optional[int]:
        if not (self.open and self.show_selection):
            return None
        for i, rect in enumerate(self.icon_rects):
            if rect.collidepoint(pos):
                return i
        return None

    # ---- Rendering ----

    def draw(self, surface: pygame.Surface, session: "SessionStateMachine", images: "ResourceProvider") -> None:
        if not self.open:
            return

        w = int(CANVAS_WIDTH * DIALOG_WIDTH_FACTOR)
        h = 300 if self.show_selection or session.actor else 220
        origin = ((CANVAS_WIDTH - w) // 2, (CANVAS_HEIGHT - h) // 2)
        panel = pygame.Surface((w, h), pygame.SRCALPHA)
        pygame.draw.rect(panel, DIALOG_BG, panel.get_rect(), border_radius=DIALOG_RADIUS)
        pygame.draw.rect(panel, DIALOG_BORDER, panel.get_rect(), width=2, border_radius=DIALOG_RADIUS)

        y = 20
        title = self.title_font.render(self.title, True, INK)
        panel.blit(title, ((w - title.get_width()) // 2, y))
        y += title.get_height() + 8
        if self.subtitle:
            sub = self.text_font.render(self.subtitle, True, ACCENT)
            panel.blit(sub, ((w - sub.get_width()) // 2, y))
            y += sub.get_height() + 12

        if self.show_selection:
            y = self._draw_selection(panel, session, images, y, origin)
        elif session.actor is not None:
            y = self._draw_icon(panel, images, session.actor.sprite, (w - SELECT_ICON_SIZE) // 2, y)

        label = self.text_font.render(f"[ ENTER ]  {self.button}", True, INK)
        panel.blit(label, ((w - label.get_width()) // 2, h - label.get_height() - 18))

        surface.blit(panel, origin)

    def _draw_selection(
        self,
        panel: pygame.Surface,
        session: "SessionStateMachine",
        images,
        y: int,
        origin: tuple[int, int],
    ) -> int:
        kinds = session.roster.kinds
        gap = 12
        total = len(kinds) * SELECT_ICON_SIZE + (len(kinds) - 1) * gap
        x = (panel.get_width() - total) // 2
        self.icon_rects = []
        for i, kind in enumerate(kinds):
            self._draw_icon(panel, images, kind.sprite, x, y)
            self.icon_rects.append(
                pygame.Rect(origin[0] + x, origin[1] + y, SELECT_ICON_SIZE, SELECT_ICON_SIZE)
            )
            if i == session.roster.idx:
                rect = pygame.Rect(x - 4, y - 4, SELECT_ICON_SIZE + 8, SELECT_ICON_SIZE + 8)
                pygame.draw.rect(panel, ACCENT, rect, width=3, border_radius=8)
            x += SELECT_ICON_SIZE + gap
        name = self.text_font.render(session.roster.current().label, True, ACCENT)
        panel.blit(name, ((panel.get_width() - name.get_width()) // 2, y + SELECT_ICON_SIZE + 8))
        return y + SELECT_ICON_SIZE + 8 + name.get_height()

    def _draw_icon(self, panel: pygame.Surface, images, sprite_id: str, x: int, y: int) -> int:
        img: Optional[pygame.Surface] = images.get(sprite_id)
        rect = pygame.Rect(x, y, SELECT_ICON_SIZE, SELECT_ICON_SIZE)
        if img is not None:
            iw, ih = img.get_size()
            scale = min(rect.width / max(1, iw), rect.height / max(1, ih))
            scaled = pygame.transform.smoothscale(img, (max(1, int(iw * scale)), max(1, int(ih * scale))))
            panel.blit(scaled, scaled.get_rect(center=rect.center))
        else:
            pygame.draw.rect(panel, SPRITE_COLORS.get(sprite_id, INK), rect.inflate(-20, -20), border_radius=10)
        return y + SELECT_ICON_SIZE + 8


__all__ = ["Hud", "Dialog"]
