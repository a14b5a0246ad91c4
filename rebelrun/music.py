from __future__ import annotations

import logging
import os
from typing import Dict, Mapping, Optional

import pygame

from .events import (
    Collected,
    EventBus,
    GameLost,
    GameWon,
    LevelCleared,
    LevelStarted,
    LowLife,
    PlayerHighlighted,
)

logger = logging.getLogger(__name__)

THEME = "rebelTheme"


class SoundBoard:
    def __init__(
        self,
        paths: Mapping[str, str],
        *,
        music_volume: float = 0.5,
        sfx_volume: float = 0.8,
    ) -> None:
        self.paths: Dict[str, str] = dict(paths)
        self.music_volume = max(0.0, min(1.0, float(music_volume)))
        self.sfx_volume = max(0.0, min(1.0, float(sfx_volume)))
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.channels: Dict[str, pygame.mixer.Channel] = {}
        self.enabled = self._init_mixer()

    def _init_mixer(self) -> bool:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            pygame.mixer.set_num_channels(16)
            return True
        except pygame.error as e:
            logger.warning("audio disabled: %s", e)
            return False

    def _sound(self, sound_id: str) -> Optional[pygame.mixer.Sound]:
        if sound_id in self.sounds:
            return self.sounds[sound_id]
        path = self.paths.get(sound_id)
        if not self.enabled or not path or not os.path.exists(path):
            return None
        try:
            snd = pygame.mixer.Sound(path)
        except pygame.error as e:
            logger.warning("failed to load sound %r from %s: %s", sound_id, path, e)
            return None
        snd.set_volume(self.music_volume if sound_id == THEME else self.sfx_volume)
        self.sounds[sound_id] = snd
        return snd

    def play(self, sound_id: str) -> None:
        snd = self._sound(sound_id)
        if snd is None:
            logger.debug("sound %r unavailable", sound_id)
            return
        paused = self.channels.get(sound_id)
        if paused is not None and paused.get_sound() is snd and paused.get_busy():
            paused.unpause()
            return
        channel = snd.play(loops=-1 if sound_id == THEME else 0)
        if channel is not None:
            self.channels[sound_id] = channel

    def pause(self, sound_id: str) -> None:
        channel = self.channels.get(sound_id)
        if channel is not None:
            channel.pause()

    def stop(self, sound_id: str) -> None:
        snd = self.sounds.get(sound_id)
        if snd is not None:
            snd.stop()
        self.channels.pop(sound_id, None)

    # ---- Event wiring ----

    def bind(self, events: EventBus) -> None:
        events.subscribe(LevelStarted, lambda e: self.play(THEME))
        events.subscribe(LevelCleared, lambda e: self.play("winLevel"))
        events.subscribe(GameWon, self._on_game_over(win=True))
        events.subscribe(GameLost, self._on_game_over(win=False))
        events.subscribe(LowLife, lambda e: self.play(e.sound_id))
        events.subscribe(Collected, lambda e: self.play(e.sound_id))
        events.subscribe(PlayerHighlighted, lambda e: self.play(e.sound_id))

    def _on_game_over(self, *, win: bool):
        def handler(_event) -> None:
            self.stop(THEME)
            self.play("winGame" if win else "lose")
        return handler


__all__ = ["SoundBoard", "THEME"]
