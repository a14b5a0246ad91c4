from __future__ import annotations

import logging
import os
from typing import Callable, Dict, Iterable, List, Mapping, Optional

import pygame

logger = logging.getLogger(__name__)


class ImageStore:
    def __init__(self, paths: Mapping[str, str]) -> None:
        self.paths: Dict[str, str] = dict(paths)
        self.cache: Dict[str, Optional[pygame.Surface]] = {}
        self._ready = False
        self._callbacks: List[Callable[[], None]] = []

    def load(self, sprite_ids: Iterable[str]) -> None:
        for sprite_id in sprite_ids:
            if sprite_id not in self.cache:
                self.cache[sprite_id] = self._load_one(sprite_id)
        self._ready = True
        callbacks, self._callbacks = self._callbacks, []
        for cb in callbacks:
            cb()

    def get(self, sprite_id: str) -> Optional[pygame.Surface]:
        if sprite_id not in self.cache:
            self.cache[sprite_id] = self._load_one(sprite_id)
        return self.cache[sprite_id]

    def on_ready(self, callback: Callable[[], None]) -> None:
        if self._ready:
            callback()
        else:
            self._callbacks.append(callback)

    def _load_one(self, sprite_id: str) -> Optional[pygame.Surface]:
        path = self.paths.get(sprite_id)
        if not path:
            logger.warning("no image path configured for sprite %r", sprite_id)
            return None
        norm = os.path.normpath(path)
        if not os.path.exists(norm):
            logger.warning("sprite %r missing at %s, drawing placeholder", sprite_id, norm)
            return None
        try:
            img = pygame.image.load(norm)
            return img.convert_alpha() if pygame.display.get_surface() else img
        except pygame.error as e:
            logger.warning("failed to load sprite %r from %s: %s", sprite_id, norm, e)
            return None


__all__ = ["ImageStore"]
