from __future__ import annotations

from typing import Any, Optional, Protocol


class Renderer(Protocol):
    def draw_image(self, handle: Optional[Any], x: float, y: float, *, sprite_id: str = "") -> None: ...

    def clear(self) -> None: ...


class ResourceProvider(Protocol):
    def get(self, sprite_id: str) -> Optional[Any]: ...


class Canvas:
    """Pairs a renderer with the resource provider so entities can draw by sprite id."""

    def __init__(self, renderer: Renderer, resources: ResourceProvider) -> None:
        self.renderer = renderer
        self.resources = resources

    def clear(self) -> None:
        self.renderer.clear()

    def draw(self, sprite_id: str, x: float, y: float) -> None:
        self.renderer.draw_image(self.resources.get(sprite_id), x, y, sprite_id=sprite_id)


__all__ = ["Renderer", "ResourceProvider", "Canvas"]
