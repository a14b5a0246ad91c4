from __future__ import annotations

import random
from typing import Any, Optional

import pytest

from rebelrun.canvas import Canvas
from rebelrun.events import EventBus
from rebelrun.models import LEVELS
from rebelrun.session import SessionStateMachine


class RecordingRenderer:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def clear(self) -> None:
        self.calls.append(("clear",))

    def draw_image(self, handle: Optional[Any], x: float, y: float, *, sprite_id: str = "") -> None:
        self.calls.append(("draw", sprite_id, x, y))

    def frames(self) -> list[list[tuple]]:
        out: list[list[tuple]] = []
        for call in self.calls:
            if call[0] == "clear":
                out.append([])
            elif out:
                out[-1].append(call)
        return out


class NullResources:
    def get(self, sprite_id: str) -> None:
        return None


@pytest.fixture()
def events() -> EventBus:
    return EventBus()


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1977)


@pytest.fixture()
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture()
def canvas(renderer: RecordingRenderer) -> Canvas:
    return Canvas(renderer, NullResources())


@pytest.fixture()
def session(events: EventBus, rng: random.Random) -> SessionStateMachine:
    return SessionStateMachine(dict(LEVELS), events=events, rng=rng)


@pytest.fixture()
def record(events: EventBus):
    """Subscribe a list to the given event types and hand it back."""

    def _record(*types) -> list:
        seen: list = []
        for t in types:
            events.subscribe(t, seen.append)
        return seen

    return _record
