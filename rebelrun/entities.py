from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Optional, Protocol, Sequence, Tuple

from .constants import (
    ACTOR_COLUMNS,
    ACTOR_LIVES,
    ACTOR_START,
    CANVAS_WIDTH,
    COLUMN_STEP,
    HAZARD_SPAWN_COLUMNS,
    LANE_ROWS,
    OFFSCREEN_X,
    ROW_STEP,
    WON_Y,
)
from .events import Collected, EventBus, LevelWon, LivesExhausted, LowLife
from .models import ActorKind, CollectibleKind, Direction, HazardKind

if TYPE_CHECKING:
    from .canvas import Canvas

logger = logging.getLogger(__name__)


class Entity(Protocol):
    sprite: str
    x: float
    y: float

    @property
    def position(self) -> Tuple[float, float]: ...

    def render(self, canvas: "Canvas") -> None: ...


class _Sprite:
    sprite: str
    x: float
    y: float

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def render(self, canvas: "Canvas") -> None:
        canvas.draw(self.sprite, self.x, self.y)


# ---- Hazard ----------------------------------------------------------------

class Hazard(_Sprite):
    def __init__(
        self,
        kind: HazardKind,
        *,
        rng: Optional[random.Random] = None,
        spawn_rows: Sequence[float] = LANE_ROWS,
        spawn_columns: Sequence[float] = HAZARD_SPAWN_COLUMNS,
        canvas_width: float = CANVAS_WIDTH,
        x: Optional[float] = None,
        y: Optional[float] = None,
    ) -> None:
        self.kind = kind
        self.sprite = kind.sprite
        self.speed = float(kind.speed)
        self.spawn_rows = tuple(spawn_rows)
        self.spawn_columns = tuple(spawn_columns)
        self.canvas_width = canvas_width
        self._rng = rng or random.Random()
        self.x = self._rng.choice(self.spawn_columns) if x is None else x
        self.y = self._rng.choice(self.spawn_rows) if y is None else y

    def update(self, dt: float) -> None:
        self.x += self.speed * dt
        if self.x >= self.canvas_width:
            self.reset_position()

    def reset_position(self) -> None:
        self.x = self._rng.choice(self.spawn_columns)
        self.y = self._rng.choice(self.spawn_rows)

    def __repr__(self) -> str:
        return f"Hazard({self.kind.id!r}, x={self.x:.1f}, y={self.y})"


# ---- Actor -----------------------------------------------------------------

class Actor(_Sprite):
    def __init__(self, kind: ActorKind, events: EventBus, *, lives: int = ACTOR_LIVES) -> None:
        self.kind = kind
        self.sprite = kind.sprite
        self.sound_id = kind.sound_id
        self.events = events
        self.max_lives = max(1, int(lives))
        self.x, self.y = ACTOR_START
        self.lives = self.max_lives
        self.score = 0

    def update(self) -> None:
        # Position only changes on input.
        return

    def handle_input(self, direction: Direction) -> None:
        if direction is Direction.LEFT:
            if self.x != ACTOR_COLUMNS[0]:
                self.x -= COLUMN_STEP
        elif direction is Direction.RIGHT:
            if self.x != ACTOR_COLUMNS[-1]:
                self.x += COLUMN_STEP
        elif direction is Direction.DOWN:
            # Bottom lane steps back onto the start row; start row and above-grid are stops.
            if LANE_ROWS[0] <= self.y <= LANE_ROWS[-1]:
                self.y += ROW_STEP
        elif direction is Direction.UP:
            if self.y >= LANE_ROWS[0]:
                self.y -= ROW_STEP
                if self.y < LANE_ROWS[0]:
                    self.y = WON_Y
                    logger.info("%s crossed the lanes", self.kind.label)
                    self.events.emit(LevelWon())

    def award(self, points: int) -> None:
        self.score += max(0, int(points))

    def lose_life(self) -> None:
        if self.lives > 1:
            self.lives -= 1
            self.events.emit(LowLife(lives=self.lives))
        else:
            self.lives = 0
            self.events.emit(LivesExhausted())

    def setback(self) -> None:
        self.reset_position()
        self.lose_life()

    def move_offscreen(self) -> None:
        self.y = WON_Y

    def reset_position(self) -> None:
        self.x, self.y = ACTOR_START

    def reset_lives(self) -> None:
        self.lives = self.max_lives

    def reset_score(self) -> None:
        self.score = 0

    def reset_all(self) -> None:
        self.reset_position()
        self.reset_lives()
        self.reset_score()

    def __repr__(self) -> str:
        return f"Actor({self.kind.id!r}, x={self.x}, y={self.y}, lives={self.lives}, score={self.score})"


# ---- Collectible -----------------------------------------------------------

class Collectible(_Sprite):
    def __init__(self, kind: CollectibleKind, x: float, y: float, events: EventBus) -> None:
        self.kind = kind
        self.sprite = kind.sprite
        self.sound_id = kind.sound_id
        self.points = int(kind.points)
        self.events = events
        self.x = x
        self.y = y
        self.collected = False

    def update(self, actor: Actor, canvas: Optional["Canvas"] = None) -> None:
        if self.x != actor.x or self.y != actor.y:
            return
        # Parking off-screen makes every later comparison false.
        self.x = OFFSCREEN_X
        self.collected = True
        if canvas is not None:
            self.render(canvas)
        actor.award(self.points)
        self.events.emit(Collected(collectible=self, points=self.points, sound_id=self.sound_id))

    def __repr__(self) -> str:
        return f"Collectible({self.kind.id!r}, x={self.x}, y={self.y})"


__all__ = ["Entity", "Hazard", "Actor", "Collectible"]
