"""Event definitions and the bus that carries them.

Entities and the session never call into the presentation or audio layers
directly. They emit plain dataclasses onto an :class:`EventBus`; whoever cares
subscribes by event class::

    bus.subscribe(GameWon, dialog.on_game_won)
    bus.emit(GameWon(is_perfect=True, score=9000, best_score=9000))
    bus.drain()

``emit()`` only queues. ``drain()`` runs handlers in FIFO order; events emitted
by handlers are delivered in the same drain pass.
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Deque, Dict, List, Type

if TYPE_CHECKING:
    from .entities import Collectible

logger = logging.getLogger(__name__)


# ---- Actor / collectible events --------------------------------------------

@dataclass(frozen=True)
class LevelWon:
    """The actor crossed above the top lane."""


@dataclass(frozen=True)
class LivesExhausted:
    """The actor lost its last life."""


@dataclass(frozen=True)
class LowLife:
    lives: int
    sound_id: str = "lastLife"


@dataclass(frozen=True)
class Collected:
    collectible: "Collectible"
    points: int
    sound_id: str


@dataclass(frozen=True)
class PlayerHighlighted:
    index: int
    sound_id: str


# ---- Session transition events ---------------------------------------------

@dataclass(frozen=True)
class NewGame:
    pass


@dataclass(frozen=True)
class LevelStarted:
    level: int


@dataclass(frozen=True)
class LevelCleared:
    next_level: int


@dataclass(frozen=True)
class GameWon:
    is_perfect: bool
    score: int
    best_score: int


@dataclass(frozen=True)
class GameLost:
    score: int


Handler = Callable[[Any], None]


class EventBus:
    def __init__(self) -> None:
        self._queue: Deque[Any] = deque()
        self._subs: Dict[Type[Any], List[Handler]] = defaultdict(list)

    def emit(self, event: Any) -> None:
        self._queue.append(event)

    def subscribe(self, event_type: Type[Any], handler: Handler) -> None:
        self._subs[event_type].append(handler)

    def pending(self) -> int:
        return len(self._queue)

    def drain(self) -> int:
        processed = 0
        while self._queue:
            event = self._queue.popleft()
            handlers = list(self._subs.get(type(event), ()))
            logger.debug("dispatch %s to %d handler(s)", type(event).__name__, len(handlers))
            for handler in handlers:
                handler(event)
            processed += 1
        return processed


__all__ = [
    "LevelWon",
    "LivesExhausted",
    "LowLife",
    "Collected",
    "PlayerHighlighted",
    "NewGame",
    "LevelStarted",
    "LevelCleared",
    "GameWon",
    "GameLost",
    "EventBus",
]
