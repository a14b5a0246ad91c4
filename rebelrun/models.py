from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class SessionState(str, Enum):
    SELECTING_PLAYER = "selecting_player"
    PLAYING = "playing"
    LEVEL_CLEARED = "level_cleared"
    GAME_WON = "game_won"
    GAME_LOST = "game_lost"


@dataclass(frozen=True)
class HazardKind:
    id: str
    sprite: str
    speed: float


@dataclass(frozen=True)
class ActorKind:
    id: str
    label: str
    sprite: str
    sound_id: str
    order: int


@dataclass(frozen=True)
class CollectibleKind:
    id: str
    sprite: str
    sound_id: str
    points: int


@dataclass(frozen=True)
class LevelSpec:
    id: int
    hazards: Tuple[Tuple[str, int], ...] = field(default_factory=tuple)
    collectibles: Tuple[Tuple[str, int], ...] = field(default_factory=tuple)

    @property
    def collectible_count(self) -> int:
        return sum(count for _, count in self.collectibles)


HAZARDS: Dict[str, HazardKind] = {
    "trooper": HazardKind("trooper", "stormtrooper-color", 400.0),
    "vader": HazardKind("vader", "vader-color", 500.0),
    "kylo": HazardKind("kylo", "kyloren-color", 600.0),
}

ACTORS: Dict[str, ActorKind] = {
    "bb8": ActorKind("bb8", "BB-8", "bb8-color", "bb8", order=0),
    "r2d2": ActorKind("r2d2", "R2-D2", "r2d2-color", "r2d2", order=1),
    "chewie": ActorKind("chewie", "Chewie", "chewie-color", "chewie", order=2),
}

COLLECTIBLES: Dict[str, CollectibleKind] = {
    "rebel": CollectibleKind("rebel", "rebelSymbol", "token", 1000),
    "jedi_order": CollectibleKind("jedi_order", "jediOrder-color", "jediOrder", 1500),
    "phoenix": CollectibleKind("phoenix", "phoenix-color", "phoenix", 2000),
}

LEVELS: Dict[int, LevelSpec] = {
    1: LevelSpec(
        1,
        hazards=(("trooper", 5),),
        collectibles=(("rebel", 3), ("phoenix", 2)),
    ),
    2: LevelSpec(
        2,
        hazards=(("trooper", 5), ("vader", 1)),
        collectibles=(("rebel", 3), ("phoenix", 2), ("jedi_order", 1)),
    ),
    3: LevelSpec(
        3,
        hazards=(("trooper", 6), ("kylo", 1)),
        collectibles=(("rebel", 3), ("phoenix", 2), ("jedi_order", 1)),
    ),
}


def sprite_ids() -> list[str]:
    ids: list[str] = []
    for kinds in (HAZARDS, ACTORS, COLLECTIBLES):
        for kind in kinds.values():
            if kind.sprite not in ids:
                ids.append(kind.sprite)
    return ids


__all__ = [
    "Direction",
    "SessionState",
    "HazardKind",
    "ActorKind",
    "CollectibleKind",
    "LevelSpec",
    "HAZARDS",
    "ACTORS",
    "COLLECTIBLES",
    "LEVELS",
    "sprite_ids",
]
