from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .constants import COLLECTIBLE_COLUMNS, LANE_ROWS
from .entities import Collectible, Hazard
from .events import EventBus
from .exceptions import LevelConfigError, UnknownVariantError
from .models import COLLECTIBLES, HAZARDS, LevelSpec

logger = logging.getLogger(__name__)


@dataclass
class BuiltLevel:
    hazards: List[Hazard] = field(default_factory=list)
    collectibles: List[Collectible] = field(default_factory=list)
    max_score: int = 0


def grid_cells(
    columns: Sequence[int] = COLLECTIBLE_COLUMNS,
    rows: Sequence[int] = LANE_ROWS,
) -> List[Tuple[int, int]]:
    return [(col, row) for col in columns for row in rows]


def validate_level(spec: LevelSpec, *, cell_count: Optional[int] = None) -> None:
    cells = len(grid_cells()) if cell_count is None else cell_count
    for kind_id, count in spec.hazards:
        if kind_id not in HAZARDS:
            raise UnknownVariantError(f"level {spec.id}: unknown hazard kind {kind_id!r}")
        if count < 0:
            raise LevelConfigError(f"level {spec.id}: hazard count for {kind_id!r} must be >= 0")
    for kind_id, count in spec.collectibles:
        if kind_id not in COLLECTIBLES:
            raise UnknownVariantError(f"level {spec.id}: unknown collectible kind {kind_id!r}")
        if count < 0:
            raise LevelConfigError(f"level {spec.id}: collectible count for {kind_id!r} must be >= 0")
    if spec.collectible_count > cells:
        raise LevelConfigError(
            f"level {spec.id}: {spec.collectible_count} collectibles requested, only {cells} free cells"
        )


def build_level(spec: LevelSpec, *, events: EventBus, rng: Optional[random.Random] = None) -> BuiltLevel:
    rng = rng or random.Random()
    validate_level(spec)

    built = BuiltLevel()
    for kind_id, count in spec.hazards:
        kind = HAZARDS[kind_id]
        for _ in range(count):
            built.hazards.append(Hazard(kind, rng=rng))

    free = grid_cells()
    for kind_id, count in spec.collectibles:
        kind = COLLECTIBLES[kind_id]
        for _ in range(count):
            x, y = free.pop(rng.randrange(len(free)))
            built.collectibles.append(Collectible(kind, x, y, events))
            built.max_score += kind.points

    logger.debug(
        "built level %d: %d hazards, %d collectibles, max score %d",
        spec.id, len(built.hazards), len(built.collectibles), built.max_score,
    )
    return built


__all__ = ["BuiltLevel", "grid_cells", "validate_level", "build_level"]
