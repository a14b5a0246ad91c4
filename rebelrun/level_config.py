from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from .exceptions import ConfigurationError, LevelConfigError
from .level_builder import validate_level
from .models import LEVELS, LevelSpec

logger = logging.getLogger(__name__)


def _pairs(raw: Any, *, lid: int, section: str) -> Tuple[Tuple[str, int], ...]:
    if not isinstance(raw, dict):
        raise LevelConfigError(f"levels.{lid}.{section} must be an object of kind -> count")
    out = []
    for kind_id, count in raw.items():
        if isinstance(count, bool) or not isinstance(count, int):
            raise LevelConfigError(f"levels.{lid}.{section}.{kind_id} must be an integer")
        out.append((str(kind_id), count))
    return tuple(out)


def apply_levels_from_cfg(
    cfg: Optional[Mapping[str, Any]] = None,
    base: Optional[Mapping[int, LevelSpec]] = None,
) -> Dict[int, LevelSpec]:
    levels: Dict[int, LevelSpec] = dict(LEVELS if base is None else base)
    lvl_cfg = (cfg or {}).get("levels", {}) or {}
    if not isinstance(lvl_cfg, dict):
        raise ConfigurationError("'levels' must be an object keyed by level number")

    for key, value in lvl_cfg.items():
        try:
            lid = int(key)
        except (TypeError, ValueError) as e:
            raise LevelConfigError(f"level key {key!r} is not a number") from e
        if not isinstance(value, dict):
            raise LevelConfigError(f"levels.{lid} must be an object")
        current = levels.get(lid, LevelSpec(lid))
        hazards = _pairs(value["hazards"], lid=lid, section="hazards") if "hazards" in value else current.hazards
        collectibles = (
            _pairs(value["collectibles"], lid=lid, section="collectibles")
            if "collectibles" in value else current.collectibles
        )
        levels[lid] = LevelSpec(lid, hazards=hazards, collectibles=collectibles)
        logger.info("level %d overridden from config", lid)

    validate_catalog(levels)
    return levels


def validate_catalog(levels: Mapping[int, LevelSpec]) -> None:
    if not levels:
        raise LevelConfigError("level catalog is empty")
    expected = list(range(1, len(levels) + 1))
    if sorted(levels) != expected:
        raise LevelConfigError(f"level ids must run 1..{len(levels)}, got {sorted(levels)}")
    for lid in expected:
        spec = levels[lid]
        if spec.id != lid:
            raise LevelConfigError(f"level stored under {lid} declares id {spec.id}")
        validate_level(spec)


__all__ = ["apply_levels_from_cfg", "validate_catalog"]
