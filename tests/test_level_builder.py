from __future__ import annotations

import random
from collections import Counter

import pytest

from rebelrun import level_builder
from rebelrun.constants import COLLECTIBLE_COLUMNS, LANE_ROWS
from rebelrun.exceptions import ConfigurationError, LevelConfigError, UnknownVariantError
from rebelrun.level_builder import build_level, grid_cells, validate_level
from rebelrun.models import LEVELS, LevelSpec


def test_grid_has_twenty_four_distinct_cells():
    cells = grid_cells()
    assert len(cells) == 24
    assert len(set(cells)) == 24
    assert {x for x, _ in cells} == set(COLLECTIBLE_COLUMNS)
    assert {y for _, y in cells} == set(LANE_ROWS)


@pytest.mark.parametrize("lid", [1, 2, 3])
def test_builtin_levels_build_with_expected_counts(lid, events, rng):
    spec = LEVELS[lid]
    built = build_level(spec, events=events, rng=rng)

    hazards = Counter(h.kind.id for h in built.hazards)
    collectibles = Counter(c.kind.id for c in built.collectibles)
    assert hazards == Counter(dict(spec.hazards))
    assert collectibles == Counter(dict(spec.collectibles))
    assert built.max_score == sum(c.points for c in built.collectibles)


def test_level_one_max_score(events, rng):
    built = build_level(LEVELS[1], events=events, rng=rng)
    assert built.max_score == 3 * 1000 + 2 * 2000


def test_collectibles_occupy_distinct_grid_cells(events):
    cells = set(grid_cells())
    for seed in range(25):
        built = build_level(LEVELS[3], events=events, rng=random.Random(seed))
        positions = [c.position for c in built.collectibles]
        assert len(positions) == len(set(positions))
        assert set(positions) <= cells


def test_full_grid_is_accepted(events, rng):
    spec = LevelSpec(9, collectibles=(("rebel", 24),))
    built = build_level(spec, events=events, rng=rng)
    assert {c.position for c in built.collectibles} == set(grid_cells())


def test_too_many_collectibles_fails_before_anything_is_built(events, rng, monkeypatch):
    created = []
    monkeypatch.setattr(level_builder, "Hazard", lambda *a, **kw: created.append(a))
    spec = LevelSpec(3, hazards=(("trooper", 6),), collectibles=(("rebel", 20), ("phoenix", 5)))

    with pytest.raises(LevelConfigError, match="25 collectibles"):
        build_level(spec, events=events, rng=rng)
    assert created == []


def test_unknown_kinds_are_rejected():
    with pytest.raises(UnknownVariantError):
        validate_level(LevelSpec(1, hazards=(("tie_fighter", 1),)))
    with pytest.raises(UnknownVariantError):
        validate_level(LevelSpec(1, collectibles=(("holocron", 1),)))


def test_negative_counts_are_rejected():
    with pytest.raises(LevelConfigError):
        validate_level(LevelSpec(1, hazards=(("trooper", -1),)))


def test_config_errors_share_a_base():
    assert issubclass(LevelConfigError, ConfigurationError)
    assert issubclass(UnknownVariantError, ConfigurationError)


def test_empty_level_builds_nothing(events, rng):
    built = build_level(LevelSpec(4), events=events, rng=rng)
    assert built.hazards == []
    assert built.collectibles == []
    assert built.max_score == 0
