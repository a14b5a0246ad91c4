from __future__ import annotations

import pytest

from rebelrun.constants import ACTOR_START, WON_Y
from rebelrun.entities import Hazard
from rebelrun.events import (
    GameLost,
    GameWon,
    LevelCleared,
    LevelStarted,
    NewGame,
    PlayerHighlighted,
)
from rebelrun.exceptions import LevelConfigError
from rebelrun.models import HAZARDS, LEVELS, Direction, LevelSpec, SessionState
from rebelrun.session import SessionStateMachine


def cross(session: SessionStateMachine) -> None:
    for _ in range(7):
        session.handle_direction(Direction.UP)


def collect_all(session: SessionStateMachine) -> None:
    actor = session.actor
    for token in list(session.collectibles):
        actor.x, actor.y = token.position
        token.update(actor)
    session.flush()
    actor.reset_position()


# ---- Lifecycle -------------------------------------------------------------

def test_starts_in_player_selection_with_nothing_live(session):
    assert session.state is SessionState.SELECTING_PLAYER
    assert session.level == 1
    assert session.total_levels == 3
    assert session.actor is None
    assert session.hazards == []
    assert session.collectibles == []


def test_start_builds_level_one(session, record):
    started = record(LevelStarted)
    assert session.start()

    assert session.state is SessionState.PLAYING
    assert len(session.hazards) == 5
    assert len(session.collectibles) == 5
    assert session.max_score == 7000
    assert session.actor.position == ACTOR_START
    assert session.actor.lives == 3
    assert started == [LevelStarted(level=1)]


def test_full_walk_through_three_levels(session, record):
    seen = record(LevelCleared, GameWon)
    session.start()

    cross(session)
    assert session.state is SessionState.LEVEL_CLEARED
    assert session.level == 2
    assert seen[-1] == LevelCleared(next_level=2)

    session.actor.lives = 2
    assert session.start()
    assert session.state is SessionState.PLAYING
    assert session.actor.position == ACTOR_START
    assert session.actor.lives == 2
    assert {h.kind.id for h in session.hazards} == {"trooper", "vader"}
    assert session.max_score == 7000 + 8500

    cross(session)
    assert session.level == 3
    session.start()
    assert {h.kind.id for h in session.hazards} == {"trooper", "kylo"}

    cross(session)
    assert session.state is SessionState.GAME_WON
    assert session.level == 1
    assert seen[-1] == GameWon(is_perfect=False, score=0, best_score=0)


def test_perfect_run_sets_best_score(session, record):
    won = record(GameWon)
    session.start()
    for _ in range(3):
        collect_all(session)
        assert session.collectibles == []
        cross(session)
        if session.state is SessionState.LEVEL_CLEARED:
            session.start()

    assert session.state is SessionState.GAME_WON
    total = 7000 + 8500 + 8500
    assert session.max_score == total
    assert session.best_score == total
    assert won == [GameWon(is_perfect=True, score=total, best_score=total)]


def test_best_score_survives_new_game_and_only_rises(session):
    session.start()
    collect_all(session)
    for _ in range(3):
        cross(session)
        if session.state is SessionState.LEVEL_CLEARED:
            session.start()
    assert session.best_score == 7000

    session.new_game()
    assert session.best_score == 7000
    session.start()
    assert session.max_score == 7000
    for _ in range(3):
        cross(session)
        if session.state is SessionState.LEVEL_CLEARED:
            session.start()
    assert session.state is SessionState.GAME_WON
    assert session.best_score == 7000


def test_losing_last_life_ends_the_game(session, record):
    lost = record(GameLost)
    session.start()
    session.actor.award(1000)
    session.actor.lives = 1
    kept = list(session.collectibles)

    session.actor.setback()
    session.flush()

    assert session.state is SessionState.GAME_LOST
    assert session.hazards == []
    assert session.collectibles == kept
    assert session.level == 1
    assert session.actor.y == WON_Y
    assert lost == [GameLost(score=1000)]


def test_losing_on_a_later_level_resets_progress(session):
    session.start()
    cross(session)
    session.start()
    assert session.level == 2
    session.actor.lives = 1
    session.actor.lose_life()
    session.flush()
    assert session.state is SessionState.GAME_LOST
    assert session.level == 1


@pytest.mark.parametrize("finish", ["win", "lose"])
def test_new_game_returns_to_selection(session, record, finish):
    fresh = record(NewGame)
    session.start()
    if finish == "win":
        for _ in range(3):
            cross(session)
            if session.state is SessionState.LEVEL_CLEARED:
                session.start()
    else:
        session.actor.lives = 1
        session.actor.lose_life()
        session.flush()

    assert session.new_game()
    assert session.state is SessionState.SELECTING_PLAYER
    assert session.actor is None
    assert session.hazards == []
    assert session.collectibles == []
    assert session.max_score == 0
    assert session.level == 1
    assert len(fresh) == 1


def test_commands_outside_their_states_are_ignored(session):
    assert not session.new_game()
    session.start()
    assert not session.start()
    assert not session.new_game()
    assert not session.select_actor(1)
    assert session.state is SessionState.PLAYING


def test_confirm_follows_the_dialog_flow(session):
    assert session.confirm()
    assert session.state is SessionState.PLAYING
    assert not session.confirm()
    cross(session)
    assert session.confirm()
    assert session.level == 2
    session.actor.lives = 1
    session.actor.lose_life()
    session.flush()
    assert session.confirm()
    assert session.state is SessionState.SELECTING_PLAYER


def test_directions_are_ignored_between_levels(session):
    session.start()
    cross(session)
    assert session.state is SessionState.LEVEL_CLEARED
    y = session.actor.y
    session.handle_direction(Direction.DOWN)
    assert session.actor.y == y


# ---- Player selection ------------------------------------------------------

def test_selection_moves_through_roster(session, record):
    highlighted = record(PlayerHighlighted)
    session.handle_direction(Direction.LEFT)
    assert session.roster.idx == 0
    assert highlighted == []

    session.handle_direction(Direction.RIGHT)
    session.handle_direction(Direction.DOWN)
    session.handle_direction(Direction.RIGHT)
    assert session.roster.idx == 2
    assert [e.index for e in highlighted] == [1, 2]
    assert highlighted[0].sound_id == "r2d2"

    session.handle_direction(Direction.UP)
    assert session.roster.idx == 1

    session.start()
    assert session.actor.kind.id == "r2d2"


def test_select_actor_by_index(session):
    assert session.select_actor(2)
    assert not session.select_actor(2)
    assert not session.select_actor(7)
    session.start()
    assert session.actor.kind.id == "chewie"


# ---- Collisions and collection ---------------------------------------------

def test_hazard_contact_sets_actor_back(session):
    session.start()
    actor = session.actor
    actor.handle_input(Direction.UP)
    session.session.hazards = [Hazard(HAZARDS["trooper"], x=actor.x - 60, y=actor.y)]

    assert session.resolve_collisions()
    session.flush()
    assert actor.position == ACTOR_START
    assert actor.lives == 2


def test_hazard_in_another_lane_or_far_away_misses(session):
    session.start()
    actor = session.actor
    actor.handle_input(Direction.UP)
    session.session.hazards = [
        Hazard(HAZARDS["trooper"], x=actor.x, y=actor.y - 83),
        Hazard(HAZARDS["trooper"], x=actor.x - 75, y=actor.y),
    ]
    assert not session.resolve_collisions()
    assert actor.lives == 3


def test_collisions_can_be_switched_off(events, rng):
    session = SessionStateMachine(dict(LEVELS), events=events, rng=rng, collisions=False)
    session.start()
    actor = session.actor
    session.session.hazards = [Hazard(HAZARDS["kylo"], x=actor.x, y=actor.y)]
    assert not session.resolve_collisions()


def test_collected_items_leave_the_live_list(session):
    session.start()
    token = session.collectibles[0]
    session.actor.x, session.actor.y = token.position
    token.update(session.actor)
    session.flush()
    assert token not in session.collectibles
    assert len(session.collectibles) == 4


def test_custom_lives(events, rng):
    session = SessionStateMachine(dict(LEVELS), events=events, rng=rng, lives=5)
    session.start()
    assert session.actor.lives == 5


# ---- Catalog validation ----------------------------------------------------

def test_oversized_level_three_is_rejected_at_construction(events):
    levels = dict(LEVELS)
    levels[3] = LevelSpec(3, hazards=(("trooper", 6),), collectibles=(("rebel", 25),))
    with pytest.raises(LevelConfigError):
        SessionStateMachine(levels, events=events)


def test_empty_catalog_is_rejected(events):
    with pytest.raises(LevelConfigError):
        SessionStateMachine({}, events=events)


def test_single_level_catalog_wins_after_one_crossing(events, rng):
    session = SessionStateMachine({1: LEVELS[1]}, events=events, rng=rng)
    session.start()
    cross(session)
    assert session.state is SessionState.GAME_WON
