from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from statemachine import State, StateMachine

from .constants import ACTOR_LIVES, HIT_WIDTH
from .entities import Actor, Collectible, Hazard
from .events import (
    Collected,
    EventBus,
    GameLost,
    GameWon,
    LevelCleared,
    LevelStarted,
    LevelWon,
    LivesExhausted,
    NewGame,
    PlayerHighlighted,
)
from .level_builder import build_level
from .level_config import validate_catalog
from .models import ACTORS, LEVELS, Direction, LevelSpec, SessionState
from .roster import ActorRoster

logger = logging.getLogger(__name__)


@dataclass
class Session:
    levels: Dict[int, LevelSpec]
    level: int = 1
    actor: Optional[Actor] = None
    best_score: int = 0
    max_score: int = 0
    hazards: List[Hazard] = field(default_factory=list)
    collectibles: List[Collectible] = field(default_factory=list)
    state: Optional[SessionState] = None

    @property
    def total_levels(self) -> int:
        return len(self.levels)


class SessionFSM(StateMachine):
    """Transition table for a session; the current value is stored on ``Session.state``."""

    selecting_player = State("Selecting player", value=SessionState.SELECTING_PLAYER, initial=True)
    playing = State("Playing", value=SessionState.PLAYING)
    level_cleared = State("Level cleared", value=SessionState.LEVEL_CLEARED)
    game_won = State("Game won", value=SessionState.GAME_WON)
    game_lost = State("Game lost", value=SessionState.GAME_LOST)

    begin_level = selecting_player.to(playing) | level_cleared.to(playing)
    level_won = (
        playing.to(game_won, cond="is_final_level")
        | playing.to(level_cleared, unless="is_final_level")
    )
    lives_exhausted = playing.to(game_lost)
    new_game = game_won.to(selecting_player) | game_lost.to(selecting_player)

    def __init__(self, session: Session) -> None:
        self.session = session
        super().__init__(model=session, state_field="state")

    def is_final_level(self) -> bool:
        return self.session.level >= self.session.total_levels


class SessionStateMachine:
    def __init__(
        self,
        levels: Optional[Mapping[int, LevelSpec]] = None,
        *,
        events: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        roster: Optional[ActorRoster] = None,
        lives: int = ACTOR_LIVES,
        hit_width: float = HIT_WIDTH,
        collisions: bool = True,
    ) -> None:
        catalog = dict(LEVELS if levels is None else levels)
        validate_catalog(catalog)

        self.events = events or EventBus()
        self.rng = rng or random.Random()
        self.roster = roster or ActorRoster(ACTORS.values())
        self.lives = int(lives)
        self.hit_width = float(hit_width)
        self.collisions = bool(collisions)

        self.session = Session(levels=catalog)
        self._fsm = SessionFSM(self.session)

        self.events.subscribe(LevelWon, self._on_level_won)
        self.events.subscribe(LivesExhausted, self._on_lives_exhausted)
        self.events.subscribe(Collected, self._on_collected)

    # ---- Read-only views ----

    @property
    def state(self) -> SessionState:
        return SessionState(self.session.state)

    @property
    def level(self) -> int:
        return self.session.level

    @property
    def total_levels(self) -> int:
        return self.session.total_levels

    @property
    def actor(self) -> Optional[Actor]:
        return self.session.actor

    @property
    def best_score(self) -> int:
        return self.session.best_score

    @property
    def max_score(self) -> int:
        return self.session.max_score

    @property
    def hazards(self) -> List[Hazard]:
        return self.session.hazards

    @property
    def collectibles(self) -> List[Collectible]:
        return self.session.collectibles

    def live_entities(self) -> Tuple[List[Hazard], List[Collectible], Optional[Actor]]:
        s = self.session
        return s.hazards, s.collectibles, s.actor

    # ---- Commands ----

    def start(self) -> bool:
        s = self.session
        state = self.state
        if state is SessionState.SELECTING_PLAYER:
            level = 1
        elif state is SessionState.LEVEL_CLEARED:
            level = s.level
        else:
            logger.debug("start ignored while %s", state.value)
            return False

        built = build_level(s.levels[level], events=self.events, rng=self.rng)

        if state is SessionState.SELECTING_PLAYER:
            actor = Actor(self.roster.current(), self.events, lives=self.lives)
            actor.reset_all()
            s.actor = actor
            s.max_score = 0
        else:
            assert s.actor is not None
            s.actor.reset_position()

        s.level = level
        s.hazards = built.hazards
        s.collectibles = built.collectibles
        s.max_score += built.max_score
        self._fsm.begin_level()
        logger.info("level %d started with %s", level, s.actor.kind.label)
        self.events.emit(LevelStarted(level=level))
        self.events.drain()
        return True

    def new_game(self) -> bool:
        s = self.session
        if self.state not in (SessionState.GAME_WON, SessionState.GAME_LOST):
            logger.debug("new game ignored while %s", self.state.value)
            return False
        if s.actor is not None:
            s.actor.reset_all()
        s.actor = None
        s.hazards = []
        s.collectibles = []
        s.max_score = 0
        s.level = 1
        self._fsm.new_game()
        logger.info("new game, best score %d", s.best_score)
        self.events.emit(NewGame())
        self.events.drain()
        return True

    def confirm(self) -> bool:
        if self.state in (SessionState.GAME_WON, SessionState.GAME_LOST):
            return self.new_game()
        return self.start()

    def handle_direction(self, direction: Direction) -> None:
        state = self.state
        if state is SessionState.SELECTING_PLAYER:
            delta = -1 if direction in (Direction.LEFT, Direction.UP) else 1
            target = self.roster.next_index(delta)
            if target is not None:
                self.select_actor(target)
        elif state is SessionState.PLAYING and self.session.actor is not None:
            self.session.actor.handle_input(direction)
        else:
            logger.debug("%s ignored while %s", direction.value, state.value)
        self.events.drain()

    def select_actor(self, index: int) -> bool:
        if self.state is not SessionState.SELECTING_PLAYER:
            return False
        if not self.roster.set_index(index):
            return False
        kind = self.roster.current()
        self.events.emit(PlayerHighlighted(index=index, sound_id=kind.sound_id))
        self.events.drain()
        return True

    def resolve_collisions(self) -> bool:
        actor = self.session.actor
        if not self.collisions or actor is None or self.state is not SessionState.PLAYING:
            return False
        for hazard in self.session.hazards:
            if hazard.y == actor.y and abs(hazard.x - actor.x) < self.hit_width:
                logger.debug("%r hit %r", hazard, actor)
                actor.setback()
                return True
        return False

    def flush(self) -> int:
        return self.events.drain()

    # ---- Event handlers ----

    def _on_level_won(self, _event: LevelWon) -> None:
        s = self.session
        if self.state is not SessionState.PLAYING or s.actor is None:
            return
        self._fsm.level_won()
        if self.state is SessionState.GAME_WON:
            s.best_score = max(s.best_score, s.actor.score)
            is_perfect = s.actor.score == s.max_score
            s.level = 1
            logger.info("game won: score %d of %d, best %d", s.actor.score, s.max_score, s.best_score)
            self.events.emit(GameWon(is_perfect=is_perfect, score=s.actor.score, best_score=s.best_score))
        else:
            s.level += 1
            logger.info("level cleared, next level %d", s.level)
            self.events.emit(LevelCleared(next_level=s.level))

    def _on_lives_exhausted(self, _event: LivesExhausted) -> None:
        s = self.session
        if self.state is not SessionState.PLAYING:
            return
        self._fsm.lives_exhausted()
        s.hazards = []
        s.level = 1
        score = 0
        if s.actor is not None:
            s.actor.move_offscreen()
            score = s.actor.score
        logger.info("game lost with score %d", score)
        self.events.emit(GameLost(score=score))

    def _on_collected(self, event: Collected) -> None:
        try:
            self.session.collectibles.remove(event.collectible)
        except ValueError:
            return


__all__ = ["Session", "SessionFSM", "SessionStateMachine"]
