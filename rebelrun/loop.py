from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .canvas import Canvas
from .input_queue import InputQueue
from .session import SessionStateMachine

logger = logging.getLogger(__name__)


class SimulationLoop:
    def __init__(
        self,
        session: SessionStateMachine,
        canvas: Canvas,
        inputs: Optional[InputQueue] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._session = session
        self._canvas = canvas
        self._inputs = inputs or InputQueue()
        self._clock = clock

        self._running = False
        self._last_t = 0.0
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._last_t = self._clock()
        logger.info("simulation loop started")

    def stop(self) -> None:
        if self._running:
            logger.info("simulation loop stopped after %d ticks", self.ticks)
        self._running = False

    def tick(self, now: Optional[float] = None) -> float:
        if not self._running:
            return 0.0

        now = self._clock() if now is None else now
        dt = max(0.0, now - self._last_t)
        self._last_t = now

        command = self._inputs.take()
        if command is not None:
            self._session.handle_direction(command)

        self._update(dt)
        self._render()
        self.ticks += 1
        return dt

    def _update(self, dt: float) -> None:
        hazards, collectibles, actor = self._session.live_entities()
        for hazard in list(hazards):
            hazard.update(dt)
        if actor is not None:
            for collectible in list(collectibles):
                collectible.update(actor, self._canvas)
            actor.update()
        self._session.resolve_collisions()
        self._session.flush()

    def _render(self) -> None:
        hazards, collectibles, actor = self._session.live_entities()
        self._canvas.clear()
        for hazard in hazards:
            hazard.render(self._canvas)
        for collectible in collectibles:
            collectible.render(self._canvas)
        if actor is not None:
            actor.render(self._canvas)


__all__ = ["SimulationLoop"]
