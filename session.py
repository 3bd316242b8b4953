"""The single owner of the live game state."""

from __future__ import annotations

import logging
import random
from typing import Optional

import engine
from engine import GameState, Phase, RandomSource
from scheduler import FrameScheduler

logger = logging.getLogger("rocket.session")


class GameSession:
    """Drive :mod:`engine` from user actions and the frame scheduler.

    The tick callback is scheduled whenever the round enters
    :attr:`Phase.PLAYING` and cancelled as soon as it leaves it, so no physics
    runs on the menu or the game over screen.
    """

    def __init__(
        self,
        *,
        rng: Optional[RandomSource] = None,
        scheduler: Optional[FrameScheduler] = None,
    ) -> None:
        self.rng: RandomSource = rng if rng is not None else random.Random()
        self.scheduler = scheduler if scheduler is not None else FrameScheduler()
        self.state = GameState()

    @property
    def phase(self) -> Phase:
        return self.state.phase

    def start(self) -> None:
        self._apply(engine.start(self.state))

    def restart(self) -> None:
        if self.phase is Phase.GAME_OVER:
            self.start()

    def reset(self) -> None:
        self._apply(engine.reset(self.state))

    def activate(self) -> None:
        self.state = engine.activate(self.state)

    def tick(self) -> None:
        self._apply(engine.tick(self.state, self.rng))

    def _apply(self, new_state: GameState) -> None:
        old_phase = self.state.phase
        self.state = new_state
        if new_state.phase is old_phase:
            return

        if new_state.phase is Phase.PLAYING:
            self.scheduler.schedule(self.tick)
        else:
            self.scheduler.cancel()

        if new_state.phase is Phase.GAME_OVER:
            logger.info(
                "Game over: score=%d high_score=%d", new_state.score, new_state.high_score
            )
            if engine.is_new_high_score(new_state):
                logger.info("New high score: %d", new_state.high_score)
        else:
            logger.info("Phase %s -> %s", old_phase.value, new_state.phase.value)


__all__ = ["GameSession"]
