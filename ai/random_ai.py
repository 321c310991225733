"""Uniform random baseline decider."""

from __future__ import annotations

import random
from typing import Optional

from ai.base_ai import BaseDecider
from ai.errors import NoMovesAvailableError
from ai.tiebreak import choose_uniform
from engine.state import GameAction, GameState


class RandomDecider(BaseDecider):
    """Plays any legal action with equal probability."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed) if seed is not None else None

    def decide(self, state: GameState) -> GameAction:
        actions = state.legal_actions()
        if not actions:
            raise NoMovesAvailableError(f"No legal actions for {state!r}")
        return choose_uniform(actions, self._rng)
