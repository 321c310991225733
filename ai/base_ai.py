"""Base decider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from engine.state import GameAction, GameState


class BaseDecider(ABC):
    """Abstract move-selection contract."""

    @abstractmethod
    def decide(self, state: GameState) -> GameAction:
        """Choose a legal action for the given state."""
        raise NotImplementedError
