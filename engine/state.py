"""Game model contract consumed by the search deciders."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import List


class InvalidActionError(ValueError):
    """Raised when an action cannot be applied to a state."""


class Status(str, Enum):
    """Outcome status of a position."""

    ONGOING = "ongoing"
    BLACK_WINS = "black_wins"
    WHITE_WINS = "white_wins"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self is not Status.ONGOING


class GameState(ABC):
    """Immutable position of a two-player, turn-based game.

    Implementations must support value equality and hashing so a state can key
    a memo table.
    """

    @abstractmethod
    def legal_actions(self) -> List["GameAction"]:
        """Return legal actions for the side to move, in a stable order."""
        raise NotImplementedError

    @abstractmethod
    def status(self) -> Status:
        raise NotImplementedError

    @abstractmethod
    def heuristic(self) -> float:
        """Static score; higher values favor the maximizing side."""
        raise NotImplementedError


class GameAction(ABC):
    """Immutable transition from a state for one side."""

    @abstractmethod
    def valid_on(self, state: GameState) -> bool:
        raise NotImplementedError

    @abstractmethod
    def apply_to(self, state: GameState) -> GameState:
        """Return the successor state or raise InvalidActionError."""
        raise NotImplementedError
