"""Disc colours for Othello."""

from __future__ import annotations

from enum import Enum
from typing import Dict


class Side(str, Enum):
    """Player side. Black moves first and is the maximizing side."""

    BLACK = "black"
    WHITE = "white"

    def opponent(self) -> "Side":
        return Side.WHITE if self is Side.BLACK else Side.BLACK

    @property
    def disc(self) -> int:
        return DISC_VALUES[self]


EMPTY = 0

DISC_VALUES: Dict[Side, int] = {
    Side.BLACK: 1,
    Side.WHITE: -1,
}

DISC_SYMBOLS: Dict[int, str] = {
    EMPTY: ".",
    1: "X",
    -1: "O",
}

