"""Rules helpers for Othello."""

from __future__ import annotations

from typing import List, Tuple

import numpy as np

from engine.discs import EMPTY

BOARD_SIZE = 8

Position = Tuple[int, int]

DIRECTIONS: Tuple[Position, ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

CORNERS: Tuple[Position, ...] = (
    (0, 0),
    (0, BOARD_SIZE - 1),
    (BOARD_SIZE - 1, 0),
    (BOARD_SIZE - 1, BOARD_SIZE - 1),
)

_COLUMN_LETTERS = "abcdefgh"


def in_bounds(pos: Position) -> bool:
    """Return whether a position is inside the board."""
    row, col = pos
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def flips_for(grid: np.ndarray, row: int, col: int, disc: int) -> List[Position]:
    """Return opponent discs bracketed by placing ``disc`` at (row, col).

    An empty list means the placement is illegal.
    """
    if grid[row, col] != EMPTY:
        return []
    flipped: List[Position] = []
    for dr, dc in DIRECTIONS:
        run: List[Position] = []
        r, c = row + dr, col + dc
        while in_bounds((r, c)) and grid[r, c] == -disc:
            run.append((r, c))
            r += dr
            c += dc
        if run and in_bounds((r, c)) and grid[r, c] == disc:
            flipped.extend(run)
    return flipped


def has_placement(grid: np.ndarray, disc: int) -> bool:
    """Return whether ``disc`` can be placed anywhere."""
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            if flips_for(grid, row, col, disc):
                return True
    return False


def format_square(pos: Position) -> str:
    """Render a board position as notation, e.g. (2, 3) -> "d3"."""
    row, col = pos
    return f"{_COLUMN_LETTERS[col]}{row + 1}"


def parse_square(text: str) -> Position:
    """Parse notation such as "d3" into a (row, col) position."""
    token = text.strip().lower()
    if len(token) != 2 or token[0] not in _COLUMN_LETTERS or not token[1].isdigit():
        raise ValueError(f"Not a board square: {text!r}")
    pos = (int(token[1]) - 1, _COLUMN_LETTERS.index(token[0]))
    if not in_bounds(pos):
        raise ValueError(f"Square out of bounds: {text!r}")
    return pos
