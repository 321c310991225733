"""Othello board state and legal move generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

from engine.discs import DISC_SYMBOLS, Side
from engine.rules import BOARD_SIZE, CORNERS, Position, flips_for, format_square, has_placement
from engine.state import GameAction, GameState, InvalidActionError, Status

PASS_SQUARE: Position = (-1, -1)

DISC_WEIGHT = 1.0
MOBILITY_WEIGHT = 2.0
CORNER_WEIGHT = 25.0
WIN_SCORE = 10_000.0

_SYMBOL_TO_DISC = {symbol: disc for disc, symbol in DISC_SYMBOLS.items()}


@dataclass(frozen=True)
class OthelloAction(GameAction):
    """Place a disc for ``side`` at (row, col), or pass when both are -1."""

    side: Side
    row: int
    col: int

    @classmethod
    def pass_for(cls, side: Side) -> "OthelloAction":
        return cls(side=side, row=PASS_SQUARE[0], col=PASS_SQUARE[1])

    @property
    def is_pass(self) -> bool:
        return (self.row, self.col) == PASS_SQUARE

    def valid_on(self, state: GameState) -> bool:
        if not isinstance(state, OthelloState) or self.side is not state.to_move:
            return False
        if self.is_pass:
            return not state.can_place(self.side) and state.can_place(self.side.opponent())
        return (self.row, self.col) in state.placements(self.side)

    def apply_to(self, state: GameState) -> "OthelloState":
        if not isinstance(state, OthelloState) or not self.valid_on(state):
            raise InvalidActionError(f"Illegal action {self} ({self.side.value}) on {state!r}")
        if self.is_pass:
            return OthelloState(state.grid, self.side.opponent())

        grid = state.grid.copy()
        grid[self.row, self.col] = self.side.disc
        for row, col in state.placements(self.side)[(self.row, self.col)]:
            grid[row, col] = self.side.disc
        return OthelloState(grid, self.side.opponent())

    def __str__(self) -> str:
        if self.is_pass:
            return "pass"
        return format_square((self.row, self.col))


class OthelloState(GameState):
    """Immutable 8x8 Othello position with the side to move."""

    def __init__(self, grid: np.ndarray, to_move: Side = Side.BLACK) -> None:
        if grid.shape != (BOARD_SIZE, BOARD_SIZE):
            raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}, got {grid.shape}")
        frozen = np.array(grid, dtype=np.int8, copy=True)
        frozen.flags.writeable = False
        self.grid = frozen
        self.to_move = to_move
        self._placements: Dict[Side, Dict[Position, List[Position]]] = {}

    @classmethod
    def initial(cls) -> "OthelloState":
        grid = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
        mid = BOARD_SIZE // 2
        grid[mid - 1, mid - 1] = Side.WHITE.disc
        grid[mid, mid] = Side.WHITE.disc
        grid[mid - 1, mid] = Side.BLACK.disc
        grid[mid, mid - 1] = Side.BLACK.disc
        return cls(grid, Side.BLACK)

    @classmethod
    def from_rows(cls, rows: Sequence[str], to_move: Side = Side.BLACK) -> "OthelloState":
        """Build a position from eight strings of X (black), O (white) and '.'."""
        if len(rows) != BOARD_SIZE:
            raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(rows)}")
        grid = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
        for row, line in enumerate(rows):
            cells = line.replace(" ", "")
            if len(cells) != BOARD_SIZE:
                raise ValueError(f"Row {row + 1} must have {BOARD_SIZE} cells: {line!r}")
            for col, symbol in enumerate(cells):
                if symbol not in _SYMBOL_TO_DISC:
                    raise ValueError(f"Unknown cell symbol {symbol!r} in row {row + 1}")
                grid[row, col] = _SYMBOL_TO_DISC[symbol]
        return cls(grid, to_move)

    def placements(self, side: Side) -> Dict[Position, List[Position]]:
        """Map each legal placement for ``side`` to the discs it flips."""
        if side not in self._placements:
            found: Dict[Position, List[Position]] = {}
            for row in range(BOARD_SIZE):
                for col in range(BOARD_SIZE):
                    flipped = flips_for(self.grid, row, col, side.disc)
                    if flipped:
                        found[(row, col)] = flipped
            self._placements[side] = found
        return self._placements[side]

    def can_place(self, side: Side) -> bool:
        """Whether ``side`` has any legal placement; stops at the first one found."""
        if side in self._placements:
            return bool(self._placements[side])
        return has_placement(self.grid, side.disc)

    def legal_actions(self) -> List[OthelloAction]:
        """Placements in row-major order, a lone pass, or nothing once the game is over."""
        mover = self.to_move
        own = self.placements(mover)
        if own:
            return [OthelloAction(side=mover, row=row, col=col) for row, col in own]
        if self.can_place(mover.opponent()):
            return [OthelloAction.pass_for(mover)]
        return []

    def disc_counts(self) -> Tuple[int, int]:
        """Return (black, white) disc counts."""
        black = int(np.count_nonzero(self.grid == Side.BLACK.disc))
        white = int(np.count_nonzero(self.grid == Side.WHITE.disc))
        return black, white

    def status(self) -> Status:
        if self.can_place(Side.BLACK) or self.can_place(Side.WHITE):
            return Status.ONGOING
        black, white = self.disc_counts()
        if black > white:
            return Status.BLACK_WINS
        if white > black:
            return Status.WHITE_WINS
        return Status.DRAW

    def heuristic(self) -> float:
        """Score from black's perspective: discs, mobility and corners, plus a win term."""
        black, white = self.disc_counts()
        disc_diff = float(black - white)
        status = self.status()
        if status is Status.BLACK_WINS:
            return WIN_SCORE + disc_diff
        if status is Status.WHITE_WINS:
            return -WIN_SCORE + disc_diff
        if status is Status.DRAW:
            return 0.0

        mobility = len(self.placements(Side.BLACK)) - len(self.placements(Side.WHITE))
        corners = 0
        for row, col in CORNERS:
            corners += int(self.grid[row, col])
        return (DISC_WEIGHT * disc_diff) + (MOBILITY_WEIGHT * mobility) + (CORNER_WEIGHT * corners)

    def render_ascii(self) -> str:
        """Return a simple human-readable board representation."""
        lines: List[str] = ["   " + " ".join("abcdefgh"[:BOARD_SIZE])]
        for row in range(BOARD_SIZE):
            cells = " ".join(DISC_SYMBOLS[int(cell)] for cell in self.grid[row])
            lines.append(f"{row + 1:>2d} {cells}")
        return "\n".join(lines)

    def _key(self) -> Tuple[str, bytes]:
        return (self.to_move.value, self.grid.tobytes())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OthelloState):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        black, white = self.disc_counts()
        return f"OthelloState(to_move={self.to_move.value}, black={black}, white={white})"
