"""Tests for Othello geometry and notation helpers."""

from __future__ import annotations

import numpy as np
import pytest

from engine.board import OthelloState
from engine.discs import Side
from engine.rules import flips_for, format_square, has_placement, in_bounds, parse_square


def test_notation_uses_column_letter_and_row_number() -> None:
    assert format_square((2, 3)) == "d3"
    assert format_square((0, 0)) == "a1"
    assert format_square((7, 7)) == "h8"
    assert parse_square("d3") == (2, 3)
    assert parse_square(" H8 ") == (7, 7)


@pytest.mark.parametrize("text", ["", "z1", "a9", "a0", "d", "d33", "3d"])
def test_parse_square_rejects_bad_input(text: str) -> None:
    with pytest.raises(ValueError):
        parse_square(text)


def test_in_bounds() -> None:
    assert in_bounds((0, 7))
    assert not in_bounds((8, 0))
    assert not in_bounds((-1, 3))


def test_flips_collect_every_bracketed_direction() -> None:
    state = OthelloState.from_rows(
        [
            "X.X.....",
            ".OO.....",
            "XO......",
            "........",
            "........",
            "........",
            "........",
            "........",
        ]
    )
    flipped = flips_for(state.grid, 2, 2, Side.BLACK.disc)
    assert sorted(flipped) == [(1, 1), (1, 2), (2, 1)]


def test_occupied_square_flips_nothing() -> None:
    grid = OthelloState.initial().grid
    assert flips_for(grid, 3, 3, Side.BLACK.disc) == []


def test_has_placement() -> None:
    assert has_placement(OthelloState.initial().grid, Side.WHITE.disc)
    assert not has_placement(np.zeros((8, 8), dtype=np.int8), Side.BLACK.disc)


def test_side_helpers() -> None:
    assert Side.BLACK.opponent() is Side.WHITE
