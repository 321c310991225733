"""Tests for the Othello game model."""

from __future__ import annotations

import numpy as np
import pytest

from ai.minimax_ai import MinimaxDecider
from engine.board import WIN_SCORE, OthelloAction, OthelloState
from engine.discs import Side
from engine.state import InvalidActionError, Status
from game_tree import TreeState, leaf

PASS_POSITION = [
    "XO......",
    "........",
    "........",
    "........",
    "........",
    "........",
    "........",
    "........",
]


def test_initial_position() -> None:
    state = OthelloState.initial()
    assert state.to_move is Side.BLACK
    assert state.disc_counts() == (2, 2)
    assert state.status() is Status.ONGOING
    assert state.heuristic() == 0.0
    assert [str(action) for action in state.legal_actions()] == ["d3", "c4", "f5", "e6"]


def test_apply_flips_and_switches_turn() -> None:
    state = OthelloState.initial()
    child = OthelloAction(Side.BLACK, 2, 3).apply_to(state)

    assert child.to_move is Side.WHITE
    assert child.disc_counts() == (4, 1)
    assert state.disc_counts() == (2, 2)
    assert [str(action) for action in child.legal_actions()] == ["c3", "e3", "c5"]


def test_state_is_immutable_and_hashable() -> None:
    state = OthelloState.initial()
    with pytest.raises(ValueError):
        state.grid[0, 0] = 1
    assert state == OthelloState.initial()
    assert hash(state) == hash(OthelloState.initial())
    assert state != OthelloState(state.grid, Side.WHITE)


def test_equal_move_sequences_reach_equal_states() -> None:
    start = OthelloState.initial()
    a = OthelloAction(Side.BLACK, 2, 3).apply_to(start)
    a = OthelloAction(Side.WHITE, 2, 2).apply_to(a)
    b = OthelloAction(Side.BLACK, 2, 3).apply_to(start)
    b = OthelloAction(Side.WHITE, 2, 2).apply_to(b)
    assert a == b
    assert len({a, b}) == 1


def test_wrong_side_or_occupied_square_is_invalid() -> None:
    state = OthelloState.initial()
    assert not OthelloAction(Side.WHITE, 2, 3).valid_on(state)
    with pytest.raises(InvalidActionError):
        OthelloAction(Side.WHITE, 2, 3).apply_to(state)
    with pytest.raises(InvalidActionError):
        OthelloAction(Side.BLACK, 3, 3).apply_to(state)
    with pytest.raises(InvalidActionError):
        OthelloAction(Side.BLACK, 0, 0).apply_to(state)


def test_pass_is_the_only_action_when_stuck() -> None:
    state = OthelloState.from_rows(PASS_POSITION, to_move=Side.WHITE)

    actions = state.legal_actions()
    assert actions == [OthelloAction.pass_for(Side.WHITE)]
    assert str(actions[0]) == "pass"
    assert state.status() is Status.ONGOING

    passed = actions[0].apply_to(state)
    assert passed.to_move is Side.BLACK
    assert np.array_equal(passed.grid, state.grid)


def test_pass_invalid_while_placements_exist() -> None:
    state = OthelloState.initial()
    with pytest.raises(InvalidActionError):
        OthelloAction.pass_for(Side.BLACK).apply_to(state)


def test_game_ends_when_neither_side_can_move() -> None:
    state = OthelloState.from_rows(PASS_POSITION, to_move=Side.BLACK)
    final = OthelloAction(Side.BLACK, 0, 2).apply_to(state)

    assert final.disc_counts() == (3, 0)
    assert final.status() is Status.BLACK_WINS
    assert final.legal_actions() == []
    assert final.heuristic() == WIN_SCORE + 3


def test_from_rows_validation() -> None:
    with pytest.raises(ValueError):
        OthelloState.from_rows(["........"] * 7)
    with pytest.raises(ValueError):
        OthelloState.from_rows(["......."] + ["........"] * 7)
    with pytest.raises(ValueError):
        OthelloState.from_rows(["...Z...."] + ["........"] * 7)


def test_render_ascii() -> None:
    state = OthelloState.initial()
    lines = state.render_ascii().splitlines()
    assert lines[0] == "   a b c d e f g h"
    assert lines[4] == " 4 . . . O X . . ."


def test_minimax_takes_corner() -> None:
    state = OthelloState.from_rows(
        [
            ".OX.....",
            "........",
            "........",
            "........",
            "...OX...",
            "........",
            "........",
            "........",
        ]
    )
    assert [str(action) for action in state.legal_actions()] == ["a1", "c5"]
    assert str(MinimaxDecider(maximize=True, depth=1).decide(state)) == "a1"


@pytest.mark.parametrize("maximize", [True, False])
def test_minimax_returns_legal_opening_move(maximize: bool) -> None:
    state = OthelloState.initial()
    if not maximize:
        state = OthelloAction(Side.BLACK, 2, 3).apply_to(state)
    decider = MinimaxDecider(maximize=maximize, depth=3, seed=0)
    action = decider.decide(state)
    assert action in state.legal_actions()
    assert decider.last_stats.nodes > 0


def test_memo_does_not_change_the_decision_value() -> None:
    state = OthelloState.initial()
    plain = MinimaxDecider(maximize=True, depth=4)
    memo = MinimaxDecider(maximize=True, depth=4, use_memo=True)
    assert memo.evaluate(state, float("-inf"), float("inf"), 0, True) == plain.evaluate(
        state, float("-inf"), float("inf"), 0, True
    )


def test_status_and_pass_checks_stop_at_first_placement() -> None:
    """Deciding whether anyone can move does not build full placement maps."""
    state = OthelloState.initial()
    assert state.status() is Status.ONGOING
    assert not OthelloAction.pass_for(Side.BLACK).valid_on(state)
    assert state._placements == {}

    stuck = OthelloState.from_rows(PASS_POSITION, to_move=Side.WHITE)
    assert OthelloAction.pass_for(Side.WHITE).valid_on(stuck)
    assert stuck._placements == {}


def test_can_place_agrees_with_placement_maps() -> None:
    stuck = OthelloState.from_rows(PASS_POSITION, to_move=Side.WHITE)
    assert stuck.can_place(Side.BLACK)
    assert not stuck.can_place(Side.WHITE)
    assert bool(stuck.placements(Side.BLACK)) is stuck.can_place(Side.BLACK)
    assert bool(stuck.placements(Side.WHITE)) is stuck.can_place(Side.WHITE)


def test_action_on_another_games_state_is_invalid() -> None:
    foreign = TreeState(leaf(0.0))
    action = OthelloAction(Side.BLACK, 2, 3)
    assert not action.valid_on(foreign)
    with pytest.raises(InvalidActionError):
        action.apply_to(foreign)
