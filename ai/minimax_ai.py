"""Minimax decider with alpha-beta pruning."""

from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ai.base_ai import BaseDecider
from ai.errors import MalformedWindowError, NoMovesAvailableError
from ai.tiebreak import choose_uniform
from engine.state import GameAction, GameState, InvalidActionError

LOGGER = logging.getLogger(__name__)

MemoKey = Tuple[GameState, int, bool]


@dataclass
class SearchStats:
    """Counters from the most recent decision."""

    nodes: int = 0
    cutoffs: int = 0
    memo_hits: int = 0
    deadline_hit: bool = False
    elapsed: float = 0.0


class MinimaxDecider(BaseDecider):
    """Depth-limited minimax over any GameState implementation.

    The root layer is searched separately from the recursion so each score stays
    attached to the action that produced it and ties can be broken at random.
    Every root child is searched with the full open window.
    """

    def __init__(
        self,
        maximize: bool = True,
        depth: int = 3,
        seed: Optional[int] = None,
        use_memo: bool = False,
        time_limit: Optional[float] = None,
        debug_top_k: int = 3,
    ) -> None:
        if depth < 0:
            raise ValueError(f"Search depth must be non-negative, got {depth}")
        if time_limit is not None and time_limit <= 0:
            raise ValueError(f"Time limit must be positive, got {time_limit}")
        self.maximize = maximize
        self.depth = depth
        self.use_memo = use_memo
        self.time_limit = time_limit
        self.debug_top_k = max(1, debug_top_k)
        self._rng = random.Random(seed) if seed is not None else None
        self._memo: Dict[MemoKey, float] = {}
        self._deadline: Optional[float] = None
        self.last_stats = SearchStats()

    def decide(self, state: GameState) -> GameAction:
        """Choose among the best-scoring root actions."""
        actions = state.legal_actions()
        if state.status().is_terminal or not actions:
            raise NoMovesAvailableError(f"No legal actions for {state!r}")

        self._memo.clear()
        self.last_stats = SearchStats()
        started = time.perf_counter()
        self._deadline = None if self.time_limit is None else started + self.time_limit

        best = -math.inf if self.maximize else math.inf
        best_actions: List[GameAction] = []
        diagnostics: List[Tuple[GameAction, float]] = []

        for action in actions:
            child = self._apply(action, state)
            value = self.evaluate(child, -math.inf, math.inf, 1, not self.maximize)
            diagnostics.append((action, value))
            if self._better(value, best, self.maximize):
                best = value
                best_actions = []
            if not self._better(best, value, self.maximize):
                best_actions.append(action)

        chosen = choose_uniform(best_actions, self._rng)
        self.last_stats.elapsed = time.perf_counter() - started
        self._log_diagnostics(diagnostics, chosen)
        LOGGER.debug(
            "Minimax selected %s with score %.3f (tied=%d nodes=%d cutoffs=%d memo_hits=%d deadline_hit=%s %.3fs)",
            chosen,
            best,
            len(best_actions),
            self.last_stats.nodes,
            self.last_stats.cutoffs,
            self.last_stats.memo_hits,
            self.last_stats.deadline_hit,
            self.last_stats.elapsed,
        )
        return chosen

    def evaluate(
        self,
        state: GameState,
        alpha: float,
        beta: float,
        ply: int,
        maximize: bool,
    ) -> float:
        """Score ``state`` searched from ``ply`` down to the decider's depth.

        The result is exact when it falls strictly inside (alpha, beta); otherwise
        it is a bound from a cutoff somewhere below.
        """
        if alpha > beta:
            raise MalformedWindowError(alpha, beta)
        self.last_stats.nodes += 1

        if state.status().is_terminal:
            return state.heuristic()
        if ply >= self.depth:
            return state.heuristic()
        if self._deadline is not None and time.perf_counter() >= self._deadline:
            self.last_stats.deadline_hit = True
            return state.heuristic()

        key: Optional[MemoKey] = None
        if self.use_memo:
            key = (state, self.depth - ply, maximize)
            cached = self._memo.get(key)
            if cached is not None:
                self.last_stats.memo_hits += 1
                return cached

        actions = state.legal_actions()
        if not actions:
            # Models without pass actions can leave the mover stuck.
            return state.heuristic()

        alpha_in, beta_in = alpha, beta
        value = -math.inf if maximize else math.inf
        for action in actions:
            child = self._apply(action, state)
            score = self.evaluate(child, alpha, beta, ply + 1, not maximize)
            if self._better(score, value, maximize):
                value = score
            if maximize:
                if value >= beta:
                    self.last_stats.cutoffs += 1
                    return value
                if value > alpha:
                    alpha = value
            else:
                if value <= alpha:
                    self.last_stats.cutoffs += 1
                    return value
                if value < beta:
                    beta = value

        if key is not None and not self.last_stats.deadline_hit and alpha_in < value < beta_in:
            self._memo[key] = value
        return value

    @staticmethod
    def _better(candidate: float, incumbent: float, maximize: bool) -> bool:
        return candidate > incumbent if maximize else candidate < incumbent

    @staticmethod
    def _apply(action: GameAction, state: GameState) -> GameState:
        # Actions come from the state's own enumeration; failure is a model bug.
        child = action.apply_to(state)
        if child is None:
            raise InvalidActionError(f"Action {action} produced no successor for {state!r}")
        return child

    def _log_diagnostics(self, diagnostics: List[Tuple[GameAction, float]], chosen: GameAction) -> None:
        """Emit top-k candidate breakdown when DEBUG is enabled."""
        if not LOGGER.isEnabledFor(logging.DEBUG):
            return
        ranked = sorted(diagnostics, key=lambda item: item[1], reverse=self.maximize)
        for idx, (action, value) in enumerate(ranked[: self.debug_top_k], start=1):
            LOGGER.debug("Candidate #%d action=%s eval=%.3f chosen=%s", idx, action, value, action == chosen)


def decide(
    state: GameState,
    maximize: bool,
    max_depth: int,
    seed: Optional[int] = None,
) -> GameAction:
    """One-shot decision without keeping a decider around."""
    return MinimaxDecider(maximize=maximize, depth=max_depth, seed=seed).decide(state)
