"""Decider-vs-decider Othello matches."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ai.base_ai import BaseDecider
from ai.minimax_ai import MinimaxDecider
from ai.random_ai import RandomDecider
from engine.board import OthelloState
from engine.discs import Side
from engine.state import Status

LOGGER = logging.getLogger(__name__)


@dataclass
class PlayerSpec:
    """Serializable decider descriptor."""

    name: str
    kind: str = "minimax"  # minimax or random
    depth: int = 3
    seed: Optional[int] = None
    use_memo: bool = False
    time_limit: Optional[float] = None


@dataclass
class MatchConfig:
    """Match settings."""

    games: int = 10
    max_plies: int = 128
    swap_sides: bool = True
    base_seed: Optional[int] = None
    log_every: int = 1
    k_factor: float = 24.0
    initial_rating: float = 1200.0


@dataclass
class GameRecord:
    """Result of one finished (or ply-capped) game."""

    moves: List[str]
    status: Status
    black_discs: int
    white_discs: int

    @property
    def plies(self) -> int:
        return len(self.moves)

    @property
    def winner(self) -> Optional[Side]:
        if self.status is Status.BLACK_WINS:
            return Side.BLACK
        if self.status is Status.WHITE_WINS:
            return Side.WHITE
        return None

    def score_for(self, side: Side) -> float:
        """Game score for ``side``: 1.0 win, 0.5 draw or unfinished, 0.0 loss."""
        if self.winner is None:
            return 0.5
        return 1.0 if self.winner is side else 0.0


@dataclass
class MatchReport:
    """Match outcome from the first player's point of view."""

    first_name: str
    second_name: str
    first_wins: int
    second_wins: int
    draws: int
    win_rate: float
    first_elo: float
    second_elo: float
    records: List[GameRecord] = field(default_factory=list)

    @property
    def games(self) -> int:
        return self.first_wins + self.second_wins + self.draws


def build_decider(spec: PlayerSpec, side: Side, seed: Optional[int] = None) -> BaseDecider:
    """Instantiate a decider for one colour; black is the maximizing side."""
    if spec.kind == "minimax":
        return MinimaxDecider(
            maximize=side is Side.BLACK,
            depth=spec.depth,
            seed=seed,
            use_memo=spec.use_memo,
            time_limit=spec.time_limit,
        )
    if spec.kind == "random":
        return RandomDecider(seed=seed)
    raise ValueError(f"Unsupported PlayerSpec kind: {spec.kind}")


def play_game(
    black: BaseDecider,
    white: BaseDecider,
    max_plies: int = 128,
    start: Optional[OthelloState] = None,
) -> GameRecord:
    """Play until the game ends or ``max_plies`` actions were made."""
    state = start if start is not None else OthelloState.initial()
    moves: List[str] = []
    while state.status() is Status.ONGOING and len(moves) < max_plies:
        actor = black if state.to_move is Side.BLACK else white
        action = actor.decide(state)
        state = action.apply_to(state)
        moves.append(str(action))
        LOGGER.debug("Ply %d: %s", len(moves), action)

    black_discs, white_discs = state.disc_counts()
    return GameRecord(moves=moves, status=state.status(), black_discs=black_discs, white_discs=white_discs)


def expected_score(rating: float, opponent_rating: float) -> float:
    """Elo expected score of a player rated ``rating``."""
    return 1.0 / (1.0 + 10 ** ((opponent_rating - rating) / 400.0))


def rate_game(
    first_rating: float,
    second_rating: float,
    record: GameRecord,
    first_side: Side,
    k_factor: float = 24.0,
) -> Tuple[float, float]:
    """Both players' ratings after ``record``, where the first player had ``first_side``."""
    delta = k_factor * (record.score_for(first_side) - expected_score(first_rating, second_rating))
    return first_rating + delta, second_rating - delta


def run_match(
    first: PlayerSpec,
    second: PlayerSpec,
    config: MatchConfig,
    ratings: Optional[Dict[str, float]] = None,
) -> MatchReport:
    """Play ``config.games`` games, alternating colours when ``swap_sides`` is set.

    ``ratings`` maps player names to Elo ratings and is updated in place after every
    game; players missing from it start at ``config.initial_rating``.
    """
    if first.name == second.name:
        raise ValueError(f"Players need distinct names, both are {first.name!r}")
    ratings = ratings if ratings is not None else {}
    ratings.setdefault(first.name, config.initial_rating)
    ratings.setdefault(second.name, config.initial_rating)
    first_wins = second_wins = draws = 0
    records: List[GameRecord] = []

    for game_idx in range(config.games):
        first_side = Side.WHITE if config.swap_sides and game_idx % 2 == 1 else Side.BLACK
        first_ai = build_decider(first, first_side, _game_seed(first.seed, config.base_seed, game_idx, 0))
        second_ai = build_decider(second, first_side.opponent(), _game_seed(second.seed, config.base_seed, game_idx, 1))
        if first_side is Side.BLACK:
            record = play_game(first_ai, second_ai, max_plies=config.max_plies)
        else:
            record = play_game(second_ai, first_ai, max_plies=config.max_plies)
        records.append(record)

        if record.winner is None:
            draws += 1
        elif record.winner is first_side:
            first_wins += 1
        else:
            second_wins += 1
        ratings[first.name], ratings[second.name] = rate_game(
            ratings[first.name], ratings[second.name], record, first_side, k_factor=config.k_factor
        )

        if config.log_every > 0 and (game_idx + 1) % config.log_every == 0:
            LOGGER.info(
                "Game %d/%d %s(%s) vs %s: %s %d-%d in %d plies",
                game_idx + 1,
                config.games,
                first.name,
                first_side.value,
                second.name,
                record.status.value,
                record.black_discs,
                record.white_discs,
                record.plies,
            )

    win_rate = first_wins / max(1, config.games)
    report = MatchReport(
        first_name=first.name,
        second_name=second.name,
        first_wins=first_wins,
        second_wins=second_wins,
        draws=draws,
        win_rate=win_rate,
        first_elo=ratings[first.name],
        second_elo=ratings[second.name],
        records=records,
    )
    LOGGER.info(
        "Match %s vs %s | W:%d L:%d D:%d win_rate=%.3f elo=(%.1f, %.1f)",
        report.first_name,
        report.second_name,
        report.first_wins,
        report.second_wins,
        report.draws,
        report.win_rate,
        report.first_elo,
        report.second_elo,
    )
    return report


def _game_seed(player_seed: Optional[int], base_seed: Optional[int], game_idx: int, offset: int) -> Optional[int]:
    if player_seed is not None:
        return player_seed + game_idx
    if base_seed is not None:
        return base_seed + 2 * game_idx + offset
    return None


class ArenaConfig:
    """Players and match settings (Elo included) loaded from a JSON payload."""

    def __init__(self, payload: Dict[str, object]) -> None:
        players = payload.get("players", [])
        if len(players) != 2:
            raise ValueError(f"Arena config needs exactly two players, got {len(players)}")
        self.players = [self._player_from_payload(item, idx) for idx, item in enumerate(players)]

        match = payload.get("match", {})
        base_seed = match.get("base_seed")
        self.match = MatchConfig(
            games=int(match.get("games", 10)),
            max_plies=int(match.get("max_plies", 128)),
            swap_sides=bool(match.get("swap_sides", True)),
            base_seed=None if base_seed is None else int(base_seed),
            log_every=int(match.get("log_every", 1)),
            k_factor=float(match.get("k_factor", 24.0)),
            initial_rating=float(match.get("initial_rating", 1200.0)),
        )

    @staticmethod
    def _player_from_payload(item: Dict[str, object], idx: int) -> PlayerSpec:
        seed = item.get("seed")
        time_limit = item.get("time_limit")
        return PlayerSpec(
            name=str(item.get("name", f"player{idx + 1}")),
            kind=str(item.get("kind", "minimax")),
            depth=int(item.get("depth", 3)),
            seed=None if seed is None else int(seed),
            use_memo=bool(item.get("use_memo", False)),
            time_limit=None if time_limit is None else float(time_limit),
        )

    @classmethod
    def from_json(cls, path: str | Path) -> "ArenaConfig":
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(payload)
