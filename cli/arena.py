"""CLI command to run an AI-vs-AI Othello match."""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from arena.match import ArenaConfig, MatchReport, run_match


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play two Othello deciders against each other.")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/arena_config.json",
        help="Path to arena config JSON",
    )
    parser.add_argument("--games", type=int, default=None, help="Override the configured number of games")
    parser.add_argument("--log-level", type=str, default="INFO", help="Python logging level")
    return parser.parse_args(argv)


def format_report(report: MatchReport) -> str:
    return (
        f"{report.first_name} vs {report.second_name}: "
        f"W {report.first_wins} / L {report.second_wins} / D {report.draws} "
        f"(win rate {report.win_rate:.3f}, elo {report.first_elo:.1f} vs {report.second_elo:.1f})"
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    config = ArenaConfig.from_json(args.config)
    if args.games is not None:
        config.match.games = args.games

    first, second = config.players
    report = run_match(first, second, config.match)
    print(format_report(report))


if __name__ == "__main__":
    main()
