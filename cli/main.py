"""CLI entrypoint for playing Othello against the minimax AI."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from ai.errors import SearchError
from ai.minimax_ai import MinimaxDecider
from engine.board import OthelloAction, OthelloState
from engine.discs import Side
from engine.rules import parse_square
from engine.state import InvalidActionError, Status

HELP_TEXT = "Commands: <square> (e.g. d3) | pass | help | quit"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Othello in the terminal against a minimax AI.")
    parser.add_argument("--depth", type=int, default=3, help="Minimax depth in plies")
    parser.add_argument("--seed", type=int, default=None, help="Seed for AI tie-breaking")
    parser.add_argument(
        "--human-side",
        type=str,
        default="black",
        choices=["black", "white"],
        help="Which side the human controls (black moves first)",
    )
    parser.add_argument("--memo", action="store_true", help="Cache exact subtree scores within a decision")
    parser.add_argument("--time-limit", type=float, default=None, help="Per-move search budget in seconds")
    parser.add_argument("--log-level", type=str, default="INFO", help="Python logging level")
    return parser.parse_args(argv)


def parse_user_move(command: str, state: OthelloState) -> Optional[OthelloAction]:
    """Translate a typed command into an action for the side to move."""
    token = command.strip().lower()
    if not token:
        return None
    if token == "pass":
        return OthelloAction.pass_for(state.to_move)
    try:
        row, col = parse_square(token)
    except ValueError:
        return None
    return OthelloAction(side=state.to_move, row=row, col=col)


def describe_result(state: OthelloState) -> str:
    black, white = state.disc_counts()
    status = state.status()
    if status is Status.DRAW:
        return f"Game ended in a draw ({black}-{white})."
    winner = Side.BLACK if status is Status.BLACK_WINS else Side.WHITE
    return f"Winner: {winner.value} ({black}-{white})"


def run_cli(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    logger = logging.getLogger("othello.cli")

    human_side = Side.BLACK if args.human_side == "black" else Side.WHITE
    ai_side = human_side.opponent()
    ai = MinimaxDecider(
        maximize=ai_side is Side.BLACK,
        depth=args.depth,
        seed=args.seed,
        use_memo=args.memo,
        time_limit=args.time_limit,
    )
    state = OthelloState.initial()
    history: List[str] = []

    logger.info("Starting Othello game. Human=%s AI=%s depth=%d", human_side.value, ai_side.value, args.depth)
    print(HELP_TEXT)

    while True:
        black, white = state.disc_counts()
        print()
        print(state.render_ascii())
        print(f"Turn: {state.to_move.value} | Discs: black={black} white={white}")

        if state.status().is_terminal:
            print(describe_result(state))
            break

        if state.to_move is human_side:
            user_input = input("Your move> ").strip()
            if user_input.lower() in {"quit", "exit"}:
                print("Exiting game.")
                break
            if user_input.lower() == "help":
                legal = ", ".join(str(action) for action in state.legal_actions())
                print(HELP_TEXT)
                print(f"Legal moves: {legal}")
                continue

            move = parse_user_move(user_input, state)
            if move is None:
                print("Invalid command format.")
                continue
            if not move.valid_on(state):
                print("Illegal move for current state.")
                continue
            state = move.apply_to(state)
            history.append(str(move))
        else:
            try:
                ai_move = ai.decide(state)
                state = ai_move.apply_to(state)
            except (SearchError, InvalidActionError) as exc:
                logger.error("AI failed to choose a move: %s", exc)
                print(f"AI error: {exc}")
                break
            history.append(str(ai_move))
            print(f"AI move: {ai_move}")
            logger.debug(
                "Search stats: nodes=%d cutoffs=%d elapsed=%.3fs",
                ai.last_stats.nodes,
                ai.last_stats.cutoffs,
                ai.last_stats.elapsed,
            )

    logger.info("Moves: %s", " ".join(history))


if __name__ == "__main__":
    run_cli()
