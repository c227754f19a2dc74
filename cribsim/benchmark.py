"""Simulate games between two strategies and report aggregate win counts.

Usage:
  cribsim --games 500 --players exhaustive:low,random:low --seed 1
  python -m cribsim --games 100 --report_dir reports
"""

from __future__ import annotations

import argparse
import os
from typing import Dict, List, Optional, Sequence
from logging import getLogger

import numpy as np

from cribsim.cards import Deck
from cribsim.constants import (
    DEFAULT_GAMES,
    DEFAULT_LOG_FILE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PLAYERS,
    DEFAULT_REPORT_DIR,
    DEFAULT_SEED,
    PLAYER_A,
    PLAYER_B,
)
from cribsim.game import CribbageGame
from cribsim.log_config import configure_logging
from cribsim.players import Strategy, make_strategy

logger = getLogger(__name__)


def wilson_ci(wins: int, n: int, z: float = 1.96) -> tuple[float, float]:
    if n == 0:
        return (0.0, 0.0)
    phat = wins / n
    denom = 1 + z * z / n
    center = (phat + z * z / (2 * n)) / denom
    half = (z / denom) * np.sqrt((phat * (1 - phat) / n) + (z * z / (4 * n * n)))
    return float(center - half), float(center + half)


def play_multiple_games(
    num_games: int,
    strategy_a: Strategy,
    strategy_b: Strategy,
    seed: int | None = None,
) -> Dict:
    """Play num_games games of a vs b with one deck shared by all of them."""
    deck = Deck(seed)
    wins = [0, 0]
    diffs: List[int] = []
    hands: List[int] = []
    for i in range(num_games):
        if (i % 100) == 0:
            logger.info(f"Playing game {i}/{num_games}")
        game = CribbageGame([strategy_a, strategy_b], deck=deck)
        winner = game.play_game()
        wins[winner] += 1
        scores = game.state.scores
        diffs.append(scores[PLAYER_A] - scores[PLAYER_B])
        hands.append(game.state.num_hands)

    lo, hi = wilson_ci(wins[PLAYER_A], num_games)
    return {
        "players": [strategy_a.name, strategy_b.name],
        "seed": deck.seed,
        "games": num_games,
        "wins": wins,
        "diffs": diffs,
        "hands": hands,
        "winrate": wins[PLAYER_A] / num_games if num_games else 0.0,
        "ci_lo": lo,
        "ci_hi": hi,
        "avg_diff": float(np.mean(diffs)) if diffs else 0.0,
    }


def format_results(results: Dict) -> str:
    name_a, name_b = results["players"]
    wins = results["wins"]
    return (
        f"a ({name_a}) vs b ({name_b}) after {results['games']} games (seed {results['seed']}): "
        f"wins a={wins[PLAYER_A]}, b={wins[PLAYER_B]}; "
        f"winrate a={results['winrate']:.3f} (95% CI {results['ci_lo']:.3f} - {results['ci_hi']:.3f}) "
        f"avg point diff {results['avg_diff']:.2f}"
    )


def build_benchmark_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="cribsim", description="Simulate cribbage games between two strategies.")
    ap.add_argument("--games", type=int, default=DEFAULT_GAMES, help="Number of games to simulate.")
    ap.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Random seed. Omit to seed from time and PID.")
    ap.add_argument(
        "--players",
        type=str,
        default=DEFAULT_PLAYERS,
        help="Two comma-separated discard:peg strategies, e.g. exhaustive:low,random:low.",
    )
    ap.add_argument("--log_level", type=str, default=DEFAULT_LOG_LEVEL)
    ap.add_argument("--log_file", type=str, default=DEFAULT_LOG_FILE)
    ap.add_argument(
        "--report_dir",
        type=str,
        default=DEFAULT_REPORT_DIR,
        help="Write a JSON summary and a margin plot to this directory.",
    )
    return ap


def benchmark_2_players(args: argparse.Namespace) -> Dict:
    player_names = args.players.split(",")
    if len(player_names) != 2:
        raise ValueError("Must specify exactly two players via --players")
    if args.games < 1:
        raise ValueError(f"--games must be at least 1, got {args.games}")

    # RandomDiscard gets its own stream so the deck's shuffles don't depend on it.
    strategy_seed = None if args.seed is None else args.seed + 1
    p0 = make_strategy(player_names[0], seed=strategy_seed)
    p1 = make_strategy(player_names[1], seed=None if strategy_seed is None else strategy_seed + 1)

    results = play_multiple_games(args.games, p0, p1, seed=args.seed)
    print(format_results(results))

    if args.report_dir:
        from cribsim.reporting import plot_score_margins, save_simulation_report

        prefix = os.path.join(args.report_dir, f"{p0.name}_vs_{p1.name}".replace(":", "-"))
        save_simulation_report(results, prefix + ".json")
        plot_score_margins(results["diffs"], prefix)
    return results


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_benchmark_parser()
    args = ap.parse_args(argv)
    configure_logging(args.log_level.upper(), args.log_file)
    try:
        benchmark_2_players(args)
    except ValueError as exc:
        ap.error(str(exc))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
