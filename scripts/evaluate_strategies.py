#!/usr/bin/env python3
"""Play CPU strategies against each other and report win rates."""

import argparse
import json
import logging

from leapfrog.core import Piece
from leapfrog.cpu import STRATEGIES, make_strategy
from leapfrog.evaluation import evaluate_strategies


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--player", choices=sorted(STRATEGIES), default="longest")
    parser.add_argument("--opponent", choices=sorted(STRATEGIES), default="distance")
    parser.add_argument("--episodes", type=int, default=10)
    parser.add_argument("--max-turns", type=int, default=200)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    result = evaluate_strategies(
        make_strategy(args.player, piece=Piece.PLAYER, seed=args.seed),
        make_strategy(args.opponent, piece=Piece.OPPONENT, seed=args.seed),
        episodes=args.episodes,
        max_turns=args.max_turns,
        seed=args.seed,
    )
    summary = {
        "player": args.player,
        "opponent": args.opponent,
        "games_played": result.games_played,
        "player_wins": result.player_wins,
        "opponent_wins": result.opponent_wins,
        "draws": result.draws,
        "average_length": result.average_length,
        "winrate_player": result.winrate_player(),
    }
    print(json.dumps(summary, indent=2))


if __name__ == "__main__":
    main()
