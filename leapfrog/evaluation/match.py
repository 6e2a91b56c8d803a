from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from leapfrog.core import (
    BOARD_SIZE,
    Piece,
    get_game_winner,
    initialize_board,
    is_valid_move,
    perform_move,
    try_end_turn,
)
from leapfrog.cpu import Strategy

logger = logging.getLogger(__name__)


@dataclass
class EvaluationResult:
    games_played: int
    player_wins: int
    opponent_wins: int
    draws: int
    average_length: float

    def winrate_player(self) -> float:
        return self.player_wins / max(1, self.games_played)

    def winrate_opponent(self) -> float:
        return self.opponent_wins / max(1, self.games_played)


def play_game(
    strategy_player: Strategy,
    strategy_opponent: Strategy,
    *,
    max_turns: int = 200,
    board_size: int = BOARD_SIZE,
) -> Tuple[Optional[Piece], int]:
    """Play one CPU-vs-CPU game; returns the winner (``None`` for a draw) and the turn count."""
    board = initialize_board(board_size)
    strategies = {Piece.PLAYER: strategy_player, Piece.OPPONENT: strategy_opponent}
    for strategy in strategies.values():
        strategy.on_start(board)

    turns = 0
    while turns < max_turns:
        chain = strategies[board.turn].next_moves(board)
        if not chain:
            logger.debug("%s is stuck after %d turns", board.turn.name, turns)
            return None, turns
        for move in chain:
            if not is_valid_move(board, move, move.piece):
                raise RuntimeError(f"Strategy produced illegal move {move.as_tuple()}.")
            perform_move(board, move)
            winner = get_game_winner(board)
            if winner is not None:
                return winner, turns + 1
        try_end_turn(board)
        turns += 1
    return None, turns


def evaluate_strategies(
    strategy_player: Strategy,
    strategy_opponent: Strategy,
    *,
    episodes: int,
    max_turns: int = 200,
    board_size: int = BOARD_SIZE,
    seed: Optional[int] = None,
) -> EvaluationResult:
    player_wins = 0
    opponent_wins = 0
    draws = 0
    total_turns = 0

    for episode in range(episodes):
        episode_seed = None if seed is None else seed + episode
        winner, turns = play_game(
            strategy_player.spawn(episode_seed),
            strategy_opponent.spawn(None if episode_seed is None else episode_seed + 10_000),
            max_turns=max_turns,
            board_size=board_size,
        )
        total_turns += turns
        if winner == Piece.PLAYER:
            player_wins += 1
        elif winner == Piece.OPPONENT:
            opponent_wins += 1
        else:
            draws += 1
        logger.info("Episode %d finished after %d turns: %s", episode, turns, winner.name if winner else "draw")

    return EvaluationResult(
        games_played=episodes,
        player_wins=player_wins,
        opponent_wins=opponent_wins,
        draws=draws,
        average_length=total_turns / max(1, episodes),
    )
