from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import List, Optional, Union

import yaml

from leapfrog.core import (
    BOARD_SIZE,
    Board,
    BoardPosition,
    Move,
    Piece,
    get_game_winner,
    get_valid_moves,
    initialize_board,
    is_valid_move,
    moves_own_piece,
    perform_move,
    try_end_turn,
)
from leapfrog.cpu import Strategy, make_strategy

logger = logging.getLogger(__name__)


class IllegalMoveError(ValueError):
    pass


@dataclass
class GameConfig:
    strategy: str = "distance"
    cpu_piece: Piece = Piece.OPPONENT
    seed: Optional[int] = None
    max_turns: int = 200
    board_size: int = BOARD_SIZE

    def __post_init__(self) -> None:
        if isinstance(self.cpu_piece, str):
            try:
                self.cpu_piece = Piece[self.cpu_piece.upper()]
            except KeyError:
                raise ValueError(f"Unknown cpu_piece {self.cpu_piece!r}.") from None
        self.cpu_piece = Piece(self.cpu_piece)
        if self.cpu_piece == Piece.NONE:
            raise ValueError("cpu_piece must be PLAYER or OPPONENT.")


def load_config(path: Union[str, Path]) -> GameConfig:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    known = {f.name for f in fields(GameConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown config keys: {sorted(unknown)}")
    return GameConfig(**data)


class GameSession:
    """Owns the live board for one human-vs-CPU game at a time."""

    def __init__(self, config: Optional[GameConfig] = None, *, strategy: Optional[Strategy] = None) -> None:
        self.config = config or GameConfig()
        self.strategy = strategy or make_strategy(
            self.config.strategy, piece=self.config.cpu_piece, seed=self.config.seed
        )
        self.board: Board = initialize_board(self.config.board_size)
        self.turn_count = 0
        self.new_game()

    def new_game(self) -> Board:
        self.board = initialize_board(self.config.board_size)
        self.turn_count = 0
        self.strategy.on_start(self.board)
        logger.info("New game started, CPU plays %s with %s strategy", self.config.cpu_piece.name, self.strategy.name)
        return self.board

    @property
    def winner(self) -> Optional[Piece]:
        return get_game_winner(self.board)

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    @property
    def is_cpu_turn(self) -> bool:
        return self.board.turn == self.config.cpu_piece

    def valid_moves(self, position: BoardPosition) -> List[Move]:
        return get_valid_moves(self.board, position, self.board.piece_at(position))

    def apply_move(self, move: Move) -> Optional[Piece]:
        """Validate and apply ``move``; returns the winner if the move ended the game."""
        if not (is_valid_move(self.board, move, move.piece) and moves_own_piece(self.board, move)):
            raise IllegalMoveError(f"Illegal move {move.as_tuple()} for {move.piece.name}.")
        turn_before = self.board.turn
        perform_move(self.board, move)
        if self.board.turn != turn_before:
            self.turn_count += 1
        winner = self.winner
        if winner is not None:
            logger.info("%s wins after %d turns", winner.name, self.turn_count)
        return winner

    def end_turn(self) -> bool:
        flipped = try_end_turn(self.board)
        if flipped:
            self.turn_count += 1
        return flipped

    def play_cpu_turn(self) -> List[Move]:
        """Play the strategy's chain for the side to move; an empty list means it has no move."""
        chain = self.strategy.next_moves(self.board)
        if not chain:
            logger.info("%s has no legal move", self.board.turn.name)
            return []
        logger.debug("CPU plays %s", [move.as_tuple() for move in chain])
        for move in chain:
            if self.apply_move(move) is not None:
                return chain
        self.end_turn()
        return chain
