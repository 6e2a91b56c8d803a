from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple, Type

import numpy as np

from leapfrog.core import Board, Move, Piece, average_position, euclidean_distance
from leapfrog.search import Chain, apply_chain, enumerate_chains

logger = logging.getLogger(__name__)


def flatten_chains(board: Board) -> List[Chain]:
    return [chain for chains in enumerate_chains(board).values() for chain in chains]


def hop_count(chain: Chain) -> int:
    return sum(1 for move in chain if move.distance == 2)


class Strategy:
    """Chooses the chain the CPU plays for the side to move."""

    name = "base"

    def __init__(self, piece: Piece = Piece.OPPONENT) -> None:
        self.piece = piece

    def on_start(self, board: Board) -> None:
        """Hook called once per game before the first CPU turn."""

    def next_moves(self, board: Board) -> List[Move]:
        raise NotImplementedError

    def spawn(self, seed: Optional[int] = None) -> "Strategy":
        """Return a fresh copy of this strategy for another game."""
        return type(self)(piece=self.piece)


class LongestChainStrategy(Strategy):
    name = "longest"

    def next_moves(self, board: Board) -> List[Move]:
        best: List[Move] = []
        best_hops = -1
        for chain in flatten_chains(board):
            hops = hop_count(chain)
            if hops > best_hops:
                best, best_hops = chain, hops
        return list(best)


class MinimizeDistanceStrategy(Strategy):
    """Steer the CPU's centre of mass towards where the other side started."""

    name = "distance"

    def __init__(self, piece: Piece = Piece.OPPONENT) -> None:
        super().__init__(piece)
        self.reference: Optional[Tuple[float, float]] = None

    def on_start(self, board: Board) -> None:
        self.reference = average_position(board, self.piece.other)
        logger.debug("Recorded reference position %s for %s", self.reference, self.piece.name)

    def next_moves(self, board: Board) -> List[Move]:
        if self.reference is None:
            logger.warning("on_start was not called; taking reference position from the current board")
            self.on_start(board)

        best: List[Move] = []
        best_distance = float("inf")
        for chain in flatten_chains(board):
            lookahead = apply_chain(board.copy(), chain, end_turn=False)
            centre = average_position(lookahead, chain[0].piece)
            if centre is None or self.reference is None:
                continue
            distance = euclidean_distance(centre, self.reference)
            if distance < best_distance:
                best, best_distance = chain, distance
        return list(best)


class RandomStrategy(Strategy):
    name = "random"

    def __init__(self, piece: Piece = Piece.OPPONENT, rng: Optional[np.random.Generator] = None) -> None:
        super().__init__(piece)
        self.rng = rng or np.random.default_rng()

    def next_moves(self, board: Board) -> List[Move]:
        by_piece = list(enumerate_chains(board).values())
        if not by_piece:
            return []
        chains = by_piece[int(self.rng.integers(len(by_piece)))]
        return list(chains[int(self.rng.integers(len(chains)))])

    def spawn(self, seed: Optional[int] = None) -> "RandomStrategy":
        return RandomStrategy(piece=self.piece, rng=np.random.default_rng(seed))


STRATEGIES: Dict[str, Type[Strategy]] = {
    LongestChainStrategy.name: LongestChainStrategy,
    MinimizeDistanceStrategy.name: MinimizeDistanceStrategy,
    RandomStrategy.name: RandomStrategy,
}


def make_strategy(name: str, *, piece: Piece = Piece.OPPONENT, seed: Optional[int] = None) -> Strategy:
    try:
        strategy_cls = STRATEGIES[name]
    except KeyError:
        raise ValueError(f"Unknown strategy {name!r}; expected one of {sorted(STRATEGIES)}.") from None
    if strategy_cls is RandomStrategy:
        return RandomStrategy(piece=piece, rng=np.random.default_rng(seed))
    return strategy_cls(piece=piece)
