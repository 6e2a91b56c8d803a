from __future__ import annotations

from typing import Dict, List, Optional

from leapfrog.core import (
    Board,
    BoardPosition,
    Move,
    Piece,
    get_valid_moves,
    perform_move,
    try_end_turn,
)

Chain = List[Move]


def get_valid_moves_full(board: Board, src: BoardPosition, piece: Piece) -> List[Chain]:
    """Return every legal chain starting at ``src``.

    Each single move is reported as its own chain, followed by every longer
    chain that extends it. Lookahead runs on clones applied with
    ``auto_end=False`` so the move stack keeps the chain context needed by the
    cycle check; ``board`` itself is never touched. Recursion ends because a
    chain may not land on any square it already departed from.
    """
    chains: List[Chain] = []
    for move in get_valid_moves(board, src, piece):
        chains.append([move])

        lookahead = board.copy()
        perform_move(lookahead, move, auto_end=False)
        for continuation in get_valid_moves_full(lookahead, move.dest, move.piece):
            chains.append([move] + continuation)
    return chains


def enumerate_chains(board: Board, piece: Optional[Piece] = None) -> Dict[BoardPosition, List[Chain]]:
    """Map each piece of the side to move to its chains, skipping pieces without any."""
    if piece is None:
        piece = board.turn

    result: Dict[BoardPosition, List[Chain]] = {}
    for position in board.positions_for_piece(piece):
        chains = get_valid_moves_full(board, position, piece)
        if chains:
            result[position] = chains
    return result


def apply_chain(board: Board, chain: Chain, *, end_turn: bool = True) -> Board:
    for move in chain:
        perform_move(board, move, auto_end=False)
    if end_turn:
        try_end_turn(board)
    return board
