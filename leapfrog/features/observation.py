from __future__ import annotations

from typing import Tuple

import numpy as np

from leapfrog.core import Board, Piece, get_move_stack_chain

BOARD_CHANNELS = 4  # player, opponent, chain piece, departed squares
AUX_VECTOR_SIZE = 3  # turn one-hot (2) + in-chain flag


def build_board_tensor(board: Board) -> np.ndarray:
    """Return board tensor with shape (4, N, N) channel-first."""
    tensor = np.zeros((BOARD_CHANNELS, board.size, board.size), dtype=np.float32)
    tensor[0] = board.cells == Piece.PLAYER
    tensor[1] = board.cells == Piece.OPPONENT
    chain = get_move_stack_chain(board)
    if chain:
        last = chain[-1]
        tensor[2, last.dest.row, last.dest.col] = 1.0
        for move in chain:
            tensor[3, move.src.row, move.src.col] = 1.0
    return tensor


def build_aux_vector(board: Board) -> np.ndarray:
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    aux[int(board.turn) - 1] = 1.0
    aux[2] = 1.0 if get_move_stack_chain(board) else 0.0
    return aux


def board_to_numpy(board: Board) -> Tuple[np.ndarray, np.ndarray]:
    return build_board_tensor(board), build_aux_vector(board)
