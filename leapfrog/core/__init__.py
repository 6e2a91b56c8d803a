"""Core game logic for Leapfrog."""

from .state import (
    Board,
    BoardPosition,
    Move,
    Piece,
    Region,
    average_position,
    euclidean_distance,
    home_region,
    manhattan_distance,
    target_region,
)
from .rules import (
    BOARD_SIZE,
    GAME_RULES,
    MOVE_VECTOR_SIZE,
    STARTING_PIECES,
    decode_move,
    encode_move,
    get_game_winner,
    get_move_stack_chain,
    get_valid_moves,
    init_board,
    initialize_board,
    is_valid_hop,
    is_valid_move,
    move_vector_size,
    moves_own_piece,
    perform_move,
    try_end_turn,
)

__all__ = [
    "Board",
    "BoardPosition",
    "Move",
    "Piece",
    "Region",
    "average_position",
    "euclidean_distance",
    "home_region",
    "manhattan_distance",
    "target_region",
    "BOARD_SIZE",
    "GAME_RULES",
    "MOVE_VECTOR_SIZE",
    "STARTING_PIECES",
    "decode_move",
    "encode_move",
    "get_game_winner",
    "get_move_stack_chain",
    "get_valid_moves",
    "init_board",
    "initialize_board",
    "is_valid_hop",
    "is_valid_move",
    "move_vector_size",
    "moves_own_piece",
    "perform_move",
    "try_end_turn",
]
