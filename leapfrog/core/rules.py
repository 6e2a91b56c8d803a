from __future__ import annotations

from typing import List, Optional

from .state import (
    DIRECTIONS,
    Board,
    BoardPosition,
    Move,
    Piece,
    home_region,
    target_region,
)

BOARD_SIZE = 8
MAX_STEP = 2
STARTING_PIECES = 12
MOVE_VECTOR_SIZE = BOARD_SIZE * BOARD_SIZE * len(DIRECTIONS) * MAX_STEP

GAME_RULES = (
    "The goal of the game is to recreate your opponent's starting position. "
    "On your turn you move a single piece. It can either step to an adjacent "
    "square, after which your turn ends, or hop over an adjacent piece into the "
    "empty square behind it. You may keep hopping with the same piece for as "
    "long as you like, but never back onto a square it already left this turn."
)


def initialize_board(size: int = BOARD_SIZE) -> Board:
    board = Board.empty(size)
    init_board(board)
    return board


def init_board(board: Board) -> None:
    board.cells[:, :] = Piece.NONE
    for piece in (Piece.PLAYER, Piece.OPPONENT):
        for position in home_region(piece, board.size).positions():
            board.set_piece(position, piece)
    board.move_stack = []
    board.turn = Piece.PLAYER


def get_move_stack_chain(board: Board) -> List[Move]:
    """Trailing moves made by the side to move, oldest first."""
    chain: List[Move] = []
    for move in reversed(board.move_stack):
        if move.piece != board.turn:
            break
        chain.append(move)
    chain.reverse()
    return chain


def is_valid_move(board: Board, move: Move, piece: Piece) -> bool:
    if board.turn != piece:
        return False
    if not (board.in_bounds(move.src) and board.in_bounds(move.dest)):
        return False
    if not board.is_empty(move.dest):
        return False

    is_first_move = not get_move_stack_chain(board)
    if is_first_move and move.distance == 1:
        return True
    return is_valid_hop(board, move, piece)


def is_valid_hop(board: Board, move: Move, piece: Piece) -> bool:
    if not (board.in_bounds(move.src) and board.in_bounds(move.dest)):
        return False
    dr = move.dest.row - move.src.row
    dc = move.dest.col - move.src.col
    if move.distance != 2 or (dr != 0 and dc != 0):
        return False

    midpoint = move.src.offset(dr // 2, dc // 2)
    if board.is_empty(midpoint) or not board.is_empty(move.dest):
        return False

    chain = get_move_stack_chain(board)
    if not chain:
        return True

    creates_cycle = any(previous.src == move.dest for previous in chain)
    last = chain[-1]
    # A step always closes the chain, only a hop can be continued.
    continues_chain = last.distance == 2 and last.dest == move.src
    return continues_chain and not creates_cycle


def moves_own_piece(board: Board, move: Move) -> bool:
    """True if the piece named by ``move`` actually stands on its source square."""
    return board.in_bounds(move.src) and board.piece_at(move.src) == move.piece


def get_valid_moves(board: Board, src: BoardPosition, piece: Piece) -> List[Move]:
    if board.is_empty(src):
        return []
    occupant = board.piece_at(src)
    candidates = board.neighbours(src) + board.extended_neighbours(src)
    moves = [Move(src, dest, piece) for dest in candidates]
    return [move for move in moves if is_valid_move(board, move, occupant)]


def perform_move(board: Board, move: Move, auto_end: bool = True) -> None:
    """Apply ``move`` without checking it; callers validate with ``is_valid_move`` first."""
    board.set_piece(move.src, Piece.NONE)
    board.set_piece(move.dest, move.piece)
    board.move_stack.append(move)
    if auto_end and not get_valid_moves(board, move.dest, move.piece):
        try_end_turn(board)


def try_end_turn(board: Board) -> bool:
    initial_turn = board.turn
    last_move = board.last_move
    if last_move is not None and board.piece_at(last_move.dest) == board.turn:
        board.turn = board.turn.other
    return board.turn != initial_turn


def get_game_winner(board: Board) -> Optional[Piece]:
    for piece in (Piece.OPPONENT, Piece.PLAYER):
        positions = board.positions_for_piece(piece)
        target = target_region(piece, board.size)
        if positions and all(position in target for position in positions):
            return piece
    return None


def move_vector_size(size: int = BOARD_SIZE) -> int:
    return size * size * len(DIRECTIONS) * MAX_STEP


def encode_move(move: Move, size: int = BOARD_SIZE) -> int:
    dr = move.dest.row - move.src.row
    dc = move.dest.col - move.src.col
    if dr != 0 and dc != 0:
        raise ValueError("Move is not orthogonal.")
    distance = abs(dr) + abs(dc)
    if distance < 1 or distance > MAX_STEP:
        raise ValueError("Move distance out of range.")
    direction_index = DIRECTIONS.index((dr // distance, dc // distance))
    base = move.src.row * size + move.src.col
    base = base * len(DIRECTIONS) + direction_index
    return base * MAX_STEP + (distance - 1)


def decode_move(index: int, piece: Piece, size: int = BOARD_SIZE) -> Move:
    if not 0 <= index < move_vector_size(size):
        raise ValueError("Move index out of range.")
    distance = (index % MAX_STEP) + 1
    index //= MAX_STEP
    dr, dc = DIRECTIONS[index % len(DIRECTIONS)]
    index //= len(DIRECTIONS)
    src = BoardPosition(index // size, index % size)
    return Move(src, src.offset(dr * distance, dc * distance), piece)
