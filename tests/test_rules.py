import numpy as np
import pytest

from leapfrog.core import (
    Board,
    BoardPosition,
    Move,
    Piece,
    STARTING_PIECES,
    decode_move,
    encode_move,
    get_game_winner,
    get_move_stack_chain,
    get_valid_moves,
    initialize_board,
    is_valid_hop,
    is_valid_move,
    moves_own_piece,
    perform_move,
    try_end_turn,
)

P = BoardPosition


def fresh_board() -> Board:
    board = initialize_board()
    board.cells[:, :] = Piece.NONE
    board.move_stack = []
    board.turn = Piece.PLAYER
    return board


def place(board: Board, piece: Piece, *positions) -> None:
    for row, col in positions:
        board.cells[row, col] = piece


def test_initial_layout() -> None:
    board = initialize_board()

    assert board.turn == Piece.PLAYER
    assert board.move_stack == []
    assert np.count_nonzero(board.cells == Piece.PLAYER) == STARTING_PIECES
    assert np.count_nonzero(board.cells == Piece.OPPONENT) == STARTING_PIECES
    assert (board.cells[5:8, 0:4] == Piece.PLAYER).all()
    assert (board.cells[0:3, 4:8] == Piece.OPPONENT).all()


def test_step_from_start() -> None:
    board = initialize_board()

    moves = get_valid_moves(board, P(5, 0), Piece.PLAYER)

    assert moves == [Move(P(5, 0), P(4, 0), Piece.PLAYER)]
    assert not is_valid_move(board, Move(P(5, 0), P(3, 0), Piece.PLAYER), Piece.PLAYER)
    assert not is_valid_move(board, Move(P(5, 0), P(2, 0), Piece.PLAYER), Piece.PLAYER)


def test_only_side_to_move_may_move() -> None:
    board = initialize_board()
    move = Move(P(2, 4), P(3, 4), Piece.OPPONENT)

    assert not is_valid_move(board, move, Piece.OPPONENT)
    board.turn = Piece.OPPONENT
    assert is_valid_move(board, move, Piece.OPPONENT)


def test_illegal_shapes_rejected() -> None:
    board = fresh_board()
    place(board, Piece.PLAYER, (4, 4))
    place(board, Piece.OPPONENT, (3, 4), (4, 5), (3, 5))

    for dest in [(4, 4), (3, 3), (5, 5), (1, 4), (2, 5), (4, 7)]:
        move = Move(P(4, 4), P(*dest), Piece.PLAYER)
        assert not is_valid_move(board, move, Piece.PLAYER), dest


def test_hop_requires_occupied_midpoint_and_empty_dest() -> None:
    board = fresh_board()
    place(board, Piece.PLAYER, (4, 4))
    place(board, Piece.OPPONENT, (3, 4), (2, 4))

    assert not is_valid_move(board, Move(P(4, 4), P(2, 4), Piece.PLAYER), Piece.PLAYER)
    assert not is_valid_move(board, Move(P(4, 4), P(4, 6), Piece.PLAYER), Piece.PLAYER)

    board.cells[2, 4] = Piece.NONE
    assert is_valid_move(board, Move(P(4, 4), P(2, 4), Piece.PLAYER), Piece.PLAYER)


def test_hop_over_own_piece() -> None:
    board = fresh_board()
    place(board, Piece.PLAYER, (4, 4), (4, 3))

    assert is_valid_hop(board, Move(P(4, 4), P(4, 2), Piece.PLAYER), Piece.PLAYER)


def test_hop_back_to_origin_is_a_cycle() -> None:
    board = fresh_board()
    place(board, Piece.PLAYER, (4, 4))
    place(board, Piece.OPPONENT, (3, 4))

    hop = Move(P(4, 4), P(2, 4), Piece.PLAYER)
    assert is_valid_move(board, hop, Piece.PLAYER)
    perform_move(board, hop, auto_end=False)

    back = Move(P(2, 4), P(4, 4), Piece.PLAYER)
    assert board.turn == Piece.PLAYER
    assert not is_valid_hop(board, back, Piece.PLAYER)
    assert not is_valid_move(board, back, Piece.PLAYER)


def test_forced_chain_end_flips_turn() -> None:
    board = fresh_board()
    place(board, Piece.PLAYER, (4, 4))
    place(board, Piece.OPPONENT, (3, 4))

    perform_move(board, Move(P(4, 4), P(2, 4), Piece.PLAYER))

    assert board.turn == Piece.OPPONENT


def test_hop_chain_continues_from_last_destination() -> None:
    board = fresh_board()
    place(board, Piece.PLAYER, (6, 0), (7, 7))
    place(board, Piece.OPPONENT, (5, 0), (3, 0), (6, 7))

    perform_move(board, Move(P(6, 0), P(4, 0), Piece.PLAYER))
    assert board.turn == Piece.PLAYER

    assert is_valid_move(board, Move(P(4, 0), P(2, 0), Piece.PLAYER), Piece.PLAYER)
    # another piece cannot join the chain, and steps are over once hopping started
    assert not is_valid_move(board, Move(P(7, 7), P(5, 7), Piece.PLAYER), Piece.PLAYER)
    assert not is_valid_move(board, Move(P(4, 0), P(4, 1), Piece.PLAYER), Piece.PLAYER)


def test_no_hop_after_step() -> None:
    board = fresh_board()
    place(board, Piece.PLAYER, (6, 0))
    place(board, Piece.OPPONENT, (4, 0))

    perform_move(board, Move(P(6, 0), P(5, 0), Piece.PLAYER), auto_end=False)

    assert not is_valid_move(board, Move(P(5, 0), P(3, 0), Piece.PLAYER), Piece.PLAYER)
    assert get_valid_moves(board, P(5, 0), Piece.PLAYER) == []


def test_step_ends_turn_automatically() -> None:
    board = initialize_board()

    perform_move(board, Move(P(5, 0), P(4, 0), Piece.PLAYER))

    assert board.turn == Piece.OPPONENT
    assert not try_end_turn(board)
    assert board.turn == Piece.OPPONENT


def test_perform_move_keeps_one_piece_per_cell() -> None:
    board = initialize_board()
    move = Move(P(6, 1), P(4, 1), Piece.PLAYER)

    perform_move(board, move)

    assert board.piece_at(P(6, 1)) == Piece.NONE
    assert board.piece_at(P(4, 1)) == Piece.PLAYER
    assert board.move_stack[-1] == move
    assert np.count_nonzero(board.cells == Piece.PLAYER) == STARTING_PIECES


def test_try_end_turn_flips_once() -> None:
    board = fresh_board()
    place(board, Piece.PLAYER, (6, 0))
    place(board, Piece.OPPONENT, (5, 0), (3, 0))

    assert not try_end_turn(board)

    perform_move(board, Move(P(6, 0), P(4, 0), Piece.PLAYER))
    assert board.turn == Piece.PLAYER

    assert try_end_turn(board)
    assert board.turn == Piece.OPPONENT
    assert not try_end_turn(board)
    assert board.turn == Piece.OPPONENT


def test_move_stack_chain_tracks_side_to_move() -> None:
    board = initialize_board()
    perform_move(board, Move(P(5, 0), P(4, 0), Piece.PLAYER))
    assert get_move_stack_chain(board) == []

    opponent_step = Move(P(2, 7), P(3, 7), Piece.OPPONENT)
    perform_move(board, opponent_step, auto_end=False)
    assert get_move_stack_chain(board) == [opponent_step]


def test_winner_when_all_pieces_in_target() -> None:
    board = fresh_board()
    place(board, Piece.PLAYER, *[(r, c) for r in range(3) for c in range(4, 8)])

    assert get_game_winner(board) == Piece.PLAYER


def test_opponent_winner() -> None:
    board = initialize_board()
    board.cells[0:3, 4:8] = Piece.NONE
    board.cells[5:8, 0:4] = Piece.OPPONENT
    board.cells[0:3, 4:8] = Piece.PLAYER
    board.cells[0, 4] = Piece.NONE
    board.cells[3, 4] = Piece.PLAYER

    assert get_game_winner(board) == Piece.OPPONENT


def test_no_winner() -> None:
    board = initialize_board()
    assert get_game_winner(board) is None

    board = fresh_board()
    place(board, Piece.PLAYER, (0, 4), (3, 4))
    assert get_game_winner(board) is None


def test_move_codec() -> None:
    move = Move(P(6, 1), P(4, 1), Piece.PLAYER)
    assert decode_move(encode_move(move), Piece.PLAYER) == move

    with pytest.raises(ValueError):
        encode_move(Move(P(4, 4), P(3, 3), Piece.PLAYER))
    with pytest.raises(ValueError):
        encode_move(Move(P(4, 4), P(4, 7), Piece.PLAYER))
    with pytest.raises(ValueError):
        decode_move(-1, Piece.PLAYER)


def test_hop_off_the_board_is_rejected() -> None:
    board = fresh_board()
    place(board, Piece.PLAYER, (0, 0))
    place(board, Piece.OPPONENT, (7, 0))

    assert not is_valid_hop(board, Move(P(0, 0), P(-2, 0), Piece.PLAYER), Piece.PLAYER)
    assert not is_valid_hop(board, Move(P(7, 0), P(9, 0), Piece.PLAYER), Piece.PLAYER)


def test_moves_own_piece() -> None:
    board = initialize_board()

    assert moves_own_piece(board, Move(P(5, 0), P(4, 0), Piece.PLAYER))
    assert not moves_own_piece(board, Move(P(4, 4), P(4, 5), Piece.PLAYER))
    assert not moves_own_piece(board, Move(P(2, 4), P(3, 4), Piece.PLAYER))
    assert not moves_own_piece(board, Move(P(-1, 0), P(0, 0), Piece.PLAYER))
