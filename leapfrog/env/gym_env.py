from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from leapfrog.core import (
    BOARD_SIZE,
    Board,
    Piece,
    decode_move,
    encode_move,
    get_game_winner,
    get_move_stack_chain,
    get_valid_moves,
    initialize_board,
    is_valid_move,
    move_vector_size,
    moves_own_piece,
    perform_move,
    try_end_turn,
)
from leapfrog.features import AUX_VECTOR_SIZE, BOARD_CHANNELS, build_aux_vector, build_board_tensor


class LeapfrogEnv(gym.Env):
    """Two-sided environment; every action is one move or the end-turn action."""

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        board_size: int = BOARD_SIZE,
        max_turns: int = 200,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._size = board_size
        self._max_turns = max_turns
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode
        self.end_turn_action = move_vector_size(board_size)

        board_shape = (BOARD_CHANNELS, board_size, board_size)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0.0, high=1.0, shape=board_shape, dtype=np.float32),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(self.end_turn_action + 1)

        self._board: Board = initialize_board(board_size)
        self.turn_count = 0

    @property
    def board(self) -> Board:
        return self._board

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self._max_turns = options.get("max_turns", self._max_turns) if options else self._max_turns
        self._board = initialize_board(self._size)
        self.turn_count = 0
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")

        legal_mask = self.legal_action_mask()
        if self._enforce_legal and not legal_mask[action_index]:
            raise ValueError("Illegal action provided and enforce_legal_actions=True.")

        turn_before = self._board.turn
        if action_index == self.end_turn_action:
            try_end_turn(self._board)
        else:
            move = decode_move(int(action_index), self._board.turn, self._size)
            if is_valid_move(self._board, move, move.piece) and moves_own_piece(self._board, move):
                perform_move(self._board, move)
        if self._board.turn != turn_before:
            self.turn_count += 1

        observation = self._build_observation()
        info = self._build_info()

        winner = get_game_winner(self._board)
        reward = self._compute_reward(winner)
        terminated = winner is not None or not info["legal_action_mask"].any()
        truncated = not terminated and self.turn_count >= self._max_turns
        return observation, reward, terminated, truncated, info

    def legal_action_mask(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        board = self._board
        for position in board.positions_for_piece(board.turn):
            for move in get_valid_moves(board, position, board.turn):
                mask[encode_move(move, self._size)] = 1
        if get_move_stack_chain(board):
            mask[self.end_turn_action] = 1
        return mask

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return render_board(self._board)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> Dict[str, np.ndarray]:
        return {"board": build_board_tensor(self._board), "aux": build_aux_vector(self._board)}

    def _build_info(self) -> Dict[str, np.ndarray]:
        return {"legal_action_mask": self.legal_action_mask()}

    def _compute_reward(self, winner: Optional[Piece]) -> float:
        if winner == Piece.PLAYER:
            return 1.0
        if winner == Piece.OPPONENT:
            return -1.0
        return 0.0


SYMBOLS = {Piece.NONE: ".", Piece.PLAYER: "W", Piece.OPPONENT: "B"}


def render_board(board: Board) -> str:
    rows = []
    for r in range(board.size):
        rows.append("".join(SYMBOLS[Piece(int(board.cells[r, c]))] for c in range(board.size)))
    return "\n".join(rows)
