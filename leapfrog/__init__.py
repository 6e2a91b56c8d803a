"""Leapfrog hopping game engine and CPU opponents."""

from . import core, cpu, env, evaluation, features, search, session
from .core import Board, BoardPosition, Move, Piece
from .cpu import (
    LongestChainStrategy,
    MinimizeDistanceStrategy,
    RandomStrategy,
    Strategy,
    make_strategy,
)
from .env import LeapfrogEnv
from .evaluation import EvaluationResult, evaluate_strategies
from .features import AUX_VECTOR_SIZE, BOARD_CHANNELS, build_aux_vector, build_board_tensor
from .search import apply_chain, enumerate_chains, get_valid_moves_full
from .session import GameConfig, GameSession, IllegalMoveError, load_config

__all__ = [
    "core",
    "cpu",
    "env",
    "evaluation",
    "features",
    "search",
    "session",
    "Board",
    "BoardPosition",
    "Move",
    "Piece",
    "Strategy",
    "LongestChainStrategy",
    "MinimizeDistanceStrategy",
    "RandomStrategy",
    "make_strategy",
    "LeapfrogEnv",
    "EvaluationResult",
    "evaluate_strategies",
    "AUX_VECTOR_SIZE",
    "BOARD_CHANNELS",
    "build_aux_vector",
    "build_board_tensor",
    "apply_chain",
    "enumerate_chains",
    "get_valid_moves_full",
    "GameConfig",
    "GameSession",
    "IllegalMoveError",
    "load_config",
]
