"""Game session owning the live board."""

from .game import GameConfig, GameSession, IllegalMoveError, load_config

__all__ = ["GameConfig", "GameSession", "IllegalMoveError", "load_config"]
