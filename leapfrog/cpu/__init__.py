"""CPU move selection."""

from .strategies import (
    STRATEGIES,
    LongestChainStrategy,
    MinimizeDistanceStrategy,
    RandomStrategy,
    Strategy,
    flatten_chains,
    hop_count,
    make_strategy,
)

__all__ = [
    "STRATEGIES",
    "Strategy",
    "LongestChainStrategy",
    "MinimizeDistanceStrategy",
    "RandomStrategy",
    "flatten_chains",
    "hop_count",
    "make_strategy",
]
