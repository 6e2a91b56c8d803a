"""Hop chain enumeration."""

from .chains import Chain, apply_chain, enumerate_chains, get_valid_moves_full

__all__ = ["Chain", "apply_chain", "enumerate_chains", "get_valid_moves_full"]
