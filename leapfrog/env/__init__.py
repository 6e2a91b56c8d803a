"""Gymnasium environment for Leapfrog."""

from .gym_env import LeapfrogEnv, render_board

__all__ = ["LeapfrogEnv", "render_board"]
