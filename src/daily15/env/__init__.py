"""Gymnasium environments for the Daily15 puzzles."""

from __future__ import annotations

from gymnasium.envs.registration import register

from .sliding_env import SlidingPuzzleEnv
from .genius_env import GeniusGridEnv

register(
    id="Daily15-4x4-v0",
    entry_point="daily15.env.sliding_env:SlidingPuzzleEnv",
    kwargs={"mode": "daily15"},
)

register(
    id="Blitz-3x3-v0",
    entry_point="daily15.env.sliding_env:SlidingPuzzleEnv",
    kwargs={"mode": "quickplay"},
)

register(
    id="GeniusGrid-6x6-v0",
    entry_point="daily15.env.genius_env:GeniusGridEnv",
)

ENV_IDS = ["Daily15-4x4-v0", "Blitz-3x3-v0", "GeniusGrid-6x6-v0"]

__all__ = ["SlidingPuzzleEnv", "GeniusGridEnv", "ENV_IDS"]
