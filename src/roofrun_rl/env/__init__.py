"""Gymnasium environments for Roofrun RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

from roofrun_rl.game import GameConfig
from .roofrun_env import RoofrunEnv

# Default board from the original game
register(
    id="Roofrun-6x6-v0",
    entry_point="roofrun_rl.env.roofrun_env:RoofrunEnv",
    kwargs={"config": GameConfig(grid_size=6)},
)

# Largest board the front end allows
register(
    id="Roofrun-12x12-v0",
    entry_point="roofrun_rl.env.roofrun_env:RoofrunEnv",
    kwargs={"config": GameConfig(grid_size=12)},
)

__all__ = ["RoofrunEnv"]
