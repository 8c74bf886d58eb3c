from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from roofrun_rl.game import COLOR_HEX, GameConfig, RoofrunGame, ScoringRules


def _hex_to_rgb(value: str) -> Tuple[int, int, int]:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


EMPTY_RGB = (30, 30, 36)
COLOR_RGB = {int(color): _hex_to_rgb(hex_value) for color, hex_value in COLOR_HEX.items()}


class RoofrunEnv(gym.Env):
    """Click-to-clear puzzle as a Gymnasium environment.

    Actions are row-major cell indices (``row * size + col``). Observations
    are the raw color matrix. ``info["action_mask"]`` flags every cell whose
    click would remove a group.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 4}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 invalid_action_penalty: float = -0.1,
                 max_episode_steps: int = 500) -> None:
        super().__init__()
        self.game = RoofrunGame(config)
        self.rules = ScoringRules()
        self.render_mode = render_mode
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.max_episode_steps = int(max_episode_steps)
        self.reward_weights: Dict[str, float] = {
            "cells": 1.0,   # reward per cell removed
            "win": 50.0,    # bonus for clearing the board
            "loss": -0.5,   # penalty per cell left when stuck
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        size = self.game.grid_size
        max_color = max(int(c) for c in self.game.config.palette)
        self.observation_space = spaces.Box(low=0, high=max_color, shape=(size, size), dtype=np.int8)
        self.action_space = spaces.Discrete(size * size)

        self.score = 0
        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.grid.clone_state()

    def get_action_mask(self) -> np.ndarray:
        return self.game.action_mask().reshape(-1)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": self.get_action_mask(),
            "score": self.score,
            "steps": self._steps,
            "remaining": self.game.grid.count_filled(),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self.score = 0
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        row, col = divmod(int(action), self.game.grid_size)
        result = self.game.click(row, col)
        self._steps += 1

        reward_components: Dict[str, float] = {}
        if result.valid_move:
            reward_components["cells"] = self.reward_weights["cells"] * float(result.removed_count)
            self.score += self.rules.score_for_removal(result.removed_count)
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        terminated = False
        if self.game.is_won():
            reward_components["win"] = self.reward_weights["win"]
            terminated = True
        elif self.game.is_lost():
            reward_components["loss"] = self.reward_weights["loss"] * float(self.game.grid.count_filled())
            terminated = True
        truncated = not terminated and self._steps >= self.max_episode_steps

        info = self._get_info()
        info["removed"] = result.removed_count
        info["reward_components"] = reward_components
        reward = float(sum(reward_components.values()))
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self.game.grid.grid
        cell = 16
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                color = COLOR_RGB.get(int(grid[y, x]), EMPTY_RGB)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
