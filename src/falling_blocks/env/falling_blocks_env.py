from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Command, GameConfig, GameSession
from falling_blocks.game.board import count_holes, max_height
from falling_blocks.game.shapes import PieceType, rgb_for


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    NONE = 4


# NONE lets gravity act, like waiting out one timer tick
ACTION_TO_COMMAND = {
    Action.LEFT: Command.MOVE_LEFT,
    Action.RIGHT: Command.MOVE_RIGHT,
    Action.ROTATE: Command.ROTATE,
    Action.SOFT_DROP: Command.SOFT_DROP,
    Action.NONE: Command.TICK,
}


class FallingBlocksEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 10000,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.session = GameSession(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)

        height, width = self.session.config.height, self.session.config.width
        self.observation_space = spaces.Box(
            low=0, high=int(max(PieceType)), shape=(height, width), dtype=np.int8
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.session.display_grid().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        board = self.session.board
        return {
            "score": self.session.score,
            "lines_cleared_total": self.session.lines_cleared_total,
            "max_height": max_height(board),
            "holes": count_holes(board),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.session.rng.seed(seed)
        self.session.restart()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.session.score
        self.session.dispatch(ACTION_TO_COMMAND[Action(int(action))])
        self._steps += 1

        terminated = self.session.is_over
        truncated = not terminated and self._steps >= self.max_episode_steps

        reward = float(self.session.score - score_before)
        if terminated:
            reward += self.terminal_penalty

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self.session.display_grid()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = rgb_for(int(grid[y, x]))
            return img
        return None

    def close(self) -> None:
        pass
