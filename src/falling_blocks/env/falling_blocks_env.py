from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import COLORS, SHAPE_COUNT, GameConfig, GameEngine, GameState, ScoringRules


class Action(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    ROTATE_CW = 3
    SOFT_DROP = 4


class FallingBlocksEnv(gym.Env):
    """One step = the chosen action, then one gravity tick.

    Reward is the engine score gained during the step. The observation board
    holds palette index + 1 for locked cells and the negated value for the
    falling piece.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 10000,
    ) -> None:
        super().__init__()
        self.engine = GameEngine(config, rules)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        height = self.engine.config.height
        width = self.engine.config.width
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-SHAPE_COUNT, high=SHAPE_COUNT + 1, shape=(height, width), dtype=np.int8),
                "next_piece": spaces.Discrete(SHAPE_COUNT),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self.state: GameState = self.engine.reset()
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.state.to_array(),
            "next_piece": int(self.state.next_piece.shape_index),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.state.score,
            "lines_cleared": self.state.lines_cleared,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.engine.seed(seed)
        self.state = self.engine.reset()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = Action(int(action))
        score_before = self.state.score
        state = self.state

        if action == Action.LEFT:
            state = self.engine.move(state, -1)
        elif action == Action.RIGHT:
            state = self.engine.move(state, 1)
        elif action == Action.ROTATE_CW:
            state = self.engine.rotate(state)
        elif action == Action.SOFT_DROP:
            state = self.engine.soft_drop(state)

        self.state = self.engine.tick(state)
        self._steps += 1

        reward = float(self.state.score - score_before)
        terminated = bool(self.state.is_game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        palette = np.array([(20, 20, 26)] + list(COLORS) + [(200, 200, 200)], dtype=np.uint8)
        board = np.abs(self.state.to_array().astype(np.int16))
        cell = 12
        img = palette[board]
        return np.repeat(np.repeat(img, cell, axis=0), cell, axis=1)

    def close(self) -> None:
        pass
