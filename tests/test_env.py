from __future__ import annotations

import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_blocks_env import Action, FallingBlocksEnv


def test_registered_env_resets_and_steps():
    env = gym.make("FallingBlocks-10x20-v0")
    obs, info = env.reset(seed=3)
    assert obs["board"].shape == (20, 10)
    assert info["score"] == 0

    obs, reward, terminated, truncated, info = env.step(int(Action.NONE))
    assert env.observation_space.contains(obs)
    assert reward == 0.0
    assert not terminated
    env.close()


def test_soft_drops_until_game_over():
    env = FallingBlocksEnv()
    env.reset(seed=0)
    terminated = False
    for _ in range(2000):
        _, reward, terminated, truncated, info = env.step(Action.SOFT_DROP)
        assert reward >= 0.0
        if terminated:
            break
    assert terminated
    assert env.state.is_game_over


def test_truncates_after_max_steps():
    env = FallingBlocksEnv(max_episode_steps=3)
    env.reset(seed=1)
    results = [env.step(Action.NONE) for _ in range(3)]
    assert not results[1][3]
    assert results[2][3]


def test_rgb_render():
    env = FallingBlocksEnv(render_mode="rgb_array")
    env.reset(seed=2)
    frame = env.render()
    assert frame.shape == (240, 120, 3)
    assert frame.dtype == np.uint8
