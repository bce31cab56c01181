import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_blocks_env import Action, FallingBlocksEnv
from falling_blocks.game import ActivePiece, PieceType
from falling_blocks.rl.random_agent import run_random


def test_reset_returns_running_game():
    env = FallingBlocksEnv()
    obs, info = env.reset(seed=0)
    assert obs.shape == (20, 10)
    assert obs.dtype == np.int8
    assert env.observation_space.contains(obs)
    assert int(np.count_nonzero(obs)) == 4
    assert info["score"] == 0
    assert info["max_height"] == 0
    assert env.session.is_running


def test_seeded_resets_are_reproducible():
    env = FallingBlocksEnv()
    first, _ = env.reset(seed=42)
    second, _ = env.reset(seed=42)
    assert np.array_equal(first, second)


def test_line_clear_reward():
    env = FallingBlocksEnv()
    env.reset(seed=1)
    session = env.session
    session.board[19] = int(PieceType.L)
    session.board[19, 3:5] = 0
    session.active = ActivePiece(PieceType.O, 3, 18, 0)

    obs, reward, terminated, truncated, info = env.step(Action.SOFT_DROP)

    assert reward == 100.0
    assert not terminated
    assert info["lines_cleared_total"] == 1


def test_episode_terminates_with_penalty():
    env = FallingBlocksEnv(terminal_penalty=-5.0)
    env.reset(seed=3)
    terminated = False
    reward = 0.0
    for _ in range(5000):
        obs, reward, terminated, truncated, info = env.step(Action.NONE)
        if terminated:
            break
    assert terminated
    assert reward == -5.0


def test_truncation():
    env = FallingBlocksEnv(max_episode_steps=3)
    env.reset(seed=0)
    results = [env.step(Action.LEFT) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_rgb_render():
    env = FallingBlocksEnv(render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (240, 120, 3)
    assert img.dtype == np.uint8


def test_registered_env_and_random_agent():
    env = gym.make("FallingBlocks-10x20-v0")
    obs, info = env.reset(seed=0)
    assert env.action_space.n == len(Action)
    env.close()
    assert run_random(steps=100, seed=0) >= 0.0
