from __future__ import annotations

import gymnasium as gym
import numpy as np
import pytest

from blockfall_rl.env import ENV_ID
from blockfall_rl.env.falling_block_env import ACTION_WAIT, NUM_ACTIONS, FallingBlockEnv
from blockfall_rl.game import Command


def test_registered_env_resets_into_its_spaces() -> None:
    env = gym.make(ENV_ID)
    obs, info = env.reset(seed=0)
    assert env.action_space.n == NUM_ACTIONS == 7
    assert env.observation_space.contains(obs)
    assert info["score"] == 0 and info["lines"] == 0
    env.close()


def test_same_seed_same_episode() -> None:
    a, b = FallingBlockEnv(), FallingBlockEnv()
    obs_a, _ = a.reset(seed=7)
    obs_b, _ = b.reset(seed=7)
    for action in [Command.HARD_DROP, ACTION_WAIT, Command.MOVE_LEFT, Command.HARD_DROP]:
        obs_a, r_a, *_ = a.step(int(action))
        obs_b, r_b, *_ = b.step(int(action))
        np.testing.assert_array_equal(obs_a["grid"], obs_b["grid"])
        assert obs_a["next"] == obs_b["next"]
        assert r_a == r_b


def test_wait_applies_gravity() -> None:
    env = FallingBlockEnv()
    env.reset(seed=3)
    row = env.game.active.row
    _, _, terminated, truncated, info = env.step(ACTION_WAIT)
    assert env.game.active.row == row + 1
    assert info["accepted"] is True
    assert not terminated and not truncated


def test_move_is_followed_by_gravity() -> None:
    env = FallingBlockEnv()
    env.reset(seed=3)
    col, row = env.game.active.col, env.game.active.row
    env.step(int(Command.MOVE_RIGHT))
    assert (env.game.active.col, env.game.active.row) == (col + 1, row + 1)


def test_hard_drop_locks_without_extra_tick() -> None:
    env = FallingBlockEnv()
    env.reset(seed=3)
    _, _, _, _, info = env.step(int(Command.HARD_DROP))
    assert info["pieces"] == 1
    assert env.game.active.row <= 1


def test_rejected_command_is_penalized() -> None:
    env = FallingBlockEnv(rejected_action_penalty=-0.5)
    env.reset(seed=3)
    while env.game.command(Command.MOVE_LEFT):
        pass
    _, _, _, _, info = env.step(int(Command.MOVE_LEFT))
    assert info["accepted"] is False
    assert info["reward_components"]["rejected"] == -0.5


def test_episode_terminates_when_stack_reaches_top() -> None:
    env = FallingBlockEnv(terminal_penalty=-5.0)
    env.reset(seed=11)
    terminated = False
    info: dict = {}
    for _ in range(300):
        _, _, terminated, truncated, info = env.step(int(Command.HARD_DROP))
        assert not truncated
        if terminated:
            break
    assert terminated
    assert info["reward_components"]["terminal"] == -5.0
    assert env.game.is_game_over()


def test_truncates_after_step_limit() -> None:
    env = FallingBlockEnv(max_episode_steps=3)
    env.reset(seed=0)
    results = [env.step(ACTION_WAIT) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_line_clear_reward() -> None:
    env = FallingBlockEnv(reward_weights={"lines": 2.0, "lines_sq": 1.0, "holes": 0.0, "height": 0.0})
    env.reset(seed=0)
    game = env.game
    bottom = game.grid.height - 1
    cells = {p.x for p in game.ghost_piece_cells() if p.y == bottom}
    for x in range(game.grid.width):
        if x not in cells:
            game.grid.grid[bottom, x] = 1
    assert cells and not game.grid.is_row_full(bottom)
    _, reward, _, _, info = env.step(int(Command.HARD_DROP))
    assert info["rows_cleared"] == 1
    assert reward == pytest.approx(3.0)


def test_invalid_action_raises() -> None:
    env = FallingBlockEnv()
    env.reset(seed=0)
    with pytest.raises(ValueError):
        env.step(NUM_ACTIONS)


def test_render_rgb_array() -> None:
    env = FallingBlockEnv(render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img is not None
    assert img.shape == (20 * 12, 10 * 12, 3)
    assert img.dtype == np.uint8
    assert FallingBlockEnv().render() is None
