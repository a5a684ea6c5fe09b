"""
Tests for the Gymnasium wrapper
"""

import numpy as np
import pytest

from conftest import ScriptedRandom

from game.defender.engine import GameMode, InputAction
from game.defender.env import DefenderEnv


@pytest.fixture
def env():
    e = DefenderEnv(rng=ScriptedRandom())
    yield e
    e.close()


def test_reset_enters_playing(env):
    obs, info = env.reset(seed=0)
    assert env.engine.mode is GameMode.PLAYING
    assert obs.shape == env.observation_space.shape
    assert env.observation_space.contains(obs)
    assert info["lives"] == 3 and info["score"] == 0 and info["level"] == 1


def test_step_contract(env):
    env.reset(seed=0)
    obs, reward, terminated, truncated, info = env.step([0, 0])
    assert env.observation_space.contains(obs)
    assert isinstance(reward, float)
    assert not terminated and not truncated
    assert env.engine.stats.ticks == env.frame_skip


def test_invalid_action_raises(env):
    env.reset(seed=0)
    with pytest.raises(ValueError):
        env.step([5, 0])


def test_move_presses_exactly_one_direction(env):
    env.reset(seed=0)
    env.step([4, 0])
    assert env.engine.held == {InputAction.RIGHT}
    assert env.engine.player.x == pytest.approx(400 + 5 * env.frame_skip)

    env.step([1, 0])
    assert env.engine.held == {InputAction.UP}

    env.step([0, 0])
    assert env.engine.held == set()


def test_fire_is_edge_triggered(env):
    env.reset(seed=0)
    env.step([0, 1])
    env.step([0, 1])
    assert env.engine.stats.shots == 1
    env.step([0, 0])
    _, reward, _, _, info = env.step([0, 1])
    assert info["shots"] == 2
    assert reward == pytest.approx(-env.rewards["R_SHOT"] - env.rewards["R_TIME"])


def test_idle_agent_loses_to_penalty(env):
    env.reset(seed=0)
    terminated = False
    steps = 0
    while not terminated:
        _, reward, terminated, truncated, info = env.step([0, 0])
        steps += 1
        assert steps <= 450

    # 3 lives x 300 ticks / frame_skip 2
    assert steps == 450
    assert info["mode"] == "game_over"
    assert info["lives_lost"] == 3
    assert reward < -env.rewards["R_DEATH"]


def test_truncation():
    env = DefenderEnv(rng=ScriptedRandom(), max_steps=5)
    env.reset()
    for _ in range(4):
        assert not env.step([0, 0])[3]
    assert env.step([0, 0])[3]


def test_reward_config_override():
    env = DefenderEnv(rng=ScriptedRandom(), reward_config={"name": "x", "R_TIME": 0.5})
    env.reset()
    _, reward, *_ = env.step([0, 0])
    assert reward == pytest.approx(-0.5)


def test_observation_lists_nearest_enemy_first(env):
    from game.defender.entities import Enemy
    env.reset(seed=0)
    env.engine.store.enemies.extend([
        Enemy(x=400, y=500, speed=1.0),
        Enemy(x=400, y=200, speed=2.0),
    ])
    obs = env._get_obs()
    assert obs[6] == pytest.approx(0.0)
    assert obs[7] == pytest.approx(150 / 600)
    assert obs.dtype == np.float32


def test_bad_render_mode():
    with pytest.raises(ValueError):
        DefenderEnv(render_mode="ascii")


def test_level_observation_uses_configured_max_level():
    env = DefenderEnv(rng=ScriptedRandom(), max_level=2)
    env.reset(seed=0)
    assert env._get_obs()[3] == pytest.approx(-1.0)
    env.engine.levels.level = 2
    assert env._get_obs()[3] == pytest.approx(1.0)
