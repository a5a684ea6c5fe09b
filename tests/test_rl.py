"""
Tests for the training helpers (no actual training)
"""

import csv

import numpy as np
import pytest

pytest.importorskip("stable_baselines3")

from conftest import ScriptedRandom

from game.defender.env import DefenderEnv
from rl.configs.defender_config import REWARD_CONFIGS, make_env_kwargs
from rl.metrics_callback import MetricsCallback
from rl.train import MultiDiscreteToDiscreteWrapper


def test_discrete_wrapper_covers_all_actions():
    env = MultiDiscreteToDiscreteWrapper(DefenderEnv(rng=ScriptedRandom()))
    assert env.action_space.n == 10

    decoded = {tuple(env.action(a)) for a in range(env.action_space.n)}
    assert len(decoded) == 10
    assert tuple(env.action(7)) == (3, 1)
    assert all(env.unwrapped.action_space.contains(np.array(d)) for d in decoded)


def test_make_env_kwargs():
    kwargs = make_env_kwargs("survival")
    assert kwargs["reward_config"] is REWARD_CONFIGS["survival"]
    with pytest.raises(ValueError):
        make_env_kwargs("nope")


def test_metrics_callback_writes_csv(tmp_path):
    cb = MetricsCallback(log_dir=str(tmp_path), algo_name="ppo", verbose=0)
    cb._on_training_start()
    cb.record_episode({
        "episode": {"r": 3.5, "l": 120},
        "score": 40, "kills": 2, "power_ups": 1, "lives_lost": 3,
        "level": 2, "mode": "game_over",
    })
    cb._on_training_end()

    with open(tmp_path / "ppo_metrics.csv") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 1
    assert rows[0]["score"] == "40"
    assert rows[0]["game_over"] == "1"

    summary = cb.get_summary()
    assert summary["mean_score"] == 40
    assert summary["max_level"] == 2
