"""
DefenderEnv - Gymnasium wrapper around the Space Defender engine
----------------------------------------------------------------
- The engine runs unchanged; the agent presses and releases the same logical
  keys a human would
- Discrete MultiDiscrete action space: [move(5), fire(2)]
  fire is edge-triggered, so holding it down shoots once
- Vector observation: player state + top-K nearest enemies + top-M nearest
  power-ups, all scaled to [-1, 1]
- Episode ends on GAME_OVER (terminated) or after max_steps (truncated)

Quick test:
    python -m game.defender.env
"""

from __future__ import annotations

import dataclasses
import logging
import time
from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .engine import DIRECTIONS, DefenderEngine, GameMode, InputAction
from .utils import clamp, seed_everything

logger = logging.getLogger(__name__)

MOVES = {
    0: None,
    1: InputAction.UP,
    2: InputAction.DOWN,
    3: InputAction.LEFT,
    4: InputAction.RIGHT,
}

DEFAULT_REWARDS = {
    "R_KILL": 1.0,        # per enemy shot down
    "R_POWER_UP": 1.0,    # per power-up collected
    "R_LIFE_LOST": 2.0,   # per life lost (ram or no-hit penalty)
    "R_SHOT": 0.01,       # per bullet fired
    "R_TIME": 0.001,      # per step
    "R_DEATH": 5.0,       # on game over
}


class DefenderEnv(gym.Env):
    """Space Defender as a Gymnasium environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        frame_skip: int = 2,
        max_steps: int = 1800,  # 60s at 30 decisions/s
        k_enemies: int = 5,
        m_power_ups: int = 2,
        reward_config: Optional[Dict[str, float]] = None,
        **engine_config,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")
        if frame_skip < 1:
            raise ValueError(f"frame_skip must be >= 1, got {frame_skip}")

        self.render_mode = render_mode
        self.frame_skip = frame_skip
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.m_power_ups = m_power_ups

        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        self.engine = DefenderEngine(**engine_config)
        self.width = self.engine.config.width
        self.height = self.engine.config.height

        self.action_space = spaces.MultiDiscrete([5, 2])

        # Player: pos(2) lives(1) level(1) last-hit timer(1) fire held(1)
        # Each enemy: rel pos(2) speed(1)
        # Each power-up: rel pos(2)
        obs_dim = 6 + (self.k_enemies * 3) + (self.m_power_ups * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._step_count = 0
        self._last_stats = self.engine.stats

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self.engine.init(seed=seed)
        self.engine.on_key_down(InputAction.CONFIRM)
        self.engine.on_key_up(InputAction.CONFIRM)

        self._step_count = 0
        logger.debug("Episode reset (seed=%s)", seed)
        self._last_stats = self._copy_stats()
        return self._get_obs(), self._get_info()

    def step(self, action):
        action = np.asarray(action, dtype=np.int64)
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action!r} for {self.action_space}")

        move, fire = int(action[0]), int(action[1])
        self._apply_move(move)
        self._apply_fire(fire)

        for _ in range(self.frame_skip):
            self.engine.update()
            if self.engine.mode is not GameMode.PLAYING:
                break

        events = self._collect_events()
        reward = self._compute_reward(events)

        terminated = self.engine.mode is GameMode.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Input mapping
    # ----------------------------

    def _apply_move(self, move: int):
        wanted = MOVES[move]
        for direction in DIRECTIONS:
            if direction is wanted:
                if direction not in self.engine.held:
                    self.engine.on_key_down(direction)
            elif direction in self.engine.held:
                self.engine.on_key_up(direction)

    def _apply_fire(self, fire: int):
        held = InputAction.FIRE in self.engine.held
        if fire and not held:
            self.engine.on_key_down(InputAction.FIRE)
        elif not fire and held:
            self.engine.on_key_up(InputAction.FIRE)

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _copy_stats(self):
        return dataclasses.replace(self.engine.stats)

    def _collect_events(self) -> Dict[str, float]:
        now = self.engine.stats
        before = self._last_stats
        events = {
            "kill": float(now.kills - before.kills),
            "power_up": float(now.power_ups - before.power_ups),
            "life_lost": float(now.lives_lost - before.lives_lost),
            "shot": float(now.shots - before.shots),
        }
        self._last_stats = self._copy_stats()
        return events

    def _compute_reward(self, events: Dict[str, float]) -> float:
        r = self.rewards
        reward = 0.0
        reward += r["R_KILL"] * events["kill"]
        reward += r["R_POWER_UP"] * events["power_up"]
        reward -= r["R_LIFE_LOST"] * events["life_lost"]
        reward -= r["R_SHOT"] * events["shot"]
        reward -= r["R_TIME"]
        if self.engine.mode is GameMode.GAME_OVER:
            reward -= r["R_DEATH"]
        return float(reward)

    def _get_obs(self) -> np.ndarray:
        e = self.engine
        p = e.player
        cfg = e.config

        obs_parts: List[float] = [
            (p.x / self.width) * 2 - 1,
            (p.y / self.height) * 2 - 1,
            (p.lives / cfg.max_lives) * 2 - 1,
            ((e.level - 1) / max(1, cfg.max_level - 1)) * 2 - 1,
            clamp(e.timers.last_hit / cfg.no_hit_penalty, 0, 1) * 2 - 1,
            1.0 if InputAction.FIRE in e.held else -1.0,
        ]

        enemies = sorted(
            (en for en in e.store.enemies if en.active),
            key=lambda en: (en.x - p.x) ** 2 + (en.y - p.y) ** 2,
        )
        for i in range(self.k_enemies):
            if i < len(enemies):
                en = enemies[i]
                obs_parts += [
                    clamp((en.x - p.x) / self.width, -1, 1),
                    clamp((en.y - p.y) / self.height, -1, 1),
                    clamp(en.speed / 10.0, 0, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        power_ups = sorted(
            (pu for pu in e.store.power_ups if pu.active),
            key=lambda pu: (pu.x - p.x) ** 2 + (pu.y - p.y) ** 2,
        )
        for i in range(self.m_power_ups):
            if i < len(power_ups):
                pu = power_ups[i]
                obs_parts += [
                    clamp((pu.x - p.x) / self.width, -1, 1),
                    clamp((pu.y - p.y) / self.height, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0]

        return np.clip(np.array(obs_parts, dtype=np.float32), -1.0, 1.0)

    def _get_info(self) -> Dict[str, Any]:
        stats = self.engine.stats
        return {
            "score": self.engine.player.score,
            "lives": self.engine.player.lives,
            "level": self.engine.level,
            "kills": stats.kills,
            "power_ups": stats.power_ups,
            "lives_lost": stats.lives_lost,
            "shots": stats.shots,
            "mode": self.engine.mode.value,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            # Imported lazily so headless training never opens a display
            from .window import DefenderWindow
            self._window = DefenderWindow(self.engine)
            if self.render_mode == "rgb_array":
                self._window.set_visible(False)

        self._window.dispatch_events()
        self._window.on_draw()

        if self.render_mode == "human":
            self._window.flip()
            return None
        return self._render_rgb_array()

    def _render_rgb_array(self) -> np.ndarray:
        import arcade
        image = arcade.get_image(0, 0, self.width, self.height)
        return np.asarray(image.convert("RGB"), dtype=np.uint8)

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42):
    """Run a random episode for testing"""
    env = DefenderEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(1 / env.metadata["render_fps"])

    print(f"Random episode return: {total:.2f}  score: {info['score']}  level: {info['level']}")
    env.close()
    return total, info


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_random_episode(render=True)
