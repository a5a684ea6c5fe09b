"""
Gameplay constants and engine configuration
"""

from __future__ import annotations
from dataclasses import dataclass


# Logical playfield (origin bottom-left)
WIDTH = 800
HEIGHT = 600
TICK_RATE = 60  # updates per second

# Player
PLAYER_SIZE = 20.0
PLAYER_SPEED = 5.0
PLAYER_START_Y = 50.0
START_LIVES = 3
MAX_LIVES = 5

# Projectiles / pickups
BULLET_SPEED = 10.0
POWER_UP_SPEED = 1.5

# Collision thresholds
ENEMY_HIT_MARGIN = 15.0     # added to player.size
BULLET_HIT_RADIUS = 20.0
POWER_UP_HIT_MARGIN = 10.0  # added to player.size

# Off-screen limits
ENEMY_EXIT_Y = -30.0
POWER_UP_EXIT_Y = -20.0

# Scoring
KILL_SCORE = 10
POWER_UP_SCORE = 20

# Timers (ticks)
LEVEL_DURATION = 900      # 15s
NO_HIT_PENALTY = 300      # 5s
POWER_UP_INTERVAL = 300   # 5s

# Levels
MAX_LEVEL = 3
BASE_SPAWN_RATE = 60
SPAWN_RATE_STEP = 25

# Spawn margins
SPAWN_MARGIN = 40
ENEMY_JITTER = 20
POWER_UP_MARGIN = 20

# Background
STAR_SCROLL = 0.5


class ConfigError(ValueError):
    """Raised when an engine configuration is unusable"""


@dataclass
class GameConfig:
    """Tunable engine parameters; defaults reproduce the arcade game"""
    width: int = WIDTH
    height: int = HEIGHT
    tick_rate: int = TICK_RATE
    player_size: float = PLAYER_SIZE
    player_speed: float = PLAYER_SPEED
    start_lives: int = START_LIVES
    max_lives: int = MAX_LIVES
    bullet_speed: float = BULLET_SPEED
    power_up_speed: float = POWER_UP_SPEED
    level_duration: int = LEVEL_DURATION
    no_hit_penalty: int = NO_HIT_PENALTY
    power_up_interval: int = POWER_UP_INTERVAL
    max_level: int = MAX_LEVEL

    def validate(self) -> "GameConfig":
        if self.width <= SPAWN_MARGIN or self.height <= 0:
            raise ConfigError(
                f"Playfield {self.width}x{self.height} is too small "
                f"(width must exceed {SPAWN_MARGIN})"
            )
        if self.tick_rate <= 0:
            raise ConfigError(f"tick_rate must be positive, got {self.tick_rate}")
        if not 0 < self.start_lives <= self.max_lives:
            raise ConfigError(
                f"start_lives must be in (0, {self.max_lives}], got {self.start_lives}"
            )
        if self.max_level < 1 or spawn_rate_for_level(self.max_level) <= 0:
            raise ConfigError(f"max_level must be in [1, 3], got {self.max_level}")
        for name in ("level_duration", "no_hit_penalty", "power_up_interval"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive")
        return self


def spawn_rate_for_level(level: int) -> int:
    """Ticks between enemy spawns at the given level (60, 35, 10)"""
    return BASE_SPAWN_RATE - (level - 1) * SPAWN_RATE_STEP
