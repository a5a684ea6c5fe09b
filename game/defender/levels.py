"""
Session timers, difficulty progression and the no-hit penalty
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .config import GameConfig, spawn_rate_for_level
from .entities import Player

logger = logging.getLogger(__name__)


@dataclass
class Timers:
    """Free-running tick counters, each reset by the event it guards"""
    level: int = 0
    enemy_spawn: int = 0
    power_up: int = 0
    last_hit: int = 0

    def tick(self):
        self.level += 1
        self.enemy_spawn += 1
        self.power_up += 1
        self.last_hit += 1

    def reset(self):
        self.level = 0
        self.enemy_spawn = 0
        self.power_up = 0
        self.last_hit = 0


class LevelController:
    """Advances the level every ``level_duration`` ticks and punishes idling"""

    def __init__(self, config: GameConfig):
        self.config = config
        self.level = 1
        self.spawn_rate = spawn_rate_for_level(1)

    def reset(self):
        self.level = 1
        self.spawn_rate = spawn_rate_for_level(1)

    def check_level(self, timers: Timers) -> bool:
        """Returns True when the level went up this tick"""
        if timers.level < self.config.level_duration:
            return False

        timers.level = 0
        if self.level >= self.config.max_level:
            return False

        self.level += 1
        self.spawn_rate = spawn_rate_for_level(self.level)
        logger.info("Level up: %d (enemy every %d ticks)", self.level, self.spawn_rate)
        return True

    def check_penalty(
        self,
        timers: Timers,
        player: Player,
        lose_life: Callable[[], None],
    ) -> bool:
        """Costs a life after ``no_hit_penalty`` ticks without a kill"""
        if timers.last_hit < self.config.no_hit_penalty or player.lives <= 0:
            return False

        logger.debug("No hit for %d ticks, penalty applied", timers.last_hit)
        timers.last_hit = 0
        lose_life()
        return True
