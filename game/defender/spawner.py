"""
Timer-driven enemy and power-up generators
"""

from __future__ import annotations

import random
from typing import Optional

from .config import GameConfig
from .entities import Enemy, PowerUp
from .levels import LevelController, Timers
from .store import EntityStore


class Spawner:
    """Fires a spawn when its counter passes the threshold, then rewinds it"""

    def __init__(self, config: GameConfig, store: EntityStore, rng: random.Random):
        self.config = config
        self.store = store
        self.rng = rng

    def spawn_enemy_if_due(self, timers: Timers, levels: LevelController) -> Optional[Enemy]:
        if timers.enemy_spawn <= levels.spawn_rate:
            return None
        timers.enemy_spawn = 0
        return self.store.spawn_enemy(self.rng, levels.level)

    def spawn_power_up_if_due(self, timers: Timers) -> Optional[PowerUp]:
        if timers.power_up <= self.config.power_up_interval:
            return None
        timers.power_up = 0
        return self.store.spawn_power_up(self.rng)
