"""
Entity store: the session's bullets, enemies and power-ups
"""

from __future__ import annotations

import logging
import random
from typing import List

from .config import GameConfig, SPAWN_MARGIN, ENEMY_JITTER, POWER_UP_MARGIN
from .entities import Bullet, Enemy, EnemyKind, PowerUp

logger = logging.getLogger(__name__)


class EntityStore:
    """
    Dense lists of entities with an ``active`` flag.

    Deactivated entities stay in place until ``compact()`` runs, so a tick's
    collision passes always see everything that was alive when it started.
    """

    def __init__(self, config: GameConfig):
        self.config = config
        self.bullets: List[Bullet] = []
        self.enemies: List[Enemy] = []
        self.power_ups: List[PowerUp] = []

    def __len__(self) -> int:
        return len(self.bullets) + len(self.enemies) + len(self.power_ups)

    def clear(self):
        self.bullets = []
        self.enemies = []
        self.power_ups = []

    # ----------------------------
    # Spawning
    # ----------------------------

    def spawn_bullet(self, origin_x: float, origin_y: float) -> Bullet:
        """Fire a bullet straight up from the given point"""
        bullet = Bullet(x=origin_x, y=origin_y, speed=self.config.bullet_speed)
        self.bullets.append(bullet)
        return bullet

    def spawn_enemy(self, rng: random.Random, level: int) -> Enemy:
        """Drop a random enemy in at the top edge, faster on higher levels"""
        # Two summed draws, skewed towards the middle of the range
        x = rng.randrange(self.config.width - SPAWN_MARGIN) + rng.randrange(ENEMY_JITTER)
        speed = 2.0 + rng.randrange(3) + level * 0.5
        kind = EnemyKind(rng.randrange(len(EnemyKind)))

        enemy = Enemy(x=float(x), y=float(self.config.height), speed=speed, kind=kind)
        self.enemies.append(enemy)
        logger.debug("Spawned %s enemy at x=%d speed=%.1f", kind.name, x, speed)
        return enemy

    def spawn_power_up(self, rng: random.Random) -> PowerUp:
        """Drop a power-up in at the top edge"""
        x = rng.randrange(self.config.width - SPAWN_MARGIN) + POWER_UP_MARGIN
        power_up = PowerUp(x=float(x), y=float(self.config.height), speed=self.config.power_up_speed)
        self.power_ups.append(power_up)
        logger.debug("Spawned power-up at x=%d", x)
        return power_up

    # ----------------------------
    # Cleanup
    # ----------------------------

    def compact(self):
        """Drop inactive entities, keeping survivors in order"""
        self.bullets = [b for b in self.bullets if b.active]
        self.enemies = [e for e in self.enemies if e.active]
        self.power_ups = [p for p in self.power_ups if p.active]
