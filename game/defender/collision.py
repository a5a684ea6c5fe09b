"""
Movement and collision passes.

Every entity is treated as a circle: a hit is a center distance strictly
below a fixed threshold. The engine runs the passes in this order each tick,
which settles priority when several hits are possible at once:

    move_bullets -> move_enemies (vs player) -> bullets_vs_enemies
                 -> move_power_ups (vs player)

Nothing is removed here; passes only clear ``active`` flags and skip
entities that are already inactive. Once the player is out of lives, hits
still consume entities but award no score or lives.
"""

from __future__ import annotations

from typing import Callable

from .config import (
    GameConfig,
    ENEMY_HIT_MARGIN,
    BULLET_HIT_RADIUS,
    POWER_UP_HIT_MARGIN,
    ENEMY_EXIT_Y,
    POWER_UP_EXIT_Y,
    KILL_SCORE,
    POWER_UP_SCORE,
)
from .entities import Player
from .levels import Timers
from .store import EntityStore
from .utils import within


def move_bullets(store: EntityStore, height: float) -> None:
    for b in store.bullets:
        if not b.active:
            continue
        b.y += b.speed
        if b.y > height:
            b.active = False


def move_enemies(
    store: EntityStore,
    player: Player,
    lose_life: Callable[[], None],
) -> int:
    """Move enemies down and ram the player; returns the number of rams"""
    rams = 0
    radius = player.size + ENEMY_HIT_MARGIN
    for e in store.enemies:
        if not e.active:
            continue
        e.y -= e.speed
        if e.y < ENEMY_EXIT_Y:
            e.active = False

        if within(e.x, e.y, player.x, player.y, radius):
            e.active = False
            rams += 1
            lose_life()
    return rams


def bullets_vs_enemies(store: EntityStore, player: Player, timers: Timers) -> int:
    """Each bullet takes out at most one enemy; returns the number of kills"""
    kills = 0
    for b in store.bullets:
        if not b.active:
            continue
        for e in store.enemies:
            if not e.active:
                continue
            if within(b.x, b.y, e.x, e.y, BULLET_HIT_RADIUS):
                b.active = False
                e.active = False
                if player.lives > 0:
                    player.score += KILL_SCORE
                    timers.last_hit = 0
                    kills += 1
                break
    return kills


def move_power_ups(store: EntityStore, player: Player, config: GameConfig) -> int:
    """Move power-ups down and collect them; returns the number collected"""
    collected = 0
    radius = player.size + POWER_UP_HIT_MARGIN
    for p in store.power_ups:
        if not p.active:
            continue
        p.y -= p.speed
        if p.y < POWER_UP_EXIT_Y:
            p.active = False

        if within(p.x, p.y, player.x, player.y, radius):
            p.active = False
            if player.lives > 0:
                player.lives = min(player.lives + 1, config.max_lives)
                player.score += POWER_UP_SCORE
                collected += 1
    return collected
