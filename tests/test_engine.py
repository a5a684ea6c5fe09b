"""
Scenario tests for the Space Defender engine: spawning, collisions,
penalties, leveling, mode transitions and input handling.
"""

import random

import pytest

from conftest import ScriptedRandom, run_ticks

from game.defender.config import ConfigError
from game.defender.engine import DefenderEngine, GameMode, InputAction
from game.defender.entities import Bullet, Enemy, EnemyKind, PowerUp


# ----------------------------
# Modes and reset
# ----------------------------

def test_starts_in_menu_and_update_is_noop():
    eng = DefenderEngine(rng=ScriptedRandom())
    assert eng.mode is GameMode.MENU
    run_ticks(eng, 500)
    assert eng.timers.level == 0
    assert len(eng.store) == 0
    assert eng.player.lives == 3


@pytest.mark.parametrize("key", [InputAction.FIRE, InputAction.CONFIRM])
def test_menu_to_playing(key):
    eng = DefenderEngine(rng=ScriptedRandom())
    eng.on_key_down(key)
    assert eng.mode is GameMode.PLAYING
    # The key that started the game does not also shoot
    assert eng.store.bullets == []


def test_reset_round_trip_from_game_over(engine):
    run_ticks(engine, 700)
    engine.store.bullets.append(Bullet(x=1, y=1))
    engine.player.score = 999
    engine.player.x = 10
    engine.levels.level = 3
    engine.levels.spawn_rate = 10
    engine.lose_life()
    engine.lose_life()
    engine.lose_life()
    assert engine.mode is GameMode.GAME_OVER

    engine.on_key_down(InputAction.FIRE)

    assert engine.mode is GameMode.PLAYING
    p = engine.player
    assert (p.lives, p.score, p.x, p.y) == (3, 0, 400.0, 50.0)
    assert engine.store.bullets == [] and engine.store.enemies == [] and engine.store.power_ups == []
    assert (engine.level, engine.spawn_rate) == (1, 60)
    t = engine.timers
    assert (t.level, t.enemy_spawn, t.power_up, t.last_hit) == (0, 0, 0, 0)


def test_fire_during_game_over_does_nothing_else(engine):
    for _ in range(3):
        engine.lose_life()
    engine.on_key_down(InputAction.FIRE)
    engine.on_key_up(InputAction.FIRE)
    engine.on_key_down(InputAction.FIRE)
    # Second press lands in the new session as a shot
    assert engine.mode is GameMode.PLAYING
    assert len(engine.store.bullets) == 1
    assert engine.player.lives == 3


def test_init_returns_to_menu(engine):
    run_ticks(engine, 100)
    engine.on_key_down(InputAction.LEFT)
    engine.init(seed=3)
    assert engine.mode is GameMode.MENU
    assert engine.held == set()
    assert engine.timers.level == 0


def test_quit_sets_flag_in_any_mode(engine):
    engine.on_key_down(InputAction.QUIT)
    assert engine.quit_requested


def test_bad_config_rejected():
    with pytest.raises(ConfigError):
        DefenderEngine(width=10)


# ----------------------------
# Spawning
# ----------------------------

def test_first_enemy_after_61_ticks(engine):
    run_ticks(engine, 60)
    assert engine.store.enemies == []

    engine.update()

    assert len(engine.store.enemies) == 1
    assert engine.timers.enemy_spawn == 0


def test_power_up_after_301_ticks(engine):
    run_ticks(engine, 301)
    assert len(engine.store.power_ups) == 1
    assert engine.timers.power_up == 0


# ----------------------------
# Collisions
# ----------------------------

def test_bullet_hits_enemy(engine):
    bullet = Bullet(x=100, y=200)
    enemy = Enemy(x=100, y=205, speed=3.0)
    engine.store.bullets.append(bullet)
    engine.store.enemies.append(enemy)
    engine.timers.last_hit = 120

    engine.update()

    assert not bullet.active and not enemy.active
    assert engine.player.score == 10
    assert engine.timers.last_hit == 0
    assert engine.store.bullets == [] and engine.store.enemies == []


def test_bullet_consumed_by_one_enemy(engine):
    bullet = Bullet(x=100, y=200)
    first = Enemy(x=100, y=212, speed=0.0)
    second = Enemy(x=104, y=212, speed=0.0)
    engine.store.bullets.append(bullet)
    engine.store.enemies.extend([first, second])

    engine.update()

    assert not first.active
    assert second.active
    assert engine.player.score == 10
    assert engine.store.enemies == [second]


def test_enemy_rams_player(engine):
    enemy = Enemy(x=400, y=80, speed=2.0, kind=EnemyKind.SQUARE)
    engine.store.enemies.append(enemy)

    engine.update()

    assert not enemy.active
    assert engine.player.lives == 2
    assert engine.stats.rams == 1


def test_enemy_that_rammed_is_not_shot(engine):
    # Inside both the player radius and the bullet radius
    enemy = Enemy(x=400, y=80, speed=0.0)
    bullet = Bullet(x=400, y=70, speed=5.0)
    engine.store.enemies.append(enemy)
    engine.store.bullets.append(bullet)

    engine.update()

    assert engine.player.lives == 2
    assert engine.player.score == 0
    assert bullet.active


def test_last_life_lost_to_ram_ends_game(engine):
    engine.player.lives = 1
    engine.store.enemies.append(Enemy(x=400, y=60, speed=0.0))

    engine.update()

    assert engine.player.lives == 0
    assert engine.mode is GameMode.GAME_OVER
    run_ticks(engine, 10)
    assert engine.stats.ticks == 1


def test_multiple_rams_never_go_below_zero(engine):
    engine.player.lives = 1
    for dx in (-5, 0, 5):
        engine.store.enemies.append(Enemy(x=400 + dx, y=60, speed=0.0))

    engine.update()

    assert engine.player.lives == 0
    assert engine.stats.lives_lost == 1


def test_power_up_in_final_tick_does_not_revive(engine):
    engine.player.lives = 1
    engine.store.enemies.append(Enemy(x=400, y=60, speed=0.0))
    pu = PowerUp(x=400, y=70)
    engine.store.power_ups.append(pu)

    engine.update()

    assert engine.mode is GameMode.GAME_OVER
    assert engine.player.lives == 0
    assert engine.player.score == 0
    assert not pu.active
    assert engine.stats.power_ups == 0


def test_kill_in_final_tick_scores_nothing(engine):
    engine.player.lives = 1
    engine.store.enemies.append(Enemy(x=400, y=60, speed=0.0))
    target = Enemy(x=100, y=300, speed=0.0)
    bullet = Bullet(x=100, y=290, speed=5.0)
    engine.store.enemies.append(target)
    engine.store.bullets.append(bullet)

    engine.update()

    assert engine.mode is GameMode.GAME_OVER
    assert not target.active
    assert not bullet.active
    assert engine.player.score == 0
    assert engine.stats.kills == 0


def test_power_up_grants_life_and_score(engine):
    pu = PowerUp(x=400, y=70)
    engine.store.power_ups.append(pu)
    engine.timers.last_hit = 100

    engine.update()

    assert not pu.active
    assert engine.player.lives == 4
    assert engine.player.score == 20
    assert engine.timers.last_hit == 101


def test_power_up_lives_capped(engine):
    engine.player.lives = 5
    engine.store.power_ups.append(PowerUp(x=400, y=70))
    engine.update()
    assert engine.player.lives == 5
    assert engine.player.score == 20


def test_entities_leave_playfield(engine):
    b = Bullet(x=10, y=595)
    e = Enemy(x=10, y=-28, speed=3.0)
    p = PowerUp(x=10, y=-19)
    engine.store.bullets.append(b)
    engine.store.enemies.append(e)
    engine.store.power_ups.append(p)

    engine.update()

    assert not (b.active or e.active or p.active)
    assert len(engine.store) == 0


# ----------------------------
# Timers: penalty and levels
# ----------------------------

def test_no_hit_penalty_drains_lives(engine):
    run_ticks(engine, 299)
    assert engine.player.lives == 3

    engine.update()
    assert engine.player.lives == 2
    assert engine.timers.last_hit == 0

    run_ticks(engine, 300)
    assert engine.player.lives == 1
    assert engine.mode is GameMode.PLAYING

    run_ticks(engine, 300)
    assert engine.player.lives == 0
    assert engine.mode is GameMode.GAME_OVER


def test_levels_advance_every_900_ticks(scripted_rng):
    eng = DefenderEngine(rng=scripted_rng, no_hit_penalty=10**9)
    eng.start()

    run_ticks(eng, 899)
    assert eng.level == 1

    eng.update()
    assert (eng.level, eng.spawn_rate, eng.timers.level) == (2, 35, 0)

    run_ticks(eng, 900)
    assert (eng.level, eng.spawn_rate) == (3, 10)

    run_ticks(eng, 900)
    assert (eng.level, eng.spawn_rate, eng.timers.level) == (3, 10, 0)
    assert eng.mode is GameMode.PLAYING


def test_enemy_speed_scales_with_level(scripted_rng):
    eng = DefenderEngine(rng=scripted_rng, no_hit_penalty=10**9)
    eng.start()
    run_ticks(eng, 1800 + 11)
    assert eng.level == 3
    assert eng.store.enemies[-1].speed == pytest.approx(3.5)


# ----------------------------
# Input
# ----------------------------

def test_fire_is_edge_triggered(engine):
    engine.on_key_down(InputAction.FIRE)
    engine.on_key_down(InputAction.FIRE)  # key repeat
    assert len(engine.store.bullets) == 1
    assert engine.store.bullets[0].x == 400.0
    assert engine.store.bullets[0].y == 70.0

    engine.on_key_up(InputAction.FIRE)
    engine.on_key_down(InputAction.FIRE)
    assert len(engine.store.bullets) == 2
    assert engine.stats.shots == 2


def test_held_keys_move_player(engine):
    engine.on_key_down(InputAction.RIGHT)
    engine.on_key_down(InputAction.UP)
    engine.update()
    assert (engine.player.x, engine.player.y) == (405.0, 55.0)

    engine.on_key_up(InputAction.RIGHT)
    engine.update()
    assert (engine.player.x, engine.player.y) == (405.0, 60.0)


def test_player_clamped_to_playfield(engine):
    engine.on_key_down(InputAction.LEFT)
    engine.on_key_down(InputAction.DOWN)
    run_ticks(engine, 200)
    assert (engine.player.x, engine.player.y) == (20.0, 20.0)


def test_snapshot_is_a_copy(engine):
    engine.store.enemies.append(Enemy(x=50, y=500, speed=1.0))
    snap = engine.snapshot()

    snap.enemies[0].y = -999
    snap.player.lives = 0

    assert engine.store.enemies[0].y == 500
    assert engine.player.lives == 3
    assert snap.mode is GameMode.PLAYING


def test_star_field_scrolls_only_while_playing():
    eng = DefenderEngine(rng=ScriptedRandom())
    eng.update()
    assert eng.star_offset == 0.0
    eng.start()
    run_ticks(eng, 4)
    assert eng.star_offset == 2.0


# ----------------------------
# Invariants
# ----------------------------

def test_invariants_hold_over_random_play():
    eng = DefenderEngine(seed=1234)
    driver = random.Random(99)
    actions = list(InputAction)
    actions.remove(InputAction.QUIT)

    last_score = 0
    for _ in range(6000):
        action = driver.choice(actions)
        if driver.random() < 0.5:
            eng.on_key_down(action)
        else:
            eng.on_key_up(action)

        was_playing = eng.mode is GameMode.PLAYING
        if was_playing:
            last_score = eng.player.score
        eng.update()

        assert 0 <= eng.player.lives <= 5
        assert eng.player.score >= 0
        assert 1 <= eng.level <= 3
        if was_playing:
            assert eng.player.score >= last_score
        if eng.mode is GameMode.GAME_OVER:
            assert eng.player.lives == 0
        assert all(b.active for b in eng.store.bullets)
        assert all(e.active for e in eng.store.enemies)
