"""
DefenderEngine - fixed-timestep simulation for Space Defender
-------------------------------------------------------------
- One engine object owns the whole session: player, entity store, timers,
  level state, held keys and the game mode
- ``update()`` advances exactly one tick (1/60 s); it only does work while
  the mode is PLAYING
- Input arrives as discrete key-down / key-up events over ``InputAction``
- Renderers get a ``Snapshot`` copy and never touch live state

Quick test:
    python -m game.defender.window
"""

from __future__ import annotations

import dataclasses
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Set, Tuple

from .config import GameConfig, PLAYER_START_Y, STAR_SCROLL
from .entities import Player, Bullet, Enemy, PowerUp
from .levels import LevelController, Timers
from .spawner import Spawner
from .store import EntityStore
from .utils import clamp, make_rng
from . import collision

logger = logging.getLogger(__name__)


class GameMode(Enum):
    MENU = "menu"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class InputAction(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    FIRE = "fire"
    CONFIRM = "confirm"
    QUIT = "quit"


DIRECTIONS = frozenset({InputAction.LEFT, InputAction.RIGHT, InputAction.UP, InputAction.DOWN})


@dataclass
class SessionStats:
    """Per-session event counters (read by the RL environment)"""
    ticks: int = 0
    shots: int = 0
    kills: int = 0
    rams: int = 0
    power_ups: int = 0
    lives_lost: int = 0


@dataclass(frozen=True)
class Snapshot:
    """Read-only copy of everything a renderer needs"""
    mode: GameMode
    player: Player
    bullets: Tuple[Bullet, ...]
    enemies: Tuple[Enemy, ...]
    power_ups: Tuple[PowerUp, ...]
    level: int
    spawn_rate: int
    timers: Timers
    star_offset: float
    width: int
    height: int
    stats: SessionStats = field(default_factory=SessionStats)


class DefenderEngine:
    """Space Defender session state and tick logic"""

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        config: Optional[GameConfig] = None,
        **overrides,
    ):
        if config is None:
            config = GameConfig(**overrides)
        elif overrides:
            config = dataclasses.replace(config, **overrides)
        self.config = config.validate()

        # A single generator feeds every spawn draw; tests may inject their own
        self.rng = rng if rng is not None else make_rng(seed)

        self.player = self._new_player()
        self.store = EntityStore(self.config)
        self.timers = Timers()
        self.levels = LevelController(self.config)
        self.spawner = Spawner(self.config, self.store, self.rng)
        self.stats = SessionStats()

        self.mode = GameMode.MENU
        self.held: Set[InputAction] = set()
        self.star_offset = 0.0
        self.quit_requested = False

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def init(self, seed: Optional[int] = None):
        """Back to Menu-start defaults; reseeds the generator if asked"""
        if seed is not None:
            self.rng.seed(seed)
        self._reset_session()
        self.mode = GameMode.MENU
        self.held.clear()
        self.star_offset = 0.0
        self.quit_requested = False

    def start(self):
        """Enter PLAYING with a fresh session (from MENU or GAME_OVER)"""
        self._reset_session()
        self.mode = GameMode.PLAYING
        logger.info("Game started")

    def _new_player(self) -> Player:
        return Player(
            x=self.config.width / 2,
            y=PLAYER_START_Y,
            size=self.config.player_size,
            speed=self.config.player_speed,
            lives=self.config.start_lives,
            score=0,
        )

    def _reset_session(self):
        self.player = self._new_player()
        self.store.clear()
        self.levels.reset()
        self.timers.reset()
        self.stats = SessionStats()

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_down(self, action: InputAction):
        """Press a key: start a session from Menu/GameOver, fire, or quit"""
        if action is InputAction.QUIT:
            logger.info("Quit requested")
            self.quit_requested = True
            return

        if action in (InputAction.FIRE, InputAction.CONFIRM):
            if self.mode in (GameMode.MENU, GameMode.GAME_OVER):
                self.start()
            elif action is InputAction.FIRE and action not in self.held:
                self._fire()

        self.held.add(action)

    def on_key_up(self, action: InputAction):
        """Release a held key"""
        self.held.discard(action)

    def _fire(self):
        p = self.player
        self.store.spawn_bullet(p.x, p.y + p.size)
        self.stats.shots += 1

    # ----------------------------
    # Tick
    # ----------------------------

    def update(self):
        """Advance one tick; a no-op unless PLAYING"""
        if self.mode is not GameMode.PLAYING:
            return

        self.star_offset += STAR_SCROLL
        if self.star_offset > self.config.height:
            self.star_offset = 0.0

        self.timers.tick()
        self.stats.ticks += 1

        self.levels.check_level(self.timers)
        self.levels.check_penalty(self.timers, self.player, self.lose_life)

        self._move_player()
        collision.move_bullets(self.store, self.config.height)

        self.spawner.spawn_enemy_if_due(self.timers, self.levels)
        self.stats.rams += collision.move_enemies(self.store, self.player, self.lose_life)
        self.stats.kills += collision.bullets_vs_enemies(self.store, self.player, self.timers)

        self.spawner.spawn_power_up_if_due(self.timers)
        self.stats.power_ups += collision.move_power_ups(self.store, self.player, self.config)

        self.store.compact()

    def _move_player(self):
        p = self.player
        w, h = self.config.width, self.config.height
        if InputAction.LEFT in self.held:
            p.x = clamp(p.x - p.speed, p.size, w - p.size)
        if InputAction.RIGHT in self.held:
            p.x = clamp(p.x + p.speed, p.size, w - p.size)
        if InputAction.UP in self.held:
            p.y = clamp(p.y + p.speed, p.size, h - p.size)
        if InputAction.DOWN in self.held:
            p.y = clamp(p.y - p.speed, p.size, h - p.size)

    def lose_life(self):
        """Single path for every life loss (rams and the no-hit penalty)"""
        if self.player.lives > 0:
            self.player.lives -= 1
            self.stats.lives_lost += 1
            logger.debug("Life lost, %d left", self.player.lives)

        if self.player.lives <= 0 and self.mode is GameMode.PLAYING:
            self.mode = GameMode.GAME_OVER
            logger.info(
                "Game over - score %d, level %d", self.player.score, self.levels.level
            )

    # ----------------------------
    # Read access
    # ----------------------------

    def snapshot(self) -> Snapshot:
        return Snapshot(
            mode=self.mode,
            player=dataclasses.replace(self.player),
            bullets=tuple(dataclasses.replace(b) for b in self.store.bullets if b.active),
            enemies=tuple(dataclasses.replace(e) for e in self.store.enemies if e.active),
            power_ups=tuple(dataclasses.replace(p) for p in self.store.power_ups if p.active),
            level=self.levels.level,
            spawn_rate=self.levels.spawn_rate,
            timers=dataclasses.replace(self.timers),
            star_offset=self.star_offset,
            width=self.config.width,
            height=self.config.height,
            stats=dataclasses.replace(self.stats),
        )

    @property
    def level(self) -> int:
        return self.levels.level

    @property
    def spawn_rate(self) -> int:
        return self.levels.spawn_rate
