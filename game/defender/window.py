"""
Arcade window that drives a DefenderEngine at a fixed 60 Hz tick.

Run:
    space-defender
    python -m game.defender.window --seed 42
"""

from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import arcade

from .engine import DefenderEngine, InputAction
from .renderer import draw_snapshot
from .shapes import BG

logger = logging.getLogger(__name__)

# Catch-up bound after a stall (e.g. window drag)
MAX_TICKS_PER_FRAME = 5

KEY_MAP: Dict[int, InputAction] = {
    arcade.key.LEFT: InputAction.LEFT,
    arcade.key.A: InputAction.LEFT,
    arcade.key.RIGHT: InputAction.RIGHT,
    arcade.key.D: InputAction.RIGHT,
    arcade.key.UP: InputAction.UP,
    arcade.key.W: InputAction.UP,
    arcade.key.DOWN: InputAction.DOWN,
    arcade.key.S: InputAction.DOWN,
    arcade.key.SPACE: InputAction.FIRE,
    arcade.key.RETURN: InputAction.CONFIRM,
    arcade.key.ENTER: InputAction.CONFIRM,
    arcade.key.ESCAPE: InputAction.QUIT,
}


class DefenderWindow(arcade.Window):
    """Arcade window for playing (or watching) Space Defender"""

    def __init__(self, engine: DefenderEngine, title: str = "Space Defender - Arcade"):
        super().__init__(engine.config.width, engine.config.height, title)
        self.engine = engine
        self.tick_dt = 1.0 / engine.config.tick_rate
        self._accumulator = 0.0
        self.elapsed = 0.0
        self.background_color = BG

    def on_key_press(self, symbol: int, modifiers: int):
        action = KEY_MAP.get(symbol)
        if action is None:
            return
        self.engine.on_key_down(action)
        if self.engine.quit_requested:
            self.close()

    def on_key_release(self, symbol: int, modifiers: int):
        action = KEY_MAP.get(symbol)
        if action is not None:
            self.engine.on_key_up(action)

    def on_update(self, delta_time: float):
        self.elapsed += delta_time
        self._accumulator += delta_time

        ticks = 0
        while self._accumulator >= self.tick_dt and ticks < MAX_TICKS_PER_FRAME:
            self.engine.update()
            self._accumulator -= self.tick_dt
            ticks += 1
        if ticks == MAX_TICKS_PER_FRAME:
            self._accumulator = 0.0

    def on_draw(self):
        """Draw the current game state"""
        self.clear()
        draw_snapshot(self.engine.snapshot(), self.elapsed)


def main(argv: Optional[list] = None):
    parser = argparse.ArgumentParser(description="Play Space Defender")
    parser.add_argument("--seed", type=int, default=None, help="Seed for spawn randomness")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    engine = DefenderEngine(seed=args.seed)
    window = DefenderWindow(engine)
    window.set_update_rate(window.tick_dt)
    logger.info("Window %dx%d, %d Hz", window.width, window.height, engine.config.tick_rate)
    arcade.run()


if __name__ == "__main__":
    main()
