"""Shared fixtures for the Space Defender tests"""

import random

import pytest

from game.defender.engine import DefenderEngine


class ScriptedRandom(random.Random):
    """
    Generator that replays fixed values for randrange (0 once exhausted).

    With the default script every enemy spawns at x=0 as a slow CIRCLE and
    every power-up at x=20, far from the player's start at x=400.
    """

    def __init__(self, values=()):
        self.values = list(values)
        super().__init__(0)

    def randrange(self, start, stop=None, step=1):
        if self.values:
            return self.values.pop(0)
        return 0


@pytest.fixture
def scripted_rng():
    return ScriptedRandom()


@pytest.fixture
def engine(scripted_rng):
    """Engine already in PLAYING with deterministic, out-of-the-way spawns"""
    eng = DefenderEngine(rng=scripted_rng)
    eng.start()
    return eng


def run_ticks(eng, n):
    for _ in range(n):
        eng.update()
