"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Optional

import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two centers"""
    return math.hypot(x1 - x2, y1 - y2)


def within(x1: float, y1: float, x2: float, y2: float, radius: float) -> bool:
    """Strict center-distance test used by every collision in the game"""
    return distance(x1, y1, x2, y2) < radius


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Create the engine's random generator (unseeded -> OS entropy)"""
    return random.Random(seed)


def seed_everything(py_seed: Optional[int]):
    """Seed all global random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
