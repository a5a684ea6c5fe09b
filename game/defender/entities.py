"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import IntEnum


class EnemyKind(IntEnum):
    """Enemy shape; collision treats every kind as a circle"""
    CIRCLE = 0
    TRIANGLE = 1
    SQUARE = 2
    DIAMOND = 3


@dataclass
class Player:
    """Player ship"""
    x: float
    y: float
    size: float = 20.0
    speed: float = 5.0  # units/tick
    lives: int = 3
    score: int = 0


@dataclass
class Bullet:
    """Player projectile, travels straight up"""
    x: float
    y: float
    speed: float = 10.0
    active: bool = True


@dataclass
class Enemy:
    """Descending enemy"""
    x: float
    y: float
    speed: float
    kind: EnemyKind = EnemyKind.CIRCLE
    active: bool = True


@dataclass
class PowerUp:
    """Extra-life pickup"""
    x: float
    y: float
    speed: float = 1.5
    active: bool = True
