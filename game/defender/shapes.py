"""
Pure geometry for the Space Defender renderer.

Everything here turns snapshot data into vertex lists and text placements
without touching arcade, so it can be exercised headless.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

from .entities import Enemy, EnemyKind, Player, PowerUp
from .engine import Snapshot
from .raster import line, dda_line, circle_outline, filled_circle

Vertex = Tuple[float, float]
Color = Tuple[int, int, int]

# Colors
BG = (0, 0, 26)
STAR_C = (255, 255, 255)
SHIP_C = (0, 204, 255)
SHIP_ALERT_C = (255, 0, 0)
COCKPIT_C = (77, 230, 255)
WING_C = (0, 153, 204)
BULLET_C = (255, 255, 0)
BULLET_L3_C = (255, 0, 0)
POWER_UP_C = (0, 255, 0)
LIFE_ICON_C = (255, 0, 0)
HUD_C = (255, 255, 255)
TITLE_C = (0, 255, 255)
GAME_OVER_C = (255, 0, 0)

STAR_COUNT = 100
FONT_SIZE = 14


@dataclass
class Shape:
    """One drawable piece: 'polygon' (filled) or 'points'"""
    style: str
    vertices: List[Vertex]
    color: Color


def rotate(points: Sequence[Vertex], cx: float, cy: float, degrees: float) -> List[Vertex]:
    """Rotate points counter-clockwise about (cx, cy)"""
    if degrees == 0:
        return [(float(x), float(y)) for x, y in points]
    a = math.radians(degrees)
    c, s = math.cos(a), math.sin(a)
    out = []
    for x, y in points:
        dx, dy = x - cx, y - cy
        out.append((cx + dx * c - dy * s, cy + dx * s + dy * c))
    return out


def star_positions(offset: float, width: int, height: int) -> List[Vertex]:
    return [
        (float((i * 73) % width), math.fmod(i * 117 + offset, height))
        for i in range(STAR_COUNT)
    ]


def ship_shapes(player: Player, wobble: float = 0.0) -> List[Shape]:
    x, y, s = player.x, player.y, player.size
    body_c = SHIP_ALERT_C if player.lives == 1 else SHIP_C

    hull = [(x, y + s), (x - s / 2, y - s / 2), (x + s / 2, y - s / 2)]

    cockpit_r = s / 4
    cockpits: List[Vertex] = []
    for ox, oy in ((0, s / 3), (10, s / 3), (-10, s / 3), (0, -s)):
        cockpits.extend(circle_outline(x + ox, y + oy, cockpit_r))

    wings: List[Vertex] = []
    wings.extend(line(int(x - s / 2), int(y - s / 2), int(x - s), int(y - s)))
    wings.extend(line(int(x + s / 2), int(y - s / 2), int(x + s), int(y - s)))

    return [
        Shape("polygon", rotate(hull, x, y, wobble), body_c),
        Shape("points", rotate(cockpits, x, y, wobble), COCKPIT_C),
        Shape("points", rotate(wings, x, y, wobble), WING_C),
    ]


def bullet_shape(x: float, y: float, level: int) -> Shape:
    if level < 3:
        quad = [(x - 2, y - 5), (x + 2, y - 5), (x + 2, y + 5), (x - 2, y + 5)]
        return Shape("polygon", quad, BULLET_C)
    # Final level gets the pointed red round
    quad = [(x - 3, y), (x + 3, y - 1), (x, y + 7), (x - 3, y + 7)]
    return Shape("polygon", quad, BULLET_L3_C)


def _circle_enemy(e: Enemy, angle: float) -> List[Shape]:
    fan = filled_circle(e.x, e.y, 15)
    outline = circle_outline(e.x, e.y, 15)
    return [
        Shape("polygon", rotate(fan[1:], e.x, e.y, angle), (255, 0, 0)),
        Shape("points", rotate(outline, e.x, e.y, angle), (128, 0, 0)),
    ]


def _triangle_enemy(e: Enemy, angle: float) -> List[Shape]:
    tri = [(e.x, e.y - 20), (e.x - 15, e.y + 15), (e.x + 15, e.y + 15)]
    return [Shape("polygon", rotate(tri, e.x, e.y, angle), (255, 77, 0))]


def _square_enemy(e: Enemy, angle: float) -> List[Shape]:
    quad = [(e.x - 15, e.y - 15), (e.x + 15, e.y - 15), (e.x + 15, e.y + 15), (e.x - 15, e.y + 15)]
    return [Shape("polygon", rotate(quad, e.x, e.y, angle), (204, 0, 204))]


def _diamond_enemy(e: Enemy, angle: float) -> List[Shape]:
    size = 20.0
    corners = [(0, size), (size, 0), (0, -size), (-size, 0), (0, size)]
    pts: List[Vertex] = []
    for (ax, ay), (bx, by) in zip(corners, corners[1:]):
        pts.extend(dda_line(e.x + ax, e.y + ay, e.x + bx, e.y + by))
    return [Shape("points", rotate(pts, e.x, e.y, angle), (0, 255, 255))]


ENEMY_SHAPES: Dict[EnemyKind, Callable[[Enemy, float], List[Shape]]] = {
    EnemyKind.CIRCLE: _circle_enemy,
    EnemyKind.TRIANGLE: _triangle_enemy,
    EnemyKind.SQUARE: _square_enemy,
    EnemyKind.DIAMOND: _diamond_enemy,
}


def enemy_shapes(e: Enemy, angle: float = 0.0) -> List[Shape]:
    return ENEMY_SHAPES[e.kind](e, angle)


def power_up_shapes(p: PowerUp, scale: float = 1.0) -> List[Shape]:
    fan = filled_circle(p.x, p.y, 10 * scale)
    arm = 5 * scale
    cross: List[Vertex] = []
    cross.extend(line(int(p.x - arm), int(p.y), int(p.x + arm), int(p.y)))
    cross.extend(line(int(p.x), int(p.y - arm), int(p.x), int(p.y + arm)))
    return [
        Shape("polygon", fan[1:], POWER_UP_C),
        Shape("points", cross, HUD_C),
    ]


def hud_lines(snap: Snapshot) -> List[Tuple[str, float, float]]:
    w, h = snap.width, snap.height
    return [
        (f"Lives: {snap.player.lives}", 10, h - 30),
        (f"Level: {snap.level}", w / 2 - 40, h - 30),
        (f"Score: {snap.player.score}", w - 120, h - 30),
    ]


def life_icon_centers(lives: int, height: int) -> List[Vertex]:
    return [(20.0 + i * 25, height - 60.0) for i in range(lives)]


def menu_lines(width: int, height: int) -> List[Tuple[str, float, float, Color]]:
    cx, cy = width / 2, height / 2
    return [
        ("SPACE DEFENDER", cx - 100, cy + 50, TITLE_C),
        ("Press SPACE to Start", cx - 120, cy, HUD_C),
        ("Controls:", cx - 80, cy - 40, HUD_C),
        ("Arrows - Move", cx - 100, cy - 70, HUD_C),
        ("SPACE - Shoot", cx - 100, cy - 90, HUD_C),
        ("ESC - Quit", cx - 100, cy - 110, HUD_C),
        ("A/D/W/S - Also work", cx - 100, cy - 130, HUD_C),
    ]


def game_over_lines(score: int, width: int, height: int) -> List[Tuple[str, float, float, Color]]:
    cx, cy = width / 2, height / 2
    return [
        ("GAME OVER", cx - 80, cy + 50, GAME_OVER_C),
        (f"Final Score: {score}", cx - 80, cy, HUD_C),
        ("Press SPACE to Restart", cx - 120, cy - 40, HUD_C),
        ("Press ESC to Quit", cx - 80, cy - 70, HUD_C),
    ]


