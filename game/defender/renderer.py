"""
Arcade renderer for Space Defender.

Geometry comes from ``shapes``; this module only issues arcade's
immediate-mode draw calls. The renderer only ever sees a ``Snapshot``.
"""

from __future__ import annotations

import math

import arcade

from .engine import GameMode, Snapshot
from .raster import filled_circle
from .shapes import (
    Shape,
    STAR_C,
    HUD_C,
    LIFE_ICON_C,
    FONT_SIZE,
    star_positions,
    ship_shapes,
    bullet_shape,
    enemy_shapes,
    power_up_shapes,
    hud_lines,
    life_icon_centers,
    menu_lines,
    game_over_lines,
)


def draw_shape(shape: Shape, point_size: float = 1.0):
    if shape.style == "polygon":
        arcade.draw_polygon_filled(shape.vertices, shape.color)
    else:
        arcade.draw_points(shape.vertices, shape.color, point_size)


def draw_snapshot(snap: Snapshot, elapsed: float = 0.0):
    """Draw one frame; ``elapsed`` (seconds) only drives the animations"""
    arcade.draw_points(star_positions(snap.star_offset, snap.width, snap.height), STAR_C, 2)

    if snap.mode is GameMode.MENU:
        for text, x, y, color in menu_lines(snap.width, snap.height):
            arcade.draw_text(text, x, y, color, FONT_SIZE)
        return

    if snap.mode is GameMode.GAME_OVER:
        for text, x, y, color in game_over_lines(snap.player.score, snap.width, snap.height):
            arcade.draw_text(text, x, y, color, FONT_SIZE)
        return

    wobble = math.sin(elapsed * 5.0) * 2.0
    for shape in ship_shapes(snap.player, wobble):
        draw_shape(shape, point_size=2)

    for b in snap.bullets:
        draw_shape(bullet_shape(b.x, b.y, snap.level))

    spin = elapsed * 100.0
    for e in snap.enemies:
        for shape in enemy_shapes(e, spin):
            draw_shape(shape, point_size=2)

    pulse = 1.0 + 0.2 * math.sin(elapsed * 10.0)
    for p in snap.power_ups:
        for shape in power_up_shapes(p, pulse):
            draw_shape(shape)

    for text, x, y in hud_lines(snap):
        arcade.draw_text(text, x, y, HUD_C, FONT_SIZE)
    for cx, cy in life_icon_centers(snap.player.lives, snap.height):
        arcade.draw_polygon_filled(filled_circle(cx, cy, 8)[1:], LIFE_ICON_C)
