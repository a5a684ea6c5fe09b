"""
Rasterization primitives
------------------------
Pure functions that turn lines and circles into point sequences. The renderer
hands the results to arcade as point lists / triangle fans, so nothing here
touches a window or any shared state.

- line:           Bresenham, integer error term, all 8 octants
- dda_line:       floating-point DDA (used for the diamond enemy outline)
- circle_outline: midpoint circle, 8-way symmetric
- filled_circle:  triangle-fan vertices, 1 degree resolution
"""

from __future__ import annotations

import math
from typing import List, Tuple

Point = Tuple[int, int]
Vertex = Tuple[float, float]

FAN_SEGMENTS = 360


def line(x1: int, y1: int, x2: int, y2: int) -> List[Point]:
    """
    Bresenham line between two integer endpoints.

    Emits max(|dx|, |dy|) + 1 points, both endpoints included, each step
    moving at most one unit along each axis.
    """
    x1, y1, x2, y2 = int(x1), int(y1), int(x2), int(y2)
    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    points: List[Point] = []
    while True:
        points.append((x1, y1))
        if x1 == x2 and y1 == y2:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x1 += sx
        if e2 < dx:
            err += dx
            y1 += sy
    return points


def dda_line(x1: float, y1: float, x2: float, y2: float) -> List[Point]:
    """Digital differential analyzer line, rounding each sample"""
    dx = x2 - x1
    dy = y2 - y1
    steps = int(max(abs(dx), abs(dy)))
    if steps == 0:
        return [(round(x1), round(y1))]

    x_inc = dx / steps
    y_inc = dy / steps
    x, y = float(x1), float(y1)
    points: List[Point] = []
    for _ in range(steps + 1):
        points.append((round(x), round(y)))
        x += x_inc
        y += y_inc
    return points


def _octants(cx: int, cy: int, x: int, y: int) -> List[Point]:
    return [
        (cx + x, cy + y),
        (cx - x, cy + y),
        (cx + x, cy - y),
        (cx - x, cy - y),
        (cx + y, cy + x),
        (cx - y, cy + x),
        (cx + y, cy - x),
        (cx - y, cy - x),
    ]


def circle_outline(cx: float, cy: float, r: float) -> List[Point]:
    """
    Midpoint circle outline.

    Walks one octant with the integer decision term d = 1 - r and reflects
    every step into the other seven. Radii below 1 collapse to the center.
    """
    cx, cy = int(round(cx)), int(round(cy))
    r = int(r)
    if r < 1:
        return [(cx, cy)]

    x = 0
    y = r
    d = 1 - r
    points: List[Point] = []
    while x <= y:
        points.extend(_octants(cx, cy, x, y))
        x += 1
        if d < 0:
            d += 2 * x + 1
        else:
            y -= 1
            d += 2 * (x - y) + 1
    return points


def filled_circle(cx: float, cy: float, r: float) -> List[Vertex]:
    """Triangle-fan vertices: center, then 361 perimeter samples (0..360 deg)"""
    r = max(0.0, float(r))
    verts: List[Vertex] = [(float(cx), float(cy))]
    for i in range(FAN_SEGMENTS + 1):
        angle = math.radians(i % FAN_SEGMENTS)
        verts.append((cx + r * math.cos(angle), cy + r * math.sin(angle)))
    return verts
