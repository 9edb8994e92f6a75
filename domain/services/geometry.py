from __future__ import annotations

import math
from collections.abc import Sequence

from domain.models import Point


def distance(a: Point, b: Point) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def reflect_point(origin: Point, target: Point) -> Point:
    """Mirror ``target`` through ``origin``."""
    return Point(2 * origin.x - target.x, 2 * origin.y - target.y)


def _mean_point(points: Sequence[Point]) -> Point:
    count = len(points)
    return Point(
        sum(point.x for point in points) / count,
        sum(point.y for point in points) / count,
    )


def compute_polygon_centroid(points: Sequence[Point]) -> Point:
    if not points:
        return Point(0.0, 0.0)
    if len(points) < 3:
        return _mean_point(points)

    area = 0.0
    cx = 0.0
    cy = 0.0
    for index, p0 in enumerate(points):
        p1 = points[(index + 1) % len(points)]
        cross = p0.x * p1.y - p1.x * p0.y
        area += cross
        cx += (p0.x + p1.x) * cross
        cy += (p0.y + p1.y) * cross

    # Collinear or self-cancelling outlines have no signed area.
    if area == 0:
        return _mean_point(points)

    area *= 0.5
    return Point(cx / (6 * area), cy / (6 * area))
