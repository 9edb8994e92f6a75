from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from decimal import Decimal

from domain.models import ArrowTangents, ConnectionType, Line, Point, Vertex
from domain.services.geometry import distance, reflect_point

CENTRIPETAL_ALPHA = 0.5


def format_number(value: float) -> str:
    """Render a coordinate the way browsers print numbers in path data.

    Integral values lose their ``.0``; positional notation is used from 1e-6
    up to 1e21 and exponents drop their zero padding outside that range.
    """
    value = float(value)
    if not math.isfinite(value):
        return repr(value)
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")
    mantissa, exponent = text.split("e")
    return f"{mantissa}e{int(exponent):+d}"


def _pair(point: Point) -> str:
    return f"{format_number(point.x)} {format_number(point.y)}"


def resolve_vertices(line: Line, vertices: Mapping[str, Vertex]) -> list[Vertex]:
    return [vertices[vertex_id] for vertex_id in line.vertex_ids if vertex_id in vertices]


def catmull_rom_to_bezier(p0: Point, p1: Point, p2: Point, p3: Point) -> tuple[Point, Point]:
    """Control points of the cubic Bezier matching the p1..p2 span of a centripetal spline."""
    d01 = distance(p0, p1) ** CENTRIPETAL_ALPHA
    d12 = distance(p1, p2) ** CENTRIPETAL_ALPHA
    d23 = distance(p2, p3) ** CENTRIPETAL_ALPHA

    b1 = 0.0 if d01 == 0 or d12 == 0 else d12 / (d01 + d12)
    b2 = 0.0 if d23 == 0 or d12 == 0 else d12 / (d12 + d23)

    c0 = Point(p1.x + (p2.x - p0.x) * b1, p1.y + (p2.y - p0.y) * b1)
    c1 = Point(p2.x + (p1.x - p3.x) * b2, p2.y + (p1.y - p3.y) * b2)

    ctrl1 = Point(p1.x + (c0.x - p1.x) / 3, p1.y + (c0.y - p1.y) / 3)
    ctrl2 = Point(p2.x - (p2.x - c1.x) / 3, p2.y - (p2.y - c1.y) / 3)
    return ctrl1, ctrl2


def build_segment_path(points: Sequence[Point]) -> str:
    if len(points) < 2:
        return ""
    if len(points) == 2:
        return f"M {_pair(points[0])} L {_pair(points[1])}"

    commands: list[str] = [f"M {_pair(points[0])}"]
    last = len(points) - 1
    for index in range(last):
        p1 = points[index]
        p2 = points[index + 1]
        p0 = reflect_point(p1, p2) if index == 0 else points[index - 1]
        p3 = points[index + 2] if index + 2 <= last else reflect_point(p2, p1)
        ctrl1, ctrl2 = catmull_rom_to_bezier(p0, p1, p2, p3)
        commands.append(f"C {_pair(ctrl1)} {_pair(ctrl2)} {_pair(p2)}")
    return " ".join(commands)


def split_runs(resolved: Sequence[Vertex]) -> list[list[Point]]:
    """Cut the outline at sharp corners; the corner vertex ends one run and opens the next."""
    runs: list[list[Point]] = []
    current: list[Point] = []
    last = len(resolved) - 1
    for index, vertex in enumerate(resolved):
        current.append(vertex.point)
        if vertex.connection_type is ConnectionType.SHARP and index != last:
            runs.append(current)
            current = [vertex.point]
    if current:
        runs.append(current)
    return runs


def build_path(line: Line, vertices: Mapping[str, Vertex]) -> str:
    resolved = resolve_vertices(line, vertices)
    if len(resolved) < 2:
        return ""
    segments = (build_segment_path(run) for run in split_runs(resolved))
    # A sharp first vertex yields a single-point run with no drawable segment.
    return " ".join(segment for segment in segments if segment)


def build_arrow_tangents(line: Line, vertices: Mapping[str, Vertex]) -> ArrowTangents:
    resolved = resolve_vertices(line, vertices)
    if len(resolved) < 2:
        return ArrowTangents(start=None, end=None)
    first, second = resolved[0], resolved[1]
    before_last, last = resolved[-2], resolved[-1]
    return ArrowTangents(
        start=Point(second.x - first.x, second.y - first.y),
        end=Point(last.x - before_last.x, last.y - before_last.y),
    )
