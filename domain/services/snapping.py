from __future__ import annotations

from collections.abc import Mapping

from domain.models import Point, Vertex
from domain.services.geometry import distance


def find_snap_target(
    vertices: Mapping[str, Vertex],
    dragging_id: str,
    x: float,
    y: float,
    threshold: float,
) -> str | None:
    pointer = Point(x, y)
    for vertex in vertices.values():
        if vertex.id == dragging_id:
            continue
        if distance(vertex.point, pointer) <= threshold:
            return vertex.id
    return None
