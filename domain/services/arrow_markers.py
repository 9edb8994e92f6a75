from __future__ import annotations

import math
from collections.abc import Mapping

from domain.models import ArrowOffsets, Line, Point
from domain.services.build_path import format_number

MARKER_BASE_REF_X = 9.0


def vertex_degree(vertex_id: str, lines: Mapping[str, Line]) -> int:
    return sum(1 for line in lines.values() if vertex_id in line.vertex_ids)


def line_index_at_vertex(vertex_id: str, line_id: str, lines: Mapping[str, Line]) -> int:
    related = sorted(line.id for line in lines.values() if vertex_id in line.vertex_ids)
    try:
        return related.index(line_id)
    except ValueError:
        return -1


def compute_arrow_offsets(line: Line, lines: Mapping[str, Line]) -> ArrowOffsets:
    """Spread arrowheads of lines that share an endpoint, centred around zero."""
    if len(line.vertex_ids) < 2:
        return ArrowOffsets(start_offset=0.0, end_offset=0.0)

    base_offset = line.stroke_width * 1.0

    def offset_at(vertex_id: str) -> float:
        degree = vertex_degree(vertex_id, lines)
        if degree <= 1:
            return 0.0
        index = line_index_at_vertex(vertex_id, line.id, lines)
        mid = (degree - 1) / 2
        return (index - mid) * base_offset

    return ArrowOffsets(
        start_offset=offset_at(line.start_id),
        end_offset=offset_at(line.end_id),
    )


def build_arrow_transform(tangent: Point | None, offset: float) -> str | None:
    if tangent is None:
        return None
    degrees = math.atan2(tangent.y, tangent.x) * 180 / math.pi
    return f"rotate({format_number(degrees)}) translate({format_number(offset)} 0)"


def marker_ref_x(offset: float, base: float = MARKER_BASE_REF_X) -> float:
    """Reference x of an arrowhead marker, shifted by the line's offset and clamped at zero."""
    return max(0.0, base + offset)
