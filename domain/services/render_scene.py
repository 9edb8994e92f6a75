from __future__ import annotations

from dataclasses import dataclass, field

from domain.models import ArrowOffsets, EditorState, Line, ObjectShape, Point, Vertex
from domain.services.arrow_markers import build_arrow_transform, compute_arrow_offsets
from domain.services.build_path import build_arrow_tangents, build_path, format_number
from domain.services.geometry import compute_polygon_centroid


@dataclass(frozen=True)
class RenderLine:
    line: Line
    path: str
    offsets: ArrowOffsets
    start_transform: str | None = None
    end_transform: str | None = None

    @property
    def marker_start(self) -> bool:
        return self.line.arrow_type.has_start

    @property
    def marker_end(self) -> bool:
        return self.line.arrow_type.has_end


@dataclass(frozen=True)
class RenderObject:
    shape: ObjectShape
    path: str
    centroid: Point


@dataclass(frozen=True)
class Scene:
    lines: list[RenderLine] = field(default_factory=list)
    objects: list[RenderObject] = field(default_factory=list)
    vertices: list[Vertex] = field(default_factory=list)
    snap_target: Vertex | None = None
    active_line_points: list[Point] = field(default_factory=list)


def polygon_path(points: list[Point]) -> str:
    joined = " L ".join(f"{format_number(point.x)} {format_number(point.y)}" for point in points)
    return f"M {joined} Z"


def build_render_line(line: Line, state: EditorState) -> RenderLine:
    offsets = compute_arrow_offsets(line, state.lines)
    tangents = build_arrow_tangents(line, state.vertices)
    return RenderLine(
        line=line,
        path=build_path(line, state.vertices),
        offsets=offsets,
        start_transform=build_arrow_transform(tangents.start, offsets.start_offset),
        end_transform=build_arrow_transform(tangents.end, offsets.end_offset),
    )


def build_render_object(shape: ObjectShape, state: EditorState) -> RenderObject | None:
    points = [
        state.vertices[vertex_id].point
        for vertex_id in shape.vertex_ids
        if vertex_id in state.vertices
    ]
    if len(points) < 3:
        return None
    return RenderObject(
        shape=shape,
        path=polygon_path(points),
        centroid=compute_polygon_centroid(points),
    )


def build_scene(state: EditorState) -> Scene:
    objects = [
        rendered
        for rendered in (build_render_object(shape, state) for shape in state.objects.values())
        if rendered is not None
    ]
    active_points: list[Point] = []
    active_line = state.lines.get(state.active_line_id) if state.active_line_id else None
    if active_line is not None:
        active_points = [
            state.vertices[vertex_id].point
            for vertex_id in active_line.vertex_ids
            if vertex_id in state.vertices
        ]
    return Scene(
        lines=[build_render_line(line, state) for line in state.lines.values()],
        objects=objects,
        vertices=list(state.vertices.values()),
        snap_target=state.vertices.get(state.snap_target_id) if state.snap_target_id else None,
        active_line_points=active_points,
    )
