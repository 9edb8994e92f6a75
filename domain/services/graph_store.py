from __future__ import annotations

import logging
from collections.abc import Sequence

from domain.errors import LineNotFoundError, VertexNotFoundError
from domain.models import (
    DEFAULT_OBJECT_FILL,
    ArrowType,
    ConnectionType,
    EditorState,
    Line,
    Vertex,
)
from domain.ports.ids import IdFactory
from domain.services.cycle_detection import compute_object_shapes

logger = logging.getLogger(__name__)

VERTEX_ID_PREFIX = "v"
LINE_ID_PREFIX = "l"


def collapse_adjacent_duplicates(vertex_ids: Sequence[str]) -> list[str]:
    """Drop ids equal to their predecessor; non-adjacent repeats (loops) survive."""
    collapsed: list[str] = []
    for vertex_id in vertex_ids:
        if not collapsed or collapsed[-1] != vertex_id:
            collapsed.append(vertex_id)
    return collapsed


def _with_vertex_ids(line: Line, vertex_ids: list[str]) -> Line:
    if vertex_ids == line.vertex_ids:
        return line
    return line.model_copy(update={"vertex_ids": vertex_ids})


class GraphStore:
    """Owns one :class:`EditorState` and applies edits to it.

    Every mutation publishes a new state built from fresh dictionaries. Objects
    are recomputed synchronously whenever the line set changes or a vertex is
    removed, so a snapshot never carries objects that disagree with its lines.

    Unknown ids leave the state untouched, so lines only ever reference live
    vertices. By default that is silent; with ``strict=True`` a
    :class:`VertexNotFoundError` or :class:`LineNotFoundError` is raised instead.
    """

    def __init__(
        self,
        id_factory: IdFactory,
        *,
        strict: bool = False,
        object_fill: str = DEFAULT_OBJECT_FILL,
        state: EditorState | None = None,
    ) -> None:
        self.id_factory = id_factory
        self.strict = strict
        self.object_fill = object_fill
        self._state = state or EditorState()
        if state is not None:
            self.refresh_objects()

    def snapshot(self) -> EditorState:
        return self._state

    def create_vertex(
        self,
        x: float,
        y: float,
        connection_type: ConnectionType = ConnectionType.SMOOTH,
    ) -> str:
        vertex_id = self.id_factory.new_id(VERTEX_ID_PREFIX)
        vertex = Vertex(id=vertex_id, x=x, y=y, connection_type=connection_type)
        self._publish(vertices={**self._state.vertices, vertex_id: vertex})
        return vertex_id

    def create_line(
        self,
        vertex_ids: Sequence[str],
        stroke_color: str,
        stroke_width: float,
    ) -> str | None:
        if not self._all_vertices_known(vertex_ids):
            return None
        line_id = self.id_factory.new_id(LINE_ID_PREFIX)
        line = Line(
            id=line_id,
            vertex_ids=list(vertex_ids),
            stroke_color=stroke_color,
            stroke_width=stroke_width,
            arrow_type=ArrowType.NONE,
        )
        self._publish(lines={**self._state.lines, line_id: line}, recompute=True)
        return line_id

    def add_vertex_to_line(self, line_id: str, vertex_id: str, index: int = -1) -> None:
        line = self._line_or_none(line_id)
        if line is None or self._vertex_or_none(vertex_id) is None:
            return
        vertex_ids = list(line.vertex_ids)
        if index < 0 or index >= len(vertex_ids):
            vertex_ids.append(vertex_id)
        else:
            vertex_ids.insert(index, vertex_id)
        updated = line.model_copy(update={"vertex_ids": vertex_ids})
        self._publish(lines={**self._state.lines, line_id: updated}, recompute=True)

    def move_vertex(self, vertex_id: str, x: float, y: float) -> None:
        vertex = self._vertex_or_none(vertex_id)
        if vertex is None:
            return
        moved = vertex.model_copy(update={"x": x, "y": y})
        self._publish(vertices={**self._state.vertices, vertex_id: moved})

    def set_connection_type(self, vertex_id: str, connection_type: ConnectionType) -> None:
        vertex = self._vertex_or_none(vertex_id)
        if vertex is None:
            return
        updated = vertex.model_copy(update={"connection_type": ConnectionType(connection_type)})
        self._publish(vertices={**self._state.vertices, vertex_id: updated})

    def set_arrow_type(self, line_id: str, arrow_type: ArrowType) -> None:
        line = self._line_or_none(line_id)
        if line is None:
            return
        updated = line.model_copy(update={"arrow_type": ArrowType(arrow_type)})
        self._publish(lines={**self._state.lines, line_id: updated})

    def merge_vertices(self, kept_id: str, removed_id: str) -> None:
        if kept_id == removed_id:
            return
        kept = self._vertex_or_none(kept_id)
        removed = self._vertex_or_none(removed_id)
        if kept is None or removed is None:
            return

        if ConnectionType.SHARP in (kept.connection_type, removed.connection_type):
            merged_type = ConnectionType.SHARP
        else:
            merged_type = ConnectionType.SMOOTH
        vertices = {
            vertex_id: vertex
            for vertex_id, vertex in self._state.vertices.items()
            if vertex_id != removed_id
        }
        vertices[kept_id] = kept.model_copy(update={"connection_type": merged_type})

        lines: dict[str, Line] = {}
        for line_id, line in self._state.lines.items():
            replaced = [
                kept_id if vertex_id == removed_id else vertex_id for vertex_id in line.vertex_ids
            ]
            collapsed = collapse_adjacent_duplicates(replaced)
            if len(collapsed) < 2:
                logger.debug(
                    "Line %s dropped after merging %s into %s", line_id, removed_id, kept_id
                )
                continue
            lines[line_id] = _with_vertex_ids(line, collapsed)

        self._publish(
            vertices=vertices,
            lines=lines,
            active_line_id=self._surviving_active_line(lines),
            dragging_vertex_id=self._unless_removed(self._state.dragging_vertex_id, removed_id),
            snap_target_id=None,
            recompute=True,
        )

    def remove_vertex(self, vertex_id: str) -> None:
        if self._vertex_or_none(vertex_id) is None:
            return
        vertices = {key: value for key, value in self._state.vertices.items() if key != vertex_id}
        lines: dict[str, Line] = {}
        for line_id, line in self._state.lines.items():
            remaining = [item for item in line.vertex_ids if item != vertex_id]
            if len(remaining) < 2:
                continue
            lines[line_id] = _with_vertex_ids(line, remaining)
        self._publish(
            vertices=vertices,
            lines=lines,
            active_line_id=self._surviving_active_line(lines),
            dragging_vertex_id=self._unless_removed(self._state.dragging_vertex_id, vertex_id),
            snap_target_id=self._unless_removed(self._state.snap_target_id, vertex_id),
            recompute=True,
        )

    def remove_line(self, line_id: str) -> None:
        if self._line_or_none(line_id) is None:
            return
        lines = {key: value for key, value in self._state.lines.items() if key != line_id}
        active_line_id = self._state.active_line_id
        if active_line_id == line_id:
            active_line_id = None
        self._publish(lines=lines, active_line_id=active_line_id, recompute=True)

    def set_active_line(self, line_id: str | None) -> None:
        self._publish(active_line_id=line_id)

    def set_dragging(self, vertex_id: str | None) -> None:
        self._publish(dragging_vertex_id=vertex_id)

    def set_snap_target(self, vertex_id: str | None) -> None:
        self._publish(snap_target_id=vertex_id)

    def refresh_objects(self) -> None:
        objects = compute_object_shapes(
            self._state.vertices,
            self._state.lines,
            fill_color=self.object_fill,
        )
        self._state = self._state.model_copy(update={"objects": objects})

    def _publish(self, *, recompute: bool = False, **changes: object) -> None:
        self._state = self._state.model_copy(update=changes)
        if recompute:
            self.refresh_objects()

    def _surviving_active_line(self, lines: dict[str, Line]) -> str | None:
        active_line_id = self._state.active_line_id
        return active_line_id if active_line_id in lines else None

    @staticmethod
    def _unless_removed(vertex_id: str | None, removed_id: str) -> str | None:
        return None if vertex_id == removed_id else vertex_id

    def _all_vertices_known(self, vertex_ids: Sequence[str]) -> bool:
        return all(self._vertex_or_none(vertex_id) is not None for vertex_id in vertex_ids)

    def _vertex_or_none(self, vertex_id: str) -> Vertex | None:
        vertex = self._state.vertices.get(vertex_id)
        if vertex is None:
            if self.strict:
                raise VertexNotFoundError(vertex_id)
            logger.debug("Ignoring edit of unknown vertex %s", vertex_id)
        return vertex

    def _line_or_none(self, line_id: str) -> Line | None:
        line = self._state.lines.get(line_id)
        if line is None:
            if self.strict:
                raise LineNotFoundError(line_id)
            logger.debug("Ignoring edit of unknown line %s", line_id)
        return line
