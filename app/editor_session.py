from __future__ import annotations

import logging

from adapters.ids.factories import SequentialIdFactory, UuidIdFactory
from app.config import EditorSettings
from domain.models import ArrowType, EditorState
from domain.ports.ids import IdFactory
from domain.services.graph_store import GraphStore
from domain.services.snapping import find_snap_target

logger = logging.getLogger(__name__)


def build_store(settings: EditorSettings, id_factory: IdFactory | None = None) -> GraphStore:
    if id_factory is None:
        if settings.id_width:
            id_factory = SequentialIdFactory(settings.id_width)
        else:
            id_factory = UuidIdFactory()
    return GraphStore(
        id_factory,
        strict=settings.strict_ids,
        object_fill=settings.object_fill,
    )


class EditorSession:
    """Translates canvas pointer events into graph store edits.

    Clicking empty canvas drops a vertex and extends the active line (starting
    one if needed). Dragging a vertex moves it and tracks the nearest vertex
    within ``snap_threshold``; releasing over that vertex merges the dragged one
    into it. Shift-clicking a vertex toggles its corner between sharp and smooth.
    """

    def __init__(self, settings: EditorSettings, store: GraphStore | None = None) -> None:
        self.settings = settings
        self.store = store or build_store(settings)

    @property
    def state(self) -> EditorState:
        return self.store.snapshot()

    def pointer_down_canvas(self, x: float, y: float) -> str:
        vertex_id = self.store.create_vertex(x, y, self.settings.connection_type)
        active_line_id = self.state.active_line_id
        if active_line_id is None or active_line_id not in self.state.lines:
            line_id = self.store.create_line(
                [vertex_id],
                stroke_color=self.settings.stroke_color,
                stroke_width=self.settings.stroke_width,
            )
            self.store.set_active_line(line_id)
            logger.debug("Started line %s at vertex %s", line_id, vertex_id)
        else:
            self.store.add_vertex_to_line(active_line_id, vertex_id, -1)
        return vertex_id

    def pointer_down_vertex(self, vertex_id: str, *, shift: bool = False) -> None:
        vertex = self.state.vertices.get(vertex_id)
        if vertex is None:
            return
        if shift:
            self.store.set_connection_type(vertex_id, vertex.connection_type.toggled())
            return
        self.store.set_dragging(vertex_id)

    def pointer_move(self, x: float, y: float) -> None:
        dragging_id = self.state.dragging_vertex_id
        if dragging_id is None:
            return
        self.store.move_vertex(dragging_id, x, y)
        target = find_snap_target(
            self.state.vertices,
            dragging_id,
            x,
            y,
            self.settings.snap_threshold,
        )
        self.store.set_snap_target(target)

    def pointer_up(self) -> None:
        dragging_id = self.state.dragging_vertex_id
        if dragging_id is None:
            return
        self.store.set_dragging(None)
        snap_target_id = self.state.snap_target_id
        if snap_target_id is not None:
            logger.debug("Merging %s into %s", dragging_id, snap_target_id)
            self.store.merge_vertices(snap_target_id, dragging_id)
        self.store.set_snap_target(None)

    def set_active_arrow_type(self, arrow_type: ArrowType) -> None:
        active_line_id = self.state.active_line_id
        if active_line_id is None:
            return
        self.store.set_arrow_type(active_line_id, arrow_type)

    def finish_line(self) -> None:
        self.store.set_active_line(None)
