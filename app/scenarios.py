from __future__ import annotations

from collections.abc import Callable

from app.config import EditorSettings
from app.editor_session import EditorSession
from domain.models import ArrowType, ConnectionType
from domain.services.graph_store import GraphStore

Scenario = Callable[[EditorSession], None]


def _line(store: GraphStore, settings: EditorSettings, vertex_ids: list[str]) -> str:
    line_id = store.create_line(vertex_ids[:1], settings.stroke_color, settings.stroke_width)
    assert line_id is not None
    for vertex_id in vertex_ids[1:]:
        store.add_vertex_to_line(line_id, vertex_id, -1)
    return line_id


def triangle(session: EditorSession) -> None:
    store, settings = session.store, session.settings
    a = store.create_vertex(120, 400)
    b = store.create_vertex(420, 400)
    c = store.create_vertex(270, 140)
    for pair in ([a, b], [b, c], [c, a]):
        line_id = _line(store, settings, pair)
        store.set_arrow_type(line_id, ArrowType.FORWARD)


def open_polyline(session: EditorSession) -> None:
    for x, y in ((120, 400), (270, 140), (420, 400)):
        session.pointer_down_canvas(x, y)


def square_diagonal(session: EditorSession) -> None:
    store, settings = session.store, session.settings
    a = store.create_vertex(160, 160, ConnectionType.SHARP)
    b = store.create_vertex(460, 160, ConnectionType.SHARP)
    c = store.create_vertex(460, 460, ConnectionType.SHARP)
    d = store.create_vertex(160, 460, ConnectionType.SHARP)
    _line(store, settings, [a, b, c, d, a])
    _line(store, settings, [a, c])


def snap_merge(session: EditorSession) -> None:
    """Draw an open stroke, then drag its last vertex onto the first to close it."""
    first = session.pointer_down_canvas(200, 420)
    session.pointer_down_canvas(320, 160)
    session.pointer_down_canvas(460, 420)
    last = session.pointer_down_canvas(260, 440)
    session.pointer_down_vertex(last)
    session.pointer_move(204, 424)
    session.pointer_up()
    session.store.set_connection_type(first, ConnectionType.SHARP)


SCENARIOS: dict[str, Scenario] = {
    "triangle": triangle,
    "open": open_polyline,
    "square-diagonal": square_diagonal,
    "snap-merge": snap_merge,
}
