from __future__ import annotations

from collections.abc import Callable

from adapters.ids.factories import SequentialIdFactory, UuidIdFactory
from app.config import EditorSettings
from app.editor_session import EditorSession, build_store
from domain.models import ArrowType, ConnectionType


def test_canvas_clicks_grow_the_active_line(session: EditorSession) -> None:
    ids = [session.pointer_down_canvas(x, 0) for x in (0, 50, 100)]

    state = session.state
    assert state.active_line_id is not None
    line = state.lines[state.active_line_id]
    assert line.vertex_ids == ids
    assert line.stroke_color == "#0b1020"
    assert line.stroke_width == 3
    assert all(
        state.vertices[vertex_id].connection_type is ConnectionType.SMOOTH for vertex_id in ids
    )


def test_finish_line_starts_a_new_line_on_next_click(session: EditorSession) -> None:
    session.pointer_down_canvas(0, 0)
    session.pointer_down_canvas(10, 0)
    first_line = session.state.active_line_id

    session.finish_line()
    session.pointer_down_canvas(50, 50)

    assert session.state.active_line_id not in (None, first_line)
    assert len(session.state.lines) == 2


def test_shift_click_toggles_corner_style(session: EditorSession) -> None:
    vertex_id = session.pointer_down_canvas(0, 0)

    session.pointer_down_vertex(vertex_id, shift=True)
    assert session.state.vertices[vertex_id].connection_type is ConnectionType.SHARP
    assert session.state.dragging_vertex_id is None

    session.pointer_down_vertex(vertex_id, shift=True)
    assert session.state.vertices[vertex_id].connection_type is ConnectionType.SMOOTH


def test_drag_onto_neighbour_merges_and_closes_region(session: EditorSession) -> None:
    first = session.pointer_down_canvas(200, 420)
    second = session.pointer_down_canvas(320, 160)
    third = session.pointer_down_canvas(460, 420)
    last = session.pointer_down_canvas(260, 440)

    session.pointer_down_vertex(last)
    session.pointer_move(204, 424)
    assert session.state.snap_target_id == first
    assert (session.state.vertices[last].x, session.state.vertices[last].y) == (204, 424)

    session.pointer_up()

    state = session.state
    assert last not in state.vertices
    assert state.dragging_vertex_id is None
    assert state.snap_target_id is None
    line = state.lines[state.active_line_id]
    assert line.vertex_ids == [first, second, third, first]
    assert len(state.objects) == 1
    assert sorted(next(iter(state.objects.values())).vertex_ids) == sorted([first, second, third])


def test_drag_without_snap_only_moves(session: EditorSession) -> None:
    first = session.pointer_down_canvas(0, 0)
    second = session.pointer_down_canvas(100, 0)

    session.pointer_down_vertex(second)
    session.pointer_move(100, 60)
    session.pointer_up()

    state = session.state
    assert set(state.vertices) == {first, second}
    assert state.vertices[second].y == 60
    assert state.snap_target_id is None


def test_pointer_events_without_drag_are_ignored(session: EditorSession) -> None:
    session.pointer_down_canvas(0, 0)
    before = session.state

    session.pointer_move(5, 5)
    session.pointer_up()
    session.pointer_down_vertex("ghost")

    assert session.state is before


def test_arrow_type_applies_to_active_line(session: EditorSession) -> None:
    session.set_active_arrow_type(ArrowType.BOTH)
    assert session.state.lines == {}

    session.pointer_down_canvas(0, 0)
    session.pointer_down_canvas(10, 0)
    session.set_active_arrow_type(ArrowType.FORWARD)

    assert session.state.lines[session.state.active_line_id].arrow_type is ArrowType.FORWARD


def test_snap_threshold_comes_from_settings(
    editor_settings_factory: Callable[..., EditorSettings],
) -> None:
    session = EditorSession(editor_settings_factory(snap_threshold=2.0))
    first = session.pointer_down_canvas(0, 0)
    second = session.pointer_down_canvas(100, 0)

    session.pointer_down_vertex(second)
    session.pointer_move(5, 0)
    session.pointer_up()

    assert set(session.state.vertices) == {first, second}


def test_build_store_picks_id_factory_from_settings(
    editor_settings_factory: Callable[..., EditorSettings],
) -> None:
    padded = build_store(editor_settings_factory(id_width=4, strict_ids=True))
    assert isinstance(padded.id_factory, SequentialIdFactory)
    assert padded.strict is True
    assert padded.create_vertex(0, 0) == "v_0001"

    random_ids = build_store(editor_settings_factory())
    assert isinstance(random_ids.id_factory, UuidIdFactory)
