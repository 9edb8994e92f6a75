from __future__ import annotations

import pytest

from domain.models import Line, Point
from domain.services.arrow_markers import (
    build_arrow_transform,
    compute_arrow_offsets,
    line_index_at_vertex,
    marker_ref_x,
    vertex_degree,
)


def _lines(*specs: tuple[str, list[str], float]) -> dict[str, Line]:
    return {
        line_id: Line(id=line_id, vertex_ids=vertex_ids, stroke_width=width)
        for line_id, vertex_ids, width in specs
    }


def test_lone_line_has_no_offsets() -> None:
    lines = _lines(("l1", ["a", "b"], 3))

    offsets = compute_arrow_offsets(lines["l1"], lines)

    assert (offsets.start_offset, offsets.end_offset) == (0, 0)


def test_shared_start_spreads_around_zero() -> None:
    lines = _lines(
        ("l3", ["hub", "c"], 2),
        ("l1", ["hub", "a"], 2),
        ("l2", ["hub", "b"], 2),
    )

    offsets = {line_id: compute_arrow_offsets(line, lines) for line_id, line in lines.items()}

    assert offsets["l1"].start_offset == -2
    assert offsets["l2"].start_offset == 0
    assert offsets["l3"].start_offset == 2
    assert all(item.end_offset == 0 for item in offsets.values())


def test_degree_counts_interior_occurrences() -> None:
    lines = _lines(
        ("l1", ["a", "hub", "b"], 4),
        ("l2", ["c", "hub"], 4),
    )

    assert vertex_degree("hub", lines) == 2
    assert line_index_at_vertex("hub", "l2", lines) == 1
    offsets = compute_arrow_offsets(lines["l2"], lines)
    assert offsets.start_offset == 0
    assert offsets.end_offset == 2


def test_offsets_use_own_stroke_width_and_handle_both_ends() -> None:
    lines = _lines(
        ("l1", ["a", "b"], 1),
        ("l2", ["a", "b"], 6),
    )

    offsets = compute_arrow_offsets(lines["l2"], lines)

    assert offsets.start_offset == 3
    assert offsets.end_offset == 3


def test_single_vertex_line_has_zero_offsets() -> None:
    lines = _lines(("l1", ["a"], 3), ("l2", ["a", "b"], 3))

    offsets = compute_arrow_offsets(lines["l1"], lines)

    assert (offsets.start_offset, offsets.end_offset) == (0, 0)


def test_arrow_transform_and_marker_reference() -> None:
    assert build_arrow_transform(None, 2) is None
    vertical = build_arrow_transform(Point(0, 1), 2)
    assert vertical is not None
    angle = float(vertical.split("(")[1].split(")")[0])
    assert angle == pytest.approx(90)
    assert vertical.endswith("translate(2 0)")
    assert build_arrow_transform(Point(1, 0), -1.5) == "rotate(0) translate(-1.5 0)"
    assert marker_ref_x(2) == 11
    assert marker_ref_x(-20) == 0
