from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from domain.models import DEFAULT_OBJECT_FILL, OBJECT_ID_PREFIX, Line, ObjectShape, Vertex

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "|"
_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


@dataclass(frozen=True)
class Edge:
    a: str
    b: str

    @property
    def key(self) -> tuple[str, str]:
        return (self.a, self.b) if self.a < self.b else (self.b, self.a)

    def matches(self, left: str, right: str) -> bool:
        return (left == self.a and right == self.b) or (left == self.b and right == self.a)


def build_edges(lines: Iterable[Line]) -> list[Edge]:
    """Undirected edges in line order, first occurrence of each vertex pair only."""
    edges: list[Edge] = []
    seen: set[tuple[str, str]] = set()
    for line in lines:
        for a, b in zip(line.vertex_ids, line.vertex_ids[1:]):
            edge = Edge(a, b)
            if edge.key in seen:
                continue
            seen.add(edge.key)
            edges.append(edge)
    return edges


def build_adjacency(edges: Iterable[Edge]) -> dict[str, dict[str, None]]:
    # dict-as-ordered-set: neighbours keep the order their edges were first seen,
    # which is the tie-break between equally short paths.
    adjacency: dict[str, dict[str, None]] = {}
    for edge in edges:
        adjacency.setdefault(edge.a, {})[edge.b] = None
        adjacency.setdefault(edge.b, {})[edge.a] = None
    return adjacency


def shortest_path(
    adjacency: Mapping[str, Mapping[str, None]],
    start: str,
    goal: str,
    blocked: Edge,
) -> list[str] | None:
    queue: deque[str] = deque([start])
    previous: dict[str, str | None] = {start: None}

    while queue:
        current = queue.popleft()
        if current == goal:
            break
        for neighbor in adjacency.get(current, {}):
            if blocked.matches(current, neighbor):
                continue
            if neighbor not in previous:
                previous[neighbor] = current
                queue.append(neighbor)

    if goal not in previous:
        return None
    path: list[str] = []
    node: str | None = goal
    while node is not None:
        path.append(node)
        node = previous[node]
    path.reverse()
    return path


def _min_rotation_key(cycle: list[str]) -> str:
    return min(
        KEY_SEPARATOR.join(cycle[index:] + cycle[:index]) for index in range(len(cycle))
    )


def normalize_cycle(cycle: Iterable[str]) -> str:
    """Canonical key of a cycle, independent of its starting vertex and direction."""
    forward = list(cycle)
    if not forward:
        return ""
    backward = forward[::-1]
    return min(_min_rotation_key(forward), _min_rotation_key(backward))


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def hash_key(value: str) -> str:
    """djb2-xor over UTF-16 code units, kept to 32-bit signed arithmetic."""
    encoded = value.encode("utf-16-le")
    result = 5381
    for index in range(0, len(encoded), 2):
        code_unit = encoded[index] | (encoded[index + 1] << 8)
        result = _to_int32(result * 33) ^ code_unit
    return _to_base36(abs(result))


def object_id_for_key(key: str) -> str:
    return f"{OBJECT_ID_PREFIX}_{hash_key(key)}"


def find_cycles(vertices: Mapping[str, Vertex], lines: Mapping[str, Line]) -> dict[str, list[str]]:
    """Map of canonical key to the first cycle discovered for it."""
    edges = build_edges(lines.values())
    adjacency = build_adjacency(edges)
    cycles: dict[str, list[str]] = {}

    for edge in edges:
        path = shortest_path(adjacency, edge.a, edge.b, edge)
        if path is None or len(path) < 3:
            continue
        if any(vertex_id not in vertices for vertex_id in path):
            continue
        key = normalize_cycle(path)
        if key and key not in cycles:
            cycles[key] = path

    logger.debug("Found %d cycle(s) over %d edge(s)", len(cycles), len(edges))
    return cycles


def compute_object_shapes(
    vertices: Mapping[str, Vertex],
    lines: Mapping[str, Line],
    *,
    fill_color: str = DEFAULT_OBJECT_FILL,
) -> dict[str, ObjectShape]:
    objects: dict[str, ObjectShape] = {}
    for key, cycle in find_cycles(vertices, lines).items():
        object_id = object_id_for_key(key)
        objects[object_id] = ObjectShape(
            id=object_id,
            vertex_ids=cycle,
            fill_color=fill_color,
            text="",
        )
    return objects
