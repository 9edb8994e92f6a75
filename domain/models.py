from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_STROKE_COLOR = "#0b1020"
DEFAULT_STROKE_WIDTH = 3.0
DEFAULT_OBJECT_FILL = "#fde68a"
OBJECT_ID_PREFIX = "o"


class ConnectionType(str, Enum):
    SHARP = "sharp"
    SMOOTH = "smooth"

    def toggled(self) -> ConnectionType:
        return ConnectionType.SMOOTH if self is ConnectionType.SHARP else ConnectionType.SHARP


class ArrowType(str, Enum):
    NONE = "none"
    FORWARD = "forward"
    BACKWARD = "backward"
    BOTH = "both"

    @property
    def has_start(self) -> bool:
        return self in (ArrowType.BACKWARD, ArrowType.BOTH)

    @property
    def has_end(self) -> bool:
        return self in (ArrowType.FORWARD, ArrowType.BOTH)


class Vertex(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    x: float
    y: float
    connection_type: ConnectionType = ConnectionType.SMOOTH

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


class Line(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    vertex_ids: List[str] = Field(..., min_length=1)
    stroke_color: str = DEFAULT_STROKE_COLOR
    stroke_width: float = Field(default=DEFAULT_STROKE_WIDTH, ge=0)
    stroke_dasharray: Optional[str] = None
    arrow_type: ArrowType = ArrowType.NONE

    @field_validator("stroke_dasharray", mode="before")
    @classmethod
    def blank_dasharray_is_solid(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def start_id(self) -> str:
        return self.vertex_ids[0]

    @property
    def end_id(self) -> str:
        return self.vertex_ids[-1]


class ObjectShape(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    vertex_ids: List[str] = Field(..., min_length=3)
    fill_color: str = DEFAULT_OBJECT_FILL
    text: str = ""


class EditorState(BaseModel):
    """Snapshot of the editor graph.

    The dictionaries are never mutated in place once a state is published;
    the store swaps in fresh copies, so holding on to an old snapshot is safe.
    """

    model_config = ConfigDict(frozen=True)

    vertices: Dict[str, Vertex] = Field(default_factory=dict)
    lines: Dict[str, Line] = Field(default_factory=dict)
    objects: Dict[str, ObjectShape] = Field(default_factory=dict)
    active_line_id: Optional[str] = None
    dragging_vertex_id: Optional[str] = None
    snap_target_id: Optional[str] = None


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class ArrowOffsets:
    start_offset: float
    end_offset: float


@dataclass(frozen=True)
class ArrowTangents:
    start: Point | None
    end: Point | None
