from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from domain.models import EditorState
from domain.services.arrow_markers import marker_ref_x
from domain.services.build_path import format_number
from domain.services.render_scene import RenderLine, Scene, build_scene

SVG_NS = "http://www.w3.org/2000/svg"
ARROWHEAD_POINTS = "0 0, 10 3.5, 0 7"

ET.register_namespace("", SVG_NS)


def _q(tag: str) -> str:
    return f"{{{SVG_NS}}}{tag}"


def _num(value: float) -> str:
    return format_number(value)


@dataclass(frozen=True)
class SvgStyle:
    width: int = 960
    height: int = 640
    vertex_radius: float = 6.0
    object_opacity: float = 0.45
    object_stroke: str = "#eab308"
    background: str = "#f8f5ef"


class SvgSceneRenderer:
    def __init__(self, style: SvgStyle | None = None) -> None:
        self.style = style or SvgStyle()

    def render_state(self, state: EditorState) -> str:
        return self.render(build_scene(state))

    def render(self, scene: Scene) -> str:
        root = ET.Element(
            _q("svg"),
            {
                "width": str(self.style.width),
                "height": str(self.style.height),
                "viewBox": f"0 0 {self.style.width} {self.style.height}",
            },
        )
        defs = ET.SubElement(root, _q("defs"))
        for render_line in scene.lines:
            self._add_markers(defs, render_line)
        ET.SubElement(
            root,
            _q("rect"),
            {"width": "100%", "height": "100%", "fill": self.style.background},
        )

        for render_object in scene.objects:
            group = ET.SubElement(root, _q("g"), {"data-object-id": render_object.shape.id})
            ET.SubElement(
                group,
                _q("path"),
                {
                    "d": render_object.path,
                    "fill": render_object.shape.fill_color,
                    "opacity": _num(self.style.object_opacity),
                    "stroke": self.style.object_stroke,
                },
            )
            if render_object.shape.text:
                label = ET.SubElement(
                    group,
                    _q("text"),
                    {
                        "x": _num(render_object.centroid.x),
                        "y": _num(render_object.centroid.y),
                        "text-anchor": "middle",
                    },
                )
                label.text = render_object.shape.text

        for render_line in scene.lines:
            if render_line.path:
                root.append(self._line_element(render_line))

        for vertex in scene.vertices:
            ET.SubElement(
                root,
                _q("circle"),
                {
                    "class": f"vertex vertex--{vertex.connection_type.value}",
                    "cx": _num(vertex.x),
                    "cy": _num(vertex.y),
                    "r": _num(self.style.vertex_radius),
                },
            )
        if scene.snap_target is not None:
            ET.SubElement(
                root,
                _q("circle"),
                {
                    "class": "vertex vertex--ghost",
                    "cx": _num(scene.snap_target.x),
                    "cy": _num(scene.snap_target.y),
                    "r": _num(self.style.vertex_radius * 2),
                },
            )
        return ET.tostring(root, encoding="unicode")

    def save(self, scene: Scene, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(scene), encoding="utf-8")

    def _add_markers(self, defs: ET.Element, render_line: RenderLine) -> None:
        line = render_line.line
        for suffix, offset in (
            ("start", render_line.offsets.start_offset),
            ("end", render_line.offsets.end_offset),
        ):
            marker = ET.SubElement(
                defs,
                _q("marker"),
                {
                    "id": f"arrowhead-{line.id}-{suffix}",
                    "markerWidth": "10",
                    "markerHeight": "7",
                    "refX": _num(marker_ref_x(offset)),
                    "refY": "3.5",
                    "orient": "auto",
                    "markerUnits": "strokeWidth",
                    "overflow": "visible",
                },
            )
            ET.SubElement(
                marker,
                _q("polygon"),
                {"points": ARROWHEAD_POINTS, "fill": line.stroke_color},
            )

    def _line_element(self, render_line: RenderLine) -> ET.Element:
        line = render_line.line
        attrs = {
            "d": render_line.path,
            "fill": "none",
            "stroke": line.stroke_color,
            "stroke-width": _num(line.stroke_width),
            "stroke-linecap": "round",
            "stroke-linejoin": "round",
            "data-line-id": line.id,
        }
        if line.stroke_dasharray:
            attrs["stroke-dasharray"] = line.stroke_dasharray
        if render_line.marker_start:
            attrs["marker-start"] = f"url(#arrowhead-{line.id}-start)"
        if render_line.marker_end:
            attrs["marker-end"] = f"url(#arrowhead-{line.id}-end)"
        return ET.Element(_q("path"), attrs)
