from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from adapters.ids.factories import SequentialIdFactory
from adapters.svg.renderer import SvgSceneRenderer
from app.config import AppSettings, load_settings
from app.editor_session import EditorSession, build_store
from app.scenarios import SCENARIOS
from domain.services.build_path import format_number
from domain.services.render_scene import Scene, build_scene

app = typer.Typer(no_args_is_help=True)
console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _run_scenario(name: str, settings: AppSettings) -> EditorSession:
    scenario = SCENARIOS.get(name)
    if scenario is None:
        known = ", ".join(sorted(SCENARIOS))
        console.print(f"[red]Unknown scenario:[/] {name} (known: {known})")
        raise typer.Exit(code=1)
    store = build_store(settings.editor, SequentialIdFactory(settings.editor.id_width))
    session = EditorSession(settings.editor, store)
    scenario(session)
    return session


def _vertex_table(scene: Scene) -> Table:
    table = Table(title="Vertices")
    table.add_column("id")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("corner")
    for vertex in scene.vertices:
        table.add_row(
            vertex.id,
            format_number(vertex.x),
            format_number(vertex.y),
            vertex.connection_type.value,
        )
    return table


def _line_table(scene: Scene) -> Table:
    table = Table(title="Lines")
    table.add_column("id")
    table.add_column("vertices")
    table.add_column("arrow")
    table.add_column("offsets", justify="right")
    table.add_column("path", overflow="fold")
    for render_line in scene.lines:
        line = render_line.line
        table.add_row(
            line.id,
            " ".join(line.vertex_ids),
            line.arrow_type.value,
            f"{format_number(render_line.offsets.start_offset)} / "
            f"{format_number(render_line.offsets.end_offset)}",
            render_line.path,
        )
    return table


def _object_table(scene: Scene) -> Table:
    table = Table(title="Objects")
    table.add_column("id")
    table.add_column("cycle")
    table.add_column("centroid", justify="right")
    for render_object in scene.objects:
        centroid = render_object.centroid
        table.add_row(
            render_object.shape.id,
            " ".join(render_object.shape.vertex_ids),
            f"{centroid.x:.2f}, {centroid.y:.2f}",
        )
    return table


@app.command("demo")
def demo(
    scenario: str = typer.Argument(..., help="Scenario name, e.g. triangle or square-diagonal."),
    svg: Optional[Path] = typer.Option(None, help="Write the rendered scene to this SVG file."),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
    log_level: Optional[str] = typer.Option(None, help="Logging level override."),
) -> None:
    settings = load_settings(config)
    _configure_logging(log_level or settings.log_level)
    session = _run_scenario(scenario, settings)
    scene = build_scene(session.state)

    console.print(_vertex_table(scene))
    console.print(_line_table(scene))
    console.print(_object_table(scene))

    if svg is not None:
        SvgSceneRenderer(settings.render.to_style()).save(scene, svg)
        console.print(f"[green]Wrote[/] {svg}")


@app.command("objects")
def objects(
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    settings = load_settings(config)
    _configure_logging(settings.log_level)
    table = Table(title="Derived objects per scenario")
    table.add_column("scenario")
    table.add_column("objects", justify="right")
    table.add_column("cycles")
    for name in SCENARIOS:
        state = _run_scenario(name, settings).state
        cycles = "; ".join(" ".join(shape.vertex_ids) for shape in state.objects.values())
        table.add_row(name, str(len(state.objects)), cycles or "-")
    console.print(table)


if __name__ == "__main__":
    app()
