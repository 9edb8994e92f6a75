from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from app.config import AppSettings, EditorSettings, RenderSettings, load_settings
from domain.models import ConnectionType


def test_defaults() -> None:
    settings = load_settings()

    assert settings.editor.snap_threshold == 16
    assert settings.editor.stroke_color == "#0b1020"
    assert settings.editor.object_fill == "#fde68a"
    assert settings.editor.connection_type is ConnectionType.SMOOTH
    assert settings.editor.strict_ids is False
    assert settings.log_level == "WARNING"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GRAGRA_EDITOR__SNAP_THRESHOLD", "24")
    monkeypatch.setenv("GRAGRA_EDITOR__CONNECTION_TYPE", "SHARP")
    monkeypatch.setenv("GRAGRA_LOG_LEVEL", "debug")

    settings = AppSettings()

    assert settings.editor.snap_threshold == 24
    assert settings.editor.connection_type is ConnectionType.SHARP
    assert settings.log_level == "DEBUG"


def test_yaml_file_is_loaded(tmp_path: Path) -> None:
    config_path = tmp_path / "editor.yaml"
    config_path.write_text(
        "editor:\n  snap_threshold: 8\n  object_fill: '#ABCDEF'\nrender:\n  width: 320\n",
        encoding="utf-8",
    )

    settings = load_settings(config_path)

    assert settings.editor.snap_threshold == 8
    assert settings.editor.object_fill == "#abcdef"
    assert settings.render.width == 320


def test_config_path_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "custom.yaml"
    config_path.write_text("editor:\n  strict_ids: true\n", encoding="utf-8")
    monkeypatch.setenv("GRAGRA_CONFIG_PATH", str(config_path))

    assert load_settings().editor.strict_ids is True


def test_missing_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "nope.yaml")


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        EditorSettings(snap_threshold=-1)
    with pytest.raises(ValidationError):
        EditorSettings(stroke_color="  ")
    with pytest.raises(ValidationError):
        EditorSettings(connection_type="rounded")
    with pytest.raises(ValidationError):
        RenderSettings(object_opacity=2)


def test_render_settings_to_style() -> None:
    style = RenderSettings(width=100, height=50, object_stroke="#FFAA00").to_style()

    assert (style.width, style.height) == (100, 50)
    assert style.object_stroke == "#ffaa00"
