from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from adapters.svg.renderer import SvgStyle
from domain.models import (
    DEFAULT_OBJECT_FILL,
    DEFAULT_STROKE_COLOR,
    DEFAULT_STROKE_WIDTH,
    ConnectionType,
)

DEFAULT_CONFIG_PATH = Path("config/editor.yaml")


def _normalize_color(value: object) -> str:
    raw = str(value or "").strip()
    if not raw:
        msg = "color must not be empty"
        raise ValueError(msg)
    return raw.lower() if raw.startswith("#") else raw


class EditorSettings(BaseModel):
    snap_threshold: float = Field(default=16.0, ge=0)
    stroke_color: str = DEFAULT_STROKE_COLOR
    stroke_width: float = Field(default=DEFAULT_STROKE_WIDTH, gt=0)
    object_fill: str = DEFAULT_OBJECT_FILL
    connection_type: ConnectionType = ConnectionType.SMOOTH
    strict_ids: bool = False
    id_width: int = Field(default=0, ge=0)

    @field_validator("stroke_color", "object_fill", mode="before")
    @classmethod
    def normalize_colors(cls, value: object) -> str:
        return _normalize_color(value)

    @field_validator("connection_type", mode="before")
    @classmethod
    def normalize_connection_type(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class RenderSettings(BaseModel):
    width: int = Field(default=960, gt=0)
    height: int = Field(default=640, gt=0)
    vertex_radius: float = Field(default=6.0, gt=0)
    object_opacity: float = Field(default=0.45, ge=0, le=1)
    object_stroke: str = "#eab308"
    background: str = "#f8f5ef"

    @field_validator("object_stroke", "background", mode="before")
    @classmethod
    def normalize_colors(cls, value: object) -> str:
        return _normalize_color(value)

    def to_style(self) -> SvgStyle:
        return SvgStyle(
            width=self.width,
            height=self.height,
            vertex_radius=self.vertex_radius,
            object_opacity=self.object_opacity,
            object_stroke=self.object_stroke,
            background=self.background,
        )


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GRAGRA_", env_nested_delimiter="__")

    editor: EditorSettings = EditorSettings()
    render: RenderSettings = RenderSettings()
    log_level: str = "WARNING"

    _yaml_path: ClassVar[Path | None] = None

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        return str(value).upper() if value else "WARNING"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("GRAGRA_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
