from __future__ import annotations

import os
from collections.abc import Callable, Generator

import pytest

from adapters.ids.factories import SequentialIdFactory
from app.config import EditorSettings
from app.editor_session import EditorSession
from domain.services.graph_store import GraphStore


def _clear_gragra_env() -> None:
    for key in list(os.environ):
        if key.startswith("GRAGRA_"):
            os.environ.pop(key, None)


_clear_gragra_env()


@pytest.fixture(autouse=True)
def clear_gragra_env() -> Generator[None, None, None]:
    _clear_gragra_env()
    yield
    _clear_gragra_env()


@pytest.fixture
def editor_settings() -> EditorSettings:
    return EditorSettings(
        snap_threshold=16.0,
        stroke_color="#0b1020",
        stroke_width=3.0,
        object_fill="#fde68a",
        strict_ids=False,
    )


@pytest.fixture
def editor_settings_factory(
    editor_settings: EditorSettings,
) -> Callable[..., EditorSettings]:
    def _factory(**overrides: object) -> EditorSettings:
        return editor_settings.model_copy(update=overrides)

    return _factory


@pytest.fixture
def store() -> GraphStore:
    return GraphStore(SequentialIdFactory())


@pytest.fixture
def strict_store() -> GraphStore:
    return GraphStore(SequentialIdFactory(), strict=True)


@pytest.fixture
def session(editor_settings: EditorSettings) -> EditorSession:
    return EditorSession(editor_settings, GraphStore(SequentialIdFactory()))
