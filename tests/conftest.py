# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from afazo.core.state import AppState
from afazo.core.view import TaskListView

from .fakes import (
    FakePreferenceStore,
    FakeStyleSink,
    FakeSystemPreference,
    FakeTaskApi,
    FakeVisibilitySource,
    make_tasks,
)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="afazo-test",
        log_level="DEBUG",
        api_url="http://tasks.test",
        http_timeout_seconds=None,
        page_size=5,
        system_theme="",
        data_dir=tmp_path / "data",
        prefs_path=tmp_path / "data" / "prefs.json",
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    return AppState(settings=settings, page_size=settings.page_size)


@pytest.fixture()
def api() -> FakeTaskApi:
    return FakeTaskApi(make_tasks(12, done_every=3))


@pytest.fixture()
def prefs() -> FakePreferenceStore:
    return FakePreferenceStore()


@pytest.fixture()
def system() -> FakeSystemPreference:
    return FakeSystemPreference(dark=False)


@pytest.fixture()
def style() -> FakeStyleSink:
    return FakeStyleSink()


@pytest.fixture()
def visibility() -> FakeVisibilitySource:
    return FakeVisibilitySource()


@pytest.fixture()
def view(state, api, prefs, system, style, visibility) -> TaskListView:
    """TaskListView wired with deterministic fakes (not started yet)."""
    return TaskListView(
        state,
        api,
        prefs=prefs,
        system=system,
        style=style,
        visibility=visibility,
    )
