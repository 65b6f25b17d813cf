# src/afazo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations (HTTP task store, JSON preferences,
  environment colour scheme, console visibility/style) into the view.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.console_connector import ConsoleVisibility
from ..connectors.console_render import ConsoleStyleSink
from ..core.ports import TaskApi
from ..core.state import AppState
from ..core.view import TaskListView
from ..tasks.task_client import HttpTaskApi
from ..theme.prefs import EnvSystemPreference, JsonPreferenceStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.prefs_path.parent.mkdir(parents=True, exist_ok=True)


def create_view(
    *,
    settings=None,
    api: TaskApi | None = None,
    visibility: ConsoleVisibility | None = None,
    style: ConsoleStyleSink | None = None,
) -> TaskListView:
    """
    Build a TaskListView from the provided settings.

    Everything is injectable so tests and alternative front ends can reuse the
    wiring. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if api is None:
        api = HttpTaskApi(settings.api_url, timeout=settings.http_timeout_seconds)

    state = AppState(settings=settings, page_size=int(settings.page_size))
    view = TaskListView(
        state,
        api,
        prefs=JsonPreferenceStore(settings.prefs_path),
        system=EnvSystemPreference(settings.system_theme),
        style=style if style is not None else ConsoleStyleSink(),
        visibility=visibility if visibility is not None else ConsoleVisibility(),
    )
    logger.debug("View wired: api=%s page_size=%s", settings.api_url, state.page_size)
    return view
