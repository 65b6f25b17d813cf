# src/afazo/core/view.py

from __future__ import annotations

"""
Task-list view: the composition of state store, query pipeline, scroll
coordinator, mutation gateway, confirmation gate and theme resolver.

Connectors (the console today) talk to this object only. render() must be
called after every state change; it recomputes the visible slice and re-syncs
the scroll coordinator with it.
"""

import logging
from dataclasses import dataclass

from ..errors import ViewNotReady
from ..tasks.confirm_gate import ConfirmationGate
from ..tasks.scroll import ScrollCoordinator, advance_page, previous_page
from ..tasks.task_gateway import MutationGateway, MutationResult
from ..tasks.task_models import Task, TaskFilter
from ..tasks.task_query import QueryResult, run_query
from ..theme.resolver import ThemeResolver
from .ports import PreferenceStore, StyleSink, SystemPreference, TaskApi, VisibilitySource
from .state import AppState, ThemeMode

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ViewModel:
    """Everything a renderer needs for one frame."""

    loading: bool
    theme: ThemeMode
    visible: tuple[Task, ...] = ()
    has_more: bool = False
    filtered_count: int = 0
    show_pager: bool = False
    can_go_back: bool = False
    staged: Task | None = None
    text: str = ""
    search: str = ""
    filter: TaskFilter = TaskFilter.ALL
    page: int = 1
    error: str | None = None


class TaskListView:
    def __init__(
        self,
        state: AppState,
        api: TaskApi,
        *,
        prefs: PreferenceStore,
        system: SystemPreference,
        style: StyleSink,
        visibility: VisibilitySource,
    ) -> None:
        self.state = state
        self.gateway = MutationGateway(state, api)
        self.gate = ConfirmationGate(state, self.gateway)
        self.theme = ThemeResolver(state, prefs, system, style)
        self.scroll = ScrollCoordinator(state, visibility, self._has_more_now)

    # ---- lifecycle ----

    async def start(self) -> MutationResult:
        """Resolve the theme, then load the task list."""
        self.theme.initialize()
        result = await self.gateway.sync()
        if not result.ok:
            logger.warning("Initial task load failed: %s", result.error)
        return result

    def close(self) -> None:
        self.scroll.close()

    # ---- derivation ----

    def query(self) -> QueryResult:
        s = self.state
        return run_query(
            s.tasks,
            search=s.search,
            task_filter=s.filter,
            page=s.page,
            page_size=s.page_size,
        )

    def _has_more_now(self) -> bool:
        return self.query().has_more

    def render(self) -> ViewModel:
        s = self.state
        if s.theme == ThemeMode.UNRESOLVED:
            self.scroll.close()
            return ViewModel(loading=True, theme=s.theme)

        result = self.query()
        self.scroll.sync(result)

        return ViewModel(
            loading=False,
            theme=s.theme,
            visible=result.visible,
            has_more=result.has_more,
            filtered_count=len(result.filtered),
            show_pager=len(result.filtered) > s.page_size,
            can_go_back=s.page > 1,
            staged=s.staged,
            text=s.text,
            search=s.search,
            filter=s.filter,
            page=s.page,
            error=str(s.last_error) if s.last_error is not None else None,
        )

    # ---- user input ----

    def _require_ready(self) -> None:
        if self.state.theme == ThemeMode.UNRESOLVED:
            raise ViewNotReady("view is still loading")

    def set_text(self, text: str) -> None:
        self._require_ready()
        self.state.text = text

    def set_search(self, search: str) -> None:
        # Page is deliberately left as-is.
        self._require_ready()
        self.state.search = search

    def set_filter(self, task_filter: TaskFilter | str) -> None:
        self._require_ready()
        if not isinstance(task_filter, TaskFilter):
            task_filter = TaskFilter.parse(task_filter)
        self.state.filter = task_filter

    def next_page(self) -> bool:
        self._require_ready()
        return advance_page(self.state, self._has_more_now)

    def previous_page(self) -> bool:
        self._require_ready()
        return previous_page(self.state)

    # ---- mutations ----

    async def create(self, text: str | None = None) -> MutationResult:
        self._require_ready()
        return await self.gateway.create(text)

    async def toggle(self, task_id: int) -> MutationResult:
        self._require_ready()
        return await self.gateway.toggle(task_id)

    async def refresh(self) -> MutationResult:
        return await self.gateway.sync()

    def request_delete(self, task: Task | int) -> Task:
        self._require_ready()
        if isinstance(task, Task):
            self.gate.stage(task)
            return task
        return self.gate.stage_by_id(task)

    async def confirm_delete(self) -> MutationResult | None:
        self._require_ready()
        return await self.gate.confirm()

    def cancel_delete(self) -> None:
        self.gate.cancel()

    # ---- theme ----

    def toggle_theme(self, dark: bool | None = None) -> ThemeMode:
        if dark is None:
            return self.theme.toggle()
        return self.theme.set_dark(dark)
