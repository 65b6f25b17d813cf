# src/afazo/tasks/task_gateway.py

from __future__ import annotations

"""
Mutation gateway.

Every write goes to the remote task store and is followed by a full re-fetch:
- the re-fetch is issued only after the write's outcome is known,
- nothing is merged into the local list optimistically,
- independent calls are NOT serialized; if two chains overlap, whichever
  re-fetch resolves last decides what the list shows.

Failures never escape as exceptions: each call returns a MutationResult and
records the error on state.last_error. A failed re-fetch keeps the last
known-good list. There is no automatic retry.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..core.ports import TaskApi
from ..core.state import AppState
from ..errors import TaskStoreError
from .task_models import Task

logger = logging.getLogger(__name__)


class MutationAction(str, Enum):
    CREATE = "create"
    TOGGLE = "toggle"
    DELETE = "delete"
    REFRESH = "refresh"


@dataclass(slots=True, frozen=True)
class MutationResult:
    action: MutationAction
    ok: bool
    skipped: bool = False
    error: Exception | None = None


class MutationGateway:
    def __init__(self, state: AppState, api: TaskApi) -> None:
        self._state = state
        self._api = api

    async def refresh(self) -> list[Task]:
        """
        Re-read the whole collection and replace state.tasks with it.

        On failure the cached list is left untouched and TaskStoreError is raised.
        """
        try:
            tasks = await self._api.list_tasks()
        except TaskStoreError as e:
            logger.warning(
                "Task re-fetch failed; keeping %d cached tasks: %s", len(self._state.tasks), e
            )
            self._state.last_error = e
            raise

        self._state.tasks = list(tasks)
        self._state.last_error = None
        logger.debug("Task list refreshed: %d tasks", len(tasks))
        return self._state.tasks

    async def sync(self) -> MutationResult:
        """refresh() wrapped into a MutationResult (initial load, /refresh)."""
        try:
            await self.refresh()
        except TaskStoreError as e:
            return MutationResult(action=MutationAction.REFRESH, ok=False, error=e)
        return MutationResult(action=MutationAction.REFRESH, ok=True)

    async def create(self, text: str | None = None) -> MutationResult:
        """
        Create a task from `text` (defaults to the input field).

        Whitespace-only text is silently ignored: no request, no error.
        The text itself is sent as typed; trimming is only used for the check.
        """
        if text is None:
            text = self._state.text
        if not text.strip():
            logger.debug("create skipped: empty text")
            return MutationResult(action=MutationAction.CREATE, ok=True, skipped=True)

        def _clear_input() -> None:
            self._state.text = ""

        return await self._write_then_refresh(
            MutationAction.CREATE,
            lambda: self._api.create_task(text),
            on_success=_clear_input,
        )

    async def toggle(self, task_id: int) -> MutationResult:
        # The store decides the new `completed` value; we only send the id.
        return await self._write_then_refresh(
            MutationAction.TOGGLE, lambda: self._api.toggle_task(task_id)
        )

    async def delete(self, task_id: int) -> MutationResult:
        return await self._write_then_refresh(
            MutationAction.DELETE, lambda: self._api.delete_task(task_id)
        )

    async def _write_then_refresh(
            self,
            action: MutationAction,
            write: Callable[[], Awaitable[Any]],
            *,
            on_success: Callable[[], None] | None = None,
    ) -> MutationResult:
        error: Exception | None = None

        try:
            await write()
        except TaskStoreError as e:
            logger.warning("%s failed: %s", action.value, e)
            error = e
        else:
            logger.info("%s ok", action.value)
            if on_success is not None:
                on_success()

        # Re-fetch even after a failed write: the store is the only source of truth.
        try:
            await self.refresh()
        except TaskStoreError as e:
            if error is None:
                error = e

        if error is not None:
            self._state.last_error = error
            return MutationResult(action=action, ok=False, error=error)
        return MutationResult(action=action, ok=True)
