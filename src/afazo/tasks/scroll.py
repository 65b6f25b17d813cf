# src/afazo/tasks/scroll.py

from __future__ import annotations

"""
Infinite scroll: turn "the sentinel became visible" into "next page".

The coordinator is re-synced after every recomputation of the query result.
Each sync releases the previous observation before attaching a new one, and
attaches nothing when there is no more data (the sentinel is not rendered).
"""

import logging
from collections.abc import Callable
from typing import Any

from ..core.ports import VisibilitySource
from ..core.state import AppState
from .task_query import QueryResult

logger = logging.getLogger(__name__)

_NO_HANDLE = object()


class ScrollCoordinator:
    def __init__(
        self,
        state: AppState,
        source: VisibilitySource,
        has_more: Callable[[], bool],
    ) -> None:
        """
        `has_more` re-evaluates the current query; the callback checks it at
        fire time instead of trusting the value seen when it was attached.
        """
        self._state = state
        self._source = source
        self._has_more = has_more
        self._handle: Any = _NO_HANDLE

    @property
    def observing(self) -> bool:
        return self._handle is not _NO_HANDLE

    def sync(self, result: QueryResult) -> None:
        self._release()
        if result.has_more:
            self._handle = self._source.subscribe(self._on_visible)

    def close(self) -> None:
        self._release()

    def _release(self) -> None:
        if self._handle is _NO_HANDLE:
            return
        handle, self._handle = self._handle, _NO_HANDLE
        self._source.unsubscribe(handle)

    def _on_visible(self) -> None:
        advanced = advance_page(self._state, self._has_more)
        if advanced:
            logger.debug("Sentinel visible -> page %s", self._state.page)


def advance_page(state: AppState, has_more: Callable[[], bool]) -> bool:
    """Increment the page by one if more data is available. Shared with the manual "next" control."""
    with state.lock:
        if not has_more():
            return False
        state.page += 1
        return True


def previous_page(state: AppState) -> bool:
    with state.lock:
        if state.page <= 1:
            return False
        state.page -= 1
        return True
