# src/afazo/tasks/task_query.py

from __future__ import annotations

"""
Query pipeline: raw task list + search + filter + page -> what the user sees.

Pure functions only. The store's order is kept as-is (no sorting), and the page
is never reset here when search or filter change.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from .task_models import Task, TaskFilter

DEFAULT_PAGE_SIZE = 5


@dataclass(slots=True, frozen=True)
class QueryResult:
    filtered: tuple[Task, ...]
    visible: tuple[Task, ...]
    has_more: bool


def matches_search(task: Task, search: str) -> bool:
    if not search:
        return True
    return search.lower() in task.text.lower()


def matches_filter(task: Task, task_filter: TaskFilter) -> bool:
    if task_filter == TaskFilter.ALL:
        return True
    if task_filter == TaskFilter.PENDING:
        return not task.completed
    return task.completed


def run_query(
        tasks: Sequence[Task],
        *,
        search: str = "",
        task_filter: TaskFilter = TaskFilter.ALL,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
) -> QueryResult:
    """
    Derive the visible slice.

    - filtered: tasks matching both search and filter, in store order
    - visible:  first page * page_size of filtered
    - has_more: visible is shorter than filtered
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    filtered = tuple(
        t for t in tasks if matches_search(t, search) and matches_filter(t, task_filter)
    )
    visible = filtered[: page * page_size]
    return QueryResult(filtered=filtered, visible=visible, has_more=len(visible) < len(filtered))
