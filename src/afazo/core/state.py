# src/afazo/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import StrEnum

from ..tasks.task_models import Task, TaskFilter


class ThemeMode(StrEnum):
    UNRESOLVED = "unresolved"
    LIGHT = "light"
    DARK = "dark"


@dataclass
class AppState:
    """
    The state store: raw fetched tasks plus every UI-facing field.

    Ownership (single writer per field):
    - tasks: replaced wholesale by a successful re-fetch only
    - page: pagination controls and the scroll coordinator
    - staged: the confirmation gate
    - theme: the theme resolver

    `lock` guards page and staged; the console reads stdin on a worker thread,
    so event serialization alone is not relied upon.
    """

    settings: object
    page_size: int = 5

    tasks: list[Task] = field(default_factory=list)
    text: str = ""
    search: str = ""
    filter: TaskFilter = TaskFilter.ALL
    page: int = 1
    staged: Task | None = None
    theme: ThemeMode = ThemeMode.UNRESOLVED

    last_error: Exception | None = None
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def find_task(self, task_id: int) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None
