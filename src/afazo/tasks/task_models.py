# src/afazo/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..errors import TaskStoreError


class TaskFilter(StrEnum):
    """Completion-status predicate chosen by the user. Never persisted."""

    ALL = "all"
    PENDING = "pending"
    DONE = "done"

    @classmethod
    def parse(cls, raw: str | None) -> TaskFilter:
        key = (raw or "").strip().lower()
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unknown filter: {raw!r} (expected all, pending or done)") from None


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    text: str
    completed: bool

    @classmethod
    def from_api(cls, raw: Any) -> Task:
        """
        Build a Task from one record of the store's JSON list.

        The text is kept exactly as the store returned it (no trimming).
        """
        if not isinstance(raw, dict):
            raise TaskStoreError(f"task record is not an object: {raw!r}")
        try:
            task_id = raw["id"]
            text = raw["text"]
            completed = raw["completed"]
        except KeyError as e:
            raise TaskStoreError(f"task record is missing {e.args[0]!r}: {raw!r}") from e

        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise TaskStoreError(f"task id must be an integer: {task_id!r}")
        if not isinstance(text, str):
            raise TaskStoreError(f"task text must be a string: {text!r}")
        if not isinstance(completed, bool):
            raise TaskStoreError(f"task completed flag must be a boolean: {completed!r}")

        return cls(id=task_id, text=text, completed=completed)
