# src/afazo/tasks/confirm_gate.py

from __future__ import annotations

import logging

from ..core.state import AppState
from .task_gateway import MutationGateway, MutationResult
from .task_models import Task

logger = logging.getLogger(__name__)


class ConfirmationGate:
    """
    Two-phase delete: stage(task) -> confirm() | cancel().

    - At most one staged task; staging again replaces it (last write wins).
    - Staging never touches the store and never blocks other interactions
      (a staged task can still be toggled).
    - confirm() is the only path from the UI to MutationGateway.delete().
    """

    def __init__(self, state: AppState, gateway: MutationGateway) -> None:
        self._state = state
        self._gateway = gateway

    @property
    def staged(self) -> Task | None:
        return self._state.staged

    def stage(self, task: Task) -> None:
        with self._state.lock:
            previous = self._state.staged
            self._state.staged = task
        if previous is not None and previous.id != task.id:
            logger.debug("Staged deletion replaced: %s -> %s", previous.id, task.id)
        else:
            logger.debug("Staged deletion: %s", task.id)

    def stage_by_id(self, task_id: int) -> Task:
        """Stage a task from the in-memory list; KeyError if it is not there."""
        task = self._state.find_task(task_id)
        if task is None:
            raise KeyError(task_id)
        self.stage(task)
        return task

    def cancel(self) -> None:
        with self._state.lock:
            self._state.staged = None

    async def confirm(self) -> MutationResult | None:
        """
        Delete the staged task. Returns None when nothing was staged.

        The staged reference is cleared before the delete chain runs, so it is
        gone no matter how the delete or its re-fetch end.
        """
        with self._state.lock:
            task = self._state.staged
            self._state.staged = None

        if task is None:
            return None

        logger.info("Deleting task %s after confirmation", task.id)
        return await self._gateway.delete(task.id)
