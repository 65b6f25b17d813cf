# src/afazo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations:
the remote task store, local preference storage, the platform colour scheme,
the sentinel's visibility signal and the document-level style hook are all
injected. Tests swap every one of them for a fake.
"""

from collections.abc import Callable
from typing import Any, Protocol

from ..tasks.task_models import Task

VisibilityCallback = Callable[[], None]
# Invoked each time the observed sentinel enters the viewport.


class TaskApi(Protocol):
    """The remote task store. Every call is a network round-trip."""

    async def list_tasks(self) -> list[Task]: ...
    async def create_task(self, text: str) -> Any: ...
    async def toggle_task(self, task_id: int) -> Any: ...
    async def delete_task(self, task_id: int) -> None: ...


class PreferenceStore(Protocol):
    """Persistent key/value storage for local preferences (strings only)."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class SystemPreference(Protocol):
    """Platform default colour scheme."""

    def prefers_dark(self) -> bool: ...


class VisibilitySource(Protocol):
    """
    Rendering-side port: tells when the sentinel row becomes visible.

    subscribe() returns an opaque handle; unsubscribe(handle) must release it.
    The source may call the callback any number of times until released.
    """

    def subscribe(self, callback: VisibilityCallback) -> Any: ...
    def unsubscribe(self, handle: Any) -> None: ...


class StyleSink(Protocol):
    """Document-level style selector (class list on the root element)."""

    def set_class(self, name: str, enabled: bool) -> None: ...
