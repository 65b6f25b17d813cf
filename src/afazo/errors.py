# src/afazo/errors.py

from __future__ import annotations


class AfazoError(Exception):
    """Base class for everything this package raises on purpose."""


class TaskStoreError(AfazoError):
    """The remote task store could not be reached or returned something unusable."""


class TaskStoreHTTPError(TaskStoreError):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class ViewNotReady(AfazoError):
    """Task interaction attempted while the theme is still unresolved."""
