# src/afazo/tasks/task_client.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..errors import TaskStoreError, TaskStoreHTTPError
from .task_models import Task

logger = logging.getLogger(__name__)


class HttpTaskApi:
    """
    HttpTaskApi talks to the remote task store over its REST surface:

        GET    /tasks        -> list
        POST   /tasks        -> create  {text, completed: false}
        PUT    /tasks/{id}   -> toggle  (no body; the store flips the flag)
        DELETE /tasks/{id}   -> delete

    No query parameters are ever sent: search, filter and pagination all happen
    client-side over the full collection.

    HTTP and decoding failures are reported as TaskStoreError so callers only
    have to handle one family of exceptions.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        base_url points at the store root (e.g. http://localhost:8080).
        timeout=None waits forever; `transport` is for tests (httpx.MockTransport).
        """
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    # ------------------------------------------------------------------
    # Core request method
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, *, payload: Any = None) -> Any:
        url = self.base_url + path
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                if payload is None:
                    response = await client.request(method, url)
                else:
                    response = await client.request(method, url, json=payload)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise TaskStoreHTTPError(e.response.status_code, f"{method} {path} failed: {e}") from e
            except httpx.HTTPError as e:
                raise TaskStoreError(f"{method} {path} failed: {e}") from e

        logger.debug("%s %s -> %s", method, path, response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            # JSONDecodeError, or UnicodeDecodeError for a body that is not UTF-8.
            raise TaskStoreError(f"{method} {path} returned invalid JSON: {e}") from e

    # ------------------------------------------------------------------
    # High-level API
    # ------------------------------------------------------------------

    async def list_tasks(self) -> list[Task]:
        """Fetch the whole collection, in the order the store returns it."""
        data = await self._request("GET", "/tasks")
        if not isinstance(data, list):
            raise TaskStoreError(f"GET /tasks returned {type(data).__name__}, expected a list")
        return [Task.from_api(item) for item in data]

    async def create_task(self, text: str) -> Any:
        return await self._request("POST", "/tasks", payload={"text": text, "completed": False})

    async def toggle_task(self, task_id: int) -> Any:
        return await self._request("PUT", f"/tasks/{int(task_id)}")

    async def delete_task(self, task_id: int) -> None:
        await self._request("DELETE", f"/tasks/{int(task_id)}")
