# tests/test_task_client.py

from __future__ import annotations

import json

import httpx
import pytest

from afazo.errors import TaskStoreError, TaskStoreHTTPError
from afazo.tasks.task_client import HttpTaskApi
from afazo.tasks.task_models import Task


def _api(handler) -> tuple[HttpTaskApi, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def _wrapped(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    return HttpTaskApi("http://store.test/", transport=httpx.MockTransport(_wrapped)), seen


@pytest.mark.asyncio
async def test_list_parses_tasks_in_store_order() -> None:
    payload = [
        {"id": 7, "text": " spaced ", "completed": True},
        {"id": 2, "text": "b", "completed": False},
    ]
    api, seen = _api(lambda req: httpx.Response(200, json=payload))

    tasks = await api.list_tasks()

    assert tasks == [Task(id=7, text=" spaced ", completed=True), Task(id=2, text="b", completed=False)]
    assert seen[0].method == "GET"
    assert str(seen[0].url) == "http://store.test/tasks"
    assert seen[0].url.query == b""


@pytest.mark.asyncio
async def test_create_posts_text_and_completed_false() -> None:
    api, seen = _api(lambda req: httpx.Response(201, json={"id": 1, "text": "x", "completed": False}))

    await api.create_task("x")

    assert seen[0].method == "POST"
    assert seen[0].url.path == "/tasks"
    assert json.loads(seen[0].content) == {"text": "x", "completed": False}


@pytest.mark.asyncio
async def test_toggle_puts_without_body_and_delete_by_id() -> None:
    api, seen = _api(lambda req: httpx.Response(204))

    await api.toggle_task(3)
    await api.delete_task(4)

    assert (seen[0].method, seen[0].url.path, seen[0].content) == ("PUT", "/tasks/3", b"")
    assert (seen[1].method, seen[1].url.path) == ("DELETE", "/tasks/4")


@pytest.mark.asyncio
async def test_http_error_status_is_wrapped() -> None:
    api, _ = _api(lambda req: httpx.Response(500, text="boom"))

    with pytest.raises(TaskStoreHTTPError) as info:
        await api.list_tasks()
    assert info.value.status_code == 500


@pytest.mark.asyncio
async def test_network_error_is_wrapped() -> None:
    def _fail(req: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=req)

    api, _ = _api(_fail)
    with pytest.raises(TaskStoreError):
        await api.delete_task(1)


@pytest.mark.asyncio
async def test_bad_payloads_are_rejected() -> None:
    api, _ = _api(lambda req: httpx.Response(200, json={"tasks": []}))
    with pytest.raises(TaskStoreError):
        await api.list_tasks()

    api, _ = _api(lambda req: httpx.Response(200, json=[{"id": "1", "text": "x"}]))
    with pytest.raises(TaskStoreError):
        await api.list_tasks()

    api, _ = _api(lambda req: httpx.Response(200, content=b"<html>"))
    with pytest.raises(TaskStoreError):
        await api.list_tasks()


@pytest.mark.asyncio
async def test_undecodable_body_is_wrapped() -> None:
    api, _ = _api(lambda req: httpx.Response(200, content=b'[{"id":1,"text":"\x80","completed":false}]'))

    with pytest.raises(TaskStoreError):
        await api.list_tasks()


@pytest.mark.asyncio
async def test_completed_flag_must_be_a_boolean() -> None:
    api, _ = _api(lambda req: httpx.Response(200, json=[{"id": 1, "text": "x", "completed": "false"}]))
    with pytest.raises(TaskStoreError):
        await api.list_tasks()

    api, _ = _api(lambda req: httpx.Response(200, json=[{"id": 1, "text": "x"}]))
    with pytest.raises(TaskStoreError):
        await api.list_tasks()
