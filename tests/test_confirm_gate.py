# tests/test_confirm_gate.py

from __future__ import annotations

import pytest

from afazo.tasks.confirm_gate import ConfirmationGate
from afazo.tasks.task_gateway import MutationGateway

from .fakes import FakeTaskApi, make_tasks


@pytest.fixture()
def wired(state):
    api = FakeTaskApi(make_tasks(3))
    state.tasks = list(api.tasks)
    gate = ConfirmationGate(state, MutationGateway(state, api))
    return api, gate


def test_stage_does_not_touch_store_or_list(state, wired) -> None:
    api, gate = wired
    gate.stage(state.tasks[1])

    assert gate.staged is not None and gate.staged.id == 2
    assert api.calls == []
    assert [t.id for t in state.tasks] == [1, 2, 3]


def test_cancel_clears_without_mutation(state, wired) -> None:
    api, gate = wired
    gate.stage(state.tasks[0])
    gate.cancel()

    assert gate.staged is None
    assert api.calls == []
    assert len(state.tasks) == 3


def test_second_stage_replaces_first(state, wired) -> None:
    _, gate = wired
    gate.stage(state.tasks[0])
    gate.stage(state.tasks[2])
    assert gate.staged is not None and gate.staged.id == 3


@pytest.mark.asyncio
async def test_confirm_deletes_staged_and_clears(state, wired) -> None:
    api, gate = wired
    gate.stage(state.tasks[0])

    result = await gate.confirm()

    assert result is not None and result.ok
    assert api.names() == ["delete", "list"]
    assert gate.staged is None
    assert [t.id for t in state.tasks] == [2, 3]


@pytest.mark.asyncio
async def test_confirm_clears_staged_even_when_delete_fails(state, wired) -> None:
    api, gate = wired
    api.fail.add("delete")
    gate.stage(state.tasks[0])

    result = await gate.confirm()

    assert result is not None and not result.ok
    assert gate.staged is None
    assert len(state.tasks) == 3


@pytest.mark.asyncio
async def test_confirm_with_nothing_staged_is_noop(wired) -> None:
    api, gate = wired
    assert await gate.confirm() is None
    assert api.calls == []


@pytest.mark.asyncio
async def test_staged_task_can_still_be_toggled(state, wired) -> None:
    api, gate = wired
    gate.stage(state.tasks[0])

    await MutationGateway(state, api).toggle(1)

    assert gate.staged is not None and gate.staged.id == 1
    assert state.find_task(1).completed is True


def test_stage_by_id_unknown(wired) -> None:
    _, gate = wired
    with pytest.raises(KeyError):
        gate.stage_by_id(99)
