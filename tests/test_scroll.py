# tests/test_scroll.py

from __future__ import annotations

from afazo.tasks.scroll import ScrollCoordinator, advance_page, previous_page
from afazo.tasks.task_models import TaskFilter
from afazo.tasks.task_query import run_query

from .fakes import FakeVisibilitySource, make_tasks


def _query(state):
    return run_query(
        state.tasks, search=state.search, task_filter=state.filter, page=state.page, page_size=state.page_size
    )


def _coordinator(state, source):
    return ScrollCoordinator(state, source, lambda: _query(state).has_more)


def test_visible_sentinel_advances_one_page(state) -> None:
    state.tasks = make_tasks(12)
    source = FakeVisibilitySource()
    coord = _coordinator(state, source)

    coord.sync(_query(state))
    source.fire()

    assert state.page == 2


def test_no_observation_without_more_data(state) -> None:
    state.tasks = make_tasks(3)
    source = FakeVisibilitySource()
    coord = _coordinator(state, source)

    coord.sync(_query(state))

    assert not coord.observing
    assert source.subscribed == 0


def test_resync_detaches_before_reattaching(state) -> None:
    state.tasks = make_tasks(12)
    source = FakeVisibilitySource()
    coord = _coordinator(state, source)

    for _ in range(4):
        coord.sync(_query(state))
        assert len(source.live) == 1

    assert source.subscribed == 4
    assert source.unsubscribed == 3

    coord.close()
    assert source.live == {}


def test_late_signal_after_data_ran_out_does_not_advance(state) -> None:
    state.tasks = make_tasks(12)
    source = FakeVisibilitySource()
    coord = _coordinator(state, source)
    coord.sync(_query(state))

    # The list shrinks before the coordinator is re-synced; the stale callback fires.
    state.filter = TaskFilter.DONE
    source.fire()

    assert state.page == 1


def test_repeated_signals_stop_at_last_page(state) -> None:
    state.tasks = make_tasks(12)
    source = FakeVisibilitySource()
    coord = _coordinator(state, source)
    coord.sync(_query(state))

    for _ in range(5):
        source.fire()

    assert state.page == 3
    coord.sync(_query(state))
    assert not coord.observing


def test_previous_page_floors_at_one(state) -> None:
    state.page = 2
    assert previous_page(state) is True
    assert previous_page(state) is False
    assert state.page == 1


def test_advance_page_guarded_by_has_more(state) -> None:
    assert advance_page(state, lambda: False) is False
    assert advance_page(state, lambda: True) is True
    assert state.page == 2
