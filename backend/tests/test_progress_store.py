from __future__ import annotations

import json

import pytest

from flowspeak.core.errors import LoadFailure, SaveFailure
from flowspeak.services import progress_events as events
from flowspeak.services.progress_store import ProgressStore

KEY = "@test_progress"
DAY_MS = 86_400_000


@pytest.fixture()
def store(storage, clock) -> ProgressStore:
    return ProgressStore(storage, storage_key=KEY, now=clock)


def _blob(storage) -> dict:
    return json.loads(storage.get(KEY))


def test_first_load_persists_defaults(store, storage, clock) -> None:
    progress = store.load()

    assert progress.current_day == 1
    assert progress.start_date == clock.now_ms
    assert _blob(storage)["version"] == 3
    assert store.loaded is True
    assert store.revision >= 1


def test_load_rewrites_legacy_blob(store, storage, clock) -> None:
    storage.set(
        KEY,
        json.dumps(
            {
                "currentDay": 3,
                "startDate": clock.now_ms,
                "lastActiveDate": clock.now_ms,
                "completedTasks": [{"taskId": "breath-1", "day": 1, "completedAt": 1}],
                "moods": [],
                "ratings": [],
                "preferences": {},
                "swaps": [],
                "useAdaptiveTasks": False,
            }
        ),
    )

    progress = store.load()
    blob = _blob(storage)

    assert progress.current_day == 3
    assert blob["version"] == 3
    assert blob["extraPractice"] == []
    assert blob["dayPlans"] == []
    assert blob["completedTasks"][0]["taskId"] == "breath-1"


def test_load_auto_advances_by_calendar_days(store, storage, clock) -> None:
    storage.set(
        KEY,
        json.dumps({"version": 3, "currentDay": 5, "startDate": clock.now_ms, "lastActiveDate": clock.now_ms}),
    )
    clock.advance(days=3)

    progress = store.load()

    assert progress.current_day == 8
    assert progress.last_active_date == clock.now_ms
    assert _blob(storage)["currentDay"] == 8

    assert store.auto_advance().current_day == 8

    clock.advance(days=1)
    assert store.auto_advance().current_day == 9
    assert store.auto_advance().current_day == 9
    assert _blob(storage)["currentDay"] == 9


def test_auto_advance_ignores_same_calendar_day_and_caps(store, storage, clock) -> None:
    storage.set(
        KEY,
        json.dumps({"version": 3, "currentDay": 5, "startDate": clock.now_ms, "lastActiveDate": clock.now_ms}),
    )
    clock.advance(ms=10 * 60 * 60 * 1000)
    assert store.load().current_day == 5

    storage.set(
        KEY,
        json.dumps({"version": 3, "currentDay": 364, "startDate": 0, "lastActiveDate": clock.now_ms - 5 * DAY_MS}),
    )
    assert store.load().current_day == 365


def test_load_retries_once(store, storage) -> None:
    storage.fail_gets = 1

    assert store.load().current_day == 1
    assert store.load_error is None


def test_load_failure_is_reported(store, storage) -> None:
    storage.fail_gets = 2

    with pytest.raises(LoadFailure):
        store.load()
    assert store.load_error
    assert store.is_loading is False
    assert store.progress.current_day == 1


def test_corrupt_blob_is_a_load_failure(store, storage) -> None:
    storage.set(KEY, "{not json")

    with pytest.raises(LoadFailure):
        store.load()


def test_apply_publishes_after_write(store, storage) -> None:
    store.load()
    revision = store.revision

    updated = store.apply(events.complete_task, "breath-1")

    assert store.progress is updated
    assert store.revision == revision + 1
    assert _blob(storage)["completedTasks"][0]["taskId"] == "breath-1"


def test_noop_mutation_skips_write(store, storage) -> None:
    store.load()
    store.apply(events.complete_task, "breath-1")
    writes = storage.set_calls
    revision = store.revision

    store.apply(events.complete_task, "breath-1")

    assert storage.set_calls == writes
    assert store.revision == revision


def test_failed_save_keeps_prior_snapshot(store, storage) -> None:
    store.load()
    before = store.progress
    blob_before = storage.get(KEY)
    storage.fail_sets = True

    with pytest.raises(SaveFailure):
        store.apply(events.complete_task, "breath-1")

    assert store.progress is before
    assert storage.get(KEY) == blob_before
    assert store.save_error
    assert store.is_saving is False

    storage.fail_sets = False
    store.apply(events.complete_task, "breath-1")
    assert store.save_error is None


def test_reset_restores_defaults_and_notifies(store, storage) -> None:
    calls = []
    store.add_reset_listener(lambda: calls.append("reset"))
    store.load()
    store.apply(events.complete_task, "breath-1")
    store.apply(events.go_to_next_day)

    fresh = store.reset()

    assert fresh.current_day == 1
    assert fresh.completed_tasks == []
    assert _blob(storage)["completedTasks"] == []
    assert calls == ["reset"]


def test_failed_reset_leaves_blob_and_snapshot(store, storage) -> None:
    calls = []
    store.add_reset_listener(lambda: calls.append("reset"))
    store.load()
    store.apply(events.complete_task, "breath-1")
    storage.fail_sets = True

    with pytest.raises(SaveFailure):
        store.reset()

    assert [r.task_id for r in store.progress.completed_tasks] == ["breath-1"]
    assert [r["taskId"] for r in _blob(storage)["completedTasks"]] == ["breath-1"]
    assert store.save_error
    assert calls == []


def test_non_finite_numbers_load_as_defaults(store, storage, clock) -> None:
    storage.set(KEY, '{"version": 3, "currentDay": Infinity, "startDate": NaN, "lastActiveDate": -Infinity}')

    progress = store.load()

    assert progress.current_day == 1
    assert progress.start_date == clock.now_ms
    assert store.load_error is None
