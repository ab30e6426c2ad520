from __future__ import annotations

import random

import pytest

from flowspeak.api.schemas.progress import DayPlan, default_progress
from flowspeak.services import progress_events as events
from flowspeak.services.program_resolver import ProgramResolver
from flowspeak.services.task_catalog import TaskCatalog

START_MS = 1_704_099_600_000  # Monday


@pytest.fixture()
def resolver(small_program) -> ProgramResolver:
    program, catalog = small_program
    return ProgramResolver(program, catalog, random.Random(5))


def _ids(tasks) -> list[str]:
    return [task.id for task in tasks]


def test_fixed_program_without_swaps(resolver) -> None:
    progress = default_progress(START_MS)

    assert _ids(resolver.effective_tasks(progress, 1)) == ["breath-1-d1", "technique-m1-d1"]
    assert _ids(resolver.effective_tasks(progress, 2)) == ["breath-2-d2", "technique-m1-d2"]


def test_swap_applies_to_its_day_only(resolver) -> None:
    progress = events.record_swap(default_progress(START_MS), "technique-m1-d1", "speech-alt", now_ms=START_MS)

    assert _ids(resolver.effective_tasks(progress, 1)) == ["breath-1-d1", "speech-alt"]
    assert _ids(resolver.effective_tasks(progress, 2)) == ["breath-2-d2", "technique-m1-d2"]


def test_latest_swap_wins_and_chains_are_followed(resolver) -> None:
    progress = default_progress(START_MS)
    progress = events.record_swap(progress, "technique-m1-d1", "read-alt", now_ms=START_MS)
    progress = events.record_swap(progress, "technique-m1-d1", "speech-alt", now_ms=START_MS + 1)
    assert _ids(resolver.effective_tasks(progress, 1))[1] == "speech-alt"

    progress = events.record_swap(progress, "speech-alt", "read-alt", now_ms=START_MS + 2)
    assert _ids(resolver.effective_tasks(progress, 1))[1] == "read-alt"


def test_swap_cycles_and_unknown_targets_are_ignored(resolver) -> None:
    progress = default_progress(START_MS)
    progress = events.record_swap(progress, "technique-m1-d1", "speech-alt", now_ms=START_MS)
    progress = events.record_swap(progress, "speech-alt", "technique-m1-d1", now_ms=START_MS + 1)
    assert _ids(resolver.effective_tasks(progress, 1))[1] == "speech-alt"

    unknown = events.record_swap(default_progress(START_MS), "breath-1-d1", "missing", now_ms=START_MS)
    assert _ids(resolver.effective_tasks(unknown, 1))[0] == "breath-1-d1"


def test_frozen_plan_overrides_adaptive_mode(resolver) -> None:
    progress = default_progress(START_MS).model_copy(
        update={
            "use_adaptive_tasks": True,
            "day_plans": [DayPlan(day=1, task_ids=["speech-alt", "breath-1-d1"], frozen_at=START_MS)],
        }
    )

    assert _ids(resolver.base_tasks(progress, 1)) == ["speech-alt", "breath-1-d1"]


def test_adaptive_selection_is_memoized_per_day(resolver) -> None:
    progress = default_progress(START_MS).model_copy(update={"use_adaptive_tasks": True})

    first = _ids(resolver.base_tasks(progress, 1))
    second = _ids(resolver.base_tasks(progress, 1))

    assert first
    assert first == second
    assert all(task_id in resolver.catalog for task_id in first)


def test_adaptive_falls_back_to_fixed_program(small_program, task_factory) -> None:
    program, _ = small_program
    late_only = TaskCatalog([task_factory("late", quarter=4), task_factory("later", "breathing", quarter=4)])
    resolver = ProgramResolver(program, late_only, random.Random(0))
    progress = default_progress(START_MS).model_copy(update={"use_adaptive_tasks": True})

    assert _ids(resolver.base_tasks(progress, 1)) == ["breath-1-d1", "technique-m1-d1"]


def test_invalidate_drops_cached_days(resolver) -> None:
    progress = default_progress(START_MS).model_copy(update={"use_adaptive_tasks": True})
    resolver.base_tasks(progress, 1)
    resolver.base_tasks(progress, 2)

    resolver.invalidate(1)
    assert set(resolver._adaptive_cache) == {2}

    resolver.invalidate()
    assert resolver._adaptive_cache == {}


def test_day_of_week_follows_calendar_from_start(resolver) -> None:
    progress = default_progress(START_MS)

    assert resolver.day_of_week_for(progress, 1) == "Monday"
    assert resolver.day_of_week_for(progress, 3) == "Wednesday"
    assert resolver.day_of_week_for(progress, 8) == "Monday"
    assert resolver.day_program(99).day == 2
