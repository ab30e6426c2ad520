"""Shared fixtures: deterministic clock, storages and a small two-day program."""
from __future__ import annotations

import os
import random

os.environ.setdefault("STORAGE_PROVIDER", "memory")
os.environ.setdefault("OPIK_ENABLED", "false")

import pytest

from flowspeak.api.schemas.program import DayProgram, Task
from flowspeak.services.program_resolver import ProgramResolver
from flowspeak.services.progress_service import ProgressService
from flowspeak.services.progress_store import ProgressStore
from flowspeak.services.storage.memory import MemoryStorage
from flowspeak.services.task_catalog import TaskCatalog

DAY_MS = 86_400_000
# Monday 2024-01-01 09:00 UTC
START_MS = 1_704_099_600_000


class Clock:
    def __init__(self, now_ms: int = START_MS):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, *, days: int = 0, ms: int = 0) -> None:
        self.now_ms += days * DAY_MS + ms


class FlakyStorage(MemoryStorage):
    """Memory storage that can be told to fail reads or writes."""

    def __init__(self):
        super().__init__()
        self.fail_gets = 0
        self.fail_sets = False
        self.set_calls = 0

    def get(self, key):
        if self.fail_gets > 0:
            self.fail_gets -= 1
            raise OSError("storage unavailable")
        return super().get(key)

    def set(self, key, value):
        self.set_calls += 1
        if self.fail_sets:
            raise OSError("disk full")
        super().set(key, value)


def make_task(task_id: str, task_type: str = "speech", **overrides) -> Task:
    fields = {
        "id": task_id,
        "title": task_id,
        "description": f"{task_id} description",
        "type": task_type,
        "duration": 5,
        "instructions": ["Do the thing slowly."],
    }
    fields.update(overrides)
    return Task(**fields)


@pytest.fixture()
def clock() -> Clock:
    return Clock()


@pytest.fixture()
def storage() -> FlakyStorage:
    return FlakyStorage()


@pytest.fixture()
def task_factory():
    return make_task


@pytest.fixture()
def small_program():
    """Two fixed days of two tasks each plus a few catalog-only alternatives."""
    drill = {"title": "Technique Drill", "difficulty": "beginner", "quarter": 1}
    program = [
        DayProgram(
            day=1,
            phase="Foundation",
            focus="Breath and rate",
            day_of_week="Monday",
            tasks=[
                make_task("breath-1-d1", "breathing", difficulty="beginner", quarter=1),
                make_task("technique-m1-d1", "speech", **drill),
            ],
        ),
        DayProgram(
            day=2,
            phase="Foundation",
            focus="Breath and rate",
            day_of_week="Tuesday",
            tasks=[
                make_task("breath-2-d2", "breathing", difficulty="beginner", quarter=1),
                make_task("technique-m1-d2", "speech", **drill),
            ],
        ),
    ]
    extras = [
        make_task("speech-alt", "speech", title="Alternative Drill", difficulty="beginner", quarter=1),
        make_task("read-alt", "reading", title="Reading Drill", difficulty="easy", quarter=1),
    ]
    catalog = TaskCatalog([task for day in program for task in day.tasks] + extras)
    return program, catalog


@pytest.fixture()
def build_service(storage, clock, small_program):
    """Factory for a ProgressService over the small program (or a given one)."""

    def _build(program=None, catalog=None, *, seed: int = 7, backing=None) -> ProgressService:
        if program is None:
            program, catalog = small_program
        rng = random.Random(seed)
        store = ProgressStore(backing or storage, storage_key="@test_progress", now=clock)
        return ProgressService(store, ProgramResolver(program, catalog, rng), rng=rng)

    return _build
