"""Resolve the concrete task list a user sees for a day."""
from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional, Sequence

from flowspeak.api.schemas.program import DAY_NAMES, DayOfWeek, DayProgram, Task
from flowspeak.api.schemas.progress import UserProgress
from flowspeak.services.adaptive_selector import select_daily_tasks
from flowspeak.services.task_catalog import TaskCatalog

logger = logging.getLogger(__name__)

DAY_MS = 86_400_000
RECENT_COMPLETIONS = 20


class ProgramResolver:
    """
    Turns (progress, day) into the day's effective task list.

    Base tasks come from the frozen day plan when one exists, otherwise from
    the fixed program or, in adaptive mode, from a memoized adaptive
    selection. Recorded swaps are then applied on top.
    """

    def __init__(self, program: Sequence[DayProgram], catalog: TaskCatalog, rng: Optional[random.Random] = None):
        if not program:
            raise ValueError("program must contain at least one day")
        self._program = list(program)
        self._catalog = catalog
        self._rng = rng or random.Random()
        self._adaptive_cache: Dict[int, List[Task]] = {}
        self._lock = Lock()

    @property
    def catalog(self) -> TaskCatalog:
        return self._catalog

    @property
    def total_days(self) -> int:
        return len(self._program)

    def day_program(self, day: int) -> DayProgram:
        clamped = min(max(day, 1), len(self._program))
        return self._program[clamped - 1]

    def day_of_week_for(self, progress: UserProgress, day: int) -> DayOfWeek:
        """Calendar weekday (UTC) of a program day counted from the start date."""
        moment = datetime.fromtimestamp((progress.start_date + (day - 1) * DAY_MS) / 1000, tz=timezone.utc)
        return DAY_NAMES[moment.weekday()]

    def base_tasks(self, progress: UserProgress, day: int) -> List[Task]:
        plan = next((plan for plan in progress.day_plans if plan.day == day), None)
        if plan is not None:
            frozen = [self._catalog.get(task_id) for task_id in plan.task_ids]
            tasks = [task for task in frozen if task is not None]
            if tasks:
                return tasks
            logger.warning("Day plan for day %s references no known tasks; resolving afresh", day)

        fixed = list(self.day_program(day).tasks)
        if not progress.use_adaptive_tasks:
            return fixed

        with self._lock:
            cached = self._adaptive_cache.get(day)
            if cached is None:
                cached = select_daily_tasks(
                    self._catalog.all(),
                    day,
                    [record.task_id for record in progress.completed_tasks[-RECENT_COMPLETIONS:]],
                    progress.ratings,
                    progress.preferences,
                    self.day_of_week_for(progress, day),
                    self._rng,
                )
                self._adaptive_cache[day] = cached
        return list(cached) if cached else fixed

    def effective_tasks(self, progress: UserProgress, day: int) -> List[Task]:
        latest: Dict[str, str] = {}
        for swap in progress.swaps:
            if swap.day == day:
                latest[swap.original_task_id] = swap.swapped_task_id

        base = self.base_tasks(progress, day)
        if not latest:
            return base
        return [self._follow_swaps(task, latest) for task in base]

    def _follow_swaps(self, task: Task, latest: Dict[str, str]) -> Task:
        seen = {task.id}
        current = task
        while current.id in latest:
            replacement = self._catalog.get(latest[current.id])
            if replacement is None:
                logger.debug("Ignoring swap of %s to unknown task %s", current.id, latest[current.id])
                break
            if replacement.id in seen:
                logger.warning("Swap cycle detected at %s; keeping %s", replacement.id, current.id)
                break
            seen.add(replacement.id)
            current = replacement
        return current

    def invalidate(self, day: Optional[int] = None) -> None:
        with self._lock:
            if day is None:
                self._adaptive_cache.clear()
            else:
                self._adaptive_cache.pop(day, None)
