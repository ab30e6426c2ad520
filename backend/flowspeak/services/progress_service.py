"""Facade over store, resolver and metrics used by the HTTP layer."""
from __future__ import annotations

import logging
import random
from functools import lru_cache
from threading import Lock
from typing import Callable, Dict, List, Optional, Tuple

from flowspeak.api.schemas.dashboard import (
    CalendarDay,
    CalendarMonth,
    CalendarResponse,
    DifficultyTrend,
    Milestone,
    StatsResponse,
    TodayResponse,
)
from flowspeak.api.schemas.program import DayProgram, PhaseSummary, Task
from flowspeak.api.schemas.progress import MoodType, PreferencesUpdate, UserProgress
from flowspeak.core.config import settings
from flowspeak.services import metrics, progress_events
from flowspeak.services.adaptive_selector import (
    get_alternative_task,
    should_decrease_difficulty,
    should_increase_difficulty,
    target_difficulty,
)
from flowspeak.services.curriculum import YEAR_PROGRAM, get_catalog, phase_for_day, phase_summaries
from flowspeak.services.program_resolver import ProgramResolver
from flowspeak.services.progress_store import ProgressStore
from flowspeak.services.storage.factory import get_storage
from flowspeak.services.task_catalog import quarter_for_day

logger = logging.getLogger(__name__)

CALENDAR_BLOCK_DAYS = 30


class ProgressService:
    """
    Entry point for every user action and derived view.

    Actions naming a task id the catalog does not know are silent no-ops.
    Completions and swaps are checked against the day's effective list inside
    the store's mutation lock, so the stored state always respects it.
    """

    def __init__(self, store: ProgressStore, resolver: ProgramResolver, rng: Optional[random.Random] = None):
        self._store = store
        self._resolver = resolver
        self._rng = rng or random.Random()
        self._memo_lock = Lock()
        self._memo: Dict[str, Tuple[tuple, object]] = {}
        store.add_reset_listener(resolver.invalidate)

    @property
    def store(self) -> ProgressStore:
        return self._store

    @property
    def resolver(self) -> ProgramResolver:
        return self._resolver

    # -- lifecycle -----------------------------------------------------------

    def load(self) -> UserProgress:
        return self._store.load()

    def ensure_loaded(self) -> UserProgress:
        if not self._store.loaded:
            return self._store.load()
        return self._store.auto_advance()

    def reset(self) -> UserProgress:
        self.ensure_loaded()
        return self._store.reset()

    # -- helpers ---------------------------------------------------------------

    def _effective_for(self, progress: UserProgress) -> Callable[[int], List[Task]]:
        return lambda day: self._resolver.effective_tasks(progress, day)

    def _known(self, task_id: str, action: str) -> bool:
        if task_id in self._resolver.catalog:
            return True
        logger.debug("Ignoring %s for unknown task %s", action, task_id)
        return False

    def _memoized(self, name: str, build: Callable[[], object]):
        key = (self._store.revision, self._store.save_error, self._store.load_error)
        with self._memo_lock:
            cached = self._memo.get(name)
            if cached and cached[0] == key:
                return cached[1]
        value = build()
        with self._memo_lock:
            self._memo[name] = (key, value)
        return value

    # -- reads -----------------------------------------------------------------

    def day_program(self, day: int) -> DayProgram:
        """Program for a day with the user's effective tasks."""
        progress = self.ensure_loaded()
        base = self._resolver.day_program(day)
        return base.model_copy(update={"tasks": self._resolver.effective_tasks(progress, base.day)})

    def phases(self) -> List[PhaseSummary]:
        return phase_summaries()

    def today(self) -> TodayResponse:
        self.ensure_loaded()
        return self._memoized("today", self._build_today)

    def _build_today(self) -> TodayResponse:
        store = self._store
        progress = store.progress
        day = progress.current_day
        effective = self._effective_for(progress)
        tasks = effective(day)
        task_ids = {task.id for task in tasks}
        completed_ids = [record.task_id for record in progress.completed_tasks if record.day == day]
        completed_count = sum(1 for task_id in set(completed_ids) if task_id in task_ids)

        return TodayResponse(
            day_program=self._resolver.day_program(day).model_copy(update={"tasks": tasks}),
            completed_task_ids=completed_ids,
            completed_count=completed_count,
            total_count=len(tasks),
            progress_percentage=metrics.progress_percentage(completed_count, len(tasks)),
            current_streak=metrics.current_streak(progress, effective),
            total_completed_days=metrics.total_completed_days(progress, effective),
            insight=self._insight(progress),
            today_mood=next((mood for mood in progress.moods if mood.day == day), None),
            today_ratings=[rating for rating in progress.ratings if rating.day == day],
            extra_practice_ids=[record.task_id for record in progress.extra_practice if record.day == day],
            quarter=quarter_for_day(day),
            use_adaptive_tasks=progress.use_adaptive_tasks,
            is_loading=store.is_loading,
            is_saving=store.is_saving,
            load_error=store.load_error,
            save_error=store.save_error,
        )

    def _insight(self, progress: UserProgress) -> str:
        return metrics.create_daily_insight(progress.ratings, progress.moods, self._resolver.catalog.get)

    def insight(self) -> str:
        return self._insight(self.ensure_loaded())

    def stats(self) -> StatsResponse:
        self.ensure_loaded()
        return self._memoized("stats", self._build_stats)

    def _build_stats(self) -> StatsResponse:
        progress = self._store.progress
        effective = self._effective_for(progress)
        catalog_tasks = self._resolver.catalog.all()
        return StatsResponse(
            current_day=progress.current_day,
            phase=phase_for_day(progress.current_day).name,
            quarter=quarter_for_day(progress.current_day),
            current_streak=metrics.current_streak(progress, effective),
            total_completed_days=metrics.total_completed_days(progress, effective),
            total_tasks_completed=metrics.total_tasks_completed(progress),
            extra_practice_completed=len(progress.extra_practice),
            journey_percentage=metrics.journey_percentage(progress.current_day),
            milestones=[Milestone(**entry) for entry in metrics.milestones(progress.current_day)],
            average_rating=metrics.average_rating(progress.ratings),
            mood_distribution=metrics.mood_distribution(progress.moods),
            difficulty=DifficultyTrend(
                target=target_difficulty(progress.ratings, catalog_tasks),
                should_increase=should_increase_difficulty(progress.ratings),
                should_decrease=should_decrease_difficulty(progress.ratings),
            ),
        )

    def calendar(self) -> CalendarResponse:
        self.ensure_loaded()
        return self._memoized("calendar", self._build_calendar)

    def _build_calendar(self) -> CalendarResponse:
        progress = self._store.progress
        effective = self._effective_for(progress)
        total_days = self._resolver.total_days
        months: List[CalendarMonth] = []
        for start in range(1, total_days + 1, CALENDAR_BLOCK_DAYS):
            end = min(start + CALENDAR_BLOCK_DAYS - 1, total_days)
            months.append(
                CalendarMonth(
                    month=len(months) + 1,
                    days=[
                        CalendarDay(day=day, status=metrics.day_status(progress, day, effective))
                        for day in range(start, end + 1)
                    ],
                )
            )
        return CalendarResponse(current_day=progress.current_day, months=months)

    # -- actions ---------------------------------------------------------------

    def complete_task(self, task_id: str) -> UserProgress:
        self.ensure_loaded()
        if not self._known(task_id, "completion"):
            return self._store.progress
        resolver = self._resolver

        def complete_in_plan(progress: UserProgress, *, now_ms: int) -> UserProgress:
            day = progress.current_day
            if task_id not in {task.id for task in resolver.effective_tasks(progress, day)}:
                logger.debug("Ignoring completion of %s: not in day %s", task_id, day)
                return progress
            updated = progress_events.complete_task(progress, task_id, now_ms=now_ms)
            if updated is progress:
                return progress
            base_ids = [task.id for task in resolver.base_tasks(progress, day)]
            return progress_events.freeze_day_plan(updated, day, base_ids, now_ms=now_ms)

        return self._store.apply(complete_in_plan)

    def uncomplete_task(self, task_id: str) -> UserProgress:
        self.ensure_loaded()
        if not self._known(task_id, "uncompletion"):
            return self._store.progress
        return self._store.apply(progress_events.uncomplete_task, task_id)

    def complete_extra_practice(self, task_id: str) -> UserProgress:
        self.ensure_loaded()
        if not self._known(task_id, "extra practice"):
            return self._store.progress
        return self._store.apply(progress_events.complete_extra_practice, task_id)

    def uncomplete_extra_practice(self, task_id: str) -> UserProgress:
        self.ensure_loaded()
        if not self._known(task_id, "extra practice removal"):
            return self._store.progress
        return self._store.apply(progress_events.uncomplete_extra_practice, task_id)

    def rate_task(self, task_id: str, rating: int, note: Optional[str] = None) -> UserProgress:
        self.ensure_loaded()
        if not self._known(task_id, "rating"):
            return self._store.progress
        return self._store.apply(progress_events.rate_task, task_id, rating, note)

    def log_mood(self, mood: MoodType, note: Optional[str] = None) -> UserProgress:
        self.ensure_loaded()
        return self._store.apply(progress_events.log_mood, mood, note)

    def swap_task(self, task_id: str, reason: Optional[str] = None) -> Optional[Task]:
        """
        Replace a task in today's list with a random same-type alternative.

        Returns the alternative, or None when the swap was not possible (task
        not in today's list, already completed today, or no alternative).
        """
        self.ensure_loaded()
        if not self._known(task_id, "swap"):
            return None
        resolver = self._resolver
        catalog = resolver.catalog
        rng = self._rng
        chosen: Dict[str, Task] = {}

        def swap_in_plan(progress: UserProgress, *, now_ms: int) -> UserProgress:
            day = progress.current_day
            today_ids = [task.id for task in resolver.effective_tasks(progress, day)]
            if task_id not in today_ids:
                logger.debug("Ignoring swap of %s: not in day %s", task_id, day)
                return progress
            if any(record.task_id == task_id and record.day == day for record in progress.completed_tasks):
                logger.info("Swap of %s rejected: already completed on day %s", task_id, day)
                return progress
            base_ids = [task.id for task in resolver.base_tasks(progress, day)]
            # Base ids stay excluded so a swap never points back into the plan.
            excluded = set(today_ids) | set(base_ids)
            alternative = get_alternative_task(catalog.get(task_id), catalog.all(), day, excluded, rng)
            if alternative is None:
                logger.info("No alternative available for %s on day %s", task_id, day)
                return progress
            chosen["task"] = alternative
            updated = progress_events.record_swap(progress, task_id, alternative.id, reason, now_ms=now_ms)
            return progress_events.freeze_day_plan(updated, day, base_ids, now_ms=now_ms)

        progress = self._store.apply(swap_in_plan)
        if "task" in chosen:
            resolver.invalidate(progress.current_day)
        return chosen.get("task")

    def update_preferences(self, update: PreferencesUpdate) -> UserProgress:
        self.ensure_loaded()
        return self._store.apply(progress_events.update_preferences, update)

    def toggle_adaptive_mode(self) -> UserProgress:
        self.ensure_loaded()
        progress = self._store.apply(progress_events.toggle_adaptive_mode)
        if progress.use_adaptive_tasks:
            self._resolver.invalidate()
        return progress

    def go_to_next_day(self) -> UserProgress:
        self.ensure_loaded()
        return self._store.apply(progress_events.go_to_next_day)

    def go_to_previous_day(self) -> UserProgress:
        self.ensure_loaded()
        return self._store.apply(progress_events.go_to_previous_day)


@lru_cache
def get_progress_service() -> ProgressService:
    """Process-wide service wired to the configured storage provider."""
    rng = random.Random(settings.random_seed)
    store = ProgressStore(get_storage(), storage_key=settings.storage_key)
    resolver = ProgramResolver(YEAR_PROGRAM, get_catalog(), rng)
    return ProgressService(store, resolver, rng=rng)
