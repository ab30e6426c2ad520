"""Pure mutations over the progress aggregate.

Every function takes the current snapshot and returns a new one; inputs are
never modified. A function that has nothing to change returns its input
unchanged (the same object), which lets the store skip the write.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from flowspeak.api.schemas.progress import (
    CURRENT_VERSION,
    TOTAL_DAYS,
    CompletedTask,
    DayMood,
    DayPlan,
    MoodType,
    PreferencesUpdate,
    TaskRating,
    TaskSwap,
    UserPreferences,
    UserProgress,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def _touch(progress: UserProgress, now_ms: int, **changes: Any) -> UserProgress:
    return progress.model_copy(update={**changes, "last_active_date": now_ms})


def _day(progress: UserProgress, day: Optional[int]) -> int:
    return progress.current_day if day is None else day


# ---------------------------------------------------------------------------
# Completions
# ---------------------------------------------------------------------------

def _add_completion(records: List[CompletedTask], task_id: str, day: int, now_ms: int) -> Optional[List[CompletedTask]]:
    if any(record.task_id == task_id and record.day == day for record in records):
        return None
    return [*records, CompletedTask(task_id=task_id, day=day, completed_at=now_ms)]


def _remove_completion(records: List[CompletedTask], task_id: str, day: int) -> Optional[List[CompletedTask]]:
    remaining = [record for record in records if not (record.task_id == task_id and record.day == day)]
    if len(remaining) == len(records):
        return None
    return remaining


def complete_task(progress: UserProgress, task_id: str, *, now_ms: int, day: Optional[int] = None) -> UserProgress:
    updated = _add_completion(progress.completed_tasks, task_id, _day(progress, day), now_ms)
    if updated is None:
        return progress
    return _touch(progress, now_ms, completed_tasks=updated)


def uncomplete_task(progress: UserProgress, task_id: str, *, now_ms: int, day: Optional[int] = None) -> UserProgress:
    updated = _remove_completion(progress.completed_tasks, task_id, _day(progress, day))
    if updated is None:
        return progress
    return _touch(progress, now_ms, completed_tasks=updated)


def complete_extra_practice(
    progress: UserProgress, task_id: str, *, now_ms: int, day: Optional[int] = None
) -> UserProgress:
    updated = _add_completion(progress.extra_practice, task_id, _day(progress, day), now_ms)
    if updated is None:
        return progress
    return _touch(progress, now_ms, extra_practice=updated)


def uncomplete_extra_practice(
    progress: UserProgress, task_id: str, *, now_ms: int, day: Optional[int] = None
) -> UserProgress:
    updated = _remove_completion(progress.extra_practice, task_id, _day(progress, day))
    if updated is None:
        return progress
    return _touch(progress, now_ms, extra_practice=updated)


# ---------------------------------------------------------------------------
# Moods, ratings, swaps
# ---------------------------------------------------------------------------

def _upsert(records: Sequence[RecordT], record: RecordT, matches: Callable[[RecordT], bool]) -> List[RecordT]:
    """Replace the matching record in place, or append when none matches."""
    updated = list(records)
    for index, existing in enumerate(updated):
        if matches(existing):
            updated[index] = record
            return updated
    updated.append(record)
    return updated


def log_mood(
    progress: UserProgress,
    mood: MoodType,
    note: Optional[str] = None,
    *,
    now_ms: int,
    day: Optional[int] = None,
) -> UserProgress:
    target_day = _day(progress, day)
    entry = DayMood(day=target_day, mood=mood, note=note, timestamp=now_ms)
    moods = _upsert(progress.moods, entry, lambda existing: existing.day == target_day)
    return _touch(progress, now_ms, moods=moods)


def rate_task(
    progress: UserProgress,
    task_id: str,
    rating: int,
    note: Optional[str] = None,
    *,
    now_ms: int,
    day: Optional[int] = None,
) -> UserProgress:
    target_day = _day(progress, day)
    entry = TaskRating(task_id=task_id, day=target_day, rating=rating, note=note, timestamp=now_ms)
    ratings = _upsert(
        progress.ratings,
        entry,
        lambda existing: existing.task_id == task_id and existing.day == target_day,
    )
    return _touch(progress, now_ms, ratings=ratings)


def record_swap(
    progress: UserProgress,
    original_task_id: str,
    swapped_task_id: str,
    reason: Optional[str] = None,
    *,
    now_ms: int,
    day: Optional[int] = None,
) -> UserProgress:
    swap = TaskSwap(
        original_task_id=original_task_id,
        swapped_task_id=swapped_task_id,
        day=_day(progress, day),
        reason=reason,
        timestamp=now_ms,
    )
    return _touch(progress, now_ms, swaps=[*progress.swaps, swap])


# ---------------------------------------------------------------------------
# Preferences and mode
# ---------------------------------------------------------------------------

def update_preferences(progress: UserProgress, update: PreferencesUpdate, *, now_ms: int) -> UserProgress:
    changes = update.model_dump(exclude_none=True)
    if not changes:
        return progress
    preferences = progress.preferences.model_copy(update=changes)
    return _touch(progress, now_ms, preferences=preferences)


def set_adaptive_mode(progress: UserProgress, enabled: bool, *, now_ms: int) -> UserProgress:
    if progress.use_adaptive_tasks == enabled:
        return progress
    return _touch(progress, now_ms, use_adaptive_tasks=enabled)


def toggle_adaptive_mode(progress: UserProgress, *, now_ms: int) -> UserProgress:
    return _touch(progress, now_ms, use_adaptive_tasks=not progress.use_adaptive_tasks)


# ---------------------------------------------------------------------------
# Day navigation
# ---------------------------------------------------------------------------

def go_to_day(progress: UserProgress, day: int, *, now_ms: int) -> UserProgress:
    target = min(max(day, 1), TOTAL_DAYS)
    if target == progress.current_day:
        return progress
    return _touch(progress, now_ms, current_day=target)


def go_to_next_day(progress: UserProgress, *, now_ms: int) -> UserProgress:
    if progress.current_day >= TOTAL_DAYS:
        return progress
    return go_to_day(progress, progress.current_day + 1, now_ms=now_ms)


def go_to_previous_day(progress: UserProgress, *, now_ms: int) -> UserProgress:
    if progress.current_day <= 1:
        return progress
    return go_to_day(progress, progress.current_day - 1, now_ms=now_ms)


def freeze_day_plan(progress: UserProgress, day: int, task_ids: Sequence[str], *, now_ms: int) -> UserProgress:
    """Capture a day's base task ids. The first capture for a day wins."""
    if any(plan.day == day for plan in progress.day_plans) or not task_ids:
        return progress
    plan = DayPlan(day=day, task_ids=list(task_ids), frozen_at=now_ms)
    return progress.model_copy(update={"day_plans": [*progress.day_plans, plan]})


# ---------------------------------------------------------------------------
# Migration
# ---------------------------------------------------------------------------

_LIST_FIELDS: Dict[str, Type[BaseModel]] = {
    "completedTasks": CompletedTask,
    "extraPractice": CompletedTask,
    "moods": DayMood,
    "ratings": TaskRating,
    "swaps": TaskSwap,
    "dayPlans": DayPlan,
}


def _parse_records(raw: Any, model: Type[RecordT], field: str) -> List[RecordT]:
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Stored %s is not a list (%s); resetting it", field, type(raw).__name__)
        return []
    records: List[RecordT] = []
    for index, item in enumerate(raw):
        try:
            records.append(model.model_validate(item))
        except ValidationError as exc:
            logger.warning("Dropping malformed %s entry at index %s: %s", field, index, exc.errors()[0].get("msg"))
    return records


def _dedup(records: Iterable[RecordT], key: Callable[[RecordT], Hashable], *, keep_last: bool) -> List[RecordT]:
    """Collapse records sharing a key, keeping the position of the first one."""
    positions: Dict[Hashable, int] = {}
    result: List[RecordT] = []
    for record in records:
        record_key = key(record)
        if record_key in positions:
            if keep_last:
                result[positions[record_key]] = record
            continue
        positions[record_key] = len(result)
        result.append(record)
    return result


def _parse_preferences(raw: Any) -> UserPreferences:
    if not isinstance(raw, dict):
        return UserPreferences()
    defaults = UserPreferences()
    cleaned: Dict[str, Any] = {}
    for name, field in UserPreferences.model_fields.items():
        alias = field.alias or name
        value = raw.get(alias, raw.get(name))
        cleaned[name] = value if isinstance(value, list) else getattr(defaults, name)
    try:
        return UserPreferences.model_validate(cleaned)
    except ValidationError:
        logger.warning("Stored preferences are malformed; using defaults")
        return defaults


def _parse_int(raw: Any, default: int) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return default
    if isinstance(raw, float) and not math.isfinite(raw):
        return default
    return int(raw)


def migrate_progress(raw: Any, *, now_ms: int) -> Tuple[UserProgress, bool]:
    """
    Bring a stored blob up to the current schema.

    Missing fields take their defaults, fields of the wrong shape are reset,
    malformed list entries are dropped and duplicates collapsed. Returns the
    aggregate and whether the stored version differed from the current one
    (in which case the caller should persist the result).
    """
    if not isinstance(raw, dict):
        raise ValueError(f"Stored progress must be an object, got {type(raw).__name__}")

    stored_version = raw.get("version")
    records = {field: _parse_records(raw.get(field), model, field) for field, model in _LIST_FIELDS.items()}

    current_day = min(max(_parse_int(raw.get("currentDay"), 1), 1), TOTAL_DAYS)
    progress = UserProgress(
        current_day=current_day,
        start_date=_parse_int(raw.get("startDate"), now_ms),
        last_active_date=_parse_int(raw.get("lastActiveDate"), now_ms),
        completed_tasks=_dedup(records["completedTasks"], lambda r: (r.task_id, r.day), keep_last=False),
        extra_practice=_dedup(records["extraPractice"], lambda r: (r.task_id, r.day), keep_last=False),
        moods=_dedup(records["moods"], lambda r: r.day, keep_last=True),
        ratings=_dedup(records["ratings"], lambda r: (r.task_id, r.day), keep_last=True),
        swaps=records["swaps"],
        day_plans=_dedup(records["dayPlans"], lambda r: r.day, keep_last=False),
        preferences=_parse_preferences(raw.get("preferences")),
        use_adaptive_tasks=raw.get("useAdaptiveTasks") is True,
        version=CURRENT_VERSION,
    )
    migrated = stored_version != CURRENT_VERSION
    if migrated:
        logger.info("Migrated stored progress from version %s to %s", stored_version or 1, CURRENT_VERSION)
    return progress, migrated
