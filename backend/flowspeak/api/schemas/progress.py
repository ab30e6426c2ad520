"""Schemas for the persisted progress aggregate."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from flowspeak.api.schemas.program import CamelModel

MoodType = Literal["great", "good", "okay", "struggling", "difficult"]

CURRENT_VERSION = 3
TOTAL_DAYS = 365
DEFAULT_TIME_SLOTS = [5, 10, 15, 20]


class CompletedTask(CamelModel):
    task_id: str
    day: int
    completed_at: int


class DayMood(CamelModel):
    day: int
    mood: MoodType
    note: Optional[str] = None
    timestamp: int


class TaskRating(CamelModel):
    task_id: str
    day: int
    rating: int = Field(ge=1, le=5)
    note: Optional[str] = None
    timestamp: int


class TaskSwap(CamelModel):
    original_task_id: str
    swapped_task_id: str
    day: int
    reason: Optional[str] = None
    timestamp: int


class DayPlan(CamelModel):
    """Base task ids of a day, captured at the day's first completion."""

    day: int
    task_ids: List[str]
    frozen_at: int


class UserPreferences(CamelModel):
    feared_situations: List[str] = Field(default_factory=list)
    available_time_slots: List[int] = Field(default_factory=lambda: list(DEFAULT_TIME_SLOTS))
    support_people: List[str] = Field(default_factory=list)
    feared_words: List[str] = Field(default_factory=list)
    feared_sounds: List[str] = Field(default_factory=list)


class UserProgress(CamelModel):
    current_day: int = Field(default=1, ge=1, le=TOTAL_DAYS)
    start_date: int
    completed_tasks: List[CompletedTask] = Field(default_factory=list)
    last_active_date: int
    moods: List[DayMood] = Field(default_factory=list)
    ratings: List[TaskRating] = Field(default_factory=list)
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    swaps: List[TaskSwap] = Field(default_factory=list)
    use_adaptive_tasks: bool = False
    extra_practice: List[CompletedTask] = Field(default_factory=list)
    day_plans: List[DayPlan] = Field(default_factory=list)
    version: int = CURRENT_VERSION


class PreferencesUpdate(CamelModel):
    """Partial preference update; omitted fields keep their stored values."""

    feared_situations: Optional[List[str]] = None
    available_time_slots: Optional[List[int]] = None
    support_people: Optional[List[str]] = None
    feared_words: Optional[List[str]] = None
    feared_sounds: Optional[List[str]] = None


def default_progress(now_ms: int) -> UserProgress:
    """Fresh aggregate for a first run (or after a reset)."""
    return UserProgress(start_date=now_ms, last_active_date=now_ms)
