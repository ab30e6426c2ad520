"""Schemas for the derived views: today, stats and calendar."""
from __future__ import annotations

from typing import Dict, List, Literal, Optional

from flowspeak.api.schemas.program import CamelModel, DayProgram, TaskDifficulty
from flowspeak.api.schemas.progress import DayMood, TaskRating


class TodayResponse(CamelModel):
    day_program: DayProgram
    completed_task_ids: List[str]
    completed_count: int
    total_count: int
    progress_percentage: float
    current_streak: int
    total_completed_days: int
    insight: str
    today_mood: Optional[DayMood] = None
    today_ratings: List[TaskRating]
    extra_practice_ids: List[str]
    quarter: int
    use_adaptive_tasks: bool
    is_loading: bool = False
    is_saving: bool = False
    load_error: Optional[str] = None
    save_error: Optional[str] = None
    request_id: str = ""


class Milestone(CamelModel):
    day: int
    label: str
    reached: bool


class DifficultyTrend(CamelModel):
    target: TaskDifficulty
    should_increase: bool
    should_decrease: bool


class StatsResponse(CamelModel):
    current_day: int
    phase: str
    quarter: int
    current_streak: int
    total_completed_days: int
    total_tasks_completed: int
    extra_practice_completed: int
    journey_percentage: float
    milestones: List[Milestone]
    average_rating: Optional[float] = None
    mood_distribution: Dict[str, int]
    difficulty: DifficultyTrend
    request_id: str = ""


class CalendarDay(CamelModel):
    day: int
    status: Literal["future", "current", "completed", "incomplete"]


class CalendarMonth(CamelModel):
    month: int
    days: List[CalendarDay]


class CalendarResponse(CamelModel):
    current_day: int
    months: List[CalendarMonth]
    request_id: str = ""
