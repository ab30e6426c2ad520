"""Adaptive daily task selection and swap alternatives."""
from __future__ import annotations

import logging
import random
from typing import Dict, Iterable, List, Optional, Sequence

from flowspeak.api.schemas.program import DIFFICULTY_ORDER, DayOfWeek, Task, TaskDifficulty, TaskType
from flowspeak.api.schemas.progress import TaskRating, UserPreferences
from flowspeak.services.task_catalog import quarter_for_day

logger = logging.getLogger(__name__)

DAY_OF_WEEK_ROTATION: Dict[DayOfWeek, TaskType] = {
    "Monday": "breathing",
    "Tuesday": "speech",
    "Wednesday": "reading",
    "Thursday": "mindfulness",
    "Friday": "exercise",
    "Saturday": "speech",
    "Sunday": "mindfulness",
}

COMFORT_WINDOW = 10
TREND_WINDOW = 5
TREND_MIN_RATINGS = 3
RECENT_TASK_WINDOW = 5


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def target_difficulty(ratings: Sequence[TaskRating], all_tasks: Iterable[Task]) -> TaskDifficulty:
    """Difficulty the user is comfortable at, judged from the last ten ratings."""
    if not ratings:
        return "beginner"

    recent = list(ratings)[-COMFORT_WINDOW:]
    average = _mean([rating.rating for rating in recent])
    difficulty_by_id = {task.id: task.difficulty for task in all_tasks}
    rated_difficulties = {difficulty_by_id.get(rating.task_id) for rating in recent}

    if average >= 4.5 and "expert" in rated_difficulties:
        return "expert"
    if average >= 4:
        return "hard"
    if average >= 3.5:
        return "medium"
    if average >= 2.5:
        return "easy"
    return "beginner"


def _trend_average(ratings: Sequence[TaskRating]) -> Optional[float]:
    recent = list(ratings)[-TREND_WINDOW:]
    if len(recent) < TREND_MIN_RATINGS:
        return None
    return _mean([rating.rating for rating in recent])


def should_increase_difficulty(ratings: Sequence[TaskRating]) -> bool:
    average = _trend_average(ratings)
    return average is not None and average >= 4


def should_decrease_difficulty(ratings: Sequence[TaskRating]) -> bool:
    average = _trend_average(ratings)
    return average is not None and average < 2.5


def filter_by_quarter(tasks: Iterable[Task], quarter: int) -> List[Task]:
    return [task for task in tasks if not task.quarter or task.quarter <= quarter]


def filter_by_difficulty(tasks: Iterable[Task], target: TaskDifficulty) -> List[Task]:
    """Keep tasks within one step of the target; tasks without a difficulty always pass."""
    index = DIFFICULTY_ORDER.index(target)
    allowed = set(DIFFICULTY_ORDER[max(0, index - 1) : index + 2])
    return [task for task in tasks if not task.difficulty or task.difficulty in allowed]


def filter_by_preferences(tasks: Iterable[Task], preferences: UserPreferences) -> List[Task]:
    """Drop tasks longer than every configured time slot."""
    slots = preferences.available_time_slots
    if not slots:
        return list(tasks)
    longest = max(slots)
    return [task for task in tasks if task.duration <= longest]


def avoid_recent(tasks: Iterable[Task], recent_task_ids: Sequence[str]) -> List[Task]:
    recent = set(list(recent_task_ids)[-RECENT_TASK_WINDOW:])
    return [task for task in tasks if task.id not in recent]


def _pick(tasks: Sequence[Task], rng: random.Random) -> Optional[Task]:
    if not tasks:
        return None
    return rng.choice(list(tasks))


def select_daily_tasks(
    all_tasks: Sequence[Task],
    day: int,
    recent_completed_ids: Sequence[str],
    ratings: Sequence[TaskRating],
    preferences: UserPreferences,
    day_of_week: DayOfWeek,
    rng: random.Random,
) -> List[Task]:
    """
    Build an adaptive task list for a day.

    Candidates pass through the quarter, difficulty, preference and recency
    filters. From what remains we pick the weekday's core task type, an extra
    breathing task, one random bonus and, every seventh day, a wildcard drawn
    from the whole quarter-eligible catalog. Any stage may come up empty; an
    empty result tells the caller to fall back to the fixed program.
    """
    quarter = quarter_for_day(day)
    target = target_difficulty(ratings, all_tasks)

    available = filter_by_quarter(all_tasks, quarter)
    available = filter_by_difficulty(available, target)
    available = filter_by_preferences(available, preferences)
    available = avoid_recent(available, recent_completed_ids)

    selected: List[Task] = []

    def take(task: Optional[Task]) -> None:
        nonlocal available
        if task is None or any(chosen.id == task.id for chosen in selected):
            return
        selected.append(task)
        available = [candidate for candidate in available if candidate.id != task.id]

    core_type = DAY_OF_WEEK_ROTATION[day_of_week]
    take(_pick([task for task in available if task.type == core_type], rng))
    take(_pick([task for task in available if task.type == "breathing"], rng))
    take(_pick(available, rng))

    if day % 7 == 0:
        chosen_ids = {task.id for task in selected}
        wildcard_pool = [task for task in filter_by_quarter(all_tasks, quarter) if task.id not in chosen_ids]
        take(_pick(wildcard_pool, rng))

    if not selected:
        logger.info(
            "Adaptive selection exhausted for day %s (target=%s, weekday=%s)", day, target, day_of_week
        )
    else:
        logger.debug("Adaptive selection for day %s: %s", day, [task.id for task in selected])
    return selected


def get_alternative_task(
    current: Task,
    all_tasks: Sequence[Task],
    day: int,
    exclude_ids: Iterable[str],
    rng: random.Random,
) -> Optional[Task]:
    """Random same-type replacement for a task; None when nothing qualifies."""
    excluded = set(exclude_ids)
    alternatives = [
        task
        for task in filter_by_quarter(all_tasks, quarter_for_day(day))
        if task.id != current.id
        and task.title != current.title
        and task.type == current.type
        and task.id not in excluded
    ]
    if current.difficulty:
        same_difficulty = [task for task in alternatives if task.difficulty == current.difficulty]
        if same_difficulty:
            alternatives = same_difficulty
    return _pick(alternatives, rng)
