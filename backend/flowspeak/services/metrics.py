"""Derived progress metrics: completion, streaks, insights and journey stats."""
from __future__ import annotations

from collections import Counter, defaultdict
from typing import Callable, Dict, List, Literal, Mapping, Optional, Sequence

from flowspeak.api.schemas.program import Task
from flowspeak.api.schemas.progress import TOTAL_DAYS, DayMood, TaskRating, UserProgress

EffectiveTasks = Callable[[int], List[Task]]
DayStatus = Literal["future", "current", "completed", "incomplete"]

INSIGHT_WINDOW = 7
MOOD_SCORES: Dict[str, int] = {"great": 5, "good": 4, "okay": 3, "struggling": 2, "difficult": 1}
NEUTRAL_MOOD_SCORE = 3
GETTING_STARTED = "You're just getting started. Focus on building consistency."

MILESTONES = (
    (30, "Foundation"),
    (90, "Technique"),
    (180, "Practice"),
    (365, "Mastery"),
)


def is_day_completed(progress: UserProgress, day: int, effective_tasks: EffectiveTasks) -> bool:
    """A day is complete when every task of its effective list was completed that day."""
    completed_ids = {record.task_id for record in progress.completed_tasks if record.day == day}
    if not completed_ids:
        return False
    task_ids = {task.id for task in effective_tasks(day)}
    return bool(task_ids) and task_ids <= completed_ids


def current_streak(progress: UserProgress, effective_tasks: EffectiveTasks) -> int:
    streak = 0
    for day in range(progress.current_day, 0, -1):
        if not is_day_completed(progress, day, effective_tasks):
            break
        streak += 1
    return streak


def total_completed_days(progress: UserProgress, effective_tasks: EffectiveTasks) -> int:
    return sum(1 for day in range(1, progress.current_day + 1) if is_day_completed(progress, day, effective_tasks))


def progress_percentage(completed_today: int, total_today: int) -> float:
    if total_today <= 0:
        return 0
    return completed_today / total_today * 100


def day_status(progress: UserProgress, day: int, effective_tasks: EffectiveTasks) -> DayStatus:
    if day > progress.current_day:
        return "future"
    if day == progress.current_day:
        return "current"
    return "completed" if is_day_completed(progress, day, effective_tasks) else "incomplete"


def journey_percentage(current_day: int) -> float:
    return round(current_day / TOTAL_DAYS * 100, 1)


def milestones(current_day: int) -> List[Dict[str, object]]:
    return [{"day": day, "label": label, "reached": current_day >= day} for day, label in MILESTONES]


def total_tasks_completed(progress: UserProgress) -> int:
    return len(progress.completed_tasks)


def average_rating(ratings: Sequence[TaskRating]) -> Optional[float]:
    if not ratings:
        return None
    return round(sum(rating.rating for rating in ratings) / len(ratings), 2)


def mood_distribution(moods: Sequence[DayMood]) -> Dict[str, int]:
    counts = Counter(mood.mood for mood in moods)
    return {mood: counts.get(mood, 0) for mood in MOOD_SCORES}


def _rating_clause(average: float) -> str:
    if average >= 4.5:
        return "Technique feels easy: ready for bigger challenges."
    if average >= 3.5:
        return "Solid progress: stay with the plan and exposures."
    if average >= 2.5:
        return "Mixed results: focus on one tool per task."
    return "Hard stretch: slow down, use pull-outs, and lower pressure."


def _mood_clause(average: float) -> str:
    if average >= 4.5:
        return "Mood is high: bottle this confidence."
    if average >= 3.5:
        return "Mood is steady: keep the routines going."
    if average >= 2.5:
        return "Some rough patches: pace yourself and stay curious."
    return "Tough week: double down on breathing and gentle starts."


def _best_type(ratings: Sequence[TaskRating], task_lookup: Mapping[str, Task] | Callable[[str], Optional[Task]]) -> Optional[str]:
    lookup = task_lookup if callable(task_lookup) else task_lookup.get
    totals: Dict[str, List[int]] = defaultdict(list)
    for rating in ratings:
        task = lookup(rating.task_id)
        if task is not None:
            totals[task.type].append(rating.rating)
    if not totals:
        return None
    # First type encountered wins a tie.
    return max(totals, key=lambda task_type: sum(totals[task_type]) / len(totals[task_type]))


def create_daily_insight(
    ratings: Sequence[TaskRating],
    moods: Sequence[DayMood],
    task_lookup: Mapping[str, Task] | Callable[[str], Optional[Task]],
) -> str:
    """One or more short sentences summarizing the last week of ratings and moods."""
    recent_ratings = list(ratings)[-INSIGHT_WINDOW:]
    recent_moods = list(moods)[-INSIGHT_WINDOW:]
    if not recent_ratings and not recent_moods:
        return GETTING_STARTED

    parts: List[str] = []
    if recent_ratings:
        parts.append(_rating_clause(sum(r.rating for r in recent_ratings) / len(recent_ratings)))
    if recent_moods:
        scores = [MOOD_SCORES.get(m.mood, NEUTRAL_MOOD_SCORE) for m in recent_moods]
        parts.append(_mood_clause(sum(scores) / len(scores)))
    best = _best_type(recent_ratings, task_lookup)
    if best:
        parts.append(f"Your {best} tasks feel strongest lately.")
    return " ".join(parts)
