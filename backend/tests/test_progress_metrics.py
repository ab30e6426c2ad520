from __future__ import annotations

import pytest

from flowspeak.api.schemas.progress import CompletedTask, DayMood, TaskRating, default_progress
from flowspeak.services import metrics

START_MS = 1_704_099_600_000


@pytest.fixture()
def tasks_by_day(task_factory):
    return {
        1: [task_factory("a1", "breathing"), task_factory("b1", "speech")],
        2: [task_factory("a2", "breathing"), task_factory("b2", "speech")],
        3: [task_factory("a3", "breathing")],
    }


def _progress(current_day: int, *completions: tuple[str, int]):
    return default_progress(START_MS).model_copy(
        update={
            "current_day": current_day,
            "completed_tasks": [CompletedTask(task_id=t, day=d, completed_at=START_MS) for t, d in completions],
        }
    )


def _effective(tasks_by_day):
    return lambda day: tasks_by_day.get(day, [])


def test_day_completion_counts_only_effective_ids(tasks_by_day) -> None:
    effective = _effective(tasks_by_day)

    assert metrics.is_day_completed(_progress(1, ("a1", 1), ("b1", 1)), 1, effective) is True
    assert metrics.is_day_completed(_progress(1, ("a1", 1), ("zz", 1)), 1, effective) is False
    assert metrics.is_day_completed(_progress(1), 1, effective) is False
    assert metrics.is_day_completed(_progress(5, ("x", 4)), 4, effective) is False


def test_streak_stops_at_first_incomplete_day(tasks_by_day) -> None:
    effective = _effective(tasks_by_day)
    all_done = _progress(3, ("a1", 1), ("b1", 1), ("a2", 2), ("b2", 2), ("a3", 3))
    gap = _progress(3, ("a1", 1), ("b1", 1), ("a2", 2), ("a3", 3))

    assert metrics.current_streak(all_done, effective) == 3
    assert metrics.current_streak(gap, effective) == 1
    assert metrics.total_completed_days(gap, effective) == 2


def test_streak_is_zero_when_today_is_open(tasks_by_day) -> None:
    progress = _progress(2, ("a1", 1), ("b1", 1))

    assert metrics.current_streak(progress, _effective(tasks_by_day)) == 0
    assert metrics.total_completed_days(progress, _effective(tasks_by_day)) == 1


def test_progress_percentage() -> None:
    assert metrics.progress_percentage(0, 0) == 0
    assert metrics.progress_percentage(1, 2) == 50
    assert metrics.progress_percentage(2, 2) == 100


def test_day_status(tasks_by_day) -> None:
    progress = _progress(3, ("a1", 1), ("b1", 1))
    effective = _effective(tasks_by_day)

    assert metrics.day_status(progress, 1, effective) == "completed"
    assert metrics.day_status(progress, 2, effective) == "incomplete"
    assert metrics.day_status(progress, 3, effective) == "current"
    assert metrics.day_status(progress, 4, effective) == "future"


def test_journey_stats() -> None:
    assert metrics.journey_percentage(1) == 0.3
    assert metrics.journey_percentage(365) == 100.0
    assert [m["reached"] for m in metrics.milestones(90)] == [True, True, False, False]
    assert metrics.average_rating([]) is None


def test_aggregates() -> None:
    ratings = [TaskRating(task_id="a", day=1, rating=r, timestamp=0) for r in (4, 5)]
    moods = [DayMood(day=d, mood=m, timestamp=0) for d, m in ((1, "good"), (2, "good"), (3, "difficult"))]

    assert metrics.average_rating(ratings) == 4.5
    assert metrics.mood_distribution(moods) == {"great": 0, "good": 2, "okay": 0, "struggling": 0, "difficult": 1}
    assert metrics.total_tasks_completed(_progress(1, ("a1", 1), ("x", 2))) == 2


def test_insight_without_data() -> None:
    assert metrics.create_daily_insight([], [], {}) == "You're just getting started. Focus on building consistency."


def test_insight_orders_rating_mood_and_best_type(task_factory) -> None:
    lookup = {"s": task_factory("s", "speech"), "b": task_factory("b", "breathing")}
    ratings = [
        TaskRating(task_id="s", day=1, rating=5, timestamp=0),
        TaskRating(task_id="b", day=1, rating=3, timestamp=0),
    ]
    moods = [DayMood(day=1, mood="struggling", timestamp=0)]

    insight = metrics.create_daily_insight(ratings, moods, lookup)

    assert insight == (
        "Solid progress: stay with the plan and exposures. "
        "Tough week: double down on breathing and gentle starts. "
        "Your speech tasks feel strongest lately."
    )


def test_insight_uses_last_seven_entries(task_factory) -> None:
    ratings = [TaskRating(task_id="gone", day=1, rating=1, timestamp=0)] + [
        TaskRating(task_id="gone", day=d, rating=5, timestamp=0) for d in range(2, 9)
    ]
    moods = [DayMood(day=d, mood="great", timestamp=0) for d in range(1, 8)]

    assert metrics.create_daily_insight(ratings, moods, {}) == (
        "Technique feels easy: ready for bigger challenges. Mood is high: bottle this confidence."
    )
    assert metrics.create_daily_insight([], [DayMood(day=1, mood="okay", timestamp=0)], {}) == (
        "Some rough patches: pace yourself and stay curious."
    )
