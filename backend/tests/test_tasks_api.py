from __future__ import annotations

import random

import pytest
from fastapi.testclient import TestClient

from flowspeak.main import app
from flowspeak.services.curriculum import YEAR_PROGRAM, get_catalog
from flowspeak.services.program_resolver import ProgramResolver
from flowspeak.services.progress_service import ProgressService, get_progress_service
from flowspeak.services.progress_store import ProgressStore


@pytest.fixture()
def client(storage, clock):
    rng = random.Random(11)
    store = ProgressStore(storage, storage_key="@api_progress", now=clock)
    service = ProgressService(store, ProgramResolver(YEAR_PROGRAM, get_catalog(), rng), rng=rng)

    app.dependency_overrides[get_progress_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client, storage
    app.dependency_overrides.clear()


def test_today_returns_first_day(client):
    test_client, _ = client
    response = test_client.get("/today", headers={"X-Request-Id": "req-today"})

    assert response.status_code == 200
    body = response.json()
    assert body["dayProgram"]["day"] == 1
    assert len(body["dayProgram"]["tasks"]) == 6
    assert body["progressPercentage"] == 0
    assert body["insight"] == "You're just getting started. Focus on building consistency."
    assert body["requestId"] == "req-today"


def test_complete_and_uncomplete_task(client):
    test_client, _ = client

    first = test_client.post("/tasks/breath-1/complete")
    assert first.status_code == 200
    assert first.json()["completedTaskIds"] == ["breath-1"]
    assert first.json()["progressPercentage"] == pytest.approx(100 / 6)

    again = test_client.post("/tasks/breath-1/complete")
    assert again.json()["completedTaskIds"] == ["breath-1"]

    removed = test_client.delete("/tasks/breath-1/complete")
    assert removed.json()["completedTaskIds"] == []


def test_unknown_task_is_ignored(client):
    test_client, _ = client
    response = test_client.post("/tasks/not-a-task/complete")

    assert response.status_code == 200
    assert response.json()["completedTaskIds"] == []


def test_rating_and_mood_validation(client):
    test_client, _ = client

    assert test_client.post("/tasks/breath-1/rating", json={"rating": 6}).status_code == 422
    assert test_client.post("/mood", json={"mood": "ecstatic"}).status_code == 422

    rated = test_client.post("/tasks/breath-1/rating", json={"rating": 4, "note": "calm"})
    assert rated.status_code == 200
    assert rated.json()["todayRatings"][0]["rating"] == 4

    mood = test_client.post("/mood", json={"mood": "good"})
    assert mood.json()["todayMood"]["mood"] == "good"


def test_swap_task(client):
    test_client, _ = client

    response = test_client.post("/tasks/technique-m1-d1/swap", json={"reason": "too hard"})
    assert response.status_code == 200
    body = response.json()
    assert body["swapped"] is True
    assert body["task"]["type"] == "speech"
    today_ids = [task["id"] for task in body["today"]["dayProgram"]["tasks"]]
    assert "technique-m1-d1" not in today_ids
    assert body["task"]["id"] in today_ids

    missing = test_client.post("/tasks/not-a-task/swap")
    assert missing.json()["swapped"] is False
    assert missing.json()["task"] is None


def test_extra_practice(client):
    test_client, _ = client
    response = test_client.post("/practice/read-1")

    assert response.json()["extraPracticeIds"] == ["read-1"]
    assert response.json()["completedTaskIds"] == []
    assert test_client.delete("/practice/read-1").json()["extraPracticeIds"] == []


def test_preferences_and_adaptive_toggle(client):
    test_client, _ = client

    assert test_client.get("/preferences").json()["availableTimeSlots"] == [5, 10, 15, 20]
    updated = test_client.patch("/preferences", json={"availableTimeSlots": [5, 10], "fearedWords": ["hello"]})
    assert updated.status_code == 200
    assert updated.json()["availableTimeSlots"] == [5, 10]
    assert updated.json()["fearedWords"] == ["hello"]

    toggled = test_client.post("/adaptive/toggle")
    assert toggled.json()["useAdaptiveTasks"] is True
    assert toggled.json()["dayProgram"]["tasks"]


def test_day_navigation(client):
    test_client, _ = client

    assert test_client.post("/days/next").json()["dayProgram"]["day"] == 2
    assert test_client.post("/days/previous").json()["dayProgram"]["day"] == 1
    assert test_client.post("/days/previous").json()["dayProgram"]["day"] == 1


def test_program_routes(client):
    test_client, _ = client

    sunday = test_client.get("/program/7")
    assert sunday.status_code == 200
    assert [task["id"] for task in sunday.json()["tasks"]] == ["breath-7", "log-7"]
    assert sunday.json()["dayOfWeek"] == "Sunday"

    assert test_client.get("/program/0").status_code == 422
    assert test_client.get("/program/366").status_code == 422

    phases = test_client.get("/program/phases")
    assert phases.status_code == 200
    assert len(phases.json()) == 4


def test_stats_and_calendar(client):
    test_client, _ = client

    stats = test_client.get("/stats").json()
    assert stats["currentDay"] == 1
    assert stats["journeyPercentage"] == 0.3
    assert stats["averageRating"] is None
    assert [m["reached"] for m in stats["milestones"]] == [False, False, False, False]

    calendar = test_client.get("/calendar").json()
    assert len(calendar["months"]) == 13
    assert calendar["months"][0]["days"][0] == {"day": 1, "status": "current"}
    assert calendar["months"][-1]["days"][-1]["day"] == 365


def test_reset(client):
    test_client, _ = client
    test_client.post("/tasks/breath-1/complete")
    test_client.post("/days/next")

    body = test_client.post("/progress/reset").json()

    assert body["dayProgram"]["day"] == 1
    assert body["completedTaskIds"] == []


def test_save_failure_returns_503(client):
    test_client, storage = client
    assert test_client.get("/today").status_code == 200
    storage.fail_sets = True

    response = test_client.post("/tasks/breath-1/complete")

    assert response.status_code == 503
    assert "Could not save progress" in response.json()["detail"]
    storage.fail_sets = False
    recovered = test_client.get("/today").json()
    assert recovered["completedTaskIds"] == []
    assert recovered["saveError"]


def test_load_failure_returns_503(client):
    test_client, storage = client
    storage.fail_gets = 2

    response = test_client.get("/today")

    assert response.status_code == 503
    assert test_client.get("/today").status_code == 200
