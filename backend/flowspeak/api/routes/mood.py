"""Mood logging route."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from flowspeak.api.operations import core_operation, request_id_for
from flowspeak.api.schemas.dashboard import TodayResponse
from flowspeak.api.schemas.task import MoodRequest
from flowspeak.services.progress_service import ProgressService, get_progress_service

router = APIRouter()


@router.post("/mood", response_model=TodayResponse, tags=["mood"])
def log_mood(
    payload: MoodRequest,
    http_request: Request,
    service: ProgressService = Depends(get_progress_service),
) -> TodayResponse:
    """Record today's mood; a second entry for the same day replaces the first."""
    with core_operation("mood.log", {"mood": payload.mood}):
        service.log_mood(payload.mood, payload.note)
        today = service.today()
    return today.model_copy(update={"request_id": request_id_for(http_request)})
