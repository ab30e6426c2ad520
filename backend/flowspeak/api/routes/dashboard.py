"""Stats and calendar routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from flowspeak.api.operations import core_operation, request_id_for
from flowspeak.api.schemas.dashboard import CalendarResponse, StatsResponse
from flowspeak.services.progress_service import ProgressService, get_progress_service

router = APIRouter()


@router.get("/stats", response_model=StatsResponse, tags=["dashboard"])
def get_stats(
    http_request: Request,
    service: ProgressService = Depends(get_progress_service),
) -> StatsResponse:
    with core_operation("stats.get") as extra:
        stats = service.stats()
        extra["current_day"] = stats.current_day
    return stats.model_copy(update={"request_id": request_id_for(http_request)})


@router.get("/calendar", response_model=CalendarResponse, tags=["dashboard"])
def get_calendar(
    http_request: Request,
    service: ProgressService = Depends(get_progress_service),
) -> CalendarResponse:
    """Status of every program day, grouped in 30-day blocks."""
    with core_operation("calendar.get"):
        calendar = service.calendar()
    return calendar.model_copy(update={"request_id": request_id_for(http_request)})
