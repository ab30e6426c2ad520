"""Manual day navigation routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from flowspeak.api.operations import core_operation, request_id_for
from flowspeak.api.schemas.dashboard import TodayResponse
from flowspeak.services.progress_service import ProgressService, get_progress_service

router = APIRouter()


@router.post("/days/next", response_model=TodayResponse, tags=["days"])
def next_day(
    http_request: Request,
    service: ProgressService = Depends(get_progress_service),
) -> TodayResponse:
    with core_operation("days.next"):
        service.go_to_next_day()
        today = service.today()
    return today.model_copy(update={"request_id": request_id_for(http_request)})


@router.post("/days/previous", response_model=TodayResponse, tags=["days"])
def previous_day(
    http_request: Request,
    service: ProgressService = Depends(get_progress_service),
) -> TodayResponse:
    with core_operation("days.previous"):
        service.go_to_previous_day()
        today = service.today()
    return today.model_copy(update={"request_id": request_id_for(http_request)})
