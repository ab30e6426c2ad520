"""Today view route."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from flowspeak.api.operations import core_operation, request_id_for
from flowspeak.api.schemas.dashboard import TodayResponse
from flowspeak.services.progress_service import ProgressService, get_progress_service

router = APIRouter()


@router.get("/today", response_model=TodayResponse, tags=["today"])
def get_today(
    http_request: Request,
    service: ProgressService = Depends(get_progress_service),
) -> TodayResponse:
    """Return the current day's effective program together with its derived metrics."""
    with core_operation("today.get") as extra:
        today = service.today()
        extra["day"] = today.day_program.day
    return today.model_copy(update={"request_id": request_id_for(http_request)})
