"""Progress lifecycle routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from flowspeak.api.operations import core_operation, request_id_for
from flowspeak.api.schemas.dashboard import TodayResponse
from flowspeak.services.progress_service import ProgressService, get_progress_service

router = APIRouter()


@router.post("/progress/reset", response_model=TodayResponse, tags=["progress"])
def reset_progress(
    http_request: Request,
    service: ProgressService = Depends(get_progress_service),
) -> TodayResponse:
    """Erase all progress and start again from day 1."""
    with core_operation("progress.reset"):
        service.reset()
        today = service.today()
    return today.model_copy(update={"request_id": request_id_for(http_request)})
