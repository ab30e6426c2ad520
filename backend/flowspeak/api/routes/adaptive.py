"""Adaptive mode route."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from flowspeak.api.operations import core_operation, request_id_for
from flowspeak.api.schemas.dashboard import TodayResponse
from flowspeak.services.progress_service import ProgressService, get_progress_service

router = APIRouter()


@router.post("/adaptive/toggle", response_model=TodayResponse, tags=["adaptive"])
def toggle_adaptive(
    http_request: Request,
    service: ProgressService = Depends(get_progress_service),
) -> TodayResponse:
    """Switch between the fixed curriculum and adaptively selected tasks."""
    with core_operation("adaptive.toggle") as extra:
        progress = service.toggle_adaptive_mode()
        extra["enabled"] = progress.use_adaptive_tasks
        today = service.today()
    return today.model_copy(update={"request_id": request_id_for(http_request)})
