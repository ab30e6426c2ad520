"""Extra practice routes (outside the day's plan)."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from flowspeak.api.operations import core_operation, request_id_for
from flowspeak.api.schemas.dashboard import TodayResponse
from flowspeak.services.progress_service import ProgressService, get_progress_service

router = APIRouter()


@router.post("/practice/{task_id}", response_model=TodayResponse, tags=["practice"])
def complete_practice(
    task_id: str,
    http_request: Request,
    service: ProgressService = Depends(get_progress_service),
) -> TodayResponse:
    """Record an extra practice session. Never counts toward day completion or streaks."""
    with core_operation("practice.complete", {"task_id": task_id}):
        service.complete_extra_practice(task_id)
        today = service.today()
    return today.model_copy(update={"request_id": request_id_for(http_request)})


@router.delete("/practice/{task_id}", response_model=TodayResponse, tags=["practice"])
def uncomplete_practice(
    task_id: str,
    http_request: Request,
    service: ProgressService = Depends(get_progress_service),
) -> TodayResponse:
    with core_operation("practice.uncomplete", {"task_id": task_id}):
        service.uncomplete_extra_practice(task_id)
        today = service.today()
    return today.model_copy(update={"request_id": request_id_for(http_request)})
