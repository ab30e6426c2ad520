"""Task action routes: completion, rating and swapping."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from flowspeak.api.operations import core_operation, request_id_for
from flowspeak.api.schemas.dashboard import TodayResponse
from flowspeak.api.schemas.task import TaskRatingRequest, TaskSwapRequest, TaskSwapResponse
from flowspeak.services.progress_service import ProgressService, get_progress_service

router = APIRouter()


@router.post("/tasks/{task_id}/complete", response_model=TodayResponse, tags=["tasks"])
def complete_task(
    task_id: str,
    http_request: Request,
    service: ProgressService = Depends(get_progress_service),
) -> TodayResponse:
    """Mark a task of today's list complete. Unknown or off-plan ids are ignored."""
    with core_operation("task.complete", {"task_id": task_id}):
        service.complete_task(task_id)
        today = service.today()
    return today.model_copy(update={"request_id": request_id_for(http_request)})


@router.delete("/tasks/{task_id}/complete", response_model=TodayResponse, tags=["tasks"])
def uncomplete_task(
    task_id: str,
    http_request: Request,
    service: ProgressService = Depends(get_progress_service),
) -> TodayResponse:
    with core_operation("task.uncomplete", {"task_id": task_id}):
        service.uncomplete_task(task_id)
        today = service.today()
    return today.model_copy(update={"request_id": request_id_for(http_request)})


@router.post("/tasks/{task_id}/rating", response_model=TodayResponse, tags=["tasks"])
def rate_task(
    task_id: str,
    payload: TaskRatingRequest,
    http_request: Request,
    service: ProgressService = Depends(get_progress_service),
) -> TodayResponse:
    with core_operation("task.rate", {"task_id": task_id, "rating": payload.rating}):
        service.rate_task(task_id, payload.rating, payload.note)
        today = service.today()
    return today.model_copy(update={"request_id": request_id_for(http_request)})


@router.post("/tasks/{task_id}/swap", response_model=TaskSwapResponse, tags=["tasks"])
def swap_task(
    task_id: str,
    http_request: Request,
    payload: TaskSwapRequest | None = None,
    service: ProgressService = Depends(get_progress_service),
) -> TaskSwapResponse:
    """Swap a task in today's list for a same-type alternative when one exists."""
    reason = payload.reason if payload else None
    with core_operation("task.swap", {"task_id": task_id, "reason": reason}) as extra:
        alternative = service.swap_task(task_id, reason)
        extra["swapped"] = alternative is not None
        today = service.today()

    request_id = request_id_for(http_request)
    return TaskSwapResponse(
        swapped=alternative is not None,
        task=alternative,
        today=today.model_copy(update={"request_id": request_id}),
        request_id=request_id,
    )
