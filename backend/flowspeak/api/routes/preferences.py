"""User preference routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from flowspeak.api.operations import core_operation
from flowspeak.api.schemas.progress import PreferencesUpdate, UserPreferences
from flowspeak.services.progress_service import ProgressService, get_progress_service

router = APIRouter()


@router.get("/preferences", response_model=UserPreferences, tags=["preferences"])
def get_preferences(service: ProgressService = Depends(get_progress_service)) -> UserPreferences:
    with core_operation("preferences.get"):
        return service.ensure_loaded().preferences


@router.patch("/preferences", response_model=UserPreferences, tags=["preferences"])
def update_preferences(
    payload: PreferencesUpdate,
    service: ProgressService = Depends(get_progress_service),
) -> UserPreferences:
    """Apply a partial update; omitted fields keep their stored values."""
    changed = sorted(payload.model_dump(exclude_none=True))
    with core_operation("preferences.update", {"fields": changed}):
        return service.update_preferences(payload).preferences
