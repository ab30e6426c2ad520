"""Curriculum browsing routes."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path

from flowspeak.api.operations import core_operation
from flowspeak.api.schemas.program import DayProgram, PhaseSummary
from flowspeak.services.progress_service import ProgressService, get_progress_service

router = APIRouter()


@router.get("/program/phases", response_model=List[PhaseSummary], tags=["program"])
def list_phases(service: ProgressService = Depends(get_progress_service)) -> List[PhaseSummary]:
    with core_operation("program.phases"):
        return service.phases()


@router.get("/program/{day}", response_model=DayProgram, tags=["program"])
def get_program_day(
    day: int = Path(..., ge=1, le=365),
    service: ProgressService = Depends(get_progress_service),
) -> DayProgram:
    """Program of a single day with the user's swaps and frozen plan applied."""
    with core_operation("program.day", {"day": day}):
        return service.day_program(day)
