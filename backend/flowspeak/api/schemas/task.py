"""Request and response payloads for task actions."""
from __future__ import annotations

from typing import Optional

from pydantic import Field

from flowspeak.api.schemas.dashboard import TodayResponse
from flowspeak.api.schemas.program import CamelModel, Task
from flowspeak.api.schemas.progress import MoodType


class TaskRatingRequest(CamelModel):
    rating: int = Field(ge=1, le=5)
    note: Optional[str] = None


class TaskSwapRequest(CamelModel):
    reason: Optional[str] = None


class TaskSwapResponse(CamelModel):
    swapped: bool
    task: Optional[Task] = None
    today: TodayResponse
    request_id: str = ""


class MoodRequest(CamelModel):
    mood: MoodType
    note: Optional[str] = None
