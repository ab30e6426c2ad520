"""Schemas for catalog tasks and curriculum days."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TaskType = Literal["breathing", "speech", "reading", "mindfulness", "exercise"]
TaskDifficulty = Literal["beginner", "easy", "medium", "hard", "expert"]
TaskSetting = Literal["private", "trusted_person", "small_group", "public"]
DayOfWeek = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

TASK_TYPES: tuple[TaskType, ...] = ("breathing", "speech", "reading", "mindfulness", "exercise")
DIFFICULTY_ORDER: tuple[TaskDifficulty, ...] = ("beginner", "easy", "medium", "hard", "expert")
DAY_NAMES: tuple[DayOfWeek, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


class CamelModel(BaseModel):
    """Base model that reads and writes the camelCase keys of the stored shape."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Task(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    title: str
    description: str
    type: TaskType
    duration: int = Field(ge=0)
    instructions: List[str] = Field(min_length=1)
    difficulty: Optional[TaskDifficulty] = None
    quarter: Optional[int] = Field(default=None, ge=1, le=4)
    setting: Optional[TaskSetting] = None
    tags: Optional[List[str]] = None
    why_it_matters: Optional[str] = None
    tips: Optional[List[str]] = None


class DayProgram(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    day: int = Field(ge=1, le=365)
    phase: str
    focus: str
    day_of_week: DayOfWeek
    tasks: List[Task]


class PhaseSummary(CamelModel):
    name: str
    start: int
    end: int
    focus: str
    task_types: List[TaskType]
