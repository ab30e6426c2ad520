"""Deterministic 365-day curriculum generator."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List

from flowspeak.api.schemas.program import DAY_NAMES, TASK_TYPES, DayOfWeek, DayProgram, PhaseSummary, Task
from flowspeak.services.task_catalog import (
    PRACTICE_LIBRARY,
    TaskCatalog,
    breath_block,
    cbt_block,
    log_block,
    micro_challenge,
    modification_block,
    quarter_for_day,
    speaking_block,
    technique_block,
)

TOTAL_DAYS = 365
MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


@dataclass(frozen=True)
class Phase:
    name: str
    start: int
    end: int
    focus: str


PHASES = (
    Phase("Foundation", 1, 90, "Awareness, breath, rate, easy onset, light contacts"),
    Phase("Build the Toolset", 91, 180, "Tool chaining, pull-outs, cancellations, CBT/mindfulness"),
    Phase("Transfer & Desensitize", 181, 270, "Real conversations, disclosure, reducing avoidance"),
    Phase("High-Stakes & Maintenance", 271, 365, "Group/meetings, talks, long-term maintenance"),
)

MONTH_FOCUS: Dict[int, str] = {
    1: "Install slow/prolonged speech + breath awareness",
    2: "Add easy onsets + light contacts",
    3: "Blend onsets/contacts with pausing; medium micro-challenges",
    4: "Tool chaining; scripted calls; start pull-outs/cancellations",
    5: "Pull-outs in live speech; daily voluntary stutters",
    6: "Mini-presentations; deliberate 'hard' situations",
    7: "Transfer to real conversations; start disclosure",
    8: "Talks to 2+ people; public voluntary stuttering",
    9: "Attack avoidance situations; reflect after",
    10: "Prep and deliver 10-15 min talk; on-demand tool switching",
    11: "Practice feared settings; use disclosure; stay with stutters",
    12: "Design maintenance plan; watch for early warning signs",
}

# CBT check-ins start with the "Build the Toolset" months.
CBT_START_MONTH = 4
CBT_DAYS = ("Tuesday", "Friday")

__all__ = [
    "CBT_START_MONTH",
    "MONTH_FOCUS",
    "PHASES",
    "TOTAL_DAYS",
    "YEAR_PROGRAM",
    "day_of_week_for_day",
    "generate_year_program",
    "get_catalog",
    "get_day_program",
    "month_for_day",
    "phase_for_day",
    "phase_summaries",
    "quarter_for_day",
]


def month_for_day(day: int) -> int:
    remaining = day
    for index, length in enumerate(MONTH_LENGTHS):
        if remaining <= length:
            return index + 1
        remaining -= length
    return 12


def day_of_week_for_day(day: int) -> DayOfWeek:
    """Weekday of a curriculum day; day 1 is always a Monday."""
    return DAY_NAMES[(day - 1) % 7]


def phase_for_day(day: int) -> Phase:
    for phase in PHASES:
        if phase.start <= day <= phase.end:
            return phase
    return PHASES[-1]


def _with_day_suffix(block: Task, day: int) -> Task:
    return block.model_copy(update={"id": f"{block.id}-d{day}"})


def _tasks_for_day(day: int, month: int, day_of_week: DayOfWeek) -> List[Task]:
    if day_of_week == "Sunday":
        return [breath_block(day), log_block(day)]

    tasks = [
        breath_block(day),
        _with_day_suffix(technique_block(month), day),
        _with_day_suffix(speaking_block(month), day),
    ]
    if month >= CBT_START_MONTH and day_of_week in CBT_DAYS:
        tasks.append(cbt_block(day))
    tasks.extend(
        [
            _with_day_suffix(modification_block(month), day),
            micro_challenge(month, day),
            log_block(day),
        ]
    )
    return tasks


def generate_year_program() -> List[DayProgram]:
    """Build the full curriculum. Same output on every call."""
    program: List[DayProgram] = []
    for day in range(1, TOTAL_DAYS + 1):
        month = month_for_day(day)
        day_of_week = day_of_week_for_day(day)
        phase = phase_for_day(day)
        program.append(
            DayProgram(
                day=day,
                phase=phase.name,
                focus=f"{phase.focus} • {MONTH_FOCUS[month]}",
                day_of_week=day_of_week,
                tasks=_tasks_for_day(day, month, day_of_week),
            )
        )
    return program


YEAR_PROGRAM: List[DayProgram] = generate_year_program()


def get_day_program(day: int) -> DayProgram:
    """Program for a day, clamping out-of-range values into 1..365."""
    clamped = min(max(day, 1), TOTAL_DAYS)
    return YEAR_PROGRAM[clamped - 1]


def phase_summaries(program: List[DayProgram] | None = None) -> List[PhaseSummary]:
    """Per-phase day window, focus and the task types scheduled inside it."""
    program = program if program is not None else YEAR_PROGRAM
    summaries: List[PhaseSummary] = []
    for phase in PHASES:
        seen = {
            task.type
            for day_program in program
            if phase.start <= day_program.day <= phase.end
            for task in day_program.tasks
        }
        summaries.append(
            PhaseSummary(
                name=phase.name,
                start=phase.start,
                end=phase.end,
                focus=phase.focus,
                task_types=[task_type for task_type in TASK_TYPES if task_type in seen],
            )
        )
    return summaries


@lru_cache
def get_catalog() -> TaskCatalog:
    """Index over every curriculum instance plus the practice library."""
    return TaskCatalog([task for day_program in YEAR_PROGRAM for task in day_program.tasks] + PRACTICE_LIBRARY)
