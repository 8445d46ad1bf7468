"""Domain models: canonical events and training trees.

Events form a closed union keyed on ``kind``. Each variant only carries the
fields that make sense for it, so a ``workout-completed`` event with a weight
cannot be constructed.

Training trees share one shape for the plan, the projected progress and the
merged result: microcycles -> workouts -> exercises -> sets.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class EventKind(StrEnum):
    MICROCYCLE_STARTED = "microcycle-started"
    MICROCYCLE_COMPLETED = "microcycle-completed"
    WORKOUT_STARTED = "workout-started"
    WORKOUT_COMPLETED = "workout-completed"
    SET_LOGGED = "set-logged"


class DayOfWeek(StrEnum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    timestamp: datetime


class MicrocycleStarted(_Event):
    kind: Literal[EventKind.MICROCYCLE_STARTED] = EventKind.MICROCYCLE_STARTED


class MicrocycleCompleted(_Event):
    kind: Literal[EventKind.MICROCYCLE_COMPLETED] = EventKind.MICROCYCLE_COMPLETED


class WorkoutStarted(_Event):
    kind: Literal[EventKind.WORKOUT_STARTED] = EventKind.WORKOUT_STARTED
    name: str | None = None
    day: DayOfWeek | None = None


class WorkoutCompleted(_Event):
    kind: Literal[EventKind.WORKOUT_COMPLETED] = EventKind.WORKOUT_COMPLETED


class SetLogged(_Event):
    kind: Literal[EventKind.SET_LOGGED] = EventKind.SET_LOGGED
    exercise: str | None = None
    weight: float | None = None
    reps: int | None = None


CanonicalEvent = Annotated[
    Union[
        MicrocycleStarted,
        MicrocycleCompleted,
        WorkoutStarted,
        WorkoutCompleted,
        SetLogged,
    ],
    Field(discriminator="kind"),
]

EVENT_MODELS: dict[EventKind, type[_Event]] = {
    EventKind.MICROCYCLE_STARTED: MicrocycleStarted,
    EventKind.MICROCYCLE_COMPLETED: MicrocycleCompleted,
    EventKind.WORKOUT_STARTED: WorkoutStarted,
    EventKind.WORKOUT_COMPLETED: WorkoutCompleted,
    EventKind.SET_LOGGED: SetLogged,
}


class RawEventRecord(BaseModel):
    """Event row as handed over by the persistence layer.

    Values are loosely typed: weight and reps frequently arrive as form text.
    """

    model_config = ConfigDict(extra="ignore")

    id: str | int | UUID | None = None
    event_type: str
    timestamp: datetime | str | None = None
    name: str | None = None
    day: str | None = None
    exercise: str | None = None
    weight: float | int | str | None = None
    reps: int | float | str | None = None


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class SetEntry(_Node):
    prescribed_weight: float | None = None
    prescribed_reps: int | None = None
    actual_weight: float | None = None
    actual_reps: int | None = None


class Exercise(_Node):
    name: str
    sets: list[SetEntry] = Field(default_factory=list)


class Workout(_Node):
    name: str | None = None
    day: DayOfWeek | None = None
    exercises: list[Exercise] = Field(default_factory=list)


class Microcycle(_Node):
    workouts: list[Workout] = Field(default_factory=list)


class TrainingTree(_Node):
    microcycles: list[Microcycle] = Field(default_factory=list)


class CurrentWorkout(_Node):
    microcycle_index: int = Field(ge=0)
    workout: Workout
