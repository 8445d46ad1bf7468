"""Write-side event generation for logging a single set.

Logging a set may need session markers first: a microcycle-started when no
microcycle is open, and a workout-started (named after the plan workout that
contains the exercise) when no workout is open. These helpers only build the
events; appending them to the log is the caller's concern.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Literal

from .models import (
    CanonicalEvent,
    EventKind,
    MicrocycleStarted,
    SetLogged,
    TrainingTree,
    Workout,
    WorkoutStarted,
)

SessionType = Literal["microcycle", "workout"]

_SESSION_MARKERS: dict[str, tuple[EventKind, EventKind]] = {
    "microcycle": (EventKind.MICROCYCLE_STARTED, EventKind.MICROCYCLE_COMPLETED),
    "workout": (EventKind.WORKOUT_STARTED, EventKind.WORKOUT_COMPLETED),
}


def active_session(events: Sequence[CanonicalEvent], session: SessionType) -> bool:
    start_kind, end_kind = _SESSION_MARKERS[session]
    starts = sum(1 for e in events if e.kind == start_kind)
    ends = sum(1 for e in events if e.kind == end_kind)
    return starts > ends


def find_workout_for_exercise(plan: TrainingTree, exercise: str) -> Workout | None:
    for microcycle in plan.microcycles:
        for workout in microcycle.workouts:
            if any(ex.name == exercise for ex in workout.exercises):
                return workout
    return None


def required_startup_events(
    events: Sequence[CanonicalEvent],
    plan: TrainingTree,
    exercise: str,
    *,
    at: datetime,
) -> list[CanonicalEvent]:
    startup: list[CanonicalEvent] = []
    if not active_session(events, "microcycle"):
        startup.append(MicrocycleStarted(timestamp=at))
    if not active_session(events, "workout"):
        workout = find_workout_for_exercise(plan, exercise)
        if workout is not None:
            startup.append(WorkoutStarted(timestamp=at, name=workout.name, day=workout.day))
    return startup


def set_logged_event(
    exercise: str,
    weight: float,
    reps: int,
    *,
    at: datetime,
) -> SetLogged:
    return SetLogged(timestamp=at, exercise=exercise, weight=weight, reps=reps)


def events_for_set_log(
    events: Sequence[CanonicalEvent],
    plan: TrainingTree,
    exercise: str,
    weight: float,
    reps: int,
    *,
    at: datetime,
) -> list[CanonicalEvent]:
    """Events to append so that ``exercise`` gets one more logged set."""
    return [
        *required_startup_events(events, plan, exercise, at=at),
        set_logged_event(exercise, weight, reps, at=at),
    ]
