"""liftlog: event-sourced workout progress projection."""

from .errors import LiftlogError, MalformedRawEvent, UnknownEventKind
from .merge import merge_progress
from .models import (
    CanonicalEvent,
    CurrentWorkout,
    DayOfWeek,
    EventKind,
    Exercise,
    Microcycle,
    MicrocycleCompleted,
    MicrocycleStarted,
    RawEventRecord,
    SetEntry,
    SetLogged,
    TrainingTree,
    Workout,
    WorkoutCompleted,
    WorkoutStarted,
)
from .normalize import normalize_event, normalize_events, order_events, to_raw_event
from .pipeline import WorkoutState, project_workout_state
from .projection import build_progress, sections_between
from .selection import find_current_workout, is_set_complete, is_set_incomplete

__all__ = [
    "CanonicalEvent",
    "CurrentWorkout",
    "DayOfWeek",
    "EventKind",
    "Exercise",
    "LiftlogError",
    "MalformedRawEvent",
    "Microcycle",
    "MicrocycleCompleted",
    "MicrocycleStarted",
    "RawEventRecord",
    "SetEntry",
    "SetLogged",
    "TrainingTree",
    "UnknownEventKind",
    "Workout",
    "WorkoutCompleted",
    "WorkoutStarted",
    "WorkoutState",
    "build_progress",
    "find_current_workout",
    "is_set_complete",
    "is_set_incomplete",
    "merge_progress",
    "normalize_event",
    "normalize_events",
    "order_events",
    "project_workout_state",
    "sections_between",
    "to_raw_event",
]
