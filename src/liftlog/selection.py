"""Workout selector: which workout should the athlete be looking at now."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .models import (
    CanonicalEvent,
    CurrentWorkout,
    EventKind,
    SetEntry,
    TrainingTree,
    Workout,
    WorkoutStarted,
)

logger = logging.getLogger(__name__)


def is_set_complete(entry: SetEntry) -> bool:
    """A set is done once both actual weight and actual reps are logged."""
    return entry.actual_weight is not None and entry.actual_reps is not None


def is_set_incomplete(entry: SetEntry) -> bool:
    return not is_set_complete(entry)


def workout_has_incomplete_sets(workout: Workout) -> bool:
    return any(
        is_set_incomplete(entry)
        for exercise in workout.exercises
        for entry in exercise.sets
    )


def active_workout_name(events: Sequence[CanonicalEvent]) -> str | None:
    """Name of the workout in progress, if any.

    A workout is in progress when there are more workout-started markers than
    workout-completed markers; the latest start names it.
    """
    starts = [e for e in events if isinstance(e, WorkoutStarted)]
    completed = sum(1 for e in events if e.kind == EventKind.WORKOUT_COMPLETED)
    if len(starts) > completed:
        return starts[-1].name
    return None


def flatten_workouts(tree: TrainingTree) -> list[CurrentWorkout]:
    return [
        CurrentWorkout(microcycle_index=index, workout=workout)
        for index, microcycle in enumerate(tree.microcycles)
        for workout in microcycle.workouts
    ]


def find_current_workout(
    merged: TrainingTree,
    events: Sequence[CanonicalEvent],
) -> CurrentWorkout | None:
    """Return the active workout, else the first one with sets left to do.

    ``None`` means every workout in the merged tree is complete.
    """
    candidates = flatten_workouts(merged)

    active_name = active_workout_name(events)
    if active_name is not None:
        for candidate in candidates:
            if candidate.workout.name == active_name:
                return candidate
        logger.info("Active workout %r not found in merged plan", active_name)

    for candidate in candidates:
        if workout_has_incomplete_sets(candidate.workout):
            return candidate
    return None
