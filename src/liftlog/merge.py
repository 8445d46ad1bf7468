"""Plan merger: overlay projected progress onto the prescribed plan.

The plan is authoritative for structure. Microcycles and workouts line up by
position, exercises by name, sets by position again. Where one side runs out
the other side is kept as it is, so nothing planned and nothing logged at
set level goes missing.

Known gap: a logged exercise the plan does not list is not carried into the
merged workout, while extra sets of a planned exercise are.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from itertools import zip_longest

from .models import Exercise, Microcycle, SetEntry, TrainingTree, Workout

logger = logging.getLogger(__name__)

_EMPTY_SET = SetEntry()


def merge_set(planned: SetEntry, actual: SetEntry) -> SetEntry:
    return SetEntry(
        prescribed_weight=planned.prescribed_weight,
        prescribed_reps=planned.prescribed_reps,
        actual_weight=actual.actual_weight,
        actual_reps=actual.actual_reps,
    )


def merge_sets(planned: Sequence[SetEntry], actual: Sequence[SetEntry]) -> list[SetEntry]:
    """Pair sets by position, padding the shorter side with empty sets.

    Extra logged sets come out without prescribed values; planned sets not yet
    done come out without actual values.
    """
    return [
        merge_set(p, a)
        for p, a in zip_longest(planned, actual, fillvalue=_EMPTY_SET)
    ]


def find_by_name(exercises: Sequence[Exercise], name: str) -> Exercise | None:
    for exercise in exercises:
        if exercise.name == name:
            return exercise
    return None


def merge_exercise(planned: Exercise, actual: Exercise | None) -> Exercise:
    if actual is None:
        return planned
    return Exercise(name=planned.name, sets=merge_sets(planned.sets, actual.sets))


def merge_workout(planned: Workout, actual: Workout | None) -> Workout:
    """Merge one workout; name and day always come from the plan."""
    if actual is None:
        return planned
    return Workout(
        name=planned.name,
        day=planned.day,
        exercises=[
            merge_exercise(ex, find_by_name(actual.exercises, ex.name))
            for ex in planned.exercises
        ],
    )


def merge_microcycle(planned: Microcycle | None, actual: Microcycle | None) -> Microcycle:
    if actual is None:
        return planned if planned is not None else Microcycle()
    if planned is None:
        return actual

    workouts: list[Workout] = []
    for p, a in zip_longest(planned.workouts, actual.workouts):
        workouts.append(a if p is None else merge_workout(p, a))
    return Microcycle(workouts=workouts)


def merge_progress(plan: TrainingTree, progress: TrainingTree) -> TrainingTree:
    """Overlay ``progress`` onto ``plan``; neither input is modified.

    The result has ``max(len(plan), len(progress))`` microcycles. Progress
    beyond the end of the plan is passed through unmerged.
    """
    merged = TrainingTree(
        microcycles=[
            merge_microcycle(p, a)
            for p, a in zip_longest(plan.microcycles, progress.microcycles)
        ]
    )
    logger.debug(
        "Merged plan (%d microcycles) with progress (%d microcycles)",
        len(plan.microcycles),
        len(progress.microcycles),
    )
    return merged
