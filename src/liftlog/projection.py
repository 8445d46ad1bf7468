"""Projection engine: canonical event log -> progress tree.

The log is flat; structure is recovered from marker events alone.
Microcycles are bounded by microcycle-started/-completed, workouts inside them
by workout-started/-completed, and set-logged events are grouped by exercise.

A section without its end marker is still emitted: it is the microcycle or
workout currently in progress. Events outside any section are orphans and are
dropped without complaint; validating the log is not this module's job.

Full recompute on every call; nothing is cached between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .models import (
    CanonicalEvent,
    EventKind,
    Exercise,
    Microcycle,
    SetEntry,
    SetLogged,
    TrainingTree,
    Workout,
    WorkoutStarted,
)

logger = logging.getLogger(__name__)

# Group key for set-logged events that carry no exercise name.
UNNAMED_EXERCISE = ""


def sections_between(
    events: Sequence[CanonicalEvent],
    start_kind: EventKind,
    end_kind: EventKind,
) -> list[list[CanonicalEvent]]:
    """Split ``events`` into sections opened by ``start_kind``.

    A section runs up to and including the next ``end_kind``, or to the end of
    the input when there is none. A later ``start_kind`` inside an open section
    is part of that section, not a new one. Scanning resumes right after the
    section; events outside a section are skipped.
    """
    sections: list[list[CanonicalEvent]] = []
    index = 0
    total = len(events)

    while index < total:
        # Find the next start marker; anything before it is orphaned.
        while index < total and events[index].kind != start_kind:
            index += 1
        if index >= total:
            break

        section: list[CanonicalEvent] = [events[index]]
        index += 1
        while index < total:
            event = events[index]
            section.append(event)
            index += 1
            if event.kind == end_kind:
                break
        sections.append(section)

    return sections


def to_set(event: SetLogged) -> SetEntry:
    return SetEntry(actual_weight=event.weight, actual_reps=event.reps)


def group_sets_by_exercise(events: Sequence[CanonicalEvent]) -> list[Exercise]:
    """Group set-logged events by exercise in first-seen order."""
    groups: dict[str, list[SetEntry]] = {}
    for event in events:
        if not isinstance(event, SetLogged):
            continue
        name = event.exercise if event.exercise is not None else UNNAMED_EXERCISE
        groups.setdefault(name, []).append(to_set(event))
    return [Exercise(name=name, sets=sets) for name, sets in groups.items()]


def to_workout(section: Sequence[CanonicalEvent]) -> Workout:
    """Build a workout from a section opened by its workout-started marker."""
    start, *content = section
    name = start.name if isinstance(start, WorkoutStarted) else None
    day = start.day if isinstance(start, WorkoutStarted) else None
    return Workout(name=name, day=day, exercises=group_sets_by_exercise(content))


def to_microcycle(section: Sequence[CanonicalEvent]) -> Microcycle:
    workout_sections = sections_between(
        section, EventKind.WORKOUT_STARTED, EventKind.WORKOUT_COMPLETED
    )
    return Microcycle(workouts=[to_workout(ws) for ws in workout_sections])


def build_progress(events: Sequence[CanonicalEvent]) -> TrainingTree:
    """Project the full event history into a progress tree.

    ``events`` must already be in log order (timestamp ascending).
    """
    microcycle_sections = sections_between(
        events, EventKind.MICROCYCLE_STARTED, EventKind.MICROCYCLE_COMPLETED
    )
    tree = TrainingTree(microcycles=[to_microcycle(ms) for ms in microcycle_sections])
    logger.debug(
        "Projected %d events into %d microcycles",
        len(events),
        len(tree.microcycles),
    )
    return tree
