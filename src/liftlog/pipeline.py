"""Read pipeline: raw event rows + plan -> everything a workout view needs.

Flow: normalize -> order -> project -> merge -> select
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .logging import log_extra
from .merge import merge_progress
from .models import CanonicalEvent, CurrentWorkout, RawEventRecord, TrainingTree
from .normalize import normalize_events, order_events
from .projection import build_progress
from .selection import find_current_workout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkoutState:
    events: list[CanonicalEvent]
    progress: TrainingTree
    merged: TrainingTree
    current: CurrentWorkout | None

    @property
    def all_complete(self) -> bool:
        return self.current is None


def project_workout_state(
    raw_events: Iterable[RawEventRecord | Mapping[str, Any]],
    plan: TrainingTree,
    *,
    skip_unknown_kinds: bool = True,
) -> WorkoutState:
    events = order_events(normalize_events(raw_events, skip_unknown_kinds=skip_unknown_kinds))
    progress = build_progress(events)
    merged = merge_progress(plan, progress)
    current = find_current_workout(merged, events)

    logger.info(
        "Projected workout state (events=%d, microcycles=%d, current=%s)",
        len(events),
        len(merged.microcycles),
        current.workout.name if current is not None else "none",
        extra=log_extra(event_count=len(events)),
    )
    return WorkoutState(events=events, progress=progress, merged=merged, current=current)
