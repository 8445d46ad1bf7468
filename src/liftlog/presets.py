"""Preset training plans.

Each preset is a factory so callers always get their own value.
"""

from __future__ import annotations

from collections.abc import Callable

from .models import DayOfWeek, Exercise, Microcycle, SetEntry, TrainingTree, Workout


def _prescribed(weight: float, reps: int, count: int) -> list[SetEntry]:
    return [SetEntry(prescribed_weight=weight, prescribed_reps=reps) for _ in range(count)]


def upper_lower_plan() -> TrainingTree:
    """One-week upper/lower split."""
    return TrainingTree(
        microcycles=[
            Microcycle(
                workouts=[
                    Workout(
                        name="Upper",
                        day=DayOfWeek.MONDAY,
                        exercises=[
                            Exercise(name="Bench Press", sets=_prescribed(100, 8, 3)),
                            Exercise(name="Barbell Row", sets=_prescribed(80, 8, 2)),
                        ],
                    ),
                    Workout(
                        name="Lower",
                        day=DayOfWeek.WEDNESDAY,
                        exercises=[
                            Exercise(name="Squat", sets=_prescribed(140, 5, 3)),
                        ],
                    ),
                ]
            )
        ]
    )


PRESETS: dict[str, Callable[[], TrainingTree]] = {
    "upper_lower": upper_lower_plan,
}

DEFAULT_PRESET = "upper_lower"
