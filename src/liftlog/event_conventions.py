"""Event conventions: the catalog of event kinds and their fields.

Single source of truth for what a raw event record may contain. The
normalizer enforces the parsing rules described here; the projection engine
relies on the ordering rules.
"""

from typing import Any

from .models import DayOfWeek, EventKind


def get_event_conventions() -> dict[str, dict[str, Any]]:
    """Return the complete event kind catalog, in lifecycle order."""
    days = ", ".join(day.value for day in DayOfWeek)
    return {
        # --- Session boundaries ---
        EventKind.MICROCYCLE_STARTED.value: {
            "description": "Opens a training block (usually one week)",
            "fields": {},
            "example": {},
        },
        EventKind.MICROCYCLE_COMPLETED.value: {
            "description": "Closes the open training block",
            "fields": {},
            "example": {},
            "missing_marker": (
                "A microcycle without this marker is in progress and still "
                "shows up in the progress tree."
            ),
        },
        EventKind.WORKOUT_STARTED.value: {
            "description": "Opens a training session inside the current microcycle",
            "fields": {
                "name": "string (recommended, matches the plan workout name exactly)",
                "day": f"string (optional: {days})",
            },
            "example": {"name": "Upper", "day": "monday"},
        },
        EventKind.WORKOUT_COMPLETED.value: {
            "description": "Closes the open training session",
            "fields": {},
            "example": {},
        },
        # --- Training ---
        EventKind.SET_LOGGED.value: {
            "description": "A single performed set (the core training event)",
            "fields": {
                "exercise": "string (required, grouped by exact name)",
                "weight": "number or numeric string (optional, empty means not logged)",
                "reps": "integer or integer string (optional, empty means not logged)",
            },
            "example": {"exercise": "Bench Press", "weight": 100, "reps": 8},
            "missing_exercise": (
                "Sets without an exercise are grouped under the empty name \"\"."
            ),
        },
    }


def get_ordering_rules() -> dict[str, str]:
    return {
        "order": "timestamp ascending; insertion order on equal timestamps",
        "orphans": "events before the first start marker of a section are ignored",
        "unterminated": "a start marker without its end marker is an in-progress section",
        "restarts": "a start marker inside an open section belongs to that section",
        "unknown_kinds": "records with unknown event kinds are skipped when reading history",
    }
