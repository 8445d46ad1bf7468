"""Typed failures raised at the normalization boundary.

Everything past normalization is total: orphaned events, shape mismatches
between plan and progress, and "no current workout" are regular results.
"""

from __future__ import annotations

from typing import Literal

MalformedCode = Literal[
    "invalid_record",
    "invalid_number",
    "invalid_timestamp",
    "invalid_day",
    "unknown_event_kind",
]


class LiftlogError(Exception):
    def __init__(
        self,
        *,
        code: str,
        message: str,
        field: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.field = field


class MalformedRawEvent(LiftlogError):
    """A raw record could not be turned into a canonical event."""

    def __init__(
        self,
        *,
        code: MalformedCode,
        message: str,
        field: str | None = None,
        event_id: str | None = None,
    ) -> None:
        super().__init__(code=code, message=message, field=field)
        self.event_id = event_id


class UnknownEventKind(MalformedRawEvent):
    def __init__(self, event_type: str, *, event_id: str | None = None) -> None:
        super().__init__(
            code="unknown_event_kind",
            message=f"Unknown event kind {event_type!r}",
            field="event_type",
            event_id=event_id,
        )
        self.event_type = event_type
