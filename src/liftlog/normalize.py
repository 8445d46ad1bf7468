"""Event normalizer: persisted raw records -> canonical events.

Raw records come from storage with loosely typed fields (weight and reps are
often form text). Normalization parses them without guessing: an empty field
means "not present", anything unparseable is a ``MalformedRawEvent``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from .errors import MalformedRawEvent, UnknownEventKind
from .logging import log_extra
from .models import (
    CanonicalEvent,
    DayOfWeek,
    EventKind,
    MicrocycleCompleted,
    MicrocycleStarted,
    RawEventRecord,
    SetLogged,
    WorkoutCompleted,
    WorkoutStarted,
)

logger = logging.getLogger(__name__)


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_kind(value: str, *, event_id: str | None) -> EventKind:
    normalized = value.strip().lower()
    try:
        return EventKind(normalized)
    except ValueError:
        raise UnknownEventKind(value, event_id=event_id) from None


def _parse_timestamp(value: Any, *, event_id: str | None) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        normalized = value.strip().replace("Z", "+00:00")
        try:
            parsed = datetime.fromisoformat(normalized)
        except ValueError as exc:
            raise MalformedRawEvent(
                code="invalid_timestamp",
                message=f"Invalid timestamp: {value!r}",
                field="timestamp",
                event_id=event_id,
            ) from exc
    else:
        raise MalformedRawEvent(
            code="invalid_timestamp",
            message="Event record has no timestamp",
            field="timestamp",
            event_id=event_id,
        )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _parse_weight(value: Any, *, event_id: str | None) -> float | None:
    if _blank(value):
        return None
    if isinstance(value, bool):
        parsed = math.nan
    else:
        try:
            parsed = float(value.strip() if isinstance(value, str) else value)
        except (TypeError, ValueError):
            parsed = math.nan
    if not math.isfinite(parsed):
        raise MalformedRawEvent(
            code="invalid_number",
            message=f"weight is not a valid number: {value!r}",
            field="weight",
            event_id=event_id,
        )
    return parsed


def _parse_reps(value: Any, *, event_id: str | None) -> int | None:
    if _blank(value):
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise MalformedRawEvent(
        code="invalid_number",
        message=f"reps is not a valid integer: {value!r}",
        field="reps",
        event_id=event_id,
    )


def _parse_day(value: Any, *, event_id: str | None) -> DayOfWeek | None:
    if _blank(value):
        return None
    try:
        return DayOfWeek(str(value).strip().lower())
    except ValueError:
        raise MalformedRawEvent(
            code="invalid_day",
            message=f"Unknown day of week: {value!r}",
            field="day",
            event_id=event_id,
        ) from None


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def normalize_event(raw: RawEventRecord | Mapping[str, Any]) -> CanonicalEvent:
    """Convert one persisted record into its canonical event variant.

    Raises ``UnknownEventKind`` for an unrecognized event type and
    ``MalformedRawEvent`` for unparseable timestamp, weight, reps or day.
    Fields that do not belong to the event kind are dropped.
    """
    if isinstance(raw, RawEventRecord):
        record = raw
    else:
        try:
            record = RawEventRecord.model_validate(raw)
        except ValidationError as exc:
            raw_id = raw.get("id") if isinstance(raw, Mapping) else None
            raise MalformedRawEvent(
                code="invalid_record",
                message=f"Event record has an invalid shape ({exc.error_count()} errors)",
                event_id=str(raw_id) if raw_id is not None else None,
            ) from exc
    event_id = str(record.id) if record.id is not None else None
    kind = _parse_kind(record.event_type, event_id=event_id)
    timestamp = _parse_timestamp(record.timestamp, event_id=event_id)

    event: CanonicalEvent
    if kind is EventKind.MICROCYCLE_STARTED:
        event = MicrocycleStarted(timestamp=timestamp)
    elif kind is EventKind.MICROCYCLE_COMPLETED:
        event = MicrocycleCompleted(timestamp=timestamp)
    elif kind is EventKind.WORKOUT_STARTED:
        event = WorkoutStarted(
            timestamp=timestamp,
            name=_optional_text(record.name),
            day=_parse_day(record.day, event_id=event_id),
        )
    elif kind is EventKind.WORKOUT_COMPLETED:
        event = WorkoutCompleted(timestamp=timestamp)
    else:
        event = SetLogged(
            timestamp=timestamp,
            exercise=_optional_text(record.exercise),
            weight=_parse_weight(record.weight, event_id=event_id),
            reps=_parse_reps(record.reps, event_id=event_id),
        )

    logger.debug("Normalized event id=%s kind=%s", event_id, kind.value)
    return event


def normalize_events(
    raws: Iterable[RawEventRecord | Mapping[str, Any]],
    *,
    skip_unknown_kinds: bool = True,
) -> list[CanonicalEvent]:
    """Normalize a user's event history, keeping input order.

    Historical logs may contain kinds this version no longer knows about;
    with ``skip_unknown_kinds`` those records are logged and left out.
    Every other malformed record propagates.
    """
    events: list[CanonicalEvent] = []
    skipped = 0
    for raw in raws:
        try:
            events.append(normalize_event(raw))
        except UnknownEventKind as exc:
            if not skip_unknown_kinds:
                raise
            skipped += 1
            logger.warning(
                "Skipping event with unknown kind %r (id=%s)",
                exc.event_type,
                exc.event_id,
                extra=log_extra(event_type=exc.event_type, event_id=exc.event_id),
            )
    if skipped:
        logger.info("Normalized %d events, skipped %d", len(events), skipped)
    return events


def order_events(events: Iterable[CanonicalEvent]) -> list[CanonicalEvent]:
    """Sort by timestamp ascending; ties keep insertion order."""
    return sorted(events, key=lambda event: event.timestamp)


def to_raw_event(event: CanonicalEvent) -> dict[str, Any]:
    """Encode a canonical event as a flat record for the persistence layer."""
    record: dict[str, Any] = {
        "event_type": event.kind.value,
        "timestamp": event.timestamp.isoformat(),
    }
    if isinstance(event, WorkoutStarted):
        if event.name is not None:
            record["name"] = event.name
        if event.day is not None:
            record["day"] = event.day.value
    elif isinstance(event, SetLogged):
        if event.exercise is not None:
            record["exercise"] = event.exercise
        if event.weight is not None:
            record["weight"] = event.weight
        if event.reps is not None:
            record["reps"] = event.reps
    return record
