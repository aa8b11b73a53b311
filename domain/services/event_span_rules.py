from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Any

from pydantic import TypeAdapter, ValidationError

from domain.models import DEFAULT_POINT_DURATION_MINUTES, DomainEvent, Surface, TimeSpan, read_field
from domain.ports.layout import SpanResolver

_DATETIME_ADAPTER = TypeAdapter(datetime)


def parse_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return _DATETIME_ADAPTER.validate_python(value)
    except ValidationError:
        return None


def parse_duration(value: Any) -> float | None:
    """Numeric duration, 0.0 for missing values, None when unusable."""
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        return None
    try:
        duration = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(duration):
        return None
    return duration


def _span_after(start: datetime, **delta: float) -> TimeSpan | None:
    try:
        return TimeSpan(start=start, end=start + timedelta(**delta))
    except OverflowError:
        return None


def _explicit_range(event: DomainEvent) -> TimeSpan | None:
    start = parse_timestamp(read_field(event, "start"))
    end = parse_timestamp(read_field(event, "end"))
    if start is None or end is None:
        return None
    return TimeSpan(start=start, end=end)


class PillarEntrySpanResolver(SpanResolver):
    """Start/end rules for the client day view, keyed on the record's ``pillar``.

    Sleep durations are hours, activity durations are minutes (15 when absent),
    appointments carry an explicit range and everything else is a 15 minute
    point log anchored on ``indulgenceDate`` or ``entryDate``.
    """

    def resolve(self, event: DomainEvent) -> TimeSpan | None:
        pillar = read_field(event, "pillar")
        entry_date = parse_timestamp(read_field(event, "entryDate"))

        if pillar == "sleep" and entry_date is not None:
            hours = parse_duration(read_field(event, "duration"))
            if hours is None:
                return None
            return _span_after(entry_date, hours=hours)

        if pillar == "activity" and entry_date is not None:
            minutes = parse_duration(read_field(event, "duration"))
            if minutes is None:
                return None
            minutes = minutes or DEFAULT_POINT_DURATION_MINUTES
            return _span_after(entry_date, minutes=minutes)

        if pillar == "appointment":
            return _explicit_range(event)

        indulgence_date = parse_timestamp(read_field(event, "indulgenceDate"))
        base = indulgence_date or entry_date
        if base is None:
            return None
        return _span_after(base, minutes=DEFAULT_POINT_DURATION_MINUTES)


class AppointmentSpanResolver(SpanResolver):
    """Coach calendar events always carry ``start`` and ``end``."""

    def resolve(self, event: DomainEvent) -> TimeSpan | None:
        return _explicit_range(event)


def resolver_for_surface(surface: Surface) -> SpanResolver:
    if surface == "coach":
        return AppointmentSpanResolver()
    if surface == "client":
        return PillarEntrySpanResolver()
    msg = f"Unknown timeline surface: {surface!r}"
    raise ValueError(msg)
