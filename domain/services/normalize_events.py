from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import List

from domain.models import DAY_MINUTES, DomainEvent, TimeInterval, read_field
from domain.ports.layout import SpanResolver

logger = logging.getLogger(__name__)

_MINUTE = timedelta(minutes=1)


def minutes_between(later: datetime, earlier: datetime) -> int:
    """Whole minutes from ``earlier`` to ``later``, truncated toward zero."""
    if (later.tzinfo is None) != (earlier.tzinfo is None):
        # Wall-clock comparison: inputs are already local instants.
        later = later.replace(tzinfo=None)
        earlier = earlier.replace(tzinfo=None)
    return int((later - earlier) / _MINUTE)


def interval_sort_key(interval: TimeInterval) -> tuple[int, int]:
    return (interval.start_minute, -interval.end_minute)


def normalize_events(
    events: Iterable[DomainEvent],
    day_start: datetime,
    resolver: SpanResolver,
) -> List[TimeInterval]:
    if not isinstance(day_start, datetime):
        msg = f"day_start must be a datetime, got {type(day_start).__name__}"
        raise TypeError(msg)

    intervals: List[TimeInterval] = []
    seen_ids: dict[str, int] = {}
    for index, event in enumerate(events):
        event_id = _unique_id(_event_id(event, index), seen_ids)
        span = resolver.resolve(event)
        if span is None:
            logger.debug("Dropping event %s: missing or unreadable timing fields", event_id)
            continue
        start_minute = max(0, minutes_between(span.start, day_start))
        end_minute = min(DAY_MINUTES, minutes_between(span.end, day_start))
        if end_minute <= start_minute:
            logger.debug(
                "Dropping event %s: empty interval %s..%s after clamping",
                event_id,
                start_minute,
                end_minute,
            )
            continue
        intervals.append(
            TimeInterval(
                id=event_id,
                start_minute=start_minute,
                end_minute=end_minute,
                payload=event,
            )
        )

    intervals.sort(key=interval_sort_key)
    return intervals


def _event_id(event: DomainEvent, index: int) -> str:
    raw = read_field(event, "id")
    if raw is None or raw == "":
        return f"event-{index}"
    return str(raw)


def _unique_id(event_id: str, seen_ids: dict[str, int]) -> str:
    if event_id not in seen_ids:
        seen_ids[event_id] = 1
        return event_id
    count = seen_ids[event_id]
    candidate = event_id
    while candidate in seen_ids:
        count += 1
        candidate = f"{event_id}#{count}"
    seen_ids[event_id] = count
    seen_ids[candidate] = 1
    return candidate
