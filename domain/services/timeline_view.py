from __future__ import annotations

from collections.abc import Iterable
from typing import List

from domain.models import DomainEvent, HourMark, Surface, parse_clock_minutes, read_field
from domain.services.compute_geometry import minute_to_percent

COACH_SCROLL_MINUTE = 6 * 60
WAKE_SCROLL_LEAD_MINUTES = 30


def display_key(payload: DomainEvent, surface: Surface) -> str:
    """Colour/icon key a renderer uses for an entry."""
    if surface == "coach":
        if read_field(payload, "isPersonal"):
            return "personal"
        if read_field(payload, "attendees") is not None:
            return "zoom"
        return "manual"

    explicit = read_field(payload, "displayPillar")
    if explicit:
        return str(explicit)
    pillar = read_field(payload, "pillar")
    if not pillar:
        return "default"
    if pillar == "sleep" and read_field(payload, "isNap"):
        return "sleep-nap"
    return str(pillar)


def initial_scroll_minute(
    events: Iterable[DomainEvent],
    surface: Surface,
    wake_time: str | None = None,
) -> int | None:
    """Minute of day the track should open at.

    The coach calendar always opens at 06:00. The client view opens half an
    hour before the night's wake-up time, falling back to the profile's usual
    wake time.
    """
    if surface == "coach":
        return COACH_SCROLL_MINUTE

    target: int | None = None
    for event in events:
        if read_field(event, "pillar") == "sleep" and not read_field(event, "isNap"):
            target = parse_clock_minutes(read_field(event, "wakeUpTime"))
            break
    if target is None:
        target = parse_clock_minutes(wake_time)
    if target is None:
        return None
    return max(0, target - WAKE_SCROLL_LEAD_MINUTES)


def hour_label(hour: int) -> str:
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}{suffix}"


def hour_marks() -> List[HourMark]:
    return [
        HourMark(hour=hour, top=minute_to_percent(hour * 60), label=hour_label(hour))
        for hour in range(24)
    ]
