from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DAY_MINUTES = 24 * 60
MIN_HEIGHT_PERCENT = 30 / DAY_MINUTES * 100
DEFAULT_POINT_DURATION_MINUTES = 15

Surface = Literal["client", "coach"]

# Caller-owned record; mappings from parsed JSON or any object exposing attributes.
DomainEvent = Any


@dataclass(frozen=True)
class TimeSpan:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class TimeInterval:
    id: str
    start_minute: int
    end_minute: int
    payload: DomainEvent = field(compare=False, repr=False)

    def __post_init__(self) -> None:
        if not 0 <= self.start_minute < self.end_minute <= DAY_MINUTES:
            msg = (
                f"Invalid interval {self.id!r}: "
                f"expected 0 <= {self.start_minute} < {self.end_minute} <= {DAY_MINUTES}"
            )
            raise ValueError(msg)

    @property
    def duration_minutes(self) -> int:
        return self.end_minute - self.start_minute

    def overlaps(self, other: TimeInterval) -> bool:
        return self.start_minute < other.end_minute and self.end_minute > other.start_minute


@dataclass(frozen=True)
class Cluster:
    intervals: List[TimeInterval]

    def overlaps(self, interval: TimeInterval) -> bool:
        return any(member.overlaps(interval) for member in self.intervals)

    def ids(self) -> List[str]:
        return [interval.id for interval in self.intervals]


@dataclass(frozen=True)
class LaneAssignment:
    lanes: List[List[str]]

    @property
    def lane_count(self) -> int:
        return len(self.lanes)

    def lane_of(self, interval_id: str) -> int:
        for index, lane in enumerate(self.lanes):
            if interval_id in lane:
                return index
        msg = f"Interval {interval_id!r} has no lane"
        raise KeyError(msg)


@dataclass(frozen=True)
class PositionedEntry:
    id: str
    top: float
    height: float
    left: float
    width: float
    payload: DomainEvent = field(compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "top": self.top,
            "height": self.height,
            "left": self.left,
            "width": self.width,
            "payload": self.payload,
        }


@dataclass(frozen=True)
class HourMark:
    hour: int
    top: float
    label: str


@dataclass(frozen=True)
class TimelinePlan:
    day: date
    surface: Surface
    entries: List[PositionedEntry]
    display_keys: dict[str, str]
    hour_marks: List[HourMark]
    scroll_minute: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day.isoformat(),
            "surface": self.surface,
            "scroll_minute": self.scroll_minute,
            "entries": [
                {**entry.to_dict(), "display_key": self.display_keys.get(entry.id, "default")}
                for entry in self.entries
            ],
            "hour_marks": [
                {"hour": mark.hour, "top": mark.top, "label": mark.label}
                for mark in self.hour_marks
            ],
        }


class LayoutOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_height_percent: float = Field(default=MIN_HEIGHT_PERCENT, ge=0, le=100)
    lane_gutter_percent: float = Field(default=0.0, ge=0, le=100)


class DayTimelineDocument(BaseModel):
    day: date
    surface: Surface = "client"
    wake_time: Optional[str] = None
    # Records stay unexamined here; unusable ones are dropped during layout.
    events: List[Any] = Field(default_factory=list)

    @field_validator("wake_time", mode="after")
    @classmethod
    def ensure_clock_time(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and parse_clock_minutes(value) is None:
            msg = f"wake_time must be a HH:MM clock time, got {value!r}"
            raise ValueError(msg)
        return value

    def day_start(self) -> datetime:
        return datetime.combine(self.day, datetime.min.time())


def parse_clock_minutes(value: Any) -> Optional[int]:
    if not isinstance(value, str):
        return None
    hours, sep, minutes = value.strip().partition(":")
    if not sep or not hours.isdigit() or not minutes.isdigit():
        return None
    hour, minute = int(hours), int(minutes)
    if hour > 23 or minute > 59:
        return None
    return hour * 60 + minute


def read_field(event: DomainEvent, name: str) -> Any:
    if isinstance(event, Mapping):
        return event.get(name)
    return getattr(event, name, None)
