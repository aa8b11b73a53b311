from __future__ import annotations

from dataclasses import dataclass

from domain.models import (
    MIN_HEIGHT_PERCENT,
    DayTimelineDocument,
    LayoutOptions,
    Surface,
    TimelinePlan,
)
from domain.ports.layout import TimelineLayoutEngine
from domain.services.event_span_rules import resolver_for_surface
from domain.services.layout_day_timeline import layout_day_timeline
from domain.services.timeline_view import display_key, hour_marks, initial_scroll_minute


@dataclass(frozen=True)
class LayoutConfig:
    min_height_percent: float = MIN_HEIGHT_PERCENT
    client_lane_gutter_percent: float = 0.0
    coach_lane_gutter_percent: float = 0.5

    def options_for(self, surface: Surface) -> LayoutOptions:
        gutter = (
            self.coach_lane_gutter_percent if surface == "coach" else self.client_lane_gutter_percent
        )
        return LayoutOptions(min_height_percent=self.min_height_percent, lane_gutter_percent=gutter)


class DayTimelineLayoutEngine(TimelineLayoutEngine):
    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()

    def build_plan(self, document: DayTimelineDocument) -> TimelinePlan:
        surface = document.surface
        entries = layout_day_timeline(
            document.events,
            document.day_start(),
            options=self.config.options_for(surface),
            resolver=resolver_for_surface(surface),
        )
        return TimelinePlan(
            day=document.day,
            surface=surface,
            entries=entries,
            display_keys={entry.id: display_key(entry.payload, surface) for entry in entries},
            hour_marks=hour_marks(),
            scroll_minute=initial_scroll_minute(document.events, surface, document.wake_time),
        )
