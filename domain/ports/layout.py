from __future__ import annotations

from typing import Protocol

from domain.models import DayTimelineDocument, DomainEvent, TimelinePlan, TimeSpan


class SpanResolver(Protocol):
    def resolve(self, event: DomainEvent) -> TimeSpan | None:
        ...


class TimelineLayoutEngine(Protocol):
    def build_plan(self, document: DayTimelineDocument) -> TimelinePlan:
        ...
