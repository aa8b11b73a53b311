from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import List

from domain.models import DomainEvent, LayoutOptions, PositionedEntry
from domain.ports.layout import SpanResolver
from domain.services.assign_lanes import assign_lanes
from domain.services.cluster_intervals import cluster_intervals
from domain.services.compute_geometry import compute_geometry, min_span_minutes
from domain.services.event_span_rules import PillarEntrySpanResolver
from domain.services.normalize_events import normalize_events


def layout_day_timeline(
    events: Iterable[DomainEvent],
    day_start: datetime,
    options: LayoutOptions | None = None,
    resolver: SpanResolver | None = None,
) -> List[PositionedEntry]:
    """Position one day's records on a 0-100% track without visual collisions.

    Records are normalized to minute intervals, grouped into overlap clusters,
    spread over lanes inside each cluster and converted to percentages.
    Records without usable timing are skipped; nothing is cached between calls.
    Each record holds its lane for at least the minimum rendered height, so a
    cluster of very short records may use more lanes than plain greedy packing.
    """
    options = options or LayoutOptions()
    resolver = resolver or PillarEntrySpanResolver()
    span_floor = min_span_minutes(options.min_height_percent)

    intervals = normalize_events(events, day_start, resolver)
    entries: List[PositionedEntry] = []
    for cluster in cluster_intervals(intervals):
        assignment = assign_lanes(cluster, min_span_minutes=span_floor)
        entries.extend(compute_geometry(cluster, assignment, options))
    return entries
