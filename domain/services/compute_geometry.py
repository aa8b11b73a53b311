from __future__ import annotations

from typing import List

from domain.models import (
    DAY_MINUTES,
    Cluster,
    LaneAssignment,
    LayoutOptions,
    PositionedEntry,
    TimeInterval,
)


def minute_to_percent(minute: float) -> float:
    return minute / DAY_MINUTES * 100


def min_span_minutes(min_height_percent: float) -> float:
    # Rounded so the default floor maps to exactly 30 minutes.
    return round(min_height_percent / 100 * DAY_MINUTES, 6)


def compute_geometry(
    cluster: Cluster,
    assignment: LaneAssignment,
    options: LayoutOptions | None = None,
) -> List[PositionedEntry]:
    options = options or LayoutOptions()
    if assignment.lane_count == 0:
        return []
    by_id: dict[str, TimeInterval] = {interval.id: interval for interval in cluster.intervals}
    lane_width = 100 / assignment.lane_count
    width = max(lane_width - options.lane_gutter_percent, 0.0)

    entries: List[PositionedEntry] = []
    for lane_index, lane in enumerate(assignment.lanes):
        for interval_id in lane:
            interval = by_id[interval_id]
            entries.append(
                PositionedEntry(
                    id=interval.id,
                    top=minute_to_percent(interval.start_minute),
                    height=max(
                        minute_to_percent(interval.duration_minutes),
                        options.min_height_percent,
                    ),
                    left=lane_index * lane_width,
                    width=width,
                    payload=interval.payload,
                )
            )
    return entries
