from __future__ import annotations

from typing import List

from domain.models import Cluster, LaneAssignment, TimeInterval
from domain.services.normalize_events import interval_sort_key


def assign_lanes(cluster: Cluster, min_span_minutes: float = 0.0) -> LaneAssignment:
    """Greedy interval partitioning: each interval takes the leftmost free lane.

    A lane is free when every interval already in it ends at or before the
    candidate's start. With ``min_span_minutes`` an interval occupies its lane
    for at least that long, matching the rendered minimum height.
    """
    lanes: List[List[TimeInterval]] = []
    for interval in sorted(cluster.intervals, key=interval_sort_key):
        for lane in lanes:
            if all(
                _occupied_until(placed, min_span_minutes) <= interval.start_minute
                for placed in lane
            ):
                lane.append(interval)
                break
        else:
            lanes.append([interval])
    return LaneAssignment(lanes=[[interval.id for interval in lane] for lane in lanes])


def _occupied_until(interval: TimeInterval, min_span_minutes: float) -> float:
    return max(interval.end_minute, interval.start_minute + min_span_minutes)
