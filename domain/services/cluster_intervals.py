from __future__ import annotations

from collections.abc import Sequence
from typing import List

from domain.models import Cluster, TimeInterval


def cluster_intervals(intervals: Sequence[TimeInterval]) -> List[Cluster]:
    """Group intervals into maximal connected components of the overlap graph.

    Each interval is checked against every member of every open cluster, so a
    bridging interval joins groups whose later members no longer touch the
    earlier ones. Input is expected in normalized order (start ascending,
    longer first); clusters keep that order internally.
    """
    clusters: List[List[TimeInterval]] = []
    for interval in intervals:
        matches = [
            idx
            for idx, members in enumerate(clusters)
            if any(interval.overlaps(member) for member in members)
        ]
        if not matches:
            clusters.append([interval])
            continue
        target = clusters[matches[0]]
        # Only reachable with unsorted input: the interval bridges clusters opened earlier.
        for idx in reversed(matches[1:]):
            target.extend(clusters.pop(idx))
        target.append(interval)
    return [Cluster(intervals=members) for members in clusters]
