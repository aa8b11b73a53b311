from __future__ import annotations

import random
from itertools import combinations

import pytest

from domain.models import Cluster
from domain.services.assign_lanes import assign_lanes
from domain.services.cluster_intervals import cluster_intervals
from tests.helpers.intervals import interval, sorted_intervals


def test_single_interval_gets_one_lane() -> None:
    assignment = assign_lanes(Cluster(intervals=[interval("a", 0, 30)]))
    assert assignment.lanes == [["a"]]
    assert assignment.lane_count == 1


def test_overlapping_pair_uses_two_lanes() -> None:
    cluster = Cluster(intervals=sorted_intervals(interval("a", 540, 570), interval("b", 555, 585)))
    assignment = assign_lanes(cluster)
    assert assignment.lanes == [["a"], ["b"]]
    assert assignment.lane_of("b") == 1


def test_lane_is_reused_after_a_gap() -> None:
    cluster = Cluster(
        intervals=sorted_intervals(
            interval("long", 0, 120),
            interval("early", 0, 30),
            interval("late", 60, 90),
        )
    )
    assert assign_lanes(cluster).lanes == [["long"], ["early", "late"]]


def test_new_lane_opens_when_every_lane_is_busy() -> None:
    cluster = Cluster(
        intervals=[
            interval("a", 0, 100),
            interval("b", 10, 20),
            interval("c", 30, 40),
            interval("d", 35, 60),
        ]
    )
    assignment = assign_lanes(cluster)
    assert assignment.lanes == [["a"], ["b", "c"], ["d"]]


def test_lanes_follow_start_then_longest_order() -> None:
    cluster = Cluster(intervals=[interval("short", 0, 10), interval("long", 0, 60)])
    assert assign_lanes(cluster).lanes == [["long"], ["short"]]


def test_minimum_span_keeps_short_entries_apart() -> None:
    cluster = Cluster(
        intervals=sorted_intervals(
            interval("long", 0, 120),
            interval("blip", 0, 5),
            interval("next", 10, 15),
            interval("later", 30, 40),
        )
    )
    assert assign_lanes(cluster).lanes == [["long"], ["blip", "next", "later"]]
    assert assign_lanes(cluster, min_span_minutes=30).lanes == [
        ["long"],
        ["blip", "later"],
        ["next"],
    ]


def test_unknown_interval_has_no_lane() -> None:
    assignment = assign_lanes(Cluster(intervals=[interval("a", 0, 30)]))
    with pytest.raises(KeyError):
        assignment.lane_of("missing")


@pytest.mark.parametrize("seed", range(5))
def test_no_two_intervals_in_a_lane_overlap(seed: int) -> None:
    rng = random.Random(seed)
    items = []
    for idx in range(40):
        start = rng.randrange(0, 1380)
        items.append(interval(f"e{idx}", start, start + rng.randrange(1, 60)))
    for cluster in cluster_intervals(sorted_intervals(*items)):
        assignment = assign_lanes(cluster)
        by_id = {item.id: item for item in cluster.intervals}
        for lane in assignment.lanes:
            for left_id, right_id in combinations(lane, 2):
                assert not by_id[left_id].overlaps(by_id[right_id])
        assert sorted(i for lane in assignment.lanes for i in lane) == sorted(by_id)
