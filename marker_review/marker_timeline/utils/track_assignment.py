"""Packing of lane markers into non-overlapping tracks."""

from __future__ import annotations

import heapq
import logging
from typing import Sequence

from marker_timeline.config import TRACK_DEFAULT_DURATION
from marker_timeline.models import Lane, Marker
from .lane_grouping import marker_sort_key

logger = logging.getLogger(__name__)


def effective_end_seconds(marker: Marker, default_duration: float = TRACK_DEFAULT_DURATION) -> float:
    """End time used for overlap checks.

    Markers without an end time, or whose end is not after the start, are
    treated as lasting default_duration. The malformed case is logged.
    """
    if not marker.has_valid_interval:
        logger.warning(
            "Marker %s has end %.3f not after start %.3f; using %.1fs duration",
            marker.id,
            marker.end_seconds,
            marker.start_seconds,
            default_duration,
        )
    return marker.effective_end(default_duration)


def pack_tracks(
    markers: Sequence[Marker],
    default_duration: float = TRACK_DEFAULT_DURATION,
) -> tuple[dict[str, int], int]:
    """Assign each marker the lowest free track (greedy interval partitioning).

    A track is free for a marker once the track's last interval ends at or
    before the marker's start. Processing markers in start order makes the
    number of tracks minimal: it equals the largest number of intervals that
    overlap at any instant.

    Args:
        markers: Markers of one lane
        default_duration: Duration for markers without a usable end time

    Returns:
        (marker id -> track index, number of tracks used)
    """
    ordered = sorted(markers, key=marker_sort_key)

    assignments: dict[str, int] = {}
    busy: list[tuple[float, int]] = []  # (end time, track index)
    free: list[int] = []
    track_count = 0

    for marker in ordered:
        start = marker.start_seconds
        while busy and busy[0][0] <= start:
            _, track_index = heapq.heappop(busy)
            heapq.heappush(free, track_index)

        if free:
            track_index = heapq.heappop(free)
        else:
            track_index = track_count
            track_count += 1

        assignments[marker.id] = track_index
        heapq.heappush(busy, (effective_end_seconds(marker, default_duration), track_index))

    return assignments, track_count


def assign_tracks(lane: Lane, default_duration: float = TRACK_DEFAULT_DURATION) -> dict[str, int]:
    """Map each marker id in the lane to its track index."""
    assignments, _ = pack_tracks(lane.markers, default_duration)
    return assignments


def count_tracks(lane: Lane, default_duration: float = TRACK_DEFAULT_DURATION) -> int:
    """Number of tracks the lane needs (at least one row, even when empty)."""
    _, track_count = pack_tracks(lane.markers, default_duration)
    return max(1, track_count)
