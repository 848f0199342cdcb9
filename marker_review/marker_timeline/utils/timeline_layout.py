"""Timeline layout: ordered lanes plus per-marker lane/track placement."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from marker_timeline.config import DEFAULT_TIMELINE_SETTINGS, TimelineSettings
from marker_timeline.models import (
    Lane,
    Marker,
    MarkerStatus,
    SortConfig,
    StatusTags,
    TrackPlacement,
)
from .lane_grouping import group_markers, marker_sort_key
from .status import classify_with
from .track_assignment import pack_tracks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelineLayout:
    """Derived, read-only view of a marker snapshot.

    Shared by the renderer (lanes, tracks) and the navigation functions
    (lane order, lane positions, statuses).
    """
    lanes: tuple[Lane, ...] = ()
    placements: Mapping[str, TrackPlacement] = field(default_factory=dict)
    track_counts: tuple[int, ...] = ()
    statuses: Mapping[str, MarkerStatus] = field(default_factory=dict)
    chronological: tuple[Marker, ...] = ()
    markers_by_id: Mapping[str, Marker] = field(default_factory=dict, repr=False)
    lane_positions: Mapping[str, int] = field(default_factory=dict, repr=False)

    @property
    def lane_count(self) -> int:
        return len(self.lanes)

    @property
    def marker_count(self) -> int:
        return len(self.chronological)

    @property
    def is_empty(self) -> bool:
        return not self.chronological

    def marker(self, marker_id: str | None) -> Marker | None:
        if marker_id is None:
            return None
        return self.markers_by_id.get(marker_id)

    def placement(self, marker_id: str | None) -> TrackPlacement | None:
        if marker_id is None:
            return None
        return self.placements.get(marker_id)

    def lane_index_of(self, marker_id: str | None) -> int | None:
        placement = self.placement(marker_id)
        return placement.lane_index if placement else None

    def position_in_lane(self, marker_id: str | None) -> int | None:
        """Index of the marker within its lane's start-ordered markers."""
        if marker_id is None:
            return None
        return self.lane_positions.get(marker_id)

    def lane_markers(self, lane_index: int) -> tuple[Marker, ...]:
        if 0 <= lane_index < len(self.lanes):
            return self.lanes[lane_index].markers
        return ()

    def status_of(self, marker_id: str | None) -> MarkerStatus | None:
        if marker_id is None:
            return None
        return self.statuses.get(marker_id)

    def is_pending(self, marker_id: str | None) -> bool:
        return self.status_of(marker_id) is MarkerStatus.PENDING


def build_timeline_layout(
    markers: Sequence[Marker],
    sort_config: SortConfig | None = None,
    status_tags: StatusTags | None = None,
    settings: TimelineSettings | None = None,
) -> TimelineLayout:
    """Group markers into lanes and pack each lane into tracks.

    Args:
        markers: Marker snapshot (any order)
        sort_config: Lane grouping/sorting configuration
        status_tags: Confirmed/rejected tag ids
        settings: Timeline settings (track packing duration)

    Returns:
        TimelineLayout for the snapshot
    """
    settings = settings or DEFAULT_TIMELINE_SETTINGS
    lanes = group_markers(markers, sort_config, status_tags)

    placements: dict[str, TrackPlacement] = {}
    lane_positions: dict[str, int] = {}
    track_counts: list[int] = []

    for lane_index, lane in enumerate(lanes):
        assignments, track_count = pack_tracks(lane.markers, settings.track_default_duration)
        track_counts.append(max(1, track_count))
        for position, marker in enumerate(lane.markers):
            placements[marker.id] = TrackPlacement(
                lane_index=lane_index,
                track_index=assignments[marker.id],
            )
            lane_positions[marker.id] = position

    lane_markers = [marker for lane in lanes for marker in lane.markers]
    chronological = tuple(sorted(lane_markers, key=marker_sort_key))

    return TimelineLayout(
        lanes=tuple(lanes),
        placements=placements,
        track_counts=tuple(track_counts),
        statuses={marker.id: classify_with(marker, status_tags) for marker in chronological},
        chronological=chronological,
        markers_by_id={marker.id: marker for marker in chronological},
        lane_positions=lane_positions,
    )


class TimelineLayoutCache:
    """Memoizes build_timeline_layout on the identity of its inputs.

    The layout is rebuilt only when a different marker snapshot, sort config,
    status tags or settings object is passed in. Callers replace these objects
    when they change instead of mutating them.
    """

    def __init__(self):
        self._key: tuple[Any, ...] | None = None
        self._layout: TimelineLayout | None = None
        self.hits = 0
        self.misses = 0

    def get(
        self,
        markers: Sequence[Marker],
        sort_config: SortConfig | None = None,
        status_tags: StatusTags | None = None,
        settings: TimelineSettings | None = None,
    ) -> TimelineLayout:
        key = (markers, sort_config, status_tags, settings)
        if self._layout is not None and self._key is not None and all(
            cached is current for cached, current in zip(self._key, key)
        ):
            self.hits += 1
            return self._layout

        self.misses += 1
        logger.debug("Rebuilding timeline layout for %d markers", len(markers))
        self._layout = build_timeline_layout(markers, sort_config, status_tags, settings)
        self._key = key
        return self._layout

    def invalidate(self):
        """Drop the cached layout."""
        self._key = None
        self._layout = None
