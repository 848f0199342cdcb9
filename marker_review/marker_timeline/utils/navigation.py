"""Keyboard navigation over a timeline layout.

Every function here is a pure query: it takes the layout, the current
cursor (selected marker id or None) and, where relevant, the playhead time,
and returns the marker id to select next. None means "no change / nothing
found"; callers apply the result to their own cursor.

A cursor id that is not in the layout (e.g. the marker was just deleted)
is treated the same as having no selection.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from marker_timeline.config import (
    DEFAULT_TIMELINE_SETTINGS,
    PLAYHEAD_DEFAULT_DURATION,
    PLAYHEAD_WINDOW_SECONDS,
    TimelineSettings,
)
from marker_timeline.models import Marker
from .timeline_layout import TimelineLayout

logger = logging.getLogger(__name__)


class LaneDirection(Enum):
    """Cursor movement on the lane grid."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class ReferenceTime(Enum):
    """Which time decides the target marker when changing lanes."""
    PLAYHEAD = "playhead"
    SELECTED_MARKER = "selected_marker"


class NavigationAction(Enum):
    """Navigation operations, keyed by their keyboard action ids."""
    NEXT_MARKER = "navigation.nextMarker"
    PREVIOUS_MARKER = "navigation.previousMarker"
    NEXT_UNPROCESSED_IN_SWIMLANE = "navigation.nextUnprocessedInSwimlane"
    PREVIOUS_UNPROCESSED_IN_SWIMLANE = "navigation.previousUnprocessedInSwimlane"
    NEXT_UNPROCESSED_GLOBAL = "navigation.nextUnprocessedGlobal"
    PREVIOUS_UNPROCESSED_GLOBAL = "navigation.previousUnprocessedGlobal"
    SWIMLANE_UP = "navigation.swimlaneUp"
    SWIMLANE_DOWN = "navigation.swimlaneDown"
    MARKER_LEFT = "navigation.markerLeft"
    MARKER_RIGHT = "navigation.markerRight"
    NEXT_MARKER_AT_PLAYHEAD = "navigation.nextMarkerAtPlayhead"
    PREVIOUS_MARKER_AT_PLAYHEAD = "navigation.previousMarkerAtPlayhead"


def _current(layout: TimelineLayout, cursor: Optional[str]) -> Optional[Marker]:
    return layout.marker(cursor)


def _first_marker_id(layout: TimelineLayout) -> Optional[str]:
    return layout.chronological[0].id if layout.chronological else None


def _first_pending_id(layout: TimelineLayout) -> Optional[str]:
    """First pending marker in lane order (top lane first, then by start time)."""
    for lane in layout.lanes:
        for marker in lane.markers:
            if layout.is_pending(marker.id):
                return marker.id
    return None


# --------------------------------------------------------------- Chronological
def next_marker(layout: TimelineLayout, cursor: Optional[str]) -> Optional[str]:
    """Next marker by start time; None at the end."""
    if _current(layout, cursor) is None:
        return _first_marker_id(layout)

    ids = [marker.id for marker in layout.chronological]
    index = ids.index(cursor)
    if index + 1 < len(ids):
        return ids[index + 1]
    return None


def previous_marker(layout: TimelineLayout, cursor: Optional[str]) -> Optional[str]:
    """Previous marker by start time; None at the start."""
    if _current(layout, cursor) is None:
        return _first_marker_id(layout)

    ids = [marker.id for marker in layout.chronological]
    index = ids.index(cursor)
    if index > 0:
        return ids[index - 1]
    return None


# --------------------------------------------------------------- Lane-scoped unprocessed
def next_unprocessed_in_lane(layout: TimelineLayout, cursor: Optional[str]) -> Optional[str]:
    """Next pending marker in the cursor's lane, wrapping within the lane.

    Returns:
        The pending marker id, the unchanged cursor if the lane has no other
        pending marker, or the first pending marker overall when nothing is
        selected
    """
    if _current(layout, cursor) is None:
        return _first_pending_id(layout)

    lane_markers = layout.lane_markers(layout.lane_index_of(cursor))
    position = layout.position_in_lane(cursor)
    count = len(lane_markers)

    for step in range(1, count):
        candidate = lane_markers[(position + step) % count]
        if layout.is_pending(candidate.id):
            return candidate.id

    return cursor


def previous_unprocessed_in_lane(layout: TimelineLayout, cursor: Optional[str]) -> Optional[str]:
    """Previous pending marker in the cursor's lane, wrapping within the lane."""
    if _current(layout, cursor) is None:
        return _first_pending_id(layout)

    lane_markers = layout.lane_markers(layout.lane_index_of(cursor))
    position = layout.position_in_lane(cursor)
    count = len(lane_markers)

    for step in range(1, count):
        candidate = lane_markers[(position - step) % count]
        if layout.is_pending(candidate.id):
            return candidate.id

    return cursor


# --------------------------------------------------------------- Global unprocessed (bounded)
def next_unprocessed_global(layout: TimelineLayout, cursor: Optional[str]) -> Optional[str]:
    """Next pending marker scanning lanes top to bottom from the cursor.

    Does not wrap past the last lane: None means the review is complete
    from here on.
    """
    if _current(layout, cursor) is None:
        return _first_pending_id(layout)

    lane_index = layout.lane_index_of(cursor)
    position = layout.position_in_lane(cursor)

    for marker in layout.lane_markers(lane_index)[position + 1:]:
        if layout.is_pending(marker.id):
            return marker.id

    for next_lane in range(lane_index + 1, layout.lane_count):
        for marker in layout.lane_markers(next_lane):
            if layout.is_pending(marker.id):
                return marker.id

    return None


def previous_unprocessed_global(layout: TimelineLayout, cursor: Optional[str]) -> Optional[str]:
    """Previous pending marker scanning lanes bottom to top from the cursor.

    Does not wrap past the first lane.
    """
    if _current(layout, cursor) is None:
        return _first_pending_id(layout)

    lane_index = layout.lane_index_of(cursor)
    position = layout.position_in_lane(cursor)

    for marker in reversed(layout.lane_markers(lane_index)[:position]):
        if layout.is_pending(marker.id):
            return marker.id

    for previous_lane in range(lane_index - 1, -1, -1):
        for marker in reversed(layout.lane_markers(previous_lane)):
            if layout.is_pending(marker.id):
                return marker.id

    return None


# --------------------------------------------------------------- Lane grid
def marker_in_adjacent_lane(
    layout: TimelineLayout,
    cursor: Optional[str],
    direction: LaneDirection,
    reference: ReferenceTime = ReferenceTime.SELECTED_MARKER,
    playhead_seconds: float = 0.0,
) -> Optional[str]:
    """Move up or down one lane, landing on the marker nearest in time.

    Args:
        layout: Current timeline layout
        cursor: Selected marker id
        direction: LaneDirection.UP or LaneDirection.DOWN
        reference: Compare against the playhead or the selected marker's start
        playhead_seconds: Current playhead time

    Returns:
        Marker id in the adjacent lane, or None at the top/bottom lane
    """
    current = _current(layout, cursor)
    if current is None:
        return _first_marker_id(layout)

    lane_index = layout.lane_index_of(cursor)
    if direction is LaneDirection.UP:
        target_lane = lane_index - 1
    elif direction is LaneDirection.DOWN:
        target_lane = lane_index + 1
    else:
        return None

    candidates = layout.lane_markers(target_lane)
    if not candidates:
        return None

    if reference is ReferenceTime.PLAYHEAD:
        reference_seconds = playhead_seconds
    else:
        reference_seconds = current.start_seconds

    best = candidates[0]
    best_distance = abs(best.start_seconds - reference_seconds)
    for marker in candidates[1:]:
        distance = abs(marker.start_seconds - reference_seconds)
        if distance < best_distance:
            best, best_distance = marker, distance

    return best.id


def adjacent_marker_in_lane(
    layout: TimelineLayout,
    cursor: Optional[str],
    direction: LaneDirection,
) -> Optional[str]:
    """Move left or right to the neighbouring marker in the same lane.

    Returns:
        Marker id, or None at either end of the lane
    """
    if _current(layout, cursor) is None:
        return _first_marker_id(layout)

    if direction is LaneDirection.LEFT:
        step = -1
    elif direction is LaneDirection.RIGHT:
        step = 1
    else:
        return None

    lane_markers = layout.lane_markers(layout.lane_index_of(cursor))
    target = layout.position_in_lane(cursor) + step
    if 0 <= target < len(lane_markers):
        return lane_markers[target].id
    return None


# --------------------------------------------------------------- Playhead proximity
def markers_near_playhead(
    layout: TimelineLayout,
    playhead_seconds: float,
    window_seconds: float = PLAYHEAD_WINDOW_SECONDS,
    default_duration: float = PLAYHEAD_DEFAULT_DURATION,
) -> list[Marker]:
    """Markers whose interval touches [playhead - window, playhead + window].

    Sorted by lane, then by distance of the start time to the playhead.
    """
    window_start = playhead_seconds - window_seconds
    window_end = playhead_seconds + window_seconds

    nearby = [
        marker for marker in layout.chronological
        if marker.start_seconds <= window_end
        and marker.effective_end(default_duration) >= window_start
    ]
    nearby.sort(key=lambda marker: (
        layout.lane_index_of(marker.id),
        abs(marker.start_seconds - playhead_seconds),
        marker.start_seconds,
        marker.id,
    ))
    return nearby


def next_marker_at_playhead(
    layout: TimelineLayout,
    cursor: Optional[str],
    playhead_seconds: float,
    window_seconds: float = PLAYHEAD_WINDOW_SECONDS,
    default_duration: float = PLAYHEAD_DEFAULT_DURATION,
) -> Optional[str]:
    """Cycle downwards through lanes that have a marker near the playhead."""
    return _cycle_at_playhead(layout, cursor, playhead_seconds, window_seconds, default_duration, forward=True)


def previous_marker_at_playhead(
    layout: TimelineLayout,
    cursor: Optional[str],
    playhead_seconds: float,
    window_seconds: float = PLAYHEAD_WINDOW_SECONDS,
    default_duration: float = PLAYHEAD_DEFAULT_DURATION,
) -> Optional[str]:
    """Cycle upwards through lanes that have a marker near the playhead."""
    return _cycle_at_playhead(layout, cursor, playhead_seconds, window_seconds, default_duration, forward=False)


def _cycle_at_playhead(
    layout: TimelineLayout,
    cursor: Optional[str],
    playhead_seconds: float,
    window_seconds: float,
    default_duration: float,
    forward: bool,
) -> Optional[str]:
    candidates = markers_near_playhead(layout, playhead_seconds, window_seconds, default_duration)
    if not candidates:
        return None

    current_lane = layout.lane_index_of(cursor)
    other_lanes = [marker for marker in candidates if layout.lane_index_of(marker.id) != current_lane]

    if not other_lanes:
        # Everything near the playhead is in the cursor's own lane
        ids = [marker.id for marker in candidates]
        if cursor not in ids:
            return ids[0] if forward else ids[-1]
        step = 1 if forward else -1
        return ids[(ids.index(cursor) + step) % len(ids)]

    # Candidates are ordered by lane, then distance: the first hit per lane is the closest
    closest_by_lane: dict[int, Marker] = {}
    for marker in other_lanes:
        closest_by_lane.setdefault(layout.lane_index_of(marker.id), marker)
    lane_order = sorted(closest_by_lane)

    if current_lane is None:
        target_lane = lane_order[0] if forward else lane_order[-1]
    elif forward:
        following = [lane for lane in lane_order if lane > current_lane]
        target_lane = following[0] if following else lane_order[0]
    else:
        preceding = [lane for lane in lane_order if lane < current_lane]
        target_lane = preceding[-1] if preceding else lane_order[-1]

    return closest_by_lane[target_lane].id


# --------------------------------------------------------------- Dispatch
_Handler = Callable[
    [TimelineLayout, Optional[str], float, TimelineSettings, ReferenceTime],
    Optional[str],
]

_ACTION_HANDLERS: dict[NavigationAction, _Handler] = {
    NavigationAction.NEXT_MARKER:
        lambda layout, cursor, playhead, settings, reference: next_marker(layout, cursor),
    NavigationAction.PREVIOUS_MARKER:
        lambda layout, cursor, playhead, settings, reference: previous_marker(layout, cursor),
    NavigationAction.NEXT_UNPROCESSED_IN_SWIMLANE:
        lambda layout, cursor, playhead, settings, reference: next_unprocessed_in_lane(layout, cursor),
    NavigationAction.PREVIOUS_UNPROCESSED_IN_SWIMLANE:
        lambda layout, cursor, playhead, settings, reference: previous_unprocessed_in_lane(layout, cursor),
    NavigationAction.NEXT_UNPROCESSED_GLOBAL:
        lambda layout, cursor, playhead, settings, reference: next_unprocessed_global(layout, cursor),
    NavigationAction.PREVIOUS_UNPROCESSED_GLOBAL:
        lambda layout, cursor, playhead, settings, reference: previous_unprocessed_global(layout, cursor),
    NavigationAction.SWIMLANE_UP:
        lambda layout, cursor, playhead, settings, reference: marker_in_adjacent_lane(
            layout, cursor, LaneDirection.UP, reference, playhead
        ),
    NavigationAction.SWIMLANE_DOWN:
        lambda layout, cursor, playhead, settings, reference: marker_in_adjacent_lane(
            layout, cursor, LaneDirection.DOWN, reference, playhead
        ),
    NavigationAction.MARKER_LEFT:
        lambda layout, cursor, playhead, settings, reference: adjacent_marker_in_lane(
            layout, cursor, LaneDirection.LEFT
        ),
    NavigationAction.MARKER_RIGHT:
        lambda layout, cursor, playhead, settings, reference: adjacent_marker_in_lane(
            layout, cursor, LaneDirection.RIGHT
        ),
    NavigationAction.NEXT_MARKER_AT_PLAYHEAD:
        lambda layout, cursor, playhead, settings, reference: next_marker_at_playhead(
            layout, cursor, playhead,
            settings.playhead_window_seconds, settings.playhead_default_duration,
        ),
    NavigationAction.PREVIOUS_MARKER_AT_PLAYHEAD:
        lambda layout, cursor, playhead, settings, reference: previous_marker_at_playhead(
            layout, cursor, playhead,
            settings.playhead_window_seconds, settings.playhead_default_duration,
        ),
}


def navigate(
    action: NavigationAction,
    layout: TimelineLayout,
    cursor: Optional[str],
    playhead_seconds: float = 0.0,
    settings: TimelineSettings | None = None,
    reference: ReferenceTime = ReferenceTime.SELECTED_MARKER,
) -> Optional[str]:
    """Run the navigation query behind a keyboard action.

    Args:
        action: Which navigation to perform
        layout: Current timeline layout
        cursor: Selected marker id (or None)
        playhead_seconds: Current playhead time
        settings: Timeline settings (playhead window and durations)
        reference: Reference time for lane up/down moves

    Returns:
        Marker id to select, or None for no change
    """
    handler = _ACTION_HANDLERS[action]
    result = handler(layout, cursor, playhead_seconds, settings or DEFAULT_TIMELINE_SETTINGS, reference)
    logger.debug("%s from %s -> %s", action.value, cursor, result)
    return result
