"""Timeline engine: status, lanes, tracks, layout and navigation."""

from .status import classify, classify_with, is_pending, summarize, all_processed
from .lane_grouping import (
    MARKER_GROUP_PREFIX,
    find_marker_group,
    group_by_tag_name,
    group_markers,
    marker_sort_key,
)
from .track_assignment import assign_tracks, count_tracks, effective_end_seconds, pack_tracks
from .timeline_layout import TimelineLayout, TimelineLayoutCache, build_timeline_layout
from .navigation import (
    LaneDirection,
    NavigationAction,
    ReferenceTime,
    adjacent_marker_in_lane,
    marker_in_adjacent_lane,
    markers_near_playhead,
    navigate,
    next_marker,
    next_marker_at_playhead,
    next_unprocessed_global,
    next_unprocessed_in_lane,
    previous_marker,
    previous_marker_at_playhead,
    previous_unprocessed_global,
    previous_unprocessed_in_lane,
)
from .geometry import (
    center_scroll_position,
    is_marker_visible,
    marker_extent,
    pixels_to_time,
    playhead_position,
    time_to_pixels,
    timeline_width,
)
from .viewport_state import TimelineViewport

__all__ = [
    'classify',
    'classify_with',
    'is_pending',
    'summarize',
    'all_processed',
    'MARKER_GROUP_PREFIX',
    'find_marker_group',
    'group_by_tag_name',
    'group_markers',
    'marker_sort_key',
    'assign_tracks',
    'count_tracks',
    'effective_end_seconds',
    'pack_tracks',
    'TimelineLayout',
    'TimelineLayoutCache',
    'build_timeline_layout',
    'LaneDirection',
    'NavigationAction',
    'ReferenceTime',
    'adjacent_marker_in_lane',
    'marker_in_adjacent_lane',
    'markers_near_playhead',
    'navigate',
    'next_marker',
    'next_marker_at_playhead',
    'next_unprocessed_global',
    'next_unprocessed_in_lane',
    'previous_marker',
    'previous_marker_at_playhead',
    'previous_unprocessed_global',
    'previous_unprocessed_in_lane',
    'center_scroll_position',
    'is_marker_visible',
    'marker_extent',
    'pixels_to_time',
    'playhead_position',
    'time_to_pixels',
    'timeline_width',
    'TimelineViewport',
]
