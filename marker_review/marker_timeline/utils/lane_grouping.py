"""Grouping of markers into ordered lanes by primary tag."""

from __future__ import annotations

import logging
import re
from typing import Iterable

from marker_timeline.models import (
    Lane,
    Marker,
    MarkerGroup,
    MarkerStatus,
    SortConfig,
    StatusTags,
    TagRef,
)
from .status import classify_with

logger = logging.getLogger(__name__)

MARKER_GROUP_PREFIX = "Marker Group: "
_ORDER_PREFIX_RE = re.compile(r"^(\d+)\.\s*")


def marker_sort_key(marker: Marker) -> tuple[float, str]:
    """Start time, then id so equal starts stay deterministic."""
    return (marker.start_seconds, marker.id)


def find_marker_group(tag: TagRef, marker_group_parent_id: str | None) -> MarkerGroup | None:
    """Find the marker group a tag belongs to.

    A marker group is a parent of the tag that is itself a child of the
    configured marker-group parent tag.

    Args:
        tag: Primary tag of a marker
        marker_group_parent_id: Configured parent of all marker groups

    Returns:
        MarkerGroup, or None if the tag has no such parent
    """
    if not marker_group_parent_id:
        return None

    for parent in tag.parents:
        if any(grandparent.id == marker_group_parent_id for grandparent in parent.parents):
            name = parent.name
            if name.startswith(MARKER_GROUP_PREFIX):
                name = name[len(MARKER_GROUP_PREFIX):]

            order = None
            match = _ORDER_PREFIX_RE.match(name)
            if match:
                order = int(match.group(1))
                name = name[match.end():]

            return MarkerGroup(
                id=parent.id,
                full_name=parent.name,
                display_name=name,
                order=order,
            )

    return None


def group_by_tag_name(markers: Iterable[Marker]) -> dict[str, list[Marker]]:
    """Bucket markers by primary tag name.

    Args:
        markers: Markers to group

    Returns:
        Dictionary mapping tag name to its markers (sorted by start time),
        in order of first appearance
    """
    grouped: dict[str, list[Marker]] = {}

    for marker in markers:
        key = marker.primary_tag.name
        if key not in grouped:
            grouped[key] = []
        grouped[key].append(marker)

    for key in grouped:
        grouped[key].sort(key=marker_sort_key)

    return grouped


def group_markers(
    markers: Iterable[Marker],
    sort_config: SortConfig | None = None,
    status_tags: StatusTags | None = None,
) -> list[Lane]:
    """Partition markers into lanes and order the lanes for display.

    Grouped lanes come before ungrouped ones. Marker groups with a numeric
    name prefix ("Marker Group: 2. Foo") sort by that number; groups without
    one follow in order of first appearance. Inside a group, lanes listed in
    the group's configured tag order come first, the rest alphabetically.
    Ungrouped lanes sort alphabetically.

    Args:
        markers: Marker snapshot
        sort_config: Marker-group parent and per-group tag order
        status_tags: Status tag ids, used for the rejected-only flag

    Returns:
        Ordered list of Lane objects
    """
    sort_config = sort_config or SortConfig()
    grouped = group_by_tag_name(markers)
    if not grouped:
        return []

    lanes: list[Lane] = []
    group_first_seen: dict[str, int] = {}

    for name, lane_markers in grouped.items():
        tag_ids: list[str] = []
        for marker in lane_markers:
            if marker.primary_tag.id not in tag_ids:
                tag_ids.append(marker.primary_tag.id)

        marker_group = find_marker_group(
            lane_markers[0].primary_tag,
            sort_config.marker_group_parent_id,
        )
        if marker_group is not None and marker_group.id not in group_first_seen:
            group_first_seen[marker_group.id] = len(group_first_seen)

        is_rejected_only = all(
            classify_with(marker, status_tags) is MarkerStatus.REJECTED
            for marker in lane_markers
        )

        lanes.append(Lane(
            name=name,
            markers=tuple(lane_markers),
            is_rejected_only=is_rejected_only,
            marker_group=marker_group,
            tag_ids=tuple(tag_ids),
        ))

    _log_unmatched_tag_order(lanes, sort_config)

    lanes.sort(key=lambda lane: _lane_sort_key(lane, sort_config, group_first_seen))
    return lanes


def _lane_sort_key(
    lane: Lane,
    sort_config: SortConfig,
    group_first_seen: dict[str, int],
) -> tuple:
    alphabetical = (1, lane.name.casefold(), lane.name)

    group = lane.marker_group
    if group is None:
        return (1, (), alphabetical)

    if group.order is not None:
        group_key = (0, group.order, group.full_name.casefold(), group.id)
    else:
        group_key = (1, group_first_seen[group.id], "", group.id)

    tag_order = sort_config.order_for_group(group.id)
    positions = [tag_order.index(tag_id) for tag_id in lane.tag_ids if tag_id in tag_order]
    if positions:
        return (0, group_key, (0, min(positions), lane.name))

    return (0, group_key, alphabetical)


def _log_unmatched_tag_order(lanes: list[Lane], sort_config: SortConfig):
    known_tag_ids = {tag_id for lane in lanes for tag_id in lane.tag_ids}
    for group_id, tag_ids in sort_config.tag_order.items():
        for tag_id in tag_ids:
            if tag_id not in known_tag_ids:
                logger.debug("Sort order for group %s lists tag %s with no lane", group_id, tag_id)
