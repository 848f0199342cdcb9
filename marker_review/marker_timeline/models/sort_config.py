"""Lane sort configuration for marker groups."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from .data_types import TagRef

SORT_ORDER_PREFIX = "Sort Order: "
_SORT_ORDER_LINE_RE = re.compile(r"Sort Order: [^\n]*")


@dataclass(frozen=True)
class SortConfig:
    """Controls how lanes are grouped and ordered.

    Attributes:
        marker_group_parent_id: Tag id whose children are marker groups
        tag_order: Mapping of marker-group tag id to the ordered primary-tag ids
            of the lanes in that group
    """
    marker_group_parent_id: str | None = None
    tag_order: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def order_for_group(self, group_id: str | None) -> tuple[str, ...]:
        """Configured tag order for a marker group (empty if none)."""
        if group_id is None:
            return ()
        return tuple(self.tag_order.get(group_id, ()))

    @classmethod
    def from_group_tags(
        cls,
        marker_group_parent_id: str | None,
        group_tags: Iterable[TagRef],
    ) -> SortConfig:
        """Build a config from the sort order stored in marker-group tag descriptions."""
        tag_order = {}
        for tag in group_tags:
            order = parse_sort_order(tag.description)
            if order:
                tag_order[tag.id] = tuple(order)
        return cls(marker_group_parent_id=marker_group_parent_id, tag_order=tag_order)


def parse_sort_order(description: str | None) -> list[str]:
    """Parse the tag ids from a "Sort Order: a, b, c" description line.

    Args:
        description: Marker-group tag description (may be None)

    Returns:
        Ordered tag ids, empty if the description holds no sort order
    """
    if not description or SORT_ORDER_PREFIX not in description:
        return []

    line = description.split(SORT_ORDER_PREFIX, 1)[1].split("\n", 1)[0].strip()
    if not line:
        return []

    return [tag_id.strip() for tag_id in line.split(",") if tag_id.strip()]


def format_sort_order(tag_ids: Iterable[str], existing_description: str | None = None) -> str:
    """Write a sort order line into a description, replacing any existing one."""
    sort_order_line = f"{SORT_ORDER_PREFIX}{', '.join(tag_ids)}"

    if not existing_description:
        return sort_order_line

    if SORT_ORDER_PREFIX in existing_description:
        return _SORT_ORDER_LINE_RE.sub(lambda _: sort_order_line, existing_description, count=1)
    return f"{existing_description}\n{sort_order_line}"
