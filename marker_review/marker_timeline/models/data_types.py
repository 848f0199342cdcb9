"""Core data types for marker review and timeline layout."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MarkerStatus(Enum):
    """Review status of a marker, derived from its status tags."""
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    PENDING = "pending"


@dataclass(frozen=True)
class TagRef:
    """A catalog tag with its (optional) parent chain."""
    id: str
    name: str
    description: str | None = None
    parents: tuple[TagRef, ...] = ()

    def __repr__(self) -> str:
        return f"TagRef(id={self.id}, name={self.name})"


@dataclass(frozen=True)
class Marker:
    """A time-interval annotation on a video.

    Attributes:
        id: Opaque unique identifier
        start_seconds: Start of the interval (>= 0)
        primary_tag: Tag that decides which lane the marker belongs to
        end_seconds: Optional end of the interval
        tags: Additional tags (status tags live here)
        title: Free-form title from the catalog
    """
    id: str
    start_seconds: float
    primary_tag: TagRef
    end_seconds: float | None = None
    tags: frozenset[TagRef] = frozenset()
    title: str = ""

    @property
    def tag_ids(self) -> frozenset[str]:
        """Ids of all additional tags."""
        return frozenset(tag.id for tag in self.tags)

    @property
    def has_valid_interval(self) -> bool:
        """False when an end time is present but not after the start."""
        return self.end_seconds is None or self.end_seconds > self.start_seconds

    def has_tag(self, tag_id: str | None) -> bool:
        if tag_id is None:
            return False
        return any(tag.id == tag_id for tag in self.tags)

    def effective_end(self, default_duration: float) -> float:
        """End of the interval, falling back to start + default_duration."""
        if self.end_seconds is not None and self.end_seconds > self.start_seconds:
            return self.end_seconds
        return self.start_seconds + default_duration

    def __repr__(self) -> str:
        end = f"{self.end_seconds:.3f}" if self.end_seconds is not None else "-"
        return (
            f"Marker(id={self.id}, tag={self.primary_tag.name}, "
            f"start={self.start_seconds:.3f}, end={end})"
        )


@dataclass(frozen=True)
class StatusTags:
    """Configured tag ids that mark a marker as confirmed or rejected."""
    confirmed_tag_id: str | None = None
    rejected_tag_id: str | None = None


@dataclass(frozen=True)
class MarkerGroup:
    """A tag-based category used to order and label lanes."""
    id: str
    full_name: str
    display_name: str
    order: int | None = None


@dataclass(frozen=True)
class Lane:
    """Markers sharing one primary tag name, rendered as one row."""
    name: str
    markers: tuple[Marker, ...]
    is_rejected_only: bool = False
    marker_group: MarkerGroup | None = None
    tag_ids: tuple[str, ...] = ()

    @property
    def marker_count(self) -> int:
        """Number of markers in the lane."""
        return len(self.markers)

    @property
    def marker_ids(self) -> tuple[str, ...]:
        return tuple(marker.id for marker in self.markers)


@dataclass(frozen=True)
class TrackPlacement:
    """Where a marker sits on the timeline: lane row and sub-row."""
    lane_index: int
    track_index: int


@dataclass
class MarkerSummary:
    """Status counts over a marker collection."""
    confirmed: int = 0
    rejected: int = 0
    pending: int = 0

    @property
    def total(self) -> int:
        return self.confirmed + self.rejected + self.pending


@dataclass
class ParseError:
    """A marker payload entry that could not be converted."""
    index: int
    reason: str
    payload: Any = None
    file_path: str | None = None

    def __repr__(self) -> str:
        file_info = f", file={self.file_path}" if self.file_path else ""
        return f"ParseError(index={self.index}{file_info}, reason={self.reason})"


@dataclass
class ParseResult:
    """Complete result of parsing a marker snapshot, including errors."""
    data: list[Marker] | None
    errors: list[ParseError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Whether parsing produced data."""
        return self.data is not None

    @property
    def has_errors(self) -> bool:
        """Whether any entries were rejected."""
        return len(self.errors) > 0

    @property
    def error_count(self) -> int:
        """Number of rejected entries."""
        return len(self.errors)
