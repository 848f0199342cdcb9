"""Data models for markers, lanes and layout results."""

from .data_types import (
    MarkerStatus,
    TagRef,
    Marker,
    StatusTags,
    MarkerGroup,
    Lane,
    TrackPlacement,
    MarkerSummary,
    ParseError,
    ParseResult,
)
from .sort_config import (
    SortConfig,
    parse_sort_order,
    format_sort_order,
)

__all__ = [
    "MarkerStatus",
    "TagRef",
    "Marker",
    "StatusTags",
    "MarkerGroup",
    "Lane",
    "TrackPlacement",
    "MarkerSummary",
    "ParseError",
    "ParseResult",
    "SortConfig",
    "parse_sort_order",
    "format_sort_order",
]
