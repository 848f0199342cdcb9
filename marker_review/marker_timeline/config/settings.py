"""Timeline tuning values and the bundled review configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from marker_timeline.models import SortConfig, StatusTags

# Duration given to markers without a usable end time when packing tracks
TRACK_DEFAULT_DURATION = 30.0
# Half-width of the window around the playhead searched for nearby markers
PLAYHEAD_WINDOW_SECONDS = 15.0
# Duration given to markers without an end time when matching the playhead window
PLAYHEAD_DEFAULT_DURATION = 30.0
# Duration drawn for markers without an end time
RENDER_DEFAULT_DURATION = 0.1
# Narrowest marker bar in pixels (keeps point markers clickable)
MIN_MARKER_WIDTH = 4.0
# Duration assumed for markers without a usable end when testing scroll visibility
VISIBILITY_DEFAULT_DURATION = 1.0


@dataclass(frozen=True)
class TimelineSettings:
    """Durations and widths used by layout, navigation and rendering."""
    track_default_duration: float = TRACK_DEFAULT_DURATION
    playhead_window_seconds: float = PLAYHEAD_WINDOW_SECONDS
    playhead_default_duration: float = PLAYHEAD_DEFAULT_DURATION
    render_default_duration: float = RENDER_DEFAULT_DURATION
    min_marker_width: float = MIN_MARKER_WIDTH
    visibility_default_duration: float = VISIBILITY_DEFAULT_DURATION


DEFAULT_TIMELINE_SETTINGS = TimelineSettings()


@dataclass(frozen=True)
class ReviewConfig:
    """Everything the timeline engine reads from configuration."""
    status_tags: StatusTags = field(default_factory=StatusTags)
    sort_config: SortConfig = field(default_factory=SortConfig)
    timeline: TimelineSettings = DEFAULT_TIMELINE_SETTINGS
