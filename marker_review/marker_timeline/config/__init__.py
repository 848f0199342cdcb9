"""Review configuration: status tags, lane sorting and timeline settings."""

from .settings import (
    TRACK_DEFAULT_DURATION,
    PLAYHEAD_WINDOW_SECONDS,
    PLAYHEAD_DEFAULT_DURATION,
    RENDER_DEFAULT_DURATION,
    MIN_MARKER_WIDTH,
    VISIBILITY_DEFAULT_DURATION,
    DEFAULT_TIMELINE_SETTINGS,
    TimelineSettings,
    ReviewConfig,
)
from .config_loader import ConfigLoader, load_review_config

__all__ = [
    "TRACK_DEFAULT_DURATION",
    "PLAYHEAD_WINDOW_SECONDS",
    "PLAYHEAD_DEFAULT_DURATION",
    "RENDER_DEFAULT_DURATION",
    "MIN_MARKER_WIDTH",
    "VISIBILITY_DEFAULT_DURATION",
    "DEFAULT_TIMELINE_SETTINGS",
    "TimelineSettings",
    "ReviewConfig",
    "ConfigLoader",
    "load_review_config",
]
