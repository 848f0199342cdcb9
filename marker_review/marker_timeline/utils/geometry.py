"""Time/pixel conversions for drawing the marker timeline."""

from __future__ import annotations

from marker_timeline.config import DEFAULT_TIMELINE_SETTINGS, TimelineSettings
from marker_timeline.models import Marker

# Slack allowed before a fit-to-window timeline is treated as zoomed in
WIDTH_TOLERANCE = 50.0
# Pixels per minute used when the container width is unknown
FALLBACK_PIXELS_PER_MINUTE = 300.0


def time_to_pixels(seconds: float, pixels_per_second: float) -> float:
    return seconds * pixels_per_second


def pixels_to_time(pixels: float, pixels_per_second: float) -> float:
    if pixels_per_second == 0:
        return 0.0
    return pixels / pixels_per_second


def timeline_width(
    video_duration: float,
    zoom: float,
    container_width: float,
    label_width: float,
) -> tuple[float, float]:
    """Width of the drawable timeline and its scale.

    A zoom of 1.0 fits the whole video into the space right of the lane
    labels. Larger zoom values widen the timeline past the container so it
    scrolls.

    Args:
        video_duration: Video length in seconds
        zoom: Zoom multiplier relative to fit-to-window
        container_width: Width of the scroll container in pixels (0 if unknown)
        label_width: Width of the lane label column in pixels

    Returns:
        (width in pixels, pixels per second)
    """
    if video_duration <= 0:
        return 0.0, 0.0

    available_width = container_width - label_width if container_width > 0 else 0.0
    total_minutes = video_duration / 60.0
    if available_width > 0:
        fit_pixels_per_minute = available_width / total_minutes
    else:
        fit_pixels_per_minute = FALLBACK_PIXELS_PER_MINUTE

    pixels_per_second = fit_pixels_per_minute / 60.0 * zoom
    width = video_duration * pixels_per_second

    # Snap back to the container when the timeline would fit anyway
    if container_width > 0 and width <= available_width + WIDTH_TOLERANCE:
        width = min(width, available_width)

    return width, width / video_duration


def marker_extent(
    marker: Marker,
    pixels_per_second: float,
    settings: TimelineSettings | None = None,
) -> tuple[float, float]:
    """Left edge and width of a marker bar in pixels.

    Markers without a usable end time are drawn render_default_duration
    long, and no bar is narrower than min_marker_width.
    """
    settings = settings or DEFAULT_TIMELINE_SETTINGS
    left = time_to_pixels(marker.start_seconds, pixels_per_second)

    if marker.end_seconds is not None and marker.end_seconds > marker.start_seconds:
        duration = marker.end_seconds - marker.start_seconds
    else:
        duration = settings.render_default_duration

    width = max(settings.min_marker_width, time_to_pixels(duration, pixels_per_second))
    return left, width


def playhead_position(current_seconds: float, pixels_per_second: float) -> float:
    return time_to_pixels(current_seconds, pixels_per_second)


def center_scroll_position(
    target_seconds: float,
    pixels_per_second: float,
    label_width: float,
    container_width: float,
) -> float:
    """Horizontal scroll offset that puts target_seconds mid-container (never negative)."""
    absolute = label_width + time_to_pixels(target_seconds, pixels_per_second)
    return max(0.0, absolute - container_width / 2)


def is_marker_visible(
    marker: Marker,
    pixels_per_second: float,
    label_width: float,
    scroll_left: float,
    container_width: float,
    settings: TimelineSettings | None = None,
) -> bool:
    """Whether the marker's midpoint lies inside the scrolled viewport.

    Open and malformed markers are measured with the configured
    visibility_default_duration.
    """
    settings = settings or DEFAULT_TIMELINE_SETTINGS
    end = marker.effective_end(settings.visibility_default_duration)
    center = (marker.start_seconds + end) / 2
    absolute = label_width + time_to_pixels(center, pixels_per_second)

    viewport_start = scroll_left + label_width
    viewport_end = scroll_left + container_width
    return viewport_start <= absolute <= viewport_end
