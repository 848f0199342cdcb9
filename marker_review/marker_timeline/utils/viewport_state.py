"""Viewport state for zooming and scrolling the marker timeline."""

from typing import Optional, Tuple
from PySide6.QtCore import QObject, Signal


class TimelineViewport(QObject):
    """Manages the visible window over a video's timeline (in seconds).

    The full range is always [0, video duration]. Zoom is expressed as the
    visible duration; zoom_level is the matching multiplier relative to
    fit-to-window, as used by geometry.timeline_width.

    Signals:
        time_range_changed: Emitted when the visible time range changes
        duration_changed: Emitted when the visible duration changes (in seconds)
    """

    time_range_changed = Signal(float, float)
    duration_changed = Signal(float)  # Emits visible duration in seconds

    # Narrowest window (max zoom in)
    MIN_VISIBLE_DURATION_SECONDS = 1.0

    def __init__(self, parent=None):
        super().__init__(parent)

        self._video_duration: Optional[float] = None

        self._visible_start: Optional[float] = None
        self._visible_end: Optional[float] = None
        self._visible_duration_seconds: float = 0.0

        self.min_visible_duration = self.MIN_VISIBLE_DURATION_SECONDS
        self.max_visible_duration = 0.0

    def set_video_duration(self, duration_seconds: float):
        """Set the video length and show the whole video.

        Args:
            duration_seconds: Video length in seconds
        """
        if duration_seconds <= 0:
            raise ValueError("Video duration must be positive")

        self._video_duration = float(duration_seconds)
        self.max_visible_duration = self._video_duration
        # Short clips can still be shown in full
        self.min_visible_duration = min(self.MIN_VISIBLE_DURATION_SECONDS, self._video_duration)

        self._visible_start = 0.0
        self._visible_end = self._video_duration
        self._visible_duration_seconds = self._video_duration

        self.time_range_changed.emit(self._visible_start, self._visible_end)
        self.duration_changed.emit(self._visible_duration_seconds)

    @property
    def video_duration(self) -> Optional[float]:
        return self._video_duration

    @property
    def visible_time_range(self) -> Optional[Tuple[float, float]]:
        """Get the current visible time range."""
        if self._visible_start is None or self._visible_end is None:
            return None
        return (self._visible_start, self._visible_end)

    @property
    def visible_duration_seconds(self) -> float:
        return self._visible_duration_seconds

    @property
    def zoom_level(self) -> float:
        """Video duration / visible duration (1.0 = whole video fits)."""
        if not self._video_duration or self._visible_duration_seconds <= 0:
            return 1.0
        return self._video_duration / self._visible_duration_seconds

    def zoom_in(self, factor: float = 2.0):
        """Zoom in by decreasing the visible duration.

        Args:
            factor: Factor to divide duration by (default 2.0 = show half the time)
        """
        new_duration = max(self._visible_duration_seconds / factor, self.min_visible_duration)
        self._apply_duration_change(new_duration)

    def zoom_out(self, factor: float = 2.0):
        """Zoom out by increasing the visible duration."""
        new_duration = min(self._visible_duration_seconds * factor, self.max_visible_duration)
        self._apply_duration_change(new_duration)

    def set_visible_duration(self, duration_seconds: float):
        """Set the visible duration directly, clamped to the allowed range."""
        duration_seconds = max(self.min_visible_duration, min(duration_seconds, self.max_visible_duration))
        self._apply_duration_change(duration_seconds)

    def set_zoom_level(self, zoom: float):
        """Set the zoom multiplier (higher = more zoomed in)."""
        if not self._video_duration or zoom <= 0:
            return
        self.set_visible_duration(self._video_duration / zoom)

    def reset_zoom(self):
        """Show the whole video again."""
        if self._video_duration is None:
            return

        self._visible_duration_seconds = self._video_duration
        self._visible_start = 0.0
        self._visible_end = self._video_duration

        self.time_range_changed.emit(self._visible_start, self._visible_end)
        self.duration_changed.emit(self._visible_duration_seconds)

    def _apply_duration_change(self, new_duration_seconds: float):
        """Apply a new visible duration, keeping the current center."""
        if self._video_duration is None:
            return
        if self._visible_start is None or self._visible_end is None:
            return

        if abs(new_duration_seconds - self._visible_duration_seconds) < 0.0001:
            return  # No significant change

        center = (self._visible_start + self._visible_end) / 2
        new_start, new_end = self._clamp_window(center - new_duration_seconds / 2, new_duration_seconds)

        self._visible_start = new_start
        self._visible_end = new_end
        self._visible_duration_seconds = new_end - new_start

        self.time_range_changed.emit(self._visible_start, self._visible_end)
        self.duration_changed.emit(self._visible_duration_seconds)

    def _clamp_window(self, start: float, duration: float) -> Tuple[float, float]:
        """Slide a window of the given duration so it stays inside the video."""
        duration = min(duration, self._video_duration)
        start = min(max(start, 0.0), self._video_duration - duration)
        return start, start + duration

    def pan(self, delta_seconds: float):
        """Pan the viewport by a time delta.

        Args:
            delta_seconds: Time delta in seconds (positive = forward, negative = backward)
        """
        if self._visible_start is None or self._visible_end is None:
            return

        new_start, new_end = self._clamp_window(
            self._visible_start + delta_seconds,
            self._visible_end - self._visible_start,
        )

        if new_start != self._visible_start or new_end != self._visible_end:
            self._visible_start = new_start
            self._visible_end = new_end
            self.time_range_changed.emit(self._visible_start, self._visible_end)

    def set_time_range(self, start: float, end: float):
        """Set the visible time range directly.

        Reversed bounds are swapped. The span is clamped to the allowed
        durations and the window is slid back inside the video.
        """
        if self._video_duration is None:
            return

        if start > end:
            start, end = end, start

        requested = end - start
        requested = min(max(requested, self.min_visible_duration), self.max_visible_duration)

        new_start, new_end = self._clamp_window(start, requested)

        self._visible_start = new_start
        self._visible_end = new_end
        self._visible_duration_seconds = new_end - new_start

        self.time_range_changed.emit(self._visible_start, self._visible_end)
        self.duration_changed.emit(self._visible_duration_seconds)

    def jump_to_time(self, target_seconds: float):
        """Center the viewport on a time (e.g. the playhead).

        Args:
            target_seconds: Time to center on
        """
        if self._visible_start is None or self._visible_end is None:
            return

        target_seconds = min(max(target_seconds, 0.0), self._video_duration)
        duration = self._visible_end - self._visible_start
        new_start, new_end = self._clamp_window(target_seconds - duration / 2, duration)

        if new_start != self._visible_start or new_end != self._visible_end:
            self._visible_start = new_start
            self._visible_end = new_end
            self.time_range_changed.emit(self._visible_start, self._visible_end)

    def contains(self, seconds: float) -> bool:
        """Whether a time lies inside the visible window."""
        if self._visible_start is None or self._visible_end is None:
            return False
        return self._visible_start <= seconds <= self._visible_end
