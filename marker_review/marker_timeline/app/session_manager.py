"""Central review session: marker snapshot, configuration and cursor state."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from PySide6.QtCore import QObject, Signal

from marker_timeline.config import ReviewConfig, load_review_config
from marker_timeline.models import Marker, MarkerSummary, ParseResult
from marker_timeline.parsers import MarkerParser
from marker_timeline.utils import (
    NavigationAction,
    ReferenceTime,
    TimelineLayout,
    TimelineLayoutCache,
    TimelineViewport,
    navigate,
    summarize,
)

logger = logging.getLogger(__name__)

_GLOBAL_SCANS = {
    NavigationAction.NEXT_UNPROCESSED_GLOBAL,
    NavigationAction.PREVIOUS_UNPROCESSED_GLOBAL,
}


class ReviewSession(QObject):
    """Holds the state a marker review works on and applies navigation to it.

    The layout is derived from the current snapshot and configuration and is
    only rebuilt when one of them is replaced.
    """

    markers_changed = Signal()
    config_changed = Signal()
    layout_changed = Signal(object)  # TimelineLayout
    selection_changed = Signal(object)  # marker id or None
    playhead_changed = Signal(float)
    lane_filter_changed = Signal(object)  # lane name or None
    review_finished = Signal()  # global unprocessed scan found nothing further

    def __init__(self, config: ReviewConfig | None = None, parent=None):
        super().__init__(parent)
        self._config = config or ReviewConfig()
        self._markers: tuple[Marker, ...] = ()
        self._visible_markers: tuple[Marker, ...] = ()
        self._lane_filter: Optional[str] = None
        self._selected_id: Optional[str] = None
        self._playhead: float = 0.0
        self._cache = TimelineLayoutCache()
        self._parser = MarkerParser()

        self.lane_reference = ReferenceTime.SELECTED_MARKER

        # Shared viewport for zoom and centering
        self._viewport = TimelineViewport(self)

    # ------------------------------------------------------------------ Properties
    @property
    def config(self) -> ReviewConfig:
        return self._config

    @property
    def markers(self) -> tuple[Marker, ...]:
        return self._markers

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected_marker(self) -> Optional[Marker]:
        return self.layout.marker(self._selected_id)

    @property
    def playhead(self) -> float:
        return self._playhead

    @property
    def lane_filter(self) -> Optional[str]:
        return self._lane_filter

    @property
    def viewport(self) -> TimelineViewport:
        return self._viewport

    @property
    def layout(self) -> TimelineLayout:
        """Layout of the (filtered) snapshot, memoized on its inputs."""
        return self._cache.get(
            self._visible_markers,
            self._config.sort_config,
            self._config.status_tags,
            self._config.timeline,
        )

    @property
    def summary(self) -> MarkerSummary:
        """Status counts over the whole snapshot (ignores the lane filter)."""
        return summarize(self._markers, self._config.status_tags)

    # ------------------------------------------------------------------ Loading
    def load_markers(self, file_path: str) -> ParseResult:
        """Parse a marker JSON file and, on success, make it the snapshot."""
        result = self._parser.parse(file_path)
        if result.has_errors:
            logger.warning("%d marker entries rejected from %s", result.error_count, file_path)
        if result.success:
            self.set_markers(result.data)
        return result

    def load_config(self, file_path: str) -> ReviewConfig:
        """Load a YAML review config and apply it."""
        config = load_review_config(file_path)
        self.set_config(config)
        return config

    # ------------------------------------------------------------------ State updates
    def set_markers(self, markers: Iterable[Marker]):
        """Replace the marker snapshot."""
        self._markers = tuple(markers)
        self._refresh_visible_markers()
        self.markers_changed.emit()
        self._after_layout_inputs_changed()

    def set_config(self, config: ReviewConfig):
        """Replace the review configuration."""
        self._config = config
        self.config_changed.emit()
        self._after_layout_inputs_changed()

    def set_lane_filter(self, lane_name: Optional[str]):
        """Restrict the layout to one lane's markers (None shows all lanes)."""
        if lane_name == self._lane_filter:
            return
        self._lane_filter = lane_name
        self._refresh_visible_markers()
        self.lane_filter_changed.emit(lane_name)
        self._after_layout_inputs_changed()

    def set_playhead(self, seconds: float):
        seconds = max(0.0, float(seconds))
        if seconds == self._playhead:
            return
        self._playhead = seconds
        self.playhead_changed.emit(seconds)

    def set_video_duration(self, seconds: float):
        self._viewport.set_video_duration(seconds)

    def select(self, marker_id: Optional[str]) -> bool:
        """Move the cursor. Unknown ids are refused.

        Returns:
            True if the selection changed
        """
        if marker_id is not None and self.layout.marker(marker_id) is None:
            logger.debug("Ignoring selection of unknown marker %s", marker_id)
            return False
        if marker_id == self._selected_id:
            return False
        self._selected_id = marker_id
        self.selection_changed.emit(marker_id)
        return True

    def clear_selection(self):
        self.select(None)

    # ------------------------------------------------------------------ Navigation
    def navigate(self, action: NavigationAction) -> bool:
        """Apply a navigation action to the cursor.

        Returns:
            True if the cursor moved
        """
        layout = self.layout
        target = navigate(
            action,
            layout,
            self._selected_id,
            self._playhead,
            self._config.timeline,
            self.lane_reference,
        )

        if target is None:
            if action in _GLOBAL_SCANS and not layout.is_empty:
                self.review_finished.emit()
            return False

        return self.select(target)

    def center_on_playhead(self):
        """Scroll the viewport so the playhead is in the middle."""
        self._viewport.jump_to_time(self._playhead)

    def center_on_selection(self):
        marker = self.selected_marker
        if marker is not None:
            self._viewport.jump_to_time(marker.start_seconds)

    # ------------------------------------------------------------------ Internals
    def _refresh_visible_markers(self):
        if self._lane_filter is None:
            self._visible_markers = self._markers
        else:
            self._visible_markers = tuple(
                marker for marker in self._markers
                if marker.primary_tag.name == self._lane_filter
            )

    def _after_layout_inputs_changed(self):
        layout = self.layout
        self.layout_changed.emit(layout)

        if self._selected_id is not None and layout.marker(self._selected_id) is None:
            # Selected marker vanished: continue with the first pending one
            replacement = navigate(NavigationAction.NEXT_UNPROCESSED_GLOBAL, layout, None)
            self._selected_id = replacement
            self.selection_changed.emit(replacement)
