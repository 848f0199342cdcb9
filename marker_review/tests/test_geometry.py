"""Tests for time/pixel conversions."""

import pytest

from marker_timeline.config import TimelineSettings
from marker_timeline.utils import (
    center_scroll_position,
    is_marker_visible,
    marker_extent,
    pixels_to_time,
    playhead_position,
    time_to_pixels,
    timeline_width,
)


def test_time_pixel_conversion():
    assert time_to_pixels(12.5, 4.0) == 50.0
    assert pixels_to_time(50.0, 4.0) == 12.5
    assert pixels_to_time(50.0, 0.0) == 0.0
    assert playhead_position(3.0, 10.0) == 30.0


class TestTimelineWidth:

    def test_fit_to_window(self):
        # 600s video into 1000 - 200 = 800px
        width, pixels_per_second = timeline_width(600.0, 1.0, 1000.0, 200.0)

        assert width == pytest.approx(800.0)
        assert pixels_per_second == pytest.approx(800.0 / 600.0)

    def test_zoomed_in_exceeds_container(self):
        width, pixels_per_second = timeline_width(600.0, 3.0, 1000.0, 200.0)

        assert width == pytest.approx(2400.0)
        assert pixels_per_second == pytest.approx(4.0)

    def test_unknown_container_uses_fallback_scale(self):
        width, pixels_per_second = timeline_width(120.0, 1.0, 0.0, 200.0)

        assert pixels_per_second == pytest.approx(5.0)
        assert width == pytest.approx(600.0)

    def test_zero_duration(self):
        assert timeline_width(0.0, 1.0, 1000.0, 200.0) == (0.0, 0.0)


class TestMarkerExtent:

    def test_interval_marker(self, make_marker):
        left, width = marker_extent(make_marker("a", 10, 20), pixels_per_second=2.0)

        assert left == 20.0
        assert width == 20.0

    def test_point_marker_gets_minimum_width(self, make_marker):
        left, width = marker_extent(make_marker("a", 10), pixels_per_second=2.0)

        assert left == 20.0
        assert width == 4.0

    def test_render_duration_from_settings(self, make_marker):
        settings = TimelineSettings(render_default_duration=5.0, min_marker_width=1.0)

        _, width = marker_extent(make_marker("a", 10), 2.0, settings)

        assert width == 10.0


def test_center_scroll_position():
    assert center_scroll_position(100.0, 2.0, 200.0, 600.0) == 100.0
    assert center_scroll_position(1.0, 2.0, 200.0, 600.0) == 0.0


def test_is_marker_visible(make_marker):
    marker = make_marker("a", 100, 110)  # center at 105s -> 210px + 200 label

    assert is_marker_visible(marker, 2.0, 200.0, scroll_left=0.0, container_width=600.0)
    assert not is_marker_visible(marker, 2.0, 200.0, scroll_left=500.0, container_width=600.0)


class TestMarkerVisibility:

    def test_open_marker_uses_visibility_duration(self, make_marker):
        marker = make_marker("a", 100)  # center at 100.5s -> 201px + 200 label

        assert is_marker_visible(marker, 2.0, 200.0, scroll_left=200.0, container_width=600.0)
        assert not is_marker_visible(marker, 2.0, 200.0, scroll_left=205.0, container_width=600.0)

    def test_visibility_duration_from_settings(self, make_marker):
        marker = make_marker("a", 100)
        settings = TimelineSettings(visibility_default_duration=10.0)  # center at 105s -> 410px

        assert is_marker_visible(marker, 2.0, 200.0, 205.0, 600.0, settings)

    def test_malformed_marker_ignores_its_end(self, make_marker):
        # A midpoint of 75s (350px) would fall left of this viewport
        marker = make_marker("a", 100, 50)

        assert is_marker_visible(marker, 2.0, 200.0, scroll_left=200.0, container_width=600.0)

    def test_zero_length_marker_is_malformed(self, make_marker):
        marker = make_marker("a", 100, 100)

        assert is_marker_visible(marker, 2.0, 200.0, scroll_left=200.0, container_width=600.0)
        assert not is_marker_visible(marker, 2.0, 200.0, scroll_left=205.0, container_width=600.0)
