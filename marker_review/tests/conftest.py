"""Pytest configuration for tests."""

import sys
from pathlib import Path

import pytest
import yaml

# Add the parent directory to the path so we can import marker_timeline
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

from marker_timeline.models import Marker, SortConfig, StatusTags, TagRef

CONFIRMED_TAG = TagRef(id="100", name="Confirmed")
REJECTED_TAG = TagRef(id="101", name="Rejected")

# Tag hierarchy used by the grouping tests:
#   Marker Groups (1)
#     Marker Group: 1. Intro (10)   -> Kissing (20), Hugging (21)
#     Marker Group: 2. Main (11)    -> Dancing (22)
GROUPS_PARENT = TagRef(id="1", name="Marker Groups")
INTRO_GROUP = TagRef(id="10", name="Marker Group: 1. Intro", parents=(GROUPS_PARENT,))
MAIN_GROUP = TagRef(id="11", name="Marker Group: 2. Main", parents=(GROUPS_PARENT,))


@pytest.fixture
def status_tags():
    """Status tag ids matching CONFIRMED_TAG / REJECTED_TAG."""
    return StatusTags(confirmed_tag_id=CONFIRMED_TAG.id, rejected_tag_id=REJECTED_TAG.id)


@pytest.fixture
def grouped_tags():
    """Primary tags that belong to marker groups, keyed by lane name."""
    return {
        "Kissing": TagRef(id="20", name="Kissing", parents=(INTRO_GROUP,)),
        "Hugging": TagRef(id="21", name="Hugging", parents=(INTRO_GROUP,)),
        "Dancing": TagRef(id="22", name="Dancing", parents=(MAIN_GROUP,)),
    }


@pytest.fixture
def group_sort_config():
    """Sort config with the hierarchy above and no explicit tag order."""
    return SortConfig(marker_group_parent_id=GROUPS_PARENT.id)


@pytest.fixture
def make_marker():
    """Factory for markers.

    Usage: make_marker("a", 10, 20, lane="Kissing", status="confirmed")
    """

    def _make(marker_id, start, end=None, lane="Lane", status=None, tag=None):
        tags = frozenset()
        if status == "confirmed":
            tags = frozenset({CONFIRMED_TAG})
        elif status == "rejected":
            tags = frozenset({REJECTED_TAG})
        primary_tag = tag or TagRef(id=f"tag-{lane}", name=lane)
        return Marker(
            id=marker_id,
            start_seconds=float(start),
            end_seconds=float(end) if end is not None else None,
            primary_tag=primary_tag,
            tags=tags,
        )

    return _make


@pytest.fixture
def review_yaml_config(tmp_path):
    """Create a YAML review config file for testing."""
    config = {
        "marker_status": {
            "confirmed_tag_id": CONFIRMED_TAG.id,
            "rejected_tag_id": REJECTED_TAG.id,
        },
        "marker_groups": {
            "parent_id": GROUPS_PARENT.id,
            "tag_order": {INTRO_GROUP.id: ["21", "20"]},
        },
        "timeline": {
            "track_default_duration": 20,
            "playhead_window_seconds": 10,
        },
    }

    path = tmp_path / "review.yaml"
    with open(path, "w") as f:
        yaml.dump(config, f)

    return path
