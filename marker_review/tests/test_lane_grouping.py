"""Tests for lane grouping, lane ordering and sort order descriptions."""

import logging

import pytest

from marker_timeline.models import SortConfig, TagRef, format_sort_order, parse_sort_order
from marker_timeline.utils import find_marker_group, group_by_tag_name, group_markers

from conftest import GROUPS_PARENT, INTRO_GROUP


def _lane_names(lanes):
    return [lane.name for lane in lanes]


class TestPartition:
    """Every marker lands in exactly one lane, keyed by primary tag name."""

    def test_empty_input(self):
        assert group_markers([]) == []

    def test_partition_is_complete(self, make_marker):
        markers = [
            make_marker("a", 5, lane="Kissing"),
            make_marker("b", 1, lane="Dancing"),
            make_marker("c", 3, lane="Kissing"),
            make_marker("d", 9, lane="Hugging"),
        ]

        lanes = group_markers(markers)

        grouped_ids = [marker_id for lane in lanes for marker_id in lane.marker_ids]
        assert sorted(grouped_ids) == ["a", "b", "c", "d"]
        assert len(grouped_ids) == len(set(grouped_ids))

    def test_lane_markers_sorted_by_start_then_id(self, make_marker):
        markers = [
            make_marker("z", 5, lane="Kissing"),
            make_marker("b", 2, lane="Kissing"),
            make_marker("a", 5, lane="Kissing"),
        ]

        (lane,) = group_markers(markers)

        assert lane.marker_ids == ("b", "a", "z")

    def test_same_name_different_tag_ids_share_a_lane(self, make_marker):
        markers = [
            make_marker("a", 0, tag=TagRef(id="1", name="Kissing")),
            make_marker("b", 1, tag=TagRef(id="2", name="Kissing")),
        ]

        (lane,) = group_markers(markers)

        assert lane.marker_count == 2
        assert lane.tag_ids == ("1", "2")

    def test_group_by_tag_name_keeps_first_appearance(self, make_marker):
        grouped = group_by_tag_name([
            make_marker("a", 0, lane="B"),
            make_marker("b", 0, lane="A"),
        ])
        assert list(grouped) == ["B", "A"]


class TestRejectedOnly:

    def test_all_rejected(self, make_marker, status_tags):
        markers = [
            make_marker("a", 0, lane="Kissing", status="rejected"),
            make_marker("b", 5, lane="Kissing", status="rejected"),
        ]
        (lane,) = group_markers(markers, status_tags=status_tags)
        assert lane.is_rejected_only

    def test_mixed_lane(self, make_marker, status_tags):
        markers = [
            make_marker("a", 0, lane="Kissing", status="rejected"),
            make_marker("b", 5, lane="Kissing", status="confirmed"),
        ]
        (lane,) = group_markers(markers, status_tags=status_tags)
        assert not lane.is_rejected_only


class TestLaneOrder:
    """Grouped lanes first, by group number then tag order or name."""

    def test_ungrouped_lanes_are_alphabetical_case_insensitive(self, make_marker):
        markers = [
            make_marker("a", 0, lane="dancing"),
            make_marker("b", 0, lane="Kissing"),
            make_marker("c", 0, lane="Biting"),
        ]

        assert _lane_names(group_markers(markers)) == ["Biting", "dancing", "Kissing"]

    def test_groups_sorted_by_numeric_prefix(self, make_marker, grouped_tags, group_sort_config):
        markers = [
            make_marker("a", 0, tag=grouped_tags["Dancing"]),
            make_marker("b", 0, tag=grouped_tags["Kissing"]),
            make_marker("c", 0, tag=grouped_tags["Hugging"]),
        ]

        lanes = group_markers(markers, group_sort_config)

        # Intro (1.) before Main (2.); inside Intro alphabetical
        assert _lane_names(lanes) == ["Hugging", "Kissing", "Dancing"]
        assert lanes[0].marker_group.display_name == "Intro"
        assert lanes[0].marker_group.order == 1

    def test_ungrouped_lanes_sort_after_grouped(self, make_marker, grouped_tags, group_sort_config):
        markers = [
            make_marker("a", 0, lane="Aardvark"),
            make_marker("b", 0, tag=grouped_tags["Dancing"]),
        ]

        lanes = group_markers(markers, group_sort_config)

        assert _lane_names(lanes) == ["Dancing", "Aardvark"]
        assert lanes[1].marker_group is None

    def test_explicit_tag_order_within_group(self, make_marker, grouped_tags):
        sort_config = SortConfig(
            marker_group_parent_id=GROUPS_PARENT.id,
            tag_order={INTRO_GROUP.id: ("20", "21")},
        )
        markers = [
            make_marker("a", 0, tag=grouped_tags["Hugging"]),
            make_marker("b", 0, tag=grouped_tags["Kissing"]),
        ]

        assert _lane_names(group_markers(markers, sort_config)) == ["Kissing", "Hugging"]

    def test_lanes_missing_from_tag_order_follow_alphabetically(self, make_marker):
        intro_tag = lambda tag_id, name: TagRef(id=tag_id, name=name, parents=(INTRO_GROUP,))
        sort_config = SortConfig(
            marker_group_parent_id=GROUPS_PARENT.id,
            tag_order={INTRO_GROUP.id: ("30",)},
        )
        markers = [
            make_marker("a", 0, tag=intro_tag("31", "Biting")),
            make_marker("b", 0, tag=intro_tag("30", "Zooming")),
            make_marker("c", 0, tag=intro_tag("32", "Acting")),
        ]

        assert _lane_names(group_markers(markers, sort_config)) == ["Zooming", "Acting", "Biting"]

    def test_unmatched_tag_order_entry_is_ignored(self, make_marker, grouped_tags, caplog):
        sort_config = SortConfig(
            marker_group_parent_id=GROUPS_PARENT.id,
            tag_order={INTRO_GROUP.id: ("999", "21")},
        )
        markers = [
            make_marker("a", 0, tag=grouped_tags["Kissing"]),
            make_marker("b", 0, tag=grouped_tags["Hugging"]),
        ]

        with caplog.at_level(logging.DEBUG, logger="marker_timeline.utils.lane_grouping"):
            lanes = group_markers(markers, sort_config)

        assert _lane_names(lanes) == ["Hugging", "Kissing"]
        assert "999" in caplog.text

    def test_unnumbered_groups_keep_first_appearance(self, make_marker):
        group_b = TagRef(id="50", name="Marker Group: Zeta", parents=(GROUPS_PARENT,))
        group_a = TagRef(id="51", name="Marker Group: Alpha", parents=(GROUPS_PARENT,))
        markers = [
            make_marker("a", 0, tag=TagRef(id="60", name="Waving", parents=(group_b,))),
            make_marker("b", 0, tag=TagRef(id="61", name="Bowing", parents=(group_a,))),
        ]

        lanes = group_markers(markers, SortConfig(marker_group_parent_id=GROUPS_PARENT.id))

        assert _lane_names(lanes) == ["Waving", "Bowing"]

    def test_without_parent_config_everything_is_ungrouped(self, make_marker, grouped_tags):
        markers = [
            make_marker("a", 0, tag=grouped_tags["Kissing"]),
            make_marker("b", 0, tag=grouped_tags["Dancing"]),
        ]

        lanes = group_markers(markers)

        assert _lane_names(lanes) == ["Dancing", "Kissing"]
        assert all(lane.marker_group is None for lane in lanes)

    def test_grouping_is_deterministic(self, make_marker, grouped_tags, group_sort_config):
        markers = [
            make_marker("a", 3, tag=grouped_tags["Kissing"]),
            make_marker("b", 1, lane="Other"),
            make_marker("c", 2, tag=grouped_tags["Dancing"]),
        ]

        assert group_markers(markers, group_sort_config) == group_markers(markers, group_sort_config)


class TestFindMarkerGroup:

    def test_strips_prefix_and_number(self, grouped_tags):
        group = find_marker_group(grouped_tags["Dancing"], GROUPS_PARENT.id)

        assert group.id == "11"
        assert group.full_name == "Marker Group: 2. Main"
        assert group.display_name == "Main"
        assert group.order == 2

    def test_group_without_prefix(self):
        group_tag = TagRef(id="40", name="Outro", parents=(GROUPS_PARENT,))
        group = find_marker_group(TagRef(id="41", name="Waving", parents=(group_tag,)), GROUPS_PARENT.id)

        assert group.display_name == "Outro"
        assert group.order is None

    def test_no_matching_parent(self, grouped_tags):
        assert find_marker_group(grouped_tags["Kissing"], "not-the-parent") is None
        assert find_marker_group(grouped_tags["Kissing"], None) is None


class TestSortOrderDescription:

    @pytest.mark.parametrize("description, expected", [
        (None, []),
        ("", []),
        ("Just notes", []),
        ("Sort Order: 3, 1, 2", ["3", "1", "2"]),
        ("Intro group\nSort Order: 7,8 \nmore notes", ["7", "8"]),
        ("Sort Order: ", []),
    ])
    def test_parse_sort_order(self, description, expected):
        assert parse_sort_order(description) == expected

    def test_format_into_empty_description(self):
        assert format_sort_order(["1", "2"]) == "Sort Order: 1, 2"

    def test_format_appends_line(self):
        assert format_sort_order(["1"], "Notes") == "Notes\nSort Order: 1"

    def test_format_replaces_existing_line(self):
        description = "Notes\nSort Order: 1, 2\nFooter"
        assert format_sort_order(["2", "1"], description) == "Notes\nSort Order: 2, 1\nFooter"

    def test_sort_config_from_group_tags(self):
        groups = [
            TagRef(id="10", name="Marker Group: 1. Intro", description="Sort Order: 21, 20"),
            TagRef(id="11", name="Marker Group: 2. Main", description="No order"),
        ]

        config = SortConfig.from_group_tags("1", groups)

        assert config.marker_group_parent_id == "1"
        assert config.order_for_group("10") == ("21", "20")
        assert config.order_for_group("11") == ()
        assert config.order_for_group(None) == ()
