"""Marker status classification."""

from __future__ import annotations

from typing import Iterable

from marker_timeline.models import Marker, MarkerStatus, MarkerSummary, StatusTags


def classify(
    marker: Marker,
    confirmed_tag_id: str | None,
    rejected_tag_id: str | None,
) -> MarkerStatus:
    """Classify a marker by its status tags.

    The rejected tag is checked first, so a marker carrying both tags counts
    as rejected. Ids that are None never match.
    """
    if marker.has_tag(rejected_tag_id):
        return MarkerStatus.REJECTED
    if marker.has_tag(confirmed_tag_id):
        return MarkerStatus.CONFIRMED
    return MarkerStatus.PENDING


def classify_with(marker: Marker, status_tags: StatusTags | None) -> MarkerStatus:
    if status_tags is None:
        return MarkerStatus.PENDING
    return classify(marker, status_tags.confirmed_tag_id, status_tags.rejected_tag_id)


def is_pending(marker: Marker, status_tags: StatusTags | None) -> bool:
    """Whether the marker is neither confirmed nor rejected."""
    return classify_with(marker, status_tags) is MarkerStatus.PENDING


def summarize(markers: Iterable[Marker], status_tags: StatusTags | None) -> MarkerSummary:
    """Count confirmed, rejected and pending markers."""
    summary = MarkerSummary()
    for marker in markers:
        status = classify_with(marker, status_tags)
        if status is MarkerStatus.REJECTED:
            summary.rejected += 1
        elif status is MarkerStatus.CONFIRMED:
            summary.confirmed += 1
        else:
            summary.pending += 1
    return summary


def all_processed(markers: Iterable[Marker], status_tags: StatusTags | None) -> bool:
    """True when no marker is left pending (vacuously true for no markers)."""
    return all(not is_pending(marker, status_tags) for marker in markers)
