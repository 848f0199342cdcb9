"""
Scene marker payload parser.

Converts marker records as returned by the catalog service into Marker
objects. Accepted shapes:

  1. A JSON list of marker objects
  2. A JSON object with a "scene_markers" list (a scene record)

Each marker object looks like:

  {
    "id": "12",
    "seconds": 31.5,
    "end_seconds": 40.0,            # optional / null
    "title": "...",                 # optional
    "primary_tag": {"id": "7", "name": "Kiss", "description": null,
                    "parents": [{"id": "3", "name": "Marker Group: 1. Intro",
                                 "parents": [{"id": "1", "name": "Marker Groups"}]}]},
    "tags": [{"id": "100", "name": "Confirmed"}]
  }

Entries that cannot be converted are reported as ParseError records; the
rest of the payload is still returned.
"""

from __future__ import annotations

import json
import logging
import math
from numbers import Real
from typing import Any, Iterable

from marker_timeline.models import Marker, ParseError, ParseResult, TagRef

logger = logging.getLogger(__name__)


class MarkerParser:
    """Parser for scene marker payloads (JSON)."""

    name = "scene_markers"

    def can_parse(self, file_path: str) -> bool:
        return str(file_path).lower().endswith(".json")

    def parse(self, file_path: str) -> ParseResult:
        """Parse a JSON file holding markers.

        Args:
            file_path: Path to the JSON file

        Returns:
            ParseResult with the converted markers; data is None when the
            file cannot be read or holds no usable markers
        """
        try:
            with open(file_path, "r", encoding="utf-8-sig") as f:
                payload = json.load(f)
        except FileNotFoundError:
            return ParseResult(data=None, errors=[
                ParseError(0, f"File not found: {file_path}", file_path=str(file_path))
            ])
        except (OSError, json.JSONDecodeError) as e:
            return ParseResult(data=None, errors=[
                ParseError(0, f"Failed to read file: {e}", file_path=str(file_path))
            ])

        if isinstance(payload, dict):
            items = payload.get("scene_markers")
        else:
            items = payload

        if not isinstance(items, list):
            return ParseResult(data=None, errors=[
                ParseError(0, "Expected a list of markers or an object with 'scene_markers'",
                           file_path=str(file_path))
            ])

        result = self.parse_payload(items)
        for error in result.errors:
            error.file_path = str(file_path)
        return result

    def parse_payload(self, items: Iterable[Any]) -> ParseResult:
        """Convert already-decoded marker records.

        Args:
            items: Marker dictionaries

        Returns:
            ParseResult; data is None only when no entry could be converted
        """
        markers: list[Marker] = []
        errors: list[ParseError] = []
        seen_ids: set[str] = set()

        for index, item in enumerate(items):
            try:
                marker = self._parse_marker(item)
                if marker.id in seen_ids:
                    raise ValueError(f"Duplicate marker id: {marker.id}")
            except ValueError as e:
                logger.warning("Skipping marker entry %d: %s", index, e)
                errors.append(ParseError(index, str(e), payload=item))
                continue
            seen_ids.add(marker.id)
            markers.append(marker)

        if not markers:
            return ParseResult(data=None, errors=errors)
        return ParseResult(data=markers, errors=errors)

    # ---------- Entry conversion ----------
    def _parse_marker(self, item: Any) -> Marker:
        if not isinstance(item, dict):
            raise ValueError("Marker entry is not an object")

        marker_id = item.get("id")
        if marker_id is None or marker_id == "":
            raise ValueError("Missing marker id")

        if "seconds" not in item or item["seconds"] is None:
            raise ValueError("Missing start seconds")
        start = _as_seconds(item["seconds"], "seconds")
        if start < 0:
            raise ValueError(f"Negative start seconds: {start}")

        end_raw = item.get("end_seconds")
        end = _as_seconds(end_raw, "end_seconds") if end_raw is not None else None

        primary = item.get("primary_tag")
        if not isinstance(primary, dict):
            raise ValueError("Missing primary tag")

        tags = frozenset(_parse_tag(tag) for tag in _as_list(item.get("tags"), "tags"))

        return Marker(
            id=str(marker_id),
            start_seconds=start,
            end_seconds=end,
            primary_tag=_parse_tag(primary),
            tags=tags,
            title=item.get("title") or "",
        )


def _as_seconds(value: Any, field_name: str) -> float:
    # bool is a Real subclass; it is never a valid time
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValueError(f"Non-numeric {field_name}: {value!r}")
    # json.load accepts NaN and Infinity literals
    if not math.isfinite(value):
        raise ValueError(f"Non-finite {field_name}: {value!r}")
    return float(value)


def _as_list(value: Any, field_name: str) -> list:
    """Absent or null lists are empty; anything else must be a JSON array."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be a list: {value!r}")
    return value


def _parse_tag(raw: Any) -> TagRef:
    """Build a TagRef (with its parent chain) from a tag dictionary."""
    if not isinstance(raw, dict):
        raise ValueError(f"Tag is not an object: {raw!r}")

    tag_id = raw.get("id")
    name = raw.get("name")
    if tag_id is None or name is None:
        raise ValueError(f"Tag missing id or name: {raw!r}")

    return TagRef(
        id=str(tag_id),
        name=str(name),
        description=raw.get("description"),
        parents=tuple(_parse_tag(parent) for parent in _as_list(raw.get("parents"), "parents")),
    )
