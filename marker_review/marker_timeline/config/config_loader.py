"""YAML loader for review configuration."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any

import yaml

from marker_timeline.models import SortConfig, StatusTags
from .settings import DEFAULT_TIMELINE_SETTINGS, ReviewConfig, TimelineSettings


class ConfigLoader:
    """Loads and interprets review configuration from YAML files."""

    @staticmethod
    def load(config_path: str | Path) -> dict[str, Any]:
        """Load review configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file.

        Returns:
            Parsed configuration dictionary.

        Raises:
            FileNotFoundError: If the configuration file doesn't exist.
            ValueError: If the file is empty or lacks the status tag section.
            yaml.YAMLError: If YAML is malformed.
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        if config is None:
            raise ValueError(f"Empty or invalid YAML file: {config_path}")

        if not isinstance(config, dict) or "marker_status" not in config:
            raise ValueError("YAML must contain 'marker_status' key")

        return config

    @staticmethod
    def get_status_tags(config: dict[str, Any]) -> StatusTags:
        """Get the confirmed/rejected status tag ids.

        Args:
            config: Parsed configuration dictionary.

        Returns:
            StatusTags; missing ids are left as None and never match.
        """
        section = config.get("marker_status") or {}
        return StatusTags(
            confirmed_tag_id=_optional_id(section.get("confirmed_tag_id")),
            rejected_tag_id=_optional_id(section.get("rejected_tag_id")),
        )

    @staticmethod
    def get_sort_config(config: dict[str, Any]) -> SortConfig:
        """Get marker-group parent and per-group lane order.

        Args:
            config: Parsed configuration dictionary.

        Returns:
            SortConfig (empty when the section is absent).
        """
        section = config.get("marker_groups") or {}
        tag_order = {
            str(group_id): tuple(str(tag_id) for tag_id in (tag_ids or []))
            for group_id, tag_ids in (section.get("tag_order") or {}).items()
        }
        return SortConfig(
            marker_group_parent_id=_optional_id(section.get("parent_id")),
            tag_order=tag_order,
        )

    @staticmethod
    def get_timeline_settings(config: dict[str, Any]) -> TimelineSettings:
        """Get timeline durations with defaults.

        Args:
            config: Parsed configuration dictionary.

        Returns:
            TimelineSettings with configured values overriding defaults.
        """
        default_settings = asdict(DEFAULT_TIMELINE_SETTINGS)
        settings = {
            key: float(value)
            for key, value in (config.get("timeline") or {}).items()
            if key in default_settings
        }
        return TimelineSettings(**{**default_settings, **settings})


def load_review_config(config_path: str | Path) -> ReviewConfig:
    """Load a YAML file into a ReviewConfig."""
    config = ConfigLoader.load(config_path)
    return ReviewConfig(
        status_tags=ConfigLoader.get_status_tags(config),
        sort_config=ConfigLoader.get_sort_config(config),
        timeline=ConfigLoader.get_timeline_settings(config),
    )


def _optional_id(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)
