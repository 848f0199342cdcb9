"""Parsers for marker snapshots."""

from .marker_parser import MarkerParser


__all__ = [
    "MarkerParser",
]
