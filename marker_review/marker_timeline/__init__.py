"""Marker timeline engine: lane grouping, track packing and review navigation."""

__version__ = "0.1.0"
