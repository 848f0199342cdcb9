"""Application-level state shared by the review views."""

from .session_manager import ReviewSession

__all__ = ["ReviewSession"]
