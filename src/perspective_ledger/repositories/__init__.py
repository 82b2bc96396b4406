"""Data access layer."""

from .feedback_repo import FeedbackRepository

__all__ = ["FeedbackRepository"]
