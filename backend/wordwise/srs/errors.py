"""Errors raised by the review scheduler."""

from __future__ import annotations


class SchedulerError(ValueError):
    """Base class for scheduler input errors."""


class InvalidRating(SchedulerError):
    """Raised when a rating is not one of 1 (again), 2 (hard), 3 (good), 4 (easy)."""

    def __init__(self, rating: object):
        self.rating = rating
        super().__init__(f"rating must be one of 1, 2, 3, 4 (again/hard/good/easy), got {rating!r}")


class InvalidState(SchedulerError):
    """Raised when the stability/difficulty passed in violate their bounds."""
