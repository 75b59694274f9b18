"""Spaced-repetition scheduling (pure, no I/O)."""

from .errors import InvalidRating, InvalidState, SchedulerError
from .rating import parse_rating
from .scheduler import (
    INITIAL_DIFFICULTY,
    INITIAL_STABILITY,
    MemoryState,
    Rating,
    ReviewState,
    ScheduleResult,
    review,
    round_half_away_from_zero,
    schedule_next,
)
from .time import (
    utc_now,
    utc_now_iso,
    utc_datetime_to_iso_z,
    parse_iso_z,
    add_days,
    add_days_iso,
    max_days_after,
    start_of_utc_day,
)

__all__ = [
    "SchedulerError",
    "InvalidRating",
    "InvalidState",
    "parse_rating",
    "INITIAL_STABILITY",
    "INITIAL_DIFFICULTY",
    "MemoryState",
    "Rating",
    "ReviewState",
    "ScheduleResult",
    "review",
    "round_half_away_from_zero",
    "schedule_next",
    "utc_now",
    "utc_now_iso",
    "utc_datetime_to_iso_z",
    "parse_iso_z",
    "add_days",
    "add_days_iso",
    "max_days_after",
    "start_of_utc_day",
]
