"""Review scheduler.

Given an item's current stability/difficulty and the learner's recall rating,
compute the next stability, difficulty and due date.

Rules per rating:
- 1 again: stability * 0.5 (at least 1), difficulty + 1
- 2 hard:  stability * 1.2,               difficulty + 0.5
- 3 good:  stability * 2.5,               difficulty - 0.1
- 4 easy:  stability * 4,                 difficulty - 0.3

Difficulty is clamped to [1, 10]. The due date is `now` plus the new stability
rounded half away from zero to whole days, capped at the last day `datetime`
can represent (stability itself is never capped). Nothing here reads the
clock or touches storage.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum

from .errors import InvalidRating, InvalidState
from .time import add_days, max_days_after


INITIAL_STABILITY = 1.0
INITIAL_DIFFICULTY = 5.0

MIN_DIFFICULTY = 1.0
MAX_DIFFICULTY = 10.0


class Rating(IntEnum):
    AGAIN = 1
    HARD = 2
    GOOD = 3
    EASY = 4

    @property
    def label(self) -> str:
        return self.name.lower()


class ReviewState(str, Enum):
    NEW = "new"
    REVIEW = "review"


# rating -> (stability multiplier, difficulty delta)
_TRANSITIONS: dict[Rating, tuple[float, float]] = {
    Rating.AGAIN: (0.5, 1.0),
    Rating.HARD: (1.2, 0.5),
    Rating.GOOD: (2.5, -0.1),
    Rating.EASY: (4.0, -0.3),
}


@dataclass(frozen=True)
class ScheduleResult:
    stability: float
    difficulty: float
    due_date: datetime
    state: ReviewState


@dataclass(frozen=True)
class MemoryState:
    """Memory state of one learner for one vocabulary item."""

    stability: float
    difficulty: float
    due_date: datetime
    last_reviewed_at: datetime | None = None
    review_count: int = 0
    state: ReviewState = ReviewState.NEW


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, with .5 going away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _check_rating(rating: object) -> Rating:
    # bool is an int subclass; True must not pass as "again"
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidRating(rating)
    try:
        return Rating(rating)
    except ValueError:
        raise InvalidRating(rating) from None


def _check_state(stability: float, difficulty: float) -> None:
    if not math.isfinite(stability) or stability <= 0:
        raise InvalidState(f"stability must be a positive number, got {stability!r}")
    if not math.isfinite(difficulty) or not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY:
        raise InvalidState(
            f"difficulty must be between {MIN_DIFFICULTY:g} and {MAX_DIFFICULTY:g}, got {difficulty!r}"
        )


def _clamp_difficulty(difficulty: float) -> float:
    return min(MAX_DIFFICULTY, max(MIN_DIFFICULTY, difficulty))


def schedule_next(stability: float, difficulty: float, rating: int, now: datetime) -> ScheduleResult:
    """Compute the next stability, difficulty, due date and state.

    Args:
        stability: Current stability in days (> 0). Pass 1 for a new item.
        difficulty: Current difficulty in [1, 10]. Pass 5 for a new item.
        rating: 1 (again), 2 (hard), 3 (good) or 4 (easy).
        now: Review time; the due date is computed from it.

    Raises:
        InvalidRating: If rating is not 1-4.
        InvalidState: If stability/difficulty are out of bounds.
    """
    rating = _check_rating(rating)
    _check_state(stability, difficulty)

    multiplier, delta = _TRANSITIONS[rating]
    new_stability = stability * multiplier
    if rating is Rating.AGAIN:
        new_stability = max(1.0, new_stability)
    new_difficulty = _clamp_difficulty(difficulty + delta)

    # due dates past year 9999 land on the last representable day
    interval = min(new_stability, float(max_days_after(now)))

    return ScheduleResult(
        stability=new_stability,
        difficulty=new_difficulty,
        due_date=add_days(now, round_half_away_from_zero(interval)),
        state=ReviewState.REVIEW if rating >= Rating.GOOD else ReviewState.NEW,
    )


def review(memory: MemoryState | None, rating: int, now: datetime) -> MemoryState:
    """Apply one review to a memory state.

    `memory` is None for an item the learner has never rated; it is then
    seeded with INITIAL_STABILITY / INITIAL_DIFFICULTY.
    """
    if memory is None:
        stability, difficulty, review_count = INITIAL_STABILITY, INITIAL_DIFFICULTY, 0
    else:
        stability, difficulty, review_count = memory.stability, memory.difficulty, memory.review_count

    result = schedule_next(stability, difficulty, rating, now)
    return MemoryState(
        stability=result.stability,
        difficulty=result.difficulty,
        due_date=result.due_date,
        last_reviewed_at=now,
        review_count=review_count + 1,
        state=result.state,
    )
