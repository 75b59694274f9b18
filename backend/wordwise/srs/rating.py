"""Parsing of learner rating input.

Ratings arrive either as the button number (1-4) or as its label
("again", "hard", "good", "easy").
"""

from __future__ import annotations

from .errors import InvalidRating
from .scheduler import Rating


_LABELS: dict[str, Rating] = {rating.label: rating for rating in Rating}


def parse_rating(value: object) -> Rating:
    """Convert an int 1-4, a label, or a Rating into a Rating.

    Raises:
        InvalidRating: For anything else (including bools and floats).
    """
    if isinstance(value, Rating):
        return value
    if isinstance(value, str):
        try:
            return _LABELS[value.strip().lower()]
        except KeyError:
            raise InvalidRating(value) from None
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRating(value)
    try:
        return Rating(value)
    except ValueError:
        raise InvalidRating(value) from None
