"""Unit tests for rating input parsing."""

import pytest

from wordwise.srs.errors import InvalidRating
from wordwise.srs.rating import parse_rating
from wordwise.srs.scheduler import Rating


class TestParseRating:
    def test_numbers(self):
        assert parse_rating(1) is Rating.AGAIN
        assert parse_rating(2) is Rating.HARD
        assert parse_rating(3) is Rating.GOOD
        assert parse_rating(4) is Rating.EASY

    def test_labels_are_case_insensitive(self):
        assert parse_rating("again") is Rating.AGAIN
        assert parse_rating("Hard") is Rating.HARD
        assert parse_rating(" GOOD ") is Rating.GOOD
        assert parse_rating("easy") is Rating.EASY

    def test_rating_passes_through(self):
        assert parse_rating(Rating.EASY) is Rating.EASY

    @pytest.mark.parametrize("value", [0, 5, -3, 2.5, 3.0, True, False, None, "", "ok", "3", [3]])
    def test_rejects_everything_else(self, value):
        with pytest.raises(InvalidRating):
            parse_rating(value)

    def test_label_property(self):
        assert [rating.label for rating in Rating] == ["again", "hard", "good", "easy"]
