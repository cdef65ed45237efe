"""
Tests for timestamp extraction.

Timestamps are the evidence trail for every claim in a report, so the
extractor must accept every bracket style the model uses and convert them
to seconds consistently.
"""

import pytest

from fightscout.extractors.timestamps import (
    categorize_timestamp_context,
    extract_timestamps,
    strip_timestamps,
)
from fightscout.models import TimestampCategory


class TestExtractTimestamps:
    """Bracket styles and time conversion."""

    def test_square_brackets(self):
        """[M:SS] yields canonical seconds and time."""
        result = extract_timestamps("Drops hands [0:45]")
        assert len(result) == 1
        assert result[0].time == "0:45"
        assert result[0].seconds == 45

    def test_parentheses(self):
        result = extract_timestamps("Lands the cross (1:05)")
        assert [t.seconds for t in result] == [65]

    def test_range_keeps_start(self):
        """Only the start of a range is captured."""
        result = extract_timestamps("Pressure sequence [12:30-13:00]")
        assert len(result) == 1
        assert result[0].seconds == 750
        assert result[0].time == "12:30"

    def test_seconds_not_range_checked(self):
        """9:99 is accepted as-is."""
        result = extract_timestamps("Odd marker [9:99]")
        assert result[0].seconds == 639
        assert result[0].time == "9:99"

    def test_minutes_not_zero_padded(self):
        result = extract_timestamps("[05:07]")
        assert result[0].time == "5:07"
        assert result[0].seconds == 307

    def test_unbracketed_times_ignored(self):
        assert extract_timestamps("At 0:45 he drops his hands") == []

    def test_empty_input(self):
        assert extract_timestamps("") == []
        assert extract_timestamps(None) == []

    def test_order_of_appearance(self):
        result = extract_timestamps("Late [4:10], early [0:10], middle [2:00]")
        assert [t.seconds for t in result] == [250, 10, 120]


class TestTimestampLabels:
    """Labels come from the text surrounding each marker."""

    def test_short_context_is_whole_text(self):
        result = extract_timestamps("Throws a lazy jab [0:45]")
        assert result[0].label == "Throws a lazy jab [0:45]"

    def test_long_context_truncated(self):
        text = "He keeps walking forward behind a high guard and then " * 3 + "[1:00]"
        label = extract_timestamps(text)[0].label
        assert label.endswith("...")
        assert len(label) == 43

    def test_newlines_flattened(self):
        label = extract_timestamps("Jab\nthen cross [0:10]")[0].label
        assert "\n" not in label


class TestCategorizeTimestampContext:
    """First matching category wins."""

    @pytest.mark.parametrize("context,expected", [
        ("Lands a clean jab", TimestampCategory.STRIKING),
        ("Shoots a takedown along the fence", TimestampCategory.GRAPPLING),
        ("Great head movement here", TimestampCategory.DEFENSIVE),
        ("Always circles left", TimestampCategory.PATTERN),
        ("Walks to the center", TimestampCategory.OTHER),
    ])
    def test_categories(self, context, expected):
        assert categorize_timestamp_context(context) == expected

    def test_striking_checked_before_grappling(self):
        assert categorize_timestamp_context("Knee in the clinch") == TimestampCategory.STRIKING


class TestStripTimestamps:
    def test_strip_timestamps(self):
        assert strip_timestamps("Jab [0:05] (0:10)") == "Jab"
