"""Tests for duration parsing and formatting."""

import pytest

from term_chrono import DurationError, format_elapsed, format_remaining, parse_duration
from term_chrono.durations import split_duration


class TestParseDuration:
    """Tests for parse_duration()."""

    def test_valid_duration(self):
        """Test a well-formed duration is converted to seconds."""
        assert parse_duration("01:02:03") == 3723.0

    def test_surrounding_whitespace(self):
        """Test that surrounding whitespace is ignored."""
        assert parse_duration(" 00:10:00\n") == 600.0

    def test_fields_are_not_range_checked(self):
        """Test minutes and seconds above 59 simply add up."""
        assert parse_duration("0:90:90") == 5490.0

    @pytest.mark.parametrize("text", ["12:3", "1:2:3:4", "", "10", "::"])
    def test_wrong_shape_rejected(self, text):
        """Test anything but three colon-separated fields is refused."""
        with pytest.raises(DurationError):
            parse_duration(text)

    @pytest.mark.parametrize("text", ["ab:cd:ef", "1:-2:3", "1:2.5:3", "1: :3", "١:٢:٣"])
    def test_non_numeric_rejected(self, text):
        """Test fields that are not ASCII digits are refused."""
        with pytest.raises(DurationError):
            parse_duration(text)

    def test_zero_rejected(self):
        """Test that a zero duration is refused."""
        with pytest.raises(DurationError, match="longer than zero"):
            parse_duration("00:00:00")

    def test_is_value_error(self):
        """Test DurationError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_duration("ab:cd:ef")


class TestFormatting:
    """Tests for elapsed and remaining time formatting."""

    def test_split_duration(self):
        """Test successive modulo reduction into four fields."""
        assert split_duration(3723.456) == (1, 2, 3, 456)

    def test_format_elapsed(self):
        """Test the HH:MM:SS.mmm stopwatch format."""
        assert format_elapsed(3723.456) == "01:02:03.456"

    def test_format_elapsed_zero(self):
        """Test zero elapsed time formats as all zeros."""
        assert format_elapsed(0) == "00:00:00.000"

    def test_hours_not_wrapped(self):
        """Test that hours are total hours, not hours of the day."""
        assert format_elapsed(90000) == "25:00:00.000"

    def test_format_remaining_rounds_up(self):
        """Test a partial second still counts as a whole one."""
        assert format_remaining(299.2) == "00:05:00"
        assert format_remaining(0.01) == "00:00:01"

    def test_format_remaining_exact(self):
        """Test a whole number of seconds is shown unchanged."""
        assert format_remaining(3600) == "01:00:00"

    def test_format_remaining_clamps_negative(self):
        """Test an overdue countdown shows zero."""
        assert format_remaining(-3) == "00:00:00"
