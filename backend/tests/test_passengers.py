"""Unit tests for passenger tier matching."""

import pytest

from vincyfares.models import PassengerRange
from vincyfares.passengers import matches, parse_passenger_range


class TestMatches:
    """Test matching counts against tier strings."""

    def test_open_ended_tier(self):
        assert matches(11, "Over 10") is True
        assert matches(10, "Over 10") is False
        assert matches(50, "over 10") is True

    def test_inclusive_range(self):
        assert matches(7, "5 to 10") is True
        assert matches(5, "5 to 10") is True
        assert matches(10, "5 to 10") is True
        assert matches(4, "5 to 10") is False
        assert matches(11, "5 to 10") is False

    def test_exact_tier(self):
        assert matches(3, "3") is True
        assert matches(4, "3") is False

    @pytest.mark.parametrize("tier", ["abc", "", "Over ten", "over", "1 to many", "to 4", "3.5", "-1"])
    def test_malformed_tier_never_matches(self, tier):
        """Malformed tiers are a quiet non-match, never an exception."""
        for count in range(1, 12):
            assert matches(count, tier) is False

    def test_extra_whitespace_never_matches(self):
        assert matches(11, "Over  10") is False
        assert matches(7, " 7") is False
        assert matches(7, "7 ") is False
        assert matches(7, "5  to 10") is False

    def test_inverted_range_matches_nothing(self):
        assert matches(5, "10 to 5") is False


class TestParsePassengerRange:
    """Test tier parsing."""

    def test_parsed_forms(self):
        assert parse_passenger_range("1 to 4") == PassengerRange(minimum=1, maximum=4)
        assert parse_passenger_range("Over 10") == PassengerRange(minimum=11)
        assert parse_passenger_range("4") == PassengerRange(minimum=4, maximum=4)
        assert parse_passenger_range("nonsense") is None

    def test_overlap(self):
        one_to_four = parse_passenger_range("1 to 4")
        assert one_to_four.overlaps(parse_passenger_range("3 to 6"))
        assert one_to_four.overlaps(parse_passenger_range("Over 2"))
        assert not one_to_four.overlaps(parse_passenger_range("5 to 10"))
        assert not parse_passenger_range("5 to 10").overlaps(parse_passenger_range("Over 10"))
        assert parse_passenger_range("Over 10").overlaps(parse_passenger_range("Over 20"))
