"""Tests for range parsing and membership."""

from __future__ import annotations

import pytest

from haze import Range, RangeParseError, RangeSet, parse_range, parse_ranges


class TestParseRange:
    def test_single_value(self) -> None:
        assert parse_range("200") == Range(200, 200)

    def test_interval(self) -> None:
        assert parse_range("300-399") == Range(300, 399)

    def test_surrounding_whitespace_ignored(self) -> None:
        assert parse_range(" 404 ") == Range(404, 404)

    def test_degenerate_interval(self) -> None:
        assert parse_range("5-5") == Range(5, 5)

    @pytest.mark.parametrize("text", ["abc", "20x", "", "-", "1-", "-5", "1.5", "٣"])
    def test_malformed_raises(self, text: str) -> None:
        with pytest.raises(RangeParseError):
            parse_range(text)

    def test_too_many_dashes(self) -> None:
        with pytest.raises(RangeParseError, match="at most one"):
            parse_range("1-2-3")

    def test_reversed_bounds(self) -> None:
        with pytest.raises(RangeParseError, match="greater than"):
            parse_range("399-300")

    def test_error_carries_token(self) -> None:
        with pytest.raises(RangeParseError) as exc_info:
            parse_range("2oo")
        assert exc_info.value.token == "2oo"

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_range("nope")


class TestParseRanges:
    def test_mixed(self) -> None:
        ranges = parse_ranges("200,301-302,404-499")
        assert ranges == RangeSet((Range(200, 200), Range(301, 302), Range(404, 499)))

    def test_one_bad_token_fails_whole_list(self) -> None:
        with pytest.raises(RangeParseError):
            parse_ranges("200,oops,404")

    def test_trailing_comma_fails(self) -> None:
        with pytest.raises(RangeParseError):
            parse_ranges("200,")

    def test_str_round_trip(self) -> None:
        assert str(parse_ranges("200, 301-302")) == "200,301-302"


class TestContains:
    @pytest.mark.parametrize("value", [200, 301, 302, 404, 450, 499])
    def test_members(self, value: int) -> None:
        assert parse_ranges("200,301-302,404-499").contains(value) is True

    @pytest.mark.parametrize("value", [0, 199, 201, 300, 303, 403, 500])
    def test_non_members(self, value: int) -> None:
        assert parse_ranges("200,301-302,404-499").contains(value) is False

    def test_in_operator(self) -> None:
        assert 250 in parse_ranges("200-299")
        assert 300 not in parse_ranges("200-299")

    def test_interval_or_single_value(self) -> None:
        a, b, c = 10, 20, 35
        ranges = parse_ranges(f"{a}-{b},{c}")
        for v in range(0, 50):
            assert ranges.contains(v) == ((a <= v <= b) or v == c)

    def test_order_does_not_matter(self) -> None:
        forward = parse_ranges("1-5,10,20-30")
        backward = parse_ranges("20-30,10,1-5")
        for v in range(0, 40):
            assert forward.contains(v) == backward.contains(v)

    def test_overlapping_ranges(self) -> None:
        ranges = parse_ranges("1-10,5-15")
        assert ranges.contains(12) is True
        assert ranges.contains(16) is False
