"""
Unit tests for WindowCodec domain service.
"""

import pytest
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from timesheet.domain.models.base import ParseError
from timesheet.domain.models.time_window import Granularity, TimeWindow
from timesheet.domain.services.window_codec import WindowCodec, parse_window, render_window

BERLIN = ZoneInfo("Europe/Berlin")
NOW = datetime(2021, 11, 12, 14, 30, tzinfo=BERLIN)


def at(year, month, day):
    return datetime(year, month, day, tzinfo=BERLIN)


class TestWindowCodecParse:
    """Test cases for parsing window parameters."""

    def setup_method(self):
        """Set up test fixtures."""
        self.codec = WindowCodec(BERLIN)

    def test_parse_year(self):
        window = self.codec.parse("year", "2021", now=NOW)

        assert window.granularity == Granularity.YEAR
        assert window.start == at(2021, 1, 1)
        assert window.end == at(2022, 1, 1)

    def test_parse_quarter(self):
        window = self.codec.parse("quarter", "2021-4", now=NOW)

        assert window.start == at(2021, 10, 1)
        assert window.end == at(2022, 1, 1)

    def test_parse_month(self):
        window = self.codec.parse("month", "2021-02", now=NOW)

        assert window.start == at(2021, 2, 1)
        assert window.end == at(2021, 3, 1)

    def test_parse_week(self):
        """Test week 1 of 2019 starts in December 2018."""
        window = self.codec.parse("week", "2019-1", now=NOW)

        assert window.start == at(2018, 12, 31)
        assert window.end == at(2019, 1, 7)

    def test_parse_day(self):
        window = self.codec.parse("day", "2021-11-12", now=NOW)

        assert window.start == at(2021, 11, 12)
        assert window.end == at(2021, 11, 13)

    def test_granularity_is_case_insensitive(self):
        assert self.codec.parse("Month", "2021-02", now=NOW).granularity == Granularity.MONTH

    def test_missing_value_selects_current_window(self):
        """Test a granularity without value yields the window around now."""
        window = self.codec.parse("week", None, now=NOW)

        assert window.start == at(2021, 11, 8)
        assert window.label() == "2021-45"

    def test_naive_now_is_read_in_reference_zone(self):
        window = self.codec.parse("day", "", now=datetime(2021, 11, 12, 23, 30))
        assert window.start == at(2021, 11, 12)

    @pytest.mark.parametrize("granularity,value", [
        ("year", "21"),
        ("year", "0000"),
        ("quarter", "2021-5"),
        ("quarter", "2021"),
        ("month", "2021-13"),
        ("month", "2021-1"),
        ("week", "2021-54"),
        ("week", "2021-W3"),
        ("week", "2021-53"),
        ("day", "2021-02-30"),
        ("day", "12.11.2021"),
    ])
    def test_malformed_value(self, granularity, value):
        """Test malformed tokens raise ParseError."""
        with pytest.raises(ParseError):
            self.codec.parse(granularity, value, now=NOW)

    def test_unknown_granularity(self):
        with pytest.raises(ParseError) as exc_info:
            self.codec.parse("fortnight", "2021", now=NOW)
        assert exc_info.value.parameter == "t"


class TestWindowCodecCustom:
    """Test cases for custom windows."""

    def setup_method(self):
        """Set up test fixtures."""
        self.codec = WindowCodec(BERLIN)

    def test_start_and_end(self):
        """Test the end parameter names the last included day."""
        window = self.codec.parse("custom", None, start="2021-11-01", end="2021-11-14", now=NOW)

        assert window.granularity == Granularity.CUSTOM
        assert window.start == at(2021, 11, 1)
        assert window.end == at(2021, 11, 15)
        assert window.label() == "2021-11-01_2021-11-14"

    def test_no_selector_means_custom(self):
        window = self.codec.parse(None, None, start="2021-11-01", end="2021-11-14", now=NOW)
        assert window.granularity == Granularity.CUSTOM

    def test_custom_token(self):
        window = self.codec.parse("custom", "2021-11-01_2021-11-14", now=NOW)

        assert window.start == at(2021, 11, 1)
        assert window.end == at(2021, 11, 15)

    def test_missing_end_runs_until_now(self):
        window = self.codec.parse("custom", None, start="2021-11-01", now=NOW)

        assert window.start == at(2021, 11, 1)
        assert window.end == NOW

    def test_missing_start_is_unbounded(self):
        """Test a missing start reaches back to the earliest representable day."""
        window = self.codec.parse("custom", None, end="2021-11-14", now=NOW)

        assert window.start.year == 1
        assert window.start < at(1900, 1, 1)
        assert window.end == at(2021, 11, 15)

    def test_missing_start_and_end(self):
        with pytest.raises(ParseError, match="missing timespan value"):
            self.codec.parse("custom", None, now=NOW)

    def test_end_before_start(self):
        with pytest.raises(ParseError):
            self.codec.parse("custom", None, start="2021-11-14", end="2021-11-01", now=NOW)

    def test_single_day_range(self):
        window = self.codec.parse("custom", None, start="2021-11-14", end="2021-11-14", now=NOW)
        assert window.elapsed == timedelta(days=1)

    def test_last_supported_day(self):
        window = self.codec.parse("custom", None, start="9999-12-01", end="9999-12-30", now=NOW)
        assert window.end == at(9999, 12, 31)

    def test_end_past_last_supported_day(self):
        """Test an inclusive end whose following day cannot be represented is rejected."""
        with pytest.raises(ParseError, match="9999-12-30") as exc_info:
            self.codec.parse("custom", None, start="9999-12-01", end="9999-12-31", now=NOW)

        assert exc_info.value.parameter == "end"

    def test_malformed_start(self):
        with pytest.raises(ParseError):
            self.codec.parse("custom", None, start="yesterday", end="2021-11-14", now=NOW)

    def test_malformed_token(self):
        with pytest.raises(ParseError):
            self.codec.parse("custom", "2021-11-01..2021-11-14", now=NOW)


class TestWindowCodecRender:
    """Test cases for rendering windows."""

    @pytest.mark.parametrize("granularity", [
        Granularity.DAY,
        Granularity.WEEK,
        Granularity.MONTH,
        Granularity.QUARTER,
        Granularity.YEAR,
    ])
    @pytest.mark.parametrize("anchor", [
        at(2018, 12, 31),
        at(2019, 12, 30),
        at(2021, 1, 3),
        at(2021, 3, 28),
        at(2021, 11, 12),
    ])
    def test_round_trip(self, granularity, anchor):
        """Test parsing a rendered window yields the same window."""
        window = TimeWindow.anchored(granularity, anchor)
        selector, token = render_window(window)

        assert parse_window(selector, token, tz=BERLIN, now=NOW) == window

    def test_custom_round_trip(self):
        window = TimeWindow.custom(at(2021, 11, 1), at(2021, 11, 15))
        selector, token = render_window(window)

        assert selector == "custom"
        assert parse_window(selector, token, tz=BERLIN, now=NOW) == window

    def test_query_params(self):
        window = TimeWindow.anchored(Granularity.MONTH, at(2021, 11, 12))
        assert WindowCodec(BERLIN).query_params(window) == {"t": "month", "v": "2021-11"}

    def test_neighbour_tokens(self):
        window = TimeWindow.anchored(Granularity.WEEK, at(2021, 1, 5))
        tokens = WindowCodec(BERLIN).neighbour_tokens(window, now=NOW)

        assert tokens == {"previous": "2020-53", "next": "2021-2", "home": "2021-45"}

    def test_week_round_trip_before_year_1000(self):
        window = TimeWindow.anchored(Granularity.WEEK, at(999, 6, 1))
        selector, token = render_window(window)

        assert parse_window(selector, token, tz=BERLIN, now=NOW) == window

    def test_neighbour_tokens_at_end_of_calendar(self):
        """Test a neighbour past year 9999 has no token."""
        window = parse_window("month", "9999-11", tz=BERLIN, now=NOW)
        tokens = WindowCodec(BERLIN).neighbour_tokens(window, now=NOW)

        assert tokens == {"previous": "9999-10", "next": None, "home": "2021-11"}

    def test_default_zone_is_utc(self):
        window = parse_window("day", "2021-11-12", now=NOW)
        assert window.start == datetime(2021, 11, 12, tzinfo=timezone.utc)
