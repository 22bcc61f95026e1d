"""
Unit tests for TimeWindow value object.
"""

import pytest
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from timesheet.domain.models.base import InvalidWindow
from timesheet.domain.models.time_window import Granularity, TimeWindow

BERLIN = ZoneInfo("Europe/Berlin")


def at(year, month, day, hour=0, minute=0):
    return datetime(year, month, day, hour, minute, tzinfo=BERLIN)


class TestGranularity:
    """Test cases for Granularity."""

    def test_from_token(self):
        assert Granularity.from_token("week") == Granularity.WEEK
        assert Granularity.from_token(" Month ") == Granularity.MONTH
        assert Granularity.from_token(Granularity.DAY) == Granularity.DAY

    def test_unknown_token(self):
        """Test unknown granularity tokens are rejected."""
        with pytest.raises(InvalidWindow):
            Granularity.from_token("fortnight")

    def test_aggregable(self):
        assert Granularity.QUARTER.is_aggregable
        assert not Granularity.YEAR.is_aggregable
        assert not Granularity.CUSTOM.is_aggregable


class TestTimeWindowConstruction:
    """Test cases for building windows."""

    def test_day_window_is_aligned_to_midnight(self):
        window = TimeWindow.anchored(Granularity.DAY, at(2021, 11, 12, 15, 30))

        assert window.start == at(2021, 11, 12)
        assert window.end == at(2021, 11, 13)

    def test_week_window_starts_on_monday(self):
        window = TimeWindow.anchored("week", at(2021, 11, 12, 9))

        assert window.start == at(2021, 11, 8)
        assert window.end == at(2021, 11, 15)

    def test_month_window_uses_calendar_months(self):
        """Test a month anchored on the 31st ends at the first of the next month."""
        window = TimeWindow.anchored(Granularity.MONTH, at(2021, 1, 31))

        assert window.start == at(2021, 1, 1)
        assert window.end == at(2021, 2, 1)
        assert window.next().end == at(2021, 3, 1)

    def test_quarter_window(self):
        window = TimeWindow.anchored(Granularity.QUARTER, at(2021, 11, 12))

        assert window.start == at(2021, 10, 1)
        assert window.end == at(2022, 1, 1)

    def test_year_window(self):
        window = TimeWindow.anchored(Granularity.YEAR, at(2020, 2, 29))

        assert window.start == at(2020, 1, 1)
        assert window.end == at(2021, 1, 1)

    def test_custom_window_keeps_its_end(self):
        window = TimeWindow.custom(at(2021, 11, 3, 10), at(2021, 11, 9, 18))

        assert window.start == at(2021, 11, 3, 10)
        assert window.end == at(2021, 11, 9, 18)

    def test_custom_window_may_be_empty(self):
        window = TimeWindow.custom(at(2021, 11, 3), at(2021, 11, 3))
        assert window.elapsed == timedelta(0)

    def test_custom_window_end_before_start(self):
        """Test custom windows cannot end before they start."""
        with pytest.raises(InvalidWindow):
            TimeWindow.custom(at(2021, 11, 3), at(2021, 11, 2))

    def test_custom_window_requires_end(self):
        with pytest.raises(InvalidWindow):
            TimeWindow(Granularity.CUSTOM, at(2021, 11, 3))

    def test_naive_start(self):
        """Test windows need timezone-aware instants."""
        with pytest.raises(InvalidWindow):
            TimeWindow.anchored(Granularity.DAY, datetime(2021, 11, 3))

    def test_mismatching_end(self):
        """Test a derived end cannot be overridden."""
        with pytest.raises(InvalidWindow):
            TimeWindow(Granularity.WEEK, at(2021, 11, 8), at(2021, 11, 16))

    def test_unknown_granularity(self):
        with pytest.raises(InvalidWindow):
            TimeWindow("fortnight", at(2021, 11, 8))

    def test_contains_is_half_open(self):
        window = TimeWindow.anchored(Granularity.DAY, at(2021, 11, 12))

        assert window.contains(at(2021, 11, 12))
        assert window.contains(at(2021, 11, 12, 23, 59))
        assert not window.contains(at(2021, 11, 13))


class TestTimeWindowNavigation:
    """Test cases for next, previous and home."""

    @pytest.mark.parametrize("granularity", [
        Granularity.DAY,
        Granularity.WEEK,
        Granularity.MONTH,
        Granularity.QUARTER,
        Granularity.YEAR,
    ])
    @pytest.mark.parametrize("anchor", [
        at(2021, 1, 31),
        at(2021, 3, 28, 12),
        at(2020, 2, 29),
        at(2018, 12, 31),
    ])
    def test_next_and_previous_tile(self, granularity, anchor):
        """Test stepping forth and back returns the same window."""
        window = TimeWindow.anchored(granularity, anchor)

        assert window.next().previous() == window
        assert window.previous().next() == window
        assert window.next().start == window.end
        assert window.previous().end == window.start

    def test_custom_next_preserves_length(self):
        """Test custom windows are shifted by their own length."""
        window = TimeWindow.custom(at(2021, 11, 1), at(2021, 11, 15))
        following = window.next()

        assert following.start == at(2021, 11, 15)
        assert following.end == at(2021, 11, 29)
        assert following.elapsed == window.elapsed

    def test_custom_tiles(self):
        window = TimeWindow.custom(at(2021, 11, 3, 10), at(2021, 11, 9, 18))

        assert window.next().previous() == window
        assert window.previous().next() == window
        assert window.previous().end == window.start

    def test_week_previous_crosses_year(self):
        window = TimeWindow.anchored(Granularity.WEEK, at(2019, 1, 2))
        assert window.previous().start == at(2018, 12, 24)

    def test_home_keeps_granularity(self):
        window = TimeWindow.anchored(Granularity.WEEK, at(2021, 11, 12))
        home = window.home(at(2022, 3, 2, 14))

        assert home.granularity == Granularity.WEEK
        assert home.start == at(2022, 2, 28)

    def test_home_converts_now_to_window_zone(self):
        """Test 'now' is read in the window's timezone."""
        window = TimeWindow.anchored(Granularity.DAY, at(2021, 11, 12))
        home = window.home(datetime(2022, 3, 1, 23, 30, tzinfo=timezone.utc))

        assert home.start == at(2022, 3, 2)

    def test_custom_home_starts_today(self):
        window = TimeWindow.custom(at(2021, 11, 1), at(2021, 11, 8))
        home = window.home(at(2022, 3, 2, 14))

        assert home.start == at(2022, 3, 2)
        assert home.end == at(2022, 3, 9)

    @pytest.mark.parametrize("granularity,anchor", [
        (Granularity.YEAR, at(9998, 6, 1)),
        (Granularity.MONTH, at(9999, 11, 15)),
    ])
    def test_next_past_year_9999(self, granularity, anchor):
        """Test stepping beyond the last representable year raises InvalidWindow."""
        window = TimeWindow.anchored(granularity, anchor)

        with pytest.raises(InvalidWindow):
            window.next()

    def test_year_9999_has_no_end(self):
        with pytest.raises(InvalidWindow):
            TimeWindow.anchored(Granularity.YEAR, at(9999, 3, 1))

    def test_as_granularity(self):
        """Test a day in November falls into the fourth quarter."""
        day = TimeWindow.anchored(Granularity.DAY, at(2021, 11, 12))
        assert day.as_granularity(Granularity.QUARTER).label() == "2021-4"


class TestTimeWindowLabels:
    """Test cases for window labels."""

    def test_day_label(self):
        assert TimeWindow.anchored(Granularity.DAY, at(2021, 1, 5)).label() == "2021-01-05"

    @pytest.mark.parametrize("anchor,label", [
        (at(2018, 12, 31), "2019-1"),
        (at(2019, 1, 1), "2019-1"),
        (at(2019, 12, 30), "2020-1"),
        (at(2021, 1, 3), "2020-53"),
        (at(2021, 11, 12), "2021-45"),
    ])
    def test_week_label_uses_iso_weeks(self, anchor, label):
        assert TimeWindow.anchored(Granularity.WEEK, anchor).label() == label

    def test_week_label_pads_year(self):
        window = TimeWindow.anchored(Granularity.WEEK, at(999, 6, 1))
        iso_year, iso_week, _ = window.start.isocalendar()

        assert window.label() == f"{iso_year:04d}-{iso_week}"
        assert window.label().startswith("0999-")

    def test_month_label(self):
        assert TimeWindow.anchored(Granularity.MONTH, at(2021, 3, 12)).label() == "2021-03"

    @pytest.mark.parametrize("month,label", [
        (1, "2021-1"),
        (3, "2021-1"),
        (4, "2021-2"),
        (9, "2021-3"),
        (11, "2021-4"),
        (12, "2021-4"),
    ])
    def test_quarter_label(self, month, label):
        assert TimeWindow.anchored(Granularity.QUARTER, at(2021, month, 12)).label() == label

    def test_year_label(self):
        assert TimeWindow.anchored(Granularity.YEAR, at(2021, 3, 12)).label() == "2021"

    def test_custom_label_shows_inclusive_end(self):
        window = TimeWindow.custom(at(2021, 11, 1), at(2021, 11, 15))
        assert window.label() == "2021-11-01_2021-11-14"

    def test_formatted_day_label(self):
        assert TimeWindow.anchored(Granularity.DAY, at(2021, 11, 2)).formatted_label() == "2.11."

    def test_formatted_week_label(self):
        window = TimeWindow.anchored(Granularity.WEEK, at(2021, 11, 12))
        assert window.formatted_label() == "8.11. - 14.11."

    def test_formatted_month_label(self):
        window = TimeWindow.anchored(Granularity.MONTH, at(2021, 2, 12))
        assert window.formatted_label() == "1.2. - 28.2."

    def test_str(self):
        assert str(TimeWindow.anchored(Granularity.YEAR, at(2021, 3, 12))) == "2021"
