"""
Window codec.
Translates between time windows and their URL form: a granularity selector
plus a value token (or an explicit start and end for custom windows).
"""

import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Callable, Dict, Optional, Tuple

from timesheet.domain.models.base import InvalidWindow, ParseError
from timesheet.domain.models.time_utils import first_month_of_quarter, parse_date
from timesheet.domain.models.time_window import Granularity, TimeWindow

_YEAR_PATTERN = re.compile(r"^(\d{4})$")
_QUARTER_PATTERN = re.compile(r"^(\d{4})-([1-4])$")
_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")
_WEEK_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})$")
_CUSTOM_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2})_(\d{4}-\d{2}-\d{2})$")

# One day after the smallest datetime so offset conversions stay in range
_EARLIEST_INSTANT = datetime(1, 1, 2, tzinfo=timezone.utc)
# The exclusive end of a custom window is its last day plus one
_LATEST_LAST_DAY = "9999-12-30"


def _token_of(step: Callable[[], TimeWindow]) -> Optional[str]:
    try:
        return step().label()
    except InvalidWindow:
        return None


class WindowCodec:
    """
    Parses and renders the (granularity, value) pair identifying a window.

    Tokens are the window labels: '2021' for a year, '2021-4' for a quarter,
    '2021-11' for a month, '2021-45' for an ISO week, '2021-11-12' for a day
    and '2021-11-01_2021-11-14' for a custom range with an inclusive last day.
    All calendar values are interpreted in the codec's reference timezone.
    """

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz or timezone.utc

    def parse(
        self,
        granularity: Optional[str],
        value: Optional[str],
        start: Optional[str] = None,
        end: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> TimeWindow:
        """
        Build the window selected by URL parameters.

        Without a selector the window is custom. A missing value for any
        other granularity selects the window around 'now'.

        Raises:
            ParseError: if the selector or value is malformed
        """
        now = self._now(now)
        kind = self._parse_granularity(granularity)

        if kind == Granularity.CUSTOM:
            return self._parse_custom(value, start, end, now)

        if not value:
            return TimeWindow.anchored(kind, now)

        value = value.strip()
        try:
            if kind == Granularity.YEAR:
                return self._parse_year(value)
            if kind == Granularity.QUARTER:
                return self._parse_quarter(value)
            if kind == Granularity.MONTH:
                return self._parse_month(value)
            if kind == Granularity.WEEK:
                return self._parse_week(value)
            return TimeWindow(Granularity.DAY, parse_date(value, self.tz))
        except ParseError as exc:
            exc.parameter = exc.parameter or "v"
            raise
        except (ValueError, InvalidWindow):
            raise ParseError(f"could not parse {kind.value} value '{value}'", "v")

    def render(self, window: TimeWindow) -> Tuple[str, str]:
        """Selector and token of a window. Parsing them yields the same window."""
        return window.granularity.value, window.label()

    def query_params(self, window: TimeWindow) -> Dict[str, str]:
        """URL parameters selecting a window."""
        granularity, value = self.render(window)
        return {"t": granularity, "v": value}

    def neighbour_tokens(self, window: TimeWindow, now: Optional[datetime] = None) -> Dict[str, Optional[str]]:
        """
        Tokens of the previous, next and current ('home') windows of the same granularity.
        A neighbour outside the representable calendar range has no token.
        """
        now = self._now(now)
        return {
            "previous": _token_of(window.previous),
            "next": _token_of(window.next),
            "home": _token_of(lambda: window.home(now)),
        }

    def _now(self, now: Optional[datetime]) -> datetime:
        if now is None:
            return datetime.now(self.tz)
        if now.tzinfo is None:
            return now.replace(tzinfo=self.tz)
        return now.astimezone(self.tz)

    @staticmethod
    def _parse_granularity(granularity: Optional[str]) -> Granularity:
        if granularity is None or not granularity.strip():
            return Granularity.CUSTOM
        try:
            return Granularity.from_token(granularity)
        except InvalidWindow:
            raise ParseError(f"unknown time span '{granularity}'", "t")

    def _at_midnight(self, year: int, month: int, day: int) -> datetime:
        return datetime(year, month, day, tzinfo=self.tz)

    def _parse_year(self, value: str) -> TimeWindow:
        match = _YEAR_PATTERN.match(value)
        if not match:
            raise ParseError(f"could not parse year from '{value}'", "v")
        return TimeWindow(Granularity.YEAR, self._at_midnight(int(match.group(1)), 1, 1))

    def _parse_quarter(self, value: str) -> TimeWindow:
        match = _QUARTER_PATTERN.match(value)
        if not match:
            raise ParseError(f"could not parse quarter from '{value}'", "v")
        year, quarter = int(match.group(1)), int(match.group(2))
        return TimeWindow(
            Granularity.QUARTER,
            self._at_midnight(year, first_month_of_quarter(quarter), 1)
        )

    def _parse_month(self, value: str) -> TimeWindow:
        match = _MONTH_PATTERN.match(value)
        if not match:
            raise ParseError(f"could not parse month from '{value}'", "v")
        year, month = int(match.group(1)), int(match.group(2))
        return TimeWindow(Granularity.MONTH, self._at_midnight(year, month, 1))

    def _parse_week(self, value: str) -> TimeWindow:
        match = _WEEK_PATTERN.match(value)
        if not match:
            raise ParseError(f"could not parse week from '{value}'", "v")
        monday = date.fromisocalendar(int(match.group(1)), int(match.group(2)), 1)
        return TimeWindow(Granularity.WEEK, self._at_midnight(monday.year, monday.month, monday.day))

    def _parse_custom(
        self,
        value: Optional[str],
        start: Optional[str],
        end: Optional[str],
        now: datetime,
    ) -> TimeWindow:
        if value:
            match = _CUSTOM_PATTERN.match(value.strip())
            if not match:
                raise ParseError(f"could not parse custom time span from '{value}'", "v")
            start, end = match.group(1), match.group(2)

        if not start and not end:
            raise ParseError("missing timespan value", "start")

        if start:
            window_start = parse_date(start, self.tz)
        else:
            window_start = _EARLIEST_INSTANT.astimezone(self.tz)

        if end:
            # The last day is inclusive on the wire
            try:
                window_end = parse_date(end, self.tz) + timedelta(days=1)
            except OverflowError:
                raise ParseError(f"time span must end on or before {_LATEST_LAST_DAY}", "end")
        else:
            window_end = now

        if window_end < window_start:
            raise ParseError("end of time span lies before its start", "end")

        return TimeWindow.custom(window_start, window_end)


def parse_window(
    granularity: Optional[str],
    value: Optional[str],
    *,
    start: Optional[str] = None,
    end: Optional[str] = None,
    tz: Optional[tzinfo] = None,
    now: Optional[datetime] = None,
) -> TimeWindow:
    """Parse URL parameters into a window, see WindowCodec.parse."""
    return WindowCodec(tz).parse(granularity, value, start=start, end=end, now=now)


def render_window(window: TimeWindow) -> Tuple[str, str]:
    """Selector and token of a window."""
    return WindowCodec(window.start.tzinfo).render(window)
