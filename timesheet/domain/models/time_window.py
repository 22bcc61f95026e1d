"""
TimeWindow value object.
A calendar aligned, half-open interval [start, end) of a fixed granularity
that knows how to step to its neighbours and how to name itself.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from timesheet.domain.models.base import InvalidWindow
from timesheet.domain.models.time_utils import (
    first_month_of_quarter,
    format_date,
    format_date_de_short,
    quarter_of,
)

_ONE_DAY = timedelta(days=1)


class Granularity(str, Enum):
    """Kinds of time windows."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    CUSTOM = "custom"

    @classmethod
    def from_token(cls, token: Union[str, "Granularity"]) -> "Granularity":
        """Resolve a granularity token, raising InvalidWindow for unknown ones."""
        if isinstance(token, Granularity):
            return token
        try:
            return cls(str(token).strip().lower())
        except ValueError:
            raise InvalidWindow(f"Unknown granularity '{token}'")

    @property
    def step(self) -> Optional[relativedelta]:
        """One calendar unit of this granularity, None for custom windows."""
        return _STEPS.get(self)

    @property
    def is_aggregable(self) -> bool:
        """Whether report buckets can be built at this granularity."""
        return self in AGGREGABLE_GRANULARITIES


_STEPS = {
    Granularity.DAY: relativedelta(days=1),
    Granularity.WEEK: relativedelta(days=7),
    Granularity.MONTH: relativedelta(months=1),
    Granularity.QUARTER: relativedelta(months=3),
    Granularity.YEAR: relativedelta(years=1),
}

# Ordered finest to coarsest
AGGREGABLE_GRANULARITIES = (
    Granularity.DAY,
    Granularity.WEEK,
    Granularity.MONTH,
    Granularity.QUARTER,
)


def align_to_granularity(granularity: Granularity, instant: datetime) -> datetime:
    """Truncate an instant to the first moment of its day, ISO week, month, quarter or year."""
    day = instant.replace(hour=0, minute=0, second=0, microsecond=0)
    if granularity == Granularity.DAY:
        return day
    if granularity == Granularity.WEEK:
        return day - timedelta(days=day.weekday())
    if granularity == Granularity.MONTH:
        return day.replace(day=1)
    if granularity == Granularity.QUARTER:
        return day.replace(month=first_month_of_quarter(quarter_of(day)), day=1)
    if granularity == Granularity.YEAR:
        return day.replace(month=1, day=1)
    return instant


@dataclass(frozen=True)
class TimeWindow:
    """
    Half-open interval [start, end) of one granularity.

    For every granularity but custom the start is aligned to the calendar
    unit it falls into and the end is derived by adding one calendar unit,
    so month and quarter windows have variable elapsed length. Custom
    windows carry an explicit end.
    """

    granularity: Granularity
    start: datetime
    end: Optional[datetime] = field(default=None)

    def __post_init__(self):
        granularity = Granularity.from_token(self.granularity)
        object.__setattr__(self, "granularity", granularity)

        if self.start.tzinfo is None:
            raise InvalidWindow("Window start must be timezone-aware")

        if granularity == Granularity.CUSTOM:
            if self.end is None:
                raise InvalidWindow("Custom window requires an end")
            if self.end.tzinfo is None:
                raise InvalidWindow("Window end must be timezone-aware")
            if self.end < self.start:
                raise InvalidWindow("Custom window end cannot be before its start")
            return

        start = align_to_granularity(granularity, self.start)
        end = self._shift(start, granularity.step)
        if self.end is not None and self.end != end:
            raise InvalidWindow(
                f"End {self.end.isoformat()} does not match the {granularity.value} window starting {start.isoformat()}"
            )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @classmethod
    def anchored(cls, granularity: Union[str, Granularity], anchor: datetime) -> "TimeWindow":
        """Window of the given granularity that contains the anchor."""
        return cls(Granularity.from_token(granularity), anchor)

    @classmethod
    def custom(cls, start: datetime, end: datetime) -> "TimeWindow":
        return cls(Granularity.CUSTOM, start, end)

    @staticmethod
    def _shift(instant: datetime, delta: Union[relativedelta, timedelta]) -> datetime:
        try:
            return instant + delta
        except (OverflowError, ValueError):
            # relativedelta raises ValueError past year 9999
            raise InvalidWindow("Window lies outside the representable calendar range")

    @property
    def elapsed(self) -> timedelta:
        """Wall-clock length of the window."""
        return self.end - self.start

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end

    def next(self) -> "TimeWindow":
        """Window immediately after this one."""
        if self.granularity == Granularity.CUSTOM:
            length = self.elapsed
            return TimeWindow.custom(self._shift(self.start, length), self._shift(self.end, length))
        return TimeWindow(self.granularity, self._shift(self.start, self.granularity.step))

    def previous(self) -> "TimeWindow":
        """Window immediately before this one."""
        if self.granularity == Granularity.CUSTOM:
            length = self.elapsed
            return TimeWindow.custom(self._shift(self.start, -length), self._shift(self.end, -length))
        return TimeWindow(self.granularity, self._shift(self.start, -self.granularity.step))

    def home(self, now: datetime) -> "TimeWindow":
        """
        Window of the same granularity around 'now'.
        Custom windows keep their length and start at the beginning of today.
        """
        if now.tzinfo is None:
            raise InvalidWindow("Home anchor must be timezone-aware")
        now = now.astimezone(self.start.tzinfo)
        if self.granularity == Granularity.CUSTOM:
            start = align_to_granularity(Granularity.DAY, now)
            return TimeWindow.custom(start, self._shift(start, self.elapsed))
        return TimeWindow(self.granularity, now)

    def as_granularity(self, granularity: Union[str, Granularity]) -> "TimeWindow":
        """Window of another granularity containing this window's start."""
        return TimeWindow.anchored(granularity, self.start)

    def label(self) -> str:
        """Short key of the window, also used as its URL token."""
        start = self.start
        if self.granularity == Granularity.DAY:
            return format_date(start)
        if self.granularity == Granularity.WEEK:
            iso_year, iso_week, _ = start.isocalendar()
            return f"{iso_year:04d}-{iso_week}"
        if self.granularity == Granularity.MONTH:
            return f"{start.year:04d}-{start.month:02d}"
        if self.granularity == Granularity.QUARTER:
            return f"{start.year:04d}-{quarter_of(start)}"
        if self.granularity == Granularity.YEAR:
            return f"{start.year:04d}"
        return f"{format_date(start)}_{format_date(self.end - _ONE_DAY)}"

    def formatted_label(self) -> str:
        """Human readable range with an inclusive last day (e.g. '4.11. - 10.11.')."""
        if self.granularity == Granularity.DAY:
            return format_date_de_short(self.start)
        return f"{format_date_de_short(self.start)} - {format_date_de_short(self.end - _ONE_DAY)}"

    def __str__(self) -> str:
        return self.label()
