"""
Report value objects produced by the aggregation service.
Built fresh for every report request and never persisted.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Tuple, Union
import uuid

from timesheet.domain.models.duration import Duration
from timesheet.domain.models.time_utils import first_month_of_quarter
from timesheet.domain.models.time_window import Granularity

BucketKey = Union[date, Tuple[int, int]]


@dataclass(frozen=True)
class ReportBucket:
    """
    Summed duration of all activities starting inside one bucket.

    The key is a date for day buckets and an (ISO year, ISO week),
    (year, month) or (year, quarter) pair for the coarser ones.
    """

    granularity: Granularity
    key: BucketKey
    total: timedelta
    entry_count: int = 0

    @property
    def duration(self) -> Duration:
        return Duration(self.total)

    @property
    def year(self) -> int:
        if self.granularity == Granularity.DAY:
            return self.key.year
        return self.key[0]

    @property
    def month(self) -> int:
        if self.granularity == Granularity.DAY:
            return self.key.month
        if self.granularity == Granularity.MONTH:
            return self.key[1]
        return 0

    @property
    def week(self) -> int:
        if self.granularity == Granularity.DAY:
            return self.key.isocalendar()[1]
        if self.granularity == Granularity.WEEK:
            return self.key[1]
        return 0

    @property
    def quarter(self) -> int:
        if self.granularity == Granularity.QUARTER:
            return self.key[1]
        if self.granularity in (Granularity.DAY, Granularity.MONTH):
            return (self.month - 1) // 3 + 1
        return 0

    @property
    def day(self) -> int:
        if self.granularity == Granularity.DAY:
            return self.key.day
        return 0

    def as_date(self) -> date:
        """First day of the bucket."""
        if self.granularity == Granularity.DAY:
            return self.key
        year, number = self.key
        if self.granularity == Granularity.WEEK:
            return date.fromisocalendar(year, number, 1)
        if self.granularity == Granularity.MONTH:
            return date(year, number, 1)
        return date(year, first_month_of_quarter(number), 1)

    @property
    def label(self) -> str:
        """Bucket key in the same notation as window labels."""
        if self.granularity == Granularity.DAY:
            return self.key.isoformat()
        year, number = self.key
        if self.granularity == Granularity.MONTH:
            return f"{year:04d}-{number:02d}"
        return f"{year:04d}-{number}"


@dataclass(frozen=True)
class ProjectReportItem:
    """Summed duration of all activities booked on one project."""

    project_id: uuid.UUID
    project_title: str
    total: timedelta
    entry_count: int = 0

    @property
    def duration(self) -> Duration:
        return Duration(self.total)
