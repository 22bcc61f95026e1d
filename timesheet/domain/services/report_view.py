"""
Report view selection.
Reads the 'c' parameter ('general', 'time:w', 'project') of a report request.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from timesheet.domain.models.time_window import Granularity
from timesheet.domain.services.aggregation_service import clamp_bucket_granularity


class ReportType(str, Enum):
    GENERAL = "general"
    TIME = "time"
    PROJECT = "project"


_SUB_TYPES = {
    "d": Granularity.DAY,
    "w": Granularity.WEEK,
    "m": Granularity.MONTH,
    "q": Granularity.QUARTER,
}


@dataclass(frozen=True)
class ReportView:
    """Selected report and, for time reports, the bucket granularity."""

    main_type: ReportType = ReportType.GENERAL
    bucket_granularity: Granularity = Granularity.DAY

    @property
    def sub_type(self) -> str:
        return self.bucket_granularity.value[0]

    def to_param(self) -> str:
        if self.main_type == ReportType.TIME:
            return f"{self.main_type.value}:{self.sub_type}"
        return self.main_type.value


def parse_report_view(
    value: Optional[str],
    display: Union[str, Granularity] = Granularity.CUSTOM,
) -> ReportView:
    """
    Read a report view parameter of the form 'main:sub'.

    Unknown report types select the general report. Time reports default
    to day buckets and are clamped to what fits into the display window,
    so 'time:q' on a week window becomes 'time:w'.
    """
    if not value:
        return ReportView()

    main, _, sub = value.strip().lower().partition(":")
    try:
        main_type = ReportType(main)
    except ValueError:
        return ReportView()

    if main_type != ReportType.TIME:
        return ReportView(main_type=main_type)

    requested = _SUB_TYPES.get(sub, Granularity.DAY)
    return ReportView(
        main_type=main_type,
        bucket_granularity=clamp_bucket_granularity(requested, display)
    )
