"""
Aggregation service.
Groups activities into day, week, month or quarter buckets and sums their durations.
"""

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Dict, Iterable, List, Optional, Union
import uuid

from timesheet.domain.models.activity import Activity, Project
from timesheet.domain.models.base import InvalidWindow
from timesheet.domain.models.duration import calculate_duration
from timesheet.domain.models.report import BucketKey, ProjectReportItem, ReportBucket
from timesheet.domain.models.time_utils import quarter_of
from timesheet.domain.models.time_window import AGGREGABLE_GRANULARITIES, Granularity

# Coarsest bucket granularity that still fits into a display window
_COARSEST_BUCKET = {
    Granularity.DAY: Granularity.DAY,
    Granularity.WEEK: Granularity.WEEK,
    Granularity.MONTH: Granularity.MONTH,
    Granularity.QUARTER: Granularity.QUARTER,
    Granularity.YEAR: Granularity.QUARTER,
    Granularity.CUSTOM: Granularity.QUARTER,
}


def clamp_bucket_granularity(
    requested: Union[str, Granularity],
    display: Union[str, Granularity],
) -> Granularity:
    """
    Clamp a requested bucket granularity to what fits into the display window.

    Asking for quarter buckets inside a day window yields day buckets.
    Year and custom are display windows only and are never returned.
    """
    requested = Granularity.from_token(requested)
    coarsest = _COARSEST_BUCKET[Granularity.from_token(display)]

    if not requested.is_aggregable:
        return coarsest

    order = AGGREGABLE_GRANULARITIES
    if order.index(requested) > order.index(coarsest):
        return coarsest
    return requested


class ActivityAggregator:
    """
    Domain service for time reports.

    Each activity counts fully towards the bucket its start falls into, even
    when it runs past the end of that bucket. Buckets are keyed in the
    aggregator's reference timezone and emitted in chronological order.
    """

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz or timezone.utc

    def bucket_key(self, granularity: Granularity, instant: datetime) -> BucketKey:
        local = instant.astimezone(self.tz)
        if granularity == Granularity.DAY:
            return local.date()
        if granularity == Granularity.WEEK:
            iso_year, iso_week, _ = local.isocalendar()
            return iso_year, iso_week
        if granularity == Granularity.MONTH:
            return local.year, local.month
        return local.year, quarter_of(local)

    def aggregate(
        self,
        activities: Iterable[Activity],
        granularity: Union[str, Granularity],
    ) -> List[ReportBucket]:
        """
        Sum activity durations per bucket.

        Raises:
            InvalidWindow: if the granularity cannot be bucketed (year, custom)
        """
        granularity = Granularity.from_token(granularity)
        if not granularity.is_aggregable:
            raise InvalidWindow(f"Cannot aggregate by {granularity.value}")

        totals: Dict[BucketKey, timedelta] = {}
        counts: Dict[BucketKey, int] = {}

        for activity in activities:
            key = self.bucket_key(granularity, activity.start)
            elapsed = calculate_duration(activity.start, activity.end).elapsed
            totals[key] = totals.get(key, timedelta(0)) + elapsed
            counts[key] = counts.get(key, 0) + 1

        return [
            ReportBucket(granularity=granularity, key=key, total=totals[key], entry_count=counts[key])
            for key in sorted(totals)
        ]

    def aggregate_by_project(
        self,
        activities: Iterable[Activity],
        projects: Optional[Iterable[Project]] = None,
    ) -> List[ProjectReportItem]:
        """
        Sum activity durations per project, ordered by project title.

        Titles come from the given projects or, failing that, from the
        project attached to the activity.
        """
        titles: Dict[uuid.UUID, str] = {p.id: p.title for p in (projects or [])}
        totals: Dict[uuid.UUID, timedelta] = {}
        counts: Dict[uuid.UUID, int] = {}

        for activity in activities:
            project_id = activity.project_id
            if project_id not in titles and activity.project is not None:
                titles[project_id] = activity.project.title
            elapsed = calculate_duration(activity.start, activity.end).elapsed
            totals[project_id] = totals.get(project_id, timedelta(0)) + elapsed
            counts[project_id] = counts.get(project_id, 0) + 1

        items = [
            ProjectReportItem(
                project_id=project_id,
                project_title=titles.get(project_id, ""),
                total=total,
                entry_count=counts[project_id]
            )
            for project_id, total in totals.items()
        ]
        return sorted(items, key=lambda item: (item.project_title.lower(), str(item.project_id)))


def aggregate(
    activities: Iterable[Activity],
    granularity: Union[str, Granularity],
    tz: Optional[tzinfo] = None,
) -> List[ReportBucket]:
    """Sum activity durations per bucket, see ActivityAggregator.aggregate."""
    return ActivityAggregator(tz).aggregate(activities, granularity)
