"""
Report DTOs for the application layer.
Response shapes of the activity, time and project reports.
"""

from datetime import date, datetime
from typing import List, Optional
import uuid

from pydantic import Field

from timesheet.application.dto.base_dto import PageDTO, ResponseDTO
from timesheet.application.use_cases.report_use_cases import ActivityReport, ProjectReport, TimeReport
from timesheet.domain.models.activity import Activity
from timesheet.domain.models.report import ProjectReportItem, ReportBucket
from timesheet.domain.models.time_window import TimeWindow
from timesheet.domain.services.window_codec import WindowCodec


class WindowResponseDTO(ResponseDTO):
    """DTO for a time window and its navigation tokens."""

    granularity: str = Field(description="Window granularity")
    value: str = Field(description="Window token")
    label: str = Field(description="Human readable range")
    start: datetime = Field(description="First instant of the window")
    end: datetime = Field(description="First instant after the window")
    previous: Optional[str] = Field(default=None, description="Token of the previous window")
    next: Optional[str] = Field(default=None, description="Token of the next window")
    home: Optional[str] = Field(default=None, description="Token of the current window")

    @classmethod
    def from_domain(cls, window: TimeWindow, now: datetime) -> "WindowResponseDTO":
        neighbours = WindowCodec(window.start.tzinfo).neighbour_tokens(window, now)
        return cls(
            granularity=window.granularity.value,
            value=window.label(),
            label=window.formatted_label(),
            start=window.start,
            end=window.end,
            previous=neighbours["previous"],
            next=neighbours["next"],
            home=neighbours["home"]
        )


class ActivityResponseDTO(ResponseDTO):
    """DTO for one activity of a report."""

    id: uuid.UUID = Field(description="Activity ID")
    start: datetime = Field(description="Start of the activity")
    end: datetime = Field(description="End of the activity")
    username: str = Field(description="Owner of the activity")
    description: str = Field(default="", description="What was done")
    project_id: uuid.UUID = Field(description="Project ID")
    project_title: Optional[str] = Field(default=None, description="Project title")
    duration_minutes: int = Field(description="Duration in whole minutes")
    duration_decimal: float = Field(description="Duration in decimal hours")
    duration_formatted: str = Field(description="Duration like '1:30 h'")

    @classmethod
    def from_domain(cls, activity: Activity) -> "ActivityResponseDTO":
        return cls(
            id=activity.id,
            start=activity.start,
            end=activity.end,
            username=activity.username,
            description=activity.description or "",
            project_id=activity.project_id,
            project_title=activity.project.title if activity.project else None,
            duration_minutes=activity.duration_minutes_total,
            duration_decimal=activity.duration_decimal,
            duration_formatted=activity.duration_formatted
        )


class ActivityReportResponseDTO(ResponseDTO):
    """DTO for the paged activity report."""

    window: WindowResponseDTO
    activities: List[ActivityResponseDTO] = Field(default_factory=list)
    page: PageDTO
    sort: str = Field(description="Applied sort as 'field:order'")

    @classmethod
    def from_domain(cls, report: ActivityReport, now: datetime) -> "ActivityReportResponseDTO":
        return cls(
            window=WindowResponseDTO.from_domain(report.window, now),
            activities=[ActivityResponseDTO.from_domain(a) for a in report.activities],
            page=PageDTO.from_domain(report.page),
            sort=report.sort.to_param()
        )


class ReportBucketResponseDTO(ResponseDTO):
    """DTO for one bucket of the time report."""

    key: str = Field(description="Bucket key, e.g. '2021-45' for a week")
    first_day: date = Field(description="First day of the bucket")
    year: int
    quarter: int
    month: int
    week: int
    day: int
    entry_count: int = Field(description="Number of activities in the bucket")
    duration_minutes: int = Field(description="Total in whole minutes")
    duration_decimal: float = Field(description="Total in decimal hours")
    duration_formatted: str = Field(description="Total like '12:30 h'")

    @classmethod
    def from_domain(cls, bucket: ReportBucket) -> "ReportBucketResponseDTO":
        duration = bucket.duration
        return cls(
            key=bucket.label,
            first_day=bucket.as_date(),
            year=bucket.year,
            quarter=bucket.quarter,
            month=bucket.month,
            week=bucket.week,
            day=bucket.day,
            entry_count=bucket.entry_count,
            duration_minutes=duration.total_minutes,
            duration_decimal=duration.decimal_hours,
            duration_formatted=duration.formatted
        )


class TimeReportResponseDTO(ResponseDTO):
    """DTO for the bucketed time report."""

    window: WindowResponseDTO
    bucket_granularity: str = Field(description="Granularity of the buckets")
    buckets: List[ReportBucketResponseDTO] = Field(default_factory=list)
    total_decimal: float = Field(description="Sum of all buckets in decimal hours")
    total_formatted: str = Field(description="Sum of all buckets like '40:00 h'")

    @classmethod
    def from_domain(cls, report: TimeReport, now: datetime) -> "TimeReportResponseDTO":
        return cls(
            window=WindowResponseDTO.from_domain(report.window, now),
            bucket_granularity=report.bucket_granularity.value,
            buckets=[ReportBucketResponseDTO.from_domain(b) for b in report.buckets],
            total_decimal=report.duration.decimal_hours,
            total_formatted=report.duration.formatted
        )


class ProjectReportItemResponseDTO(ResponseDTO):
    """DTO for the total of one project."""

    project_id: uuid.UUID
    project_title: str
    entry_count: int
    duration_decimal: float
    duration_formatted: str

    @classmethod
    def from_domain(cls, item: ProjectReportItem) -> "ProjectReportItemResponseDTO":
        return cls(
            project_id=item.project_id,
            project_title=item.project_title,
            entry_count=item.entry_count,
            duration_decimal=item.duration.decimal_hours,
            duration_formatted=item.duration.formatted
        )


class ProjectReportResponseDTO(ResponseDTO):
    """DTO for the per project report."""

    window: WindowResponseDTO
    projects: List[ProjectReportItemResponseDTO] = Field(default_factory=list)
    total_decimal: float
    total_formatted: str

    @classmethod
    def from_domain(cls, report: ProjectReport, now: datetime) -> "ProjectReportResponseDTO":
        return cls(
            window=WindowResponseDTO.from_domain(report.window, now),
            projects=[ProjectReportItemResponseDTO.from_domain(i) for i in report.items],
            total_decimal=report.duration.decimal_hours,
            total_formatted=report.duration.formatted
        )
