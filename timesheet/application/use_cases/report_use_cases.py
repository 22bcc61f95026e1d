"""
Report use cases for the application layer.
Composes visibility, paged store reads and aggregation into the activity,
time and project reports.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, List, Optional
import uuid

from timesheet.application.use_cases.base_use_case import QueryUseCase
from timesheet.domain.models.activity import Activity, Project
from timesheet.domain.models.activity_filter import ActivitiesFilter, ActivitySort, SortField, SortOrder
from timesheet.domain.models.duration import Duration
from timesheet.domain.models.paging import Page, PageParams
from timesheet.domain.models.principal import Principal
from timesheet.domain.models.report import ProjectReportItem, ReportBucket
from timesheet.domain.models.time_window import Granularity, TimeWindow
from timesheet.domain.repositories.activity_repository import ActivityRepository
from timesheet.domain.repositories.project_repository import ProjectRepository
from timesheet.domain.services.aggregation_service import ActivityAggregator, clamp_bucket_granularity
from timesheet.domain.services.visibility_service import VisibilityService

logger = logging.getLogger(__name__)


@dataclass
class ReportQuery:
    """Input of every report: who asks, for which window and how to page and sort."""

    principal: Principal
    window: TimeWindow
    page_params: PageParams = field(default_factory=PageParams)
    sort: ActivitySort = field(default_factory=ActivitySort)
    bucket_granularity: Optional[Granularity] = None


@dataclass
class ActivityReport:
    """One page of the activities of a window."""

    window: TimeWindow
    activities: List[Activity]
    page: Page
    sort: ActivitySort


@dataclass
class TimeReport:
    """Bucketed totals of all activities of a window."""

    window: TimeWindow
    bucket_granularity: Granularity
    buckets: List[ReportBucket]

    @property
    def total(self) -> timedelta:
        return sum((bucket.total for bucket in self.buckets), timedelta(0))

    @property
    def duration(self) -> Duration:
        return Duration(self.total)


@dataclass
class ProjectReport:
    """Per project totals of all activities of a window."""

    window: TimeWindow
    items: List[ProjectReportItem]

    @property
    def total(self) -> timedelta:
        return sum((item.total for item in self.items), timedelta(0))

    @property
    def duration(self) -> Duration:
        return Duration(self.total)


class ReportOrchestrator:
    """
    Builds reports for a principal.

    Store errors are passed on unchanged, nothing is retried.
    """

    def __init__(
        self,
        activity_repository: ActivityRepository,
        project_repository: ProjectRepository,
        visibility_service: Optional[VisibilityService] = None,
        aggregator: Optional[ActivityAggregator] = None,
        report_page_size: int = 500
    ):
        self.activity_repository = activity_repository
        self.project_repository = project_repository
        self.visibility_service = visibility_service or VisibilityService()
        self.aggregator = aggregator or ActivityAggregator()
        self.report_page_size = report_page_size

    async def activity_report(
        self,
        principal: Principal,
        window: TimeWindow,
        page_params: Optional[PageParams] = None,
        sort: Optional[ActivitySort] = None
    ) -> ActivityReport:
        """One page of visible activities with their projects resolved."""
        page_params = page_params or PageParams()
        sort = sort or ActivitySort()
        activities_filter = self.visibility_service.build_filter(principal, window, sort)

        activities, total = await self.activity_repository.find(activities_filter, page_params)
        await self._resolve_projects(principal.organization_id, activities)

        return ActivityReport(
            window=window,
            activities=activities,
            page=page_params.page_of_total(total),
            sort=sort
        )

    async def time_report(
        self,
        principal: Principal,
        window: TimeWindow,
        bucket_granularity: Optional[Granularity] = None
    ) -> TimeReport:
        """Visible activities of the window summed per bucket."""
        granularity = clamp_bucket_granularity(bucket_granularity or Granularity.DAY, window.granularity)
        activities = await self._fetch_all(principal, window)

        return TimeReport(
            window=window,
            bucket_granularity=granularity,
            buckets=self.aggregator.aggregate(activities, granularity)
        )

    async def project_report(self, principal: Principal, window: TimeWindow) -> ProjectReport:
        """Visible activities of the window summed per project."""
        activities = await self._fetch_all(principal, window)
        projects = await self._resolve_projects(principal.organization_id, activities)

        return ProjectReport(
            window=window,
            items=self.aggregator.aggregate_by_project(activities, projects)
        )

    async def _fetch_all(self, principal: Principal, window: TimeWindow) -> List[Activity]:
        """Walk every page of the window's visible activities."""
        activities_filter: ActivitiesFilter = self.visibility_service.build_filter(
            principal, window, ActivitySort(SortField.START, SortOrder.ASC)
        )
        page_params = PageParams(0, self.report_page_size)
        collected: List[Activity] = []

        while True:
            activities, total = await self.activity_repository.find(activities_filter, page_params)
            collected.extend(activities)
            if not activities or len(collected) >= total:
                break
            page_params = page_params.next_page()

        logger.debug(f"Fetched {len(collected)} activities for window {window.label()}")
        return collected

    async def _resolve_projects(
        self,
        organization_id: uuid.UUID,
        activities: List[Activity]
    ) -> List[Project]:
        """Look up only the distinct projects referenced by the activities and attach them."""
        project_ids = list(dict.fromkeys(activity.project_id for activity in activities))
        if not project_ids:
            return []

        projects = await self.project_repository.find_by_ids(organization_id, project_ids)
        by_id: Dict[uuid.UUID, Project] = {project.id: project for project in projects}
        for activity in activities:
            activity.project = by_id.get(activity.project_id)
        return projects


class GetActivityReportUseCase(QueryUseCase[ReportQuery, ActivityReport]):
    """Use case for the paged list of activities of a window."""

    def __init__(self, orchestrator: ReportOrchestrator):
        super().__init__()
        self.orchestrator = orchestrator

    async def _execute_business_logic(self, request: ReportQuery) -> ActivityReport:
        return await self.orchestrator.activity_report(
            request.principal,
            request.window,
            request.page_params,
            request.sort
        )


class GetTimeReportUseCase(QueryUseCase[ReportQuery, TimeReport]):
    """Use case for the day, week, month or quarter totals of a window."""

    def __init__(self, orchestrator: ReportOrchestrator):
        super().__init__()
        self.orchestrator = orchestrator

    async def _execute_business_logic(self, request: ReportQuery) -> TimeReport:
        return await self.orchestrator.time_report(
            request.principal,
            request.window,
            request.bucket_granularity
        )


class GetProjectReportUseCase(QueryUseCase[ReportQuery, ProjectReport]):
    """Use case for the per project totals of a window."""

    def __init__(self, orchestrator: ReportOrchestrator):
        super().__init__()
        self.orchestrator = orchestrator

    async def _execute_business_logic(self, request: ReportQuery) -> ProjectReport:
        return await self.orchestrator.project_report(request.principal, request.window)
