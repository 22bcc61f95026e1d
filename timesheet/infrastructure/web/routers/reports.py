"""
Reports router.
Serves the activity list, the bucketed time report and the project report
of a time window.
"""

from datetime import datetime
from typing import Annotated, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from timesheet.application.dto.report_dto import (
    ActivityReportResponseDTO,
    ProjectReportResponseDTO,
    TimeReportResponseDTO,
)
from timesheet.application.use_cases.report_use_cases import (
    GetActivityReportUseCase,
    GetProjectReportUseCase,
    GetTimeReportUseCase,
    ReportOrchestrator,
    ReportQuery,
)
from timesheet.config import settings
from timesheet.domain.models.activity_filter import ActivitySort
from timesheet.domain.models.base import ParseError
from timesheet.domain.models.principal import Principal
from timesheet.domain.services.aggregation_service import ActivityAggregator
from timesheet.domain.services.report_view import ReportType, parse_report_view
from timesheet.domain.services.visibility_service import VisibilityService
from timesheet.domain.services.window_codec import WindowCodec
from timesheet.infrastructure.auth.dependencies import get_current_principal
from timesheet.infrastructure.db.database import get_db
from timesheet.infrastructure.pagination import page_params_from_query
from timesheet.infrastructure.repositories.activity_repository import SQLAlchemyActivityRepository
from timesheet.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository


router = APIRouter()

ReportResponse = Union[ActivityReportResponseDTO, TimeReportResponseDTO, ProjectReportResponseDTO]


def get_window_codec() -> WindowCodec:
    """Dependency to get the window codec of the reference timezone."""
    return WindowCodec(settings.reference_tz)


def get_report_orchestrator(session: Session = Depends(get_db)) -> ReportOrchestrator:
    """Dependency to get the report orchestrator."""
    return ReportOrchestrator(
        activity_repository=SQLAlchemyActivityRepository(session),
        project_repository=SQLAlchemyProjectRepository(session),
        visibility_service=VisibilityService(settings.admin_role),
        aggregator=ActivityAggregator(settings.reference_tz),
        report_page_size=settings.report_page_size
    )


@router.get("", response_model=None)
async def get_report(
    principal: Annotated[Principal, Depends(get_current_principal)],
    orchestrator: Annotated[ReportOrchestrator, Depends(get_report_orchestrator)],
    codec: Annotated[WindowCodec, Depends(get_window_codec)],
    t: Optional[str] = Query(None, description="Time span: day, week, month, quarter, year or custom"),
    v: Optional[str] = Query(None, description="Time span value, e.g. '2021-45' for a week"),
    start: Optional[str] = Query(None, description="First day of a custom time span (YYYY-MM-DD)"),
    end: Optional[str] = Query(None, description="Last day of a custom time span (YYYY-MM-DD)"),
    c: Optional[str] = Query(None, description="Report: general, time:d|w|m|q or project"),
    p: Optional[int] = Query(None, description="Page number, starting at 0"),
    size: Optional[int] = Query(None, description="Activities per page"),
    sort: Optional[str] = Query(None, description="Sort as 'field:order', e.g. 'project:asc'"),
) -> ReportResponse:
    """
    Get a report of the activities visible to the caller.

    - **t**: Time span granularity, defaults to the configured granularity
    - **v**: Time span value; omitted selects the current time span
    - **start** / **end**: Bounds of a custom time span, end inclusive
    - **c**: Report to build, defaults to the general activity list
    - **p** / **size**: Page of the general activity list
    - **sort**: Sort of the general activity list, newest first by default
    """
    now = datetime.now(settings.reference_tz)

    if t is None and not start and not end:
        t = settings.default_granularity

    try:
        window = codec.parse(t, v, start=start, end=end, now=now)
        view = parse_report_view(c, window.granularity)
    except ParseError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )

    query = ReportQuery(
        principal=principal,
        window=window,
        page_params=page_params_from_query(p, size, settings.default_page_size, settings.max_page_size),
        sort=ActivitySort.from_param(sort),
        bucket_granularity=view.bucket_granularity
    )

    if view.main_type == ReportType.TIME:
        report = await GetTimeReportUseCase(orchestrator).execute(query)
        return TimeReportResponseDTO.from_domain(report, now)

    if view.main_type == ReportType.PROJECT:
        report = await GetProjectReportUseCase(orchestrator).execute(query)
        return ProjectReportResponseDTO.from_domain(report, now)

    report = await GetActivityReportUseCase(orchestrator).execute(query)
    return ActivityReportResponseDTO.from_domain(report, now)
