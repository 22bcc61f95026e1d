"""
Application layer use cases.
Report building for the timesheet reporting service.
"""

from .base_use_case import BaseUseCase, QueryUseCase
from .report_use_cases import (
    ReportQuery,
    ActivityReport,
    TimeReport,
    ProjectReport,
    ReportOrchestrator,
    GetActivityReportUseCase,
    GetTimeReportUseCase,
    GetProjectReportUseCase,
)

__all__ = [
    # Base Use Cases
    "BaseUseCase",
    "QueryUseCase",

    # Reports
    "ReportQuery",
    "ActivityReport",
    "TimeReport",
    "ProjectReport",
    "ReportOrchestrator",
    "GetActivityReportUseCase",
    "GetTimeReportUseCase",
    "GetProjectReportUseCase",
]
