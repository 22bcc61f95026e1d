"""
Application layer DTOs.
Data Transfer Objects for API responses.
"""

from .base_dto import BaseDTO, ResponseDTO, PageDTO, HealthCheckResponseDTO, ErrorResponseDTO
from .report_dto import (
    WindowResponseDTO,
    ActivityResponseDTO,
    ActivityReportResponseDTO,
    ReportBucketResponseDTO,
    TimeReportResponseDTO,
    ProjectReportItemResponseDTO,
    ProjectReportResponseDTO,
)

__all__ = [
    # Base DTOs
    "BaseDTO",
    "ResponseDTO",
    "PageDTO",
    "HealthCheckResponseDTO",
    "ErrorResponseDTO",

    # Reports
    "WindowResponseDTO",
    "ActivityResponseDTO",
    "ActivityReportResponseDTO",
    "ReportBucketResponseDTO",
    "TimeReportResponseDTO",
    "ProjectReportItemResponseDTO",
    "ProjectReportResponseDTO",
]
