"""
Domain models for the timesheet reporting service.
This module exports all domain entities and value objects.
"""

# Base classes
from .base import (
    BaseEntity,
    DomainException,
    ValidationError,
    ParseError,
    InvalidWindow,
    InvalidInterval,
    StoreError,
)

# Value objects
from .duration import Duration, calculate_duration, format_minutes
from .time_window import Granularity, TimeWindow, AGGREGABLE_GRANULARITIES
from .principal import Principal, UserRole
from .activity_filter import (
    ActivitiesFilter,
    ActivitySort,
    SortField,
    SortOrder,
    VisibilityScope,
)
from .report import ReportBucket, ProjectReportItem
from .paging import Page, PageParams

# Domain entities
from .activity import Activity, Project

__all__ = [
    # Base
    "BaseEntity",
    "DomainException",
    "ValidationError",
    "ParseError",
    "InvalidWindow",
    "InvalidInterval",
    "StoreError",

    # Value objects
    "Duration",
    "calculate_duration",
    "format_minutes",
    "Granularity",
    "TimeWindow",
    "AGGREGABLE_GRANULARITIES",
    "Principal",
    "UserRole",
    "ActivitiesFilter",
    "ActivitySort",
    "SortField",
    "SortOrder",
    "VisibilityScope",
    "ReportBucket",
    "ProjectReportItem",
    "Page",
    "PageParams",

    # Entities
    "Activity",
    "Project",
]
