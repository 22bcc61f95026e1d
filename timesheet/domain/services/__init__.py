"""
Domain services for the timesheet reporting service.
This module exports the window, visibility and aggregation services.
"""

from .window_codec import WindowCodec, parse_window, render_window
from .visibility_service import VisibilityService, build_visibility_filter
from .aggregation_service import ActivityAggregator, aggregate, clamp_bucket_granularity
from .report_view import ReportType, ReportView, parse_report_view

__all__ = [
    "WindowCodec",
    "parse_window",
    "render_window",
    "VisibilityService",
    "build_visibility_filter",
    "ActivityAggregator",
    "aggregate",
    "clamp_bucket_granularity",
    "ReportType",
    "ReportView",
    "parse_report_view",
]
