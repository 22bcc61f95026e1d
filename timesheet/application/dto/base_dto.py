"""
Base DTOs for the application layer.
Provides common patterns for response data transfer objects.
"""

from typing import Any, Dict, Optional
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from timesheet.domain.models.paging import Page


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # Allow population by field name or alias
        populate_by_name=True,
        # Convert enum values to their values
        use_enum_values=True,
        extra="forbid",
    )


class ResponseDTO(BaseDTO):
    """Base class for response DTOs."""
    pass


class PageDTO(BaseDTO):
    """Position of a page within a paged result. Pages count from zero."""

    size: int = Field(description="Items per page")
    number: int = Field(description="Current page number")
    total_elements: int = Field(description="Total number of items")
    total_pages: int = Field(description="Total number of pages")
    has_next: bool = Field(description="Whether there are more pages")
    has_previous: bool = Field(description="Whether there are previous pages")

    @classmethod
    def from_domain(cls, page: Page) -> "PageDTO":
        return cls(
            size=page.size,
            number=page.number,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            has_next=page.has_next,
            has_previous=page.has_previous
        )


class HealthCheckResponseDTO(BaseDTO):
    """Health check response DTO."""

    status: str = Field(description="Service status")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), description="Check timestamp")
    version: Optional[str] = Field(default=None, description="Application version")
    environment: Optional[str] = Field(default=None, description="Current environment")
    reference_timezone: Optional[str] = Field(default=None, description="Reference zone of calendar windows")


class ErrorResponseDTO(BaseDTO):
    """Error response DTO."""

    error: str = Field(description="Error type")
    message: str = Field(description="Error message")
    code: Optional[str] = Field(default=None, description="Domain error code")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), description="Error timestamp")
