"""
Activity and Project domain models.
An activity is one tracked stretch of work on a project.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
import uuid

from timesheet.domain.models.base import BaseEntity, ValidationError
from timesheet.domain.models.duration import Duration, calculate_duration


@dataclass(eq=False, kw_only=True)
class Project(BaseEntity):
    """A project activities are booked on, owned by one organization."""

    organization_id: uuid.UUID
    title: str
    description: Optional[str] = None
    active: bool = True

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if not self.title or not self.title.strip():
            raise ValidationError("Project title is required", "title")
        if len(self.title) > 255:
            raise ValidationError("Project title too long (max 255 characters)", "title")


@dataclass(eq=False, kw_only=True)
class Activity(BaseEntity):
    """
    Activity entity.
    Represents time tracked by one user of an organization for a project.
    """

    start: datetime
    end: datetime
    project_id: uuid.UUID
    organization_id: uuid.UUID
    username: str
    description: str = ""
    # Resolved lazily by reports, never persisted with the activity
    project: Optional[Project] = field(default=None, repr=False)

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Validate activity state."""
        if not self.username:
            raise ValidationError("Username is required", "username")

        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise ValidationError("Start and end must be timezone-aware", "start")

        if self.end <= self.start:
            raise ValidationError("End time must be after start time", "end")

        if self.description and len(self.description) > 1000:
            raise ValidationError("Description too long (max 1000 characters)", "description")

    @property
    def duration(self) -> Duration:
        return calculate_duration(self.start, self.end)

    @property
    def duration_hours(self) -> int:
        """Whole hours (e.g. 3)."""
        return self.duration.hours

    @property
    def duration_minutes(self) -> int:
        """Minutes of the unfinished hour (e.g. 15)."""
        return self.duration.minutes_remainder

    @property
    def duration_minutes_total(self) -> int:
        return self.duration.total_minutes

    @property
    def duration_decimal(self) -> float:
        """Duration in hours as decimal (e.g. 0.75)."""
        return self.duration.decimal_hours

    @property
    def duration_formatted(self) -> str:
        """Duration as formatted string (e.g. 1:15 h)."""
        return self.duration.formatted
