"""
Activity mapper for converting between domain entities and database models.
"""

from datetime import datetime, timezone

from timesheet.domain.models.activity import Activity
from timesheet.infrastructure.db.models import ActivityModel


def to_storage_time(value: datetime) -> datetime:
    """Instants are stored in UTC."""
    return value.astimezone(timezone.utc)


def from_storage_time(value: datetime) -> datetime:
    """Reattach UTC to values read back from drivers that drop the offset."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ActivityMapper:
    """Maps between Activity domain entity and ActivityModel database model."""

    def domain_to_model(self, activity: Activity) -> ActivityModel:
        """Convert Activity domain entity to ActivityModel."""
        return ActivityModel(
            id=activity.id,
            organization_id=activity.organization_id,
            project_id=activity.project_id,
            username=activity.username,
            start_time=to_storage_time(activity.start),
            end_time=to_storage_time(activity.end),
            description=activity.description
        )

    def model_to_domain(self, model: ActivityModel) -> Activity:
        """Convert ActivityModel to Activity domain entity."""
        return Activity(
            id=model.id,
            start=from_storage_time(model.start_time),
            end=from_storage_time(model.end_time),
            project_id=model.project_id,
            organization_id=model.organization_id,
            username=model.username,
            description=model.description or ""
        )
