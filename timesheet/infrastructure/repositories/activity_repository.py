"""
Activity repository implementation using SQLAlchemy.
"""

import logging
from typing import List, Tuple

from sqlalchemy import asc, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from timesheet.domain.models.activity import Activity
from timesheet.domain.models.activity_filter import ActivitiesFilter, SortField, SortOrder
from timesheet.domain.models.base import StoreError
from timesheet.domain.models.paging import PageParams
from timesheet.domain.repositories.activity_repository import ActivityRepository as ActivityRepositoryInterface
from timesheet.infrastructure.db.models import ActivityModel, ProjectModel
from timesheet.infrastructure.mappers.activity_mapper import ActivityMapper, to_storage_time
from timesheet.infrastructure.pagination import OffsetPagination

logger = logging.getLogger(__name__)


class SQLAlchemyActivityRepository(ActivityRepositoryInterface):
    """SQLAlchemy implementation of activity repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ActivityMapper()
        self.paginator = OffsetPagination()

    async def find(
        self,
        activities_filter: ActivitiesFilter,
        page_params: PageParams
    ) -> Tuple[List[Activity], int]:
        """Find one page of the activities matching the filter."""
        try:
            query = self._filtered_query(activities_filter)
            models, total = self.paginator.paginate(query, page_params)
        except SQLAlchemyError as exc:
            logger.error(f"Could not read activities: {exc}", exc_info=True)
            raise StoreError("Could not read activities") from exc

        return [self.mapper.model_to_domain(model) for model in models], total

    def _filtered_query(self, activities_filter: ActivitiesFilter):
        query = self.session.query(ActivityModel).filter(
            ActivityModel.organization_id == activities_filter.organization_id,
            ActivityModel.start_time >= to_storage_time(activities_filter.start),
            ActivityModel.start_time < to_storage_time(activities_filter.end)
        )

        if activities_filter.username is not None:
            query = query.filter(ActivityModel.username == activities_filter.username)

        sort = activities_filter.sort
        direction = asc if sort.order == SortOrder.ASC else desc

        if sort.field == SortField.PROJECT:
            query = query.join(ProjectModel, ActivityModel.project_id == ProjectModel.id).order_by(
                direction(ProjectModel.title),
                direction(ActivityModel.start_time),
                ActivityModel.id
            )
        else:
            query = query.order_by(direction(ActivityModel.start_time), ActivityModel.id)

        return query
