"""
Project repository implementation using SQLAlchemy.
"""

import logging
from typing import Iterable, List
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from timesheet.domain.models.activity import Project
from timesheet.domain.models.base import StoreError
from timesheet.domain.repositories.project_repository import ProjectRepository as ProjectRepositoryInterface
from timesheet.infrastructure.db.models import ProjectModel
from timesheet.infrastructure.mappers.project_mapper import ProjectMapper

logger = logging.getLogger(__name__)


class SQLAlchemyProjectRepository(ProjectRepositoryInterface):
    """SQLAlchemy implementation of project repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ProjectMapper()

    async def find_by_ids(
        self,
        organization_id: uuid.UUID,
        ids: Iterable[uuid.UUID]
    ) -> List[Project]:
        """Find the projects of an organization with the given ids."""
        ids = list(ids)
        if not ids:
            return []

        try:
            models = self.session.query(ProjectModel).filter(
                ProjectModel.organization_id == organization_id,
                ProjectModel.id.in_(ids)
            ).order_by(ProjectModel.title).all()
        except SQLAlchemyError as exc:
            logger.error(f"Could not read projects: {exc}", exc_info=True)
            raise StoreError("Could not read projects") from exc

        return [self.mapper.model_to_domain(model) for model in models]
