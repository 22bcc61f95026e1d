"""
Project mapper for converting between domain entities and database models.
"""

from timesheet.domain.models.activity import Project
from timesheet.infrastructure.db.models import ProjectModel


class ProjectMapper:
    """Maps between Project domain entity and ProjectModel database model."""

    def domain_to_model(self, project: Project) -> ProjectModel:
        return ProjectModel(
            id=project.id,
            organization_id=project.organization_id,
            title=project.title,
            description=project.description,
            active=project.active
        )

    def model_to_domain(self, model: ProjectModel) -> Project:
        return Project(
            id=model.id,
            organization_id=model.organization_id,
            title=model.title,
            description=model.description,
            active=model.active if model.active is not None else True
        )
