"""
Mappers between domain entities and database models.
"""

from .activity_mapper import ActivityMapper
from .project_mapper import ProjectMapper

__all__ = [
    "ActivityMapper",
    "ProjectMapper",
]
