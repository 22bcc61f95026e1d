"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .activity_repository import ActivityRepository
from .project_repository import ProjectRepository

__all__ = [
    "ActivityRepository",
    "ProjectRepository",
]
