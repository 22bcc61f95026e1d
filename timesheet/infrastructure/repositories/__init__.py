"""
SQLAlchemy implementations of the domain repositories.
"""

from .activity_repository import SQLAlchemyActivityRepository
from .project_repository import SQLAlchemyProjectRepository

__all__ = [
    "SQLAlchemyActivityRepository",
    "SQLAlchemyProjectRepository",
]
