"""
Project repository interface.
Defines the contract for resolving projects referenced by activities.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List
import uuid

from timesheet.domain.models.activity import Project


class ProjectRepository(ABC):
    """Repository interface for Project entity."""

    @abstractmethod
    async def find_by_ids(
        self,
        organization_id: uuid.UUID,
        ids: Iterable[uuid.UUID]
    ) -> List[Project]:
        """
        Find the projects of an organization with the given ids.
        Unknown ids are skipped.

        Raises:
            StoreError: if the store cannot answer
        """
        pass
