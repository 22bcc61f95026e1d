"""
Activity repository interface.
Defines the contract for reading activities of a time window.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple

from timesheet.domain.models.activity import Activity
from timesheet.domain.models.activity_filter import ActivitiesFilter
from timesheet.domain.models.paging import PageParams


class ActivityRepository(ABC):
    """
    Repository interface for Activity entity.
    Reports only read snapshots of activities, they never write.
    """

    @abstractmethod
    async def find(
        self,
        activities_filter: ActivitiesFilter,
        page_params: PageParams
    ) -> Tuple[List[Activity], int]:
        """
        Find one page of the activities matching the filter.

        Only activities starting inside [filter.start, filter.end) are
        returned, ordered by the filter's sort. The second element is the
        total number of matching activities across all pages.

        Raises:
            StoreError: if the store cannot answer
        """
        pass
