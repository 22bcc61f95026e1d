"""
Query filter handed to the activity store.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
import uuid


class SortField(str, Enum):
    """Fields the activity list can be sorted by."""
    START = "start"
    PROJECT = "project"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ActivitySort:
    """Sort selection of the activity list, newest first by default."""

    field: SortField = SortField.START
    order: SortOrder = SortOrder.DESC

    @classmethod
    def from_param(cls, value: Optional[str]) -> "ActivitySort":
        """
        Read a 'field:order' parameter such as 'project:asc'.
        Unknown fields or orders fall back to the default sort.
        """
        if not value:
            return cls()
        parts = value.lower().split(":")
        if len(parts) != 2:
            return cls()
        try:
            return cls(SortField(parts[0]), SortOrder(parts[1]))
        except ValueError:
            return cls()

    def toggled(self, sort_field: SortField) -> "ActivitySort":
        """Sort by a field, flipping the order on every toggle."""
        order = SortOrder.ASC if self.order == SortOrder.DESC else SortOrder.DESC
        return ActivitySort(SortField(sort_field), order)

    def to_param(self) -> str:
        return f"{self.field.value}:{self.order.value}"


@dataclass(frozen=True)
class VisibilityScope:
    """Organization bound plus optional per-user restriction."""

    organization_id: uuid.UUID
    username: Optional[str] = None

    @property
    def is_organization_wide(self) -> bool:
        return self.username is None


@dataclass(frozen=True)
class ActivitiesFilter:
    """Visibility scope and half-open time range [start, end) of an activity query."""

    scope: VisibilityScope
    start: datetime
    end: datetime
    sort: ActivitySort = field(default_factory=ActivitySort)

    @property
    def organization_id(self) -> uuid.UUID:
        return self.scope.organization_id

    @property
    def username(self) -> Optional[str]:
        return self.scope.username
