"""
Principal value object.
The authenticated caller a report is computed for.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet
import uuid

from timesheet.domain.models.base import ValidationError


class UserRole(str, Enum):
    """Roles a caller can hold within an organization."""
    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True)
class Principal:
    """Caller identity: organization, username and roles."""

    organization_id: uuid.UUID
    username: str
    roles: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if not self.username:
            raise ValidationError("Username is required", "username")
        object.__setattr__(
            self,
            "roles",
            frozenset(r.value if isinstance(r, UserRole) else str(r) for r in self.roles)
        )

    def has_role(self, role: str) -> bool:
        """Check if the principal holds a role."""
        if isinstance(role, UserRole):
            role = role.value
        return role in self.roles
