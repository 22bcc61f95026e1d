"""
Visibility service.
Decides which activities a principal may see in a report.
"""

from typing import Optional

from timesheet.domain.models.activity_filter import ActivitiesFilter, ActivitySort, VisibilityScope
from timesheet.domain.models.principal import Principal, UserRole
from timesheet.domain.models.time_window import TimeWindow


class VisibilityService:
    """
    Domain service building store filters for a principal.

    Every filter is bound to the principal's organization. Callers without
    the admin role are further restricted to their own activities.
    """

    def __init__(self, admin_role: str = UserRole.ADMIN.value):
        self.admin_role = admin_role

    def scope_for(self, principal: Principal) -> VisibilityScope:
        if principal.has_role(self.admin_role):
            return VisibilityScope(organization_id=principal.organization_id)
        return VisibilityScope(
            organization_id=principal.organization_id,
            username=principal.username
        )

    def build_filter(
        self,
        principal: Principal,
        window: TimeWindow,
        sort: Optional[ActivitySort] = None,
    ) -> ActivitiesFilter:
        """Filter selecting the activities of the window the principal may see."""
        return ActivitiesFilter(
            scope=self.scope_for(principal),
            start=window.start,
            end=window.end,
            sort=sort or ActivitySort()
        )

    def can_see(self, principal: Principal, organization_id, username: str) -> bool:
        """Check a single activity owner against the principal's scope."""
        scope = self.scope_for(principal)
        if scope.organization_id != organization_id:
            return False
        return scope.is_organization_wide or scope.username == username


def build_visibility_filter(
    principal: Principal,
    window: TimeWindow,
    sort: Optional[ActivitySort] = None,
    admin_role: str = UserRole.ADMIN.value,
) -> ActivitiesFilter:
    return VisibilityService(admin_role).build_filter(principal, window, sort)
