"""
Offset pagination utilities for SQLAlchemy queries.
Pages are numbered from zero.
"""

from typing import Any, List, Optional, Tuple

from sqlalchemy.orm import Query

from timesheet.domain.models.paging import PageParams


class OffsetPagination:
    """
    Offset-based pagination returning the total count with every page.
    """

    def __init__(self, default_page_size: int = 50, max_page_size: int = 100):
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def page_params(self, page: Optional[int] = None, size: Optional[int] = None) -> PageParams:
        """
        Build page parameters from untrusted query values.
        Missing or out of range values are clamped.
        """
        if size is None or size < 1:
            size = self.default_page_size
        size = min(size, self.max_page_size)

        if page is None or page < 0:
            page = 0

        return PageParams(page=page, size=size)

    def paginate(self, query: Query, page_params: PageParams) -> Tuple[List[Any], int]:
        """
        Paginate query using offset-based pagination.

        Returns:
            Tuple of (items, total_items)
        """
        # Count without ORDER BY
        total_items = query.order_by(None).count()
        items = query.offset(page_params.offset).limit(page_params.size).all()
        return items, total_items


def page_params_from_query(
    page: Optional[int],
    size: Optional[int],
    default_page_size: int = 50,
    max_page_size: int = 100
) -> PageParams:
    """Page parameters of a request, clamped to the configured page sizes."""
    return OffsetPagination(default_page_size, max_page_size).page_params(page, size)
