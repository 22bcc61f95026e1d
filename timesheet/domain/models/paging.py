"""
Paging value objects.
Pages are numbered from zero.
"""

from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Page:
    """Position of one page within a result of total_elements items."""

    size: int
    number: int
    total_elements: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0


@dataclass(frozen=True)
class PageParams:
    """Requested page number and size."""

    page: int = 0
    size: int = 50

    def __post_init__(self):
        if self.page < 0:
            object.__setattr__(self, "page", 0)
        if self.size < 1:
            object.__setattr__(self, "size", 1)

    @property
    def offset(self) -> int:
        return self.page * self.size

    def next_page(self) -> "PageParams":
        return PageParams(self.page + 1, self.size)

    def page_of_total(self, total: int) -> Page:
        return Page(
            size=self.size,
            number=self.page,
            total_elements=total,
            total_pages=math.ceil(total / self.size)
        )
