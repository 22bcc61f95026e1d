"""
Unit tests for paging parameters and offset pagination.
"""

import pytest

from timesheet.domain.models.paging import PageParams
from timesheet.infrastructure.pagination import OffsetPagination, page_params_from_query


class TestPageParams:
    """Test cases for PageParams."""

    def test_offset(self):
        assert PageParams(page=0, size=20).offset == 0
        assert PageParams(page=3, size=20).offset == 60

    @pytest.mark.parametrize("total,pages", [(0, 0), (1, 1), (20, 1), (21, 2), (100, 5)])
    def test_page_of_total(self, total, pages):
        page = PageParams(page=0, size=20).page_of_total(total)

        assert page.total_pages == pages
        assert page.total_elements == total
        assert page.number == 0

    def test_negative_values_are_corrected(self):
        params = PageParams(page=-1, size=0)

        assert params.page == 0
        assert params.size == 1

    def test_next_page(self):
        assert PageParams(page=2, size=10).next_page() == PageParams(page=3, size=10)


class TestOffsetPagination:
    """Test cases for reading paging parameters from requests."""

    def test_defaults(self):
        assert page_params_from_query(None, None) == PageParams(page=0, size=50)

    def test_size_is_capped(self):
        assert page_params_from_query(2, 5000, max_page_size=100) == PageParams(page=2, size=100)

    def test_invalid_values_fall_back(self):
        assert OffsetPagination(default_page_size=25).page_params(-3, 0) == PageParams(page=0, size=25)
