"""Unit tests for pagination helpers"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from apis.shared.pagination import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_WINDOW_SIZE,
    build_pagination_request,
    count_pages,
    paginate,
)


class TestBuildPaginationRequest:

    def test_full_path(self):
        request = build_pagination_request("1/10/20")

        assert request.current_page_num == 1
        assert request.page_size == 10
        assert request.window_size == 20

    def test_slashes_are_tolerated(self):
        request = build_pagination_request("/3/5/7/")

        assert (request.current_page_num, request.page_size, request.window_size) == (3, 5, 7)

    @pytest.mark.parametrize("path", ["", "abc", "0/0/0", "-1/x/"])
    def test_bad_segments_fall_back_to_defaults(self, path):
        request = build_pagination_request(path)

        assert request.current_page_num == 1
        assert request.page_size == DEFAULT_PAGE_SIZE
        assert request.window_size == DEFAULT_WINDOW_SIZE

    def test_missing_trailing_segments(self):
        request = build_pagination_request("4")

        assert request.current_page_num == 4
        assert request.page_size == DEFAULT_PAGE_SIZE


class TestPaginate:

    def test_fewer_pages_than_window(self):
        assert paginate(1, 3, 20) == [1, 2, 3]

    def test_no_pages(self):
        assert paginate(1, 0, 20) == []

    def test_window_centered_on_current_page(self):
        assert paginate(10, 30, 5) == [9, 10, 11, 12, 13]

    def test_window_clamped_at_start(self):
        assert paginate(1, 30, 5) == [1, 2, 3, 4, 5]

    def test_window_clamped_at_end(self):
        assert paginate(30, 30, 5) == [26, 27, 28, 29, 30]

    @given(
        page_count=st.integers(min_value=0, max_value=200),
        window_size=st.integers(min_value=1, max_value=50),
        data=st.data()
    )
    def test_pages_are_consecutive_and_in_range(self, page_count, window_size, data):
        current = data.draw(st.integers(min_value=1, max_value=max(page_count, 1)))

        pages = paginate(current, page_count, window_size)

        assert len(pages) == min(page_count, window_size)
        assert all(1 <= p <= page_count for p in pages)
        if pages:
            assert pages == list(range(pages[0], pages[-1] + 1))


def test_count_pages():
    assert count_pages(0, 10) == 0
    assert count_pages(10, 10) == 1
    assert count_pages(11, 10) == 2
