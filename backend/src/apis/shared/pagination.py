"""Page-number pagination helpers for console listings."""

import math
from typing import List

from pydantic import BaseModel, Field, ConfigDict

DEFAULT_PAGE_NUM = 1
DEFAULT_PAGE_SIZE = 20
DEFAULT_WINDOW_SIZE = 20


class PaginationRequest(BaseModel):
    """Pagination arguments parsed from a "page/size/window" path."""
    model_config = ConfigDict(populate_by_name=True)

    current_page_num: int = Field(DEFAULT_PAGE_NUM, alias="paginationCurrentPageNum", ge=1)
    page_size: int = Field(DEFAULT_PAGE_SIZE, alias="paginationPageSize", ge=1)
    window_size: int = Field(DEFAULT_WINDOW_SIZE, alias="paginationWindowSize", ge=1)


class Pagination(BaseModel):
    """Pagination metadata returned alongside a listing."""
    model_config = ConfigDict(populate_by_name=True)

    page_count: int = Field(0, alias="paginationPageCount")
    page_nums: List[int] = Field(default_factory=list, alias="paginationPageNums")


def _segment(segments: List[str], index: int, default: int) -> int:
    if index >= len(segments):
        return default
    try:
        number = int(segments[index].strip())
    except ValueError:
        return default
    return number if number >= 1 else default


def build_pagination_request(path: str) -> PaginationRequest:
    """
    Parse a path such as "1/10/20" (page 1, 10 per page, window of 20 pages).

    Missing, non-numeric or non-positive segments fall back to the defaults.
    """
    segments = (path or "").strip("/").split("/")
    return PaginationRequest(
        current_page_num=_segment(segments, 0, DEFAULT_PAGE_NUM),
        page_size=_segment(segments, 1, DEFAULT_PAGE_SIZE),
        window_size=_segment(segments, 2, DEFAULT_WINDOW_SIZE),
    )


def count_pages(total: int, page_size: int) -> int:
    """Number of pages needed for total items."""
    if total <= 0:
        return 0
    return math.ceil(total / page_size)


def paginate(current_page_num: int, page_count: int, window_size: int) -> List[int]:
    """
    Page numbers to show in the pager.

    With fewer pages than the window every page is listed; otherwise a window
    of window_size consecutive pages around the current page, kept within
    [1, page_count].
    """
    if page_count < window_size:
        return list(range(1, page_count + 1))

    first = current_page_num + 1 - window_size // 2
    first = max(first, 1)
    if first + window_size > page_count:
        first = page_count - window_size + 1
    return list(range(first, first + window_size))
