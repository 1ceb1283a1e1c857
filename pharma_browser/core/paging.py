from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional, Sequence

import pandas as pd

ALLOWED_PAGE_SIZES: tuple[int, ...] = (10, 25, 50)
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class SortState:
    """Sort column + direction. `field=None` keeps insertion order."""
    field: Optional[str] = None
    descending: bool = False

    @property
    def is_active(self) -> bool:
        return self.field is not None


@dataclass(frozen=True)
class PageState:
    index: int = 0
    size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class PageWindow:
    """What the display surface needs to render one page of a table."""
    rows: pd.DataFrame
    page_index: int
    page_count: int
    total_rows: int
    can_next: bool
    can_prev: bool

    @property
    def label(self) -> str:
        return f"Page {self.page_index + 1} of {self.page_count}"


def page_count(n_rows: int, page_size: int) -> int:
    """ceil(n_rows / page_size), with an empty set shown as one empty page."""
    return max(1, math.ceil(n_rows / page_size))


def clamp_index(index: int, n_pages: int) -> int:
    return min(max(int(index), 0), n_pages - 1)


def sort_records(frame: pd.DataFrame, sort: SortState) -> pd.DataFrame:
    """
    Stable sort of `frame` by `sort.field`.

    Python's sort is stable in both directions, so rows with equal keys keep
    their relative order even when descending. Numeric columns compare as
    numbers, text columns lexicographically.
    """
    if not sort.is_active or sort.field not in frame.columns or len(frame) < 2:
        return frame
    keys = frame[sort.field].tolist()
    order = sorted(range(len(keys)), key=keys.__getitem__, reverse=sort.descending)
    return frame.iloc[order]


def configure(
    filtered: pd.DataFrame,
    sort: SortState,
    page: PageState,
) -> PageWindow:
    n_rows = len(filtered)
    n_pages = page_count(n_rows, page.size)
    index = clamp_index(page.index, n_pages)

    ordered = sort_records(filtered, sort)
    start = index * page.size
    rows = ordered.iloc[start:start + page.size]

    return PageWindow(
        rows=rows,
        page_index=index,
        page_count=n_pages,
        total_rows=n_rows,
        can_next=index < n_pages - 1,
        can_prev=index > 0,
    )


# -----------------------------------------------------------------------------
# Navigation: all of these clamp, none of them raise on out-of-range requests
# -----------------------------------------------------------------------------
def goto_page(page: PageState, index: int, n_pages: int) -> PageState:
    return replace(page, index=clamp_index(index, n_pages))


def first_page(page: PageState, n_pages: int) -> PageState:
    return goto_page(page, 0, n_pages)


def previous_page(page: PageState, n_pages: int) -> PageState:
    return goto_page(page, page.index - 1, n_pages)


def next_page(page: PageState, n_pages: int) -> PageState:
    return goto_page(page, page.index + 1, n_pages)


def last_page(page: PageState, n_pages: int) -> PageState:
    return goto_page(page, n_pages - 1, n_pages)


def resize_page(
    page: PageState,
    size: int,
    allowed: Sequence[int] = ALLOWED_PAGE_SIZES,
) -> PageState:
    """
    Change the page size keeping the first row of the current page visible.

    The caller re-clamps against the new page count on the next `configure`.

    :raises ValueError: if `size` is not one of `allowed`.
    """
    if size not in allowed:
        raise ValueError(f"Page size {size} not in {tuple(allowed)}")
    first_row = page.index * page.size
    return PageState(index=first_row // size, size=size)
