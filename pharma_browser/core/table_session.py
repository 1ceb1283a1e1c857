from __future__ import annotations

import logging
from typing import Optional, Sequence

import pandas as pd

from pharma_browser.core.domains import FilterDomains, derive_domains
from pharma_browser.core.export import serialize
from pharma_browser.core.filter_state import FilterState
from pharma_browser.core.filtering import apply_filters
from pharma_browser.core.paging import (
    ALLOWED_PAGE_SIZES,
    DEFAULT_PAGE_SIZE,
    PageState,
    PageWindow,
    SortState,
    configure,
    first_page,
    goto_page,
    last_page,
    next_page,
    previous_page,
    resize_page,
)
from pharma_browser.core.period_store import LoadRequest, PeriodDataStore
from pharma_browser.core.records import RecordSet
from pharma_browser.core.table_profile import TableProfile

logger = logging.getLogger(__name__)


class TableSession:
    """
    One user's view of one table: period records plus filter, sort and page
    state, with everything downstream recomputed wholesale after each change.

    Recomputation chain:

        store.records --(_refresh_domains)--> domains
                      --(_refresh_filtered)--> filtered
                      --(_refresh_window)----> window

    Each state transition enters the chain at the first stage it affects and
    runs every stage after it. Nothing is patched incrementally.
    """

    def __init__(
        self,
        store: PeriodDataStore,
        profile: TableProfile,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        page_sizes: Sequence[int] = ALLOWED_PAGE_SIZES,
    ) -> None:
        if page_size not in page_sizes:
            raise ValueError(f"Default page size {page_size} not in {tuple(page_sizes)}")

        self.store = store
        self.profile = profile
        self.page_sizes = tuple(page_sizes)

        self._filter_state = FilterState()
        self._sort_state = SortState()
        self._page_state = PageState(index=0, size=page_size)

        self._domains: FilterDomains = {}
        self._filtered: pd.DataFrame = store.records.frame
        self._window: PageWindow = configure(self._filtered, self._sort_state, self._page_state)

        self._refresh_domains()

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------
    @property
    def records(self) -> RecordSet:
        return self.store.records

    @property
    def request(self) -> Optional[LoadRequest]:
        return self.store.selected

    @property
    def domains(self) -> FilterDomains:
        return self._domains

    @property
    def filter_state(self) -> FilterState:
        return self._filter_state

    @property
    def sort_state(self) -> SortState:
        return self._sort_state

    @property
    def page_state(self) -> PageState:
        return self._page_state

    @property
    def filtered(self) -> pd.DataFrame:
        return self._filtered

    @property
    def window(self) -> PageWindow:
        return self._window

    @property
    def error_message(self) -> Optional[str]:
        err = self.store.error
        return None if err is None else err.message

    # -------------------------------------------------------------------------
    # Recomputation stages
    # -------------------------------------------------------------------------
    def _refresh_domains(self) -> None:
        self._domains = derive_domains(self.records.frame, self.profile.filter_fields)
        self._filter_state = self._filter_state.sanitised(self._domains)
        self._refresh_filtered()

    def _refresh_filtered(self) -> None:
        self._filtered = apply_filters(self.records.frame, self._filter_state)
        self._refresh_window()

    def _reset_page(self) -> None:
        self._page_state = PageState(index=0, size=self._page_state.size)

    def _refresh_window(self) -> None:
        self._window = configure(self._filtered, self._sort_state, self._page_state)
        # Keep the stored index in step with the clamped one
        if self._window.page_index != self._page_state.index:
            self._page_state = goto_page(
                self._page_state, self._window.page_index, self._window.page_count
            )

    # -------------------------------------------------------------------------
    # Period
    # -------------------------------------------------------------------------
    def select_period(self, period: str, scope: Optional[str] = None) -> bool:
        """
        Switch to `period` (and to the company or country `scope`, for scoped
        tables; unscoped tables ignore it).

        Re-selecting the current request is a no-op. A real change resets
        filters, sort and page index before the new records are loaded.

        :return: True if the request changed.
        """
        request = self.profile.request_for(period, scope)
        if request == self.store.selected and request == self.store.loaded:
            return False

        self._filter_state = FilterState()
        self._sort_state = SortState()
        self._reset_page()

        logger.info(
            "Table period selected",
            extra={"view_id": self.profile.view_id, "period": period, "scope": scope},
        )
        try:
            self.store.load(request)
        finally:
            # Derived state must match the store even if load raised
            self._refresh_domains()
        return True

    def reload(self) -> None:
        """Re-fetch the current request, keeping filters that still apply."""
        try:
            self.store.reload()
        finally:
            self._refresh_domains()

    # -------------------------------------------------------------------------
    # Filters
    # -------------------------------------------------------------------------
    def set_filter(self, field_name: str, value: Optional[str]) -> None:
        self._filter_state = self._filter_state.with_selection(field_name, value)
        self._reset_page()
        self._refresh_filtered()

    def set_search(self, text: Optional[str]) -> None:
        self._filter_state = self._filter_state.with_search(text)
        self._reset_page()
        self._refresh_filtered()

    def clear_filters(self) -> None:
        self._filter_state = FilterState()
        self._reset_page()
        self._refresh_filtered()

    # -------------------------------------------------------------------------
    # Sort + paging
    # -------------------------------------------------------------------------
    def set_sort(self, sort: SortState) -> None:
        self._sort_state = sort
        self._refresh_window()

    def set_page_size(self, size: int) -> None:
        self._page_state = resize_page(self._page_state, int(size), self.page_sizes)
        self._refresh_window()

    def first_page(self) -> None:
        self._page_state = first_page(self._page_state, self.window.page_count)
        self._refresh_window()

    def previous_page(self) -> None:
        self._page_state = previous_page(self._page_state, self.window.page_count)
        self._refresh_window()

    def next_page(self) -> None:
        self._page_state = next_page(self._page_state, self.window.page_count)
        self._refresh_window()

    def last_page(self) -> None:
        self._page_state = last_page(self._page_state, self.window.page_count)
        self._refresh_window()

    def goto_page(self, index: int) -> None:
        self._page_state = goto_page(self._page_state, index, self.window.page_count)
        self._refresh_window()

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------
    def export_text(self) -> str:
        """Every filtered row, independent of the page currently shown."""
        return serialize(self._filtered)
