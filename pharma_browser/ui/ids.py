from __future__ import annotations

from dataclasses import dataclass

__all__ = ["IDs", "TableIDs"]


class IDs:
    class Store:
        SESSION_ID = "session-id"

    class Control:
        PERIOD_SELECT = "period-select"
        COMPANY_SELECT = "company-select"
        COUNTRY_SELECT = "country-select"
        PAGE_TABS = "page-tabs"

        # scope field of a TableProfile -> its selector
        SCOPE_SELECT = {
            "company_name": COMPANY_SELECT,
            "country_name": COUNTRY_SELECT,
        }


@dataclass(frozen=True)
class TableIDs:
    """
    Component ids of one table panel. Every table view gets the same set of
    controls, prefixed with its view id so several panels can share a page.
    """
    view_id: str

    def _id(self, name: str) -> str:
        return f"{self.view_id}-{name}"

    def filter_select(self, field_name: str) -> str:
        return self._id(f"filter-{field_name.replace('_', '-')}")

    @property
    def search(self) -> str:
        return self._id("search")

    @property
    def table(self) -> str:
        return self._id("table")

    @property
    def alert(self) -> str:
        return self._id("alert")

    @property
    def summary(self) -> str:
        return self._id("summary")

    @property
    def row_count(self) -> str:
        return self._id("row-count")

    @property
    def page_label(self) -> str:
        return self._id("page-label")

    @property
    def first_btn(self) -> str:
        return self._id("first-btn")

    @property
    def prev_btn(self) -> str:
        return self._id("prev-btn")

    @property
    def next_btn(self) -> str:
        return self._id("next-btn")

    @property
    def last_btn(self) -> str:
        return self._id("last-btn")

    @property
    def page_size(self) -> str:
        return self._id("page-size")

    @property
    def refresh_btn(self) -> str:
        return self._id("refresh-btn")

    @property
    def export_btn(self) -> str:
        return self._id("export-btn")

    @property
    def download(self) -> str:
        return self._id("download")
