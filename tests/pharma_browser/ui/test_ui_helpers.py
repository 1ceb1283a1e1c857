from __future__ import annotations

from pharma_browser.core.paging import PageState, SortState, configure
from pharma_browser.core.records import RecordSet
from pharma_browser.core.summaries import CompanySummary
from pharma_browser.core.table_profile import COMPANY_TABLE, COUNTRY_TABLE, DRUG_TABLE
from pharma_browser.ui.helpers import (
    company_summary_children,
    filter_label,
    filter_placeholder,
    format_money,
    sort_by_from_state,
    sort_state_from_sort_by,
    summary_children,
    table_columns,
    window_rows,
)
from pharma_browser.ui.ids import IDs, TableIDs


def test_table_columns_follow_profile():
    columns = table_columns(COMPANY_TABLE)

    assert [c["id"] for c in columns] == list(COMPANY_TABLE.column_fields)
    by_id = {c["id"]: c for c in columns}
    assert by_id["rank"]["type"] == "numeric"
    assert "format" not in by_id["rank"]
    assert "format" in by_id["estimated_sales"]
    assert "type" not in by_id["drug_name"]


def test_sort_by_roundtrip():
    assert sort_state_from_sort_by(None) == SortState()
    assert sort_state_from_sort_by([]) == SortState()
    assert sort_state_from_sort_by([{"column_id": "rank", "direction": "none"}]) == SortState()

    state = sort_state_from_sort_by([{"column_id": "rank", "direction": "desc"}])
    assert state == SortState("rank", descending=True)
    assert sort_by_from_state(state) == [{"column_id": "rank", "direction": "desc"}]
    assert sort_by_from_state(SortState()) == []


def test_window_rows_only_carry_profile_columns():
    records = RecordSet.from_wire(
        "2024Q1",
        [
            {
                "drugName": "Keytruda", "companyName": "Merck", "categoryName": "Oncology",
                "countryName": "Japan", "rank": 1,
                "estimatedSales": 10.0, "minSales": 5.0, "maxSales": 15.0,
            }
        ],
    )
    window = configure(records.frame, SortState(), PageState())

    rows = window_rows(window, COMPANY_TABLE)

    assert len(rows) == 1
    assert set(rows[0]) == set(COMPANY_TABLE.column_fields)
    assert "company_name" not in rows[0]


def test_labels_and_money():
    assert filter_label("country_name") == "Country"
    assert filter_placeholder("company_name") == "All Companies"
    assert format_money(1234567.891) == "$1,234,567.89"


def test_company_summary_without_data_shows_placeholder():
    children = company_summary_children(CompanySummary(total_sales=0.0))
    assert "n/a" in repr(children)


def test_table_ids_are_prefixed_per_view():
    drugs, company = TableIDs(DRUG_TABLE.view_id), TableIDs(COMPANY_TABLE.view_id)

    assert drugs.filter_select("country_name") == "drugs-filter-country-name"
    assert drugs.table != company.table
    assert drugs.next_btn == "drugs-next-btn"


def test_summary_children_follow_the_profile_scope():
    frame = RecordSet.empty("2024Q1").frame

    assert "Total Country Sales" in repr(summary_children(COUNTRY_TABLE, frame))
    assert "Top countries" in repr(summary_children(COMPANY_TABLE, frame))
    assert "drugs" in repr(summary_children(DRUG_TABLE, frame))


def test_every_scoped_profile_has_a_selector():
    for profile in (COMPANY_TABLE, COUNTRY_TABLE):
        assert profile.scope_field in IDs.Control.SCOPE_SELECT
    assert IDs.Control.SCOPE_SELECT["country_name"] == IDs.Control.COUNTRY_SELECT
