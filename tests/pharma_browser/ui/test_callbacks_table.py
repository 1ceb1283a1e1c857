from __future__ import annotations

from typing import Dict, Optional

from pharma_browser.core.exceptions import LoadError
from pharma_browser.core.period_store import PeriodDataStore
from pharma_browser.core.records import RecordSet
from pharma_browser.core.table_profile import COMPANY_TABLE, COUNTRY_TABLE, DRUG_TABLE
from pharma_browser.core.table_session import TableSession
from pharma_browser.ui.callbacks.callbacks_table import TableInputs, apply_trigger, render_outputs
from pharma_browser.ui.ids import TableIDs

COMPANIES = ["Merck", "Bayer"]


def _fetcher(request):
    rows = [
        {
            "drugName": f"Drug {i:02d}",
            "companyName": request.company or COMPANIES[i % 2],
            "categoryName": "Oncology" if i % 3 else "Cardio",
            "countryName": "Japan" if i < 20 else "Germany",
            "rank": i + 1,
            "estimatedSales": 100.0, "minSales": 90.0, "maxSales": 110.0,
        }
        for i in range(23)
    ]
    if request.country is not None:
        rows = [r for r in rows if r["countryName"] == request.country]
    return RecordSet.from_wire(request.period, rows, company=request.company, country=request.country)


def _inputs(
    period: Optional[str] = "2024Q1",
    scope: Optional[str] = None,
    filter_values: Optional[Dict[str, Optional[str]]] = None,
    search: Optional[str] = "",
    sort_by=None,
    page_size: Optional[int] = 10,
) -> TableInputs:
    return TableInputs(
        period=period,
        scope=scope,
        filter_values=filter_values or {},
        search=search,
        sort_by=sort_by,
        page_size=page_size,
    )


def _make_session(profile=DRUG_TABLE) -> TableSession:
    return TableSession(PeriodDataStore(_fetcher), profile)


def test_initial_call_loads_period():
    session = _make_session()
    ids = TableIDs(DRUG_TABLE.view_id)

    apply_trigger(session, ids, None, _inputs())

    assert session.request.period == "2024Q1"
    assert len(session.filtered) == 23


def test_period_change_skips_the_triggering_action():
    session = _make_session()
    ids = TableIDs(DRUG_TABLE.view_id)
    apply_trigger(session, ids, None, _inputs())

    # The stale filter value still in the dropdown must not survive the switch
    inputs = _inputs(period="2024Q2", filter_values={"company_name": "Bayer"})
    apply_trigger(session, ids, ids.filter_select("company_name"), inputs)

    assert session.request.period == "2024Q2"
    assert session.filter_state.is_unconstrained


def test_filter_search_sort_and_paging_dispatch():
    session = _make_session()
    ids = TableIDs(DRUG_TABLE.view_id)
    apply_trigger(session, ids, None, _inputs())

    apply_trigger(session, ids, ids.filter_select("company_name"),
                  _inputs(filter_values={"company_name": "Merck"}))
    assert len(session.filtered) == 12

    apply_trigger(session, ids, ids.next_btn, _inputs())
    assert session.page_state.index == 1
    apply_trigger(session, ids, ids.first_btn, _inputs())
    assert session.page_state.index == 0
    apply_trigger(session, ids, ids.last_btn, _inputs())
    assert session.page_state.index == 1
    apply_trigger(session, ids, ids.prev_btn, _inputs())
    assert session.page_state.index == 0

    apply_trigger(session, ids, ids.table, _inputs(sort_by=[{"column_id": "rank", "direction": "desc"}]))
    assert session.sort_state.descending

    apply_trigger(session, ids, ids.page_size, _inputs(page_size=25))
    assert session.page_state.size == 25

    apply_trigger(session, ids, ids.search, _inputs(search=" drug 1"))
    assert list(session.filtered["drug_name"]) == ["Drug 10", "Drug 12", "Drug 14", "Drug 16", "Drug 18"]


def test_company_view_waits_for_a_company():
    session = _make_session(COMPANY_TABLE)
    ids = TableIDs(COMPANY_TABLE.view_id)

    apply_trigger(session, ids, None, _inputs(scope=None))
    assert session.request is None

    apply_trigger(session, ids, None, _inputs(scope="Bayer"))
    assert session.request.company == "Bayer"
    assert set(session.filtered["company_name"]) == {"Bayer"}


def test_render_outputs_matches_declared_order():
    session = _make_session()
    ids = TableIDs(DRUG_TABLE.view_id)
    apply_trigger(session, ids, None, _inputs())
    apply_trigger(session, ids, ids.filter_select("category_name"),
                  _inputs(filter_values={"category_name": "Cardio"}))

    out = render_outputs(session)
    n_filters = len(DRUG_TABLE.filter_fields)

    rows, sort_by, label = out[0], out[1], out[2]
    first_disabled, prev_disabled, next_disabled, last_disabled = out[3:7]
    assert len(rows) == 8
    assert sort_by == []
    assert label == "Page 1 of 1"
    assert first_disabled and prev_disabled and next_disabled and last_disabled
    assert out[7] == "8 of 23 records"
    assert out[9] == ""
    assert out[10] is False

    options = out[11:11 + n_filters]
    values = out[11 + n_filters:11 + 2 * n_filters]
    assert options[DRUG_TABLE.filter_fields.index("company_name")] == [
        {"label": "Merck", "value": "Merck"},
        {"label": "Bayer", "value": "Bayer"},
    ]
    assert values[DRUG_TABLE.filter_fields.index("category_name")] == "Cardio"
    assert out[-1] == ""
    assert len(out) == 11 + 2 * n_filters + 1


def test_render_outputs_reports_load_errors():
    def failing(request):
        raise LoadError("Backend unavailable")

    session = TableSession(PeriodDataStore(failing), DRUG_TABLE)
    session.select_period("2024Q1")

    out = render_outputs(session)

    assert out[9] == "Backend unavailable"
    assert out[10] is True


def test_country_view_scopes_by_country_and_summarises_it():
    session = _make_session(COUNTRY_TABLE)
    ids = TableIDs(COUNTRY_TABLE.view_id)

    apply_trigger(session, ids, None, _inputs(scope=None))
    assert session.request is None

    apply_trigger(session, ids, None, _inputs(scope="Germany"))

    assert session.request.country == "Germany"
    assert session.request.company is None
    assert list(session.filtered["drug_name"]) == ["Drug 20", "Drug 21", "Drug 22"]

    out = render_outputs(session)
    assert "Total Country Sales" in repr(out[8])
    assert out[7] == "3 of 3 records"
