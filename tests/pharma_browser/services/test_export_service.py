from __future__ import annotations

from pharma_browser.core.export import parse
from pharma_browser.core.period_store import PeriodDataStore
from pharma_browser.core.records import RecordSet
from pharma_browser.core.table_profile import COMPANY_TABLE, COUNTRY_TABLE, DRUG_TABLE
from pharma_browser.core.table_session import TableSession
from pharma_browser.services.export_service import ExportService


def _fetcher(request):
    rows = [
        {
            "drugName": f"Drug {i}", "companyName": request.company or "Merck",
            "categoryName": "Oncology", "countryName": "Japan", "rank": i + 1,
            "estimatedSales": 10.0, "minSales": 5.0, "maxSales": 15.0,
        }
        for i in range(30)
    ]
    return RecordSet.from_wire(request.period, rows, company=request.company, country=request.country)


def test_drug_table_export():
    session = TableSession(PeriodDataStore(_fetcher), DRUG_TABLE)
    session.select_period("2024Q1")
    session.set_search("drug 2")

    payload = ExportService().export(session)

    assert payload.filename == "drug_estimation_2024Q1.csv"
    assert payload.mime_type == "text/csv"
    assert list(parse(payload.content)["drug_name"]) == ["Drug 2"] + [f"Drug {i}" for i in range(20, 30)]


def test_company_export_filename_is_sanitised():
    session = TableSession(PeriodDataStore(_fetcher), COMPANY_TABLE)
    session.select_period("2024Q1", "Johnson & Johnson")

    payload = ExportService().export(session)

    assert payload.filename == "Johnson_Johnson_2024Q1_drug_sales.csv"
    assert len(parse(payload.content)) == 30


def test_export_before_any_load_is_header_only():
    session = TableSession(PeriodDataStore(_fetcher), DRUG_TABLE)
    payload = ExportService().export(session)
    assert payload.filename == "drug_estimation_no-period.csv"
    assert payload.content.count("\n") == 1


def test_country_export_filename():
    session = TableSession(PeriodDataStore(_fetcher), COUNTRY_TABLE)
    session.select_period("2024Q1", "United States")

    payload = ExportService().export(session)

    assert payload.filename == "United_States_2024Q1_country_sales.csv"
