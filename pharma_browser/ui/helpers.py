from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd
from dash import html
from dash.dash_table.Format import Format, Group, Scheme

from pharma_browser.core.paging import PageWindow, SortState
from pharma_browser.core.records import NUMERIC_FIELDS
from pharma_browser.core.summaries import (
    CompanySummary,
    CountrySummary,
    PeriodSummary,
    company_summary,
    country_summary,
    period_summary,
)
from pharma_browser.core.table_profile import TableProfile

FILTER_LABELS = {
    "country_name": ("Country", "All Countries"),
    "category_name": ("Category", "All Categories"),
    "company_name": ("Company", "All Companies"),
}


def filter_label(field_name: str) -> str:
    return FILTER_LABELS.get(field_name, (field_name, ""))[0]


def filter_placeholder(field_name: str) -> str:
    return FILTER_LABELS.get(field_name, ("", "All"))[1]


def table_columns(profile: TableProfile) -> List[dict]:
    columns = []
    for field_name, header in profile.columns:
        col: Dict[str, Any] = {"name": header, "id": field_name}
        if field_name in NUMERIC_FIELDS:
            col["type"] = "numeric"
            if field_name != "rank":
                col["format"] = Format(precision=2, scheme=Scheme.fixed, group=Group.yes)
        columns.append(col)
    return columns


def sort_state_from_sort_by(sort_by: Optional[List[dict]]) -> SortState:
    """DataTable `sort_by` (single-column mode) -> SortState."""
    if not sort_by:
        return SortState()
    first = sort_by[0]
    column = first.get("column_id")
    if not column or first.get("direction") not in ("asc", "desc"):
        return SortState()
    return SortState(field=column, descending=first["direction"] == "desc")


def sort_by_from_state(sort: SortState) -> List[dict]:
    if not sort.is_active:
        return []
    return [{"column_id": sort.field, "direction": "desc" if sort.descending else "asc"}]


def window_rows(window: PageWindow, profile: TableProfile) -> List[dict]:
    return window.rows.reindex(columns=list(profile.column_fields)).to_dict("records")


def format_money(value: float) -> str:
    return f"${value:,.2f}"


def period_summary_children(summary: PeriodSummary) -> list:
    return [
        html.Strong("Total Sales: "), format_money(summary.total_sales),
        html.Span(" · "),
        f"{summary.n_drugs} drugs · {summary.n_companies} companies · {summary.n_countries} countries",
    ]


def _ranked(pairs) -> str:
    if not pairs:
        return "n/a"
    return ", ".join(f"{name} ({format_money(sales)})" for name, sales in pairs)


def company_summary_children(summary: CompanySummary) -> list:
    return [
        html.H5(["Total Sales: ", html.Span(format_money(summary.total_sales), className="text-success")]),
        html.Div([html.Strong("Top countries: "), _ranked(summary.top_countries)], className="small"),
        html.Div([html.Strong("Top categories: "), _ranked(summary.top_categories)], className="small"),
    ]


def country_summary_children(summary: CountrySummary) -> list:
    return [
        html.H5(["Total Country Sales: ", html.Span(format_money(summary.total_sales), className="text-success")]),
        html.Div([html.Strong("Top categories: "), _ranked(summary.top_categories)], className="small"),
        html.Div([html.Strong("Top companies: "), _ranked(summary.top_companies)], className="small"),
    ]


def summary_children(profile: TableProfile, frame: pd.DataFrame) -> list:
    """Summary card content for a table, computed from its filtered rows."""
    if profile.scope_field == "company_name":
        return company_summary_children(company_summary(frame))
    if profile.scope_field == "country_name":
        return country_summary_children(country_summary(frame))
    return period_summary_children(period_summary(frame))
