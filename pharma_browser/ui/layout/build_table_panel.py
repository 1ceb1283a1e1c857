from __future__ import annotations

from typing import Optional, Sequence

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html

from pharma_browser.core.table_profile import TableProfile
from pharma_browser.ui.helpers import filter_label, table_columns
from pharma_browser.ui.ids import IDs, TableIDs
from pharma_browser.ui.layout.build_filter_panel import build_filter_panel


def _pager(ids: TableIDs, page_sizes: Sequence[int], page_size: int) -> html.Div:
    def nav_button(label: str, btn_id: str) -> dbc.Button:
        return dbc.Button(label, id=btn_id, color="secondary", size="sm", disabled=True)

    return html.Div(
        [
            nav_button("First", ids.first_btn),
            nav_button("Previous", ids.prev_btn),
            html.Span(id=ids.page_label, className="fw-semibold"),
            nav_button("Next", ids.next_btn),
            nav_button("Last", ids.last_btn),
            dcc.Dropdown(
                id=ids.page_size,
                options=[{"label": f"Show {s}", "value": s} for s in page_sizes],
                value=page_size,
                clearable=False,
                style={"width": "120px"},
            ),
        ],
        className="d-flex justify-content-between align-items-center mt-3",
    )


def build_table_panel(
    profile: TableProfile,
    page_sizes: Sequence[int],
    page_size: int,
    scope_values: Optional[Sequence[str]] = None,
) -> dbc.Container:
    """
    Full table page for one profile:
    - company or country selector (scoped profiles only)
    - filters + search
    - summary line, export/refresh actions
    - the table itself and its pager
    """
    ids = TableIDs(profile.view_id)

    header = [html.H3(profile.title, className="text-center text-primary mb-4")]

    if profile.is_scoped:
        scope_values = list(scope_values or [])
        header.append(
            dbc.Row(
                dbc.Col(
                    [
                        html.Label(f"Select {filter_label(profile.scope_field)}", className="form-label fw-semibold"),
                        dcc.Dropdown(
                            id=IDs.Control.SCOPE_SELECT[profile.scope_field],
                            options=[{"label": v, "value": v} for v in scope_values],
                            value=scope_values[0] if scope_values else None,
                            clearable=False,
                        ),
                    ],
                    md=6,
                ),
                className="mb-3",
            )
        )

    actions = html.Div(
        [
            html.Span(id=ids.row_count, className="text-muted small me-auto"),
            dbc.Button("Refresh", id=ids.refresh_btn, color="secondary", outline=True, size="sm", className="me-2"),
            dbc.Button("Export as CSV", id=ids.export_btn, color="success", outline=True, size="sm"),
            dcc.Download(id=ids.download),
        ],
        className="d-flex align-items-center mb-2",
    )

    table = dash_table.DataTable(
        id=ids.table,
        columns=table_columns(profile),
        data=[],
        sort_action="custom",
        sort_mode="single",
        sort_by=[],
        page_action="none",
        style_table={"overflowX": "auto"},
        style_cell={"textAlign": "left", "padding": "6px 8px", "fontSize": "13px"},
        style_header={"fontWeight": "600", "backgroundColor": "#f3f4f6"},
    )

    return dbc.Container(
        header + [
            dbc.Alert(id=ids.alert, color="danger", is_open=False, className="text-center"),
            build_filter_panel(profile),
            dbc.Card(dbc.CardBody(id=ids.summary), className="shadow-sm mb-3"),
            actions,
            dcc.Loading(table, type="default"),
            _pager(ids, page_sizes, page_size),
        ],
        className="mt-4",
    )
