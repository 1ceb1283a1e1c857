from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from pharma_browser.core.table_profile import TableProfile
from pharma_browser.ui.helpers import filter_label, filter_placeholder
from pharma_browser.ui.ids import TableIDs


def build_filter_panel(profile: TableProfile) -> dbc.Row:
    """
    One dropdown per filterable field of the profile, plus the drug-name
    search box. Options are filled in by the table callback.
    """
    ids = TableIDs(profile.view_id)
    n_controls = len(profile.filter_fields) + 1
    width = max(3, 12 // n_controls)

    cols = [
        dbc.Col(
            [
                html.Label(f"Filter by {filter_label(f)}", className="form-label fw-semibold"),
                dcc.Dropdown(
                    id=ids.filter_select(f),
                    options=[],
                    value=None,
                    placeholder=filter_placeholder(f),
                    clearable=True,
                ),
            ],
            md=width,
        )
        for f in profile.filter_fields
    ]

    cols.append(
        dbc.Col(
            [
                html.Label("Search by Drug Name", className="form-label fw-semibold"),
                dcc.Input(
                    id=ids.search,
                    type="text",
                    value="",
                    placeholder="Enter drug name",
                    debounce=True,
                    className="form-control",
                ),
            ],
            md=width,
        )
    )

    return dbc.Row(cols, className="mb-3 g-3")
