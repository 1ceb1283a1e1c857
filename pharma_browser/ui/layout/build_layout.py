from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from pharma_browser.core.table_profile import COMPANY_TABLE, COUNTRY_TABLE, DRUG_TABLE
from pharma_browser.ui.ids import IDs
from pharma_browser.ui.layout.build_navbar import build_navbar
from pharma_browser.ui.layout.build_table_panel import build_table_panel

if TYPE_CHECKING:
    from pharma_browser.ui.config import AppConfig


def build_layout(ctx: AppConfig) -> dbc.Container:
    """
    Called by Dash on every page load, so each browser tab gets a fresh
    session id and therefore its own server-side table sessions.
    """
    cfg = ctx.global_config
    navbar = build_navbar(ctx.periods, cfg, ctx.default_period)

    drug_panel = build_table_panel(DRUG_TABLE, cfg.page_sizes, cfg.default_page_size)
    company_panel = build_table_panel(
        COMPANY_TABLE, cfg.page_sizes, cfg.default_page_size, scope_values=ctx.companies
    )
    country_panel = build_table_panel(
        COUNTRY_TABLE, cfg.page_sizes, cfg.default_page_size, scope_values=ctx.countries
    )

    return dbc.Container(
        fluid=True,
        children=[
            navbar,

            dcc.Store(id=IDs.Store.SESSION_ID, storage_type="memory", data=uuid.uuid4().hex),

            dcc.Tabs(
                id=IDs.Control.PAGE_TABS,
                value=DRUG_TABLE.view_id,
                children=[
                    dcc.Tab(label="Drug Table", value=DRUG_TABLE.view_id, children=[drug_panel]),
                    dcc.Tab(label="Company Estimation", value=COMPANY_TABLE.view_id, children=[company_panel]),
                    dcc.Tab(label="Country Overview", value=COUNTRY_TABLE.view_id, children=[country_panel]),
                ],
                className="mt-2",
            ),
        ],
    )
