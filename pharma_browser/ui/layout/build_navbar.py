from __future__ import annotations

from typing import List, Optional

import dash_bootstrap_components as dbc
from dash import dcc, html

from pharma_browser.config.model import GlobalConfig
from pharma_browser.ui.ids import IDs


def build_navbar(
    periods: List[str],
    global_config: GlobalConfig,
    default_period: Optional[str],
) -> dbc.Navbar:
    title = global_config.ui_title
    subtitle = "Quarterly sales estimates explorer"

    period_options = [{"label": p, "value": p} for p in periods]

    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                # Left: title
                html.Div(
                    [
                        html.H2(title, className="mb-0"),
                        html.Small(subtitle, className="text-muted"),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),

                html.Div(
                    [
                        html.Div("Quarter", className="navbar-period-title fw-semibold"),
                        dcc.Dropdown(
                            id=IDs.Control.PERIOD_SELECT,
                            options=period_options,
                            value=default_period,
                            clearable=False,
                            placeholder="Select quarter",
                            className="mt-1",
                        ),
                    ],
                    className="ms-auto",
                    style={
                        "minWidth": "220px",
                        "maxWidth": "300px",
                        "marginRight": "24px",
                    },
                ),
            ],
        ),
        dark=False,
        className="shadow-sm",
    )
