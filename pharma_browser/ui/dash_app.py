from __future__ import annotations

import logging
from functools import partial
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from pharma_browser.config.loader import load_global_config
from pharma_browser.config.model import SOURCE_LOCAL, GlobalConfig
from pharma_browser.core.exceptions import LoadError
from pharma_browser.core.table_profile import TABLE_PROFILES
from pharma_browser.services.export_service import ExportService
from pharma_browser.services.record_source import (
    ApiRecordSource,
    LocalRecordSource,
    RecordSource,
)
from pharma_browser.services.session_service import TableSessionManager
from pharma_browser.ui.callbacks.callbacks_table import register_table_callbacks
from pharma_browser.ui.config import AppConfig
from pharma_browser.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)


def build_record_source(global_config: GlobalConfig) -> RecordSource:
    if global_config.source == SOURCE_LOCAL:
        return LocalRecordSource(global_config.data_root)
    return ApiRecordSource(
        global_config.api_base_url,
        timeout=global_config.request_timeout,
    )


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Record source + selector domains
    source = build_record_source(global_config)

    # The app still starts when the backend is down; tables then show the
    # load error instead of data.
    try:
        periods = source.list_periods()
    except LoadError as e:
        logger.error("Could not list periods", extra={"error": str(e)})
        periods = []
    try:
        companies = source.list_companies()
    except LoadError as e:
        logger.error("Could not list companies", extra={"error": str(e)})
        companies = []
    try:
        countries = source.list_countries()
    except LoadError as e:
        logger.error("Could not list countries", extra={"error": str(e)})
        countries = []

    logger.info(
        "Record source ready",
        extra={
            "source": global_config.source,
            "n_periods": len(periods),
            "n_companies": len(companies),
            "n_countries": len(countries),
        },
    )

    # 3) Session + export services
    sessions = TableSessionManager(
        source,
        TABLE_PROFILES,
        page_size=global_config.default_page_size,
        page_sizes=global_config.page_sizes,
    )

    # 4) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        source=source,
        profiles=dict(TABLE_PROFILES),
        periods=periods,
        companies=companies,
        countries=countries,
        default_period=periods[0] if periods else None,
        sessions=sessions,
        export_service=ExportService(),
    )
    ctx.validate()

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
    )
    app.title = global_config.ui_title

    # Layout is a function so each page load gets its own session id
    app.layout = partial(build_layout, ctx)

    # Register callbacks
    for profile in ctx.profiles.values():
        register_table_callbacks(app, ctx, profile)

    return app
