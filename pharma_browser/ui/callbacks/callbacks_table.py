from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import dash
from dash import Input, Output, State, dcc

from pharma_browser.core.domains import domain_options
from pharma_browser.core.table_profile import TableProfile
from pharma_browser.core.table_session import TableSession
from pharma_browser.ui.helpers import (
    sort_by_from_state,
    sort_state_from_sort_by,
    summary_children,
    window_rows,
)
from pharma_browser.ui.ids import IDs, TableIDs

if TYPE_CHECKING:
    from pharma_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


@dataclass
class TableInputs:
    """Values of every input of the table callback, unpacked by name."""
    period: Optional[str]
    scope: Optional[str]
    filter_values: Dict[str, Optional[str]]
    search: Optional[str]
    sort_by: Optional[List[dict]]
    page_size: Optional[int]


def apply_trigger(
    session: TableSession,
    ids: TableIDs,
    trigger_id: Optional[str],
    inputs: TableInputs,
) -> None:
    """
    Push the one user action that fired the callback into the session.

    The period (and company or country) selection is applied first on every
    call; it is a no-op unless it actually changed (and then it resets everything else,
    so the triggering action is skipped).
    """
    profile = session.profile
    if inputs.period and (inputs.scope or not profile.is_scoped):
        if session.select_period(inputs.period, inputs.scope):
            return

    if trigger_id == ids.refresh_btn:
        session.reload()
        return

    for field_name in profile.filter_fields:
        if trigger_id == ids.filter_select(field_name):
            session.set_filter(field_name, inputs.filter_values.get(field_name))
            return

    if trigger_id == ids.search:
        session.set_search(inputs.search)
    elif trigger_id == ids.table:
        session.set_sort(sort_state_from_sort_by(inputs.sort_by))
    elif trigger_id == ids.first_btn:
        session.first_page()
    elif trigger_id == ids.prev_btn:
        session.previous_page()
    elif trigger_id == ids.next_btn:
        session.next_page()
    elif trigger_id == ids.last_btn:
        session.last_page()
    elif trigger_id == ids.page_size and inputs.page_size:
        session.set_page_size(inputs.page_size)


def render_outputs(session: TableSession) -> List[Any]:
    """Session state -> callback outputs, in the order the callback declares them."""
    profile = session.profile
    window = session.window

    error = session.error_message
    n_raw = len(session.records)
    row_count = f"{window.total_rows} of {n_raw} records"

    outputs: List[Any] = [
        window_rows(window, profile),
        sort_by_from_state(session.sort_state),
        window.label,
        not window.can_prev,
        not window.can_prev,
        not window.can_next,
        not window.can_next,
        row_count,
        summary_children(profile, session.filtered),
        error or "",
        error is not None,
    ]
    for field_name in profile.filter_fields:
        outputs.append(domain_options(session.domains.get(field_name, [])))
    for field_name in profile.filter_fields:
        outputs.append(session.filter_state.selection(field_name))
    outputs.append(session.filter_state.search)
    return outputs


def register_table_callbacks(app: dash.Dash, ctx: AppConfig, profile: TableProfile) -> None:
    ids = TableIDs(profile.view_id)

    outputs = [
        Output(ids.table, "data"),
        Output(ids.table, "sort_by"),
        Output(ids.page_label, "children"),
        Output(ids.first_btn, "disabled"),
        Output(ids.prev_btn, "disabled"),
        Output(ids.next_btn, "disabled"),
        Output(ids.last_btn, "disabled"),
        Output(ids.row_count, "children"),
        Output(ids.summary, "children"),
        Output(ids.alert, "children"),
        Output(ids.alert, "is_open"),
    ]
    outputs += [Output(ids.filter_select(f), "options") for f in profile.filter_fields]
    outputs += [Output(ids.filter_select(f), "value") for f in profile.filter_fields]
    outputs.append(Output(ids.search, "value"))

    inputs = [Input(IDs.Control.PERIOD_SELECT, "value")]
    if profile.is_scoped:
        inputs.append(Input(IDs.Control.SCOPE_SELECT[profile.scope_field], "value"))
    inputs += [Input(ids.filter_select(f), "value") for f in profile.filter_fields]
    inputs += [
        Input(ids.search, "value"),
        Input(ids.table, "sort_by"),
        Input(ids.first_btn, "n_clicks"),
        Input(ids.prev_btn, "n_clicks"),
        Input(ids.next_btn, "n_clicks"),
        Input(ids.last_btn, "n_clicks"),
        Input(ids.page_size, "value"),
        Input(ids.refresh_btn, "n_clicks"),
    ]

    n_filters = len(profile.filter_fields)

    # ---------------------------------------------------------
    # Table: any control change -> session -> rendered page
    # ---------------------------------------------------------
    @app.callback(
        *outputs,
        *inputs,
        State(IDs.Store.SESSION_ID, "data"),
    )
    def update_table(*args):
        values = list(args)
        period = values.pop(0)
        scope = values.pop(0) if profile.is_scoped else None
        filter_values = dict(zip(profile.filter_fields, values[:n_filters]))
        values = values[n_filters:]
        search, sort_by = values[0], values[1]
        page_size = values[6]
        session_id = values[8]

        if not session_id:
            return [dash.no_update] * len(outputs)

        table_inputs = TableInputs(
            period=period,
            scope=scope,
            filter_values=filter_values,
            search=search,
            sort_by=sort_by,
            page_size=page_size,
        )

        try:
            session = ctx.sessions.get(session_id, profile.view_id)
            apply_trigger(session, ids, dash.ctx.triggered_id, table_inputs)
            return render_outputs(session)
        except Exception:
            logger.exception(
                "Error in update_table",
                extra={"view_id": profile.view_id, "period": period, "trigger": dash.ctx.triggered_id},
            )
            result = [dash.no_update] * len(outputs)
            # alert children / is_open
            result[9] = "Something went wrong while updating this table. Check the logs for details."
            result[10] = True
            return result

    # ---------------------------------------------------------
    # Export: filtered rows (all pages) -> CSV download
    # ---------------------------------------------------------
    @app.callback(
        Output(ids.download, "data"),
        Input(ids.export_btn, "n_clicks"),
        State(IDs.Store.SESSION_ID, "data"),
        prevent_initial_call=True,
    )
    def export_table(n_clicks, session_id):
        if not n_clicks or not session_id:
            return dash.no_update
        session = ctx.sessions.get(session_id, profile.view_id)
        payload = ctx.export_service.export(session)
        return dcc.send_string(payload.content, payload.filename, type=payload.mime_type)
