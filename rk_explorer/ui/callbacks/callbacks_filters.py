from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State, dcc

from rk_explorer.core.filter_state import SortKey, TableauFilterState, TriState
from rk_explorer.core.view_model import build_view, rows_to_frame
from rk_explorer.ui.callbacks.callbacks_utils import safe_filter_state
from rk_explorer.ui.ids import IDs
from rk_explorer.ui.layout.build_filter_panel import OPT_DESCENDING
from rk_explorer.ui.layout.build_tableau_grid import build_empty_grid_message, build_tableau_table

if TYPE_CHECKING:
    from rk_explorer.ui.config import AppConfig

logger = logging.getLogger(__name__)


def build_filter_state(explicit, embedded, built_in, sort_key, sort_options) -> TableauFilterState:
    """Pure helper: raw widget values -> TableauFilterState."""
    try:
        key = SortKey(sort_key) if sort_key else SortKey.NAME
    except ValueError:
        key = SortKey.NAME
    return TableauFilterState(
        explicit=TriState.parse(explicit),
        embedded=TriState.parse(embedded),
        built_in=TriState.parse(built_in),
        sort_key=key,
        descending=OPT_DESCENDING in set(sort_options or []),
    )


def register_filter_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Widgets -> filter-state store
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.FILTER_STATE, "data"),
        Input(IDs.Control.EXPLICIT_FILTER, "value"),
        Input(IDs.Control.EMBEDDED_FILTER, "value"),
        Input(IDs.Control.BUILTIN_FILTER, "value"),
        Input(IDs.Control.SORT_SELECT, "value"),
        Input(IDs.Control.SORT_OPTIONS, "value"),
    )
    def sync_filter_state(explicit, embedded, built_in, sort_key, sort_options):
        try:
            state = build_filter_state(explicit, embedded, built_in, sort_key, sort_options)
        except ValueError:
            logger.exception("Invalid filter widget values")
            raise dash.exceptions.PreventUpdate
        return state.to_dict()

    # ---------------------------------------------------------
    # Store snapshot + filter-state -> grid
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.GRID_TABLE, "children"),
        Output(IDs.Control.GRID_SUMMARY, "children"),
        Input(IDs.Store.STORE_VERSION, "data"),
        Input(IDs.Store.FILTER_STATE, "data"),
    )
    def update_grid(_version, fs_data):
        snapshot = ctx.store.state
        filters = safe_filter_state(fs_data)
        rows = build_view(snapshot, filters)

        total = len(snapshot.tableaus or ()) if not snapshot.is_loading else 0
        summary = f"Showing {len(rows)} of {total} tableaus."

        if not rows:
            return build_empty_grid_message(loading=snapshot.is_loading), summary
        return build_tableau_table(rows), summary

    # ---------------------------------------------------------
    # CSV download of the visible rows
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_CSV, "data"),
        Input(IDs.Control.DOWNLOAD_CSV_BTN, "n_clicks"),
        State(IDs.Store.FILTER_STATE, "data"),
        prevent_initial_call=True,
    )
    def download_csv(n_clicks, fs_data):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate
        rows = build_view(ctx.store.state, safe_filter_state(fs_data))
        if not rows:
            raise dash.exceptions.PreventUpdate
        frame = rows_to_frame(rows)
        return dcc.send_data_frame(frame.to_csv, "butcher_tableaus.csv", index=False)
