from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State, no_update

from rk_explorer.store.actions import InitializeAll
from rk_explorer.ui.helpers import status_text
from rk_explorer.ui.ids import IDs

if TYPE_CHECKING:
    from rk_explorer.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_store_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Poll the server-side store; bump the version store on change
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.STORE_VERSION, "data"),
        Input(IDs.Control.STORE_POLL, "n_intervals"),
        State(IDs.Store.STORE_VERSION, "data"),
    )
    def poll_store(_n_intervals, seen_version):
        version = ctx.store.version
        if version == seen_version:
            return no_update
        return version

    # ---------------------------------------------------------
    # Reload / retry: re-run the whole initialization cascade
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.STORE_VERSION, "data", allow_duplicate=True),
        Input(IDs.Control.RELOAD_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def reload_tableaus(n_clicks):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate
        logger.info("Reload requested from UI")
        ctx.store.dispatch(InitializeAll())
        return ctx.store.version

    # ---------------------------------------------------------
    # Status bar
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.STATUS_BAR, "children"),
        Input(IDs.Store.STORE_VERSION, "data"),
    )
    def update_status(_version):
        return status_text(ctx.store.state)
