from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import dash
import dash_bootstrap_components as dbc
import plotly.graph_objs as go
from dash import ALL, Input, Output, State, no_update

from rk_explorer.core.exceptions import AmbiguousTableauId, TableauNotFound
from rk_explorer.services.panel_service import PanelResult
from rk_explorer.ui.callbacks.callbacks_utils import triggered_index
from rk_explorer.ui.ids import IDs
from rk_explorer.ui.layout.build_detail_panel import build_detail_body

if TYPE_CHECKING:
    from rk_explorer.ui.config import AppConfig

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helper: Empty/Error Figures
# -----------------------------------------------------------------------------
def _message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
    return fig


def _error_figure(details: str) -> go.Figure:
    return _message_figure("Something went wrong while rendering this plot.", details)


def lookup_alert(exc: Exception) -> dbc.Alert:
    if isinstance(exc, AmbiguousTableauId):
        text = (
            f"More than one tableau is registered as '{exc.tableau_id}'. "
            "Reload the tableaus and try again."
        )
    else:
        text = (
            f"Tableau '{getattr(exc, 'tableau_id', '?')}' is not in the current list "
            "(it may be reloading)."
        )
    return dbc.Alert(text, color="warning", dismissable=True, className="small py-2")


def register_panel_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Open the detail panel for one row
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DETAIL_PANEL, "is_open"),
        Output(IDs.Control.DETAIL_PANEL, "title"),
        Output(IDs.Control.DETAIL_BODY, "children"),
        Output(IDs.Store.ACTIVE_PANEL, "data"),
        Output(IDs.Control.PANEL_ALERT, "children"),
        Input({"type": IDs.Pattern.TABLEAU_OPEN, "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def open_tableau_panel(_n_clicks_list):
        # Re-rendering the grid recreates the buttons; only real clicks count
        if not any(t.get("value") for t in dash.ctx.triggered):
            raise dash.exceptions.PreventUpdate

        tableau_id = triggered_index(dash.ctx.triggered_id)
        if tableau_id is None:
            raise dash.exceptions.PreventUpdate

        try:
            handle = ctx.panel_service.open_tableau_panel(tableau_id)
        except (TableauNotFound, AmbiguousTableauId) as exc:
            logger.warning("Tableau panel lookup failed", extra={"tableau_id": tableau_id, "error": str(exc)})
            return no_update, no_update, no_update, no_update, lookup_alert(exc)

        return True, handle.options.title, build_detail_body(handle.content), handle.panel_id, None

    # ---------------------------------------------------------
    # Panel dismissed -> resolve the handle
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.ACTIVE_PANEL, "data", allow_duplicate=True),
        Input(IDs.Control.DETAIL_PANEL, "is_open"),
        State(IDs.Store.ACTIVE_PANEL, "data"),
        prevent_initial_call=True,
    )
    def close_tableau_panel(is_open, active_panel_id):
        if is_open or not active_panel_id:
            raise dash.exceptions.PreventUpdate
        ctx.panel_host.close(active_panel_id, PanelResult(cancelled=True))
        return None

    # ---------------------------------------------------------
    # Plot for the open tableau
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.PANEL_GRAPH, "figure"),
        Input(IDs.Store.ACTIVE_PANEL, "data"),
        Input(IDs.Control.PANEL_VIEW_SELECT, "value"),
    )
    def update_panel_graph(active_panel_id, view_id):
        if not active_panel_id:
            return _message_figure("No tableau selected.")

        handle = ctx.panel_host.get(active_panel_id)
        if handle is None:
            return _message_figure("This panel has been closed.")

        if not view_id or view_id not in ctx.view_registry:
            return _message_figure("Choose a plot from the dropdown.")

        registration = handle.content
        try:
            view = ctx.view_registry.create(view_id, registration)
            return view.figure()
        except Exception:
            logger.exception(
                "Error rendering tableau plot",
                extra={"view_id": view_id, "tableau_id": registration.id},
            )
            return _error_figure(
                "The app hit an unexpected error. "
                "If this keeps happening, grab the logs and open an issue."
            )
