from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc, html

from rk_explorer.core.filter_state import TableauFilterState
from rk_explorer.ui.ids import IDs
from rk_explorer.ui.layout.build_detail_panel import build_detail_panel
from rk_explorer.ui.layout.build_filter_panel import build_filter_panel
from rk_explorer.ui.layout.build_navbar import build_navbar
from rk_explorer.ui.layout.build_tableau_grid import build_grid_panel

if TYPE_CHECKING:
    from rk_explorer.ui.config import AppConfig


def build_layout(ctx: AppConfig):
    global_config = ctx.global_config

    return dbc.Container(
        fluid=True,
        className="rk-root",
        children=[
            build_navbar(global_config),

            # App-level stores
            dcc.Store(id=IDs.Store.FILTER_STATE, storage_type="session", data=TableauFilterState().to_dict()),
            dcc.Store(id=IDs.Store.STORE_VERSION, data=ctx.store.version),
            dcc.Store(id=IDs.Store.ACTIVE_PANEL, data=None),
            dcc.Interval(id=IDs.Control.STORE_POLL, interval=global_config.poll_interval_ms),

            html.Div(id=IDs.Control.STATUS_BAR, className="text-muted small mt-2"),

            dbc.Row(
                [
                    dbc.Col(build_filter_panel(), md=3, className="mt-3"),
                    dbc.Col(build_grid_panel(), md=9, className="mt-3"),
                ],
                className="gx-3",
            ),

            build_detail_panel(
                ctx.view_registry,
                default_view=global_config.default_view,
                width=global_config.panel_width,
            ),
        ],
    )
