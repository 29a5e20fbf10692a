from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from rk_explorer.config.model import GlobalConfig
from rk_explorer.ui.ids import IDs


def build_navbar(global_config: GlobalConfig) -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(global_config.ui_title, className="mb-0"),
                        html.Small(global_config.subtitle, className="text-muted"),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
                html.Div(
                    dbc.Button(
                        "Reload tableaus",
                        id=IDs.Control.RELOAD_BTN,
                        color="secondary",
                        outline=True,
                        size="sm",
                    ),
                    className="ms-auto",
                ),
            ],
        ),
        dark=False,
        className="shadow-sm rk-navbar",
    )
