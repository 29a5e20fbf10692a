from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from rk_explorer.core.filter_state import TableauFilterState
from rk_explorer.ui.helpers import sort_options, tri_state_options
from rk_explorer.ui.ids import IDs

OPT_DESCENDING = "descending"


def _tri_state_block(label: str, component_id: str, require_true: str, require_false: str, value: int) -> html.Div:
    return html.Div(
        [
            html.Label(label, className="form-label"),
            dbc.RadioItems(
                id=component_id,
                options=tri_state_options(require_true, require_false),
                value=value,
                inline=True,
                className="mb-3",
            ),
        ]
    )


def build_filter_panel() -> dbc.Card:
    defaults = TableauFilterState()

    return dbc.Card(
        [
            dbc.CardHeader("Filters", className="fw-semibold"),
            dbc.CardBody(
                [
                    _tri_state_block(
                        "Method type", IDs.Control.EXPLICIT_FILTER,
                        "Explicit", "Implicit", int(defaults.explicit),
                    ),
                    _tri_state_block(
                        "Error estimator", IDs.Control.EMBEDDED_FILTER,
                        "Embedded", "Not embedded", int(defaults.embedded),
                    ),
                    _tri_state_block(
                        "Provenance", IDs.Control.BUILTIN_FILTER,
                        "Built-in", "User-defined", int(defaults.built_in),
                    ),
                    html.Hr(),
                    html.Label("Sort by", className="form-label"),
                    dcc.Dropdown(
                        id=IDs.Control.SORT_SELECT,
                        options=sort_options(),
                        value=defaults.sort_key.value,
                        clearable=False,
                        className="mb-2",
                    ),
                    dbc.Checklist(
                        id=IDs.Control.SORT_OPTIONS,
                        options=[{"label": "Descending", "value": OPT_DESCENDING}],
                        value=[],
                        switch=True,
                    ),
                ]
            ),
        ],
        className="rk-sidebar",
    )
