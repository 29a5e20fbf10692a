from __future__ import annotations

from typing import List, Sequence

import dash_bootstrap_components as dbc
from dash import dcc, html

from rk_explorer.core.view_model import TableauRow
from rk_explorer.ui.helpers import bool_mark, format_order
from rk_explorer.ui.ids import IDs, tableau_open_id

_FONT_FAMILY = 'system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif'

HEADER_STYLE = {
    "fontFamily": _FONT_FAMILY,
    "fontSize": "12px",
    "fontWeight": "600",
    "backgroundColor": "#f3f4f6",
    "borderBottom": "1px solid #e5e7eb",
    "color": "#111827",
    "padding": "8px 12px",
    "whiteSpace": "nowrap",
}

CELL_STYLE = {
    "fontFamily": _FONT_FAMILY,
    "fontSize": "12px",
    "padding": "6px 12px",
    "borderBottom": "1px solid #e5e7eb",
    "color": "#374151",
    "verticalAlign": "middle",
    "whiteSpace": "nowrap",
}

COLUMNS: List[str] = [
    "Name", "Stages", "Order", "b1 order", "b2 order",
    "Explicit", "Embedded", "Built-in", "",
]


def build_grid_panel() -> dbc.Card:
    """
    Tableau grid:
    - summary line (populated by callback)
    - CSV download of the visible rows
    - the table itself (populated by callback in grid-table)
    """
    return dbc.Card(
        [
            dbc.CardHeader("Butcher tableaus"),
            dbc.CardBody(
                [
                    dbc.Row(
                        [
                            dbc.Col(
                                html.Div(id=IDs.Control.GRID_SUMMARY, className="text-muted small"),
                                md=8,
                                className="d-flex align-items-center",
                            ),
                            dbc.Col(
                                html.Div(
                                    [
                                        dbc.Button(
                                            "Download CSV",
                                            id=IDs.Control.DOWNLOAD_CSV_BTN,
                                            color="primary",
                                            size="sm",
                                        ),
                                        dcc.Download(id=IDs.Control.DOWNLOAD_CSV),
                                    ],
                                    className="d-flex justify-content-end",
                                ),
                                md=4,
                            ),
                        ],
                        className="mb-3",
                    ),
                    html.Div(id=IDs.Control.PANEL_ALERT),
                    dcc.Loading(
                        html.Div(
                            id=IDs.Control.GRID_TABLE,
                            style={"overflowX": "auto"},
                        ),
                        type="dot",
                    ),
                ]
            ),
        ],
        className="h-100 shadow-sm",
    )


def build_empty_grid_message(loading: bool) -> html.Div:
    if loading:
        return html.Div("Loading tableaus…", className="text-muted mt-2")
    return html.Div(
        [
            html.Div("No tableaus match the current filters.", className="fw-semibold"),
            html.Div("Set one or more filters back to 'Any'.", className="text-muted small mt-1"),
        ],
        className="mt-2",
    )


def build_tableau_table(rows: Sequence[TableauRow]) -> dbc.Table:
    """
    Styled dbc.Table for the grid. A plain table (rather than a DataTable)
    keeps room for the per-row "Details" button.
    """
    thead = html.Thead(html.Tr([html.Th(col, style=HEADER_STYLE) for col in COLUMNS]))

    body = []
    for row in rows:
        body.append(
            html.Tr(
                [
                    html.Td(row.name, style={**CELL_STYLE, "fontWeight": "600"}),
                    html.Td(row.steps, style=CELL_STYLE),
                    html.Td(row.order, style=CELL_STYLE),
                    html.Td(format_order(row.b1_order), style=CELL_STYLE),
                    html.Td(format_order(row.b2_order), style=CELL_STYLE),
                    html.Td(bool_mark(row.is_explicit), style=CELL_STYLE),
                    html.Td(bool_mark(row.is_embedded), style=CELL_STYLE),
                    html.Td(bool_mark(row.is_built_in), style=CELL_STYLE),
                    html.Td(
                        dbc.Button(
                            "Details",
                            id=tableau_open_id(row.id),
                            color="primary",
                            outline=True,
                            size="sm",
                            style={"fontSize": "11px", "padding": "2px 8px", "lineHeight": "1.2"},
                        ),
                        style=CELL_STYLE,
                    ),
                ]
            )
        )

    return dbc.Table(
        [thead, html.Tbody(body)],
        bordered=False,
        hover=True,
        responsive=True,
        className="mb-0",
        style={"border": "1px solid #e5e7eb", "borderRadius": "4px"},
    )
