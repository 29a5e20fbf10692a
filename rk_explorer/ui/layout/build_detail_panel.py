from __future__ import annotations

from typing import Optional

import dash_bootstrap_components as dbc
from dash import dcc, html

from rk_explorer.core.tableau import TableauRegistration
from rk_explorer.core.view_registry import ViewRegistry
from rk_explorer.ui.helpers import bool_mark, format_order, view_options
from rk_explorer.ui.ids import IDs


def build_detail_panel(view_registry: ViewRegistry, default_view: str, width: Optional[str]) -> dbc.Offcanvas:
    """
    Side panel anchored to the trailing edge. Title and body are filled in
    when a tableau is opened; the plot area stays mounted so the view
    selector keeps its value between tableaus.
    """
    options = view_options(view_registry)
    values = [o["value"] for o in options]
    value = default_view if default_view in values else (values[0] if values else None)

    style = {"width": width} if width else None

    return dbc.Offcanvas(
        id=IDs.Control.DETAIL_PANEL,
        title="",
        placement="end",
        is_open=False,
        scrollable=True,
        style=style,
        children=[
            html.Div(id=IDs.Control.DETAIL_BODY),
            html.Hr(),
            html.Label("Plot", className="form-label"),
            dcc.Dropdown(
                id=IDs.Control.PANEL_VIEW_SELECT,
                options=options,
                value=value,
                clearable=False,
                className="mb-2",
            ),
            dcc.Loading(dcc.Graph(id=IDs.Control.PANEL_GRAPH), type="circle"),
        ],
    )


def build_detail_body(registration: TableauRegistration) -> html.Div:
    """Read-only description of one tableau: metadata list plus the tableau in LaTeX."""
    facts = [
        ("Identifier", registration.id),
        ("Stages", registration.steps),
        ("Order", registration.order),
        ("Explicit", bool_mark(registration.is_explicit)),
        ("Embedded", bool_mark(registration.is_embedded)),
        ("Built-in", bool_mark(registration.is_built_in)),
    ]
    if registration.is_embedded:
        facts += [
            ("b1 order", format_order(registration.b1_order)),
            ("b2 order", format_order(registration.b2_order)),
        ]

    children = []
    if registration.description:
        children.append(html.P(registration.description, className="text-muted"))

    children.append(
        html.Dl(
            [
                item
                for label, value in facts
                for item in (html.Dt(label, className="col-5"), html.Dd(value, className="col-7 mb-1"))
            ],
            className="row small",
        )
    )

    if registration.tableau is not None:
        children.append(
            dcc.Markdown(f"$$\n{registration.tableau.to_latex()}\n$$", mathjax=True)
        )

    return html.Div(children)
