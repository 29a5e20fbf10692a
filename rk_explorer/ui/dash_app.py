from __future__ import annotations

import atexit
import functools
import logging
import os
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from rk_explorer.config.loader import load_global_config
from rk_explorer.config.model import GlobalConfig
from rk_explorer.core.exceptions import DuplicateTableauId
from rk_explorer.core.view_registry import ViewRegistry
from rk_explorer.registry.registry import ButcherTableauRegistry
from rk_explorer.services.panel_service import PanelHost, TableauPanelService
from rk_explorer.services.tableau_service import RungeKuttaService
from rk_explorer.store.actions import InitializeAll
from rk_explorer.store.wiring import build_store
from rk_explorer.ui.callbacks.callbacks_filters import register_filter_callbacks
from rk_explorer.ui.callbacks.callbacks_panel import register_panel_callbacks
from rk_explorer.ui.callbacks.callbacks_store import register_store_callbacks
from rk_explorer.ui.config import AppConfig
from rk_explorer.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)

CONFIG_ENV = "RK_EXPLORER_CONFIG"


def _build_view_registry() -> ViewRegistry:
    from rk_explorer.views import CoefficientsView, StabilityRegionView

    registry = ViewRegistry()
    registry.register(StabilityRegionView)
    registry.register(CoefficientsView)
    return registry


def _build_tableau_registry(global_config: GlobalConfig) -> ButcherTableauRegistry:
    registry = ButcherTableauRegistry()
    for definition in global_config.tableaus:
        try:
            registry.register(definition, built_in=False)
        except DuplicateTableauId:
            logger.warning(
                "User tableau clashes with an existing id, skipped",
                extra={"tableau_id": definition.id},
            )
    return registry


def build_app_context(global_config: GlobalConfig) -> AppConfig:
    """
    Wire the session: registry -> store -> change subscription -> panels.
    Dispatches the top-level InitializeAll, so the returned store is loaded.
    """
    registry = _build_tableau_registry(global_config)
    store = build_store(registry, action_log_limit=global_config.action_log_limit)
    tableau_service = RungeKuttaService(registry, store.dispatch)
    panel_host = PanelHost()

    ctx = AppConfig(
        global_config=global_config,
        registry=registry,
        store=store,
        tableau_service=tableau_service,
        panel_host=panel_host,
        panel_service=TableauPanelService(store, panel_host, width=global_config.panel_width),
        view_registry=_build_view_registry(),
    )
    ctx.validate()

    store.dispatch(InitializeAll())
    return ctx


def create_dash_app(config_root: Path | str | None = None) -> Dash:
    # 1) Load Config
    if config_root is None:
        config_root = os.getenv(CONFIG_ENV, "config")
    global_config = load_global_config(Path(config_root))

    # 2) Session services
    ctx = build_app_context(global_config)
    atexit.register(ctx.close)

    # 3) Dash app
    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        suppress_callback_exceptions=True,
    )
    app.title = global_config.ui_title

    # A function layout so every page load starts from the current store version
    app.layout = functools.partial(build_layout, ctx)

    # Register callbacks
    register_store_callbacks(app, ctx)
    register_filter_callbacks(app, ctx)
    register_panel_callbacks(app, ctx)

    return app
