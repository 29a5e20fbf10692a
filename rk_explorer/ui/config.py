from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from rk_explorer.config.model import GlobalConfig
from rk_explorer.core.view_registry import ViewRegistry
from rk_explorer.registry.registry import ButcherTableauRegistry
from rk_explorer.services.panel_service import PanelHost, TableauPanelService
from rk_explorer.services.tableau_service import RungeKuttaService
from rk_explorer.store.state import ButcherTableausState
from rk_explorer.store.store import Store

logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    """
    Holds the session-wide collaborators of the Dash app. It is passed into
    layout + callback registration functions instead of using module-level
    globals.
    """
    global_config: GlobalConfig
    registry: Optional[ButcherTableauRegistry] = None
    store: Optional[Store[ButcherTableausState]] = None
    tableau_service: Optional[RungeKuttaService] = None
    panel_host: Optional[PanelHost] = None
    panel_service: Optional[TableauPanelService] = None
    view_registry: Optional[ViewRegistry] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        for name in ("registry", "store", "tableau_service", "panel_host", "panel_service", "view_registry"):
            if getattr(self, name) is None:
                raise RuntimeError(f"AppConfig.{name} must be initialized.")

    def close(self) -> None:
        """Release the registry subscription and dismiss any open panel."""
        if self.tableau_service is not None:
            self.tableau_service.close()
        if self.panel_host is not None:
            for handle in self.panel_host.open_panels():
                self.panel_host.close(handle.panel_id)
        logger.info("App context closed")
