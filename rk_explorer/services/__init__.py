"""
Services: keeps the store in sync with the registry and orchestrates
tableau detail panels.
"""

from .panel_service import PanelAlignment, PanelHandle, PanelHost, PanelOptions, PanelResult, TableauPanelService
from .tableau_service import RungeKuttaService

__all__ = [
    "PanelAlignment",
    "PanelHandle",
    "PanelHost",
    "PanelOptions",
    "PanelResult",
    "TableauPanelService",
    "RungeKuttaService",
]
