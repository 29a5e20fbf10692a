from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from rk_explorer.core.tableau import TableauDefinition


@dataclass
class GlobalConfig:
    """
    Parsed global.json plus the user-defined tableaus found next to it.
    """
    ui_title: str = "Runge-Kutta Explorer"
    subtitle: str = "Butcher tableau browser"
    panel_width: Optional[str] = "640px"
    default_view: str = "stability"
    poll_interval_ms: int = 2000
    action_log_limit: int = 1000
    tableaus: List[TableauDefinition] = field(default_factory=list)
    config_root: Optional[Path] = None
