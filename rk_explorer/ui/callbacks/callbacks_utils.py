from __future__ import annotations
import logging
from typing import Optional

from rk_explorer.core.filter_state import TableauFilterState

logger = logging.getLogger(__name__)


def safe_filter_state(data: object) -> TableauFilterState:
    """Parse the filter-state store, falling back to 'no filters' on junk."""
    if not isinstance(data, dict) or not data:
        return TableauFilterState()
    try:
        return TableauFilterState.from_dict(data)
    except (TypeError, ValueError):
        logger.exception("Invalid filter-state: %r", data)
        return TableauFilterState()


def triggered_index(triggered_id: object) -> Optional[str]:
    """Pull the 'index' out of a pattern-matching id, if that is what fired."""
    if isinstance(triggered_id, dict):
        index = triggered_id.get("index")
        return str(index) if index else None
    return None
