from __future__ import annotations

from typing import Dict, List, Optional

from rk_explorer.core.filter_state import SortKey, TriState
from rk_explorer.core.view_registry import ViewRegistry
from rk_explorer.store.state import ButcherTableausState, LoadStatus

CHECKED = "✓"
UNCHECKED = "–"


def tri_state_options(require_true: str, require_false: str) -> List[Dict]:
    return [
        {"label": "Any", "value": int(TriState.ANY)},
        {"label": require_true, "value": int(TriState.REQUIRE_TRUE)},
        {"label": require_false, "value": int(TriState.REQUIRE_FALSE)},
    ]


def sort_options() -> List[Dict]:
    return [
        {"label": "Name", "value": SortKey.NAME.value},
        {"label": "Stages", "value": SortKey.STEPS.value},
        {"label": "Order", "value": SortKey.ORDER.value},
    ]


def view_options(view_registry: ViewRegistry) -> List[Dict]:
    return [{"label": cls.label, "value": cls.id} for cls in view_registry.all_classes()]


def bool_mark(value: bool) -> str:
    return CHECKED if value else UNCHECKED


def format_order(value: Optional[int]) -> str:
    return "" if value is None else str(value)


def status_text(state: ButcherTableausState) -> str:
    status = state.status
    count = len(state.tableaus or ())
    if status is LoadStatus.LOADING:
        return "Loading tableaus…"
    if status is LoadStatus.ERROR:
        kept = f" Showing the last {count} loaded tableaus." if count else ""
        return f"Could not load tableaus: {state.error}.{kept}"
    return f"{count} tableau{'s' if count != 1 else ''} loaded."
