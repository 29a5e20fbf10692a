from __future__ import annotations

__all__ = ["IDs", "tableau_open_id"]


class IDs:
    class Store:
        FILTER_STATE = "filter-state"
        STORE_VERSION = "store-version"
        ACTIVE_PANEL = "active-panel-id"

    class Control:
        # Store polling / reload
        STORE_POLL = "store-poll"
        RELOAD_BTN = "reload-btn"

        # Grid filters
        EXPLICIT_FILTER = "explicit-filter"
        EMBEDDED_FILTER = "embedded-filter"
        BUILTIN_FILTER = "builtin-filter"
        SORT_SELECT = "sort-select"
        SORT_OPTIONS = "sort-options"

        # Grid
        GRID_SUMMARY = "grid-summary"
        GRID_TABLE = "grid-table"
        DOWNLOAD_CSV = "download-csv"
        DOWNLOAD_CSV_BTN = "download-csv-btn"

        # Status bar
        STATUS_BAR = "status-bar"
        PANEL_ALERT = "panel-alert"

        # Detail panel
        DETAIL_PANEL = "detail-panel"
        DETAIL_BODY = "detail-body"
        PANEL_VIEW_SELECT = "panel-view-select"
        PANEL_GRAPH = "panel-graph"

    class Pattern:
        # pattern-matching "type" strings
        TABLEAU_OPEN = "tableau-open"


def tableau_open_id(tableau_id: str) -> dict:
    return {"type": IDs.Pattern.TABLEAU_OPEN, "index": tableau_id}
