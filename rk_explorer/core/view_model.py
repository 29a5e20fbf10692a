from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from .filter_state import SortKey, TableauFilterState
from .tableau import TableauRegistration

ROW_COLUMNS = [
    "id",
    "name",
    "steps",
    "is_embedded",
    "is_explicit",
    "is_built_in",
    "order",
    "b1_order",
    "b2_order",
]


@dataclass(frozen=True)
class TableauRow:
    """
    Display row for the tableau grid. Derived per render from the current
    snapshot; `source` points back at the full registration for detail lookup.
    """

    id: str
    name: str
    steps: int
    is_embedded: bool
    is_explicit: bool
    is_built_in: bool
    order: int
    b1_order: Optional[int]
    b2_order: Optional[int]
    source: TableauRegistration

    @classmethod
    def from_registration(cls, reg: TableauRegistration) -> TableauRow:
        return cls(
            id=reg.id,
            name=reg.name,
            steps=reg.steps,
            is_embedded=reg.is_embedded,
            is_explicit=reg.is_explicit,
            is_built_in=reg.is_built_in,
            order=reg.order,
            b1_order=reg.b1_order,
            b2_order=reg.b2_order,
            source=reg,
        )


def project(state) -> List[TableauRow]:
    """
    Project a ButcherTableausState into grid rows.

    Never fails: no snapshot, or a snapshot that is still loading, yields an
    empty list so the UI never draws a stale collection.
    """
    if state is None or state.is_loading or not state.tableaus:
        return []
    return [TableauRow.from_registration(reg) for reg in state.tableaus]


def matches(row: TableauRow, filters: TableauFilterState) -> bool:
    return (
        filters.explicit.accepts(row.is_explicit)
        and filters.embedded.accepts(row.is_embedded)
        and filters.built_in.accepts(row.is_built_in)
    )


def apply_filters(rows: Iterable[TableauRow], filters: TableauFilterState) -> List[TableauRow]:
    return [row for row in rows if matches(row, filters)]


def _sort_value(row: TableauRow, key: SortKey) -> Tuple:
    if key is SortKey.STEPS:
        return (row.steps,)
    if key is SortKey.ORDER:
        return (row.order,)
    return (row.name,)


def sort_rows(
        rows: Sequence[TableauRow],
        key: SortKey = SortKey.NAME,
        descending: bool = False,
) -> List[TableauRow]:
    """
    Order rows by `key`. sorted() is stable, and stays stable with reverse=True,
    so ties keep their projection order in both directions.
    """
    return sorted(rows, key=lambda row: _sort_value(row, key), reverse=descending)


def build_view(state, filters: Optional[TableauFilterState] = None) -> List[TableauRow]:
    """Project, filter and sort in one go. Pure: same inputs give the same rows."""
    filters = filters or TableauFilterState()
    rows = apply_filters(project(state), filters)
    return sort_rows(rows, filters.sort_key, filters.descending)


def rows_to_frame(rows: Sequence[TableauRow]) -> pd.DataFrame:
    """Tabular export of the visible rows (used for the CSV download)."""
    return pd.DataFrame(
        [{col: getattr(row, col) for col in ROW_COLUMNS} for row in rows],
        columns=ROW_COLUMNS,
    )
