from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from rk_explorer.core.tableau import TableauRegistration


class LoadStatus(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass(frozen=True)
class ButcherTableausState:
    """
    Snapshot of the tableau feature slice.

    Fields:

    - is_loading: a fetch is in flight; `tableaus` is not meaningful until it lands
    - tableaus: the last collection delivered by the registry (kept while reloading
      and after a failure, so a refresh never throws away what the user was looking at)
    - error: reason of the last failed fetch, cleared by the next fetch

    A fresh state is loading with no tableaus. Reducers replace the snapshot,
    they never mutate it.
    """

    is_loading: bool = True
    tableaus: Optional[Tuple[TableauRegistration, ...]] = None
    error: Optional[str] = None

    @property
    def status(self) -> LoadStatus:
        if self.is_loading:
            return LoadStatus.LOADING
        if self.error is not None:
            return LoadStatus.ERROR
        return LoadStatus.LOADED
