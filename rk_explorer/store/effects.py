from __future__ import annotations

import logging

from rk_explorer.core.exceptions import RegistryUnavailable
from rk_explorer.registry.registry import TableauSource

from .actions import (
    Action,
    InitializeAll,
    TableausChanged,
    TableausFailed,
    TableausLoadCancelled,
    TableausResult,
)
from .store import Dispatch

logger = logging.getLogger(__name__)


class TableauEffects:
    """
    Side effects of the tableau slice: fetch the whole collection from the
    registry and hand it back to the store.

    - load() is hooked onto the runge-kutta initialization scope
    - calling the instance makes it a store effect that reloads on TableausChanged

    There is no incremental update; every fetch replaces the collection.
    """

    def __init__(self, source: TableauSource):
        self._source = source

    def load(self, action: Action, dispatch: Dispatch) -> None:
        cancel = action.cancel if isinstance(action, InitializeAll) else None
        if cancel is not None and cancel.is_set():
            logger.info("Tableau load cancelled before registry call")
            dispatch(TableausLoadCancelled())
            return

        try:
            tableaus = self._source.get_tableaus()
        except Exception as exc:
            error = exc if isinstance(exc, RegistryUnavailable) else RegistryUnavailable(str(exc) or type(exc).__name__)
            logger.exception("Tableau registry unavailable")
            dispatch(TableausFailed(reason=str(error)))
            return

        logger.info("Tableaus loaded", extra={"count": len(tableaus)})
        dispatch(TableausResult(tableaus))

    def __call__(self, action: Action, dispatch: Dispatch) -> None:
        if isinstance(action, TableausChanged):
            self.load(action, dispatch)
