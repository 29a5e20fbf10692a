from __future__ import annotations

import logging

from rk_explorer.registry.registry import TableauSource
from rk_explorer.store.actions import TableausChanged
from rk_explorer.store.store import Dispatch

logger = logging.getLogger(__name__)


class RungeKuttaService:
    """
    Bridges registry change notifications into the store.

    Subscribes on construction and unsubscribes on close(). Use it as a
    context manager (or register close() for app teardown) so the
    subscription is always released.
    """

    def __init__(self, source: TableauSource, dispatch: Dispatch):
        self._source = source
        self._dispatch = dispatch
        self._subscription_id = source.subscribe(self._on_tableaus_changed)
        self._closed = False

    @property
    def subscription_id(self) -> int:
        return self._subscription_id

    @property
    def closed(self) -> bool:
        return self._closed

    def _on_tableaus_changed(self) -> None:
        logger.info("Tableau registry changed", extra={"subscription_id": self._subscription_id})
        self._dispatch(TableausChanged())

    def close(self) -> None:
        if self._closed:
            return
        self._source.unsubscribe(self._subscription_id)
        self._closed = True
        logger.debug("Unsubscribed from tableau registry", extra={"subscription_id": self._subscription_id})

    def __enter__(self) -> RungeKuttaService:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
