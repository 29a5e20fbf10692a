from __future__ import annotations

import itertools
import logging
import threading
import time
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from rk_explorer.core.exceptions import AmbiguousTableauId, TableauNotFound
from rk_explorer.core.tableau import TableauRegistration
from rk_explorer.core.view_model import project
from rk_explorer.store.state import ButcherTableausState
from rk_explorer.store.store import Store

logger = logging.getLogger(__name__)


class PanelAlignment(str, Enum):
    START = "start"
    END = "end"


@dataclass(frozen=True)
class PanelOptions:
    title: str
    alignment: PanelAlignment = PanelAlignment.END
    width: Optional[str] = None


@dataclass(frozen=True)
class PanelResult:
    cancelled: bool
    data: Any = None


class PanelHandle:
    """One open panel. result() blocks until the panel is dismissed."""

    def __init__(self, panel_id: str, content: Any, options: PanelOptions):
        self.panel_id = panel_id
        self.content = content
        self.options = options
        self._future: Future = Future()

    @property
    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: Optional[float] = None) -> PanelResult:
        """
        Raises:
            concurrent.futures.TimeoutError: if timeout elapses first
        """
        return self._future.result(timeout)

    def add_done_callback(self, fn) -> None:
        self._future.add_done_callback(lambda _f: fn(self))

    def _resolve(self, result: PanelResult) -> bool:
        if self._future.done():
            return False
        self._future.set_result(result)
        return True


class PanelHost:
    """
    Keeps track of open panels. The UI adapter renders whatever is open and
    reports dismissal back through close().
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._open: Dict[str, PanelHandle] = {}
        self._ids = itertools.count(1)

    def show_panel(self, content: Any, options: PanelOptions) -> PanelHandle:
        with self._lock:
            panel_id = f"panel-{next(self._ids)}"
            handle = PanelHandle(panel_id, content, options)
            self._open[panel_id] = handle
        logger.debug("Panel opened", extra={"panel_id": panel_id, "title": options.title})
        return handle

    def get(self, panel_id: str) -> Optional[PanelHandle]:
        with self._lock:
            return self._open.get(panel_id)

    def open_panels(self) -> List[PanelHandle]:
        with self._lock:
            return list(self._open.values())

    def close(self, panel_id: str, result: Optional[PanelResult] = None) -> bool:
        """Dismiss a panel; returns False if it was not open."""
        with self._lock:
            handle = self._open.pop(panel_id, None)
        if handle is None:
            return False
        return handle._resolve(result or PanelResult(cancelled=True))


class TableauPanelService:
    """
    Opens the detail panel for one tableau of the current snapshot.

    Lookup errors (TableauNotFound / AmbiguousTableauId) go back to the caller
    and never touch the store.

    The UI shows one detail panel at a time, so opening a panel dismisses the
    one this service opened before (as cancelled). A panel left open by a
    reloaded or closed browser tab is released the next time a panel opens.
    """

    def __init__(
            self,
            store: Store[ButcherTableausState],
            host: PanelHost,
            *,
            width: Optional[str] = None,
    ):
        self._store = store
        self._host = host
        self._width = width
        self._lock = threading.Lock()
        self._current: Optional[PanelHandle] = None

    def find_registration(self, tableau_id: str) -> TableauRegistration:
        matches = [row.source for row in project(self._store.state) if row.id == tableau_id]
        if not matches:
            raise TableauNotFound(tableau_id)
        if len(matches) > 1:
            raise AmbiguousTableauId(tableau_id, len(matches))
        return matches[0]

    def open_tableau_panel(self, tableau_id: str) -> PanelHandle:
        registration = self.find_registration(tableau_id)
        options = PanelOptions(
            title=registration.name,
            alignment=PanelAlignment.END,
            width=self._width,
        )
        with self._lock:
            previous, self._current = self._current, None
            if previous is not None:
                self._host.close(previous.panel_id, PanelResult(cancelled=True))
            handle = self._host.show_panel(registration, options)
            self._current = handle
        handle.add_done_callback(self._on_panel_closed)
        logger.info("Tableau panel opened", extra={"tableau_id": tableau_id, "panel_id": handle.panel_id})
        return handle

    def await_result(
            self,
            handle: PanelHandle,
            *,
            cancel: Optional[threading.Event] = None,
            timeout: Optional[float] = None,
            poll_interval: float = 0.1,
    ) -> PanelResult:
        """
        Wait for the panel to be dismissed. Setting `cancel` dismisses the
        panel as cancelled. With no timeout the wait is unbounded.

        Raises:
            concurrent.futures.TimeoutError: if timeout elapses first
        """
        if cancel is None:
            return handle.result(timeout)

        deadline = None if timeout is None else time.monotonic() + timeout
        while not handle.done:
            if cancel.is_set():
                self._host.close(handle.panel_id, PanelResult(cancelled=True))
                break
            if deadline is not None and time.monotonic() >= deadline:
                raise FuturesTimeoutError(f"Panel {handle.panel_id} still open")
            cancel.wait(poll_interval)
        return handle.result()

    def _on_panel_closed(self, handle: PanelHandle) -> None:
        result = handle.result()
        # No follow-up either way yet; a future "apply" action would hook in here
        if result.cancelled:
            logger.debug("Tableau panel dismissed", extra={"panel_id": handle.panel_id})
        else:
            logger.debug("Tableau panel closed with result", extra={"panel_id": handle.panel_id})
