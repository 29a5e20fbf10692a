from __future__ import annotations

import itertools
import logging
import threading
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Tuple

from rk_explorer.core.exceptions import DuplicateTableauId
from rk_explorer.core.tableau import TableauDefinition, TableauRegistration
from rk_explorer.registry.builtin import BUILTIN_TABLEAUS

logger = logging.getLogger(__name__)

ChangeHandler = Callable[[], None]


class TableauSource(Protocol):
    """
    The capability the store depends on. Anything that can hand out the
    current collection and fan out change notifications will do.
    """

    def get_tableaus(self) -> Tuple[TableauRegistration, ...]: ...

    def subscribe(self, handler: ChangeHandler) -> int: ...

    def unsubscribe(self, subscription_id: int) -> None: ...


class ButcherTableauRegistry:
    """
    In-process registry of Butcher tableaus.

    Purpose:
    - Owns the canonical collection (built-ins plus user-defined tableaus)
    - Notifies every subscriber whenever the collection changes

    Design Notes:
    - Registrations are kept in insertion order; get_tableaus() returns an
      immutable snapshot so callers can never observe a half-applied change
    - Enforces invariants:
        * each tableau 'id' is unique across the registry
    - Handlers are invoked outside the lock so a handler may call back into
      get_tableaus() (the store's reload effect does exactly that)
    """

    def __init__(
            self,
            definitions: Optional[Iterable[TableauDefinition]] = None,
            *,
            include_builtins: bool = True,
    ):
        self._lock = threading.RLock()
        self._tableaus: Dict[str, TableauRegistration] = {}
        self._handlers: Dict[int, ChangeHandler] = {}
        self._ids = itertools.count(1)

        if include_builtins:
            for definition in BUILTIN_TABLEAUS:
                self._add(definition, built_in=True)
        for definition in definitions or ():
            self._add(definition, built_in=False)

    # ------------------------------------------------------------------
    # Collection
    # ------------------------------------------------------------------
    def get_tableaus(self) -> Tuple[TableauRegistration, ...]:
        with self._lock:
            return tuple(self._tableaus.values())

    def register(self, definition: TableauDefinition, *, built_in: bool = False) -> TableauRegistration:
        """
        Add a tableau and notify subscribers.

        Raises:
            DuplicateTableauId: if a tableau with the same id is already registered
        """
        with self._lock:
            registration = self._add(definition, built_in=built_in)
        logger.info("Registered tableau", extra={"tableau_id": registration.id, "built_in": built_in})
        self._notify()
        return registration

    def unregister(self, tableau_id: str) -> None:
        """
        Remove a tableau and notify subscribers.

        Raises:
            KeyError: if no tableau with the given id is registered
        """
        with self._lock:
            if tableau_id not in self._tableaus:
                raise KeyError(f"Tableau '{tableau_id}' not registered")
            del self._tableaus[tableau_id]
        logger.info("Unregistered tableau", extra={"tableau_id": tableau_id})
        self._notify()

    def _add(self, definition: TableauDefinition, *, built_in: bool) -> TableauRegistration:
        if definition.id in self._tableaus:
            raise DuplicateTableauId(f"Tableau '{definition.id}' already registered")
        registration = TableauRegistration.from_definition(definition, built_in=built_in)
        self._tableaus[definition.id] = registration
        return registration

    # ------------------------------------------------------------------
    # Change notifications
    # ------------------------------------------------------------------
    def subscribe(self, handler: ChangeHandler) -> int:
        with self._lock:
            subscription_id = next(self._ids)
            self._handlers[subscription_id] = handler
        return subscription_id

    def unsubscribe(self, subscription_id: int) -> None:
        with self._lock:
            self._handlers.pop(subscription_id, None)

    def subscription_ids(self) -> List[int]:
        with self._lock:
            return list(self._handlers)

    def _notify(self) -> None:
        with self._lock:
            handlers = list(self._handlers.items())
        for subscription_id, handler in handlers:
            try:
                handler()
            except Exception:
                # One broken subscriber must not starve the others
                logger.exception(
                    "Tableau change handler failed",
                    extra={"subscription_id": subscription_id},
                )
