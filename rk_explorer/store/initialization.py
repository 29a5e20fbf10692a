from __future__ import annotations

import logging
from typing import Callable, Dict, List

from .actions import (
    NUMERICS_SCOPE,
    ODE_SCOPE,
    ROOT_SCOPE,
    RUNGE_KUTTA_SCOPE,
    SINGLE_STEP_SCOPE,
    Action,
    InitializeAll,
)
from .store import Dispatch

logger = logging.getLogger(__name__)

InitializeHook = Callable[[InitializeAll, Dispatch], None]


class InitializationCascade:
    """
    Tree of initialization scopes, used as a store effect.

    When InitializeAll(scope) is applied, the hooks registered for that scope
    run in registration order, then InitializeAll is dispatched for each child
    scope. Because the store queues dispatches made from effects, a child's
    hooks only ever run after the parent's action has been applied.

    Scopes are added with add_scope(); features hook in with on_initialize()
    and never need to know who triggered the top-level signal.
    """

    def __init__(self, root: str = ROOT_SCOPE):
        self.root = root
        self._children: Dict[str, List[str]] = {root: []}
        self._hooks: Dict[str, List[InitializeHook]] = {root: []}

    def add_scope(self, scope: str, parent: str) -> None:
        """
        Raises:
            KeyError: if the parent scope is unknown
            ValueError: if the scope already exists
        """
        if parent not in self._children:
            raise KeyError(f"Unknown parent scope '{parent}'")
        if scope in self._children:
            raise ValueError(f"Scope '{scope}' already exists")
        self._children[parent].append(scope)
        self._children[scope] = []
        self._hooks[scope] = []

    def on_initialize(self, scope: str, hook: InitializeHook) -> None:
        if scope not in self._hooks:
            raise KeyError(f"Unknown scope '{scope}'")
        self._hooks[scope].append(hook)

    def children(self, scope: str) -> List[str]:
        return list(self._children[scope])

    def scopes(self) -> List[str]:
        """All scopes, parents before children."""
        ordered: List[str] = []
        pending = [self.root]
        while pending:
            scope = pending.pop(0)
            ordered.append(scope)
            pending.extend(self._children[scope])
        return ordered

    def __call__(self, action: Action, dispatch: Dispatch) -> None:
        if not isinstance(action, InitializeAll):
            return

        scope = action.scope
        if scope not in self._hooks:
            logger.warning("InitializeAll for unknown scope", extra={"scope": scope})
            return

        logger.debug("Initializing scope", extra={"scope": scope})
        for hook in self._hooks[scope]:
            hook(action, dispatch)

        for child in self._children[scope]:
            dispatch(InitializeAll(scope=child, cancel=action.cancel))


def build_default_cascade() -> InitializationCascade:
    """app -> numerics -> ode -> single step -> runge-kutta"""
    cascade = InitializationCascade()
    cascade.add_scope(NUMERICS_SCOPE, parent=ROOT_SCOPE)
    cascade.add_scope(ODE_SCOPE, parent=NUMERICS_SCOPE)
    cascade.add_scope(SINGLE_STEP_SCOPE, parent=ODE_SCOPE)
    cascade.add_scope(RUNGE_KUTTA_SCOPE, parent=SINGLE_STEP_SCOPE)
    return cascade
