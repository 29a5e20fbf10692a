"""
Unidirectional state store for the tableau collection: actions, reducers,
effects and the scoped initialization cascade.
"""

from .actions import (
    ROOT_SCOPE,
    RUNGE_KUTTA_SCOPE,
    InitializeAll,
    TableausChanged,
    TableausFailed,
    TableausLoadCancelled,
    TableausResult,
)
from .state import ButcherTableausState, LoadStatus
from .store import Store, Subscription
from .wiring import build_store

__all__ = [
    "ROOT_SCOPE",
    "RUNGE_KUTTA_SCOPE",
    "InitializeAll",
    "TableausChanged",
    "TableausFailed",
    "TableausLoadCancelled",
    "TableausResult",
    "ButcherTableausState",
    "LoadStatus",
    "Store",
    "Subscription",
    "build_store",
]
