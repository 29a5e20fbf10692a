from __future__ import annotations

from typing import Optional

from rk_explorer.registry.registry import TableauSource

from .actions import RUNGE_KUTTA_SCOPE
from .effects import TableauEffects
from .initialization import InitializationCascade, build_default_cascade
from .reducers import reduce_tableaus
from .state import ButcherTableausState
from .store import Store


def build_store(
        source: TableauSource,
        cascade: Optional[InitializationCascade] = None,
        *,
        action_log_limit: int = 1000,
) -> Store[ButcherTableausState]:
    """
    Assemble the tableau store: fresh state, the tableau reducer, the
    initialization cascade and the registry effects.

    Pass a custom cascade to hook additional scopes; it must contain the
    runge-kutta scope.
    """
    cascade = cascade or build_default_cascade()
    effects = TableauEffects(source)
    cascade.on_initialize(RUNGE_KUTTA_SCOPE, effects.load)

    return Store(
        ButcherTableausState(),
        reduce_tableaus,
        effects=[cascade, effects],
        action_log_limit=action_log_limit,
    )
