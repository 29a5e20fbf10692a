from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Optional, Tuple

from rk_explorer.core.tableau import TableauRegistration

# Initialization scopes, from general to specific. A scope's InitializeAll is
# dispatched only after its parent's InitializeAll has been applied.
ROOT_SCOPE = "app"
NUMERICS_SCOPE = "numerics"
ODE_SCOPE = "numerics.ode"
SINGLE_STEP_SCOPE = "numerics.ode.single_step"
RUNGE_KUTTA_SCOPE = "numerics.ode.single_step.runge_kutta"


@dataclass(frozen=True)
class Action:
    """Marker base for everything that can be dispatched to the store."""


@dataclass(frozen=True)
class InitializeAll(Action):
    """
    Initialize everything below `scope`.

    `cancel` is handed down unchanged to every child scope; once set, the
    runge-kutta leaf skips the registry call.
    """

    scope: str = ROOT_SCOPE
    cancel: Optional[threading.Event] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class TableausChanged(Action):
    """The registry reported a change; the collection must be re-fetched."""


@dataclass(frozen=True)
class TableausResult(Action):
    tableaus: Tuple[TableauRegistration, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "tableaus", tuple(self.tableaus))


@dataclass(frozen=True)
class TableausFailed(Action):
    reason: str = ""


@dataclass(frozen=True)
class TableausLoadCancelled(Action):
    pass
