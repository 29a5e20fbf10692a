from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, Type

from .actions import (
    RUNGE_KUTTA_SCOPE,
    Action,
    InitializeAll,
    TableausChanged,
    TableausFailed,
    TableausLoadCancelled,
    TableausResult,
)
from .state import ButcherTableausState


def _start_loading(state: ButcherTableausState) -> ButcherTableausState:
    return replace(state, is_loading=True, error=None)


def _on_initialize(state: ButcherTableausState, action: InitializeAll) -> ButcherTableausState:
    # Only the runge-kutta scope owns this slice; the outer scopes just cascade
    if action.scope != RUNGE_KUTTA_SCOPE:
        return state
    return _start_loading(state)


def _on_changed(state: ButcherTableausState, _action: TableausChanged) -> ButcherTableausState:
    return _start_loading(state)


def _on_result(_state: ButcherTableausState, action: TableausResult) -> ButcherTableausState:
    return ButcherTableausState(is_loading=False, tableaus=action.tableaus, error=None)


def _on_failed(state: ButcherTableausState, action: TableausFailed) -> ButcherTableausState:
    return replace(state, is_loading=False, error=action.reason or "Tableau registry unavailable")


def _on_cancelled(state: ButcherTableausState, _action: TableausLoadCancelled) -> ButcherTableausState:
    return replace(state, is_loading=False)


_REDUCERS: Dict[Type[Action], Callable] = {
    InitializeAll: _on_initialize,
    TableausChanged: _on_changed,
    TableausResult: _on_result,
    TableausFailed: _on_failed,
    TableausLoadCancelled: _on_cancelled,
}


def reduce_tableaus(state: ButcherTableausState, action: Action) -> ButcherTableausState:
    reducer = _REDUCERS.get(type(action))
    if reducer is None:
        return state
    return reducer(state, action)
