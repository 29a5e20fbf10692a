from __future__ import annotations

import pytest

from rk_explorer.store.actions import (
    NUMERICS_SCOPE,
    ODE_SCOPE,
    ROOT_SCOPE,
    RUNGE_KUTTA_SCOPE,
    SINGLE_STEP_SCOPE,
    InitializeAll,
    TableausChanged,
)
from rk_explorer.store.initialization import InitializationCascade, build_default_cascade


def test_default_cascade_chain():
    cascade = build_default_cascade()

    assert cascade.scopes() == [ROOT_SCOPE, NUMERICS_SCOPE, ODE_SCOPE, SINGLE_STEP_SCOPE, RUNGE_KUTTA_SCOPE]
    assert cascade.children(SINGLE_STEP_SCOPE) == [RUNGE_KUTTA_SCOPE]
    assert cascade.children(RUNGE_KUTTA_SCOPE) == []


def test_hooks_run_before_children_are_dispatched():
    cascade = build_default_cascade()
    events = []
    cascade.on_initialize(ODE_SCOPE, lambda action, dispatch: events.append(("hook", action.scope)))

    cascade(InitializeAll(scope=ODE_SCOPE), lambda action: events.append(("dispatch", action.scope)))

    assert events == [("hook", ODE_SCOPE), ("dispatch", SINGLE_STEP_SCOPE)]


def test_sibling_scopes_are_all_initialized():
    cascade = InitializationCascade()
    cascade.add_scope("a", parent=ROOT_SCOPE)
    cascade.add_scope("b", parent=ROOT_SCOPE)
    dispatched = []

    cascade(InitializeAll(), dispatched.append)

    assert [a.scope for a in dispatched] == ["a", "b"]


def test_cascade_ignores_other_actions_and_unknown_scopes():
    cascade = build_default_cascade()
    dispatched = []

    cascade(TableausChanged(), dispatched.append)
    cascade(InitializeAll(scope="nowhere"), dispatched.append)

    assert dispatched == []


def test_add_scope_validation():
    cascade = InitializationCascade()

    with pytest.raises(KeyError):
        cascade.add_scope("child", parent="missing")
    cascade.add_scope("child", parent=ROOT_SCOPE)
    with pytest.raises(ValueError):
        cascade.add_scope("child", parent=ROOT_SCOPE)
    with pytest.raises(KeyError):
        cascade.on_initialize("missing", lambda action, dispatch: None)
