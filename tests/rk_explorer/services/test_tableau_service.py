from __future__ import annotations

from rk_explorer.core.tableau import ButcherTableau, TableauDefinition
from rk_explorer.registry.registry import ButcherTableauRegistry
from rk_explorer.services.tableau_service import RungeKuttaService
from rk_explorer.store import build_store
from rk_explorer.store.actions import InitializeAll, TableausChanged, TableausResult


def _definition(tableau_id="user-euler"):
    return TableauDefinition(
        id=tableau_id,
        name="User Euler",
        tableau=ButcherTableau(a=[[0.0]], b=[1.0], c=[0.0]),
        order=1,
    )


def test_subscribe_then_close_restores_subscriber_set():
    registry = ButcherTableauRegistry(include_builtins=False)
    before = registry.subscription_ids()

    service = RungeKuttaService(registry, lambda action: None)
    assert service.subscription_id in registry.subscription_ids()

    service.close()
    service.close()

    assert service.closed
    assert registry.subscription_ids() == before


def test_context_manager_releases_subscription():
    registry = ButcherTableauRegistry(include_builtins=False)

    with RungeKuttaService(registry, lambda action: None) as service:
        assert registry.subscription_ids() == [service.subscription_id]

    assert registry.subscription_ids() == []


def test_registry_change_dispatches_tableaus_changed():
    registry = ButcherTableauRegistry(include_builtins=False)
    dispatched = []

    with RungeKuttaService(registry, dispatched.append):
        registry.register(_definition())

    assert dispatched == [TableausChanged()]


def test_registry_change_reloads_store():
    registry = ButcherTableauRegistry(include_builtins=False)
    store = build_store(registry)

    with RungeKuttaService(registry, store.dispatch):
        store.dispatch(InitializeAll())
        assert store.state.tableaus == ()

        registry.register(_definition())

    assert [t.id for t in store.state.tableaus] == ["user-euler"]
    assert not store.state.is_loading
    assert sum(isinstance(a, TableausResult) for a in store.action_log) == 2


def test_no_dispatch_after_close():
    registry = ButcherTableauRegistry(include_builtins=False)
    dispatched = []

    RungeKuttaService(registry, dispatched.append).close()
    registry.register(_definition())

    assert dispatched == []
