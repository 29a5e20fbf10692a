from __future__ import annotations

import threading

import pytest

from rk_explorer.core.tableau import TableauRegistration
from rk_explorer.store import build_store
from rk_explorer.store.actions import (
    NUMERICS_SCOPE,
    ODE_SCOPE,
    ROOT_SCOPE,
    RUNGE_KUTTA_SCOPE,
    SINGLE_STEP_SCOPE,
    Action,
    InitializeAll,
    TableausChanged,
    TableausFailed,
    TableausLoadCancelled,
    TableausResult,
)
from rk_explorer.store.state import LoadStatus
from rk_explorer.store.store import Store, Subscription

HEUN = TableauRegistration(
    id="heun", name="Heun", steps=2, is_embedded=False, is_explicit=True, is_built_in=True, order=2,
)


class FakeSource:
    def __init__(self, tableaus=(HEUN,), error=None):
        self.tableaus = tuple(tableaus)
        self.error = error
        self.calls = 0

    def get_tableaus(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.tableaus

    def subscribe(self, handler):
        return 1

    def unsubscribe(self, subscription_id):
        pass


class Ping(Action):
    pass


class Pong(Action):
    pass


def _count(actions, kind):
    return sum(isinstance(a, kind) for a in actions)


def test_initialize_cascades_in_scope_order_then_loads():
    source = FakeSource()
    store = build_store(source)

    store.dispatch(InitializeAll())

    log = store.action_log
    scopes = [a.scope for a in log if isinstance(a, InitializeAll)]
    assert scopes == [ROOT_SCOPE, NUMERICS_SCOPE, ODE_SCOPE, SINGLE_STEP_SCOPE, RUNGE_KUTTA_SCOPE]
    assert isinstance(log[-1], TableausResult)
    assert _count(log, TableausResult) == 1
    assert source.calls == 1

    assert store.state.status is LoadStatus.LOADED
    assert store.state.tableaus == (HEUN,)


def test_every_initialize_produces_exactly_one_result():
    store = build_store(FakeSource())

    store.dispatch(InitializeAll())
    store.dispatch(InitializeAll())

    assert _count(store.action_log, TableausResult) == 2


def test_registry_failure_ends_in_error_state():
    store = build_store(FakeSource(error=RuntimeError("connection refused")))

    store.dispatch(InitializeAll())

    assert _count(store.action_log, TableausFailed) == 1
    assert _count(store.action_log, TableausResult) == 0
    assert store.state.status is LoadStatus.ERROR
    assert "connection refused" in store.state.error


def test_failure_after_success_keeps_previous_tableaus():
    source = FakeSource()
    store = build_store(source)
    store.dispatch(InitializeAll())

    source.error = RuntimeError("gone")
    store.dispatch(TableausChanged())

    assert store.state.error == "gone"
    assert store.state.tableaus == (HEUN,)


def test_cancelled_initialize_skips_registry():
    source = FakeSource()
    store = build_store(source)
    cancel = threading.Event()
    cancel.set()

    store.dispatch(InitializeAll(cancel=cancel))

    assert source.calls == 0
    assert _count(store.action_log, TableausLoadCancelled) == 1
    assert not store.state.is_loading
    assert store.state.tableaus is None


def test_cancel_token_is_handed_to_every_scope():
    store = build_store(FakeSource())
    cancel = threading.Event()

    store.dispatch(InitializeAll(cancel=cancel))

    assert all(a.cancel is cancel for a in store.action_log if isinstance(a, InitializeAll))


def test_tableaus_changed_reloads():
    source = FakeSource()
    store = build_store(source)
    store.dispatch(InitializeAll())

    source.tableaus = ()
    store.dispatch(TableausChanged())

    assert source.calls == 2
    assert store.state.tableaus == ()
    assert not store.state.is_loading


def test_dispatch_rejects_non_actions():
    store = build_store(FakeSource())

    with pytest.raises(TypeError):
        store.dispatch("InitializeAll")


def test_version_and_bounded_action_log():
    store = Store(0, lambda state, _action: state + 1, action_log_limit=3)

    for _ in range(5):
        store.dispatch(Ping())

    assert store.state == 5
    assert store.version == 5
    assert len(store.action_log) == 3


def test_dispatch_from_effect_is_queued_until_current_action_finishes():
    seen = []

    def effect(action, dispatch):
        seen.append(("start", type(action).__name__))
        if isinstance(action, Ping):
            dispatch(Pong())
        seen.append(("end", type(action).__name__))

    store = Store(None, lambda state, _action: state, effects=[effect])
    store.dispatch(Ping())

    assert seen == [("start", "Ping"), ("end", "Ping"), ("start", "Pong"), ("end", "Pong")]
    assert [type(a) for a in store.action_log] == [Ping, Pong]


def test_failing_effect_does_not_stop_other_effects():
    calls = []

    def broken(action, dispatch):
        raise RuntimeError("boom")

    store = Store(None, lambda state, _action: state, effects=[broken, lambda a, d: calls.append(a)])
    store.dispatch(Ping())

    assert calls == [Ping()]


def test_listener_receives_new_state_until_disposed():
    store = Store(0, lambda state, _action: state + 1)
    received = []

    subscription = store.subscribe(received.append)
    store.dispatch(Ping())
    subscription.dispose()
    subscription.dispose()
    store.dispatch(Ping())

    assert received == [1]
    assert not subscription.active


def test_subscription_context_manager_releases():
    released = []

    with Subscription(lambda: released.append(True)) as subscription:
        assert subscription.active

    assert released == [True]
    assert not subscription.active


def test_effect_added_later_sees_subsequent_actions():
    store = Store(None, lambda state, _action: state)
    seen = []
    store.dispatch(Ping())

    store.add_effect(lambda action, dispatch: seen.append(action))
    store.dispatch(Pong())

    assert seen == [Pong()]


class Boom(Action):
    pass


def test_failing_reducer_drops_action_and_keeps_draining():
    def reducer(state, action):
        if isinstance(action, Boom):
            raise ValueError("bad action")
        return state + 1

    def effect(action, dispatch):
        if isinstance(action, Ping):
            dispatch(Boom())
            dispatch(Pong())

    store = Store(0, reducer, effects=[effect])
    store.dispatch(Ping())

    assert store.state == 2
    assert store.version == 2
    assert [type(a) for a in store.action_log] == [Ping, Pong]


def test_concurrent_dispatch_from_many_threads_is_serialized():
    threads_count, per_thread = 8, 20
    store = build_store(FakeSource(), action_log_limit=100_000)
    barrier = threading.Barrier(threads_count)
    errors = []

    def worker():
        try:
            barrier.wait(timeout=10)
            for _ in range(per_thread):
                store.dispatch(InitializeAll())
        except Exception as exc:
            errors.append(exc)

    workers = [threading.Thread(target=worker) for _ in range(threads_count)]
    for t in workers:
        t.start()
    for t in workers:
        t.join(timeout=30)

    assert errors == []
    assert not any(t.is_alive() for t in workers)

    log = store.action_log
    # five cascade scopes plus one result per InitializeAll
    assert _count(log, TableausResult) == threads_count * per_thread
    assert _count(log, InitializeAll) == threads_count * per_thread * 5
    assert store.version == len(log)
    assert not store.state.is_loading
    assert store.state.tableaus == (HEUN,)
