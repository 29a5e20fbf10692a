from __future__ import annotations

import threading
from concurrent.futures import TimeoutError as FuturesTimeoutError

import pytest

from rk_explorer.core.exceptions import AmbiguousTableauId, TableauNotFound
from rk_explorer.core.tableau import TableauRegistration
from rk_explorer.registry.registry import ButcherTableauRegistry
from rk_explorer.services.panel_service import (
    PanelAlignment,
    PanelHost,
    PanelOptions,
    PanelResult,
    TableauPanelService,
)
from rk_explorer.store import build_store
from rk_explorer.store.actions import InitializeAll, TableausChanged, TableausResult
from rk_explorer.store.reducers import reduce_tableaus
from rk_explorer.store.state import ButcherTableausState
from rk_explorer.store.store import Store


def _service(width="640px"):
    store = build_store(ButcherTableauRegistry())
    store.dispatch(InitializeAll())
    host = PanelHost()
    return TableauPanelService(store, host, width=width), host, store


def _reg(tableau_id, name):
    return TableauRegistration(
        id=tableau_id, name=name, steps=2, is_embedded=False, is_explicit=True, is_built_in=False, order=2,
    )


def test_open_panel_uses_name_as_title_end_alignment_and_width():
    service, host, _store = _service()

    handle = service.open_tableau_panel("heun")

    assert handle.options == PanelOptions(title="Heun", alignment=PanelAlignment.END, width="640px")
    assert handle.content.id == "heun"
    assert host.get(handle.panel_id) is handle
    assert not handle.done


def test_unknown_id_raises_not_found_and_leaves_store_alone():
    service, host, store = _service()
    version = store.version

    with pytest.raises(TableauNotFound) as excinfo:
        service.open_tableau_panel("does-not-exist")

    assert excinfo.value.tableau_id == "does-not-exist"
    assert store.version == version
    assert host.open_panels() == []


def test_lookup_while_loading_raises_not_found():
    # a reload in flight still carries the previous collection
    stale = ButcherTableausState(is_loading=True, tableaus=(_reg("heun", "Heun"),))
    service = TableauPanelService(Store(stale, reduce_tableaus), PanelHost())

    with pytest.raises(TableauNotFound):
        service.open_tableau_panel("heun")


def test_duplicate_ids_raise_ambiguous():
    service, _host, store = _service()
    store.dispatch(TableausResult((_reg("dup", "First"), _reg("dup", "Second"))))

    with pytest.raises(AmbiguousTableauId) as excinfo:
        service.open_tableau_panel("dup")

    assert excinfo.value.count == 2
    assert isinstance(excinfo.value, LookupError)


def test_close_resolves_as_cancelled_by_default():
    service, host, _store = _service()
    handle = service.open_tableau_panel("rk4")

    assert host.close(handle.panel_id)
    assert not host.close(handle.panel_id)

    assert handle.done
    assert handle.result(timeout=0) == PanelResult(cancelled=True)
    assert host.get(handle.panel_id) is None


def test_close_with_data():
    service, host, _store = _service()
    handle = service.open_tableau_panel("rk4")

    host.close(handle.panel_id, PanelResult(cancelled=False, data={"picked": "rk4"}))

    assert service.await_result(handle) == PanelResult(cancelled=False, data={"picked": "rk4"})


def test_await_result_cancel_token_dismisses_panel():
    service, host, _store = _service()
    handle = service.open_tableau_panel("heun")
    cancel = threading.Event()
    cancel.set()

    result = service.await_result(handle, cancel=cancel, timeout=5)

    assert result.cancelled
    assert host.open_panels() == []


def test_await_result_times_out_while_open():
    service, _host, _store = _service()
    handle = service.open_tableau_panel("heun")

    with pytest.raises(FuturesTimeoutError):
        service.await_result(handle, cancel=threading.Event(), timeout=0.05, poll_interval=0.01)
    with pytest.raises(FuturesTimeoutError):
        service.await_result(handle, timeout=0.01)


def test_await_result_returns_when_closed_from_another_thread():
    service, host, _store = _service()
    handle = service.open_tableau_panel("heun")

    timer = threading.Timer(0.05, host.close, args=(handle.panel_id,))
    timer.start()
    try:
        result = service.await_result(handle, cancel=threading.Event(), timeout=5, poll_interval=0.01)
    finally:
        timer.cancel()

    assert result.cancelled


def test_panel_ids_are_unique():
    service, _host, _store = _service()

    first = service.open_tableau_panel("heun")
    second = service.open_tableau_panel("heun")

    assert first.panel_id != second.panel_id


def test_reload_does_not_close_open_panel():
    service, host, store = _service()
    handle = service.open_tableau_panel("heun")

    store.dispatch(TableausChanged())

    assert host.get(handle.panel_id) is handle


def test_reopening_without_close_dismisses_previous_panel():
    service, host, _store = _service()

    handles = [service.open_tableau_panel("heun") for _ in range(50)]

    assert host.open_panels() == [handles[-1]]
    assert all(h.result(timeout=0).cancelled for h in handles[:-1])
    assert not handles[-1].done


def test_failed_lookup_keeps_current_panel_open():
    service, host, _store = _service()
    handle = service.open_tableau_panel("heun")

    with pytest.raises(TableauNotFound):
        service.open_tableau_panel("does-not-exist")

    assert host.open_panels() == [handle]
