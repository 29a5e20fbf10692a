from __future__ import annotations

import pytest

from rk_explorer.core.exceptions import DuplicateTableauId
from rk_explorer.core.tableau import ButcherTableau, TableauDefinition
from rk_explorer.registry import BUILTIN_TABLEAUS, ButcherTableauRegistry


def _definition(tableau_id="user-euler"):
    return TableauDefinition(
        id=tableau_id,
        name="User Euler",
        tableau=ButcherTableau(a=[[0.0]], b=[1.0], c=[0.0]),
        order=1,
    )


def test_builtin_ids_are_unique():
    ids = [d.id for d in BUILTIN_TABLEAUS]

    assert len(ids) == len(set(ids))


def test_builtin_tableaus_are_consistent():
    for definition in BUILTIN_TABLEAUS:
        tableau = definition.tableau
        # consistency: c_i is the row sum of A, weights sum to one
        assert tableau.c == pytest.approx(tableau.a.sum(axis=1)), definition.id
        assert tableau.b.sum() == pytest.approx(1.0), definition.id
        if tableau.is_embedded:
            assert tableau.b_hat.sum() == pytest.approx(1.0), definition.id


def test_builtin_explicit_and_embedded_flags():
    registry = ButcherTableauRegistry()
    by_id = {t.id: t for t in registry.get_tableaus()}

    assert by_id["rk4"].is_explicit and not by_id["rk4"].is_embedded
    assert by_id["dormand-prince"].is_embedded
    assert by_id["dormand-prince"].steps == 7
    assert (by_id["dormand-prince"].b1_order, by_id["dormand-prince"].b2_order) == (5, 4)
    assert not by_id["gauss-legendre-4"].is_explicit
    assert all(t.is_built_in for t in by_id.values())


def test_get_tableaus_returns_snapshot_in_insertion_order():
    registry = ButcherTableauRegistry()

    snapshot = registry.get_tableaus()
    registry.register(_definition())

    assert isinstance(snapshot, tuple)
    assert [t.id for t in snapshot] == [d.id for d in BUILTIN_TABLEAUS]
    assert registry.get_tableaus()[-1].id == "user-euler"
    assert not registry.get_tableaus()[-1].is_built_in


def test_register_duplicate_raises():
    registry = ButcherTableauRegistry()

    with pytest.raises(DuplicateTableauId):
        registry.register(_definition("rk4"))


def test_register_and_unregister_notify_subscribers():
    registry = ButcherTableauRegistry(include_builtins=False)
    calls = []
    registry.subscribe(lambda: calls.append("changed"))

    registry.register(_definition())
    registry.unregister("user-euler")

    assert calls == ["changed", "changed"]
    assert registry.get_tableaus() == ()


def test_unregister_unknown_raises_key_error():
    with pytest.raises(KeyError):
        ButcherTableauRegistry(include_builtins=False).unregister("nope")


def test_failing_handler_does_not_block_others():
    registry = ButcherTableauRegistry(include_builtins=False)
    calls = []

    def broken():
        raise RuntimeError("boom")

    registry.subscribe(broken)
    registry.subscribe(lambda: calls.append("ok"))
    registry.register(_definition())

    assert calls == ["ok"]


def test_subscription_ids_are_distinct_and_unsubscribe_is_idempotent():
    registry = ButcherTableauRegistry(include_builtins=False)

    first = registry.subscribe(lambda: None)
    second = registry.subscribe(lambda: None)
    registry.unsubscribe(first)
    registry.unsubscribe(first)

    assert first != second
    assert registry.subscription_ids() == [second]


def test_user_definitions_passed_to_constructor():
    registry = ButcherTableauRegistry([_definition()], include_builtins=False)

    (registration,) = registry.get_tableaus()
    assert registration.id == "user-euler"
    assert not registration.is_built_in
