from __future__ import annotations

import pytest

from rk_explorer.core.filter_state import SortKey, TableauFilterState, TriState


def test_filter_state_to_from_dict_roundtrip():
    st = TableauFilterState(
        explicit=TriState.REQUIRE_TRUE,
        embedded=TriState.REQUIRE_FALSE,
        built_in=TriState.ANY,
        sort_key=SortKey.ORDER,
        descending=True,
    )

    raw = st.to_dict()
    rebuilt = TableauFilterState.from_dict(raw)

    assert rebuilt == st
    assert raw["explicit"] == 1
    assert raw["embedded"] == 2
    assert raw["sort_key"] == "order"


def test_filter_state_from_empty_dict_is_unfiltered():
    assert TableauFilterState.from_dict(None) == TableauFilterState()
    assert TableauFilterState.from_dict({}) == TableauFilterState()


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, TriState.ANY),
        ("", TriState.ANY),
        (0, TriState.ANY),
        (1, TriState.REQUIRE_TRUE),
        ("2", TriState.REQUIRE_FALSE),
        ("require_true", TriState.REQUIRE_TRUE),
    ],
)
def test_tri_state_parse_accepts_legacy_encoding(raw, expected):
    assert TriState.parse(raw) is expected


def test_tri_state_parse_rejects_unknown_values():
    with pytest.raises(ValueError):
        TriState.parse(3)


def test_tri_state_accepts():
    assert TriState.ANY.accepts(True) and TriState.ANY.accepts(False)
    assert TriState.REQUIRE_TRUE.accepts(True) and not TriState.REQUIRE_TRUE.accepts(False)
    assert TriState.REQUIRE_FALSE.accepts(False) and not TriState.REQUIRE_FALSE.accepts(True)


@pytest.mark.parametrize(
    "raw, expected",
    [(True, True), (False, False), (None, False), ("true", True), ("false", False), ("0", False), ("1", True), (0, False)],
)
def test_filter_state_descending_parses_browser_values(raw, expected):
    assert TableauFilterState.from_dict({"descending": raw}).descending is expected


def test_filter_state_descending_rejects_junk():
    with pytest.raises(ValueError):
        TableauFilterState.from_dict({"descending": "sideways"})
