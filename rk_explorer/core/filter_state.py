from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Optional


class TriState(IntEnum):
    """
    Three-way filter on a boolean attribute.

    The integer values match the legacy encoding used by the grid filters
    (0 = no filter, 1 = require true, 2 = require false), so raw widget values
    can be parsed with TriState(value).
    """

    ANY = 0
    REQUIRE_TRUE = 1
    REQUIRE_FALSE = 2

    def accepts(self, value: bool) -> bool:
        if self is TriState.ANY:
            return True
        if self is TriState.REQUIRE_TRUE:
            return bool(value)
        return not value

    @classmethod
    def parse(cls, value: Any) -> TriState:
        """Lenient parse for values coming back from the browser (None, "1", 2...)."""
        if value is None or value == "":
            return cls.ANY
        if isinstance(value, TriState):
            return value
        if isinstance(value, str) and value.upper() in cls.__members__:
            return cls[value.upper()]
        return cls(int(value))


_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"", "0", "false", "no", "off"}


def parse_bool(value: Any) -> bool:
    """Lenient bool for values coming back from the browser (None, "false", 1...)."""
    if value is None:
        return False
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise ValueError(f"Not a boolean: {value!r}")
    return bool(value)


class SortKey(str, Enum):
    NAME = "name"
    STEPS = "steps"
    ORDER = "order"


@dataclass(frozen=True)
class TableauFilterState:
    """
    Represents the current user selection on the tableau grid.

    Fields:

    - explicit: explicit-only / implicit-only / either
    - embedded: embedded-only / non-embedded-only / either
    - built_in: built-in-only / user-defined-only / either

    - sort_key: column used for ordering rows (name by default)
    - descending: reverse the ordering; ties keep their projection order
    """

    explicit: TriState = TriState.ANY
    embedded: TriState = TriState.ANY
    built_in: TriState = TriState.ANY

    sort_key: SortKey = SortKey.NAME
    descending: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["explicit"] = int(self.explicit)
        data["embedded"] = int(self.embedded)
        data["built_in"] = int(self.built_in)
        data["sort_key"] = self.sort_key.value
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> TableauFilterState:
        data = data or {}
        return cls(
            explicit=TriState.parse(data.get("explicit")),
            embedded=TriState.parse(data.get("embedded")),
            built_in=TriState.parse(data.get("built_in")),
            sort_key=SortKey(data.get("sort_key") or SortKey.NAME.value),
            descending=parse_bool(data.get("descending")),
        )
