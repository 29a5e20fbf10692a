from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Dict, List, Optional

import numpy as np

from .exceptions import TableauDefinitionError


def _as_vector(values: Any, name: str) -> np.ndarray:
    arr = np.array(values, dtype=float)
    if arr.ndim != 1:
        raise TableauDefinitionError(f"'{name}' must be a flat list of numbers, got shape {arr.shape}")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class ButcherTableau:
    """
    Coefficient table of a Runge-Kutta method.

    Fields:

    - a: the (s x s) stage matrix
    - b: the weights of the propagating solution
    - c: the nodes
    - b_hat: weights of the embedded solution, if the method is an embedded pair

    Arrays are copied and frozen on construction, so a tableau can be shared
    across snapshots without anyone mutating it underneath the store.
    """

    a: np.ndarray
    b: np.ndarray
    c: np.ndarray
    b_hat: Optional[np.ndarray] = None

    def __post_init__(self):
        a = np.array(self.a, dtype=float)
        if a.ndim != 2 or a.shape[0] != a.shape[1]:
            raise TableauDefinitionError(f"Stage matrix must be square, got shape {a.shape}")
        a.setflags(write=False)

        s = a.shape[0]
        b = _as_vector(self.b, "b")
        c = _as_vector(self.c, "c")
        if b.shape != (s,) or c.shape != (s,):
            raise TableauDefinitionError(
                f"Weights and nodes must have {s} entries, got b={b.shape[0]} c={c.shape[0]}"
            )

        b_hat = None
        if self.b_hat is not None:
            b_hat = _as_vector(self.b_hat, "b_hat")
            if b_hat.shape != (s,):
                raise TableauDefinitionError(f"Embedded weights must have {s} entries, got {b_hat.shape[0]}")

        object.__setattr__(self, "a", a)
        object.__setattr__(self, "b", b)
        object.__setattr__(self, "c", c)
        object.__setattr__(self, "b_hat", b_hat)

    @property
    def stages(self) -> int:
        return int(self.b.shape[0])

    @property
    def is_explicit(self) -> bool:
        # strictly lower triangular: nothing on or above the diagonal
        return not np.any(np.triu(self.a))

    @property
    def is_embedded(self) -> bool:
        return self.b_hat is not None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "a": self.a.tolist(),
            "b": self.b.tolist(),
            "c": self.c.tolist(),
        }
        if self.b_hat is not None:
            data["b_hat"] = self.b_hat.tolist()
        return data

    def to_latex(self, max_denominator: int = 10000) -> str:
        """
        Render the tableau as a LaTeX array in the usual layout:

            c | A
            --+----
              | b^T
              | b_hat^T   (embedded pairs only)
        """
        s = self.stages
        rows: List[str] = []
        for i in range(s):
            cells = [_latex_number(self.c[i], max_denominator)]
            cells += [_latex_number(x, max_denominator) for x in self.a[i]]
            rows.append(" & ".join(cells))
        body = " \\\\\n".join(rows)

        footer = " & ".join([""] + [_latex_number(x, max_denominator) for x in self.b])
        if self.b_hat is not None:
            footer += " \\\\\n" + " & ".join([""] + [_latex_number(x, max_denominator) for x in self.b_hat])

        columns = "c|" + "c" * s
        return f"\\begin{{array}}{{{columns}}}\n{body} \\\\\n\\hline\n{footer}\n\\end{{array}}"


def _latex_number(value: float, max_denominator: int) -> str:
    if value == 0:
        return "0"
    frac = Fraction(float(value)).limit_denominator(max_denominator)
    if abs(float(frac) - value) > 1e-12:
        return f"{value:.6g}"
    if frac.denominator == 1:
        return str(frac.numerator)
    sign = "-" if frac < 0 else ""
    return f"{sign}\\frac{{{abs(frac.numerator)}}}{{{frac.denominator}}}"


@dataclass(frozen=True)
class TableauDefinition:
    """
    A tableau as authored: coefficients plus the order metadata the author
    claims for it. The registry turns definitions into registrations.
    """

    id: str
    name: str
    tableau: ButcherTableau = field(compare=False, repr=False)
    order: int
    b1_order: Optional[int] = None
    b2_order: Optional[int] = None
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TableauDefinition:
        missing = [k for k in ("id", "name", "a", "b", "c", "order") if k not in data]
        if missing:
            raise TableauDefinitionError(f"Tableau definition is missing keys: {', '.join(missing)}")

        tableau = ButcherTableau(
            a=data["a"],
            b=data["b"],
            c=data["c"],
            b_hat=data.get("b_hat"),
        )
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            tableau=tableau,
            order=int(data["order"]),
            b1_order=_optional_int(data.get("b1_order")),
            b2_order=_optional_int(data.get("b2_order")),
            description=str(data.get("description", "")),
        )


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


@dataclass(frozen=True)
class TableauRegistration:
    """
    Record form of a tableau as exposed by the registry.

    - steps: number of stages
    - is_explicit: strictly lower-triangular stage matrix
    - is_embedded: carries a lower-order error estimator; only then are
      b1_order (propagating weights) and b2_order (embedded weights) set
    - is_built_in: ships with the app vs user-defined
    """

    id: str
    name: str
    steps: int
    is_embedded: bool
    is_explicit: bool
    is_built_in: bool
    order: int
    b1_order: Optional[int] = None
    b2_order: Optional[int] = None
    description: str = ""
    tableau: Optional[ButcherTableau] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_definition(cls, definition: TableauDefinition, *, built_in: bool) -> TableauRegistration:
        tableau = definition.tableau
        embedded = tableau.is_embedded
        if embedded:
            b1_order = definition.b1_order if definition.b1_order is not None else definition.order
            b2_order = definition.b2_order
        else:
            b1_order = b2_order = None

        return cls(
            id=definition.id,
            name=definition.name,
            steps=tableau.stages,
            is_embedded=embedded,
            is_explicit=tableau.is_explicit,
            is_built_in=built_in,
            order=definition.order,
            b1_order=b1_order,
            b2_order=b2_order,
            description=definition.description,
            tableau=tableau,
        )

