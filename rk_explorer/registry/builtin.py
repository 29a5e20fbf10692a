from __future__ import annotations

from typing import List

import numpy as np

from rk_explorer.core.tableau import ButcherTableau, TableauDefinition

# EXPLICIT =============================================================================

EXPLICIT_EULER = TableauDefinition(
    id="explicit-euler",
    name="Explicit Euler",
    tableau=ButcherTableau(a=[[0.0]], b=[1.0], c=[0.0]),
    order=1,
    description="Forward Euler, the one-stage explicit method.",
)

HEUN = TableauDefinition(
    id="heun",
    name="Heun",
    tableau=ButcherTableau(
        a=[[0.0, 0.0], [1.0, 0.0]],
        b=[1 / 2, 1 / 2],
        c=[0.0, 1.0],
    ),
    order=2,
    description="Explicit trapezoidal rule.",
)

MIDPOINT = TableauDefinition(
    id="explicit-midpoint",
    name="Explicit Midpoint",
    tableau=ButcherTableau(
        a=[[0.0, 0.0], [1 / 2, 0.0]],
        b=[0.0, 1.0],
        c=[0.0, 1 / 2],
    ),
    order=2,
)

RALSTON = TableauDefinition(
    id="ralston",
    name="Ralston",
    tableau=ButcherTableau(
        a=[[0.0, 0.0], [2 / 3, 0.0]],
        b=[1 / 4, 3 / 4],
        c=[0.0, 2 / 3],
    ),
    order=2,
    description="Second order method with minimal truncation error bound.",
)

KUTTA3 = TableauDefinition(
    id="kutta-3",
    name="Kutta 3",
    tableau=ButcherTableau(
        a=[[0.0, 0.0, 0.0], [1 / 2, 0.0, 0.0], [-1.0, 2.0, 0.0]],
        b=[1 / 6, 2 / 3, 1 / 6],
        c=[0.0, 1 / 2, 1.0],
    ),
    order=3,
)

RK4 = TableauDefinition(
    id="rk4",
    name="Classic Runge-Kutta",
    tableau=ButcherTableau(
        a=[
            [0.0, 0.0, 0.0, 0.0],
            [1 / 2, 0.0, 0.0, 0.0],
            [0.0, 1 / 2, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
        ],
        b=[1 / 6, 1 / 3, 1 / 3, 1 / 6],
        c=[0.0, 1 / 2, 1 / 2, 1.0],
    ),
    order=4,
    description="The classic fourth order method.",
)

RULE_38 = TableauDefinition(
    id="rk4-3-8",
    name="3/8-Rule",
    tableau=ButcherTableau(
        a=[
            [0.0, 0.0, 0.0, 0.0],
            [1 / 3, 0.0, 0.0, 0.0],
            [-1 / 3, 1.0, 0.0, 0.0],
            [1.0, -1.0, 1.0, 0.0],
        ],
        b=[1 / 8, 3 / 8, 3 / 8, 1 / 8],
        c=[0.0, 1 / 3, 2 / 3, 1.0],
    ),
    order=4,
)

# EXPLICIT EMBEDDED ====================================================================

BOGACKI_SHAMPINE = TableauDefinition(
    id="bogacki-shampine",
    name="Bogacki-Shampine",
    tableau=ButcherTableau(
        a=[
            [0.0, 0.0, 0.0, 0.0],
            [1 / 2, 0.0, 0.0, 0.0],
            [0.0, 3 / 4, 0.0, 0.0],
            [2 / 9, 1 / 3, 4 / 9, 0.0],
        ],
        b=[2 / 9, 1 / 3, 4 / 9, 0.0],
        c=[0.0, 1 / 2, 3 / 4, 1.0],
        b_hat=[7 / 24, 1 / 4, 1 / 3, 1 / 8],
    ),
    order=3,
    b1_order=3,
    b2_order=2,
    description="3(2) pair with the FSAL property, basis of ode23.",
)

FEHLBERG = TableauDefinition(
    id="fehlberg-45",
    name="Runge-Kutta-Fehlberg",
    tableau=ButcherTableau(
        a=[
            [0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
            [1 / 4, 0.0, 0.0, 0.0, 0.0, 0.0],
            [3 / 32, 9 / 32, 0.0, 0.0, 0.0, 0.0],
            [1932 / 2197, -7200 / 2197, 7296 / 2197, 0.0, 0.0, 0.0],
            [439 / 216, -8.0, 3680 / 513, -845 / 4104, 0.0, 0.0],
            [-8 / 27, 2.0, -3544 / 2565, 1859 / 4104, -11 / 40, 0.0],
        ],
        b=[16 / 135, 0.0, 6656 / 12825, 28561 / 56430, -9 / 50, 2 / 55],
        c=[0.0, 1 / 4, 3 / 8, 12 / 13, 1.0, 1 / 2],
        b_hat=[25 / 216, 0.0, 1408 / 2565, 2197 / 4104, -1 / 5, 0.0],
    ),
    order=5,
    b1_order=5,
    b2_order=4,
)

CASH_KARP = TableauDefinition(
    id="cash-karp",
    name="Cash-Karp",
    tableau=ButcherTableau(
        a=[
            [0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
            [1 / 5, 0.0, 0.0, 0.0, 0.0, 0.0],
            [3 / 40, 9 / 40, 0.0, 0.0, 0.0, 0.0],
            [3 / 10, -9 / 10, 6 / 5, 0.0, 0.0, 0.0],
            [-11 / 54, 5 / 2, -70 / 27, 35 / 27, 0.0, 0.0],
            [1631 / 55296, 175 / 512, 575 / 13824, 44275 / 110592, 253 / 4096, 0.0],
        ],
        b=[37 / 378, 0.0, 250 / 621, 125 / 594, 0.0, 512 / 1771],
        c=[0.0, 1 / 5, 3 / 10, 3 / 5, 1.0, 7 / 8],
        b_hat=[2825 / 27648, 0.0, 18575 / 48384, 13525 / 55296, 277 / 14336, 1 / 4],
    ),
    order=5,
    b1_order=5,
    b2_order=4,
)

DORMAND_PRINCE = TableauDefinition(
    id="dormand-prince",
    name="Dormand-Prince",
    tableau=ButcherTableau(
        a=[
            [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
            [1 / 5, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
            [3 / 40, 9 / 40, 0.0, 0.0, 0.0, 0.0, 0.0],
            [44 / 45, -56 / 15, 32 / 9, 0.0, 0.0, 0.0, 0.0],
            [19372 / 6561, -25360 / 2187, 64448 / 6561, -212 / 729, 0.0, 0.0, 0.0],
            [9017 / 3168, -355 / 33, 46732 / 5247, 49 / 176, -5103 / 18656, 0.0, 0.0],
            [35 / 384, 0.0, 500 / 1113, 125 / 192, -2187 / 6784, 11 / 84, 0.0],
        ],
        b=[35 / 384, 0.0, 500 / 1113, 125 / 192, -2187 / 6784, 11 / 84, 0.0],
        c=[0.0, 1 / 5, 3 / 10, 4 / 5, 8 / 9, 1.0, 1.0],
        b_hat=[5179 / 57600, 0.0, 7571 / 16695, 393 / 640, -92097 / 339200, 187 / 2100, 1 / 40],
    ),
    order=5,
    b1_order=5,
    b2_order=4,
    description="DOPRI5, the basis of ode45.",
)

# IMPLICIT =============================================================================

BACKWARD_EULER = TableauDefinition(
    id="backward-euler",
    name="Backward Euler",
    tableau=ButcherTableau(a=[[1.0]], b=[1.0], c=[1.0]),
    order=1,
)

IMPLICIT_MIDPOINT = TableauDefinition(
    id="implicit-midpoint",
    name="Implicit Midpoint",
    tableau=ButcherTableau(a=[[1 / 2]], b=[1.0], c=[1 / 2]),
    order=2,
)

CRANK_NICOLSON = TableauDefinition(
    id="crank-nicolson",
    name="Crank-Nicolson",
    tableau=ButcherTableau(
        a=[[0.0, 0.0], [1 / 2, 1 / 2]],
        b=[1 / 2, 1 / 2],
        c=[0.0, 1.0],
    ),
    order=2,
    description="Implicit trapezoidal rule.",
)

_GAMMA = (2.0 - np.sqrt(2.0)) / 2.0

SDIRK2 = TableauDefinition(
    id="sdirk-2",
    name="SDIRK 2",
    tableau=ButcherTableau(
        a=[[_GAMMA, 0.0], [1 - _GAMMA, _GAMMA]],
        b=[1 - _GAMMA, _GAMMA],
        c=[_GAMMA, 1.0],
    ),
    order=2,
    description="L-stable two-stage singly diagonally implicit method.",
)

_SQ3 = np.sqrt(3.0)

GAUSS_LEGENDRE_4 = TableauDefinition(
    id="gauss-legendre-4",
    name="Gauss-Legendre 4",
    tableau=ButcherTableau(
        a=[[1 / 4, 1 / 4 - _SQ3 / 6], [1 / 4 + _SQ3 / 6, 1 / 4]],
        b=[1 / 2, 1 / 2],
        c=[1 / 2 - _SQ3 / 6, 1 / 2 + _SQ3 / 6],
    ),
    order=4,
)

RADAU_IIA_3 = TableauDefinition(
    id="radau-iia-3",
    name="Radau IIA 3",
    tableau=ButcherTableau(
        a=[[5 / 12, -1 / 12], [3 / 4, 1 / 4]],
        b=[3 / 4, 1 / 4],
        c=[1 / 3, 1.0],
    ),
    order=3,
)


BUILTIN_TABLEAUS: List[TableauDefinition] = [
    EXPLICIT_EULER,
    HEUN,
    MIDPOINT,
    RALSTON,
    KUTTA3,
    RK4,
    RULE_38,
    BOGACKI_SHAMPINE,
    FEHLBERG,
    CASH_KARP,
    DORMAND_PRINCE,
    BACKWARD_EULER,
    IMPLICIT_MIDPOINT,
    CRANK_NICOLSON,
    SDIRK2,
    GAUSS_LEGENDRE_4,
    RADAU_IIA_3,
]
