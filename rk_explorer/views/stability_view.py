from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np
import plotly.graph_objects as go

from rk_explorer.core.base_view import BaseView
from rk_explorer.core.tableau import ButcherTableau

# |R(z)| above this is drawn flat so the unit level set stays readable
MAGNITUDE_CAP = 2.0


def stability_function(tableau: ButcherTableau, z: np.ndarray) -> np.ndarray:
    """
    R(z) = det(I - zA + z 1 b^T) / det(I - zA), evaluated elementwise over z.

    Poles of implicit methods come out as inf rather than raising.
    """
    s = tableau.stages
    zs = np.asarray(z, dtype=complex).reshape(-1, 1, 1)
    eye = np.eye(s)
    lhs = eye - zs * tableau.a
    num = lhs + zs * np.outer(np.ones(s), tableau.b)
    with np.errstate(divide="ignore", invalid="ignore"):
        values = np.linalg.det(num) / np.linalg.det(lhs)
    return values.reshape(np.shape(z))


class StabilityRegionView(BaseView):
    """
    Linear stability region of the method: where |R(z)| <= 1 for the test
    equation y' = lambda y, z = h * lambda.

    - filled contours of |R(z)|, capped at MAGNITUDE_CAP
    - the |R(z)| = 1 boundary drawn as a line
    """

    id = "stability"
    label = "Stability Region"

    resolution = 241

    def _extent(self) -> Dict[str, float]:
        if self.registration.is_explicit:
            return {"re_min": -6.0, "re_max": 2.0, "im_max": 4.0}
        return {"re_min": -10.0, "re_max": 10.0, "im_max": 10.0}

    def compute_data(self) -> Optional[Dict[str, Any]]:
        tableau = self.registration.tableau
        if tableau is None:
            return None

        extent = self._extent()
        re = np.linspace(extent["re_min"], extent["re_max"], self.resolution)
        im = np.linspace(-extent["im_max"], extent["im_max"], self.resolution)
        grid = re[np.newaxis, :] + 1j * im[:, np.newaxis]

        magnitude = np.abs(stability_function(tableau, grid))
        magnitude = np.nan_to_num(magnitude, nan=MAGNITUDE_CAP, posinf=MAGNITUDE_CAP)

        return {
            "re": re,
            "im": im,
            "magnitude": np.minimum(magnitude, MAGNITUDE_CAP),
        }

    def render_figure(self, data: Dict[str, Any]) -> go.Figure:
        if not data:
            return self.empty_figure("No data to show")

        fig = go.Figure()
        fig.add_trace(
            go.Contour(
                x=data["re"],
                y=data["im"],
                z=data["magnitude"],
                colorscale="Blues_r",
                contours=dict(start=0.0, end=MAGNITUDE_CAP, size=0.1),
                colorbar=dict(title="|R(z)|"),
                name="|R(z)|",
                hovertemplate="Re z=%{x:.3f}<br>Im z=%{y:.3f}<br>|R|=%{z:.3f}<extra></extra>",
            )
        )
        fig.add_trace(
            go.Contour(
                x=data["re"],
                y=data["im"],
                z=data["magnitude"],
                contours=dict(start=1.0, end=1.0, size=1.0, coloring="lines"),
                line=dict(color="black", width=2),
                showscale=False,
                name="|R(z)| = 1",
                hoverinfo="skip",
            )
        )
        fig.update_xaxes(title_text="Re(z)", zeroline=True)
        fig.update_yaxes(title_text="Im(z)", zeroline=True, scaleanchor="x", scaleratio=1)
        fig.update_layout(
            title=f"{self.registration.name}: linear stability region",
            height=520,
            margin=dict(l=40, r=40, b=40, t=60),
        )
        return fig
