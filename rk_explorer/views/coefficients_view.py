from __future__ import annotations

from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from rk_explorer.core.base_view import BaseView


class CoefficientsView(BaseView):
    """
    Heatmap of the stage matrix A, one row per stage labelled with its node c_i.

    Structural zeros are kept so explicit (strictly lower-triangular) and
    diagonally implicit shapes are visible at a glance.
    """

    id = "coefficients"
    label = "Coefficient Matrix"

    def compute_data(self) -> Optional[pd.DataFrame]:
        tableau = self.registration.tableau
        if tableau is None:
            return None

        stages = range(1, tableau.stages + 1)
        return pd.DataFrame(
            tableau.a,
            index=[f"stage {i} (c={c:.4g})" for i, c in zip(stages, tableau.c)],
            columns=[f"a[:, {j}]" for j in stages],
        )

    def render_figure(self, data: pd.DataFrame) -> go.Figure:
        if data is None or data.empty:
            return self.empty_figure("No data to show")

        bound = float(data.abs().to_numpy().max()) or 1.0

        fig = px.imshow(
            data,
            color_continuous_scale="RdBu",
            zmin=-bound,
            zmax=bound,
            aspect="auto",
            text_auto=".4g",
            labels=dict(x="Column", y="Stage", color="a_ij"),
        )
        fig.update_xaxes(side="top")
        fig.update_layout(
            title=f"{self.registration.name}: stage matrix",
            height=120 + 48 * len(data.index),
            margin=dict(l=40, r=40, b=40, t=80),
        )
        return fig
