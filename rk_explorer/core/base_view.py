from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import plotly.graph_objs as go

from .tableau import TableauRegistration

logger = logging.getLogger(__name__)


class BaseView(ABC):
    """
    Abstract base class for all tableau plot views.

    Defines the contract that every view in the app must follow
    - expose an 'id' - used internally
    - expose a 'label' - used for UI/human-readable applications
    - implement 'compute_data' - used to compute the plot data for the tableau
    - implement 'render_figure' - used to render the figure using Plotly
    """

    id: str = None
    label: str = None

    def __init__(self, registration: TableauRegistration):
        self.registration = registration

    @abstractmethod
    def compute_data(self) -> Any:
        """
        Compute the data for this view's tableau
        :return: data: whatever render_figure() expects, or None when there is nothing to plot
        """
        raise NotImplementedError()

    @abstractmethod
    def render_figure(self, data: Any) -> go.Figure:
        """
        Render the figure given the computed data
        :param data: the data provided by {@link compute_data()}
        :return: the Plotly figure for this tableau
        """
        raise NotImplementedError()

    # ------------------------------------------------------------------
    # Common helpers for all views
    # ------------------------------------------------------------------
    def timed_compute(self) -> Any:
        start = time.perf_counter()
        data = self.compute_data()
        logger.info(
            "view_compute",
            extra={
                "view_id": self.id,
                "tableau_id": self.registration.id,
                "elapsed_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return data

    def figure(self) -> go.Figure:
        data = self.timed_compute()
        if data is None:
            return self.empty_figure("No data to show")
        return self.render_figure(data)

    @staticmethod
    def empty_figure(message: str) -> go.Figure:
        """
        Standardised 'no data' figure used by all views.
        """
        fig = go.Figure()
        fig.update_layout(
            title=message,
            xaxis={"visible": False},
            yaxis={"visible": False},
        )
        return fig
