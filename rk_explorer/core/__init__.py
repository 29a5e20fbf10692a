"""
Core domain layer: tableau records, filter state, the grid view model,
view base class and the view registry
"""

from .tableau import ButcherTableau, TableauDefinition, TableauRegistration
from .filter_state import SortKey, TableauFilterState, TriState
from .view_model import TableauRow, build_view
from .base_view import BaseView
from .view_registry import ViewRegistry

__all__ = [
    "ButcherTableau",
    "TableauDefinition",
    "TableauRegistration",
    "SortKey",
    "TableauFilterState",
    "TriState",
    "TableauRow",
    "build_view",
    "BaseView",
    "ViewRegistry",
]
