"""
Tableau registry: the canonical collection of Butcher tableaus and its
change notifications.
"""

from .builtin import BUILTIN_TABLEAUS
from .registry import ButcherTableauRegistry, TableauSource

__all__ = ["BUILTIN_TABLEAUS", "ButcherTableauRegistry", "TableauSource"]
