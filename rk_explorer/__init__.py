"""
Top-level package for the Runge-Kutta tableau explorer.

This package exposes the core architecture (domain, store, views, UI adapters).
Most code should import from submodules such as:
    rk_explorer.core
    rk_explorer.store
    rk_explorer.views
    rk_explorer.ui
"""

__all__: list[str] = []
