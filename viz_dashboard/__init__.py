"""
Top-level package for the data visualization dashboard.

This package exposes the core architecture (domain, views, UI adapters).
Most code should import from submodules such as:
    viz_dashboard.core
    viz_dashboard.views
    viz_dashboard.services
    viz_dashboard.ui
"""

__all__: list[str] = []
