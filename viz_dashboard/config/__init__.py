"""
Config package for viz_dashboard.

Responsible for:
- config models (GlobalConfig, ChartLayout, Margin)
- loading global.json with environment overrides
"""

from .model import GlobalConfig, ChartLayout, Margin
from .loader import load_global_config

__all__ = ["GlobalConfig", "ChartLayout", "Margin", "load_global_config"]
