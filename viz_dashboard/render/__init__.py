from .surface import DrawingSurface, PlotlySurface
from .renderer import ChartRenderer

__all__ = ["DrawingSurface", "PlotlySurface", "ChartRenderer"]
