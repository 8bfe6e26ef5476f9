from .bar_chart_view import BarChartView
from .line_chart_view import LineChartView

__all__ = ["BarChartView", "LineChartView"]
