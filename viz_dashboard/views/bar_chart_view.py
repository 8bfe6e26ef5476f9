from __future__ import annotations

from viz_dashboard.core.base_chart import BaseChart
from viz_dashboard.core.dataset import Dataset
from viz_dashboard.core.geometry import ChartGeometry, bar_chart_geometry


class BarChartView(BaseChart):
    """
    One bar per record, in dataset order, height = the chart's metric.
    """

    kind = "bar"
    label = "Bar chart"

    def compute_data(self, dataset: Dataset) -> ChartGeometry:
        scales = self.build_scales(dataset)
        return bar_chart_geometry(
            dataset,
            self.spec.metric,
            scales,
            plot_width=self.layout.plot_width,
            plot_height=self.layout.plot_height,
            tick_count=self.layout.tick_count,
        )
