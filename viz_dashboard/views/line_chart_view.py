from __future__ import annotations

from viz_dashboard.core.base_chart import BaseChart
from viz_dashboard.core.dataset import Dataset
from viz_dashboard.core.geometry import ChartGeometry, line_chart_geometry


class LineChartView(BaseChart):
    """
    Monotone line visiting every record in dataset order.

    Records are categories, not a continuous series, so the curve must not
    invent peaks or dips between neighbouring points.
    """

    kind = "line"
    label = "Line chart"

    def compute_data(self, dataset: Dataset) -> ChartGeometry:
        scales = self.build_scales(dataset)
        return line_chart_geometry(
            dataset,
            self.spec.metric,
            scales,
            plot_width=self.layout.plot_width,
            plot_height=self.layout.plot_height,
            tick_count=self.layout.tick_count,
        )
