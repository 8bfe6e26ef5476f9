from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from viz_dashboard.config.model import ChartLayout
from .chart_spec import ChartSpec
from .dataset import Dataset
from .geometry import ChartGeometry
from .scales import Scales, build_scales

if TYPE_CHECKING:
    from viz_dashboard.render.renderer import ChartRenderer


class BaseChart(ABC):
    """
    Abstract base class for all chart views.

    Defines the contract that every chart in the dashboard must follow
    - expose a 'kind' - matched against ChartSpec.kind by the registry
    - expose a 'label' - used for UI/human-readable applications
    - implement 'compute_data' - turns a Dataset into ChartGeometry
    - 'render' pushes precomputed geometry into the chart's slot
    """

    kind: str = None
    label: str = None

    def __init__(self, spec: ChartSpec, layout: ChartLayout):
        self.spec = spec
        self.layout = layout

    @property
    def slot_id(self) -> str:
        return self.spec.slot_id

    @abstractmethod
    def compute_data(self, dataset: Dataset) -> ChartGeometry:
        """
        Compute the drawable geometry for this chart
        :param dataset: the Dataset snapshot being rendered
        :return: the ChartGeometry for the chart's metric
        """
        raise NotImplementedError()

    def render(self, geometry: ChartGeometry, renderer: ChartRenderer) -> None:
        renderer.render(self.slot_id, geometry)

    # ------------------------------------------------------------------
    # Common helpers for all charts
    # ------------------------------------------------------------------
    def build_scales(self, dataset: Dataset) -> Scales:
        """
        Fresh scales for this dataset. Never cached: a new Dataset always
        gets a new domain.
        """
        return build_scales(
            dataset,
            self.spec.metric,
            plot_width=self.layout.plot_width,
            plot_height=self.layout.plot_height,
            padding=self.layout.band_padding,
            tick_count=self.layout.tick_count,
        )
