from __future__ import annotations

from typing import Dict, Type

from viz_dashboard.config.model import ChartLayout
from .base_chart import BaseChart
from .chart_spec import ChartSpec


class ChartRegistry:
    """
    Registry for chart view classes, keyed by chart kind.

    Purpose:
    - Decouples the controller from concrete chart implementations by exposing {@link create(spec, layout)}
    - Stores classes, not instances, so each ChartSpec gets its own view

    Enforces:
    - only {@link BaseChart} subclasses can be registered
    - each 'kind' is unique across the registry
    """

    def __init__(self):
        self._charts: Dict[str, Type[BaseChart]] = {}

    def register(self, chart_cls: Type[BaseChart]) -> None:
        """
        :raises TypeError: if chart_cls is not a subclass of {@link BaseChart}
        :raises ValueError: if a chart with the same 'kind' already exists
        """
        if not isinstance(chart_cls, type) or not issubclass(chart_cls, BaseChart):
            raise TypeError(f"Chart '{chart_cls!r}' must be a subclass of BaseChart")

        if chart_cls.kind in self._charts:
            raise ValueError(f"Chart kind '{chart_cls.kind}' already registered")

        self._charts[chart_cls.kind] = chart_cls

    def create(self, spec: ChartSpec, layout: ChartLayout) -> BaseChart:
        """
        Instantiate the chart view for spec.kind.

        :raises KeyError: if no chart with the given kind exists in the registry
        """
        try:
            cls = self._charts[spec.kind]
        except KeyError:
            raise KeyError(f"Chart kind '{spec.kind}' not found")
        return cls(spec, layout)
