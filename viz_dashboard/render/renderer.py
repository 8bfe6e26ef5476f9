from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

import plotly.graph_objects as go

from viz_dashboard.config.model import ChartLayout
from viz_dashboard.core.geometry import ChartGeometry
from .surface import DrawingSurface, PlotlySurface

logger = logging.getLogger(__name__)

SurfaceFactory = Callable[[ChartLayout], DrawingSurface]


class ChartRenderer:
    """
    Owns one DrawingSurface per slot id and redraws slots on request.

    `render` always clears the slot first, so a slot only ever shows the
    geometry of the latest call. Surfaces are created on first use; the
    surface size comes from the layout and never from the data.
    """

    def __init__(
            self,
            layout: Optional[ChartLayout] = None,
            surface_factory: SurfaceFactory = PlotlySurface,
    ):
        self.layout = layout or ChartLayout()
        self._surface_factory = surface_factory
        self._surfaces: Dict[str, DrawingSurface] = {}

    def surface(self, slot_id: str) -> DrawingSurface:
        if slot_id not in self._surfaces:
            self._surfaces[slot_id] = self._surface_factory(self.layout)
        return self._surfaces[slot_id]

    def render(self, slot_id: str, geometry: ChartGeometry) -> None:
        surface = self.surface(slot_id)
        surface.clear()
        surface.draw(geometry)
        logger.debug(
            "slot_rendered",
            extra={"slot_id": slot_id, "kind": geometry.kind, "shapes": geometry.shape_count},
        )

    def figure(self, slot_id: str) -> go.Figure:
        return self.surface(slot_id).figure
