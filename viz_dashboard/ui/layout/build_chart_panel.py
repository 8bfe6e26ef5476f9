from __future__ import annotations

from typing import Sequence

import dash_bootstrap_components as dbc
from dash import dcc

from viz_dashboard.config.model import ChartLayout
from viz_dashboard.core.chart_spec import ChartSpec
from viz_dashboard.ui.ids import IDs


def build_chart_panel(specs: Sequence[ChartSpec], layout: ChartLayout) -> dbc.Row:
    """One fixed-size graph per chart slot; the graph id is the slot id."""
    return dbc.Row(
        [
            dbc.Col(
                dbc.Card(
                    [
                        dbc.CardHeader(spec.title, className="small fw-semibold"),
                        dbc.CardBody(
                            dcc.Graph(
                                id=spec.slot_id,
                                className="vd-chart",
                                style={"width": f"{layout.width}px", "height": f"{layout.height}px"},
                                config={"displayModeBar": False, "responsive": False},
                            ),
                            className="p-2",
                        ),
                    ],
                ),
                xl=6,
                className="mb-3",
            )
            for spec in specs
        ],
        id=IDs.Control.CHARTS_CONTAINER,
        className="vd-charts",
    )
