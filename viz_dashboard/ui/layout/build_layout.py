from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from viz_dashboard.core.filter_state import FilterSet
from viz_dashboard.ui.ids import IDs
from viz_dashboard.ui.layout.build_chart_panel import build_chart_panel
from viz_dashboard.ui.layout.build_filter_panel import build_filter_panel
from viz_dashboard.ui.layout.build_header import build_header
from viz_dashboard.ui.layout.build_record_list import build_record_list_panel

if TYPE_CHECKING:
    from viz_dashboard.ui.config import AppConfig


def build_layout(ctx: AppConfig) -> dbc.Container:
    return dbc.Container(
        fluid=True,
        className="vd-root",
        children=[
            build_header(ctx.global_config),
            # Per page: the session id is assigned by the first filter callback.
            dcc.Store(id=IDs.Store.SESSION_ID, storage_type="memory"),
            dcc.Store(id=IDs.Store.DATASET_VERSION, storage_type="memory"),
            build_filter_panel(FilterSet()),
            build_chart_panel(list(ctx.chart_specs), ctx.global_config.chart_layout),
            build_record_list_panel(),
        ],
    )
