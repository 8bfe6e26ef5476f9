from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import dash_bootstrap_components as dbc
from dash import Dash

from viz_dashboard.config.loader import load_global_config
from viz_dashboard.core.chart_registry import ChartRegistry
from viz_dashboard.core.chart_spec import DEFAULT_CHART_SPECS
from viz_dashboard.services.dashboard_controller import DashboardController, Fetcher
from viz_dashboard.services.data_fetch import DataFetchController
from viz_dashboard.services.session_manager import SessionManager
from viz_dashboard.ui.config import AppConfig
from viz_dashboard.ui.layout.build_layout import build_layout
from viz_dashboard.ui.callbacks.callbacks_filters import register_filter_callbacks
from viz_dashboard.ui.callbacks.callbacks_render import register_render_callbacks
from viz_dashboard.ui.callbacks.callbacks_io import register_io_callbacks

logger = logging.getLogger(__name__)


def build_chart_registry() -> ChartRegistry:
    from viz_dashboard.views import BarChartView, LineChartView

    registry = ChartRegistry()
    registry.register(BarChartView)
    registry.register(LineChartView)
    return registry


def create_dash_app(
        config_root: Path | str = Path("config"),
        fetcher: Optional[Fetcher] = None,
) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Services
    if fetcher is None:
        fetcher = DataFetchController(
            endpoint=global_config.endpoint,
            timeout=global_config.request_timeout,
        )
    registry = build_chart_registry()

    def new_controller() -> DashboardController:
        return DashboardController(
            fetcher=fetcher,
            registry=registry,
            chart_specs=DEFAULT_CHART_SPECS,
            layout=global_config.chart_layout,
            stale_policy=global_config.stale_response_policy,
        )

    # 3) One controller per page; the page-load callback creates it and does the first fetch
    sessions = SessionManager(new_controller)

    # 4) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        chart_specs=DEFAULT_CHART_SPECS,
        registry=registry,
        sessions=sessions,
    )
    ctx.validate()

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )
    app.title = global_config.ui_title
    app.layout = build_layout(ctx)

    # Register callbacks
    register_filter_callbacks(app, ctx)
    register_render_callbacks(app, ctx)
    register_io_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={"endpoint": global_config.endpoint, "slots": ctx.slot_ids},
    )
    return app
