from __future__ import annotations

from dash import html

from viz_dashboard.config.model import GlobalConfig


def build_header(global_config: GlobalConfig) -> html.Div:
    return html.Div(
        html.H1(global_config.ui_title, className="mb-0"),
        className="vd-header py-3",
    )
