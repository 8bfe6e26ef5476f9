from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import dash
import plotly.graph_objects as go
from dash import Input, Output, State, exceptions, html

from viz_dashboard.ui.ids import IDs
from viz_dashboard.ui.layout.build_record_list import build_record_items

if TYPE_CHECKING:
    from viz_dashboard.ui.config import AppConfig

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helper: Empty/Error Figures
# -----------------------------------------------------------------------------
def _message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=30, t=20, b=40))
    return fig


def _error_figure(details: str) -> go.Figure:
    return _message_figure("Something went wrong while rendering this chart.", details)


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    sessions = ctx.sessions
    slot_ids = ctx.slot_ids

    # ---------------------------------------------------------
    # Dataset version -> four charts + record list, one snapshot
    # ---------------------------------------------------------
    @app.callback(
        *[Output(slot_id, "figure") for slot_id in slot_ids],
        Output(IDs.Control.RECORD_LIST, "children"),
        Output(IDs.Control.RECORD_COUNT, "children"),
        Input(IDs.Store.DATASET_VERSION, "data"),
        State(IDs.Store.SESSION_ID, "data"),
    )
    def render_dataset(version: int | None, session_id: str | None):
        controller = sessions.get(session_id)
        if controller is None:
            raise exceptions.PreventUpdate

        # Read once: everything below comes from this one snapshot.
        snapshot = controller.snapshot
        if snapshot is None:
            raise exceptions.PreventUpdate

        figures = []
        for slot_id in slot_ids:
            fig = snapshot.figures.get(slot_id)
            if fig is None:
                logger.error("Missing figure for slot", extra={"slot_id": slot_id, "version": snapshot.version})
                fig = _error_figure(f"No figure was produced for '{slot_id}'.")
            figures.append(fig)

        try:
            items = build_record_items(snapshot.dataset)
        except Exception:
            logger.exception("Error rendering record list", extra={"version": snapshot.version})
            items = [html.Li("The data points could not be displayed.", className="list-group-item")]

        count = f"{len(snapshot.dataset)} records"
        return (*figures, items, count)
