from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State, dcc, exceptions

from viz_dashboard.ui.ids import IDs

if TYPE_CHECKING:
    from viz_dashboard.ui.config import AppConfig

logger = logging.getLogger(__name__)

DOWNLOAD_FILENAME = "data_points.csv"


def register_io_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    sessions = ctx.sessions

    # ---------------------------------------------------------
    # Download the displayed dataset as CSV
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_DATA, "data"),
        Input(IDs.Control.DOWNLOAD_DATA_BTN, "n_clicks"),
        State(IDs.Store.SESSION_ID, "data"),
        prevent_initial_call=True,
    )
    def download_current_data(n_clicks, session_id):
        if not n_clicks:
            raise exceptions.PreventUpdate

        controller = sessions.get(session_id)
        snapshot = controller.snapshot if controller is not None else None
        if snapshot is None:
            raise exceptions.PreventUpdate

        df = snapshot.dataset.to_frame()
        logger.info("download_data", extra={"n_records": len(df)})
        return dcc.send_data_frame(df.to_csv, DOWNLOAD_FILENAME, index=False)
