from __future__ import annotations

from typing import Any, List, Optional

import dash_bootstrap_components as dbc
import pandas as pd
from dash import dcc, html

from viz_dashboard.core.dataset import Dataset, Record
from viz_dashboard.ui.ids import IDs

# (label, attribute) pairs shown under each record title, in display order
RECORD_FIELDS = (
    ("Topic", "topic"),
    ("Start Year", "start_year"),
    ("End Year", "end_year"),
    ("Intensity", "intensity"),
    ("Likelihood", "likelihood"),
    ("Relevance", "relevance"),
    ("Sector", "sector"),
    ("Region", "region"),
    ("Country", "country"),
    ("City", "city"),
)


def format_published(value: Optional[str]) -> str:
    """Locale date string for `published`; blank when missing or unparseable."""
    if not value:
        return ""
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return ""
    return ts.strftime("%x")


def _display(value: Any) -> str:
    return "" if value is None else str(value)


def build_record_item(record: Record) -> html.Li:
    return html.Li(
        [
            html.H3(record.title, className="h6 mb-1"),
            *[
                html.P(f"{label}: {_display(getattr(record, attr))}", className="mb-0 small")
                for label, attr in RECORD_FIELDS
            ],
            html.P(f"Published: {format_published(record.published)}", className="mb-0 small"),
        ],
        className="vd-record list-group-item",
    )


def build_record_items(dataset: Dataset) -> List[html.Li]:
    return [build_record_item(r) for r in dataset]


def build_record_list_panel() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.H2("Detailed Data Points", className="h5 mb-0"),
                        html.Span(id=IDs.Control.RECORD_COUNT, className="ms-2 text-muted small"),
                        dbc.Button(
                            "Download data (CSV)",
                            id=IDs.Control.DOWNLOAD_DATA_BTN,
                            color="secondary",
                            size="sm",
                            className="ms-auto",
                        ),
                        dcc.Download(id=IDs.Control.DOWNLOAD_DATA),
                    ],
                    className="d-flex align-items-center",
                ),
            ),
            dbc.CardBody(html.Ul(id=IDs.Control.RECORD_LIST, className="list-group list-group-flush")),
        ],
        className="vd-records mb-4",
    )
