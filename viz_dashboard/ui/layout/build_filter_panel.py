from __future__ import annotations

from typing import Sequence

import dash_bootstrap_components as dbc
from dash import dcc, html

from viz_dashboard.core.filter_state import FILTER_FIELDS, FilterField, FilterSet
from viz_dashboard.ui.ids import filter_input_id


def build_filter_panel(
        filters: FilterSet,
        fields: Sequence[FilterField] = FILTER_FIELDS,
) -> dbc.Card:
    """
    One input per filter key. Every change event is forwarded as-is: no
    debounce and no submit button.
    """
    columns = [
        dbc.Col(
            html.Div(
                [
                    dbc.Label(f.label, html_for=filter_input_id(f.key), className="small mb-1"),
                    dcc.Input(
                        id=filter_input_id(f.key),
                        type=f.input_type,
                        value=filters.get(f.key),
                        debounce=False,
                        className="form-control form-control-sm",
                    ),
                ],
                className="vd-filter",
            ),
            md=4,
            lg=True,
            className="mb-2",
        )
        for f in fields
    ]

    return dbc.Card(
        [
            dbc.CardHeader("Filters", className="fw-semibold"),
            dbc.CardBody(dbc.Row(columns, className="g-2")),
        ],
        className="vd-filters mb-3",
    )
