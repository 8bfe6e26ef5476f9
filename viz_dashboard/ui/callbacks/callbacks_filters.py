from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence, Tuple

import dash
from dash import Input, Output, State, exceptions

from viz_dashboard.core.filter_state import FILTER_KEYS, FilterSet
from viz_dashboard.services.session_manager import SessionManager, generate_session_id
from viz_dashboard.ui.ids import IDs, filter_input_id, filter_key_for_input

if TYPE_CHECKING:
    from viz_dashboard.ui.config import AppConfig

logger = logging.getLogger(__name__)


def normalise_input_value(value: Any) -> Any:
    """A cleared numeric input arrives as None; the filter set uses "" for 'no constraint'."""
    return "" if value is None else value


def filter_set_from_inputs(values: Sequence[Any]) -> FilterSet:
    """The FilterSet a page is showing, from its inputs in FILTER_KEYS order."""
    if len(values) != len(FILTER_KEYS):
        raise ValueError(f"Expected {len(FILTER_KEYS)} filter values, got {len(values)}")
    return FilterSet.from_dict(
        {key: normalise_input_value(value) for key, value in zip(FILTER_KEYS, values)}
    )


def apply_filter_inputs(
        sessions: SessionManager,
        session_id: Optional[str],
        triggered_id: Optional[str],
        values: Sequence[Any],
) -> Tuple[int, str]:
    """
    Pure helper behind the filter callback: push the page's inputs into that
    page's controller and return (dataset version, session id) to publish.

    The query always reflects all nine inputs as the page shows them. A page
    without a known session (first load, or evicted) gets a fresh controller
    that renders the empty Dataset and then fetches; its version is returned
    even if that fetch failed. For a single edited input, a failed or
    discarded fetch raises PreventUpdate so nothing on screen changes.
    """
    filters = filter_set_from_inputs(values)

    if session_id is None or session_id not in sessions:
        session_id = session_id or generate_session_id()
        controller = sessions.get_or_create(session_id)
        controller.start(filters)
        return controller.version, session_id

    controller = sessions.get(session_id)
    if triggered_id is None:
        controller.replace_filters(filters)
        return controller.version, session_id

    key = filter_key_for_input(triggered_id)
    value = filters.get(key)
    if controller.filters.update(key, value) == filters:
        applied = controller.on_filter_changed(key, value)
    else:
        # Controller and page disagree on other keys; the page wins.
        applied = controller.replace_filters(filters)
    if not applied:
        raise exceptions.PreventUpdate
    return controller.version, session_id


def register_filter_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    sessions = ctx.sessions

    # ---------------------------------------------------------
    # Filter inputs -> fetch -> dataset version (per page session)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.DATASET_VERSION, "data"),
        Output(IDs.Store.SESSION_ID, "data"),
        *[Input(filter_input_id(key), "value") for key in FILTER_KEYS],
        State(IDs.Store.SESSION_ID, "data"),
    )
    def update_dataset_from_filters(*args: Any):
        *values, session_id = args
        triggered_id = dash.ctx.triggered_id
        try:
            return apply_filter_inputs(sessions, session_id, triggered_id, values)
        except exceptions.PreventUpdate:
            raise
        except Exception:
            logger.exception(
                "Error in update_dataset_from_filters",
                extra={"triggered_id": triggered_id, "session_id": session_id},
            )
            raise exceptions.PreventUpdate
