from __future__ import annotations

from viz_dashboard.core.filter_state import FILTER_KEYS

__all__ = ["IDs", "filter_input_id", "filter_key_for_input"]

_FILTER_INPUT_PREFIX = "filter-"


class IDs:
    class Store:
        DATASET_VERSION = "dataset-version"
        SESSION_ID = "session-id"

    class Control:
        # Charts panel
        CHARTS_CONTAINER = "charts-container"

        # Record list
        RECORD_LIST = "record-list"
        RECORD_COUNT = "record-count"

        # Downloads
        DOWNLOAD_DATA = "download-data"
        DOWNLOAD_DATA_BTN = "download-data-btn"


def filter_input_id(key: str) -> str:
    return f"{_FILTER_INPUT_PREFIX}{key}"


def filter_key_for_input(component_id: str) -> str:
    """
    Inverse of filter_input_id.

    :raises KeyError: if component_id is not a filter input
    """
    if not component_id.startswith(_FILTER_INPUT_PREFIX):
        raise KeyError(component_id)
    key = component_id[len(_FILTER_INPUT_PREFIX):]
    if key not in FILTER_KEYS:
        raise KeyError(component_id)
    return key
