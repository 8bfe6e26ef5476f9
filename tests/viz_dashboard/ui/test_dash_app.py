import json

from dash import Dash

from viz_dashboard.config.model import ChartLayout
from viz_dashboard.core.chart_spec import ChartSpec
from viz_dashboard.core.dataset import Dataset
from viz_dashboard.ui.dash_app import build_chart_registry, create_dash_app
from viz_dashboard.ui.ids import IDs, filter_input_id
from viz_dashboard.views import BarChartView, LineChartView


class _FakeFetcher:
    def __init__(self):
        self.calls = []

    def fetch(self, filters):
        self.calls.append(filters)
        return Dataset.empty()


def _component_ids(component):
    ids = set()
    stack = [component]
    while stack:
        node = stack.pop()
        if isinstance(node, (list, tuple)):
            stack.extend(node)
            continue
        node_id = getattr(node, "id", None)
        if node_id is not None:
            ids.add(node_id)
        children = getattr(node, "children", None)
        if children is not None and not isinstance(children, str):
            stack.append(children)
    return ids


def _make_app(tmp_path):
    (tmp_path / "global.json").write_text(json.dumps({"ui_title": "Test Dashboard"}))
    fetcher = _FakeFetcher()
    return create_dash_app(tmp_path, fetcher=fetcher), fetcher


def test_build_chart_registry():
    registry = build_chart_registry()
    assert isinstance(registry.create(ChartSpec("intensity", "bar"), ChartLayout()), BarChartView)
    assert isinstance(registry.create(ChartSpec("start_year", "line"), ChartLayout()), LineChartView)


def test_create_dash_app_builds_layout(tmp_path):
    app, fetcher = _make_app(tmp_path)

    assert isinstance(app, Dash)
    assert app.title == "Test Dashboard"
    # no fetch until the page-load callback runs
    assert fetcher.calls == []

    ids = _component_ids(app.layout)
    for slot in (
        "intensity-bar-chart",
        "likelihood-bar-chart",
        "relevance-bar-chart",
        "start_year-line-chart",
    ):
        assert slot in ids
    assert IDs.Control.RECORD_LIST in ids
    assert IDs.Store.DATASET_VERSION in ids
    assert IDs.Store.SESSION_ID in ids
    assert filter_input_id("end_year") in ids
    assert filter_input_id("city") in ids


def test_create_dash_app_registers_callbacks(tmp_path):
    app, _ = _make_app(tmp_path)
    keys = " ".join(app.callback_map)

    assert f"{IDs.Store.DATASET_VERSION}.data" in keys
    assert f"{IDs.Store.SESSION_ID}.data" in keys
    assert "intensity-bar-chart.figure" in keys
    assert f"{IDs.Control.DOWNLOAD_DATA}.data" in keys
