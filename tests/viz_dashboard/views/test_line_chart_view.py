from viz_dashboard.config.model import ChartLayout
from viz_dashboard.core.chart_spec import ChartSpec
from viz_dashboard.core.dataset import Dataset, Record
from viz_dashboard.render.renderer import ChartRenderer
from viz_dashboard.views import LineChartView


def _make_dataset():
    return Dataset.from_records(
        [
            Record(title="X", start_year=2018),
            Record(title="Y", start_year=2016),
            Record(title="Z", start_year=None),
        ]
    )


def _make_view():
    return LineChartView(ChartSpec("start_year", "line"), ChartLayout())


def test_line_view_compute_data():
    geom = _make_view().compute_data(_make_dataset())

    assert geom.kind == "line"
    assert geom.rects == ()
    assert geom.path.labels == ("X", "Y", "Z")
    assert geom.path.values == (2018, 2016, None)
    assert geom.y_axis.ticks[-1].label == "2,200"


def test_line_view_render_draws_single_path():
    view = _make_view()
    renderer = ChartRenderer(view.layout)

    view.render(view.compute_data(_make_dataset()), renderer)

    shapes = renderer.figure("start_year-line-chart").layout.shapes
    assert len(shapes) == 1
    assert shapes[0].type == "path"
    assert shapes[0].path.startswith("M")


def test_line_view_empty_dataset():
    view = _make_view()
    renderer = ChartRenderer(view.layout)

    geom = view.compute_data(Dataset.empty())
    view.render(geom, renderer)

    assert geom.path is None
    assert len(renderer.figure("start_year-line-chart").layout.shapes) == 0
