import pytest

from viz_dashboard.core.dataset import Dataset, Record
from viz_dashboard.core.geometry import (
    X_LABEL_ANCHOR,
    X_LABEL_ROTATION,
    bar_chart_geometry,
    line_chart_geometry,
    monotone_segments,
)
from viz_dashboard.core.scales import build_scales

PLOT_W = 530
PLOT_H = 340


def _make_dataset(values, metric="intensity"):
    return Dataset.from_records(
        [Record(title=title, **{metric: value}) for title, value in values]
    )


def _bar(ds, metric="intensity"):
    scales = build_scales(ds, metric, PLOT_W, PLOT_H)
    return bar_chart_geometry(ds, metric, scales, PLOT_W, PLOT_H)


def _line(ds, metric="intensity"):
    scales = build_scales(ds, metric, PLOT_W, PLOT_H)
    return line_chart_geometry(ds, metric, scales, PLOT_W, PLOT_H)


def test_empty_dataset_produces_no_shapes():
    bar = _bar(Dataset.empty())
    line = _line(Dataset.empty())

    assert bar.rects == ()
    assert bar.shape_count == 0
    assert line.path is None
    assert line.shape_count == 0
    assert bar.x_axis.ticks == ()


def test_taller_value_gives_taller_bar():
    geom = _bar(_make_dataset([("A", 3), ("B", 9)]))
    a, b = geom.rects

    assert b.height > a.height
    assert b.y < a.y
    assert a.y + a.height == pytest.approx(PLOT_H)
    assert b.y + b.height == pytest.approx(PLOT_H)
    assert a.width == b.width
    assert a.x < b.x


def test_missing_value_is_zero_height_bar():
    geom = _bar(_make_dataset([("A", None), ("B", 5)]))
    a, b = geom.rects

    assert a.height == 0
    assert a.y == PLOT_H
    assert a.value is None
    assert b.height == pytest.approx(PLOT_H)


def test_x_axis_labels_are_titles_rotated():
    geom = _bar(_make_dataset([("Long title one", 1), ("Two", 2), ("Long title one", 3)]))
    axis = geom.x_axis

    assert [t.label for t in axis.ticks] == ["Long title one", "Two", "Long title one"]
    assert axis.label_rotation == X_LABEL_ROTATION == -45
    assert axis.label_anchor == X_LABEL_ANCHOR == "end"
    # tick at the centre of each band
    for tick, rect in zip(axis.ticks, geom.rects):
        assert tick.position == pytest.approx(rect.x + rect.width / 2)


def test_y_axis_ticks_follow_scale():
    geom = _bar(_make_dataset([("A", 3), ("B", 9)]))
    labels = [t.label for t in geom.y_axis.ticks]

    assert labels[0] == "0"
    assert labels[-1] == "9"
    assert geom.y_axis.ticks[0].position == PLOT_H
    assert geom.y_axis.ticks[-1].position == 0


def test_line_visits_points_in_dataset_order():
    ds = _make_dataset([("X", 5), ("Y", 1), ("Z", 3)], metric="start_year")
    geom = _line(ds, metric="start_year")
    path = geom.path

    assert path.labels == ("X", "Y", "Z")
    xs = [p[0] for p in path.points]
    assert xs == sorted(xs)
    # not re-sorted by value: Y (smallest) is drawn lowest on screen, i.e. largest pixel y
    ys = [p[1] for p in path.points]
    assert ys[1] == max(ys)
    assert [seg.end for seg in path.segments] == list(path.points[1:])
    assert path.to_svg().startswith("M")
    assert path.to_svg().count("C") == 2


def test_line_does_not_overshoot():
    ds = _make_dataset(
        [("a", 1), ("b", 10), ("c", 2), ("d", 8), ("e", 8), ("f", 3), ("g", 9)],
        metric="relevance",
    )
    path = _line(ds, metric="relevance").path

    prev = path.points[0]
    for seg in path.segments:
        lo = min(prev[1], seg.end[1]) - 1e-9
        hi = max(prev[1], seg.end[1]) + 1e-9
        assert lo <= seg.c1[1] <= hi
        assert lo <= seg.c2[1] <= hi
        prev = seg.end


def test_flat_run_stays_flat():
    ds = _make_dataset([("a", 4), ("b", 4), ("c", 4)], metric="likelihood")
    path = _line(ds, metric="likelihood").path
    ys = {p[1] for p in path.points}
    for seg in path.segments:
        ys.update({seg.c1[1], seg.c2[1]})
    assert len(ys) == 1


def test_single_point_line_has_no_segments():
    path = _line(_make_dataset([("only", 2)])).path
    assert len(path.points) == 1
    assert path.segments == ()
    assert path.to_svg().count("C") == 0


def test_two_point_line_is_straight():
    (seg,) = monotone_segments([(0.0, 0.0), (3.0, 6.0)])
    assert seg.c1 == pytest.approx((1.0, 2.0))
    assert seg.c2 == pytest.approx((2.0, 4.0))


def test_missing_line_values_sit_on_baseline():
    path = _line(_make_dataset([("a", 2), ("b", None)])).path
    assert path.points[1][1] == PLOT_H
    assert path.values == (2, None)
