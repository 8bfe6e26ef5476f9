from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .dataset import Dataset
from .scales import Scales

Point = Tuple[float, float]

X_LABEL_ROTATION = -45
X_LABEL_ANCHOR = "end"


@dataclass(frozen=True)
class Rect:
    """One bar, in plot-area pixels (origin top-left, y grows downward)."""
    x: float
    y: float
    width: float
    height: float
    label: str
    value: Optional[float]


@dataclass(frozen=True)
class CubicSegment:
    """Bezier segment from the previous point through two control points to `end`."""
    c1: Point
    c2: Point
    end: Point


@dataclass(frozen=True)
class LinePath:
    """
    A smoothed line through `points`, in the order given.

    `segments` is empty for a single point, and for two points holds a single
    straight segment expressed as a degenerate cubic.
    """
    points: Tuple[Point, ...]
    segments: Tuple[CubicSegment, ...]
    labels: Tuple[str, ...] = ()
    values: Tuple[Optional[float], ...] = ()

    def to_svg(self) -> str:
        if not self.points:
            return ""
        x0, y0 = self.points[0]
        parts = [f"M{_fmt(x0)},{_fmt(y0)}"]
        for seg in self.segments:
            parts.append(
                "C"
                f"{_fmt(seg.c1[0])},{_fmt(seg.c1[1])},"
                f"{_fmt(seg.c2[0])},{_fmt(seg.c2[1])},"
                f"{_fmt(seg.end[0])},{_fmt(seg.end[1])}"
            )
        return "".join(parts)


@dataclass(frozen=True)
class Tick:
    position: float
    label: str


@dataclass(frozen=True)
class Axis:
    orient: str
    ticks: Tuple[Tick, ...]
    label_rotation: float = 0
    label_anchor: str = "middle"


@dataclass(frozen=True)
class ChartGeometry:
    """Everything a surface needs to draw one chart; coordinates are plot-area pixels."""
    kind: str
    metric: str
    plot_width: float
    plot_height: float
    x_axis: Axis
    y_axis: Axis
    rects: Tuple[Rect, ...] = ()
    path: Optional[LinePath] = None

    @property
    def shape_count(self) -> int:
        return len(self.rects) + (1 if self.path is not None else 0)


def _fmt(v: float) -> str:
    return f"{v:.3f}".rstrip("0").rstrip(".")


# ---------------------------------------------------------------------------
# Axes
# ---------------------------------------------------------------------------
def x_axis(scales: Scales) -> Axis:
    """Bottom axis: one tick per band at its centre, labelled with the title."""
    band = scales.x
    tick_list = tuple(Tick(band.center(i), label) for i, label in enumerate(band.domain))
    return Axis(
        orient="bottom",
        ticks=tick_list,
        label_rotation=X_LABEL_ROTATION,
        label_anchor=X_LABEL_ANCHOR,
    )


def y_axis(scales: Scales, count: int = 10) -> Axis:
    y = scales.y
    fmt = y.tick_format(count)
    return Axis(
        orient="left",
        ticks=tuple(Tick(y(v), fmt(v)) for v in y.ticks(count)),
        label_anchor="end",
    )


# ---------------------------------------------------------------------------
# Bars
# ---------------------------------------------------------------------------
def bar_rects(dataset: Dataset, metric: str, scales: Scales, plot_height: float) -> Tuple[Rect, ...]:
    """
    One rect per record. A record missing the metric is drawn as a zero-height
    bar on the baseline so its band stays visible as an empty slot.
    """
    rects: List[Rect] = []
    for i, record in enumerate(dataset):
        value = record.metric(metric)
        y = scales.y(value if value is not None else 0)
        rects.append(
            Rect(
                x=scales.x.at(i),
                y=y,
                width=scales.x.bandwidth,
                height=plot_height - y,
                label=record.title,
                value=value,
            )
        )
    return tuple(rects)


# ---------------------------------------------------------------------------
# Monotone line
# ---------------------------------------------------------------------------
def _sign(x: float) -> int:
    return -1 if x < 0 else 1


def _interior_tangent(p0: Point, p1: Point, p2: Point) -> float:
    """
    Tangent at p1 from its neighbours (Steffen's method).

    Zero at a local extremum, and never steeper than either adjacent secant,
    so the curve cannot overshoot the data.
    """
    h0 = p1[0] - p0[0]
    h1 = p2[0] - p1[0]
    if h0 == 0 or h1 == 0:
        return 0.0
    s0 = (p1[1] - p0[1]) / h0
    s1 = (p2[1] - p1[1]) / h1
    p = (s0 * h1 + s1 * h0) / (h0 + h1)
    return (_sign(s0) + _sign(s1)) * min(abs(s0), abs(s1), 0.5 * abs(p))


def _end_tangent(p0: Point, p1: Point, t: float) -> float:
    """One-sided tangent for the first or last point, given the neighbour's tangent."""
    h = p1[0] - p0[0]
    return (3 * (p1[1] - p0[1]) / h - t) / 2 if h else t


def _segment(p0: Point, p1: Point, t0: float, t1: float) -> CubicSegment:
    dx = (p1[0] - p0[0]) / 3
    return CubicSegment(
        c1=(p0[0] + dx, p0[1] + dx * t0),
        c2=(p1[0] - dx, p1[1] - dx * t1),
        end=p1,
    )


def monotone_segments(points: Sequence[Point]) -> Tuple[CubicSegment, ...]:
    """
    Cubic segments for a monotone-in-x interpolation through `points`.

    Points are visited in the order given. Consecutive coincident points are
    collapsed.
    """
    pts: List[Point] = []
    for pt in points:
        if not pts or pts[-1] != pt:
            pts.append(pt)

    n = len(pts)
    if n < 2:
        return ()
    if n == 2:
        (x0, y0), (x1, y1) = pts
        slope = (y1 - y0) / (x1 - x0) if x1 != x0 else 0.0
        return (_segment(pts[0], pts[1], slope, slope),)

    tangents = [0.0] * n
    for i in range(1, n - 1):
        tangents[i] = _interior_tangent(pts[i - 1], pts[i], pts[i + 1])
    tangents[0] = _end_tangent(pts[0], pts[1], tangents[1])
    tangents[-1] = _end_tangent(pts[-2], pts[-1], tangents[-2])

    return tuple(
        _segment(pts[i], pts[i + 1], tangents[i], tangents[i + 1])
        for i in range(n - 1)
    )


def line_path(dataset: Dataset, metric: str, scales: Scales) -> Optional[LinePath]:
    """
    Path through (band left edge, y(metric)) for every record in dataset order.
    Missing values are drawn on the baseline. None for an empty dataset.
    """
    if dataset.is_empty:
        return None
    points: List[Point] = []
    values: List[Optional[float]] = []
    for i, record in enumerate(dataset):
        value = record.metric(metric)
        values.append(value)
        points.append((scales.x.at(i), scales.y(value if value is not None else 0)))
    return LinePath(
        points=tuple(points),
        segments=monotone_segments(points),
        labels=tuple(dataset.titles()),
        values=tuple(values),
    )


# ---------------------------------------------------------------------------
# Whole charts
# ---------------------------------------------------------------------------
def bar_chart_geometry(
        dataset: Dataset,
        metric: str,
        scales: Scales,
        plot_width: float,
        plot_height: float,
        tick_count: int = 10,
) -> ChartGeometry:
    return ChartGeometry(
        kind="bar",
        metric=metric,
        plot_width=plot_width,
        plot_height=plot_height,
        x_axis=x_axis(scales),
        y_axis=y_axis(scales, tick_count),
        rects=bar_rects(dataset, metric, scales, plot_height),
    )


def line_chart_geometry(
        dataset: Dataset,
        metric: str,
        scales: Scales,
        plot_width: float,
        plot_height: float,
        tick_count: int = 10,
) -> ChartGeometry:
    return ChartGeometry(
        kind="line",
        metric=metric,
        plot_width=plot_width,
        plot_height=plot_height,
        x_axis=x_axis(scales),
        y_axis=y_axis(scales, tick_count),
        path=line_path(dataset, metric, scales),
    )
