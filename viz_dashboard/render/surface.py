from __future__ import annotations

from typing import Protocol

import plotly.graph_objects as go

from viz_dashboard.config.model import ChartLayout
from viz_dashboard.core.geometry import Axis, ChartGeometry


class DrawingSurface(Protocol):
    """A persistent drawing target for one chart slot."""

    def clear(self) -> None:
        ...

    def draw(self, geometry: ChartGeometry) -> None:
        ...

    @property
    def figure(self) -> go.Figure:
        ...


class PlotlySurface:
    """
    Draws ChartGeometry into a fixed-size Plotly figure.

    The axes are set up in plot-area pixels: x runs over [0, plot_width] and
    y over [plot_height, 0], so geometry coordinates (y grows downward) are used
    as-is. Bars become rect shapes and the line an SVG path shape; an invisible
    marker trace carries the hover text.
    """

    def __init__(self, layout: ChartLayout):
        self.layout = layout
        self._figure = self._blank_figure()

    @property
    def figure(self) -> go.Figure:
        return self._figure

    def clear(self) -> None:
        # A new Figure rather than emptying the old one: figures already
        # handed out keep showing what they showed.
        self._figure = self._blank_figure()

    def draw(self, geometry: ChartGeometry) -> None:
        fig = self._figure
        layout = self.layout

        for rect in geometry.rects:
            fig.add_shape(
                type="rect",
                xref="x",
                yref="y",
                x0=rect.x,
                x1=rect.x + rect.width,
                y0=rect.y,
                y1=rect.y + rect.height,
                fillcolor=layout.color,
                line=dict(width=0),
                layer="above",
            )

        hover_x: list[float] = []
        hover_y: list[float] = []
        hover_text: list[str] = []

        for rect in geometry.rects:
            hover_x.append(rect.x + rect.width / 2)
            hover_y.append(rect.y)
            hover_text.append(_hover(rect.label, geometry.metric, rect.value))

        path = geometry.path
        if path is not None:
            fig.add_shape(
                type="path",
                xref="x",
                yref="y",
                path=path.to_svg(),
                line=dict(color=layout.color, width=layout.stroke_width),
                fillcolor="rgba(0,0,0,0)",
            )
            for (x, y), label, value in zip(path.points, path.labels, path.values):
                hover_x.append(x)
                hover_y.append(y)
                hover_text.append(_hover(label, geometry.metric, value))

        if hover_text:
            fig.add_trace(
                go.Scatter(
                    x=hover_x,
                    y=hover_y,
                    mode="markers",
                    marker=dict(opacity=0, size=8),
                    hovertext=hover_text,
                    hoverinfo="text",
                    showlegend=False,
                )
            )

        fig.update_xaxes(**_axis_props(geometry.x_axis), range=[0, geometry.plot_width])
        fig.update_yaxes(**_axis_props(geometry.y_axis), range=[geometry.plot_height, 0])

    def _blank_figure(self) -> go.Figure:
        layout = self.layout
        fig = go.Figure()
        fig.update_layout(
            width=layout.width,
            height=layout.height,
            autosize=False,
            margin=dict(
                t=layout.margin.top,
                r=layout.margin.right,
                b=layout.margin.bottom,
                l=layout.margin.left,
                pad=0,
            ),
            plot_bgcolor="white",
            showlegend=False,
        )
        fig.update_xaxes(range=[0, layout.plot_width], showgrid=False, zeroline=False, fixedrange=True)
        fig.update_yaxes(range=[layout.plot_height, 0], showgrid=False, zeroline=False, fixedrange=True)
        return fig


def _axis_props(axis: Axis) -> dict:
    return dict(
        tickmode="array",
        tickvals=[t.position for t in axis.ticks],
        ticktext=[t.label for t in axis.ticks],
        tickangle=axis.label_rotation,
        ticks="outside",
        showline=True,
        linecolor="black",
        showgrid=False,
        zeroline=False,
    )


def _hover(label: str, metric: str, value) -> str:
    shown = "" if value is None else value
    return f"{label}<br>{metric}: {shown}"
