from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

STALE_POLICY_LAST_RESOLVED = "last_resolved"
STALE_POLICY_LATEST_ISSUED = "latest_issued"
STALE_POLICIES = (STALE_POLICY_LAST_RESOLVED, STALE_POLICY_LATEST_ISSUED)

DEFAULT_ENDPOINT = "https://blackcoffer-kunc.onrender.com/api/data"


@dataclass(frozen=True)
class Margin:
    top: int = 20
    right: int = 30
    bottom: int = 40
    left: int = 40


@dataclass(frozen=True)
class ChartLayout:
    """
    Fixed drawing surface for every chart slot.

    The plot area is the surface minus the margins and never depends on how
    many records are drawn; wide categorical domains get narrower bands.
    """

    width: int = 600
    height: int = 400
    margin: Margin = field(default_factory=Margin)
    band_padding: float = 0.1
    tick_count: int = 10
    color: str = "steelblue"
    stroke_width: float = 2

    @property
    def plot_width(self) -> int:
        return self.width - self.margin.left - self.margin.right

    @property
    def plot_height(self) -> int:
        return self.height - self.margin.top - self.margin.bottom


@dataclass(frozen=True)
class GlobalConfig:
    ui_title: str = "Data Visualization Dashboard"
    endpoint: str = DEFAULT_ENDPOINT
    # None = wait for the endpoint indefinitely
    request_timeout: Optional[float] = None
    stale_response_policy: str = STALE_POLICY_LAST_RESOLVED
    chart_layout: ChartLayout = field(default_factory=ChartLayout)
