from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

import plotly.graph_objects as go

from viz_dashboard.config.model import (
    ChartLayout,
    STALE_POLICIES,
    STALE_POLICY_LAST_RESOLVED,
    STALE_POLICY_LATEST_ISSUED,
)
from viz_dashboard.core.base_chart import BaseChart
from viz_dashboard.core.chart_registry import ChartRegistry
from viz_dashboard.core.chart_spec import ChartSpec, DEFAULT_CHART_SPECS
from viz_dashboard.core.dataset import Dataset
from viz_dashboard.core.exceptions import FetchError
from viz_dashboard.core.filter_state import FilterSet, FilterState
from viz_dashboard.render.renderer import ChartRenderer

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    def fetch(self, filters: FilterSet) -> Dataset:
        ...


@dataclass(frozen=True)
class FetchTicket:
    """One dispatched fetch: its sequence number and the filters it was sent with."""
    request_id: int
    filters: FilterSet


@dataclass(frozen=True)
class RenderSnapshot:
    """
    Output of one render pass. All figures and the record list are derived
    from `dataset`, never from a mix of datasets.
    """
    version: int
    dataset: Dataset
    figures: Dict[str, go.Figure]


class DashboardController:
    """
    Composition root for one dashboard session.

    Two trigger edges, each with its own handler:
    - filter changed  -> `on_filter_changed`: update FilterState, fetch, and on
      success hand the new Dataset to `on_dataset_changed`
    - dataset changed -> `on_dataset_changed`: swap the Dataset reference, run
      every chart pipeline against it, publish a RenderSnapshot

    A failed fetch is logged and leaves the Dataset and every chart as they were.

    Which response wins when fetches resolve out of order is set by
    `stale_policy`:
    - "last_resolved": whatever resolves last is shown, even if a newer
      request was issued before it
    - "latest_issued": a response older than one already applied is dropped
    """

    def __init__(
            self,
            fetcher: Fetcher,
            registry: ChartRegistry,
            chart_specs: Sequence[ChartSpec] = DEFAULT_CHART_SPECS,
            layout: Optional[ChartLayout] = None,
            renderer: Optional[ChartRenderer] = None,
            stale_policy: str = STALE_POLICY_LAST_RESOLVED,
            initial_filters: Optional[FilterSet] = None,
    ):
        if stale_policy not in STALE_POLICIES:
            raise ValueError(f"Unknown stale response policy '{stale_policy}'")

        self.layout = layout or ChartLayout()
        self.renderer = renderer or ChartRenderer(self.layout)
        self.filter_state = FilterState(initial_filters)
        self.stale_policy = stale_policy

        self._fetcher = fetcher
        self._charts: List[BaseChart] = [registry.create(spec, self.layout) for spec in chart_specs]
        self._dataset = Dataset.empty()
        self._version = 0
        self._last_request_id = 0
        self._applied_request_id = 0
        self._snapshot: Optional[RenderSnapshot] = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def dataset(self) -> Dataset:
        return self._dataset

    @property
    def filters(self) -> FilterSet:
        return self.filter_state.get()

    @property
    def version(self) -> int:
        return self._version

    @property
    def snapshot(self) -> Optional[RenderSnapshot]:
        return self._snapshot

    # ------------------------------------------------------------------
    # Trigger: session start
    # ------------------------------------------------------------------
    def start(self, filters: Optional[FilterSet] = None) -> bool:
        """Render the initial empty Dataset, then issue the initial fetch for `filters`."""
        if filters is not None:
            self.filter_state = FilterState(filters)
        self.on_dataset_changed(self._dataset)
        return self.refresh()

    # ------------------------------------------------------------------
    # Trigger: filter changed
    # ------------------------------------------------------------------
    def on_filter_changed(self, key: str, value: Any) -> bool:
        """
        Record the new value and fetch for the updated FilterSet.

        :return: True if a new Dataset was applied
        :raises UnknownFilterKeyError: if key is not a filter key
        """
        self.filter_state.update(key, value)
        return self.refresh()

    def replace_filters(self, filters: FilterSet) -> bool:
        """Adopt a whole FilterSet at once (a fresh page load) and fetch for it."""
        self.filter_state = FilterState(filters)
        return self.refresh()

    def refresh(self) -> bool:
        ticket = self.begin_fetch()
        try:
            dataset = self._fetcher.fetch(ticket.filters)
        except FetchError as e:
            self.fail_fetch(ticket, e)
            return False
        return self.complete_fetch(ticket, dataset)

    def begin_fetch(self) -> FetchTicket:
        self._last_request_id += 1
        ticket = FetchTicket(request_id=self._last_request_id, filters=self.filter_state.get())
        logger.info(
            "fetch_start",
            extra={"request_id": ticket.request_id, "filters": ticket.filters.active()},
        )
        return ticket

    def complete_fetch(self, ticket: FetchTicket, dataset: Dataset) -> bool:
        """
        Apply the result of `ticket`, subject to the stale response policy.

        :return: True if the Dataset was replaced
        """
        if (
                self.stale_policy == STALE_POLICY_LATEST_ISSUED
                and ticket.request_id < self._applied_request_id
        ):
            logger.info(
                "fetch_stale_discarded",
                extra={
                    "request_id": ticket.request_id,
                    "applied_request_id": self._applied_request_id,
                },
            )
            return False

        logger.info(
            "fetch_done",
            extra={"request_id": ticket.request_id, "n_records": len(dataset)},
        )
        self._applied_request_id = max(self._applied_request_id, ticket.request_id)
        self.on_dataset_changed(dataset)
        return True

    def fail_fetch(self, ticket: FetchTicket, error: FetchError) -> None:
        logger.warning(
            "fetch_failed",
            extra={
                "request_id": ticket.request_id,
                "error": str(error),
                "status_code": error.status_code,
                "url": error.url,
            },
        )

    # ------------------------------------------------------------------
    # Trigger: dataset changed
    # ------------------------------------------------------------------
    def on_dataset_changed(self, dataset: Dataset) -> RenderSnapshot:
        """
        Swap in `dataset` and redraw every chart slot from it.

        Every chart in the pass sees the same Dataset reference. All geometry
        is computed before any slot is cleared, and the Dataset and snapshot
        are swapped together once every slot is drawn, so a failure part way
        leaves the previous Dataset, snapshot and figures in place.
        """
        geometries = [(chart, chart.compute_data(dataset)) for chart in self._charts]

        figures: Dict[str, go.Figure] = {}
        for chart, geometry in geometries:
            chart.render(geometry, self.renderer)
            figures[chart.slot_id] = self.renderer.figure(chart.slot_id)

        self._dataset = dataset
        self._version += 1
        self._snapshot = RenderSnapshot(
            version=self._version,
            dataset=dataset,
            figures=figures,
        )
        logger.info(
            "render_dataset",
            extra={"version": self._version, "n_records": len(dataset), "slots": list(figures)},
        )
        return self._snapshot
