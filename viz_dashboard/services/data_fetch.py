from __future__ import annotations

import logging
from typing import Optional

import requests

from viz_dashboard.core.dataset import Dataset
from viz_dashboard.core.exceptions import FetchError
from viz_dashboard.core.filter_state import FilterSet

logger = logging.getLogger(__name__)


class DataFetchController:
    """
    Fetches the Dataset matching a FilterSet from the data endpoint.

    One GET per call, with every filter key as a query parameter (empty
    ones included; the endpoint reads them as "unconstrained"). Records come
    back in response order, untouched. There is no retry and no
    cancellation; any failure surfaces as FetchError.
    """

    def __init__(
            self,
            endpoint: str,
            timeout: Optional[float] = None,
            session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch(self, filters: FilterSet) -> Dataset:
        """
        :param filters: the FilterSet to send as query parameters
        :return: the Dataset in server order
        :raises FetchError: on transport errors, non-2xx statuses or undecodable bodies
        """
        params = filters.to_params()

        try:
            resp = self._session.get(self.endpoint, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(f"Request to data endpoint failed: {e}", url=self.endpoint) from e

        logger.debug("fetch_response", extra={"url": resp.url, "status_code": resp.status_code})

        if not 200 <= resp.status_code < 300:
            raise FetchError(
                f"Data endpoint returned HTTP {resp.status_code}",
                url=resp.url or self.endpoint,
                status_code=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise FetchError(
                "Data endpoint returned a body that is not valid JSON",
                url=resp.url or self.endpoint,
                status_code=resp.status_code,
            ) from e

        try:
            return Dataset.from_json(payload)
        except TypeError as e:
            raise FetchError(
                f"Data endpoint returned an unexpected body: {e}",
                url=resp.url or self.endpoint,
                status_code=resp.status_code,
            ) from e
