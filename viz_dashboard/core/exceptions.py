from __future__ import annotations

from typing import Optional


class VizDashboardError(Exception):
    """Base exception for all viz_dashboard errors"""
    pass


class ConfigError(VizDashboardError):
    """Invalid or inconsistent global.json or environment override"""
    pass


class UnknownFilterKeyError(VizDashboardError, KeyError):
    """
    A filter key outside the fixed filter set was used.
    This is a programming error: the UI only ever emits known keys.
    """
    pass


class FetchError(VizDashboardError):
    """
    Fetching the dataset failed: transport error, non-2xx status,
    or a response body that could not be decoded into records.
    """

    def __init__(
            self,
            message: str,
            url: Optional[str] = None,
            status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
