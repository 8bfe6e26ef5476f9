from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from viz_dashboard.config.model import GlobalConfig
from viz_dashboard.core.chart_registry import ChartRegistry
from viz_dashboard.core.chart_spec import ChartSpec, DEFAULT_CHART_SPECS
from viz_dashboard.services.session_manager import SessionManager


@dataclass
class AppConfig:
    """
    Shared state for the Dash app, passed into layout + callback registration
    functions instead of using module-level globals.

    Nothing here is per-page: each page's FilterSet and Dataset live in the
    controller `sessions` hands out for that page's session id.
    """
    config_root: Path
    global_config: GlobalConfig
    chart_specs: Tuple[ChartSpec, ...] = DEFAULT_CHART_SPECS
    registry: Optional[ChartRegistry] = None
    sessions: Optional[SessionManager] = None

    @property
    def slot_ids(self) -> List[str]:
        return [spec.slot_id for spec in self.chart_specs]

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.registry is None:
            raise RuntimeError("AppConfig.registry must be initialized.")
        if self.sessions is None:
            raise RuntimeError("AppConfig.sessions must be initialized.")
        if not self.chart_specs:
            raise RuntimeError("AppConfig.chart_specs must not be empty.")
