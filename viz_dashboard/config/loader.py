from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from viz_dashboard.config.model import (
    ChartLayout,
    GlobalConfig,
    Margin,
    STALE_POLICIES,
)
from viz_dashboard.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_ENDPOINT = "VIZ_DASHBOARD_ENDPOINT"
ENV_TIMEOUT = "VIZ_DASHBOARD_TIMEOUT"


def load_global_config(
        root: Path | str,
        environ: Optional[Mapping[str, str]] = None,
) -> GlobalConfig:
    """
    Load configuration from `root/global.json`, then apply environment overrides.

    Expected structure of global.json (every key optional):

        {
            "ui_title": "...",
            "endpoint": "https://.../api/data",
            "request_timeout": null,
            "stale_response_policy": "last_resolved",
            "chart": {"width": 600, "height": 400,
                      "margin": {"top": 20, "right": 30, "bottom": 40, "left": 40},
                      "band_padding": 0.1, "tick_count": 10,
                      "color": "steelblue", "stroke_width": 2}
        }

    A missing global.json is not an error; built-in defaults are used.

    :param root: directory containing global.json
    :param environ: environment mapping, defaults to os.environ
    :return: a GlobalConfig instance
    :raises ConfigError: if the file is not valid JSON or a value has the wrong type
    """
    root = Path(root)
    environ = os.environ if environ is None else environ

    global_path = root / "global.json"
    raw: Dict[str, Any] = {}
    if global_path.is_file():
        logger.info("Loading global config", extra={"config_path": str(global_path)})
        try:
            with global_path.open() as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"{global_path} is not valid JSON: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"{global_path} must contain a JSON object")
    else:
        logger.info("No global.json found, using defaults", extra={"config_root": str(root)})

    defaults = GlobalConfig()

    endpoint = environ.get(ENV_ENDPOINT) or raw.get("endpoint", defaults.endpoint)
    if not isinstance(endpoint, str) or not endpoint:
        raise ConfigError("endpoint must be a non-empty string")

    timeout_raw = environ.get(ENV_TIMEOUT, raw.get("request_timeout"))
    timeout = _parse_timeout(timeout_raw)

    policy = raw.get("stale_response_policy", defaults.stale_response_policy)
    if policy not in STALE_POLICIES:
        raise ConfigError(
            f"stale_response_policy must be one of {STALE_POLICIES}, got {policy!r}"
        )

    return GlobalConfig(
        ui_title=raw.get("ui_title", defaults.ui_title),
        endpoint=endpoint,
        request_timeout=timeout,
        stale_response_policy=policy,
        chart_layout=_parse_chart_layout(raw.get("chart", {})),
    )


def _parse_timeout(value: Any) -> Optional[float]:
    if value in (None, ""):
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"request_timeout must be a number, got {value!r}") from e
    if timeout <= 0:
        raise ConfigError("request_timeout must be positive")
    return timeout


def _parse_chart_layout(raw: Any) -> ChartLayout:
    if not isinstance(raw, dict):
        raise ConfigError("chart must be a JSON object")

    margin_raw = raw.get("margin", {})
    if not isinstance(margin_raw, dict):
        raise ConfigError("chart.margin must be a JSON object")

    try:
        margin = Margin(**{k: int(v) for k, v in margin_raw.items()})
        layout_kwargs = {k: v for k, v in raw.items() if k != "margin"}
        layout = ChartLayout(margin=margin, **layout_kwargs)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid chart layout: {e}") from e

    if layout.plot_width <= 0 or layout.plot_height <= 0:
        raise ConfigError("chart margins leave no room for the plot area")
    if not 0 <= layout.band_padding < 1:
        raise ConfigError("chart.band_padding must be in [0, 1)")
    return layout
