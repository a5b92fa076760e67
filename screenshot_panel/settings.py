"""Configuration helpers for the screenshot queue panel."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from screenshot_panel.layout import parse_metric_overrides

LOGGER = logging.getLogger("ScreenshotPanel.Settings")

SETTINGS_FILE = "screenshot_panel_settings.json"
LOG_RETENTION_MIN = 1
LOG_RETENTION_MAX = 20
TICK_INTERVAL_MIN_MS = 16
DEV_MODE_ENV_VAR = "SCREENSHOT_PANEL_DEV_MODE"


@dataclass
class PanelSettings:
    """Values read once at startup; the panel never writes them back."""

    log_retention: int = 5
    tick_interval_ms: int = 50
    text_measurer: str = "tk"
    font_family: str = "TkDefaultFont"
    font_point_size: float = 10.0
    window_geometry: str = "600x600"
    layout_overrides: Dict[str, float] = field(default_factory=dict)


def is_dev_mode(value: Optional[str] = None) -> bool:
    raw = os.getenv(DEV_MODE_ENV_VAR) if value is None else value
    if raw is None:
        return False
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def load_panel_settings(settings_path: Path) -> PanelSettings:
    """Read panel settings if the file exists; every field falls back on its own."""
    defaults = PanelSettings()
    try:
        raw = settings_path.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        return defaults

    try:
        data: Dict[str, Any] = json.loads(raw)
    except json.JSONDecodeError as exc:
        LOGGER.warning("Ignoring malformed settings file %s: %s", settings_path, exc)
        return defaults
    if not isinstance(data, dict):
        LOGGER.warning("Ignoring settings file %s: root must be an object", settings_path)
        return defaults

    try:
        retention = int(data.get("log_retention", defaults.log_retention))
    except (TypeError, ValueError):
        retention = defaults.log_retention
    retention = max(LOG_RETENTION_MIN, min(retention, LOG_RETENTION_MAX))
    try:
        tick_ms = int(data.get("tick_interval_ms", defaults.tick_interval_ms))
    except (TypeError, ValueError):
        tick_ms = defaults.tick_interval_ms
    tick_ms = max(TICK_INTERVAL_MIN_MS, tick_ms)
    backend = str(data.get("text_measurer", defaults.text_measurer) or defaults.text_measurer).strip().lower()
    if backend not in {"tk", "qt"}:
        backend = defaults.text_measurer
    family = data.get("font_family", defaults.font_family)
    if not isinstance(family, str) or not family.strip():
        family = defaults.font_family
    try:
        point_size = float(data.get("font_point_size", defaults.font_point_size))
    except (TypeError, ValueError):
        point_size = defaults.font_point_size
    point_size = max(6.0, min(point_size, 48.0))
    geometry = data.get("window_geometry", defaults.window_geometry)
    if not isinstance(geometry, str) or not geometry.strip():
        geometry = defaults.window_geometry

    return PanelSettings(
        log_retention=retention,
        tick_interval_ms=tick_ms,
        text_measurer=backend,
        font_family=family.strip(),
        font_point_size=point_size,
        window_geometry=geometry.strip(),
        layout_overrides=parse_metric_overrides(data.get("layout_overrides")),
    )
