from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from capture_catalog import SHIPPED_CATALOG_PATH, Catalog, CatalogLoader
from screenshot_panel.layout import DEFAULT_METRICS, LayoutMetrics, MeasureFn
from screenshot_panel.services import ScreenshotQueueModel
from screenshot_panel.settings import SETTINGS_FILE, PanelSettings, load_panel_settings

from .panel_controller import PanelController

CATALOG_PATH_ENV_VAR = "SCREENSHOT_PANEL_CATALOG_PATH"


@dataclass
class AppContext:
    root: Path
    catalog_path: Path
    user_catalog_path: Path
    settings_path: Path
    settings: PanelSettings
    catalog_loader: CatalogLoader
    catalog: Catalog
    metrics: LayoutMetrics
    model: ScreenshotQueueModel
    controller: PanelController


def load_settings(root: Path) -> tuple[Path, PanelSettings]:
    settings_path = root / SETTINGS_FILE
    return settings_path, load_panel_settings(settings_path)


def build_app_context(
    *,
    root: Path,
    measure: MeasureFn,
    settings: Optional[PanelSettings] = None,
    logger: Optional[Callable[..., None]] = None,
) -> AppContext:
    """Wire loader, model and controller; raises CatalogError for a bad shipped catalog."""

    settings_path, loaded = load_settings(root)
    if settings is None:
        settings = loaded
    catalog_raw = os.environ.get(CATALOG_PATH_ENV_VAR)
    catalog_path = Path(catalog_raw).expanduser() if catalog_raw else SHIPPED_CATALOG_PATH
    user_catalog_path = root / "capture_catalog.user.json"

    catalog_loader = CatalogLoader(catalog_path, user_catalog_path)
    catalog = catalog_loader.load()
    metrics = DEFAULT_METRICS.with_overrides(settings.layout_overrides)
    model = ScreenshotQueueModel(catalog, measure, metrics=metrics)
    controller = PanelController(model)
    if logger is not None:
        logger(
            "App context ready: catalog=%s user=%s regions=%d variants=%d",
            catalog_path,
            user_catalog_path,
            len(catalog),
            len(catalog.list_variants()),
        )

    return AppContext(
        root=root,
        catalog_path=catalog_path,
        user_catalog_path=user_catalog_path,
        settings_path=settings_path,
        settings=settings,
        catalog_loader=catalog_loader,
        catalog=catalog,
        metrics=metrics,
        model=model,
        controller=controller,
    )
