from __future__ import annotations

import json

import pytest

from capture_catalog.catalog_loader import SHIPPED_CATALOG_PATH
from capture_catalog.models import CatalogError
from screenshot_panel.controller import build_app_context
from screenshot_panel.settings import PanelSettings


def _measure(text: str) -> float:
    return 6.0 * len(text)


def test_build_app_context_uses_shipped_catalog(tmp_path, monkeypatch):
    monkeypatch.delenv("SCREENSHOT_PANEL_CATALOG_PATH", raising=False)
    (tmp_path / "screenshot_panel_settings.json").write_text(
        json.dumps({"layout_overrides": {"line_height": 24}}), encoding="utf-8"
    )
    messages: list[str] = []

    ctx = build_app_context(root=tmp_path, measure=_measure, logger=lambda msg, *args: messages.append(msg % args))

    assert ctx.catalog_path == SHIPPED_CATALOG_PATH
    assert ctx.user_catalog_path == tmp_path / "capture_catalog.user.json"
    assert ctx.settings_path == tmp_path / "screenshot_panel_settings.json"
    assert ctx.metrics.line_height == 24.0
    assert ctx.model.metrics is ctx.metrics
    assert ctx.controller.model is ctx.model
    assert len(ctx.catalog) > 0
    assert messages and messages[0].startswith("App context ready")


def test_build_app_context_env_catalog_and_explicit_settings(tmp_path, monkeypatch):
    catalog_path = tmp_path / "alt_catalog.json"
    catalog_path.write_text(
        json.dumps({"regions": [{"name": "Pipeyard", "id": "PY"}], "variants": []}),
        encoding="utf-8",
    )
    monkeypatch.setenv("SCREENSHOT_PANEL_CATALOG_PATH", str(catalog_path))
    settings = PanelSettings(tick_interval_ms=100)

    ctx = build_app_context(root=tmp_path, measure=_measure, settings=settings)

    assert ctx.catalog_path == catalog_path
    assert ctx.settings is settings
    assert [entry.display_name for entry in ctx.catalog.list_entries()] == ["Pipeyard"]


def test_build_app_context_rejects_broken_catalog(tmp_path, monkeypatch):
    catalog_path = tmp_path / "broken.json"
    catalog_path.write_text("{", encoding="utf-8")
    monkeypatch.setenv("SCREENSHOT_PANEL_CATALOG_PATH", str(catalog_path))

    with pytest.raises(CatalogError):
        build_app_context(root=tmp_path, measure=_measure)
