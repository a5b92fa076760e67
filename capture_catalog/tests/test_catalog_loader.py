import json
import time

import pytest

from capture_catalog.catalog_loader import SHIPPED_CATALOG_PATH, CatalogLoader
from capture_catalog.models import CatalogError


def _write_json(path, payload):
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


SHIPPED = {
    "regions": [{"name": "Outskirts", "id": "SU"}, {"name": "Shoreline", "id": "SL"}],
    "variants": [
        {"id": "White", "label": "Survivor", "color": "#FFFFFF", "story_regions": ["SU", "SL"]},
        {"id": "Red", "label": "Hunter", "color": "#FF7373", "story_regions": ["SL"]},
    ],
}


def test_user_file_adds_replaces_and_disables(tmp_path):
    shipped = tmp_path / "capture_catalog.json"
    user = tmp_path / "capture_catalog.user.json"
    _write_json(shipped, SHIPPED)
    _write_json(
        user,
        {
            "regions": [{"name": "Underhang", "id": "UW"}],
            "variants": [
                {"id": "White", "label": "Wanderer"},
                {"id": "Red", "disabled": True},
                {"id": "Gold", "label": "Gourmand", "color": "#F0C296", "story_regions": ["UW"]},
            ],
        },
    )

    catalog = CatalogLoader(shipped, user).load()

    assert [entry.display_name for entry in catalog.list_entries()] == ["Outskirts", "Shoreline", "Underhang"]
    assert catalog.list_variants() == ["White", "Gold"]
    assert catalog.display_label("White") == "Wanderer"
    # Replaced entries keep shipped fields they do not override.
    assert catalog.is_eligible("White", "SL")
    assert catalog.is_eligible("Gold", "UW")


def test_missing_user_file_uses_shipped_only(tmp_path):
    shipped = tmp_path / "capture_catalog.json"
    _write_json(shipped, SHIPPED)

    loader = CatalogLoader(shipped)
    catalog = loader.load()

    assert loader.paths()["user"] == tmp_path / "capture_catalog.user.json"
    assert catalog.list_variants() == ["White", "Red"]


def test_invalid_shipped_catalog_raises(tmp_path):
    shipped = tmp_path / "capture_catalog.json"
    shipped.write_text("{not json", encoding="utf-8")

    with pytest.raises(CatalogError):
        CatalogLoader(shipped).load()


def test_missing_shipped_catalog_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        CatalogLoader(tmp_path / "absent.json").load()


def test_malformed_user_file_is_ignored_on_first_load(tmp_path):
    shipped = tmp_path / "capture_catalog.json"
    user = tmp_path / "capture_catalog.user.json"
    _write_json(shipped, SHIPPED)
    _write_json(user, {"variants": [{"id": "Blue", "color": "blue"}]})

    catalog = CatalogLoader(shipped, user).load()

    assert catalog.list_variants() == ["White", "Red"]


def test_reload_if_changed_keeps_last_good_and_recovers(tmp_path):
    shipped = tmp_path / "capture_catalog.json"
    user = tmp_path / "capture_catalog.user.json"
    _write_json(shipped, SHIPPED)
    _write_json(user, {})

    loader = CatalogLoader(shipped, user)
    initial = loader.load()
    assert loader.reload_if_changed() is False
    assert not loader.diagnostics()["stale"]

    user.write_text("{bad", encoding="utf-8")
    time.sleep(0.01)
    assert loader.reload_if_changed() is False
    assert loader.diagnostics()["stale"] is True
    assert loader.catalog() is initial

    _write_json(user, {"regions": [{"name": "Underhang", "id": "UW"}]})
    time.sleep(0.01)
    assert loader.reload_if_changed() is True
    assert loader.diagnostics()["stale"] is False
    assert loader.catalog().lookup("Underhang") is not None


def test_shipped_catalog_is_valid():
    catalog = CatalogLoader(SHIPPED_CATALOG_PATH).load()
    assert len(catalog) > 0
    variants = catalog.list_variants()
    assert "Sofanthiel" in variants
    assert "Night" not in variants
