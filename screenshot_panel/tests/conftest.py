import os

import pytest

from capture_catalog.models import Catalog


def pytest_runtest_setup(item):
    if item.get_closest_marker("pyqt_required"):
        if not os.getenv("PYQT_TESTS"):
            pytest.skip("PYQT_TESTS not set; skipping PyQt-dependent test")


@pytest.fixture
def catalog() -> Catalog:
    """Three regions: A takes every variant, B takes none, C only v1."""
    return Catalog.from_payload(
        {
            "regions": [
                {"name": "Region A", "id": "A"},
                {"name": "Region B", "id": "B"},
                {"name": "Region C", "id": "C"},
            ],
            "variants": [
                {"id": "v1", "label": "Survivor", "color": "#FFFFFF", "story_regions": ["A", "C"]},
                {"id": "v2", "label": "Monk", "color": "#FFFF73", "story_regions": ["A"]},
                {"id": "v3", "label": "Hunter", "color": "#FF7373", "optional_regions": ["A"]},
            ],
        }
    )


@pytest.fixture
def measure():
    return lambda text: 7.0 * len(text)
