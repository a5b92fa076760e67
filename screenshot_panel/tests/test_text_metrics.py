import pytest

from screenshot_panel.text_metrics import CachedTextMeasurer, QtTextMeasurer, TkTextMeasurer, build_measurer


class FontStub:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def measure(self, text: str) -> int:
        self.calls.append(text)
        return 8 * len(text)


def test_tk_measurer_reads_font_width():
    font = FontStub()
    assert TkTextMeasurer(font)("Monk") == 32.0


def test_cached_measurer_memoizes():
    font = FontStub()
    measure = CachedTextMeasurer(TkTextMeasurer(font))

    assert measure("Hunter") == 48.0
    assert measure("Hunter") == 48.0
    assert measure("Monk") == 32.0

    assert font.calls == ["Hunter", "Monk"]
    assert measure.stats() == {"hits": 1, "misses": 2, "size": 2}
    measure.clear()
    assert measure.stats()["size"] == 0


def test_build_measurer_selects_backend():
    font = FontStub()
    assert build_measurer("tk", tk_font=font)("ab") == 16.0
    # Unknown backends fall back to Tk metrics.
    assert build_measurer("gdi", tk_font=font)("ab") == 16.0
    with pytest.raises(ValueError):
        build_measurer("tk")


@pytest.mark.pyqt_required
def test_qt_measurer_is_deterministic():
    measure = QtTextMeasurer("Sans Serif", 10)
    first = measure("Survivor")
    assert first > 0
    assert measure("Survivor") == first
    assert measure("Survivor Survivor") > first
