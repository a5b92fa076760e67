"""Label width measurement backends for the reflow layout."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

LOGGER = logging.getLogger("ScreenshotPanel.TextMetrics")

MeasureFn = Callable[[str], float]


class TkTextMeasurer:
    """Measures with the Tk font the panels actually draw with."""

    def __init__(self, font: Any) -> None:
        self._font = font

    def __call__(self, text: str) -> float:
        return float(self._font.measure(text))


class QtTextMeasurer:
    """Measures with PyQt6 font metrics; creates a QGuiApplication on demand."""

    def __init__(self, family: str, point_size: float) -> None:
        self._family = family
        self._point_size = float(point_size)
        self._metrics: Optional[Any] = None

    def _ensure_metrics(self) -> Any:
        if self._metrics is None:
            from PyQt6.QtGui import QFont, QFontMetricsF, QGuiApplication

            if QGuiApplication.instance() is None:
                # Keep a reference so the application is not garbage collected.
                self._app = QGuiApplication([])
            font = QFont(self._family)
            font.setPointSizeF(self._point_size)
            self._metrics = QFontMetricsF(font)
        return self._metrics

    def __call__(self, text: str) -> float:
        return float(self._ensure_metrics().horizontalAdvance(text))


class CachedTextMeasurer:
    """Memoizes widths so a relayout only measures new labels."""

    def __init__(self, measure: MeasureFn) -> None:
        self._measure = measure
        self._cache: Dict[str, float] = {}
        self._hits = 0
        self._misses = 0

    def __call__(self, text: str) -> float:
        cached = self._cache.get(text)
        if cached is not None:
            self._hits += 1
            return cached
        self._misses += 1
        width = float(self._measure(text))
        self._cache[text] = width
        return width

    def clear(self) -> None:
        self._cache.clear()

    def stats(self) -> Dict[str, int]:
        return {"hits": self._hits, "misses": self._misses, "size": len(self._cache)}


def build_measurer(backend: str, *, tk_font: Any = None, family: str = "TkDefaultFont", point_size: float = 10.0) -> CachedTextMeasurer:
    """Return a cached measurer for the configured backend, falling back to Tk."""

    token = (backend or "tk").strip().lower()
    if token == "qt":
        LOGGER.debug("Using Qt text metrics: family=%s size=%.1f", family, point_size)
        return CachedTextMeasurer(QtTextMeasurer(family, point_size))
    if tk_font is None:
        raise ValueError("Tk text measurement requires a tkinter font")
    if token != "tk":
        LOGGER.warning("Unknown text measurer %r; using Tk metrics", backend)
    return CachedTextMeasurer(TkTextMeasurer(tk_font))
