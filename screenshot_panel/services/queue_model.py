"""Selection/queue state shared by the two panels, with per-panel dirty flags."""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from capture_catalog.colors import RGB
from capture_catalog.models import VariantId
from screenshot_panel.layout import DEFAULT_METRICS, LayoutMetrics, MeasureFn, PanelLayout, layout_pending, layout_queue
from screenshot_panel.services.queue_store import QueueEntry, QueueStore
from screenshot_panel.services.selection_store import CatalogSource, SelectionStore

LOGGER = logging.getLogger("ScreenshotPanel.Model")


class PanelCatalog(CatalogSource, Protocol):
    def display_label(self, variant: VariantId) -> str: ...

    def base_color(self, variant: VariantId) -> RGB: ...


class ScreenshotQueueModel:
    """Owns the pending selection, the capture queue, and their dirty flags.

    Both flags start set so the first tick paints the empty panels.
    """

    def __init__(
        self,
        catalog: PanelCatalog,
        measure: MeasureFn,
        *,
        metrics: LayoutMetrics = DEFAULT_METRICS,
    ) -> None:
        self._catalog = catalog
        self._measure = measure
        self.metrics = metrics
        self._pending_dirty = True
        self._queue_dirty = True
        self.selection = SelectionStore(catalog, on_dirty=self._mark_pending_dirty)
        self.queue = QueueStore(on_dirty=self._mark_queue_dirty)

    # Dirty flags ---------------------------------------------------------

    def _mark_pending_dirty(self) -> None:
        self._pending_dirty = True

    def _mark_queue_dirty(self) -> None:
        self._queue_dirty = True

    def is_pending_dirty(self) -> bool:
        return self._pending_dirty

    def is_queue_dirty(self) -> bool:
        return self._queue_dirty

    def clear_pending_dirty(self) -> None:
        self._pending_dirty = False

    def clear_queue_dirty(self) -> None:
        self._queue_dirty = False

    def invalidate(self) -> None:
        self._pending_dirty = True
        self._queue_dirty = True

    def replace_catalog(self, catalog: PanelCatalog) -> None:
        """Swap in a reloaded catalog; staged and queued entries are kept as-is."""

        self._catalog = catalog
        self.selection.set_catalog(catalog)
        self.invalidate()

    # Mutators ------------------------------------------------------------

    def add_region(self, display_name: Optional[str]) -> bool:
        return self.selection.add_region(display_name)

    def add_all_eligible(self) -> int:
        return self.selection.add_all_eligible()

    def remove_region(self, display_name: str) -> bool:
        return self.selection.remove_region(display_name)

    def toggle_variant(self, display_name: str, variant: VariantId) -> Optional[bool]:
        return self.selection.toggle_variant(display_name, variant)

    def clear_pending(self) -> None:
        self.selection.clear()

    def commit(self) -> list[QueueEntry]:
        """Promote pending entries into the queue, then drop everything pending."""

        promoted = self.queue.commit_from(self.selection.items())
        self.selection.clear()
        self._pending_dirty = True
        self._queue_dirty = True
        LOGGER.info(
            "Committed %d region(s) to the capture queue; queue length=%d",
            len(promoted),
            len(self.queue),
        )
        return promoted

    def clear_queue(self) -> int:
        removed = self.queue.clear()
        if removed:
            LOGGER.info("Capture queue aborted: %d region(s) dropped", removed)
        return removed

    # Snapshots and layout ------------------------------------------------

    def pending_snapshot(self) -> list[tuple[str, frozenset[VariantId]]]:
        return self.selection.snapshot()

    def queue_snapshot(self) -> list[QueueEntry]:
        return self.queue.snapshot()

    def variants(self) -> Sequence[VariantId]:
        return self._catalog.list_variants()

    def layout_pending(self, panel_width: float) -> PanelLayout:
        return layout_pending(
            self.pending_snapshot(),
            list(self.variants()),
            self._catalog,
            panel_width,
            self._measure,
            self.metrics,
        )

    def layout_queue(self, panel_width: float) -> PanelLayout:
        return layout_queue(
            self.queue_snapshot(),
            list(self.variants()),
            self._catalog,
            panel_width,
            self._measure,
            self.metrics,
        )
