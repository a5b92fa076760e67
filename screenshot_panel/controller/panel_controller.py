from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Union

from capture_catalog.models import VariantId
from screenshot_panel.layout import PanelLayout
from screenshot_panel.services.queue_model import ScreenshotQueueModel
from screenshot_panel.services.queue_store import QueueEntry

LOGGER = logging.getLogger("ScreenshotPanel.Controller")


class PanelSink(Protocol):
    def show(self, layout: PanelLayout) -> None: ...


@dataclass(frozen=True)
class ToggleVariantCommand:
    region: str
    variant: VariantId


@dataclass(frozen=True)
class RemoveRegionCommand:
    region: str


PanelCommand = Union[ToggleVariantCommand, RemoveRegionCommand]


class PanelController:
    """Routes user actions into the model and repaints dirty panels on tick."""

    def __init__(
        self,
        model: ScreenshotQueueModel,
        *,
        pending_sink: Optional[PanelSink] = None,
        queue_sink: Optional[PanelSink] = None,
    ) -> None:
        self.model = model
        self._pending_sink = pending_sink
        self._queue_sink = queue_sink
        self.pending_passes = 0
        self.queue_passes = 0

    def attach(self, *, pending_sink: PanelSink, queue_sink: PanelSink) -> None:
        self._pending_sink = pending_sink
        self._queue_sink = queue_sink

    def tick(self, pending_width: float, queue_width: float) -> tuple[bool, bool]:
        """Rebuild each dirty panel once; returns which panels were rebuilt.

        A flag is cleared only after its sink accepted the new layout, so a
        failed pass is retried on the next tick.
        """

        rebuilt_pending = False
        rebuilt_queue = False
        if self.model.is_pending_dirty() and self._pending_sink is not None:
            layout = self.model.layout_pending(pending_width)
            self._pending_sink.show(layout)
            self.model.clear_pending_dirty()
            self.pending_passes += 1
            rebuilt_pending = True
            LOGGER.debug(
                "Pending panel rebuilt: items=%d content_height=%.1f width=%.1f",
                len(layout.items),
                layout.content_height,
                pending_width,
            )
        if self.model.is_queue_dirty() and self._queue_sink is not None:
            layout = self.model.layout_queue(queue_width)
            self._queue_sink.show(layout)
            self.model.clear_queue_dirty()
            self.queue_passes += 1
            rebuilt_queue = True
            LOGGER.debug(
                "Queue panel rebuilt: items=%d content_height=%.1f width=%.1f",
                len(layout.items),
                layout.content_height,
                queue_width,
            )
        return rebuilt_pending, rebuilt_queue

    def dispatch(self, command: PanelCommand) -> Optional[bool]:
        """Resolve an item command by identifier; toggles return the new state."""

        if isinstance(command, ToggleVariantCommand):
            return self.model.toggle_variant(command.region, command.variant)
        if isinstance(command, RemoveRegionCommand):
            return self.model.remove_region(command.region)
        LOGGER.debug("Ignoring unknown panel command: %r", command)
        return None

    # Button handlers -----------------------------------------------------

    def handle_add(self, selection: Optional[str]) -> bool:
        """Stage the chosen region; True when the picker should be reset."""

        if self.model.add_region(selection):
            return True
        return selection is not None and self.model.selection.contains(selection)

    def handle_add_all(self) -> bool:
        self.model.add_all_eligible()
        return True

    def handle_start(self) -> list[QueueEntry]:
        return self.model.commit()

    def handle_clear(self) -> None:
        self.model.clear_pending()

    def handle_abort(self) -> int:
        return self.model.clear_queue()

    def invalidate(self) -> None:
        """Force both panels to rebuild, e.g. after a resize or catalog reload."""

        self.model.invalidate()
