from .queue_model import PanelCatalog, ScreenshotQueueModel
from .queue_store import QueueEntry, QueueStore
from .selection_store import CatalogSource, SelectionStore
from .tick_timer import TickTimer

__all__ = [
    "CatalogSource",
    "PanelCatalog",
    "QueueEntry",
    "QueueStore",
    "ScreenshotQueueModel",
    "SelectionStore",
    "TickTimer",
]
