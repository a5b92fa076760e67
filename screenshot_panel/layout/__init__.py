from .items import (
    CheckboxItem,
    DeleteButtonItem,
    DividerItem,
    HeaderItem,
    LabelItem,
    PanelItem,
    PanelLayout,
)
from .reflow import (
    CURRENT_HEADER,
    DEFAULT_METRICS,
    QUEUED_HEADER,
    LayoutMetrics,
    MeasureFn,
    WrapResult,
    layout_pending,
    layout_queue,
    measure_pending_height,
    measure_queue_height,
    parse_metric_overrides,
    wrap_tokens,
)

__all__ = [
    "CURRENT_HEADER",
    "CheckboxItem",
    "DEFAULT_METRICS",
    "DeleteButtonItem",
    "DividerItem",
    "HeaderItem",
    "LabelItem",
    "LayoutMetrics",
    "MeasureFn",
    "PanelItem",
    "PanelLayout",
    "QUEUED_HEADER",
    "WrapResult",
    "layout_pending",
    "layout_queue",
    "measure_pending_height",
    "measure_queue_height",
    "parse_metric_overrides",
    "wrap_tokens",
]
