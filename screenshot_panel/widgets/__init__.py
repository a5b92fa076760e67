from .region_picker import RegionPickerWidget
from .scroll_panel import ScrollPanel, canvas_top, content_extent
from .tooltip import ToolTip

__all__ = [
    "RegionPickerWidget",
    "ScrollPanel",
    "ToolTip",
    "canvas_top",
    "content_extent",
]
