from .app_context import AppContext, build_app_context, load_settings
from .panel_controller import (
    PanelCommand,
    PanelController,
    PanelSink,
    RemoveRegionCommand,
    ToggleVariantCommand,
)
from .utils import log_exception

__all__ = [
    "AppContext",
    "build_app_context",
    "load_settings",
    "PanelCommand",
    "PanelController",
    "PanelSink",
    "RemoveRegionCommand",
    "ToggleVariantCommand",
    "log_exception",
]
