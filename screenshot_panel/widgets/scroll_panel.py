"""Canvas-backed scroll panel that paints a :class:`PanelLayout`."""
from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, Optional, Tuple

from capture_catalog.colors import RGB, to_hex
from capture_catalog.models import VariantId
from screenshot_panel.controller.panel_controller import PanelCommand, RemoveRegionCommand, ToggleVariantCommand
from screenshot_panel.layout import (
    CheckboxItem,
    DeleteButtonItem,
    DividerItem,
    HeaderItem,
    LabelItem,
    PanelItem,
    PanelLayout,
)

from .tooltip import ToolTip

LOGGER = logging.getLogger("ScreenshotPanel.ScrollPanel")

PANEL_BACKGROUND = "#1c1c1f"
PANEL_FOREGROUND = "#e8e8e8"
DIVIDER_COLOR = "#5a5a5a"

CommandFn = Callable[[PanelCommand], Optional[bool]]
RecolorFn = Callable[[VariantId, bool], RGB]


def content_extent(content_height: float, viewport_height: float) -> float:
    """Height of the scroll region: content never shrinks below the viewport."""
    return max(float(content_height), float(viewport_height), 0.0)


def canvas_top(item: PanelItem, extent: float) -> float:
    """Convert a y-up item (bottom edge from content bottom) to a canvas top edge."""
    return extent - (item.y + item.height)


class ScrollPanel(tk.Frame):
    """Vertical scroll view over a canvas; implements the controller's sink protocol.

    Content shorter than the viewport stays pinned to the bottom edge. Checkbox
    toggles repaint their own row locally because they never dirty the panel.
    """

    def __init__(
        self,
        parent: tk.Widget,
        *,
        on_command: Optional[CommandFn] = None,
        recolor: Optional[RecolorFn] = None,
        font: object = None,
        header_font: object = None,
        on_resize: Optional[Callable[[], None]] = None,
    ) -> None:
        super().__init__(parent, bd=0, highlightthickness=0, bg=PANEL_BACKGROUND)
        self._on_command = on_command
        self._recolor = recolor
        self._font = font
        self._header_font = header_font or font
        self._on_resize = on_resize
        self._last_size: Optional[tuple[int, int]] = None
        self._widgets: list[tk.Widget] = []
        self._checkboxes: Dict[Tuple[str, VariantId], Tuple[tk.Checkbutton, tk.BooleanVar, Optional[int]]] = {}
        self._layout: Optional[PanelLayout] = None

        self.canvas = tk.Canvas(self, bd=0, highlightthickness=0, bg=PANEL_BACKGROUND)
        self.scrollbar = ttk.Scrollbar(self, orient="vertical", command=self.canvas.yview)
        self.canvas.configure(yscrollcommand=self.scrollbar.set)
        self.canvas.grid(row=0, column=0, sticky="nsew")
        self.scrollbar.grid(row=0, column=1, sticky="ns")
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        self.canvas.bind("<Configure>", self._handle_configure, add="+")
        self.canvas.bind("<Enter>", self._bind_wheel, add="+")
        self.canvas.bind("<Leave>", self._unbind_wheel, add="+")
        self._tooltip = ToolTip(self.canvas)

    # Sink ----------------------------------------------------------------

    def viewport_width(self) -> float:
        """Full panel width including the scrollbar, as the layout expects."""
        try:
            width = int(self.winfo_width())
        except Exception:
            return 0.0
        return float(max(width, 1))

    def show(self, layout: PanelLayout) -> None:
        self._clear()
        self._layout = layout
        try:
            viewport = int(self.canvas.winfo_height())
        except Exception:
            viewport = 0
        extent = content_extent(layout.content_height, viewport)
        last_checkbox: Optional[Tuple[str, VariantId]] = None
        for item in layout.items:
            top = canvas_top(item, extent)
            if isinstance(item, HeaderItem):
                self.canvas.create_text(
                    item.x, top, text=item.text, anchor="nw", fill=PANEL_FOREGROUND, font=self._header_font
                )
            elif isinstance(item, LabelItem):
                text_id = self.canvas.create_text(
                    item.x,
                    top,
                    text=item.text,
                    anchor="nw",
                    fill=to_hex(item.color) if item.color is not None else PANEL_FOREGROUND,
                    font=self._font,
                )
                if item.role == "variant" and last_checkbox is not None:
                    button, var, _ = self._checkboxes[last_checkbox]
                    self._checkboxes[last_checkbox] = (button, var, text_id)
                last_checkbox = None
            elif isinstance(item, CheckboxItem):
                last_checkbox = self._place_checkbox(item, top)
            elif isinstance(item, DeleteButtonItem):
                self._place_delete_button(item, top)
            elif isinstance(item, DividerItem):
                self.canvas.create_rectangle(
                    item.x, top, item.x + item.width, top + item.height, fill=DIVIDER_COLOR, outline=""
                )
        try:
            width = max(int(self.canvas.winfo_width()), 1)
        except Exception:
            width = 1
        self.canvas.configure(scrollregion=(0, 0, width, extent))
        LOGGER.debug("Panel painted: items=%d extent=%.1f viewport=%d", len(layout.items), extent, viewport)

    # Items ---------------------------------------------------------------

    def _clear(self) -> None:
        self._tooltip.hide()
        self.canvas.delete("all")
        for widget in self._widgets:
            try:
                widget.destroy()
            except Exception:
                pass
        self._widgets.clear()
        self._checkboxes.clear()

    def _place_checkbox(self, item: CheckboxItem, top: float) -> Tuple[str, VariantId]:
        var = tk.BooleanVar(value=item.checked)
        color = to_hex(item.color) if item.color is not None else PANEL_FOREGROUND
        button = tk.Checkbutton(
            self.canvas,
            variable=var,
            bg=PANEL_BACKGROUND,
            activebackground=PANEL_BACKGROUND,
            selectcolor=color,
            bd=0,
            highlightthickness=0,
            padx=0,
            pady=0,
            command=lambda key=(item.region, item.variant): self._handle_toggle(key),
        )
        self.canvas.create_window(
            item.x, top, window=button, anchor="nw", width=item.width, height=item.height
        )
        self._tooltip.attach(button, item.description)
        key = (item.region, item.variant)
        self._checkboxes[key] = (button, var, None)
        self._widgets.append(button)
        return key

    def _place_delete_button(self, item: DeleteButtonItem, top: float) -> None:
        button = tk.Button(
            self.canvas,
            text=item.text,
            bg="#3a3a3f",
            fg=PANEL_FOREGROUND,
            activebackground="#5a2a2a",
            bd=0,
            highlightthickness=0,
            padx=0,
            pady=0,
            command=lambda region=item.region: self._send(RemoveRegionCommand(region)),
        )
        self.canvas.create_window(item.x, top, window=button, anchor="nw", width=item.width, height=item.height)
        self._tooltip.attach(button, f"Remove {item.region}")
        self._widgets.append(button)

    def _handle_toggle(self, key: Tuple[str, VariantId]) -> None:
        region, variant = key
        state = self._send(ToggleVariantCommand(region, variant))
        entry = self._checkboxes.get(key)
        if entry is None or state is None:
            return
        button, var, label_id = entry
        var.set(bool(state))
        if self._recolor is None:
            return
        color = to_hex(self._recolor(variant, bool(state)))
        try:
            button.configure(selectcolor=color)
            if label_id is not None:
                self.canvas.itemconfigure(label_id, fill=color)
        except Exception:
            pass

    def _send(self, command: PanelCommand) -> Optional[bool]:
        if self._on_command is None:
            return None
        return self._on_command(command)

    # Events --------------------------------------------------------------

    def _handle_configure(self, event: tk.Event) -> None:  # type: ignore[name-defined]
        # Height matters too: short content is anchored to the viewport bottom.
        size = (int(getattr(event, "width", 0) or 0), int(getattr(event, "height", 0) or 0))
        if size == self._last_size:
            return
        self._last_size = size
        if self._on_resize is not None:
            self._on_resize()

    def _bind_wheel(self, _event: object | None = None) -> None:
        self.canvas.bind_all("<MouseWheel>", self._handle_wheel)
        self.canvas.bind_all("<Button-4>", self._handle_wheel)
        self.canvas.bind_all("<Button-5>", self._handle_wheel)

    def _unbind_wheel(self, _event: object | None = None) -> None:
        for sequence in ("<MouseWheel>", "<Button-4>", "<Button-5>"):
            self.canvas.unbind_all(sequence)

    def _handle_wheel(self, event: tk.Event) -> None:  # type: ignore[name-defined]
        num = getattr(event, "num", None)
        delta = getattr(event, "delta", 0) or 0
        if num == 4 or delta > 0:
            self.canvas.yview_scroll(-1, "units")
        elif num == 5 or delta < 0:
            self.canvas.yview_scroll(1, "units")
