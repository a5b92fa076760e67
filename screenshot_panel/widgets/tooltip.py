from __future__ import annotations

import tkinter as tk
from typing import Optional


class ToolTip:
    """One hover window shared by every button a panel embeds.

    Panels throw their buttons away on each layout pass, so the tooltip is
    owned by the panel and buttons only register their text with it.
    """

    def __init__(self, master: tk.Misc, *, delay_ms: int = 400) -> None:
        self._master = master
        self._delay_ms = max(0, int(delay_ms))
        self._window: Optional[tk.Toplevel] = None
        self._label: Optional[tk.Label] = None
        self._after_handle: Optional[str] = None

    def attach(self, widget: tk.Widget, text: str) -> None:
        if not text:
            return
        widget.bind("<Enter>", lambda _e: self._schedule(widget, text), add="+")
        widget.bind("<Leave>", lambda _e: self.hide(), add="+")
        widget.bind("<ButtonPress>", lambda _e: self.hide(), add="+")

    def hide(self) -> None:
        self._cancel()
        if self._window is not None:
            try:
                self._window.withdraw()
            except tk.TclError:
                self._window = None
                self._label = None

    def _schedule(self, widget: tk.Widget, text: str) -> None:
        self._cancel()
        self._after_handle = self._master.after(self._delay_ms, lambda: self._show(widget, text))

    def _cancel(self) -> None:
        if self._after_handle is None:
            return
        try:
            self._master.after_cancel(self._after_handle)
        except tk.TclError:
            pass
        self._after_handle = None

    def _show(self, widget: tk.Widget, text: str) -> None:
        self._after_handle = None
        try:
            x = int(widget.winfo_rootx()) + 10
            y = int(widget.winfo_rooty()) + int(widget.winfo_height()) + 6
        except tk.TclError:
            # Button destroyed by a relayout before the delay expired.
            return
        if self._window is None:
            self._window = tk.Toplevel(self._master)
            self._window.wm_overrideredirect(True)
            try:
                self._window.attributes("-topmost", True)
            except tk.TclError:
                pass
            self._label = tk.Label(
                self._window,
                background="#2b2b2b",
                foreground="#f0f0f0",
                relief="solid",
                borderwidth=1,
                font=("TkDefaultFont", 9),
            )
            self._label.pack(ipadx=5, ipady=2)
        if self._label is not None:
            self._label.config(text=text)
        self._window.geometry(f"+{x}+{y}")
        self._window.deiconify()
