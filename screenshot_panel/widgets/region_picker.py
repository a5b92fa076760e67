from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Optional, Sequence


class RegionPickerWidget(tk.Frame):
    """Read-only dropdown of catalog region names feeding the ADD button."""

    def __init__(self, parent: tk.Widget, options: Sequence[str] | None = None, *, width: int = 26) -> None:
        super().__init__(parent, bd=0, highlightthickness=0, bg=parent.cget("background"))
        self._choices: list[str] = list(options or [])
        self._selection = tk.StringVar()
        self.dropdown = ttk.Combobox(
            self,
            values=self._choices,
            state="readonly",
            textvariable=self._selection,
            width=width,
        )
        # Left/Right cycle through regions while the popdown is closed.
        self.dropdown.bind("<Left>", lambda _e: self._step_if_closed(-1), add="+")
        self.dropdown.bind("<Right>", lambda _e: self._step_if_closed(1), add="+")

        self.columnconfigure(0, weight=1)
        self.dropdown.grid(row=0, column=0, sticky="ew")

    def selection(self) -> Optional[str]:
        """Return the chosen region name, or None when the picker is empty."""

        value = self._selection.get()
        return value if value else None

    def reset(self) -> None:
        try:
            self._selection.set("")
            self.dropdown.set("")
        except Exception:
            pass

    def update_options(self, options: Sequence[str]) -> None:
        """Replace the region list, keeping the current choice when it still exists."""

        current = self.selection()
        self._choices = list(options or [])
        try:
            self.dropdown.configure(values=self._choices)
        except Exception:
            pass
        if current is not None and current not in self._choices:
            self.reset()

    def _is_dropdown_open(self) -> bool:
        try:
            popdown = self.dropdown.tk.call("ttk::combobox::PopdownWindow", self.dropdown)
            return bool(int(self.dropdown.tk.call("winfo", "viewable", popdown)))
        except Exception:
            return False

    def _step_if_closed(self, step: int) -> Optional[str]:
        if self._is_dropdown_open():
            return None
        self._advance_selection(step)
        return "break"

    def _advance_selection(self, step: int = 1) -> bool:
        count = len(self._choices)
        if not count:
            return False
        try:
            current_index = int(self.dropdown.current())
        except Exception:
            current_index = -1
        if current_index < 0:
            target_index = 0 if step > 0 else count - 1
        else:
            target_index = (current_index + step) % count
        try:
            self.dropdown.current(target_index)
            return True
        except Exception:
            return False
