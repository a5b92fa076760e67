"""Tkinter front end for the screenshot batch queue panel."""

from __future__ import annotations

# ruff: noqa: E402

import logging
import os
import sys
import tkinter as tk
import traceback
from pathlib import Path
from tkinter import font as tkfont
from tkinter import messagebox, ttk
from typing import Optional, Tuple

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
_PANEL_LOGGER: Optional[logging.Logger] = None

from capture_catalog import CatalogError, display_color
from screenshot_panel.controller import PanelCommand, build_app_context, load_settings, log_exception
from screenshot_panel.logging_utils import build_rotating_file_handler, resolve_logs_dir
from screenshot_panel.services import TickTimer
from screenshot_panel.settings import PanelSettings, is_dev_mode
from screenshot_panel.text_metrics import build_measurer
from screenshot_panel.widgets import RegionPickerWidget, ScrollPanel

DEBUG_CONFIG_ENABLED = is_dev_mode()
LOG_FILE_NAME = "screenshot_panel.log"
LOG_LEVEL_ENV_VAR = "SCREENSHOT_PANEL_LOG_LEVEL"
CATALOG_POLL_MS = 2000

WINDOW_BACKGROUND = "#26262b"
HEADER_FOREGROUND = "#f2f2f2"


def _resolve_env_log_level_hint() -> Tuple[Optional[int], Optional[str]]:
    raw = (os.getenv(LOG_LEVEL_ENV_VAR) or "").strip()
    if not raw:
        return None, None
    try:
        value = int(raw)
    except ValueError:
        attr = getattr(logging, raw.upper(), None)
        if isinstance(attr, int):
            return int(attr), raw.upper()
        return None, None
    return value, logging.getLevelName(value)


_ENV_LOG_LEVEL_VALUE, _ENV_LOG_LEVEL_NAME = _resolve_env_log_level_hint()
_LOG_LEVEL_OVERRIDE_VALUE: Optional[int] = None
_LOG_LEVEL_OVERRIDE_NAME: Optional[str] = None
_LOG_LEVEL_OVERRIDE_SOURCE: Optional[str] = None


class ScreenshotPanelApp(tk.Tk):
    """Two-sided window: PREPARE stages regions, SCREENSHOTTING shows the queue."""

    def __init__(self, *, root_path: Path = PACKAGE_ROOT, settings: Optional[PanelSettings] = None) -> None:
        super().__init__()
        self.withdraw()
        self.title("Screenshot Queue")
        self.configure(bg=WINDOW_BACKGROUND)
        if settings is None:
            _settings_path, settings = load_settings(root_path)
        self._settings = settings
        self.geometry(settings.window_geometry)
        self.minsize(480, 320)
        self.protocol("WM_DELETE_WINDOW", self.close_application)
        self._closing = False
        self._catalog_poll_handle: str | None = None

        self._ui_font = self._build_font(settings)
        self._header_font = self._ui_font.copy()
        self._header_font.configure(weight="bold", size=int(self._ui_font.cget("size")) + 2)
        self._measure = build_measurer(
            settings.text_measurer,
            tk_font=self._ui_font,
            family=settings.font_family,
            point_size=settings.font_point_size,
        )
        self._context = build_app_context(
            root=root_path,
            measure=self._measure,
            settings=settings,
            logger=_panel_debug,
        )
        self.controller = self._context.controller
        self.model = self._context.model

        self._build_layout()
        self.controller.attach(pending_sink=self.pending_panel, queue_sink=self.queue_panel)
        self._tick_timer = TickTimer(
            settings.tick_interval_ms,
            after=self.after,
            after_cancel=self.after_cancel,
            logger=_panel_debug,
        )
        self.deiconify()
        self._tick_timer.start(self._on_tick)
        self._schedule_catalog_poll()

    # Construction --------------------------------------------------------

    @staticmethod
    def _build_font(settings: PanelSettings) -> tkfont.Font:
        size = int(round(settings.font_point_size))
        try:
            base = tkfont.nametofont(settings.font_family)
        except tk.TclError:
            return tkfont.Font(family=settings.font_family, size=size)
        font = base.copy()
        font.configure(size=size)
        return font

    def _build_layout(self) -> None:
        self.columnconfigure(0, weight=1, uniform="side")
        self.columnconfigure(1, weight=0)
        self.columnconfigure(2, weight=1, uniform="side")
        self.rowconfigure(0, weight=1)

        prepare = tk.Frame(self, bg=WINDOW_BACKGROUND, padx=8, pady=8)
        prepare.grid(row=0, column=0, sticky="nsew")
        divider = tk.Frame(self, bg="#555555", width=2)
        divider.grid(row=0, column=1, sticky="ns", pady=8)
        shooting = tk.Frame(self, bg=WINDOW_BACKGROUND, padx=8, pady=8)
        shooting.grid(row=0, column=2, sticky="nsew")

        self._section_title(prepare, "PREPARE").grid(row=0, column=0, columnspan=4, sticky="w")
        self.region_picker = RegionPickerWidget(prepare, [entry.display_name for entry in self._context.catalog.list_entries()])
        self.region_picker.grid(row=1, column=0, columnspan=4, sticky="ew", pady=(6, 4))
        buttons = (
            ("ADD", self._handle_add),
            ("ALL", self._handle_add_all),
            ("START", self._handle_start),
            ("CLEAR", self._handle_clear),
        )
        for column, (label, command) in enumerate(buttons):
            ttk.Button(prepare, text=label, command=command).grid(row=2, column=column, sticky="ew", padx=2)
            prepare.columnconfigure(column, weight=1)
        self.pending_panel = ScrollPanel(
            prepare,
            on_command=self._dispatch,
            recolor=self._recolor_variant,
            font=self._ui_font,
            header_font=self._header_font,
            on_resize=self.controller.invalidate,
        )
        self.pending_panel.grid(row=3, column=0, columnspan=4, sticky="nsew", pady=(8, 0))
        prepare.rowconfigure(3, weight=1)

        self._section_title(shooting, "SCREENSHOTTING").grid(row=0, column=0, columnspan=2, sticky="w")
        ttk.Button(shooting, text="ABORT", command=self._handle_abort).grid(row=1, column=0, sticky="ew", padx=2, pady=(6, 4))
        # Nothing consumes the queue yet, so SKIP stays inert.
        ttk.Button(shooting, text="SKIP", state="disabled").grid(row=1, column=1, sticky="ew", padx=2, pady=(6, 4))
        shooting.columnconfigure(0, weight=1)
        shooting.columnconfigure(1, weight=1)
        self.queue_panel = ScrollPanel(
            shooting,
            font=self._ui_font,
            header_font=self._header_font,
            on_resize=self.controller.invalidate,
        )
        self.queue_panel.grid(row=2, column=0, columnspan=2, sticky="nsew", pady=(8, 0))
        shooting.rowconfigure(2, weight=1)

    def _section_title(self, parent: tk.Widget, text: str) -> tk.Label:
        return tk.Label(parent, text=text, bg=WINDOW_BACKGROUND, fg=HEADER_FOREGROUND, font=self._header_font)

    # Tick and polling ----------------------------------------------------

    def _on_tick(self) -> None:
        try:
            self.controller.tick(self.pending_panel.viewport_width(), self.queue_panel.viewport_width())
        except Exception as exc:
            log_exception(_panel_debug, "Panel tick failed", exc)

    def _schedule_catalog_poll(self) -> None:
        self._catalog_poll_handle = self.after(CATALOG_POLL_MS, self._poll_catalog)

    def _cancel_catalog_poll(self) -> None:
        handle = self._catalog_poll_handle
        if handle is None:
            return
        try:
            self.after_cancel(handle)
        except Exception:
            pass
        self._catalog_poll_handle = None

    def _poll_catalog(self) -> None:
        self._catalog_poll_handle = None
        try:
            loader = self._context.catalog_loader
            if loader.reload_if_changed():
                catalog = loader.catalog()
                self._context.catalog = catalog
                self.model.replace_catalog(catalog)
                self.region_picker.update_options([entry.display_name for entry in catalog.list_entries()])
                _panel_debug("Catalog reloaded: regions=%d variants=%d", len(catalog), len(catalog.list_variants()))
        except Exception as exc:
            log_exception(_panel_debug, "Catalog poll failed", exc)
        finally:
            if not self._closing:
                self._schedule_catalog_poll()

    # Handlers ------------------------------------------------------------

    def _dispatch(self, command: PanelCommand) -> Optional[bool]:
        try:
            return self.controller.dispatch(command)
        except Exception as exc:
            log_exception(_panel_debug, f"Command {command!r} failed", exc)
            return None

    def _recolor_variant(self, variant: str, checked: bool):
        return display_color(self._context.catalog.base_color(variant), checked)

    def _handle_add(self) -> None:
        try:
            if self.controller.handle_add(self.region_picker.selection()):
                self.region_picker.reset()
        except Exception as exc:
            log_exception(_panel_debug, "ADD failed", exc)

    def _handle_add_all(self) -> None:
        try:
            if self.controller.handle_add_all():
                self.region_picker.reset()
        except Exception as exc:
            log_exception(_panel_debug, "ALL failed", exc)

    def _handle_start(self) -> None:
        try:
            self.controller.handle_start()
        except Exception as exc:
            log_exception(_panel_debug, "START failed", exc)

    def _handle_clear(self) -> None:
        try:
            self.controller.handle_clear()
        except Exception as exc:
            log_exception(_panel_debug, "CLEAR failed", exc)

    def _handle_abort(self) -> None:
        try:
            self.controller.handle_abort()
        except Exception as exc:
            log_exception(_panel_debug, "ABORT failed", exc)

    def close_application(self, _event: object | None = None) -> None:
        if self._closing:
            return
        _panel_debug("Screenshot panel closing (queued=%d)", len(self.model.queue))
        self._closing = True
        self._tick_timer.stop()
        self._cancel_catalog_poll()
        self.destroy()


# Logging -----------------------------------------------------------------


def _ensure_panel_logger(retention: int = 5) -> Optional[logging.Logger]:
    global _PANEL_LOGGER
    if _PANEL_LOGGER is not None:
        return _PANEL_LOGGER
    try:
        log_dir = resolve_logs_dir()
        handler = build_rotating_file_handler(log_dir, LOG_FILE_NAME, retention=retention)
        logger = logging.getLogger("ScreenshotPanel")
        resolved_level = logging.DEBUG if DEBUG_CONFIG_ENABLED else logging.INFO
        level_source = "default"
        hint_name: Optional[str] = None

        if _LOG_LEVEL_OVERRIDE_VALUE is not None or _LOG_LEVEL_OVERRIDE_NAME:
            candidate = _coerce_level(_LOG_LEVEL_OVERRIDE_VALUE, _LOG_LEVEL_OVERRIDE_NAME)
            if candidate is not None:
                resolved_level = candidate
                level_source = _LOG_LEVEL_OVERRIDE_SOURCE or "override"
                hint_name = _LOG_LEVEL_OVERRIDE_NAME or logging.getLevelName(candidate)
        elif _ENV_LOG_LEVEL_VALUE is not None:
            resolved_level = _ENV_LOG_LEVEL_VALUE
            level_source = "env"
            hint_name = _ENV_LOG_LEVEL_NAME

        dev_override_applied = DEBUG_CONFIG_ENABLED and resolved_level > logging.DEBUG
        if dev_override_applied:
            resolved_level = logging.DEBUG

        logger.setLevel(resolved_level)
        logger.propagate = False
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.debug(
            "Panel logger initialised: path=%s level=%s retention=%d",
            getattr(handler, "baseFilename", log_dir / LOG_FILE_NAME),
            logging.getLevelName(logger.level),
            retention,
        )
        if dev_override_applied:
            logger.info(
                "Panel logger level forced to DEBUG via dev-mode override (original hint=%s from %s)",
                hint_name or "none",
                level_source,
            )
        elif level_source in {"env", "override"}:
            logger.log(
                max(resolved_level, logging.INFO),
                "Panel logger level forced to %s via %s",
                hint_name or logging.getLevelName(resolved_level),
                level_source,
            )
        _PANEL_LOGGER = logger
        return logger
    except Exception:
        return None


def _coerce_level(value: Optional[int], name: Optional[str]) -> Optional[int]:
    if value is not None:
        return int(value)
    if name:
        attr = getattr(logging, name.upper(), None)
        if isinstance(attr, int):
            return int(attr)
    return None


def _panel_debug(message: str, *args: object) -> None:
    logger = _ensure_panel_logger()
    if logger is not None:
        logger.debug(message, *args)
    else:
        try:
            sys.stderr.write((message % args) + "\n")
        except Exception:
            pass


def set_log_level_hint(value: Optional[int], name: Optional[str] = None, source: str = "override") -> None:
    """Test hook to override the panel log level without relying on env."""

    global _LOG_LEVEL_OVERRIDE_VALUE, _LOG_LEVEL_OVERRIDE_NAME, _LOG_LEVEL_OVERRIDE_SOURCE, _PANEL_LOGGER
    _LOG_LEVEL_OVERRIDE_VALUE = value
    _LOG_LEVEL_OVERRIDE_NAME = name
    _LOG_LEVEL_OVERRIDE_SOURCE = source
    _PANEL_LOGGER = None


def launch() -> None:
    """Console entry point."""

    _settings_path, settings = load_settings(PACKAGE_ROOT)
    logger = _ensure_panel_logger(retention=settings.log_retention)
    _panel_debug("Launching screenshot panel: python=%s cwd=%s", sys.executable, Path.cwd())
    try:
        app = ScreenshotPanelApp(root_path=PACKAGE_ROOT, settings=settings)
    except CatalogError as exc:
        if logger is not None:
            logger.error("Capture catalog is invalid: %s", exc)
        try:
            messagebox.showerror("Screenshot Queue", f"Capture catalog is invalid:\n{exc}")
        except tk.TclError:
            pass
        sys.stderr.write(f"[screenshot-panel] capture catalog is invalid: {exc}\n")
        raise SystemExit(1) from exc
    except Exception as exc:
        if logger is not None:
            logger.error("Screenshot panel failed to start:\n%s", "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
        raise
    if logger is not None:
        logger.info("Screenshot panel started")
    app.mainloop()


if __name__ == "__main__":
    launch()
