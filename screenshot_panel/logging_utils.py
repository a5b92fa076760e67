"""Log file placement for the panel's rotating file handler."""
from __future__ import annotations

import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_DIR_ENV_VAR = "SCREENSHOT_PANEL_LOG_DIR"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 512 * 1024


def resolve_logs_dir() -> Path:
    """Return a writable log directory, creating it if needed.

    SCREENSHOT_PANEL_LOG_DIR wins when set, then $XDG_STATE_HOME (or
    ~/.local/state) under ScreenshotPanel/logs. If neither can be created the
    system temp directory is used.
    """
    candidates = []
    env_override = os.environ.get(LOG_DIR_ENV_VAR)
    if env_override:
        candidates.append(Path(env_override).expanduser())
    state_home = Path(os.environ.get("XDG_STATE_HOME") or Path.home() / ".local" / "state")
    candidates.append(state_home / "ScreenshotPanel" / "logs")

    for candidate in candidates:
        try:
            candidate.mkdir(parents=True, exist_ok=True)
        except OSError:
            continue
        return candidate

    fallback = Path(tempfile.gettempdir()) / "ScreenshotPanel" / "logs"
    fallback.mkdir(parents=True, exist_ok=True)
    return fallback


def build_rotating_file_handler(log_dir: Path, filename: str, *, retention: int = 5, max_bytes: int = MAX_LOG_BYTES) -> RotatingFileHandler:
    """File handler keeping ``retention`` files in total (the live one included)."""
    handler = RotatingFileHandler(
        log_dir / filename,
        maxBytes=max_bytes,
        backupCount=max(0, retention - 1),
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    return handler
