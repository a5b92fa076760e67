from logging.handlers import RotatingFileHandler

from screenshot_panel.logging_utils import LOG_FORMAT, build_rotating_file_handler, resolve_logs_dir


def test_resolve_logs_dir_prefers_env_override(tmp_path, monkeypatch):
    target = tmp_path / "custom"
    monkeypatch.setenv("SCREENSHOT_PANEL_LOG_DIR", str(target))

    resolved = resolve_logs_dir()

    assert resolved == target
    assert resolved.is_dir()


def test_resolve_logs_dir_uses_xdg_state(tmp_path, monkeypatch):
    monkeypatch.delenv("SCREENSHOT_PANEL_LOG_DIR", raising=False)
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))

    assert resolve_logs_dir() == tmp_path / "state" / "ScreenshotPanel" / "logs"


def test_resolve_logs_dir_skips_unwritable_override(tmp_path, monkeypatch):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setenv("SCREENSHOT_PANEL_LOG_DIR", str(blocker / "logs"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))

    assert resolve_logs_dir() == tmp_path / "state" / "ScreenshotPanel" / "logs"


def test_rotating_handler_respects_retention(tmp_path):
    handler = build_rotating_file_handler(tmp_path, "panel.log", retention=3, max_bytes=1024)
    try:
        assert isinstance(handler, RotatingFileHandler)
        assert handler.backupCount == 2
        assert handler.maxBytes == 1024
        assert handler.formatter._fmt == LOG_FORMAT
    finally:
        handler.close()
