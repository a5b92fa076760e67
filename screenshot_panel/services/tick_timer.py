from __future__ import annotations

from typing import Callable, Optional

AfterFn = Callable[[int, Callable[[], None]], object]
AfterCancelFn = Callable[[object], None]
LoggerFn = Callable[..., None]

MIN_TICK_INTERVAL_MS = 16


def _noop_log(message: str, *args: object) -> None:
    return None


class TickTimer:
    """Drives the periodic layout tick on the Tk event loop."""

    def __init__(
        self,
        interval_ms: int,
        *,
        after: AfterFn,
        after_cancel: AfterCancelFn,
        logger: Optional[LoggerFn] = None,
    ) -> None:
        self._after = after
        self._after_cancel = after_cancel
        self._logger = logger or _noop_log
        self.interval_ms = self._clamp(interval_ms)
        self._handle: object | None = None
        self._callback: Callable[[], None] | None = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self, callback: Callable[[], None]) -> object:
        self._callback = callback
        self.stop()
        self._handle = self._after(self.interval_ms, self._run)
        self._log("Tick timer started: interval=%d", self.interval_ms)
        return self._handle

    def stop(self) -> None:
        handle = self._handle
        self._handle = None
        if handle is not None:
            try:
                self._after_cancel(handle)
            except Exception:
                pass

    def set_interval(self, interval_ms: int) -> None:
        self.interval_ms = self._clamp(interval_ms)
        if self._handle is not None:
            self.stop()
            self._handle = self._after(self.interval_ms, self._run)

    def _run(self) -> None:
        self._handle = None
        try:
            if self._callback is not None:
                self.ticks += 1
                self._callback()
        finally:
            self._handle = self._after(self.interval_ms, self._run)

    @staticmethod
    def _clamp(value: int) -> int:
        return max(MIN_TICK_INTERVAL_MS, int(value))

    def _log(self, message: str, *args: object) -> None:
        try:
            self._logger(message, *args)
        except TypeError:
            try:
                self._logger(message % args if args else message)
            except Exception:
                pass
        except Exception:
            pass
