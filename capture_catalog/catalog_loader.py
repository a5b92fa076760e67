"""Shared loader for the capture catalog with user override support.

The shipped capture_catalog.json lists every region and capture variant. An
optional capture_catalog.user.json may append regions or variants, replace a
shipped variant by id, or hide one with ``"disabled": true``. A malformed user
file never takes the panel down: the last good merged view is kept and the
loader is flagged stale.
"""
from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from capture_catalog.models import Catalog, CatalogError

LOGGER = logging.getLogger("ScreenshotPanel.CatalogLoader")
SHIPPED_CATALOG_PATH = Path(__file__).with_name("capture_catalog.json")


@dataclass(frozen=True)
class _Signature:
    shipped_mtime_ns: Optional[int]
    shipped_size: Optional[int]
    user_mtime_ns: Optional[int]
    user_size: Optional[int]


class CatalogLoader:
    """Load and merge shipped + user catalog files into a :class:`Catalog`."""

    def __init__(self, shipped_path: Path, user_path: Optional[Path] = None, logger: Optional[logging.Logger] = None) -> None:
        self._shipped_path = shipped_path
        self._user_path = user_path or shipped_path.with_name("capture_catalog.user.json")
        self._logger = logger or LOGGER
        self._catalog: Optional[Catalog] = None
        self._last_signature: Optional[_Signature] = None
        self._last_reload_ts: Optional[float] = None
        self._stale: bool = False

    # Public API ---------------------------------------------------------

    def load(self) -> Catalog:
        """Force a reload; raises CatalogError when the shipped catalog is invalid."""

        signature = self._current_signature()
        catalog = self._load_and_merge(tolerate_user_errors=True)
        self._catalog = catalog
        self._last_signature = signature
        self._last_reload_ts = time.time()
        self._stale = False
        self._logger.debug(
            "Catalog loaded: regions=%d variants=%d path=%s",
            len(catalog),
            len(catalog.list_variants()),
            self._shipped_path,
        )
        return catalog

    def reload_if_changed(self) -> bool:
        """Reload when either file's mtime/size changed; return True if reloaded."""

        signature = self._current_signature()
        if signature == self._last_signature:
            return False
        try:
            catalog = self._load_and_merge()
        except (OSError, ValueError) as exc:
            # Keep last-good; mark stale and retain signature to avoid thrash.
            self._logger.warning("Catalog reload failed, keeping previous catalog: %s", exc)
            self._stale = True
            self._last_signature = signature
            return False
        self._catalog = catalog
        self._last_signature = signature
        self._last_reload_ts = time.time()
        self._stale = False
        return True

    def catalog(self) -> Catalog:
        """Return the current catalog, loading it on first use."""

        if self._catalog is None:
            return self.load()
        return self._catalog

    def paths(self) -> Mapping[str, Path]:
        return {"shipped": self._shipped_path, "user": self._user_path}

    def diagnostics(self) -> Mapping[str, Any]:
        return {
            "paths": self.paths(),
            "last_reload_ts": self._last_reload_ts,
            "stale": self._stale,
            "signature": self._last_signature,
        }

    # Internal helpers ---------------------------------------------------

    def _current_signature(self) -> _Signature:
        def _sig(path: Path) -> Tuple[Optional[int], Optional[int]]:
            try:
                stat = path.stat()
            except FileNotFoundError:
                return None, None
            except OSError as exc:  # pragma: no cover - filesystem issues
                self._logger.debug("Failed to stat %s: %s", path, exc)
                return None, None
            return stat.st_mtime_ns, stat.st_size

        shipped_mtime, shipped_size = _sig(self._shipped_path)
        user_mtime, user_size = _sig(self._user_path)
        return _Signature(shipped_mtime, shipped_size, user_mtime, user_size)

    def _load_and_merge(self, *, tolerate_user_errors: bool = False) -> Catalog:
        shipped = self._read_json(self._shipped_path, allow_missing=False)
        try:
            user = self._read_json(self._user_path, allow_missing=True)
        except (OSError, ValueError) as exc:
            if not tolerate_user_errors:
                raise
            self._logger.warning("Ignoring user catalog %s: %s", self._user_path, exc)
            user = {}
        if not user or not tolerate_user_errors:
            return Catalog.from_payload(self._merge(shipped, user))
        try:
            return Catalog.from_payload(self._merge(shipped, user))
        except CatalogError as exc:
            self._logger.warning("Ignoring user catalog %s: %s", self._user_path, exc)
            return Catalog.from_payload(self._merge(shipped, {}))

    def _read_json(self, path: Path, *, allow_missing: bool) -> Dict[str, Any]:
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            if allow_missing:
                return {}
            raise
        except OSError as exc:  # pragma: no cover - filesystem issues
            self._logger.warning("Unable to read %s: %s", path, exc)
            raise
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            self._logger.warning("Invalid JSON in %s: %s", path, exc)
            raise CatalogError(f"{path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            self._logger.warning("%s must contain a JSON object at the root", path)
            raise CatalogError(f"{path} must contain a JSON object at the root")
        return data

    def _merge(self, shipped: Mapping[str, Any], user: Mapping[str, Any]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {
            "regions": self._merge_list(shipped.get("regions"), user.get("regions"), key="name"),
            "variants": self._merge_list(shipped.get("variants"), user.get("variants"), key="id"),
        }
        shipped_always = shipped.get("always_visible")
        user_always = user.get("always_visible")
        always = list(shipped_always) if isinstance(shipped_always, list) else []
        for token in user_always if isinstance(user_always, list) else []:
            if token not in always:
                always.append(token)
        merged["always_visible"] = always
        return merged

    def _merge_list(self, base: Any, overlay: Any, *, key: str) -> List[Any]:
        base_items = list(base) if isinstance(base, list) else []
        overlay_items = list(overlay) if isinstance(overlay, list) else []
        positions: Dict[str, int] = {}
        result: List[Any] = []
        for item in base_items:
            if isinstance(item, Mapping) and isinstance(item.get(key), str):
                positions[item[key]] = len(result)
            result.append(item)
        disabled: set[str] = set()
        for item in overlay_items:
            if not isinstance(item, Mapping) or not isinstance(item.get(key), str):
                self._logger.warning("Skipping user catalog entry without %r: %r", key, item)
                continue
            ident = item[key]
            if item.get("disabled") is True:
                disabled.add(ident)
                continue
            if ident in positions:
                replacement = dict(result[positions[ident]]) if isinstance(result[positions[ident]], Mapping) else {}
                replacement.update(item)
                result[positions[ident]] = replacement
            else:
                positions[ident] = len(result)
                result.append(item)
        if not disabled:
            return result
        return [item for item in result if not (isinstance(item, Mapping) and item.get(key) in disabled)]
