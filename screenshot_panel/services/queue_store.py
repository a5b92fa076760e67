"""Committed capture queue consumed FIFO by the screenshot process."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet, Callable, Iterable, Mapping, Optional

from capture_catalog.models import VariantId

LOGGER = logging.getLogger("ScreenshotPanel.Queue")


@dataclass(frozen=True, eq=False)
class QueueEntry:
    """A queued region; its variant set is frozen at commit time."""

    name: str
    variants: frozenset[VariantId]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QueueEntry):
            return self.name == other.name
        if isinstance(other, str):
            return self.name == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)


def _noop() -> None:
    return None


class QueueStore:
    """Ordered, name-deduplicated queue; whole-queue abort is the only removal."""

    def __init__(self, *, on_dirty: Optional[Callable[[], None]] = None) -> None:
        self._on_dirty = on_dirty or _noop
        self._entries: list[QueueEntry] = []
        self._names: set[str] = set()

    def commit_from(self, pending: Mapping[str, AbstractSet[VariantId]] | Iterable[tuple[str, AbstractSet[VariantId]]]) -> list[QueueEntry]:
        """Append every non-empty, not-yet-queued pending entry in order."""

        items = pending.items() if isinstance(pending, Mapping) else pending
        promoted: list[QueueEntry] = []
        skipped: list[str] = []
        for name, variants in items:
            if not variants or name in self._names:
                skipped.append(name)
                continue
            entry = QueueEntry(name=name, variants=frozenset(variants))
            self._entries.append(entry)
            self._names.add(name)
            promoted.append(entry)
        LOGGER.debug(
            "Commit: promoted=%s skipped=%s queue_length=%d",
            [entry.name for entry in promoted],
            skipped,
            len(self._entries),
        )
        self._on_dirty()
        return promoted

    def clear(self) -> int:
        removed = len(self._entries)
        self._entries.clear()
        self._names.clear()
        if removed:
            LOGGER.debug("Queue aborted: removed=%d", removed)
        self._on_dirty()
        return removed

    def current(self) -> Optional[QueueEntry]:
        return self._entries[0] if self._entries else None

    def names(self) -> list[str]:
        return [entry.name for entry in self._entries]

    def snapshot(self) -> list[QueueEntry]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        if isinstance(name, QueueEntry):
            name = name.name
        return name in self._names

    def __len__(self) -> int:
        return len(self._entries)
