"""Pending selection: regions staged for capture, each with editable variants."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, Optional, Protocol, Sequence

from capture_catalog.models import CatalogEntry, VariantId

LOGGER = logging.getLogger("ScreenshotPanel.Selection")


class CatalogSource(Protocol):
    def list_entries(self) -> Sequence[CatalogEntry]: ...

    def lookup(self, display_name: Optional[str]) -> Optional[CatalogEntry]: ...

    def list_variants(self) -> Sequence[VariantId]: ...

    def is_eligible(self, variant: VariantId, canonical_id: str) -> bool: ...


def _noop() -> None:
    return None


class SelectionStore:
    """Insertion-ordered mapping of region display name to selected variants.

    Invalid input never raises: unknown or duplicate regions and toggles on
    absent regions are ignored. Every structural change fires ``on_dirty``;
    variant toggles do not, since the checkbox repaints itself.
    """

    def __init__(self, catalog: CatalogSource, *, on_dirty: Optional[Callable[[], None]] = None) -> None:
        self._catalog = catalog
        self._on_dirty = on_dirty or _noop
        self._pending: Dict[str, set[VariantId]] = {}

    def set_catalog(self, catalog: CatalogSource) -> None:
        self._catalog = catalog

    def _eligible_variants(self, entry: CatalogEntry) -> set[VariantId]:
        return {
            variant
            for variant in self._catalog.list_variants()
            if self._catalog.is_eligible(variant, entry.canonical_id)
        }

    def add_region(self, display_name: Optional[str]) -> bool:
        entry = self._catalog.lookup(display_name)
        if entry is None or entry.display_name in self._pending:
            LOGGER.debug("Ignoring add for region %r (unknown or already pending)", display_name)
            return False
        self._pending[entry.display_name] = self._eligible_variants(entry)
        LOGGER.debug(
            "Region staged: %s variants=%d",
            entry.display_name,
            len(self._pending[entry.display_name]),
        )
        self._on_dirty()
        return True

    def add_all_eligible(self) -> int:
        added = 0
        for entry in self._catalog.list_entries():
            if entry.display_name in self._pending:
                continue
            self._pending[entry.display_name] = self._eligible_variants(entry)
            added += 1
        LOGGER.debug("Staged all regions: added=%d pending=%d", added, len(self._pending))
        self._on_dirty()
        return added

    def remove_region(self, display_name: str) -> bool:
        removed = self._pending.pop(display_name, None) is not None
        self._on_dirty()
        return removed

    def toggle_variant(self, display_name: str, variant: VariantId) -> Optional[bool]:
        """Flip ``variant`` for a pending region; returns the new membership."""

        variants = self._pending.get(display_name)
        if variants is None:
            return None
        if variant in variants:
            variants.discard(variant)
            return False
        variants.add(variant)
        return True

    def clear(self) -> None:
        self._pending.clear()
        self._on_dirty()

    def contains(self, display_name: str) -> bool:
        return display_name in self._pending

    def variants_for(self, display_name: str) -> Optional[frozenset[VariantId]]:
        variants = self._pending.get(display_name)
        return frozenset(variants) if variants is not None else None

    def snapshot(self) -> list[tuple[str, frozenset[VariantId]]]:
        return [(name, frozenset(variants)) for name, variants in self._pending.items()]

    def items(self) -> Iterator[tuple[str, set[VariantId]]]:
        return iter(self._pending.items())

    def __len__(self) -> int:
        return len(self._pending)
