"""Region catalog and variant metadata consumed read-only by the panel."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from capture_catalog.colors import RGB, ColorFormatError, parse_hex_color

VariantId = str


class CatalogError(ValueError):
    """Raised when catalog data is structurally invalid."""


@dataclass(frozen=True)
class CatalogEntry:
    display_name: str
    canonical_id: str


@dataclass(frozen=True)
class Variant:
    id: VariantId
    label: str
    color: RGB
    story_regions: frozenset[str] = field(default_factory=frozenset)
    optional_regions: frozenset[str] = field(default_factory=frozenset)
    hidden: bool = False

    def covers(self, canonical_id: str) -> bool:
        return canonical_id in self.story_regions or canonical_id in self.optional_regions


class Catalog:
    """Ordered regions plus the selectable capture variants.

    Region display names are the keys used everywhere in the panel; the
    canonical id is only needed for the eligibility check.
    """

    def __init__(
        self,
        entries: Iterable[CatalogEntry],
        variants: Iterable[Variant],
        *,
        always_visible: Iterable[VariantId] = (),
    ) -> None:
        self._entries: Dict[str, CatalogEntry] = {}
        for entry in entries:
            if entry.display_name in self._entries:
                raise CatalogError(f"duplicate region name {entry.display_name!r}")
            self._entries[entry.display_name] = entry
        self._variants: Dict[VariantId, Variant] = {}
        for variant in variants:
            if variant.id in self._variants:
                raise CatalogError(f"duplicate variant id {variant.id!r}")
            self._variants[variant.id] = variant
        self._always_visible = frozenset(always_visible)

    def list_entries(self) -> list[CatalogEntry]:
        return list(self._entries.values())

    def lookup(self, display_name: Optional[str]) -> Optional[CatalogEntry]:
        if display_name is None:
            return None
        return self._entries.get(display_name)

    def list_variants(self) -> list[VariantId]:
        return [
            variant.id
            for variant in self._variants.values()
            if not variant.hidden or variant.id in self._always_visible
        ]

    def is_eligible(self, variant: VariantId, canonical_id: str) -> bool:
        meta = self._variants.get(variant)
        return meta is not None and meta.covers(canonical_id)

    def display_label(self, variant: VariantId) -> str:
        meta = self._variants.get(variant)
        return meta.label if meta is not None else str(variant)

    def base_color(self, variant: VariantId) -> RGB:
        meta = self._variants.get(variant)
        return meta.color if meta is not None else (1.0, 1.0, 1.0)

    def __len__(self) -> int:
        return len(self._entries)

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "Catalog":
        """Build a catalog from a merged catalog JSON object."""

        regions_raw = payload.get("regions", [])
        variants_raw = payload.get("variants", [])
        if not isinstance(regions_raw, Sequence) or isinstance(regions_raw, str):
            raise CatalogError("regions must be a list")
        if not isinstance(variants_raw, Sequence) or isinstance(variants_raw, str):
            raise CatalogError("variants must be a list")

        entries = [_parse_region(item, index) for index, item in enumerate(regions_raw)]
        variants = [_parse_variant(item, index) for index, item in enumerate(variants_raw)]
        always_raw = payload.get("always_visible", [])
        always_visible: Tuple[str, ...] = ()
        if isinstance(always_raw, Sequence) and not isinstance(always_raw, str):
            always_visible = tuple(str(token) for token in always_raw if isinstance(token, str))
        return cls(entries, variants, always_visible=always_visible)


def _parse_region(item: object, index: int) -> CatalogEntry:
    if not isinstance(item, Mapping):
        raise CatalogError(f"regions[{index}] must be an object")
    name = item.get("name")
    canonical = item.get("id")
    if not isinstance(name, str) or not name.strip():
        raise CatalogError(f"regions[{index}].name must be a non-empty string")
    if not isinstance(canonical, str) or not canonical.strip():
        raise CatalogError(f"regions[{index}].id must be a non-empty string")
    return CatalogEntry(display_name=name.strip(), canonical_id=canonical.strip())


def _parse_region_list(value: object, field_name: str) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise CatalogError(f"{field_name} must be a list of region ids")
    return frozenset(str(token).strip() for token in value if str(token).strip())


def _parse_variant(item: object, index: int) -> Variant:
    if not isinstance(item, Mapping):
        raise CatalogError(f"variants[{index}] must be an object")
    variant_id = item.get("id")
    if not isinstance(variant_id, str) or not variant_id.strip():
        raise CatalogError(f"variants[{index}].id must be a non-empty string")
    variant_id = variant_id.strip()
    label = item.get("label", variant_id)
    if not isinstance(label, str) or not label:
        label = variant_id
    try:
        color = parse_hex_color(item.get("color", "#FFFFFF"))
    except ColorFormatError as exc:
        raise CatalogError(f"variants[{index}].color: {exc}") from exc
    return Variant(
        id=variant_id,
        label=label,
        color=color,
        story_regions=_parse_region_list(item.get("story_regions"), f"variants[{index}].story_regions"),
        optional_regions=_parse_region_list(item.get("optional_regions"), f"variants[{index}].optional_regions"),
        hidden=bool(item.get("hidden", False)),
    )
